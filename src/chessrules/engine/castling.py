from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Optional

from .board import COLORS, KING, ROOK, WHITE, Board, Piece, home_row
from .move import Square
from .rules import is_in_check


KINGSIDE = "kingside"
QUEENSIDE = "queenside"
SIDES = (KINGSIDE, QUEENSIDE)

# Destination files are fixed by rule, whatever the starting files were.
KING_DEST_FILE = {KINGSIDE: 6, QUEENSIDE: 2}
ROOK_DEST_FILE = {KINGSIDE: 5, QUEENSIDE: 3}


@dataclass(frozen=True)
class SideRights:
    kingside: bool = True
    queenside: bool = True


@dataclass(frozen=True)
class CastlingRights:
    """Per-color castling rights.

    Values are immutable and only ever lose rights via :meth:`revoke`, which
    keeps the true -> false transition one-way for the life of a game.
    """

    white: SideRights = field(default_factory=SideRights)
    black: SideRights = field(default_factory=SideRights)

    @classmethod
    def full(cls) -> "CastlingRights":
        return cls()

    @classmethod
    def none(cls) -> "CastlingRights":
        return cls(SideRights(False, False), SideRights(False, False))

    def for_color(self, color: str) -> SideRights:
        return self.white if color == WHITE else self.black

    def allowed(self, color: str, side: str) -> bool:
        return getattr(self.for_color(color), side)

    def revoke(self, color: str, side: Optional[str] = None) -> "CastlingRights":
        """Return rights with ``side`` (or both sides) cleared for ``color``."""
        current = self.for_color(color)
        if side is None:
            updated = SideRights(False, False)
        else:
            updated = replace(current, **{side: False})
        if updated == current:
            return self
        if color == WHITE:
            return replace(self, white=updated)
        return replace(self, black=updated)

    def as_dict(self) -> Dict[str, Dict[str, bool]]:
        return {
            color: {side: self.allowed(color, side) for side in SIDES} for color in COLORS
        }


@dataclass(frozen=True)
class InitialFiles:
    """Starting files of one color's king and castling rooks."""

    king: int = 4
    kingside_rook: int = 7
    queenside_rook: int = 0

    def rook_file(self, side: str) -> int:
        return self.kingside_rook if side == KINGSIDE else self.queenside_rook


@dataclass(frozen=True)
class InitialPositions:
    """Reference record of where each color's king and rooks started.

    Used only to recognise castling; it never changes during a game, even
    after the pieces move or are captured.
    """

    white: InitialFiles = field(default_factory=InitialFiles)
    black: InitialFiles = field(default_factory=InitialFiles)

    @classmethod
    def standard(cls) -> "InitialPositions":
        return cls()

    @classmethod
    def mirrored(cls, files: InitialFiles) -> "InitialPositions":
        return cls(white=files, black=files)

    def for_color(self, color: str) -> InitialFiles:
        return self.white if color == WHITE else self.black

    def rook_square(self, color: str, side: str) -> Square:
        return home_row(color), self.for_color(color).rook_file(side)


@dataclass(frozen=True)
class CastlePlan:
    color: str
    side: str
    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square


def castle_side_for(
    color: str, from_sq: Square, to_sq: Square, initial: InitialPositions
) -> Optional[str]:
    """Recognise a king move as a castling attempt.

    The king must leave its recorded starting square. The attempt is the
    move onto file 6 (kingside) or file 2 (queenside) of its home row. A
    king that already stands on that file castles by moving onto its own
    rook instead.
    """
    if from_sq != (home_row(color), initial.for_color(color).king):
        return None
    for side in SIDES:
        if to_sq == castle_target(color, side, initial):
            return side
    return None


def castle_target(color: str, side: str, initial: InitialPositions) -> Square:
    """Destination square a king move must name to castle on ``side``."""
    plan = plan_castle(color, side, initial)
    if plan.king_to == plan.king_from:
        return plan.rook_from
    return plan.king_to


def plan_castle(color: str, side: str, initial: InitialPositions) -> CastlePlan:
    row = home_row(color)
    files = initial.for_color(color)
    return CastlePlan(
        color=color,
        side=side,
        king_from=(row, files.king),
        king_to=(row, KING_DEST_FILE[side]),
        rook_from=(row, files.rook_file(side)),
        rook_to=(row, ROOK_DEST_FILE[side]),
    )


def can_castle(
    board: Board,
    color: str,
    side: str,
    rights: CastlingRights,
    initial: InitialPositions,
) -> bool:
    """Decide castling legality for arbitrary king/rook starting files.

    Args:
        board (Board): Current position; never modified.
        color (str): Castling color.
        side (str): ``"kingside"`` or ``"queenside"``.
        rights (CastlingRights): Current rights.
        initial (InitialPositions): Recorded starting files.

    Returns:
        bool: True if the right is held, the king is not in check, king and
            rook still stand on their recorded squares, the whole transit
            corridor is empty, and the king crosses no attacked square.

    Notes:
        The corridor spans every file between the extremes of king start,
        king destination, rook start and rook destination, because either
        piece's start may lie inside the other's path under non-standard
        files. Only the king's and the castling rook's own squares are
        allowed to be occupied.
    """
    if not rights.allowed(color, side):
        return False
    if is_in_check(board, color):
        return False

    plan = plan_castle(color, side, initial)
    if board.get(plan.king_from) != Piece(KING, color):
        return False
    if board.get(plan.rook_from) != Piece(ROOK, color):
        return False

    row = plan.king_from[0]
    own = (plan.king_from[1], plan.rook_from[1])
    files = (plan.king_from[1], plan.king_to[1], plan.rook_from[1], plan.rook_to[1])
    for col in range(min(files), max(files) + 1):
        if col in own:
            continue
        if board.grid[row][col] is not None:
            return False

    king = board.get(plan.king_from)
    step = 1 if plan.king_to[1] > plan.king_from[1] else -1
    col = plan.king_from[1]
    while col != plan.king_to[1]:
        col += step
        probe = board.copy()
        probe.remove(plan.king_from)
        probe.set((row, col), king)
        if is_in_check(probe, color):
            return False
    return True


def execute_castle(board: Board, plan: CastlePlan) -> None:
    # Lift both pieces first: the king may land on the rook's start square.
    rook = board.remove(plan.rook_from)
    king = board.remove(plan.king_from)
    board.set(plan.king_to, king)
    board.set(plan.rook_to, rook)


def revert_castle(board: Board, plan: CastlePlan) -> None:
    king = board.remove(plan.king_to)
    rook = board.remove(plan.rook_to)
    board.set(plan.rook_from, rook)
    board.set(plan.king_from, king)


def revoke_rights(
    rights: CastlingRights,
    initial: InitialPositions,
    piece: Piece,
    from_sq: Square,
    to_sq: Square,
) -> CastlingRights:
    """Clear the rights a move destroys.

    A king move clears both of its color's rights. Any move leaving or
    landing on a recorded initial rook square clears the matching right of
    the color that square belongs to (rook moved away or rook captured).
    """
    if piece.kind == KING:
        rights = rights.revoke(piece.color)
    for color in COLORS:
        for side in SIDES:
            sq = initial.rook_square(color, side)
            if sq == from_sq or sq == to_sq:
                rights = rights.revoke(color, side)
    return rights
