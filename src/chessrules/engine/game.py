from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import List, Optional, Union

from .board import (
    BLACK,
    PAWN,
    PROMOTION_KINDS,
    QUEEN,
    WHITE,
    Board,
    opponent,
)
from .castling import (
    KINGSIDE,
    QUEENSIDE,
    CastlingRights,
    InitialPositions,
    plan_castle,
    revert_castle,
    revoke_rights,
)
from .legality import apply_to_board, classify_move, legal_moves
from .move import Move, MoveKind, Square
from .recorder import MoveRecord, describe_move, status_suffix
from .rules import is_in_check as king_attacked
from .variant import generate_back_rank, random_position_id, validate_position_id


logger = logging.getLogger(__name__)

STANDARD = "standard"
RANDOM = "random"

# "standard", "random", or an explicit variant position id.
VariantChoice = Union[str, int]


@dataclass
class GameState:
    """Authoritative state of one game.

    Responsibility: own the board and auxiliary state, answer legality and
    terminal-state queries, and apply or undo moves. Instances share nothing,
    so any number of games can run side by side.
    """

    board: Board
    current_player: str = WHITE
    castling: CastlingRights = field(default_factory=CastlingRights)
    en_passant: Optional[Square] = None
    halfmove_clock: int = 0
    fullmove_number: int = 1
    history: List[MoveRecord] = field(default_factory=list)
    game_over: bool = False
    initial_positions: InitialPositions = field(default_factory=InitialPositions)
    variant: bool = False
    position_id: Optional[int] = None
    # Mode picked up by the next reset() without an explicit choice
    variant_mode: bool = False
    variant_mode_id: Optional[int] = None
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @classmethod
    def new(
        cls, variant: Optional[VariantChoice] = None, *, rng: Optional[random.Random] = None
    ) -> "GameState":
        """Create a game in its starting position.

        Args:
            variant (Optional[VariantChoice]): ``"standard"`` (default),
                ``"random"`` for a freshly sampled variant id, or an explicit
                id in ``[0, 960)``. The choice also becomes the game's
                variant mode for later resets.
            rng (Optional[random.Random]): Source for sampling variant ids.

        Returns:
            GameState: Fresh game with white to move.

        Raises:
            ValueError: If ``variant`` is not a recognised choice.
        """
        game = cls(board=Board.standard(), rng=rng or random.Random())
        if variant is None or variant == STANDARD:
            game.set_variant_mode(False)
        elif variant == RANDOM:
            game.set_variant_mode(True)
        else:
            game.set_variant_mode(True, _as_position_id(variant))
        game.reset()
        return game

    @classmethod
    def from_diagram(
        cls,
        diagram: str,
        *,
        to_move: str = WHITE,
        castling: Optional[CastlingRights] = None,
        en_passant: Optional[Square] = None,
        initial_positions: Optional[InitialPositions] = None,
        halfmove_clock: int = 0,
        fullmove_number: int = 1,
    ) -> "GameState":
        """Create a game from an arbitrary position.

        Castling rights default to none, since a diagram says nothing about
        which pieces have moved.

        Raises:
            ValueError: If the diagram is malformed or ``to_move`` is not a
                color.
            BoardInvariantError: If either side lacks exactly one king.
        """
        if to_move not in (WHITE, BLACK):
            raise ValueError(f"invalid side to move: {to_move!r}")
        board = Board.from_diagram(diagram)
        board.find_king(WHITE)
        board.find_king(BLACK)
        game = cls(
            board=board,
            current_player=to_move,
            castling=castling if castling is not None else CastlingRights.none(),
            en_passant=en_passant,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
            initial_positions=initial_positions or InitialPositions.standard(),
        )
        game.game_over = game.outcome() is not None
        return game

    # --- Setup ---
    def set_variant_mode(self, enabled: bool, position_id: Optional[int] = None) -> None:
        """Choose what the next argument-less :meth:`reset` starts.

        Raises:
            ValueError: If ``position_id`` is outside ``[0, 960)``.
        """
        if position_id is not None:
            validate_position_id(position_id)
        self.variant_mode = enabled
        self.variant_mode_id = position_id if enabled else None

    def reset(self, variant: Optional[VariantChoice] = None) -> None:
        """Replace the whole game state with a fresh starting position.

        Args:
            variant (Optional[VariantChoice]): ``"standard"``, ``"random"`` or
                an explicit id. ``None`` follows :meth:`set_variant_mode`.

        Raises:
            ValueError: If ``variant`` is not a recognised choice.
        """
        if variant is None:
            if not self.variant_mode:
                variant = STANDARD
            elif self.variant_mode_id is None:
                variant = RANDOM
            else:
                variant = self.variant_mode_id

        if variant == STANDARD:
            self.board = Board.standard()
            self.initial_positions = InitialPositions.standard()
            self.variant = False
            self.position_id = None
        else:
            if variant == RANDOM:
                position_id = random_position_id(self.rng)
            else:
                position_id = _as_position_id(variant)
            back_rank = generate_back_rank(position_id)
            self.board = Board.from_back_rank(back_rank.pieces)
            self.initial_positions = back_rank.initial_positions
            self.variant = True
            self.position_id = position_id

        self.current_player = WHITE
        self.castling = CastlingRights.full()
        self.en_passant = None
        self.halfmove_clock = 0
        self.fullmove_number = 1
        self.history = []
        self.game_over = False
        logger.info("new game: variant=%s position_id=%s", self.variant, self.position_id)

    # --- Legality ---
    def _classify(
        self, from_sq: Square, to_sq: Square, promotion: str = QUEEN
    ) -> Optional[Move]:
        return classify_move(
            self.board,
            self.current_player,
            from_sq,
            to_sq,
            castling=self.castling,
            en_passant=self.en_passant,
            initial=self.initial_positions,
            promotion=promotion,
        )

    def is_legal_move(self, from_row: int, from_col: int, to_row: int, to_col: int) -> bool:
        return self._classify((from_row, from_col), (to_row, to_col)) is not None

    def get_all_legal_moves(self, color: Optional[str] = None) -> List[Move]:
        """Return ``color``'s legal moves (side to move by default).

        For the side not to move the en-passant target is ignored, since it
        can only ever be used by the side to move.
        """
        color = color or self.current_player
        return legal_moves(
            self.board,
            color,
            castling=self.castling,
            en_passant=self.en_passant if color == self.current_player else None,
            initial=self.initial_positions,
        )

    # --- State flags ---
    def is_in_check(self, color: Optional[str] = None) -> bool:
        return king_attacked(self.board, color or self.current_player)

    def is_checkmate(self, color: Optional[str] = None) -> bool:
        color = color or self.current_player
        return self.is_in_check(color) and not self.get_all_legal_moves(color)

    def is_stalemate(self, color: Optional[str] = None) -> bool:
        color = color or self.current_player
        return (not self.is_in_check(color)) and not self.get_all_legal_moves(color)

    def outcome(self) -> Optional[str]:
        """``"checkmate"`` or ``"stalemate"`` for the side to move, else None."""
        if self.get_all_legal_moves(self.current_player):
            return None
        return "checkmate" if self.is_in_check(self.current_player) else "stalemate"

    # --- Mutation ---
    def apply_move(
        self,
        from_row: int,
        from_col: int,
        to_row: int,
        to_col: int,
        promotion: str = QUEEN,
    ) -> Optional[MoveRecord]:
        """Apply a move if it is legal.

        Args:
            from_row (int): Origin row.
            from_col (int): Origin column.
            to_row (int): Destination row.
            to_col (int): Destination column.
            promotion (str): Piece kind a promoting pawn becomes.

        Returns:
            Optional[MoveRecord]: The appended record, or ``None`` when the
                move is illegal or the game is over. A rejected move leaves
                the state untouched. A promoting move naming a piece other
                than queen, rook, bishop or knight is rejected the same way;
                other moves ignore ``promotion``.
        """
        if self.game_over:
            logger.debug("move rejected: game is over")
            return None
        move = self._classify((from_row, from_col), (to_row, to_col), promotion)
        if move is None:
            logger.debug(
                "illegal move rejected: %s (%d,%d)->(%d,%d)",
                self.current_player,
                from_row,
                from_col,
                to_row,
                to_col,
            )
            return None
        if move.kind == MoveKind.PROMOTION and promotion not in PROMOTION_KINDS:
            logger.debug("move rejected: invalid promotion piece %r", promotion)
            return None

        record = self.make(move)
        # Status is judged for the opponent, who is now to move.
        in_check = self.is_in_check(self.current_player)
        has_moves = bool(self.get_all_legal_moves(self.current_player))
        self.game_over = not has_moves
        record = replace(
            record,
            notation=describe_move(record) + status_suffix(in_check=in_check, has_moves=has_moves),
        )
        self.history.append(record)
        return record

    def undo_move(self) -> Optional[MoveRecord]:
        """Reverse the last move exactly; ``None`` if there is nothing to undo."""
        if not self.history:
            return None
        record = self.history.pop()
        self.unmake(record)
        return record

    def make(self, move: Move) -> MoveRecord:
        """Play a move from :meth:`get_all_legal_moves` without recording it.

        The returned record has no notation and is not added to history;
        pass it to :meth:`unmake` to restore the position.
        """
        prev_castling = self.castling
        prev_en_passant = self.en_passant
        prev_halfmove = self.halfmove_clock
        prev_fullmove = self.fullmove_number

        self.en_passant = None
        piece, captured, captured_sq = apply_to_board(self.board, move, self.initial_positions)
        self.castling = revoke_rights(
            self.castling, self.initial_positions, piece, move.from_sq, move.to_sq
        )

        if piece.kind == PAWN and abs(move.to_sq[0] - move.from_sq[0]) == 2:
            self.en_passant = ((move.from_sq[0] + move.to_sq[0]) // 2, move.from_sq[1])

        if piece.kind == PAWN or captured is not None:
            self.halfmove_clock = 0
        else:
            self.halfmove_clock += 1

        move_number = self.fullmove_number
        if piece.color == BLACK:
            self.fullmove_number += 1
        self.current_player = opponent(piece.color)

        return MoveRecord(
            from_sq=move.from_sq,
            to_sq=move.to_sq,
            piece=piece,
            captured=captured,
            notation="",
            move_number=move_number,
            player=piece.color,
            kind=move.kind,
            promotion=move.promotion,
            captured_sq=captured_sq,
            prev_castling=prev_castling,
            prev_en_passant=prev_en_passant,
            prev_halfmove_clock=prev_halfmove,
            prev_fullmove_number=prev_fullmove,
        )

    def unmake(self, record: MoveRecord) -> None:
        """Reverse a record produced by :meth:`make`."""
        if record.kind.is_castle:
            side = KINGSIDE if record.kind == MoveKind.CASTLE_KINGSIDE else QUEENSIDE
            revert_castle(self.board, plan_castle(record.player, side, self.initial_positions))
        else:
            self.board.remove(record.to_sq)
            self.board.set(record.from_sq, record.piece)
            if record.captured is not None and record.captured_sq is not None:
                self.board.set(record.captured_sq, record.captured)

        self.current_player = record.player
        self.castling = record.prev_castling
        self.en_passant = record.prev_en_passant
        self.halfmove_clock = record.prev_halfmove_clock
        self.fullmove_number = record.prev_fullmove_number
        # A move was playable from the restored position.
        self.game_over = False


def _as_position_id(variant: VariantChoice) -> int:
    if isinstance(variant, str):
        raise ValueError(f"unknown variant choice: {variant!r}")
    return validate_position_id(variant)
