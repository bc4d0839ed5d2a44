"""Move records and their descriptive English notation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from .board import Piece
from .castling import CastlingRights
from .move import MoveKind, Square, square_to_str


@dataclass(frozen=True)
class MoveRecord:
    """One applied move, with everything needed to reverse it exactly.

    Attributes:
        from_sq (Square): Origin square (king's square for castling).
        to_sq (Square): Destination square (king's destination for castling).
        piece (Piece): The moving piece as it stood before the move.
        captured (Optional[Piece]): Captured piece, en passant included.
        notation (str): Human-readable description.
        move_number (int): Full-move number the move was played in.
        player (str): Color that moved.
        kind (MoveKind): Classified intent.
        promotion (Optional[str]): Kind placed on promotion.
        captured_sq (Optional[Square]): Where the captured piece stood.
        prev_castling (CastlingRights): Rights before the move.
        prev_en_passant (Optional[Square]): En-passant target before the move.
        prev_halfmove_clock (int): Halfmove clock before the move.
        prev_fullmove_number (int): Full-move number before the move.
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    captured: Optional[Piece]
    notation: str
    move_number: int
    player: str
    kind: MoveKind = MoveKind.NORMAL
    promotion: Optional[str] = None
    captured_sq: Optional[Square] = None
    prev_castling: CastlingRights = field(default_factory=CastlingRights)
    prev_en_passant: Optional[Square] = None
    prev_halfmove_clock: int = 0
    prev_fullmove_number: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": square_to_str(self.from_sq),
            "to": square_to_str(self.to_sq),
            "piece": self.piece.kind,
            "captured": self.captured.kind if self.captured else None,
            "kind": self.kind.value,
            "notation": self.notation,
            "move_number": self.move_number,
            "player": self.player,
        }


def _name(piece: Piece) -> str:
    return f"{piece.color.capitalize()} {piece.kind.capitalize()}"


def describe_move(record: MoveRecord) -> str:
    """Describe the move itself, without check/mate annotations."""
    color_name = record.player.capitalize()
    if record.kind == MoveKind.CASTLE_KINGSIDE:
        return f"{color_name} castles kingside"
    if record.kind == MoveKind.CASTLE_QUEENSIDE:
        return f"{color_name} castles queenside"

    text = f"{_name(record.piece)} moves to {square_to_str(record.to_sq)}"
    if record.captured is not None:
        text += f" and takes {_name(record.captured)}"
    if record.kind == MoveKind.EN_PASSANT:
        text += " (en passant)"
    if record.kind == MoveKind.PROMOTION and record.promotion:
        text += f" and promotes to {record.promotion.capitalize()}"
    return text


def status_suffix(*, in_check: bool, has_moves: bool) -> str:
    """Annotation for the opponent's situation after the move."""
    if not has_moves:
        return " - Checkmate!" if in_check else " - Stalemate!"
    if in_check:
        return " - Check!"
    return ""
