from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


# (row, col); row 0 is black's home rank, row 7 is white's.
Square = Tuple[int, int]

FILES = "abcdefgh"


class MoveKind(Enum):
    """Tagged intent of a move, decided once during classification."""

    NORMAL = "normal"
    CASTLE_KINGSIDE = "castle_kingside"
    CASTLE_QUEENSIDE = "castle_queenside"
    EN_PASSANT = "en_passant"
    PROMOTION = "promotion"

    @property
    def is_castle(self) -> bool:
        return self in (MoveKind.CASTLE_KINGSIDE, MoveKind.CASTLE_QUEENSIDE)


@dataclass(frozen=True)
class Move:
    """A classified legal move.

    Attributes:
        from_sq (Square): Origin square.
        to_sq (Square): Destination square. For castling this is the king's
            destination.
        kind (MoveKind): Intent determined by the legality engine.
        promotion (Optional[str]): Piece kind placed on promotion.
    """

    from_sq: Square
    to_sq: Square
    kind: MoveKind = MoveKind.NORMAL
    promotion: Optional[str] = None

    def describe(self) -> str:
        """Return the move as ``"e2-e4"`` style text for logs and payloads."""
        return square_to_str(self.from_sq) + "-" + square_to_str(self.to_sq)


def on_board(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


def str_to_square(s: str) -> Square:
    """Convert a square name into a ``(row, col)`` pair.

    Args:
        s (str): Square name such as ``"e4"``.

    Returns:
        Square: Row/column pair, rank 1 mapping to row 7.

    Raises:
        ValueError: If ``s`` is not a valid square.
    """
    if len(s) != 2 or s[0] < "a" or s[0] > "h" or s[1] < "1" or s[1] > "8":
        raise ValueError(f"invalid square: {s!r}")
    col = ord(s[0]) - ord("a")
    row = 8 - int(s[1])
    return row, col


def square_to_str(sq: Square) -> str:
    """Convert a ``(row, col)`` pair into its square name.

    Raises:
        ValueError: If ``sq`` is off the board.
    """
    row, col = sq
    if not on_board(row, col):
        raise ValueError(f"invalid square: {sq!r}")
    return FILES[col] + str(8 - row)
