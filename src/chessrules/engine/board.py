from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Tuple

from .move import Square


WHITE = "white"
BLACK = "black"
COLORS = (WHITE, BLACK)

PAWN = "pawn"
KNIGHT = "knight"
BISHOP = "bishop"
ROOK = "rook"
QUEEN = "queen"
KING = "king"
PIECE_KINDS = (PAWN, KNIGHT, BISHOP, ROOK, QUEEN, KING)
PROMOTION_KINDS = (QUEEN, ROOK, BISHOP, KNIGHT)

STANDARD_BACK_RANK = (ROOK, KNIGHT, BISHOP, QUEEN, KING, BISHOP, KNIGHT, ROOK)

KIND_TO_CHAR = {
    PAWN: "p",
    KNIGHT: "n",
    BISHOP: "b",
    ROOK: "r",
    QUEEN: "q",
    KING: "k",
}
CHAR_TO_KIND = {v: k for k, v in KIND_TO_CHAR.items()}
EMPTY_CHAR = "."


class BoardInvariantError(RuntimeError):
    """Raised when the one-king-per-color invariant does not hold.

    This signals a defect upstream (e.g. direct board edits bypassing the
    game), not a recoverable runtime condition.
    """


def opponent(color: str) -> str:
    return BLACK if color == WHITE else WHITE


def home_row(color: str) -> int:
    return 7 if color == WHITE else 0


@dataclass(frozen=True)
class Piece:
    """Immutable piece value; replaced rather than mutated on promotion."""

    kind: str
    color: str

    @property
    def char(self) -> str:
        ch = KIND_TO_CHAR[self.kind]
        return ch.upper() if self.color == WHITE else ch

    @classmethod
    def from_char(cls, ch: str) -> "Piece":
        kind = CHAR_TO_KIND.get(ch.lower())
        if kind is None:
            raise ValueError(f"invalid piece character: {ch!r}")
        return cls(kind, WHITE if ch.isupper() else BLACK)


class Board:
    """8x8 occupancy grid.

    Notes:
    - ``grid[row][col]`` holds a :class:`Piece` or ``None``.
    - Row 0 is black's home rank, row 7 white's; orientation is fixed.
    """

    __slots__ = ("grid",)

    def __init__(self, grid: Optional[List[List[Optional[Piece]]]] = None) -> None:
        if grid is None:
            grid = [[None] * 8 for _ in range(8)]
        self.grid = grid

    @classmethod
    def empty(cls) -> "Board":
        return cls()

    @classmethod
    def standard(cls) -> "Board":
        """Create a board with the standard chess starting layout."""
        return cls.from_back_rank(STANDARD_BACK_RANK)

    @classmethod
    def from_back_rank(cls, back_rank: Sequence[str]) -> "Board":
        """Create a starting board from a back-rank arrangement.

        Args:
            back_rank (Sequence[str]): Eight piece kinds for files 0..7. Both
                colors receive the same arrangement on their home rows.

        Returns:
            Board: Board with back ranks and pawn rows filled.

        Raises:
            ValueError: If the arrangement is not eight known piece kinds.
        """
        if len(back_rank) != 8 or any(k not in PIECE_KINDS for k in back_rank):
            raise ValueError(f"invalid back rank: {back_rank!r}")
        board = cls()
        for col, kind in enumerate(back_rank):
            board.grid[0][col] = Piece(kind, BLACK)
            board.grid[1][col] = Piece(PAWN, BLACK)
            board.grid[6][col] = Piece(PAWN, WHITE)
            board.grid[7][col] = Piece(kind, WHITE)
        return board

    @classmethod
    def from_diagram(cls, diagram: str) -> "Board":
        """Create a board from an 8-line text diagram.

        Each non-blank line is one row, starting with row 0 (black's home
        rank). ``.`` marks an empty square, ``PNBRQK`` white pieces and
        ``pnbrqk`` black pieces. Whitespace inside a line is ignored.

        Raises:
            ValueError: If the diagram does not describe exactly 8x8 squares
                or contains unknown characters.
        """
        rows = ["".join(line.split()) for line in diagram.strip().splitlines()]
        rows = [r for r in rows if r]
        if len(rows) != 8:
            raise ValueError("diagram must have 8 rows")
        board = cls()
        for row, line in enumerate(rows):
            if len(line) != 8:
                raise ValueError(f"diagram row {row} must have 8 squares")
            for col, ch in enumerate(line):
                if ch != EMPTY_CHAR:
                    board.grid[row][col] = Piece.from_char(ch)
        return board

    def to_diagram(self) -> List[str]:
        return [
            "".join(p.char if p is not None else EMPTY_CHAR for p in row) for row in self.grid
        ]

    def __str__(self) -> str:
        return "\n".join(self.to_diagram())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid == other.grid

    def get(self, sq: Square) -> Optional[Piece]:
        return self.grid[sq[0]][sq[1]]

    def set(self, sq: Square, piece: Optional[Piece]) -> None:
        self.grid[sq[0]][sq[1]] = piece

    def remove(self, sq: Square) -> Optional[Piece]:
        piece = self.grid[sq[0]][sq[1]]
        self.grid[sq[0]][sq[1]] = None
        return piece

    def copy(self) -> "Board":
        """Return an independent snapshot; pieces are shared since immutable."""
        return Board([row[:] for row in self.grid])

    def pieces(self, color: Optional[str] = None) -> Iterator[Tuple[Square, Piece]]:
        """Yield ``(square, piece)`` pairs, rows then columns."""
        for row in range(8):
            for col in range(8):
                piece = self.grid[row][col]
                if piece is not None and (color is None or piece.color == color):
                    yield (row, col), piece

    def find_king(self, color: str) -> Square:
        """Return the square of ``color``'s king.

        Raises:
            BoardInvariantError: If the board does not hold exactly one king
                of that color.
        """
        found: List[Square] = [
            sq for sq, p in self.pieces(color) if p.kind == KING
        ]
        if len(found) != 1:
            raise BoardInvariantError(f"expected one {color} king, found {len(found)}")
        return found[0]
