"""Per-piece movement patterns and the attack scan.

Pure functions over a :class:`Board`; nothing here consults castling rights
or filters self-check, so the attack scan can never recurse into legality.
"""

from __future__ import annotations

from typing import Optional

from .board import (
    BISHOP,
    KING,
    KNIGHT,
    PAWN,
    QUEEN,
    ROOK,
    WHITE,
    Board,
    Piece,
    opponent,
)
from .move import Square


KNIGHT_OFFSETS = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)


def pawn_direction(color: str) -> int:
    return -1 if color == WHITE else 1


def pawn_start_row(color: str) -> int:
    return 6 if color == WHITE else 1


def promotion_row(color: str) -> int:
    return 0 if color == WHITE else 7


def path_clear(board: Board, from_sq: Square, to_sq: Square) -> bool:
    """Return True if every square strictly between the two is empty.

    Assumes the squares share a rank, file or diagonal.
    """
    fr, fc = from_sq
    tr, tc = to_sq
    dr = (tr > fr) - (tr < fr)
    dc = (tc > fc) - (tc < fc)
    r, c = fr + dr, fc + dc
    while (r, c) != (tr, tc):
        if board.grid[r][c] is not None:
            return False
        r += dr
        c += dc
    return True


def pawn_move_valid(
    board: Board,
    piece: Piece,
    from_sq: Square,
    to_sq: Square,
    en_passant: Optional[Square] = None,
) -> bool:
    direction = pawn_direction(piece.color)
    fr, fc = from_sq
    tr, tc = to_sq
    row_diff = tr - fr
    col_diff = abs(tc - fc)
    target = board.grid[tr][tc]

    if col_diff == 0:
        if row_diff == direction and target is None:
            return True
        if (
            fr == pawn_start_row(piece.color)
            and row_diff == 2 * direction
            and target is None
            and board.grid[fr + direction][fc] is None
        ):
            return True
        return False

    if col_diff == 1 and row_diff == direction:
        if target is not None:
            return True
        return en_passant is not None and en_passant == to_sq
    return False


def movement_valid(
    board: Board,
    piece: Piece,
    from_sq: Square,
    to_sq: Square,
    en_passant: Optional[Square] = None,
) -> bool:
    """Check the piece's movement pattern for ``from_sq -> to_sq``.

    Castling is not a movement pattern; the legality engine recognises it
    before reaching here. Target ownership is the caller's concern.
    """
    row_diff = to_sq[0] - from_sq[0]
    col_diff = to_sq[1] - from_sq[1]
    abs_row = abs(row_diff)
    abs_col = abs(col_diff)
    if abs_row == 0 and abs_col == 0:
        return False

    kind = piece.kind
    if kind == PAWN:
        return pawn_move_valid(board, piece, from_sq, to_sq, en_passant)
    if kind == KNIGHT:
        return (abs_row, abs_col) in ((2, 1), (1, 2))
    if kind == BISHOP:
        return abs_row == abs_col and path_clear(board, from_sq, to_sq)
    if kind == ROOK:
        return (abs_row == 0 or abs_col == 0) and path_clear(board, from_sq, to_sq)
    if kind == QUEEN:
        return (abs_row == 0 or abs_col == 0 or abs_row == abs_col) and path_clear(
            board, from_sq, to_sq
        )
    if kind == KING:
        return abs_row <= 1 and abs_col <= 1
    return False


def attacks(board: Board, piece: Piece, from_sq: Square, to_sq: Square) -> bool:
    """Return True if ``piece`` on ``from_sq`` attacks ``to_sq``.

    Same as the capture patterns of :func:`movement_valid`, except that a
    pawn attacks its forward diagonals whether or not they are occupied.
    """
    if piece.kind == PAWN:
        return (
            to_sq[0] - from_sq[0] == pawn_direction(piece.color)
            and abs(to_sq[1] - from_sq[1]) == 1
        )
    return movement_valid(board, piece, from_sq, to_sq)


def is_square_attacked(board: Board, sq: Square, by_color: str) -> bool:
    for from_sq, piece in board.pieces(by_color):
        if attacks(board, piece, from_sq, sq):
            return True
    return False


def is_in_check(board: Board, color: str) -> bool:
    """Return True if ``color``'s king is attacked on ``board``.

    Raises:
        BoardInvariantError: If ``color`` does not have exactly one king.
    """
    return is_square_attacked(board, board.find_king(color), opponent(color))
