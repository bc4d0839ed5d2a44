from __future__ import annotations

from typing import List, Optional, Tuple

from .board import KING, PAWN, QUEEN, Board, Piece
from .castling import (
    KINGSIDE,
    QUEENSIDE,
    CastlingRights,
    InitialPositions,
    can_castle,
    castle_side_for,
    execute_castle,
    plan_castle,
)
from .move import Move, MoveKind, Square, on_board
from .rules import is_in_check, movement_valid, promotion_row


def classify_move(
    board: Board,
    color: str,
    from_sq: Square,
    to_sq: Square,
    *,
    castling: CastlingRights,
    en_passant: Optional[Square],
    initial: InitialPositions,
    promotion: str = QUEEN,
) -> Optional[Move]:
    """Classify ``from_sq -> to_sq`` for ``color`` into a legal move.

    Args:
        board (Board): Current position; never modified.
        color (str): Side whose move is being checked.
        from_sq (Square): Origin square.
        to_sq (Square): Destination square.
        castling (CastlingRights): Current castling rights.
        en_passant (Optional[Square]): En-passant target usable by ``color``.
        initial (InitialPositions): Recorded king/rook starting files.
        promotion (str): Piece kind used if the move promotes.

    Returns:
        Optional[Move]: The move tagged with its :class:`MoveKind`, or
            ``None`` when it is not legal.

    Notes:
        The self-check filter plays the move on a snapshot, so there is
        nothing to roll back on any exit path.
    """
    if not (on_board(*from_sq) and on_board(*to_sq)):
        return None
    piece = board.get(from_sq)
    if piece is None or piece.color != color:
        return None
    target = board.get(to_sq)
    castle_side: Optional[str] = None
    if piece.kind == KING:
        castle_side = castle_side_for(color, from_sq, to_sq, initial)
        # An attempt that fails the castling checks may still be a plain
        # king step (e.g. f1-g1).
        if castle_side is not None and not can_castle(
            board, color, castle_side, castling, initial
        ):
            castle_side = None

    kind = MoveKind.NORMAL
    if castle_side is not None:
        kind = MoveKind.CASTLE_KINGSIDE if castle_side == KINGSIDE else MoveKind.CASTLE_QUEENSIDE
    elif target is not None and target.color == color:
        return None
    elif not movement_valid(board, piece, from_sq, to_sq, en_passant):
        return None
    elif piece.kind == PAWN:
        if target is None and from_sq[1] != to_sq[1]:
            kind = MoveKind.EN_PASSANT
        elif to_sq[0] == promotion_row(color):
            kind = MoveKind.PROMOTION

    move = Move(from_sq, to_sq, kind, promotion if kind == MoveKind.PROMOTION else None)
    trial = board.copy()
    apply_to_board(trial, move, initial)
    if is_in_check(trial, color):
        return None
    return move


def apply_to_board(
    board: Board, move: Move, initial: InitialPositions
) -> Tuple[Piece, Optional[Piece], Optional[Square]]:
    """Move the pieces of an already classified move on ``board``.

    Returns:
        Tuple[Piece, Optional[Piece], Optional[Square]]: The moving piece,
            the captured piece (if any), and the square it was taken on.
    """
    piece = board.get(move.from_sq)
    if piece is None:
        raise ValueError(f"no piece on {move.from_sq!r}")

    if move.kind.is_castle:
        side = KINGSIDE if move.kind == MoveKind.CASTLE_KINGSIDE else QUEENSIDE
        execute_castle(board, plan_castle(piece.color, side, initial))
        return piece, None, None

    board.remove(move.from_sq)
    captured_sq: Optional[Square] = move.to_sq
    if move.kind == MoveKind.EN_PASSANT:
        captured_sq = (move.from_sq[0], move.to_sq[1])
        captured = board.remove(captured_sq)
    else:
        captured = board.get(move.to_sq)
    if captured is None:
        captured_sq = None

    placed = piece
    if move.kind == MoveKind.PROMOTION:
        placed = Piece(move.promotion or QUEEN, piece.color)
    board.set(move.to_sq, placed)
    return piece, captured, captured_sq


def legal_moves(
    board: Board,
    color: str,
    *,
    castling: CastlingRights,
    en_passant: Optional[Square],
    initial: InitialPositions,
) -> List[Move]:
    """Enumerate ``color``'s legal moves.

    Ordering is deterministic: origin squares rows then columns, and for each
    origin the destinations rows then columns.
    """
    moves: List[Move] = []
    for from_sq, _piece in list(board.pieces(color)):
        for row in range(8):
            for col in range(8):
                move = classify_move(
                    board,
                    color,
                    from_sq,
                    (row, col),
                    castling=castling,
                    en_passant=en_passant,
                    initial=initial,
                )
                if move is not None:
                    moves.append(move)
    return moves
