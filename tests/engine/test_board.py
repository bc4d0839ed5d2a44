from __future__ import annotations

import pytest

from chessrules.engine.board import (
    BLACK,
    KING,
    WHITE,
    Board,
    BoardInvariantError,
    Piece,
)
from chessrules.engine.game import GameState
from chessrules.engine.move import square_to_str, str_to_square


def test_standard_layout() -> None:
    rows = Board.standard().to_diagram()
    assert rows[0] == "rnbqkbnr"
    assert rows[1] == "pppppppp"
    assert rows[6] == "PPPPPPPP"
    assert rows[7] == "RNBQKBNR"
    assert all(r == "........" for r in rows[2:6])


def test_diagram_round_trip() -> None:
    board = Board.standard()
    assert Board.from_diagram(str(board)) == board


@pytest.mark.parametrize(
    "diagram",
    ["", "........\n" * 7, "k.......\n" + "........\n" * 6 + "K......", "x" * 8 + "\n" * 7],
)
def test_malformed_diagram_rejected(diagram: str) -> None:
    with pytest.raises(ValueError):
        Board.from_diagram(diagram)


def test_copy_is_independent() -> None:
    board = Board.standard()
    snap = board.copy()
    board.remove((6, 4))
    assert snap.get((6, 4)) is not None
    assert snap != board


def test_find_king_requires_exactly_one() -> None:
    board = Board.empty()
    with pytest.raises(BoardInvariantError):
        board.find_king(WHITE)
    board.set((7, 4), Piece(KING, WHITE))
    assert board.find_king(WHITE) == (7, 4)
    board.set((7, 5), Piece(KING, WHITE))
    with pytest.raises(BoardInvariantError):
        board.find_king(WHITE)


def test_game_from_diagram_requires_both_kings() -> None:
    with pytest.raises(BoardInvariantError):
        GameState.from_diagram("....k...\n" + "........\n" * 7)
    with pytest.raises(ValueError):
        GameState.from_diagram(str(Board.standard()), to_move="red")
    game = GameState.from_diagram(str(Board.standard()), to_move=BLACK)
    assert game.current_player == BLACK


def test_square_names() -> None:
    assert str_to_square("e4") == (4, 4)
    assert str_to_square("a8") == (0, 0)
    assert square_to_str((7, 7)) == "h1"
    with pytest.raises(ValueError):
        str_to_square("i9")
    with pytest.raises(ValueError):
        square_to_str((8, 0))
