from __future__ import annotations

from chessrules.engine.board import BLACK, WHITE
from chessrules.engine.game import GameState


def _fools_mate() -> GameState:
    game = GameState.new()
    for move in ((6, 5, 5, 5), (1, 4, 3, 4), (6, 6, 4, 6)):
        assert game.apply_move(*move) is not None
    return game


def test_fools_mate_is_checkmate() -> None:
    game = _fools_mate()

    record = game.apply_move(0, 3, 4, 7)

    assert record is not None
    assert record.notation == "Black Queen moves to h4 - Checkmate!"
    assert game.is_checkmate(WHITE)
    assert not game.is_stalemate(WHITE)
    assert game.get_all_legal_moves(WHITE) == []
    assert game.outcome() == "checkmate"
    assert game.game_over
    # Nothing more can be played
    assert game.apply_move(6, 0, 5, 0) is None


def test_check_annotation() -> None:
    game = GameState.new()
    for move in ((6, 4, 4, 4), (1, 5, 2, 5)):
        game.apply_move(*move)
    record = game.apply_move(7, 3, 3, 7)  # Qh5+
    assert record is not None
    assert record.notation == "White Queen moves to h5 - Check!"
    assert game.is_in_check(BLACK)
    assert not game.game_over


STALEMATE = """
.......k
.....Q..
......K.
........
........
........
........
........
"""


def test_stalemate_position() -> None:
    game = GameState.from_diagram(STALEMATE, to_move=BLACK)

    assert game.is_stalemate(BLACK)
    assert not game.is_checkmate(BLACK)
    assert not game.is_in_check(BLACK)
    assert game.outcome() == "stalemate"
    assert game.game_over


def test_move_into_stalemate_is_annotated() -> None:
    game = GameState.from_diagram(
        """
        .......k
        ........
        ......K.
        ........
        ........
        ........
        ........
        .....Q..
        """
    )

    record = game.apply_move(7, 5, 1, 5)

    assert record is not None
    assert record.notation == "White Queen moves to f7 - Stalemate!"
    assert game.game_over


def test_checkmate_and_stalemate_exclusive_in_start_position() -> None:
    game = GameState.new()
    for color in (WHITE, BLACK):
        assert not game.is_checkmate(color)
        assert not game.is_stalemate(color)
    assert game.outcome() is None
