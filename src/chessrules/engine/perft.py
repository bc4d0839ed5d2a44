from __future__ import annotations

from typing import Dict

from .game import GameState


def perft(game: GameState, depth: int) -> int:
    """Compute the perft node count of ``game`` at ``depth``.

    Definition:
    - depth == 0 returns 1 (the current node).
    - depth > 0 returns the sum over all legal child positions' perft(depth-1).

    Children are visited with the game's make/unmake pair, so no notation is
    built and ``game`` is left exactly as it was.
    """
    if depth < 0:
        raise ValueError("depth must be >= 0")
    if depth == 0:
        return 1

    moves = game.get_all_legal_moves(game.current_player)
    if depth == 1:
        return len(moves)
    nodes = 0
    for move in moves:
        record = game.make(move)
        try:
            nodes += perft(game, depth - 1)
        finally:
            game.unmake(record)
    return nodes


def divide(game: GameState, depth: int) -> Dict[str, int]:
    """Per-root-move perft counts, keyed like ``"e2-e4"``."""
    if depth < 1:
        raise ValueError("depth must be >= 1")
    counts: Dict[str, int] = {}
    for move in game.get_all_legal_moves(game.current_player):
        record = game.make(move)
        try:
            counts[move.describe()] = perft(game, depth - 1)
        finally:
            game.unmake(record)
    return counts
