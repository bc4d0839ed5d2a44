"""Chess rules engine with castling-compatible 960-position variant support."""

from __future__ import annotations

from .engine.board import BLACK, WHITE, Board, BoardInvariantError, Piece
from .engine.castling import CastlingRights, InitialPositions
from .engine.game import GameState
from .engine.move import Move, MoveKind
from .engine.recorder import MoveRecord
from .engine.variant import generate_back_rank

__version__ = "0.1.0"

__all__ = [
    "BLACK",
    "WHITE",
    "Board",
    "BoardInvariantError",
    "CastlingRights",
    "GameState",
    "InitialPositions",
    "Move",
    "MoveKind",
    "MoveRecord",
    "Piece",
    "generate_back_rank",
]
