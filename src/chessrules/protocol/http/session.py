from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from ...engine.game import GameState


@dataclass
class GameSession:
    """One hosted game and the lock that serializes its requests."""

    game: GameState
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


class SessionLimitError(RuntimeError):
    pass


class InMemorySessionStore:
    """Thread-safe in-memory game session store.

    Responsibilities:
    - Create new sessions with unique `game_id`s
    - Hand out a session's game under that session's own lock, so moves for
      one game are applied one at a time in arrival order
    - Delete sessions

    The store-wide lock only guards the mapping; it is never held while a
    game is being worked on.
    """

    def __init__(self, max_games: int = 1000) -> None:
        self._lock = threading.RLock()
        self._sessions: Dict[str, GameSession] = {}
        self._max_games = max_games

    def create(self, game: Optional[GameState] = None) -> str:
        """Create a new game session and return its `game_id`.

        Raises:
            SessionLimitError: If the store already holds ``max_games``.
        """
        gid = str(uuid.uuid4())
        if game is None:
            game = GameState.new()
        with self._lock:
            if len(self._sessions) >= self._max_games:
                raise SessionLimitError("too many games")
            self._sessions[gid] = GameSession(game)
        return gid

    def get(self, game_id: str) -> Optional[GameSession]:
        with self._lock:
            return self._sessions.get(game_id)

    @contextmanager
    def locked(self, game_id: str) -> Iterator[Optional[GameState]]:
        """Yield the session's game while holding its lock (None if unknown)."""
        session = self.get(game_id)
        if session is None:
            yield None
            return
        with session.lock:
            yield session.game

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(game_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
