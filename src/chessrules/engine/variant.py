"""Back-rank generator for the 960-position castling variant.

The mapping from id to arrangement is fixed: bishops on opposite-colored
files, then queen, then knights from a lookup table, then rook/king/rook in
the remaining files. Id 518 reproduces the standard layout.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .board import BISHOP, KING, KNIGHT, QUEEN, ROOK
from .castling import InitialFiles, InitialPositions


POSITION_COUNT = 960
STANDARD_POSITION_ID = 518

LIGHT_BISHOP_FILES = (1, 3, 5, 7)
DARK_BISHOP_FILES = (0, 2, 4, 6)

# Every ascending pair of indices into the five files left after the
# bishops and queen are placed.
KNIGHT_PLACEMENTS: Tuple[Tuple[int, int], ...] = (
    (0, 1),
    (0, 2),
    (0, 3),
    (0, 4),
    (1, 2),
    (1, 3),
    (1, 4),
    (2, 3),
    (2, 4),
    (3, 4),
)


@dataclass(frozen=True)
class BackRank:
    position_id: int
    pieces: Tuple[str, ...]

    def _files_of(self, kind: str) -> List[int]:
        return [f for f, k in enumerate(self.pieces) if k == kind]

    @property
    def initial_files(self) -> InitialFiles:
        rooks = self._files_of(ROOK)
        return InitialFiles(
            king=self._files_of(KING)[0],
            kingside_rook=rooks[1],
            queenside_rook=rooks[0],
        )

    @property
    def initial_positions(self) -> InitialPositions:
        return InitialPositions.mirrored(self.initial_files)


def validate_position_id(position_id: int) -> int:
    if isinstance(position_id, bool) or not isinstance(position_id, int):
        raise ValueError(f"position id must be an integer: {position_id!r}")
    if not 0 <= position_id < POSITION_COUNT:
        raise ValueError(f"position id out of range [0, {POSITION_COUNT}): {position_id}")
    return position_id


def generate_back_rank(position_id: int) -> BackRank:
    """Build the back-rank arrangement for ``position_id``.

    Args:
        position_id (int): Integer in ``[0, 960)``.

    Returns:
        BackRank: Piece kinds for files 0..7 and the derived starting files.

    Raises:
        ValueError: If ``position_id`` is out of range.
    """
    n = validate_position_id(position_id)
    pieces: List[Optional[str]] = [None] * 8

    pieces[LIGHT_BISHOP_FILES[n % 4]] = BISHOP
    pieces[DARK_BISHOP_FILES[(n // 4) % 4]] = BISHOP

    empty = [f for f in range(8) if pieces[f] is None]
    pieces[empty[(n // 16) % 6]] = QUEEN

    empty = [f for f in range(8) if pieces[f] is None]
    for idx in KNIGHT_PLACEMENTS[n // 96]:
        pieces[empty[idx]] = KNIGHT

    # King always lands strictly between the rooks.
    empty = [f for f in range(8) if pieces[f] is None]
    for f, kind in zip(empty, (ROOK, KING, ROOK)):
        pieces[f] = kind

    return BackRank(position_id=n, pieces=tuple(p for p in pieces if p is not None))


def random_position_id(rng: Optional[random.Random] = None) -> int:
    return (rng or random).randrange(POSITION_COUNT)
