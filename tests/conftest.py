import os
import sys

import pytest


# Ensure the repository's src/ is on sys.path for `from chessrules...` imports
REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
SRC_PATH = os.path.abspath(os.path.join(REPO_ROOT, "src"))
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from chessrules.engine.castling import CastlingRights  # noqa: E402
from chessrules.engine.game import GameState  # noqa: E402


# Both sides' kings and rooks on their standard squares, nothing in between.
OPEN_CASTLING = """
r...k..r
........
........
........
........
........
........
R...K..R
"""

KIWIPETE = """
r...k..r
p.ppqpb.
bn..pnp.
...PN...
.p..P...
..N..Q.p
PPPBBPPP
R...K..R
"""


@pytest.fixture
def open_castling() -> GameState:
    return GameState.from_diagram(OPEN_CASTLING, castling=CastlingRights.full())


@pytest.fixture
def kiwipete() -> GameState:
    return GameState.from_diagram(KIWIPETE, castling=CastlingRights.full())
