#!/usr/bin/env python3
# ruff: noqa: E402
from __future__ import annotations

import argparse
import time
import os
import sys

# Allow running this script directly via `python scripts/perft.py`
# by adding the repo's src/ directory to sys.path.
SRC_PATH = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if SRC_PATH not in sys.path:
    sys.path.insert(0, SRC_PATH)

from chessrules.engine.game import GameState
from chessrules.engine.perft import divide, perft


def main() -> None:
    parser = argparse.ArgumentParser(description="Run perft from a starting position")
    parser.add_argument(
        "--variant-id",
        type=int,
        default=None,
        help="Variant position id in [0, 960) (default: standard layout)",
    )
    parser.add_argument("--depth", type=int, default=3, help="Perft depth (default: 3)")
    parser.add_argument("--divide", action="store_true", help="Print per-move counts")
    args = parser.parse_args()

    game = GameState.new(args.variant_id)
    start = time.perf_counter()
    if args.divide:
        counts = divide(game, args.depth)
        for move, n in counts.items():
            print(f"{move}: {n}")
        nodes = sum(counts.values())
    else:
        nodes = perft(game, args.depth)
    dt = time.perf_counter() - start
    print(f"nodes={nodes} depth={args.depth} time_ms={int(dt*1000)} nps={int(nodes/max(dt,1e-9))}")


if __name__ == "__main__":
    main()
