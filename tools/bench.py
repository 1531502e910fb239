#!/usr/bin/env python3
"""
Benchmark: nodes searched and time per move at each search difficulty.

Run before and after a change to the evaluator or the search to see its
cost. Alpha-beta node counts depend on root move ordering, which is
shuffled, so every position is searched with the same fixed seed.

Usage: python3 tools/bench.py
"""
import asyncio
import random
import sys
import time

import chess

from engine.difficulty import Difficulty
from engine.search import find_best_move

SEED = 1234

# Opening, middlegame and endgame positions. Kept fixed so runs compare.
POSITIONS = [
    ("Start",        chess.STARTING_FEN),
    ("Italian",      "r1bqk1nr/pppp1ppp/2n5/2b1p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Mid-open",     "r1bqkb1r/pppp1ppp/2n2n2/4p3/2B1P3/5N2/PPPP1PPP/RNBQK2R w KQkq - 4 4"),
    ("Complex mid",  "r2q1rk1/ppp2ppp/2np1n2/2b1p1B1/2B1P1b1/2NP1N2/PPP2PPP/R2Q1RK1 w - - 0 8"),
    ("Rook ending",  "8/5pk1/6p1/7p/7P/6P1/5PK1/8 w - - 0 1"),
    ("Pawn race",    "8/1p4k1/p7/P1K5/8/8/8/8 w - - 0 1"),
]


def run_position(label: str, fen: str, depth: int) -> dict:
    """Search one position and return its metrics.

    Args:
        label: Human-readable position name for display.
        fen:   Position to search.
        depth: Search depth in plies.

    Returns:
        Dict with keys: label, move, depth, score, nodes, nps, time_ms.
    """
    board = chess.Board(fen)
    start = time.monotonic()
    move, score, depth, nodes = asyncio.run(
        find_best_move(board, depth, rng=random.Random(SEED), yield_every=None)
    )
    time_ms = max(1, int((time.monotonic() - start) * 1000))

    return {
        "label": label,
        "move": move.uci() if move else "(none)",
        "depth": depth,
        "score": score,
        "nodes": nodes,
        "nps": nodes * 1000 // time_ms,
        "time_ms": time_ms,
    }


def main(difficulties: list[str]) -> None:
    """Run all benchmark positions at each difficulty and print a table."""
    for name in difficulties:
        difficulty = Difficulty(name)
        if difficulty.depth is None:
            print(f"{difficulty.value}: no search, skipped")
            continue

        print(f"{difficulty.value} (depth {difficulty.depth})")
        print(
            f"{'Position':<14} {'Move':<7} {'Score':>9} "
            f"{'Nodes':>8} {'NPS':>8} {'Time(ms)':>9}"
        )
        print("-" * 60)
        for label, fen in POSITIONS:
            r = run_position(label, fen, difficulty.depth)
            print(
                f"{r['label']:<14} {r['move']:<7} {r['score']:>9.1f} "
                f"{r['nodes']:>8,} {r['nps']:>8,} {r['time_ms']:>9,}"
            )
        print()


if __name__ == "__main__":
    main(sys.argv[1:] or ["medium", "hard"])
