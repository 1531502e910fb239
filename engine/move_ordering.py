"""
Root move ordering: captures first, each group shuffled.

Captures tend to move alpha early and produce cutoffs sooner. Shuffling
within each group keeps the engine from always choosing the same move among
equally scored candidates, since the search breaks ties by keeping the first
move it saw.
"""

import random
from typing import Iterable

import chess


def order_moves(
    board: chess.Board,
    moves: Iterable[chess.Move],
    rng: random.Random | None = None,
) -> list[chess.Move]:
    """
    Return ``moves`` with captures before quiet moves.

    Args:
        board: The position the moves belong to (used to detect captures).
        moves: Legal moves to order.
        rng:   Source of randomness for the shuffles. Defaults to a new,
               system-seeded generator.

    Returns:
        A new list: shuffled captures followed by shuffled non-captures.
    """
    rng = rng or random.Random()
    captures: list[chess.Move] = []
    quiet: list[chess.Move] = []
    for move in moves:
        (captures if board.is_capture(move) else quiet).append(move)

    rng.shuffle(captures)
    rng.shuffle(quiet)
    return captures + quiet
