"""
Search entry point: fixed-depth minimax with alpha-beta pruning.

The search works on a single perspective, the engine's. The evaluator scores
every leaf for the side the engine plays, maximizing nodes are the engine's
turns and minimizing nodes the opponent's. Scores are never negated on the
way up.

At the root, moves are ordered (captures first, shuffled within each group)
and each one is scored by the opponent's minimizing reply search. The move
with the strictly highest score wins, so ties go to the move seen first.
Internal nodes search in python-chess's native move order.

Cooperative scheduling model:
    The search is a coroutine running on the caller's asyncio event loop.
    Every YIELD_EVERY_NODES nodes it awaits ``asyncio.sleep(0)``, handing
    control back to the loop so other tasks (HTTP requests, timers) can run.
    Nothing about the search changes across a yield: there are no threads,
    no deadlines and no cancellation checks. Depth alone bounds the search.

Board ownership:
    The board is a scratchpad. Every move is applied through
    ``rules.applied``, which undoes it on every exit path, so the board is
    back in its original state when find_best_move returns or raises.
"""

import asyncio
import logging
import math
import random
from dataclasses import dataclass

import chess

from engine.constants import YIELD_EVERY_NODES
from engine.errors import InvalidMoveApplication
from engine.evaluate import evaluate
from engine.move_ordering import order_moves
from engine.rules import applied, game_status

_log = logging.getLogger(__name__)


@dataclass
class SearchState:
    """
    Counters and settings shared by every frame of one search.

    Attributes:
        engine_color: The side the engine is choosing a move for. All
                      scores are from this side's perspective.
        yield_every:  Suspend to the event loop every this many nodes.
                      None disables yielding.
        node_count:   Number of minimax calls made so far.
        yields:       Number of times the search has suspended.
    """

    engine_color: chess.Color
    yield_every: int | None = YIELD_EVERY_NODES
    node_count: int = 0
    yields: int = 0


async def _search_child(
    board: chess.Board,
    move: chess.Move,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    state: SearchState,
) -> float | None:
    """Apply ``move``, search the resulting position, undo. None if the move was refused."""
    try:
        with applied(board, move):
            return await _minimax(board, depth, alpha, beta, maximizing, state)
    except InvalidMoveApplication as exc:
        _log.warning("search: skipping branch: %s", exc)
        return None


async def _minimax(
    board: chess.Board,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    state: SearchState,
) -> float:
    """
    Minimax with alpha-beta pruning, scored from the engine's perspective.

    Args:
        board:      Current position. Modified in place, always restored.
        depth:      Remaining plies. At 0 the evaluator scores the position.
        alpha:      Lowest score the engine is already guaranteed.
        beta:       Highest score the opponent will allow.
        maximizing: True when the engine is to move at this node.
        state:      Per-search counters and the engine colour.

    Returns:
        The (fail-soft) minimax value of the position for the engine.
    """
    state.node_count += 1
    if state.yield_every and state.node_count % state.yield_every == 0:
        state.yields += 1
        await asyncio.sleep(0)

    # Checkmate and draws are scored by the evaluator's terminal branch.
    if depth <= 0 or game_status(board) is not None:
        return evaluate(board, state.engine_color)

    moves = list(board.legal_moves)
    if not moves:
        return evaluate(board, state.engine_color)

    if maximizing:
        best = -math.inf
        for move in moves:
            value = await _search_child(board, move, depth - 1, alpha, beta, False, state)
            if value is None:
                continue
            best = max(best, value)
            alpha = max(alpha, value)
            if alpha >= beta:
                break
        return best

    best = math.inf
    for move in moves:
        value = await _search_child(board, move, depth - 1, alpha, beta, True, state)
        if value is None:
            continue
        best = min(best, value)
        beta = min(beta, value)
        if beta <= alpha:
            break
    return best


async def find_best_move(
    board: chess.Board,
    depth: int,
    rng: random.Random | None = None,
    yield_every: int | None = YIELD_EVERY_NODES,
) -> tuple[chess.Move | None, float, int, int]:
    """
    Return the best move for the side to move, searching ``depth`` plies.

    The engine plays the side to move. The return type is always
    (move, score, depth, nodes):
        - move:  The chosen move, or None if there are no legal moves.
        - score: Minimax value of the chosen move from the engine's
                 perspective. +10000 means a forced mate within the depth.
        - depth: The depth searched.
        - nodes: Number of minimax nodes visited.

    Args:
        board:       The current position. Restored before returning.
        depth:       Search depth in plies, at least 1.
        rng:         Randomness for root move ordering. Pass a seeded
                     ``random.Random`` for reproducible choices.
        yield_every: Suspend to the event loop every this many nodes, or
                     None to run without yielding.

    Raises:
        ValueError: ``depth`` is less than 1.
    """
    if depth < 1:
        raise ValueError(f"search depth must be at least 1, got {depth}")

    if not any(board.legal_moves):
        return (None, 0, 0, 0)

    state = SearchState(engine_color=board.turn, yield_every=yield_every)

    alpha = -math.inf
    beta = math.inf
    best_score = -math.inf
    best_move: chess.Move | None = None

    for move in order_moves(board, board.legal_moves, rng):
        value = await _search_child(board, move, depth - 1, alpha, beta, False, state)
        if value is None:
            continue

        if value > best_score:
            best_score = value
            best_move = move

        alpha = max(alpha, value)
        if alpha >= beta:
            break

    _log.debug(
        "search: depth=%d move=%s score=%s nodes=%d yields=%d",
        depth,
        best_move.uci() if best_move else "(none)",
        best_score,
        state.node_count,
        state.yields,
    )
    return (best_move, best_score, depth, state.node_count)
