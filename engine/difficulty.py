"""
Difficulty levels and the single move-selection entry point.

    easy        -- random legal move, biased toward captures
    medium      -- minimax search, depth 2
    hard        -- minimax search, depth 3
    grandmaster -- minimax search, depth 4 ("elite" is accepted as an alias)

The caller owns the chosen difficulty and passes it on every engine turn.
"""

import logging
import random
from enum import Enum

import chess

from engine.constants import EASY_CAPTURE_BIAS, GRANDMASTER_DEPTH, HARD_DEPTH, MEDIUM_DEPTH
from engine.errors import EngineError, EngineInternalFailure
from engine.search import find_best_move

_log = logging.getLogger(__name__)


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    GRANDMASTER = "grandmaster"

    @classmethod
    def _missing_(cls, value: object) -> "Difficulty | None":
        if isinstance(value, str):
            name = value.strip().lower()
            if name == "elite":
                return cls.GRANDMASTER
            for member in cls:
                if member.value == name:
                    return member
        return None

    @property
    def depth(self) -> int | None:
        """Search depth for this level, or None for the non-search easy policy."""
        return _DEPTHS[self]


_DEPTHS: dict[Difficulty, int | None] = {
    Difficulty.EASY: None,
    Difficulty.MEDIUM: MEDIUM_DEPTH,
    Difficulty.HARD: HARD_DEPTH,
    Difficulty.GRANDMASTER: GRANDMASTER_DEPTH,
}


def random_move(board: chess.Board, rng: random.Random | None = None) -> chess.Move | None:
    """
    Pick a random legal move, preferring captures some of the time.

    When captures are available, EASY_CAPTURE_BIAS of the time the move is
    drawn from the captures only; otherwise it is drawn from all legal
    moves (which may itself be a capture).
    """
    rng = rng or random.Random()
    moves = list(board.legal_moves)
    if not moves:
        return None

    captures = [move for move in moves if board.is_capture(move)]
    if captures and rng.random() < EASY_CAPTURE_BIAS:
        return rng.choice(captures)
    return rng.choice(moves)


async def select_move(
    difficulty: Difficulty | str,
    board: chess.Board,
    rng: random.Random | None = None,
) -> chess.Move | None:
    """
    Choose the engine's move for the side to move at ``difficulty``.

    The move is returned, not played. The board is left exactly as it was,
    whether the call succeeds or fails.

    Args:
        difficulty: A Difficulty member or its name.
        board:      The current position.
        rng:        Randomness for the easy policy and root move ordering.

    Returns:
        The chosen move, or None if the side to move has no legal moves.

    Raises:
        ValueError:            ``difficulty`` is not a known level.
        EngineInternalFailure: Move selection failed unexpectedly.
    """
    difficulty = Difficulty(difficulty)
    depth = difficulty.depth

    try:
        if depth is None:
            move = random_move(board, rng)
        else:
            move, _, _, _ = await find_best_move(board, depth, rng=rng)
    except EngineError:
        raise
    except Exception as exc:
        _log.exception("select_move: %s search failed for FEN=%s", difficulty.value, board.fen())
        raise EngineInternalFailure(f"{difficulty.value} move selection failed") from exc

    _log.debug("select_move: difficulty=%s move=%s", difficulty.value, move.uci() if move else "(none)")
    return move
