"""
Rules engine adapter: the thin layer between the search and python-chess.

python-chess owns the position: legality, check, mate and draw detection,
move application and undo. The engine only ever touches a board through the
two helpers defined here:

    game_status -- terminal status of the current position, or None
    applied     -- scoped move application that always undoes the move

Everything else the evaluator needs (side to move, legal moves, occupancy)
is read straight off ``chess.Board``.
"""

from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum

import chess

from engine.errors import InvalidMoveApplication


class GameStatus(Enum):
    """Why a position is terminal."""

    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"
    THREEFOLD_REPETITION = "threefold_repetition"
    INSUFFICIENT_MATERIAL = "insufficient_material"
    FIFTY_MOVES = "fifty_moves"

    @property
    def is_draw(self) -> bool:
        return self is not GameStatus.CHECKMATE


def game_status(board: chess.Board) -> GameStatus | None:
    """
    Return the terminal status of the position, or None if play continues.

    Repetition and fifty-move draws are reported as soon as they occur rather
    than when a player could claim them, so a game never continues past them.
    Checkmate takes precedence over the fifty-move rule.

    Args:
        board: The position to inspect. Not modified.

    Returns:
        A GameStatus member, or None for a position that is not terminal.
    """
    if board.is_checkmate():
        return GameStatus.CHECKMATE
    if board.is_stalemate():
        return GameStatus.STALEMATE
    if board.is_insufficient_material():
        return GameStatus.INSUFFICIENT_MATERIAL
    if board.is_repetition(3):
        return GameStatus.THREEFOLD_REPETITION
    if board.is_fifty_moves():
        return GameStatus.FIFTY_MOVES
    return None


@contextmanager
def applied(board: chess.Board, move: chess.Move) -> Iterator[chess.Board]:
    """
    Apply ``move`` for the duration of a ``with`` block.

    The move is undone when the block exits, whether it returns normally,
    breaks out of a loop, or raises. Nested blocks unwind in stack order.

    Raises:
        InvalidMoveApplication: ``move`` is not legal. The board is untouched.
    """
    if not board.is_legal(move):
        raise InvalidMoveApplication(move, board.fen())
    board.push(move)
    try:
        yield board
    finally:
        board.pop()
