"""
Chess engine package.

This package picks the computer's move in a game against a human, at one of
four difficulty levels, using fixed-depth minimax search with alpha-beta
pruning and a hand-crafted evaluation function. python-chess is the rules
engine: it owns the position, legality and game-end detection.

Modules:
    constants     — Piece values, piece-square tables, weights and depths
    rules         — Terminal status and scoped apply/undo over python-chess
    evaluate      — Static evaluation from the engine's perspective
    move_ordering — Captures-first, shuffled root move ordering
    search        — Minimax with alpha-beta and cooperative yielding
    difficulty    — Difficulty levels and the select_move entry point
    errors        — Engine exception types
"""

from engine.difficulty import Difficulty, random_move, select_move
from engine.errors import EngineError, EngineInternalFailure, InvalidMoveApplication
from engine.evaluate import evaluate
from engine.rules import GameStatus, applied, game_status
from engine.search import find_best_move

__all__ = [
    "Difficulty",
    "EngineError",
    "EngineInternalFailure",
    "GameStatus",
    "InvalidMoveApplication",
    "applied",
    "evaluate",
    "find_best_move",
    "game_status",
    "random_move",
    "select_move",
]
