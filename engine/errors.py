"""Exceptions raised by the engine."""

import chess


class EngineError(Exception):
    """Base class for all engine errors."""


class InvalidMoveApplication(EngineError):
    """
    The rules engine refused a move the search believed to be legal.

    Moves reach the search through the rules engine's own legal-move
    generator, so this should never happen. The search logs it and skips
    the branch instead of aborting.
    """

    def __init__(self, move: chess.Move, fen: str) -> None:
        super().__init__(f"illegal move {move.uci()} in position {fen}")
        self.move = move
        self.fen = fen


class EngineInternalFailure(EngineError):
    """An unexpected error interrupted move selection."""
