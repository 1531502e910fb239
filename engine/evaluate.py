"""
Static position evaluation from the engine's point of view.

Unlike a negamax evaluator, which scores from the side to move, every score
produced here is relative to a fixed ``engine_color``: positive means the
engine is better, whoever is on move. The search keeps that perspective all
the way down the tree.

The score is the sum of five terms:

1. Terminal check -- checkmate is +/-CHECKMATE_SCORE, any draw is 0, and
   no other term is computed.
2. Material + piece-square tables.
3. Mobility of the side to move.
4. King safety (pawn shield).
5. Pawn structure (doubled and isolated pawns).
"""

import chess

from engine.constants import (
    CHECKMATE_SCORE,
    DOUBLED_PAWN_PENALTY,
    DRAW_SCORE,
    ISOLATED_PAWN_PENALTY,
    KING_SHIELD_BONUS,
    MOBILITY_WEIGHT,
    PIECE_SQUARE_TABLES,
    PIECE_VALUES,
)
from engine.rules import GameStatus, game_status


def evaluate(board: chess.Board, engine_color: chess.Color = chess.BLACK) -> float:
    """
    Score the position from ``engine_color``'s perspective.

    Args:
        board:        The position to score. Not modified.
        engine_color: The side the engine plays. The other side is the
                      human. Defaults to Black, the human playing White.

    Returns:
        +CHECKMATE_SCORE if the human side is checkmated, -CHECKMATE_SCORE if
        the engine is, DRAW_SCORE for any drawn terminal position, otherwise
        a heuristic centipawn score.
    """
    status = game_status(board)
    if status is GameStatus.CHECKMATE:
        # The side to move is the one that has been mated.
        return CHECKMATE_SCORE if board.turn != engine_color else -CHECKMATE_SCORE
    if status is not None:
        return DRAW_SCORE

    return (
        material_and_position(board, engine_color)
        + mobility(board, engine_color)
        + king_safety(board, engine_color)
        + pawn_structure(board, engine_color)
    )


def _table_row(square: chess.Square, color: chess.Color) -> int:
    # Tables put the owner's promotion rank on row 0. For Black that is rank
    # 1, so the rank index is the row; White reads the table rank-mirrored.
    rank = chess.square_rank(square)
    return rank if color == chess.BLACK else 7 - rank


def material_and_position(board: chess.Board, engine_color: chess.Color) -> float:
    """Base piece values plus piece-square bonuses, engine minus opponent."""
    score = 0
    for square, piece in board.piece_map().items():
        table = PIECE_SQUARE_TABLES[piece.piece_type]
        value = (
            PIECE_VALUES[piece.piece_type]
            + table[_table_row(square, piece.color)][chess.square_file(square)]
        )
        score += value if piece.color == engine_color else -value
    return score


def mobility(board: chess.Board, engine_color: chess.Color) -> float:
    """Legal move count of the side to move, weighted and signed."""
    count = board.legal_moves.count() * MOBILITY_WEIGHT
    return count if board.turn == engine_color else -count


def _shield(board: chess.Board, color: chess.Color) -> int:
    king = board.king(color)
    if king is None:
        return 0

    rank = chess.square_rank(king) + (1 if color == chess.WHITE else -1)
    if not 0 <= rank <= 7:
        return 0

    bonus = 0
    king_file = chess.square_file(king)
    for file in range(max(0, king_file - 1), min(7, king_file + 1) + 1):
        piece = board.piece_at(chess.square(file, rank))
        if piece is not None and piece.piece_type == chess.PAWN and piece.color == color:
            bonus += KING_SHIELD_BONUS
    return bonus


def king_safety(board: chess.Board, engine_color: chess.Color) -> float:
    """
    Pawn-shield bonus, engine minus opponent.

    A side earns KING_SHIELD_BONUS for each of its own pawns on the three
    squares directly in front of its king (one rank toward the opponent).
    """
    return _shield(board, engine_color) - _shield(board, not engine_color)


def _pawn_penalties(board: chess.Board, color: chess.Color) -> int:
    files = [0] * 8
    for square in board.pieces(chess.PAWN, color):
        files[chess.square_file(square)] += 1

    score = 0
    for file, count in enumerate(files):
        if count > 1:
            score -= DOUBLED_PAWN_PENALTY * (count - 1)
        left = files[file - 1] if file > 0 else 0
        right = files[file + 1] if file < 7 else 0
        if count >= 1 and left == 0 and right == 0:
            score -= ISOLATED_PAWN_PENALTY
    return score


def pawn_structure(board: chess.Board, engine_color: chess.Color) -> float:
    """Doubled and isolated pawn penalties, engine minus opponent."""
    return _pawn_penalties(board, engine_color) - _pawn_penalties(board, not engine_color)
