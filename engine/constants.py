"""
Engine constants: piece values, piece-square tables, evaluation weights,
search parameters and difficulty depths.

All numeric constants used throughout the engine are defined here so that
the evaluation and search modules never introduce their own magic numbers.

Piece values follow the standard centipawn convention (1 pawn = 100 cp).
Scores are floats because the mobility term is fractional.
"""

import chess

# ---------------------------------------------------------------------------
# Piece values (centipawns)
# ---------------------------------------------------------------------------

PAWN_VALUE: int = 100
KNIGHT_VALUE: int = 320
BISHOP_VALUE: int = 330
ROOK_VALUE: int = 500
QUEEN_VALUE: int = 900
KING_VALUE: int = 20_000  # Present for both sides, so it always cancels out

PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Piece-square tables
# ---------------------------------------------------------------------------
# Each table is 8x8, row 0 is the owner's promotion rank and row 7 its home
# rank, columns run from the a-file to the h-file. evaluate.py maps a square
# to a row depending on the colour of the piece standing on it.

PAWN_TABLE: list[list[int]] = [
    [0,   0,   0,   0,   0,   0,   0,   0],
    [50,  50,  50,  50,  50,  50,  50,  50],
    [10,  10,  20,  30,  30,  20,  10,  10],
    [5,   5,   10,  25,  25,  10,  5,   5],
    [0,   0,   0,   20,  20,  0,   0,   0],
    [5,   -5,  -10, 0,   0,   -10, -5,  5],
    [5,   10,  10,  -20, -20, 10,  10,  5],
    [0,   0,   0,   0,   0,   0,   0,   0],
]

KNIGHT_TABLE: list[list[int]] = [
    [-50, -40, -30, -30, -30, -30, -40, -50],
    [-40, -20, 0,   0,   0,   0,   -20, -40],
    [-30, 0,   10,  15,  15,  10,  0,   -30],
    [-30, 5,   15,  20,  20,  15,  5,   -30],
    [-30, 0,   15,  20,  20,  15,  0,   -30],
    [-30, 5,   10,  15,  15,  10,  5,   -30],
    [-40, -20, 0,   5,   5,   0,   -20, -40],
    [-50, -40, -30, -30, -30, -30, -40, -50],
]

BISHOP_TABLE: list[list[int]] = [
    [-20, -10, -10, -10, -10, -10, -10, -20],
    [-10, 0,   0,   0,   0,   0,   0,   -10],
    [-10, 0,   5,   10,  10,  5,   0,   -10],
    [-10, 5,   5,   10,  10,  5,   5,   -10],
    [-10, 0,   10,  10,  10,  10,  0,   -10],
    [-10, 10,  10,  10,  10,  10,  10,  -10],
    [-10, 5,   0,   0,   0,   0,   5,   -10],
    [-20, -10, -10, -10, -10, -10, -10, -20],
]

ROOK_TABLE: list[list[int]] = [
    [0,   0,   0,   0,   0,   0,   0,   0],
    [5,   10,  10,  10,  10,  10,  10,  5],
    [-5,  0,   0,   0,   0,   0,   0,   -5],
    [-5,  0,   0,   0,   0,   0,   0,   -5],
    [-5,  0,   0,   0,   0,   0,   0,   -5],
    [-5,  0,   0,   0,   0,   0,   0,   -5],
    [-5,  0,   0,   0,   0,   0,   0,   -5],
    [0,   0,   0,   5,   5,   0,   0,   0],
]

QUEEN_TABLE: list[list[int]] = [
    [-20, -10, -10, -5,  -5,  -10, -10, -20],
    [-10, 0,   0,   0,   0,   0,   0,   -10],
    [-10, 0,   5,   5,   5,   5,   0,   -10],
    [-5,  0,   5,   5,   5,   5,   0,   -5],
    [0,   0,   5,   5,   5,   5,   0,   -5],
    [-10, 5,   5,   5,   5,   5,   0,   -10],
    [-10, 0,   5,   0,   0,   0,   0,   -10],
    [-20, -10, -10, -5,  -5,  -10, -10, -20],
]

KING_TABLE: list[list[int]] = [
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-30, -40, -40, -50, -50, -40, -40, -30],
    [-20, -30, -30, -40, -40, -30, -30, -20],
    [-10, -20, -20, -20, -20, -20, -20, -10],
    [20,  20,  0,   0,   0,   0,   20,  20],
    [20,  30,  10,  0,   0,   10,  30,  20],
]

PIECE_SQUARE_TABLES: dict[int, list[list[int]]] = {
    chess.PAWN:   PAWN_TABLE,
    chess.KNIGHT: KNIGHT_TABLE,
    chess.BISHOP: BISHOP_TABLE,
    chess.ROOK:   ROOK_TABLE,
    chess.QUEEN:  QUEEN_TABLE,
    chess.KING:   KING_TABLE,
}

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------

CHECKMATE_SCORE: int = 10_000
DRAW_SCORE: int = 0

# ---------------------------------------------------------------------------
# Positional weights
# ---------------------------------------------------------------------------

MOBILITY_WEIGHT: float = 0.1        # per legal move of the side to move
KING_SHIELD_BONUS: int = 10         # per own pawn in front of the king
DOUBLED_PAWN_PENALTY: int = 10      # per pawn beyond the first on a file
ISOLATED_PAWN_PENALTY: int = 15     # flat, per file holding isolated pawns

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------

# YIELD_EVERY_NODES: how often (in nodes) the search suspends itself so the
# event loop can run other pending work. Never changes the search result.
YIELD_EVERY_NODES: int = 500

# ---------------------------------------------------------------------------
# Difficulty
# ---------------------------------------------------------------------------

# Chance that the easy policy picks among captures instead of all moves.
EASY_CAPTURE_BIAS: float = 0.3

MEDIUM_DEPTH: int = 2
HARD_DEPTH: int = 3
GRANDMASTER_DEPTH: int = 4
