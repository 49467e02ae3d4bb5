"""
Engine constants: piece values, terminal scores, and search parameters.

All numeric constants used by the evaluator and the search live here so the
rest of the package never introduces its own magic numbers.

Piece values use whole pawn units (1 pawn = 1), not centipawns. The evaluator
only counts material, so finer granularity would carry no information.
"""

import chess

# ---------------------------------------------------------------------------
# Piece values (pawn units)
# ---------------------------------------------------------------------------
# The king is never captured in a legal game, so it carries no material value.

PAWN_VALUE: int = 1
KNIGHT_VALUE: int = 3
BISHOP_VALUE: int = 3
ROOK_VALUE: int = 5
QUEEN_VALUE: int = 9
KING_VALUE: int = 0

PIECE_VALUES: dict[int, int] = {
    chess.PAWN:   PAWN_VALUE,
    chess.KNIGHT: KNIGHT_VALUE,
    chess.BISHOP: BISHOP_VALUE,
    chess.ROOK:   ROOK_VALUE,
    chess.QUEEN:  QUEEN_VALUE,
    chess.KING:   KING_VALUE,
}

# ---------------------------------------------------------------------------
# Terminal scores
# ---------------------------------------------------------------------------
# A decisive result replaces the material sum entirely. 200 is far above the
# largest possible material swing (39 per side), so a mate always dominates.

WIN_SCORE: int = 200
DRAW_SCORE: int = 0

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------

# Tolerance for "is this value better" comparisons. Both search variants use
# the same value so they always agree on the chosen move.
EPSILON: float = 1e-5

# Depth used by the CLI, UCI and web layers when none is given.
DEFAULT_DEPTH: int = 3

# Full-width Python search grows quickly; the web API refuses deeper requests.
MAX_WEB_DEPTH: int = 4

# Search algorithm used when none is given. See search.create_search().
DEFAULT_ALGORITHM: str = "alphabeta"

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------

BOARD_SIZE: int = 8

# Back-rank layout by file, shared by both colours.
BACK_RANK: tuple[int, ...] = (
    chess.ROOK,
    chess.KNIGHT,
    chess.BISHOP,
    chess.QUEEN,
    chess.KING,
    chess.BISHOP,
    chess.KNIGHT,
    chess.ROOK,
)
