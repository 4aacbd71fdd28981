# ============================================================================
# BOARD
# ============================================================================
DEFAULT_FIELD_SIZE = 15
MIN_FIELD_SIZE = 3
DEFAULT_TILE_TYPES = 5
DEFAULT_MOVES = 30

# A run must be at least this long to count as a match.
MIN_RUN_LENGTH = 3


# ============================================================================
# SCORING
# ============================================================================
# Points per run length; anything longer than the largest key scores LONG_RUN_SCORE.
RUN_SCORES = {3: 1, 4: 2}
LONG_RUN_SCORE = 6


# ============================================================================
# DEADLOCK RECOVERY
# ============================================================================
# Consecutive reshuffles tried before the board is regenerated from scratch.
DEFAULT_MAX_RESHUFFLES = 10
# Full regenerations tried before giving up on producing a playable board.
DEFAULT_MAX_REGENERATIONS = 200
