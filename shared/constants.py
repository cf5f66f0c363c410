"""
Game constants for Call Break.
Scores are in points, stakes are in the configured currency.
"""

# Table size
MIN_PLAYERS = 4
MAX_PLAYERS = 5
ALLOWED_PLAYER_COUNTS = tuple(range(MIN_PLAYERS, MAX_PLAYERS + 1))

# Rounds
TOTAL_ROUNDS = 5
TRICKS_PER_ROUND = 13  # One standard deck, dealt out fully

# Calls (bids)
MIN_CALL = 1
MAX_CALL = 13
MIN_TRICKS = 0
MAX_TRICKS = 13

# Scoring
OVERTRICK_BONUS = 0.1  # Per trick won above the call
OVERFLOW_UNITS = 13  # Hundredths of bonus that roll over into one base point
SCORE_PRECISION = 2

# Validation
WARNING_PREFIX = "Warning:"

# Stakes
DEFAULT_CURRENCY = "$"
DEFAULT_STAKE_STEP = 5
