"""
Enumerations used throughout the tracker.
"""
from enum import Enum


class GameStatus(str, Enum):
    """Lifecycle of a game. Only ever moves forward."""
    SETUP = "setup"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"


class RoundStatus(str, Enum):
    """Lifecycle of a single round."""
    PENDING = "pending"
    CALLS_ENTERED = "calls-entered"
    # Declared for stored records; the state machine goes straight from
    # CALLS_ENTERED to COMPLETED when results are accepted.
    RESULTS_ENTERED = "results-entered"
    COMPLETED = "completed"


class NextAction(str, Enum):
    """What the table has to do next to move a game forward."""
    SETUP = "SETUP"
    ENTER_CALLS = "ENTER_CALLS"
    ENTER_RESULTS = "ENTER_RESULTS"
    ADVANCE_ROUND = "ADVANCE_ROUND"
    NONE = "NONE"
