"""
Exceptions for contract violations in the game engine.

Bad user input (calls, results, names, stakes) is never raised; it is
reported through a ValidationResult. These exceptions mean the caller
invoked an operation the current state does not allow.
"""


class CallBreakError(Exception):
    """Base exception for game engine errors."""

    pass


class GameStateError(CallBreakError):
    """Raised when the game or round is in the wrong state for an action."""

    def __init__(self, action: str, reason: str):
        self.action = action
        self.reason = reason
        super().__init__(f"Cannot {action}: {reason}")


class MissingEntryError(CallBreakError):
    """Raised when a player's call or result is absent during scoring."""

    def __init__(self, player_name: str, missing: str):
        self.player_name = player_name
        self.missing = missing
        super().__init__(f"Missing {missing} for player {player_name}")


class InvalidPlayerCountError(CallBreakError):
    """Raised when a game is set up with an unsupported number of players."""

    pass


class SeatingError(CallBreakError):
    """Raised when a seating change does not describe the current players."""

    pass
