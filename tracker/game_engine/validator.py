"""
Validation of user input against Call Break rules.

Every validator collects all problems it finds instead of stopping at the
first one, so the table can fix everything in a single pass.
"""
from dataclasses import dataclass
import math
from typing import Iterable, Sequence, Tuple

from shared.constants import (
    ALLOWED_PLAYER_COUNTS, MIN_CALL, MAX_CALL, MIN_TRICKS, MAX_TRICKS,
    TRICKS_PER_ROUND, WARNING_PREFIX
)

from .models import PlayerCall, PlayerResult, StakesConfig


@dataclass(frozen=True)
class ValidationResult:
    """Result of validating a batch of input."""
    valid: bool
    errors: Tuple[str, ...] = ()

    @property
    def warnings(self) -> Tuple[str, ...]:
        """Entries that are reported but do not block the action."""
        return tuple(e for e in self.errors if is_warning(e))

    @property
    def blocking_errors(self) -> Tuple[str, ...]:
        return tuple(e for e in self.errors if not is_warning(e))

    @property
    def message(self) -> str:
        return ", ".join(self.errors)

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(valid=True)

    @classmethod
    def failure(cls, *errors: str) -> "ValidationResult":
        return cls(valid=False, errors=tuple(errors))

    @classmethod
    def from_errors(cls, errors: Iterable[str]) -> "ValidationResult":
        """Build a result where only non-warning entries make it invalid."""
        errors = tuple(errors)
        return cls(valid=not any(not is_warning(e) for e in errors), errors=errors)


def is_warning(entry: str) -> bool:
    """Check whether a validation entry is warning-class."""
    return entry.startswith(WARNING_PREFIX)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_whole_number(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def _check_shape(entries: Sequence, expected: int, noun: str) -> list[str]:
    """Count and duplicate checks shared by calls and results."""
    errors = []
    if len(entries) != expected:
        errors.append(f"Expected {expected} {noun}, got {len(entries)}")

    player_ids = {entry.player_id for entry in entries}
    if len(player_ids) != len(entries):
        errors.append("Duplicate player IDs found")
    return errors


def validate_calls(calls: Sequence[PlayerCall], expected_player_count: int) -> ValidationResult:
    """
    Validate the calls for a round.

    Rules:
        - One call per player, no duplicate player IDs
        - Each call is a whole number between 1 and 13
    """
    errors = _check_shape(calls, expected_player_count, "calls")

    for index, entry in enumerate(calls):
        if _is_number(entry.call) and not MIN_CALL <= entry.call <= MAX_CALL:
            errors.append(f"Player {index + 1}: Call must be between {MIN_CALL} and {MAX_CALL}")
        if not _is_whole_number(entry.call):
            errors.append(f"Player {index + 1}: Call must be a whole number")

    return ValidationResult.from_errors(errors)


def validate_results(results: Sequence[PlayerResult], expected_player_count: int) -> ValidationResult:
    """
    Validate the results for a round.

    Rules:
        - One result per player, no duplicate player IDs
        - Each result is a whole number between 0 and 13
        - Results add up to exactly 13 tricks
    """
    errors = _check_shape(results, expected_player_count, "results")

    total = 0
    for index, entry in enumerate(results):
        if _is_number(entry.tricks_won):
            if not MIN_TRICKS <= entry.tricks_won <= MAX_TRICKS:
                errors.append(
                    f"Player {index + 1}: Result must be between {MIN_TRICKS} and {MAX_TRICKS}"
                )
            total += entry.tricks_won
        if not _is_whole_number(entry.tricks_won):
            errors.append(f"Player {index + 1}: Result must be a whole number")

    if results and total != TRICKS_PER_ROUND:
        errors.append(f"Total tricks must equal {TRICKS_PER_ROUND} (current: {total:g})")

    return ValidationResult.from_errors(errors)


def validate_player_names(names: Sequence[str]) -> ValidationResult:
    """
    Validate player names.

    Empty names are errors. Names that collide (ignoring case and
    surrounding spaces) only produce a warning.
    """
    errors = []
    for index, name in enumerate(names):
        if not name or not name.strip():
            errors.append(f"Player {index + 1}: Name cannot be empty")

    normalized = {(name or "").strip().lower() for name in names}
    if len(normalized) != len(names):
        errors.append(f"{WARNING_PREFIX} Some players have the same name")

    return ValidationResult.from_errors(errors)


def validate_player_count(count: int) -> ValidationResult:
    """Only 4 or 5 player tables are supported."""
    if count not in ALLOWED_PLAYER_COUNTS:
        allowed = " or ".join(str(c) for c in ALLOWED_PLAYER_COUNTS)
        return ValidationResult.failure(f"Player count must be {allowed}, got {count}")
    return ValidationResult.success()


def validate_stakes(stakes: StakesConfig, player_count: int) -> ValidationResult:
    """
    Validate a stakes table for the given table size.

    Everyone except the winner pays, so there is one amount per non-winner.
    """
    errors = []
    if not stakes.currency or not stakes.currency.strip():
        errors.append("Currency cannot be empty")

    expected = player_count - 1
    if len(stakes.amounts) != expected:
        errors.append(f"Expected {expected} stake amounts, got {len(stakes.amounts)}")

    for index, amount in enumerate(stakes.amounts):
        if not _is_number(amount) or not math.isfinite(amount):
            errors.append(f"Stake {index + 1}: Amount must be a number")
        elif amount < 0:
            errors.append(f"Stake {index + 1}: Amount cannot be negative")

    return ValidationResult.from_errors(errors)
