"""
Score arithmetic for Call Break.

Round scoring:
    - Call met exactly: +call
    - Call exceeded: +call plus 0.1 per extra trick
    - Call failed: -call

Cumulative scores carry the overtrick bonus in their fractional part. The
fraction is counted in hundredths, and every 13 hundredths roll over into one
whole point. Scores are kept to two decimals.
"""
from decimal import Decimal, ROUND_HALF_UP

from shared.constants import OVERTRICK_BONUS, OVERFLOW_UNITS, SCORE_PRECISION


def calculate_round_score(call: int, result: int) -> float:
    """
    Calculate a player's score for one round.

    Args:
        call: The player's call (1-13)
        result: Tricks actually won (0-13)

    Returns:
        Round score, negative when the call was not made
    """
    if result < call:
        return -call
    if result == call:
        return call
    return call + OVERTRICK_BONUS * (result - call)


def apply_decimal_overflow(score: float) -> float:
    """
    Roll complete 0.13 blocks of the fractional part into whole points.

    The fraction is measured above floor(score), so a negative base with
    bonus on top keeps its bonus. Example: 8.15 -> 9.02.
    """
    hundredths = int(round(score * 100))
    base, fraction = divmod(hundredths, 100)
    carried, remainder = divmod(fraction, OVERFLOW_UNITS)
    return round(base + carried + remainder / 100, SCORE_PRECISION)


def calculate_cumulative_score(previous_cumulative: float, round_score: float) -> float:
    """Add a round score to the running total, then normalise the overflow."""
    return apply_decimal_overflow(previous_cumulative + round_score)


def format_score(score: float) -> str:
    """Format a score with one decimal place ("3.0", "-5.0", "4.2")."""
    rounded = Decimal(str(score)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    return f"{rounded:.1f}"
