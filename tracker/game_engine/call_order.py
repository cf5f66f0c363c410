"""
Bidding order. The seat after the dealer calls first and the dealer calls last.
"""
from typing import List, Optional


def get_calling_order(dealer_index: int, player_count: int) -> List[int]:
    """
    Seats in the order they call.

    With the dealer at seat 2 of 4 the order is 3, 0, 1, 2.
    """
    return [(dealer_index + 1 + i) % player_count for i in range(player_count)]


def get_current_caller_index(
    dealer_index: int,
    player_count: int,
    calls_made: int
) -> Optional[int]:
    """Seat that calls next, or None once every seat has called."""
    if calls_made >= player_count:
        return None
    return get_calling_order(dealer_index, player_count)[calls_made]


def can_player_call(
    seating_position: int,
    dealer_index: int,
    player_count: int,
    calls_made: int
) -> bool:
    """Check whether the given seat is the one that calls now."""
    return get_current_caller_index(dealer_index, player_count, calls_made) == seating_position
