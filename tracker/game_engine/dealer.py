"""
Dealer rotation. The deal passes one seat clockwise every round.
"""


def get_next_dealer_index(current_dealer_index: int, player_count: int) -> int:
    """Seat that deals after the current dealer."""
    return (current_dealer_index + 1) % player_count


def get_dealer_for_round(initial_dealer_index: int, round_number: int, player_count: int) -> int:
    """
    Seat that deals a given round.

    Args:
        initial_dealer_index: Dealer chosen for round 1
        round_number: Round number (1-5)
        player_count: Number of seats at the table

    Returns:
        Dealer's seating position
    """
    rotations = round_number - 1
    return (initial_dealer_index + rotations) % player_count
