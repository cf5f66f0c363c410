"""
Money settlement at the end of a game.
"""
from dataclasses import dataclass, replace
from typing import List, Sequence

from shared.constants import DEFAULT_STAKE_STEP

from .models import RoundScore, StakesConfig


@dataclass(frozen=True)
class PlayerPayout:
    """Final standing and money movement for one player."""
    player_id: str
    player_name: str
    rank: int  # 1 = winner
    score: float
    amount_paid: float  # Negative when paying, positive when collecting

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "player_name": self.player_name,
            "rank": self.rank,
            "score": self.score,
            "amount_paid": self.amount_paid,
        }


def rank_scores(final_scores: Sequence[RoundScore]) -> List[RoundScore]:
    """Order score lines from highest to lowest cumulative score (stable)."""
    return sorted(final_scores, key=lambda s: s.cumulative_score, reverse=True)


def calculate_payouts(final_scores: Sequence[RoundScore], stakes: StakesConfig) -> List[PlayerPayout]:
    """
    Calculate money payouts from final standings.

    Players are ranked by cumulative score; ties keep their seating order.
    The player at rank r (r >= 2) pays stakes.amounts[N - r], so last place
    pays amounts[0]. The winner collects everything that was paid.

    Args:
        final_scores: Score lines from the last round
        stakes: Stakes configuration

    Returns:
        Payouts ordered by rank
    """
    ranked = rank_scores(final_scores)
    count = len(ranked)

    payouts: List[PlayerPayout] = []
    total_pot = 0
    for index, score in enumerate(ranked):
        rank = index + 1
        amount = 0
        if rank > 1:
            payment_index = count - rank
            if payment_index < len(stakes.amounts):
                amount = stakes.amounts[payment_index]
            total_pot += amount

        payouts.append(PlayerPayout(
            player_id=score.player_id,
            player_name=score.player_name,
            rank=rank,
            score=score.cumulative_score,
            amount_paid=-amount,
        ))

    if payouts:
        payouts[0] = replace(payouts[0], amount_paid=total_pot)

    return payouts


def format_money(amount: float, currency: str) -> str:
    """Format a signed amount with its currency ("+$30.00", "-$5.00")."""
    sign = "+" if amount >= 0 else "-"
    return f"{sign}{currency}{abs(amount):.2f}"


def default_stake_amounts(player_count: int, step: float = DEFAULT_STAKE_STEP) -> List[float]:
    """Default table offered during setup: last place pays the most."""
    return [(player_count - 1 - i) * step for i in range(player_count - 1)]
