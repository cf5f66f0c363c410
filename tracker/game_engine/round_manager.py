"""
Round construction and per-round scoring.
"""
from typing import Dict, Iterable, List, Mapping, Sequence

from shared.enums import RoundStatus

from .errors import MissingEntryError
from .models import PlayerCall, PlayerResult, Round, RoundScore
from .player import Player
from .scoring import calculate_round_score, calculate_cumulative_score


def create_round(round_number: int, dealer_index: int) -> Round:
    """Create a fresh round waiting for calls."""
    return Round(
        round_number=round_number,
        dealer_index=dealer_index,
        status=RoundStatus.PENDING,
    )


def calculate_round_scores(
    players: Sequence[Player],
    calls: Sequence[PlayerCall],
    results: Sequence[PlayerResult],
    previous_scores: Mapping[str, float]
) -> List[RoundScore]:
    """
    Calculate every player's score line for a round.

    Calls and results must already have passed validation; a missing entry
    here is a caller bug and raises MissingEntryError.

    Args:
        players: Players in seating order
        calls: Calls for the round
        results: Results for the round
        previous_scores: Cumulative score per player ID before this round

    Returns:
        One RoundScore per player, in the order of players
    """
    calls_by_player = {c.player_id: c for c in calls}
    results_by_player = {r.player_id: r for r in results}

    scores = []
    for player in players:
        call = calls_by_player.get(player.id)
        if call is None:
            raise MissingEntryError(player.display_name, "call")
        result = results_by_player.get(player.id)
        if result is None:
            raise MissingEntryError(player.display_name, "result")

        round_score = calculate_round_score(call.call, result.tricks_won)
        previous = previous_scores.get(player.id, 0)

        scores.append(RoundScore(
            player_id=player.id,
            player_name=player.display_name,
            call=call.call,
            result=result.tricks_won,
            round_score=round_score,
            cumulative_score=calculate_cumulative_score(previous, round_score),
            call_met=result.tricks_won == call.call,
            extra_tricks=max(0, result.tricks_won - call.call),
        ))

    return scores


def get_cumulative_scores(rounds: Iterable[Round]) -> Dict[str, float]:
    """
    Latest cumulative score per player ID.

    Rounds are read in order, so the last scored round wins.
    """
    scores: Dict[str, float] = {}
    for round_ in rounds:
        for score in round_.scores:
            scores[score.player_id] = score.cumulative_score
    return scores
