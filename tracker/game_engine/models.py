"""
Round-level records: calls, results, scores, and the stakes table.

All records are immutable. A Round is replaced by value as calls and then
results arrive.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

from shared.enums import RoundStatus


@dataclass(frozen=True)
class PlayerCall:
    """A player's bid for the round."""
    player_id: str
    call: int

    def to_dict(self) -> dict:
        return {"player_id": self.player_id, "call": self.call}

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerCall":
        return cls(player_id=data["player_id"], call=data["call"])


@dataclass(frozen=True)
class PlayerResult:
    """Tricks a player actually won in the round."""
    player_id: str
    tricks_won: int

    def to_dict(self) -> dict:
        return {"player_id": self.player_id, "tricks_won": self.tricks_won}

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerResult":
        return cls(player_id=data["player_id"], tricks_won=data["tricks_won"])


@dataclass(frozen=True)
class RoundScore:
    """Derived score line for one player in one round."""
    player_id: str
    player_name: str
    call: int
    result: int
    round_score: float
    cumulative_score: float
    call_met: bool
    extra_tricks: int

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "player_name": self.player_name,
            "call": self.call,
            "result": self.result,
            "round_score": self.round_score,
            "cumulative_score": self.cumulative_score,
            "call_met": self.call_met,
            "extra_tricks": self.extra_tricks,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "RoundScore":
        return cls(
            player_id=data["player_id"],
            player_name=data["player_name"],
            call=data["call"],
            result=data["result"],
            round_score=data["round_score"],
            cumulative_score=data["cumulative_score"],
            call_met=data["call_met"],
            extra_tricks=data["extra_tricks"],
        )


@dataclass(frozen=True)
class Round:
    """One deal-and-play cycle."""

    round_number: int
    dealer_index: int
    status: RoundStatus = RoundStatus.PENDING
    calls: Tuple[PlayerCall, ...] = ()
    results: Tuple[PlayerResult, ...] = ()
    scores: Tuple[RoundScore, ...] = ()

    @property
    def is_completed(self) -> bool:
        return self.status == RoundStatus.COMPLETED

    @property
    def calls_made(self) -> int:
        return len(self.calls)

    def call_for(self, player_id: str) -> Optional[PlayerCall]:
        """Find a player's call, if entered."""
        return next((c for c in self.calls if c.player_id == player_id), None)

    def result_for(self, player_id: str) -> Optional[PlayerResult]:
        """Find a player's result, if entered."""
        return next((r for r in self.results if r.player_id == player_id), None)

    def score_for(self, player_id: str) -> Optional[RoundScore]:
        """Find a player's score line, if the round has been scored."""
        return next((s for s in self.scores if s.player_id == player_id), None)

    def to_dict(self) -> dict:
        return {
            "round_number": self.round_number,
            "dealer_index": self.dealer_index,
            "status": self.status.value,
            "calls": [c.to_dict() for c in self.calls],
            "results": [r.to_dict() for r in self.results],
            "scores": [s.to_dict() for s in self.scores],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Round":
        return cls(
            round_number=data["round_number"],
            dealer_index=data["dealer_index"],
            status=RoundStatus(data.get("status", RoundStatus.PENDING.value)),
            calls=tuple(PlayerCall.from_dict(c) for c in data.get("calls", [])),
            results=tuple(PlayerResult.from_dict(r) for r in data.get("results", [])),
            scores=tuple(RoundScore.from_dict(s) for s in data.get("scores", [])),
        )


@dataclass(frozen=True)
class StakesConfig:
    """
    Money table settled at the end of a game.

    amounts[0] is paid by the lowest finisher, amounts[1] by the next lowest,
    and so on up to second place. The winner pays nothing and collects the pot.
    """
    currency: str
    amounts: Tuple[float, ...] = field(default_factory=tuple)

    @property
    def total_pot(self) -> float:
        return sum(self.amounts)

    def to_dict(self) -> dict:
        return {"currency": self.currency, "amounts": list(self.amounts)}

    @classmethod
    def from_dict(cls, data: dict) -> "StakesConfig":
        return cls(currency=data["currency"], amounts=tuple(data.get("amounts", [])))
