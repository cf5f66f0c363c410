"""
Main game orchestration - ties all components together.

A Game is an immutable value. Every action returns a new Game; the original
is never modified. Actions that take table input return the new game together
with a ValidationResult, and hand back the unchanged game when validation
fails. Calling an action the current state does not allow raises
GameStateError.
"""
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from shared.constants import ALLOWED_PLAYER_COUNTS, TOTAL_ROUNDS
from shared.enums import GameStatus, RoundStatus, NextAction

from .call_order import get_calling_order, get_current_caller_index
from .dealer import get_dealer_for_round
from .errors import GameStateError, InvalidPlayerCountError, SeatingError
from .models import PlayerCall, PlayerResult, Round, RoundScore, StakesConfig
from .player import Player
from .round_manager import create_round, calculate_round_scores, get_cumulative_scores
from .stakes import PlayerPayout, calculate_payouts, rank_scores
from .validator import (
    ValidationResult, validate_calls, validate_results,
    validate_player_names, validate_stakes
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Game:
    """
    A Call Break game from setup to the end of round 5.
    """

    players: Tuple[Player, ...] = ()
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: datetime = field(default_factory=_utcnow)
    completed_at: Optional[datetime] = None
    status: GameStatus = GameStatus.SETUP
    rounds: Tuple[Round, ...] = ()
    current_round: int = 1
    initial_dealer_index: int = 0
    stakes: Optional[StakesConfig] = None

    # =========== Queries ===========

    @property
    def player_count(self) -> int:
        return len(self.players)

    @property
    def is_complete(self) -> bool:
        return self.status == GameStatus.COMPLETED

    @property
    def current_round_record(self) -> Optional[Round]:
        """The round being played, if the game has started."""
        index = self.current_round - 1
        if 0 <= index < len(self.rounds):
            return self.rounds[index]
        return None

    @property
    def current_dealer(self) -> Optional[Player]:
        round_ = self.current_round_record
        if round_ is None:
            return None
        return self.player_at_seat(round_.dealer_index)

    @property
    def calling_order(self) -> List[Player]:
        """Players of the current round in the order they call."""
        round_ = self.current_round_record
        if round_ is None:
            return []
        return [
            self.player_at_seat(seat)
            for seat in get_calling_order(round_.dealer_index, self.player_count)
        ]

    def next_caller(self, calls_made: Optional[int] = None) -> Optional[Player]:
        """
        Player whose turn it is to call.

        Args:
            calls_made: Calls collected so far at the table; defaults to the
                calls stored on the current round
        """
        round_ = self.current_round_record
        if round_ is None:
            return None
        if calls_made is None and round_.status != RoundStatus.PENDING:
            return None
        made = round_.calls_made if calls_made is None else calls_made
        seat = get_current_caller_index(round_.dealer_index, self.player_count, made)
        return self.player_at_seat(seat) if seat is not None else None

    @property
    def cumulative_scores(self) -> Dict[str, float]:
        return get_cumulative_scores(self.rounds)

    @property
    def final_scores(self) -> Tuple[RoundScore, ...]:
        """Score lines of the most recently scored round."""
        for round_ in reversed(self.rounds):
            if round_.scores:
                return round_.scores
        return ()

    @property
    def standings(self) -> List[RoundScore]:
        return rank_scores(self.final_scores)

    @property
    def winner(self) -> Optional[Player]:
        """Top scorer of a completed game."""
        if not self.is_complete or not self.final_scores:
            return None
        return self.player_by_id(self.standings[0].player_id)

    def payouts(self) -> Optional[List[PlayerPayout]]:
        """Money settlement for a completed game played for stakes."""
        if not self.is_complete or self.stakes is None:
            return None
        return calculate_payouts(self.final_scores, self.stakes)

    @property
    def next_action(self) -> NextAction:
        """What the table has to do next (used when resuming a saved game)."""
        if self.status == GameStatus.SETUP:
            return NextAction.SETUP
        if self.status == GameStatus.COMPLETED:
            return NextAction.NONE

        round_ = self.current_round_record
        if round_ is None or round_.status == RoundStatus.PENDING:
            return NextAction.ENTER_CALLS
        if round_.status == RoundStatus.CALLS_ENTERED:
            return NextAction.ENTER_RESULTS
        return NextAction.ADVANCE_ROUND

    def player_by_id(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def player_at_seat(self, seating_position: int) -> Optional[Player]:
        return next((p for p in self.players if p.seating_position == seating_position), None)

    # =========== Guards ===========

    def _require_status(self, action: str, status: GameStatus) -> None:
        if self.status != status:
            raise GameStateError(action, f"game is {self.status.value}, expected {status.value}")

    def _require_round_status(self, action: str, status: RoundStatus) -> Round:
        self._require_status(action, GameStatus.IN_PROGRESS)
        round_ = self.current_round_record
        if round_ is None:
            raise GameStateError(action, f"round {self.current_round} does not exist")
        if round_.status != status:
            raise GameStateError(
                action,
                f"round {round_.round_number} is {round_.status.value}, expected {status.value}"
            )
        return round_

    def _unknown_player_errors(self, entries: Sequence) -> List[str]:
        known = {p.id for p in self.players}
        return [
            f"Unknown player ID: {entry.player_id}"
            for entry in entries
            if entry.player_id not in known
        ]

    def _replace_current_round(self, round_: Round) -> "Game":
        rounds = list(self.rounds)
        rounds[self.current_round - 1] = round_
        return replace(self, rounds=tuple(rounds))

    # =========== Setup ===========

    @classmethod
    def initialize(cls, player_count: int) -> "Game":
        """Create a game in setup with blank names at sequential seats."""
        if player_count not in ALLOWED_PLAYER_COUNTS:
            raise InvalidPlayerCountError(
                f"Call Break is played with 4 or 5 players, got {player_count}"
            )
        players = tuple(Player(name="", seating_position=i) for i in range(player_count))
        return cls(players=players)

    def set_players(self, players: Sequence[Player]) -> "Game":
        """Replace the player list; seats must be dense and the count unchanged."""
        self._require_status("set players", GameStatus.SETUP)

        if len(players) != self.player_count:
            raise InvalidPlayerCountError(
                f"Game was set up for {self.player_count} players, got {len(players)}"
            )

        ordered = sorted(players, key=lambda p: p.seating_position)
        if [p.seating_position for p in ordered] != list(range(len(ordered))):
            raise SeatingError("Seating positions must be 0..N-1 with no gaps")
        if len({p.id for p in ordered}) != len(ordered):
            raise SeatingError("Player IDs must be unique")

        return replace(self, players=tuple(ordered))

    def set_player_names(self, names: Sequence[str]) -> Tuple["Game", ValidationResult]:
        """Name the players seat by seat. Duplicate names only warn."""
        self._require_status("set player names", GameStatus.SETUP)

        if len(names) != self.player_count:
            raise InvalidPlayerCountError(
                f"Expected {self.player_count} names, got {len(names)}"
            )

        validation = validate_player_names(names)
        if not validation.valid:
            return self, validation

        players = tuple(
            player.with_name(name.strip())
            for player, name in zip(self.players, names)
        )
        return replace(self, players=players), validation

    def reorder_seating(self, player_ids: Sequence[str]) -> "Game":
        """Seat players in the given order, renumbering seats from 0."""
        self._require_status("reorder seating", GameStatus.SETUP)

        if sorted(player_ids) != sorted(p.id for p in self.players):
            raise SeatingError("New seating must contain every player exactly once")

        players = tuple(
            self.player_by_id(player_id).at_seat(seat)
            for seat, player_id in enumerate(player_ids)
        )
        return replace(self, players=players)

    def move_seat(self, from_index: int, to_index: int) -> "Game":
        """
        Move the player at one seat to another, shifting the others.

        The chosen initial dealer stays with the same player.
        """
        self._require_status("move seat", GameStatus.SETUP)

        count = self.player_count
        if not (0 <= from_index < count and 0 <= to_index < count):
            raise SeatingError(f"Seat must be between 0 and {count - 1}")

        order = [p.id for p in self.players]
        dealer_id = order[self.initial_dealer_index]
        order.insert(to_index, order.pop(from_index))

        moved = self.reorder_seating(order)
        return replace(moved, initial_dealer_index=order.index(dealer_id))

    def set_initial_dealer(self, dealer_index: int) -> "Game":
        """Choose the seat that deals round 1."""
        self._require_status("set initial dealer", GameStatus.SETUP)

        if not 0 <= dealer_index < self.player_count:
            raise SeatingError(f"Dealer seat must be between 0 and {self.player_count - 1}")
        return replace(self, initial_dealer_index=dealer_index)

    def set_stakes(self, stakes: Optional[StakesConfig]) -> Tuple["Game", ValidationResult]:
        """Set (or clear with None) the money table for this game."""
        self._require_status("set stakes", GameStatus.SETUP)

        if stakes is None:
            return replace(self, stakes=None), ValidationResult.success()

        validation = validate_stakes(stakes, self.player_count)
        if not validation.valid:
            return self, validation
        return replace(self, stakes=stakes), validation

    def start(self) -> Tuple["Game", ValidationResult]:
        """Start play: every player needs a name, round 1 is dealt."""
        self._require_status("start game", GameStatus.SETUP)

        validation = validate_player_names([p.name for p in self.players])
        if not validation.valid:
            return self, validation

        first_round = create_round(
            1,
            get_dealer_for_round(self.initial_dealer_index, 1, self.player_count)
        )
        started = replace(
            self,
            status=GameStatus.IN_PROGRESS,
            rounds=(first_round,),
            current_round=1,
        )
        return started, validation

    # =========== Rounds ===========

    def enter_calls(self, calls: Sequence[PlayerCall]) -> Tuple["Game", ValidationResult]:
        """Record every player's call for the current round."""
        round_ = self._require_round_status("enter calls", RoundStatus.PENDING)

        calls = tuple(calls)
        validation = validate_calls(calls, self.player_count)
        unknown = self._unknown_player_errors(calls)
        if unknown:
            validation = ValidationResult.from_errors(validation.errors + tuple(unknown))
        if not validation.valid:
            return self, validation

        updated = replace(round_, calls=calls, status=RoundStatus.CALLS_ENTERED)
        return self._replace_current_round(updated), validation

    def enter_results(self, results: Sequence[PlayerResult]) -> Tuple["Game", ValidationResult]:
        """Record tricks won and score the current round."""
        round_ = self._require_round_status("enter results", RoundStatus.CALLS_ENTERED)

        results = tuple(results)
        validation = validate_results(results, self.player_count)
        unknown = self._unknown_player_errors(results)
        if unknown:
            validation = ValidationResult.from_errors(validation.errors + tuple(unknown))
        if not validation.valid:
            return self, validation

        previous_scores = get_cumulative_scores(self.rounds[:self.current_round - 1])
        scores = calculate_round_scores(self.players, round_.calls, results, previous_scores)

        updated = replace(
            round_,
            results=results,
            scores=tuple(scores),
            status=RoundStatus.COMPLETED,
        )
        return self._replace_current_round(updated), validation

    def advance_round(self) -> "Game":
        """Deal the next round, or finish the game after the last one."""
        self._require_round_status("advance round", RoundStatus.COMPLETED)

        if self.current_round >= TOTAL_ROUNDS:
            return replace(self, status=GameStatus.COMPLETED, completed_at=_utcnow())

        next_number = self.current_round + 1
        dealer_index = get_dealer_for_round(
            self.initial_dealer_index, next_number, self.player_count
        )
        return replace(
            self,
            current_round=next_number,
            rounds=self.rounds + (create_round(next_number, dealer_index),),
        )

    def restart_with_same_players(self) -> "Game":
        """
        Start a brand-new game with the same table.

        Players, initial dealer and stakes carry over; the new game gets its
        own id and creation time and begins at round 1. Archiving this game
        is up to the caller.
        """
        if self.status == GameStatus.SETUP:
            raise GameStateError("restart game", "game has not started yet")

        first_round = create_round(
            1,
            get_dealer_for_round(self.initial_dealer_index, 1, self.player_count)
        )
        return Game(
            players=self.players,
            status=GameStatus.IN_PROGRESS,
            rounds=(first_round,),
            current_round=1,
            initial_dealer_index=self.initial_dealer_index,
            stakes=self.stakes,
        )

    # =========== Serialization ===========

    def to_dict(self) -> dict:
        """Convert game to dictionary for saving."""
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "completed_at": self.completed_at.isoformat() if self.completed_at else None,
            "status": self.status.value,
            "players": [p.to_dict() for p in self.players],
            "rounds": [r.to_dict() for r in self.rounds],
            "current_round": self.current_round,
            "initial_dealer_index": self.initial_dealer_index,
            "stakes": self.stakes.to_dict() if self.stakes else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Game":
        """Create game from dictionary. Fields added later fall back to defaults."""
        completed_at = data.get("completed_at")
        stakes = data.get("stakes")
        return cls(
            id=data["id"],
            created_at=datetime.fromisoformat(data["created_at"]),
            completed_at=datetime.fromisoformat(completed_at) if completed_at else None,
            status=GameStatus(data["status"]),
            players=tuple(Player.from_dict(p) for p in data.get("players", [])),
            rounds=tuple(Round.from_dict(r) for r in data.get("rounds", [])),
            current_round=data.get("current_round", 1),
            initial_dealer_index=data.get("initial_dealer_index", 0),
            stakes=StakesConfig.from_dict(stakes) if stakes else None,
        )

    def get_state(self) -> dict:
        """
        Game state with derived values, for a presentation layer.
        """
        dealer = self.current_dealer
        caller = self.next_caller()
        winner = self.winner
        payouts = self.payouts()
        return {
            **self.to_dict(),
            "next_action": self.next_action.value,
            "current_dealer_id": dealer.id if dealer else None,
            "next_caller_id": caller.id if caller else None,
            "calling_order": [p.id for p in self.calling_order],
            "cumulative_scores": self.cumulative_scores,
            "winner_id": winner.id if winner else None,
            "payouts": [p.to_dict() for p in payouts] if payouts is not None else None,
        }
