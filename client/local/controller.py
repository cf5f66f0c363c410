"""
Local game controller.

Holds the single active game for a presentation layer, forwards table actions
to the game engine, and saves the game after every successful change.
"""

import logging
import sqlite3
from typing import Optional, Sequence

from PyQt6.QtCore import QObject, pyqtSignal

from tracker.config import settings
from tracker.game_engine import (
    Game, GameStateError, PlayerCall, PlayerResult, StakesConfig,
    ValidationResult, default_stake_amounts, validate_player_count
)
from tracker.persistence import GameRepository, get_database
from shared.enums import GameStatus


logger = logging.getLogger(__name__)


class LocalGameController(QObject):
    """
    Controller for a Call Break scoring session on one device.

    Wraps the immutable Game and emits Qt signals for UI updates. Validation
    problems are reported and leave the game unchanged; calling an action the
    game is not ready for raises GameStateError.

    Signals:
        game_state_changed: Game state updated (state_dict)
        game_event: Something happened (event_type, event_data)
        validation_failed: Input was rejected (error_messages)
        warning_raised: Non-blocking validation warning (message)
        storage_failed: Saving, loading or deleting failed (message)
    """

    game_state_changed = pyqtSignal(dict)
    game_event = pyqtSignal(str, dict)
    validation_failed = pyqtSignal(list)
    warning_raised = pyqtSignal(str)
    storage_failed = pyqtSignal(str)

    def __init__(
        self,
        repository: Optional[GameRepository] = None,
        auto_save: Optional[bool] = None,
        parent=None
    ):
        super().__init__(parent)

        self._game: Optional[Game] = None
        self._repository = repository or GameRepository(get_database())
        self._auto_save = settings.AUTO_SAVE if auto_save is None else auto_save

    @property
    def game(self) -> Optional[Game]:
        """The current game instance."""
        return self._game

    @property
    def is_game_active(self) -> bool:
        """Whether a game is in progress."""
        return self._game is not None and self._game.status == GameStatus.IN_PROGRESS

    def get_state(self) -> dict:
        """Get the current game state."""
        if not self._game:
            return {}
        return self._game.get_state()

    def _require_game(self, action: str) -> Game:
        if self._game is None:
            raise GameStateError(action, "no game is loaded")
        return self._game

    def _emit_state(self) -> None:
        """Emit the current game state."""
        self.game_state_changed.emit(self.get_state())

    def _emit_event(self, event_type: str, data: dict) -> None:
        """Emit a game event."""
        self.game_event.emit(event_type, data)

    def _report(self, validation: ValidationResult) -> bool:
        """Emit validation problems. Returns True when the action may proceed."""
        for warning in validation.warnings:
            self.warning_raised.emit(warning)
        if not validation.valid:
            self.validation_failed.emit(list(validation.blocking_errors))
            return False
        return True

    def _apply(self, game: Game) -> None:
        """Make a new game value current, save it, and notify listeners."""
        self._game = game
        self.save_game()
        self._emit_state()

    # =========================================================================
    # Persistence
    # =========================================================================

    def save_game(self) -> bool:
        """
        Save the current game.

        Games still in setup are not stored. A failed write is reported
        through storage_failed; the in-memory game stays current either way.
        """
        if not self._game or not self._auto_save:
            return False
        if self._game.status == GameStatus.SETUP:
            return False

        try:
            self._repository.save(self._game)
        except sqlite3.Error as e:
            logger.error(f"Failed to save game {self._game.id}: {e}")
            self.storage_failed.emit("Your progress may not have been saved")
            return False

        logger.info(
            f"Game {self._game.id} saved at round {self._game.current_round} "
            f"({self._game.status.value})"
        )
        return True

    def load_active_game(self) -> bool:
        """Resume the game that was in progress, if there is one."""
        try:
            game = self._repository.find_active_game()
        except sqlite3.Error as e:
            logger.error(f"Failed to load active game: {e}")
            self.storage_failed.emit("Failed to load game")
            return False

        if game is None:
            return False

        self._game = game
        logger.info(f"Game {game.id} resumed at round {game.current_round}")
        self._emit_event("game_resumed", {
            "game_id": game.id,
            "next_action": game.next_action.value,
        })
        self._emit_state()
        return True

    def delete_active_game(self) -> bool:
        """Delete the current game's saved record and forget it."""
        game = self._require_game("delete game")

        try:
            self._repository.delete(game.id)
        except sqlite3.Error as e:
            logger.error(f"Failed to delete game {game.id}: {e}")
            self.storage_failed.emit("Failed to delete game")
            return False

        self._game = None
        logger.info(f"Game {game.id} deleted")
        self._emit_event("game_deleted", {"game_id": game.id})
        self._emit_state()
        return True

    def history(self, completed_only: bool = False) -> list[Game]:
        """Saved games for a history view, newest first."""
        try:
            if completed_only:
                return self._repository.list_completed_games()
            return self._repository.list_all_games()
        except sqlite3.Error as e:
            logger.error(f"Failed to list games: {e}")
            self.storage_failed.emit("Failed to load game history")
            return []

    # =========================================================================
    # Game Setup
    # =========================================================================

    def new_game(self, player_count: int) -> bool:
        """Set up a new game for 4 or 5 players."""
        if not self._report(validate_player_count(player_count)):
            return False

        self._apply(Game.initialize(player_count))
        logger.info(f"New {player_count}-player game {self._game.id} in setup")
        return True

    def set_player_names(self, names: Sequence[str]) -> bool:
        """Name the players seat by seat."""
        game, validation = self._require_game("set player names").set_player_names(names)
        if not self._report(validation):
            return False
        self._apply(game)
        return True

    def reorder_seating(self, player_ids: Sequence[str]) -> bool:
        """Seat players in a new order."""
        self._apply(self._require_game("reorder seating").reorder_seating(player_ids))
        return True

    def move_seat(self, from_index: int, to_index: int) -> bool:
        """Move one player to another seat; the chosen dealer follows their player."""
        self._apply(self._require_game("move seat").move_seat(from_index, to_index))
        return True

    def set_initial_dealer(self, dealer_index: int) -> bool:
        """Choose who deals the first round."""
        self._apply(self._require_game("set initial dealer").set_initial_dealer(dealer_index))
        return True

    def set_stakes(self, stakes: Optional[StakesConfig]) -> bool:
        """Play for money, or clear the stakes with None."""
        game, validation = self._require_game("set stakes").set_stakes(stakes)
        if not self._report(validation):
            return False
        self._apply(game)
        return True

    def default_stakes(self) -> StakesConfig:
        """Stakes table offered for the current table size."""
        game = self._require_game("offer stakes")
        return StakesConfig(
            currency=settings.DEFAULT_CURRENCY,
            amounts=tuple(default_stake_amounts(game.player_count)),
        )

    def start_game(self) -> bool:
        """Start round 1."""
        game, validation = self._require_game("start game").start()
        if not self._report(validation):
            return False

        self._apply(game)
        logger.info(f"Game {game.id} started with {game.player_count} players")
        self._emit_event("game_started", {
            "game_id": game.id,
            "dealer_id": game.current_dealer.id if game.current_dealer else None,
        })
        return True

    # =========================================================================
    # Game Actions
    # =========================================================================

    def enter_calls(self, calls: Sequence[PlayerCall]) -> bool:
        """Record the calls for the current round."""
        game, validation = self._require_game("enter calls").enter_calls(calls)
        if not self._report(validation):
            return False

        self._apply(game)
        self._emit_event("calls_entered", {
            "round_number": game.current_round,
            "calls": [c.to_dict() for c in game.current_round_record.calls],
        })
        return True

    def enter_results(self, results: Sequence[PlayerResult]) -> bool:
        """Record the results for the current round and score it."""
        game, validation = self._require_game("enter results").enter_results(results)
        if not self._report(validation):
            return False

        self._apply(game)
        logger.info(f"Game {game.id} round {game.current_round} scored")
        self._emit_event("round_scored", {
            "round_number": game.current_round,
            "scores": [s.to_dict() for s in game.current_round_record.scores],
        })
        return True

    def next_round(self) -> bool:
        """Move on to the next round, or finish the game after round 5."""
        game = self._require_game("advance round").advance_round()
        self._apply(game)

        if game.is_complete:
            winner = game.winner
            payouts = game.payouts()
            logger.info(f"Game {game.id} completed")
            self._emit_event("game_completed", {
                "game_id": game.id,
                "winner_id": winner.id if winner else None,
                "payouts": [p.to_dict() for p in payouts] if payouts else [],
            })
        else:
            self._emit_event("round_started", {
                "round_number": game.current_round,
                "dealer_id": game.current_dealer.id if game.current_dealer else None,
            })
        return True

    def restart_with_same_players(self) -> bool:
        """Save the current game and start a new one at the same table."""
        previous = self._require_game("restart game")
        restarted = previous.restart_with_same_players()
        self.save_game()

        self._apply(restarted)
        logger.info(f"Game {self._game.id} started as a rematch of {previous.id}")
        self._emit_event("game_started", {
            "game_id": self._game.id,
            "previous_game_id": previous.id,
        })
        return True
