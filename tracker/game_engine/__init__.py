"""
Game engine package.
"""
from .player import Player
from .models import PlayerCall, PlayerResult, Round, RoundScore, StakesConfig
from .errors import (
    CallBreakError, GameStateError, MissingEntryError,
    InvalidPlayerCountError, SeatingError
)
from .scoring import (
    calculate_round_score, calculate_cumulative_score,
    apply_decimal_overflow, format_score
)
from .validator import (
    ValidationResult, is_warning, validate_calls, validate_results,
    validate_player_names, validate_player_count, validate_stakes
)
from .dealer import get_next_dealer_index, get_dealer_for_round
from .call_order import get_calling_order, get_current_caller_index, can_player_call
from .stakes import PlayerPayout, calculate_payouts, format_money, default_stake_amounts
from .round_manager import create_round, calculate_round_scores, get_cumulative_scores
from .game import Game

__all__ = [
    "Player",
    "PlayerCall",
    "PlayerResult",
    "Round",
    "RoundScore",
    "StakesConfig",
    "CallBreakError",
    "GameStateError",
    "MissingEntryError",
    "InvalidPlayerCountError",
    "SeatingError",
    "calculate_round_score",
    "calculate_cumulative_score",
    "apply_decimal_overflow",
    "format_score",
    "ValidationResult",
    "is_warning",
    "validate_calls",
    "validate_results",
    "validate_player_names",
    "validate_player_count",
    "validate_stakes",
    "get_next_dealer_index",
    "get_dealer_for_round",
    "get_calling_order",
    "get_current_caller_index",
    "can_player_call",
    "PlayerPayout",
    "calculate_payouts",
    "format_money",
    "default_stake_amounts",
    "create_round",
    "calculate_round_scores",
    "get_cumulative_scores",
    "Game",
]
