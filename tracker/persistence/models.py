"""
Data models for database operations.

GameRecord maps to a row of the games table and converts to and from the
engine's Game value.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
import json
from typing import Any

from tracker.game_engine import Game


@dataclass
class GameRecord:
    """Database representation of a game."""
    id: str
    status: str
    current_round: int
    player_count: int
    created_at: str
    state_json: str
    completed_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "GameRecord":
        """Create from database row."""
        return cls(
            id=row["id"],
            status=row["status"],
            current_round=row["current_round"],
            player_count=row["player_count"],
            created_at=row["created_at"],
            completed_at=row["completed_at"],
            updated_at=row["updated_at"],
            state_json=row["state_json"]
        )

    @classmethod
    def from_game(cls, game: Game) -> "GameRecord":
        """Build a record for saving a game."""
        return cls(
            id=game.id,
            status=game.status.value,
            current_round=game.current_round,
            player_count=game.player_count,
            created_at=game.created_at.isoformat(),
            completed_at=game.completed_at.isoformat() if game.completed_at else None,
            updated_at=datetime.now(timezone.utc).isoformat(),
            state_json=json.dumps(game.to_dict())
        )

    def to_game(self) -> Game:
        """Rebuild the engine value from the stored snapshot."""
        return Game.from_dict(json.loads(self.state_json))
