"""
Repository layer for game persistence operations.

Handles all database CRUD operations and game serialization. Errors from
sqlite are not caught here; callers decide whether a failed write matters.
"""

from tracker.game_engine import Game
from shared.enums import GameStatus
from tracker.persistence.database import Database, get_database
from tracker.persistence.models import GameRecord


class GameRepository:
    """
    Repository for game persistence operations.

    One record per game, keyed by the game ID.
    """

    def __init__(self, database: Database | None = None):
        self.db = database or get_database()

    def save(self, game: Game) -> GameRecord:
        """Insert or update a game."""
        record = GameRecord.from_game(game)
        with self.db.get_connection() as conn:
            conn.execute(
                """
                INSERT INTO games (id, status, current_round, player_count,
                                   created_at, completed_at, updated_at, state_json)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    status = excluded.status,
                    current_round = excluded.current_round,
                    player_count = excluded.player_count,
                    completed_at = excluded.completed_at,
                    updated_at = excluded.updated_at,
                    state_json = excluded.state_json
                """,
                (
                    record.id,
                    record.status,
                    record.current_round,
                    record.player_count,
                    record.created_at,
                    record.completed_at,
                    record.updated_at,
                    record.state_json
                )
            )
        return record

    def get_record(self, game_id: str) -> GameRecord | None:
        """Get the raw record for a game."""
        with self.db.get_connection() as conn:
            cursor = conn.execute(
                "SELECT * FROM games WHERE id = ?",
                (game_id,)
            )
            row = cursor.fetchone()

            if row:
                return GameRecord.from_row(dict(row))
            return None

    def find_by_id(self, game_id: str) -> Game | None:
        """Load a game by ID."""
        record = self.get_record(game_id)
        return record.to_game() if record else None

    def find_active_game(self) -> Game | None:
        """The game currently in progress, if any (most recently saved wins)."""
        with self.db.get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT * FROM games
                WHERE status = ?
                ORDER BY updated_at DESC
                LIMIT 1
                """,
                (GameStatus.IN_PROGRESS.value,)
            )
            row = cursor.fetchone()

            if row:
                return GameRecord.from_row(dict(row)).to_game()
            return None

    def list_completed_games(self) -> list[Game]:
        """Completed games, most recently finished first."""
        with self.db.get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT * FROM games
                WHERE status = ?
                ORDER BY completed_at DESC
                """,
                (GameStatus.COMPLETED.value,)
            )
            return [GameRecord.from_row(dict(row)).to_game() for row in cursor.fetchall()]

    def list_all_games(self) -> list[Game]:
        """Every game, ordered by completion time or, if unfinished, creation time."""
        with self.db.get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT * FROM games
                ORDER BY COALESCE(completed_at, created_at) DESC
                """
            )
            return [GameRecord.from_row(dict(row)).to_game() for row in cursor.fetchall()]

    def delete(self, game_id: str) -> bool:
        """Delete a game. Returns False if it did not exist."""
        with self.db.get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM games WHERE id = ?",
                (game_id,)
            )
            return cursor.rowcount > 0

    def delete_all(self) -> int:
        """Delete every game. Returns the number removed."""
        with self.db.get_connection() as conn:
            cursor = conn.execute("DELETE FROM games")
            return cursor.rowcount
