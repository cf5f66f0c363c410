"""
Tests for the persistence layer.

Run from project root: python -m pytest tests/test_persistence -v
"""

import json
import sqlite3
import tempfile
import unittest
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path

from tracker.game_engine import Game, PlayerCall, PlayerResult, StakesConfig
from tracker.persistence import Database, init_database, GameRepository, GameRecord
from shared.enums import GameStatus


NAMES = ["Asha", "Bikash", "Chandra", "Dipak"]


def started_game(stakes: StakesConfig | None = None) -> Game:
    game = Game.initialize(4)
    game, _ = game.set_player_names(NAMES)
    if stakes is not None:
        game, _ = game.set_stakes(stakes)
    game, _ = game.start()
    return game


def play_round(game: Game) -> Game:
    ids = [p.id for p in game.players]
    game, _ = game.enter_calls([PlayerCall(pid, c) for pid, c in zip(ids, [3, 4, 2, 4])])
    game, _ = game.enter_results([PlayerResult(pid, r) for pid, r in zip(ids, [3, 5, 2, 3])])
    return game


def completed_game(stakes: StakesConfig | None = None) -> Game:
    game = started_game(stakes)
    for _ in range(5):
        game = play_round(game).advance_round()
    return game


def at(day: int) -> datetime:
    return datetime(2024, 3, day, 18, 0, tzinfo=timezone.utc)


class PersistenceTestCase(unittest.TestCase):
    """Base test case with database setup/teardown."""

    def setUp(self):
        """Create a temporary database for each test."""
        self.temp_file = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
        self.db_path = self.temp_file.name
        self.temp_file.close()

        self.db = init_database(self.db_path)
        self.repository = GameRepository(self.db)

    def tearDown(self):
        """Clean up the temporary database and its WAL files."""
        self.db.close_connection()
        for suffix in ("", "-wal", "-shm"):
            Path(self.db_path + suffix).unlink(missing_ok=True)


class TestDatabase(PersistenceTestCase):
    """Test database initialization."""

    def test_schema_created(self):
        """Test the games table exists."""
        with self.db.get_connection() as conn:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            tables = {row["name"] for row in cursor.fetchall()}

        self.assertEqual(tables, {"games"})

    def test_reset_database(self):
        """Test reset drops stored games but keeps the schema."""
        self.repository.save(started_game())
        self.db.reset_database()

        self.assertEqual(self.repository.list_all_games(), [])

    def test_directory_created(self):
        """Test a missing parent directory is created."""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested" / "games.db"
            db = Database(path)
            self.assertTrue(path.parent.is_dir())
            db.close_connection()

    def test_rollback_on_error(self):
        """Test a failed statement leaves earlier writes in the block uncommitted."""
        game = started_game()
        with self.assertRaises(sqlite3.Error):
            with self.db.get_connection() as conn:
                conn.execute(
                    "INSERT INTO games (id, player_count, created_at, updated_at, state_json) "
                    "VALUES (?, 4, '', '', '{}')",
                    (game.id,)
                )
                conn.execute("INSERT INTO missing_table VALUES (1)")

        self.assertIsNone(self.repository.get_record(game.id))


class TestGameRepository(PersistenceTestCase):
    """Test saving and loading games."""

    def test_save_and_load_round_trip(self):
        """Test a saved game loads back equal to the original."""
        game = play_round(started_game(StakesConfig("$", (5, 10, 15))))
        self.repository.save(game)

        loaded = self.repository.find_by_id(game.id)
        self.assertEqual(loaded, game)

    def test_completed_game_round_trip(self):
        game = completed_game(StakesConfig("Rs", (5, 10, 15)))
        self.repository.save(game)

        loaded = self.repository.find_by_id(game.id)
        self.assertEqual(loaded, game)
        self.assertEqual(loaded.winner.name, "Bikash")
        self.assertEqual(loaded.payouts()[0].amount_paid, 30)

    def test_record_columns(self):
        """Test the index columns mirror the game."""
        game = play_round(started_game())
        self.repository.save(game)

        record = self.repository.get_record(game.id)
        self.assertEqual(record.status, GameStatus.IN_PROGRESS.value)
        self.assertEqual(record.current_round, 1)
        self.assertEqual(record.player_count, 4)
        self.assertIsNone(record.completed_at)
        self.assertIsNotNone(record.updated_at)
        self.assertEqual(json.loads(record.state_json)["id"], game.id)

    def test_save_is_upsert(self):
        """Test saving the same game twice keeps a single record."""
        game = started_game()
        self.repository.save(game)
        game = play_round(game).advance_round()
        self.repository.save(game)

        self.assertEqual(len(self.repository.list_all_games()), 1)
        self.assertEqual(self.repository.get_record(game.id).current_round, 2)
        self.assertEqual(self.repository.find_by_id(game.id).current_round, 2)

    def test_find_missing(self):
        self.assertIsNone(self.repository.find_by_id("no-such-game"))
        self.assertIsNone(self.repository.get_record("no-such-game"))

    def test_find_active_game(self):
        """Test only in-progress games are resumed, newest save first."""
        self.assertIsNone(self.repository.find_active_game())

        self.repository.save(completed_game())
        self.assertIsNone(self.repository.find_active_game())

        older = started_game()
        newer = started_game()
        self.repository.save(older)
        self.repository.save(newer)

        self.assertEqual(self.repository.find_active_game().id, newer.id)

    def test_list_completed_games(self):
        """Test completed games come back most recently finished first."""
        first = replace(completed_game(), completed_at=at(1))
        second = replace(completed_game(), completed_at=at(2))
        self.repository.save(second)
        self.repository.save(first)
        self.repository.save(started_game())

        games = self.repository.list_completed_games()
        self.assertEqual([g.id for g in games], [second.id, first.id])

    def test_list_all_games(self):
        """Test unfinished games sort by creation time among finished ones."""
        finished = replace(completed_game(), created_at=at(1), completed_at=at(3))
        unfinished = replace(started_game(), created_at=at(2))
        latest = replace(started_game(), created_at=at(4))
        for game in (unfinished, finished, latest):
            self.repository.save(game)

        games = self.repository.list_all_games()
        self.assertEqual([g.id for g in games], [latest.id, finished.id, unfinished.id])

    def test_delete(self):
        game = started_game()
        self.repository.save(game)

        self.assertTrue(self.repository.delete(game.id))
        self.assertFalse(self.repository.delete(game.id))
        self.assertIsNone(self.repository.find_by_id(game.id))

    def test_delete_all(self):
        for _ in range(3):
            self.repository.save(started_game())

        self.assertEqual(self.repository.delete_all(), 3)
        self.assertEqual(self.repository.list_all_games(), [])


class TestGameRecord(unittest.TestCase):
    """Test record conversion."""

    def test_from_game(self):
        game = completed_game()
        record = GameRecord.from_game(game)

        self.assertEqual(record.id, game.id)
        self.assertEqual(record.status, "completed")
        self.assertEqual(record.current_round, 5)
        self.assertEqual(record.completed_at, game.completed_at.isoformat())
        self.assertEqual(record.to_game(), game)

    def test_older_snapshot_loads(self):
        """Test a snapshot written before stakes existed still loads."""
        data = started_game().to_dict()
        del data["stakes"]
        del data["completed_at"]

        record = GameRecord(
            id=data["id"],
            status=data["status"],
            current_round=data["current_round"],
            player_count=4,
            created_at=data["created_at"],
            state_json=json.dumps(data),
        )
        game = record.to_game()

        self.assertIsNone(game.stakes)
        self.assertEqual([p.name for p in game.players], NAMES)


if __name__ == "__main__":
    unittest.main(verbosity=2)
