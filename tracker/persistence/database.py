"""
Database connection management and initialization.
"""

import logging
import sqlite3
import threading
from pathlib import Path
from contextlib import contextmanager
from typing import Generator

from tracker.config import settings


logger = logging.getLogger(__name__)


class Database:
    """
    SQLite database manager.

    Keeps one connection per thread and creates the schema on first use.
    """

    def __init__(self, db_path: str | Path | None = None):
        self.db_path = str(db_path or settings.DATABASE_PATH)
        self._local = threading.local()
        self._ensure_directory()
        self._ensure_schema()

    def _ensure_directory(self) -> None:
        """Create database directory if it doesn't exist."""
        if self.db_path == ":memory:":
            return
        db_file = Path(self.db_path)
        db_file.parent.mkdir(parents=True, exist_ok=True)

    def _ensure_schema(self) -> None:
        """Initialize database schema."""
        with self.get_connection() as conn:
            self._create_tables(conn)
        logger.debug(f"Database schema ready at {self.db_path}")

    @contextmanager
    def get_connection(self) -> Generator[sqlite3.Connection, None, None]:
        """
        Get a thread-local database connection.

        Usage:
            with db.get_connection() as conn:
                cursor = conn.execute("SELECT ...")
        """
        if getattr(self._local, "connection", None) is None:
            self._local.connection = self._create_connection()

        conn = self._local.connection
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    def _create_connection(self) -> sqlite3.Connection:
        """Create a new database connection with optimal settings."""
        conn = sqlite3.connect(
            self.db_path,
            check_same_thread=False,
            timeout=30.0
        )

        # Use WAL mode so a crash mid-write keeps the last good record
        conn.execute("PRAGMA journal_mode = WAL")

        # Return rows as dictionaries
        conn.row_factory = sqlite3.Row

        return conn

    def _create_tables(self, conn: sqlite3.Connection) -> None:
        """Create all database tables."""
        conn.executescript(SCHEMA_SQL)

    def close_connection(self) -> None:
        """Close the current thread's connection."""
        connection = getattr(self._local, "connection", None)
        if connection is not None:
            connection.close()
            self._local.connection = None

    def reset_database(self) -> None:
        """Drop and recreate all tables. USE WITH CAUTION."""
        with self.get_connection() as conn:
            cursor = conn.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
            )
            tables = [row['name'] for row in cursor.fetchall()]

            for table in tables:
                conn.execute(f"DROP TABLE IF EXISTS {table}")

            self._create_tables(conn)

        logger.warning(f"Database at {self.db_path} was reset")


SCHEMA_SQL = """
-- Games table: one record per game, the full game as JSON plus
-- the columns needed to find and sort games without parsing it
CREATE TABLE IF NOT EXISTS games (
    id TEXT PRIMARY KEY,
    status TEXT NOT NULL DEFAULT 'setup',
    current_round INTEGER NOT NULL DEFAULT 1,
    player_count INTEGER NOT NULL,
    created_at TEXT NOT NULL,
    completed_at TEXT,
    updated_at TEXT NOT NULL,
    state_json TEXT NOT NULL
);

-- Indexes for common queries
CREATE INDEX IF NOT EXISTS idx_games_status ON games(status);
CREATE INDEX IF NOT EXISTS idx_games_completed_at ON games(completed_at);
"""


# Global database instance
_db: Database | None = None


def get_database() -> Database:
    """Get or create the global database instance."""
    global _db
    if _db is None:
        _db = Database()
    return _db


def init_database(db_path: str | Path | None = None) -> Database:
    """Initialize the database with optional custom path."""
    global _db
    _db = Database(db_path)
    return _db
