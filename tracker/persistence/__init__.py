"""
Persistence layer for the Call Break tracker.

Provides SQLite-based storage for game records.
"""

from tracker.persistence.database import (
    Database,
    get_database,
    init_database
)
from tracker.persistence.models import GameRecord
from tracker.persistence.repository import GameRepository


__all__ = [
    # Database
    "Database",
    "get_database",
    "init_database",

    # Models
    "GameRecord",

    # Repository
    "GameRepository"
]
