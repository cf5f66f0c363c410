"""
Tracker configuration loaded from environment variables.
"""
import logging
import os
from pathlib import Path
from dotenv import load_dotenv

from shared.constants import DEFAULT_CURRENCY

load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Config:
    """Tracker configuration."""

    # Database
    DATABASE_PATH: Path = Path(os.getenv("DATABASE_PATH", "./data/callbreak.db"))
    AUTO_SAVE: bool = _env_flag("AUTO_SAVE", "true")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Game settings
    DEFAULT_CURRENCY: str = os.getenv("DEFAULT_CURRENCY", DEFAULT_CURRENCY)


config = Config()
settings = config


def configure_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL (or an explicit override)."""
    level_name = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=settings.LOG_FORMAT
    )
