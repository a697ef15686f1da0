"""Database configuration."""

from pathlib import Path
from typing import Optional

from ..core.config import Settings, settings

DEFAULT_DATABASE_PATH = Path("data") / "binge_tracker.db"


def get_database_url(app_settings: Optional[Settings] = None) -> str:
    """
    Get the database URL from settings or default.

    Args:
        app_settings: Settings to read (environment settings if not given)

    Returns:
        Database URL string
    """
    app_settings = app_settings or settings
    if app_settings.database_url:
        return app_settings.database_url

    # Default to SQLite in ./data/
    DEFAULT_DATABASE_PATH.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite+aiosqlite:///{DEFAULT_DATABASE_PATH}"


def get_database_echo(app_settings: Optional[Settings] = None) -> bool:
    """
    Check if database query logging is enabled.

    Returns:
        True if SQL queries should be logged
    """
    return (app_settings or settings).database_echo
