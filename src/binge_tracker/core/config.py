"""Configuration management using Pydantic Settings."""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Service configuration loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="BINGE_",
        env_file=".env",
        extra="ignore",
    )

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False

    # API settings
    api_key: Optional[str] = None  # If set, required for mutating endpoints

    # Release cadence detection
    weekly_interval_days: int = 7
    weekly_tolerance_days: int = 2  # Gaps within interval +/- tolerance count as weekly
    split_season_gap_multiplier: int = 4  # Gap above interval * multiplier is a mid-season break

    # TMDB settings
    tmdb_api_key: Optional[str] = None  # TMDB v3 API key
    tmdb_base_url: str = "https://api.themoviedb.org/3"
    tmdb_timeout_seconds: float = 30.0
    tmdb_max_attempts: int = 3  # Per-season attempts when rate limited
    tmdb_retry_backoff_seconds: float = 2.0  # Retry n waits n * backoff

    # Database settings
    database_url: Optional[str] = None  # Default: sqlite+aiosqlite:///./data/binge_tracker.db
    database_echo: bool = False  # Enable SQL query logging for debugging

    @classmethod
    def from_yaml(cls, path: Path) -> "Settings":
        """Load settings from a YAML file."""
        import yaml

        with open(path) as f:
            data = yaml.safe_load(f)

        return cls(**data) if data else cls()


settings = Settings()
