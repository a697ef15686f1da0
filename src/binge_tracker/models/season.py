"""Season, episode and release cadence models."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ReleasePattern(str, Enum):
    """How a season's episodes are spaced out."""

    UNKNOWN = "unknown"
    ALL_AT_ONCE = "all_at_once"  # Whole season drops on one day
    WEEKLY = "weekly"
    SPLIT_SEASON = "split_season"  # Weekly run with a long mid-season break


class SeasonState(str, Enum):
    """Lifecycle state of a season."""

    ANTICIPATED = "anticipated"
    PREMIERING = "premiering"
    AIRING = "airing"
    BINGE_READY = "binge_ready"
    WATCHED = "watched"


class Episode(BaseModel):
    """An episode as supplied by the catalog."""

    model_config = ConfigDict(frozen=True)

    episode_number: int = Field(gt=0)
    air_date: Optional[date] = None  # None = not yet known or not yet aired

    id: Optional[int] = None
    tmdb_id: Optional[int] = None
    season_number: int = 0
    name: str = ""
    overview: Optional[str] = None
    runtime: Optional[int] = None  # Duration in minutes
    still_path: Optional[str] = None
    vote_average: Optional[float] = None


class SeasonDateInfo(BaseModel):
    """Resolved date information for a season."""

    model_config = ConfigDict(frozen=True)

    premiere_date: Optional[date] = None
    finale_date: Optional[date] = None
    is_finale_estimated: bool = False
    release_pattern: ReleasePattern = ReleasePattern.UNKNOWN
    aired_episode_count: int = 0


class Season(BaseModel):
    """A tracked season of a show."""

    id: Optional[int] = None
    show_id: Optional[int] = None
    tmdb_id: Optional[int] = None
    season_number: int = 1
    name: str = ""
    overview: str = ""
    poster_path: Optional[str] = None
    vote_average: Optional[float] = None

    # Resolved dates and cadence
    premiere_date: Optional[date] = None
    finale_date: Optional[date] = None
    is_finale_estimated: bool = False
    episode_count: int = 0
    aired_episode_count: int = 0
    release_pattern: ReleasePattern = ReleasePattern.UNKNOWN

    # Lifecycle
    state: SeasonState = SeasonState.ANTICIPATED
    watched_date: Optional[date] = None  # Set only by the user

    episodes: list[Episode] = Field(default_factory=list)

    def with_date_info(self, info: SeasonDateInfo) -> "Season":
        """Return a copy with resolved date fields merged in."""
        return self.model_copy(
            update={
                "premiere_date": info.premiere_date,
                "finale_date": info.finale_date,
                "is_finale_estimated": info.is_finale_estimated,
                "release_pattern": info.release_pattern,
                "aired_episode_count": info.aired_episode_count,
            }
        )


class SeasonCountdown(BaseModel):
    """Countdown figures for a season as of a reference date."""

    season_id: Optional[int] = None
    as_of: date
    state: SeasonState
    is_binge_ready: bool
    is_finale_day: bool
    days_until_premiere: Optional[int] = None
    days_until_finale: Optional[int] = None
    episodes_remaining: Optional[int] = None
