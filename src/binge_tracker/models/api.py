"""Request and response models for the HTTP API."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field

from .season import Episode, SeasonCountdown, SeasonDateInfo, SeasonState


class EpisodeDate(BaseModel):
    """Minimal episode evidence accepted by the resolve endpoint."""

    episode_number: int = Field(gt=0)
    air_date: Optional[date] = None


class ResolveRequest(BaseModel):
    """Request to resolve dates and state for an ad-hoc season."""

    season_air_date: Optional[date] = None
    episode_count: int = 0
    episodes: list[EpisodeDate] = Field(default_factory=list)
    as_of: Optional[date] = None  # Defaults to today
    watched_date: Optional[date] = None

    def to_episodes(self) -> list[Episode]:
        """Convert to engine episodes."""
        return [
            Episode(episode_number=e.episode_number, air_date=e.air_date)
            for e in self.episodes
        ]


class ResolveResponse(BaseModel):
    """Resolved dates, state and countdown for an ad-hoc season."""

    date_info: SeasonDateInfo
    state: SeasonState
    countdown: SeasonCountdown


class WatchedRequest(BaseModel):
    """Request to mark a season watched."""

    watched_date: Optional[date] = None  # Defaults to today


class RefreshSummary(BaseModel):
    """Outcome of refreshing every followed show."""

    refreshed: int = 0
    failed: int = 0
