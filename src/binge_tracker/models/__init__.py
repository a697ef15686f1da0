"""Pydantic models for API requests/responses and domain objects."""

from .api import EpisodeDate, RefreshSummary, ResolveRequest, ResolveResponse, WatchedRequest
from .season import (
    Episode,
    ReleasePattern,
    Season,
    SeasonCountdown,
    SeasonDateInfo,
    SeasonState,
)
from .show import Show, ShowStatus

__all__ = [
    "Episode",
    "EpisodeDate",
    "RefreshSummary",
    "ReleasePattern",
    "ResolveRequest",
    "ResolveResponse",
    "Season",
    "SeasonCountdown",
    "SeasonDateInfo",
    "SeasonState",
    "Show",
    "ShowStatus",
    "WatchedRequest",
]
