"""Show models."""

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from .season import Season


class ShowStatus(str, Enum):
    """Production status of a show."""

    RETURNING = "returning"
    ENDED = "ended"
    CANCELED = "canceled"
    IN_PRODUCTION = "in_production"
    PLANNED = "planned"
    UNKNOWN = "unknown"

    @classmethod
    def from_tmdb(cls, status: Optional[str]) -> "ShowStatus":
        """Map a TMDB status string to a ShowStatus."""
        mapping = {
            "returning series": cls.RETURNING,
            "ended": cls.ENDED,
            "canceled": cls.CANCELED,
            "in production": cls.IN_PRODUCTION,
            "planned": cls.PLANNED,
        }
        return mapping.get((status or "").strip().lower(), cls.UNKNOWN)


class Show(BaseModel):
    """A followed show."""

    id: Optional[int] = None
    tmdb_id: int
    title: str
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    first_air_date: Optional[date] = None
    status: ShowStatus = ShowStatus.UNKNOWN
    number_of_seasons: int = 0
    number_of_episodes: int = 0
    in_production: bool = False
    vote_average: Optional[float] = None
    added_date: Optional[date] = None

    seasons: list[Season] = Field(default_factory=list)
