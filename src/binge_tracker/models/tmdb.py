"""TMDB API response models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class TMDBModel(BaseModel):
    """Base for TMDB payloads, ignores fields we do not use."""

    model_config = ConfigDict(extra="ignore")


class TMDBSearchResult(TMDBModel):
    """Individual search result."""

    id: int
    name: str
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    first_air_date: Optional[str] = None
    vote_average: Optional[float] = None
    vote_count: Optional[int] = None
    popularity: Optional[float] = None


class TMDBSearchResponse(TMDBModel):
    """Response from the search endpoint."""

    page: int = 1
    results: list[TMDBSearchResult] = Field(default_factory=list)
    total_pages: int = 0
    total_results: int = 0


class TMDBSeasonSummary(TMDBModel):
    """Season summary as embedded in show details."""

    id: int
    name: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    season_number: int
    episode_count: Optional[int] = None
    air_date: Optional[str] = None
    vote_average: Optional[float] = None


class TMDBShowDetails(TMDBModel):
    """Detailed show information."""

    id: int
    name: str
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    backdrop_path: Optional[str] = None
    first_air_date: Optional[str] = None
    last_air_date: Optional[str] = None
    status: Optional[str] = None
    number_of_seasons: Optional[int] = None
    number_of_episodes: Optional[int] = None
    in_production: Optional[bool] = None
    vote_average: Optional[float] = None
    seasons: Optional[list[TMDBSeasonSummary]] = None

    @property
    def regular_seasons(self) -> list[TMDBSeasonSummary]:
        """Seasons other than specials (season 0), in season order."""
        return sorted(
            (s for s in self.seasons or [] if s.season_number > 0),
            key=lambda s: s.season_number,
        )


class TMDBEpisode(TMDBModel):
    """Episode information."""

    id: int
    name: Optional[str] = None
    overview: Optional[str] = None
    episode_number: int
    season_number: int
    air_date: Optional[str] = None
    runtime: Optional[int] = None
    still_path: Optional[str] = None
    vote_average: Optional[float] = None


class TMDBSeasonDetails(TMDBModel):
    """Detailed season information."""

    id: int
    name: Optional[str] = None
    overview: Optional[str] = None
    poster_path: Optional[str] = None
    season_number: int
    air_date: Optional[str] = None
    episodes: Optional[list[TMDBEpisode]] = None
