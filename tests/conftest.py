"""Shared fixtures for Binge Tracker tests."""

import asyncio
import os
import tempfile
from datetime import date, timedelta
from pathlib import Path
from typing import Optional

# Point the service at an isolated database before the package is imported
_db_dir = Path(tempfile.mkdtemp(prefix="binge-tracker-tests-"))
os.environ["BINGE_DATABASE_URL"] = f"sqlite+aiosqlite:///{_db_dir / 'test.db'}"
os.environ.pop("BINGE_TMDB_API_KEY", None)
os.environ.pop("BINGE_API_KEY", None)

import pytest  # noqa: E402

from binge_tracker.core.exceptions import TMDBRateLimited, TMDBShowNotFound  # noqa: E402
from binge_tracker.models.season import Episode, ReleasePattern, Season  # noqa: E402
from binge_tracker.models.tmdb import (  # noqa: E402
    TMDBEpisode,
    TMDBSeasonDetails,
    TMDBSeasonSummary,
    TMDBShowDetails,
)
from binge_tracker.services.release_pattern import ReleasePatternResolver  # noqa: E402
from binge_tracker.services.season_state import SeasonLifecycleClassifier  # noqa: E402

AS_OF = date(2024, 3, 1)


@pytest.fixture
def as_of() -> date:
    """Fixed reference date."""
    return AS_OF


@pytest.fixture
def resolver() -> ReleasePatternResolver:
    """Resolver with default cadence constants."""
    return ReleasePatternResolver()


@pytest.fixture
def classifier() -> SeasonLifecycleClassifier:
    """Season lifecycle classifier."""
    return SeasonLifecycleClassifier()


@pytest.fixture
def make_episodes():
    """Build numbered episodes from a list of air dates (None = undated)."""

    def _make(dates: list[Optional[date]]) -> list[Episode]:
        return [Episode(episode_number=i, air_date=d) for i, d in enumerate(dates, start=1)]

    return _make


@pytest.fixture
def make_season():
    """Build a season with the given dates and cadence."""

    def _make(
        premiere_date: Optional[date] = None,
        finale_date: Optional[date] = None,
        release_pattern: ReleasePattern = ReleasePattern.WEEKLY,
        watched_date: Optional[date] = None,
        episode_count: int = 10,
        aired_episode_count: int = 0,
    ) -> Season:
        return Season(
            premiere_date=premiere_date,
            finale_date=finale_date,
            release_pattern=release_pattern,
            watched_date=watched_date,
            episode_count=episode_count,
            aired_episode_count=aired_episode_count,
        )

    return _make


def weekly_season_details(
    tmdb_id: int,
    season_number: int,
    premiere: date,
    episode_count: int,
    dated_episodes: int,
) -> TMDBSeasonDetails:
    """TMDB season with weekly episodes, only the first few of them dated."""
    episodes = []
    for number in range(1, episode_count + 1):
        air_date = premiere + timedelta(weeks=number - 1)
        episodes.append(
            TMDBEpisode(
                id=tmdb_id * 1000 + season_number * 100 + number,
                name=f"Episode {number}",
                episode_number=number,
                season_number=season_number,
                air_date=air_date.isoformat() if number <= dated_episodes else None,
                runtime=45,
            )
        )
    return TMDBSeasonDetails(
        id=tmdb_id * 10 + season_number,
        name=f"Season {season_number}",
        season_number=season_number,
        air_date=premiere.isoformat(),
        episodes=episodes,
    )


class FakeCatalog:
    """In-memory stand-in for the TMDB client."""

    def __init__(self):
        self.shows: dict[int, TMDBShowDetails] = {}
        self.seasons: dict[tuple[int, int], TMDBSeasonDetails] = {}
        self.unavailable: set[tuple[int, int]] = set()

    def add_show(self, tmdb_id: int, name: str, seasons: list[TMDBSeasonDetails]) -> None:
        self.shows[tmdb_id] = TMDBShowDetails(
            id=tmdb_id,
            name=name,
            status="Returning Series",
            number_of_seasons=len(seasons),
            seasons=[
                TMDBSeasonSummary(
                    id=s.id,
                    name=s.name,
                    season_number=s.season_number,
                    episode_count=len(s.episodes or []),
                    air_date=s.air_date,
                )
                for s in seasons
            ],
        )
        for season in seasons:
            self.seasons[(tmdb_id, season.season_number)] = season

    async def get_show_details(self, tmdb_id: int) -> TMDBShowDetails:
        if tmdb_id not in self.shows:
            raise TMDBShowNotFound(tmdb_id)
        return self.shows[tmdb_id]

    async def fetch_all_seasons(self, show_details: TMDBShowDetails):
        fetched, failed = [], []
        for summary in show_details.regular_seasons:
            key = (show_details.id, summary.season_number)
            if key in self.unavailable:
                failed.append(summary)
            else:
                fetched.append(self.seasons[key])
        return fetched, failed


class RateLimitedCatalog(FakeCatalog):
    """Catalog whose show lookups are always rate limited."""

    async def get_show_details(self, tmdb_id: int) -> TMDBShowDetails:
        raise TMDBRateLimited()


@pytest.fixture
def fake_catalog() -> FakeCatalog:
    """Empty in-memory catalog."""
    return FakeCatalog()


@pytest.fixture(scope="session")
def database():
    """Create the test database tables once."""
    from binge_tracker.database import init_db

    asyncio.run(init_db())
    return True
