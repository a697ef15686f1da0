"""Season repository for database operations."""

from datetime import date
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.models.show import EpisodeORM, SeasonORM
from ..models.season import Episode, ReleasePattern, Season, SeasonState
from .base import BaseRepository


def episode_to_orm(episode: Episode) -> EpisodeORM:
    """Build an episode ORM row from a Pydantic episode."""
    return EpisodeORM(
        tmdb_id=episode.tmdb_id,
        episode_number=episode.episode_number,
        season_number=episode.season_number,
        name=episode.name,
        overview=episode.overview,
        air_date=episode.air_date,
        runtime=episode.runtime,
        still_path=episode.still_path,
        vote_average=episode.vote_average,
    )


def season_to_orm(season: Season) -> SeasonORM:
    """Build a season ORM row (with episodes) from a Pydantic season."""
    season_orm = SeasonORM(
        tmdb_id=season.tmdb_id,
        season_number=season.season_number,
        name=season.name,
        overview=season.overview,
        poster_path=season.poster_path,
        vote_average=season.vote_average,
        premiere_date=season.premiere_date,
        finale_date=season.finale_date,
        is_finale_estimated=season.is_finale_estimated,
        episode_count=season.episode_count,
        aired_episode_count=season.aired_episode_count,
        release_pattern=season.release_pattern.value,
        state=season.state.value,
        watched_date=season.watched_date,
    )
    for episode in season.episodes:
        season_orm.episodes.append(episode_to_orm(episode))
    return season_orm


class SeasonRepository(BaseRepository[SeasonORM]):
    """Repository for season database operations."""

    def __init__(self, session: AsyncSession):
        """Initialize season repository."""
        super().__init__(SeasonORM, session)

    async def list_all(self) -> list[SeasonORM]:
        """
        Get every stored season.

        Returns:
            Seasons ordered by show and season number
        """
        result = await self.session.execute(
            select(SeasonORM).order_by(SeasonORM.show_id, SeasonORM.season_number)
        )
        return list(result.scalars().all())

    def to_pydantic(self, season_orm: SeasonORM) -> Season:
        """
        Convert ORM model to Pydantic model, episodes included.

        Args:
            season_orm: ORM season instance

        Returns:
            Pydantic Season model
        """
        episodes = [
            Episode(
                id=ep.id,
                tmdb_id=ep.tmdb_id,
                episode_number=ep.episode_number,
                season_number=ep.season_number,
                name=ep.name,
                overview=ep.overview,
                air_date=ep.air_date,
                runtime=ep.runtime,
                still_path=ep.still_path,
                vote_average=ep.vote_average,
            )
            for ep in sorted(season_orm.episodes, key=lambda e: e.episode_number)
        ]

        return Season(
            id=season_orm.id,
            show_id=season_orm.show_id,
            tmdb_id=season_orm.tmdb_id,
            season_number=season_orm.season_number,
            name=season_orm.name,
            overview=season_orm.overview,
            poster_path=season_orm.poster_path,
            vote_average=season_orm.vote_average,
            premiere_date=season_orm.premiere_date,
            finale_date=season_orm.finale_date,
            is_finale_estimated=season_orm.is_finale_estimated,
            episode_count=season_orm.episode_count,
            aired_episode_count=season_orm.aired_episode_count,
            release_pattern=ReleasePattern(season_orm.release_pattern),
            state=SeasonState(season_orm.state),
            watched_date=season_orm.watched_date,
            episodes=episodes,
        )

    async def apply_refresh(self, season_orm: SeasonORM, season: Season) -> SeasonORM:
        """
        Update a stored season with freshly processed catalog data.

        The stored watched date is user-owned and left untouched.

        Args:
            season_orm: Stored season
            season: Freshly processed season (state already computed)

        Returns:
            Updated season ORM
        """
        season_orm.name = season.name
        season_orm.overview = season.overview
        season_orm.poster_path = season.poster_path
        if season.vote_average is not None:
            season_orm.vote_average = season.vote_average
        season_orm.premiere_date = season.premiere_date
        season_orm.finale_date = season.finale_date
        season_orm.is_finale_estimated = season.is_finale_estimated
        season_orm.episode_count = season.episode_count
        season_orm.aired_episode_count = season.aired_episode_count
        season_orm.release_pattern = season.release_pattern.value
        season_orm.state = season.state.value

        self._upsert_episodes(season_orm, season.episodes)

        await self.session.flush()
        return season_orm

    @staticmethod
    def _upsert_episodes(season_orm: SeasonORM, episodes: list[Episode]) -> None:
        """Update known episodes in place and add missing ones, matched by catalog ID."""
        existing = {ep.tmdb_id: ep for ep in season_orm.episodes if ep.tmdb_id is not None}

        for episode in episodes:
            episode_orm = existing.get(episode.tmdb_id) if episode.tmdb_id is not None else None
            if episode_orm is None:
                season_orm.episodes.append(episode_to_orm(episode))
                continue

            episode_orm.episode_number = episode.episode_number
            episode_orm.name = episode.name
            episode_orm.overview = episode.overview
            episode_orm.air_date = episode.air_date
            episode_orm.runtime = episode.runtime
            episode_orm.still_path = episode.still_path
            episode_orm.vote_average = episode.vote_average

    async def set_state(
        self,
        season_orm: SeasonORM,
        state: SeasonState,
        aired_episode_count: Optional[int] = None,
    ) -> SeasonORM:
        """Persist a recomputed state, and the aired count it was computed with."""
        season_orm.state = state.value
        if aired_episode_count is not None:
            season_orm.aired_episode_count = aired_episode_count
        await self.session.flush()
        return season_orm

    async def set_watched(
        self, season_id: int, watched_date: Optional[date]
    ) -> Optional[SeasonORM]:
        """
        Set or clear the watched date of a season.

        The caller stores the matching state with set_state.

        Args:
            season_id: Season ID
            watched_date: Date watched, or None to clear

        Returns:
            Updated season or None if not found
        """
        season_orm = await self.get(season_id)
        if not season_orm:
            return None

        season_orm.watched_date = watched_date
        await self.session.flush()
        return season_orm
