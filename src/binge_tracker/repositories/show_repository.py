"""Show repository for database operations."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.models.show import ShowORM
from ..models.season import Season
from ..models.show import Show, ShowStatus
from .base import BaseRepository
from .season_repository import SeasonRepository, season_to_orm


class ShowRepository(BaseRepository[ShowORM]):
    """Repository for followed show database operations."""

    def __init__(self, session: AsyncSession):
        """Initialize show repository."""
        super().__init__(ShowORM, session)
        self.seasons = SeasonRepository(session)

    async def get_by_tmdb_id(self, tmdb_id: int) -> Optional[ShowORM]:
        """
        Get a show by its TMDB ID.

        Args:
            tmdb_id: TMDB show ID

        Returns:
            Show ORM or None
        """
        result = await self.session.execute(
            select(ShowORM).where(ShowORM.tmdb_id == tmdb_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[ShowORM]:
        """
        Get all followed shows.

        Returns:
            Shows ordered by title
        """
        result = await self.session.execute(select(ShowORM).order_by(ShowORM.title))
        return list(result.scalars().all())

    async def create_from_pydantic(self, show: Show, seasons: list[Season]) -> ShowORM:
        """
        Create a show with its seasons and episodes.

        Args:
            show: Pydantic Show model
            seasons: Processed seasons to store with it

        Returns:
            ORM show instance
        """
        show_orm = ShowORM(tmdb_id=show.tmdb_id, added_date=show.added_date)
        self._copy_details(show_orm, show)

        for season in seasons:
            show_orm.seasons.append(season_to_orm(season))

        return await self.create(show_orm)

    async def update_details(self, show_orm: ShowORM, show: Show) -> ShowORM:
        """Update show-level metadata from a freshly processed show."""
        self._copy_details(show_orm, show)
        await self.session.flush()
        return show_orm

    async def add_season(self, show_orm: ShowORM, season: Season) -> None:
        """Attach a newly discovered season to a stored show."""
        show_orm.seasons.append(season_to_orm(season))
        await self.session.flush()

    @staticmethod
    def _copy_details(show_orm: ShowORM, show: Show) -> None:
        show_orm.title = show.title
        show_orm.overview = show.overview
        show_orm.poster_path = show.poster_path
        show_orm.backdrop_path = show.backdrop_path
        show_orm.first_air_date = show.first_air_date
        show_orm.status = show.status.value
        show_orm.number_of_seasons = show.number_of_seasons
        show_orm.number_of_episodes = show.number_of_episodes
        show_orm.in_production = show.in_production
        show_orm.vote_average = show.vote_average

    def to_pydantic(self, show_orm: ShowORM, include_seasons: bool = True) -> Show:
        """
        Convert ORM model to Pydantic model.

        Args:
            show_orm: ORM show instance
            include_seasons: Whether to convert seasons (with episodes) too

        Returns:
            Pydantic Show model
        """
        seasons = []
        if include_seasons:
            seasons = [
                self.seasons.to_pydantic(s)
                for s in sorted(show_orm.seasons, key=lambda s: s.season_number)
            ]

        return Show(
            id=show_orm.id,
            tmdb_id=show_orm.tmdb_id,
            title=show_orm.title,
            overview=show_orm.overview,
            poster_path=show_orm.poster_path,
            backdrop_path=show_orm.backdrop_path,
            first_air_date=show_orm.first_air_date,
            status=ShowStatus(show_orm.status),
            number_of_seasons=show_orm.number_of_seasons,
            number_of_episodes=show_orm.number_of_episodes,
            in_production=show_orm.in_production,
            vote_average=show_orm.vote_average,
            added_date=show_orm.added_date,
            seasons=seasons,
        )
