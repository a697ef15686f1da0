"""Database-backed show following, refresh and watched-status management."""

import logging
from datetime import date
from typing import Optional, Protocol

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from ..core.exceptions import (
    CatalogUnavailableError,
    RefreshFailedError,
    SeasonNotFoundError,
    ShowNotFoundError,
    TMDBError,
)
from ..database.models.show import SeasonORM, ShowORM
from ..database.session import SessionLocal
from ..models.api import RefreshSummary
from ..models.season import Season, SeasonCountdown, SeasonState
from ..models.show import Show
from ..models.tmdb import TMDBSeasonDetails, TMDBSeasonSummary, TMDBShowDetails
from ..repositories.season_repository import SeasonRepository
from ..repositories.show_repository import ShowRepository
from .show_processor import ShowProcessor

logger = logging.getLogger(__name__)


class Catalog(Protocol):
    """The parts of the catalog client the tracker relies on."""

    async def get_show_details(self, tmdb_id: int) -> TMDBShowDetails: ...

    async def fetch_all_seasons(
        self, show_details: TMDBShowDetails
    ) -> tuple[list[TMDBSeasonDetails], list[TMDBSeasonSummary]]: ...


class ShowTracker:
    """Follows shows, keeps their seasons current and records watched seasons.

    Every operation takes an explicit reference date and uses it for the
    whole resolve and classify pipeline.
    """

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        processor: Optional[ShowProcessor] = None,
        session_factory: async_sessionmaker[AsyncSession] = SessionLocal,
    ):
        """
        Initialize show tracker.

        Args:
            catalog: Catalog client, None disables follow/refresh
            processor: Show processor (default resolver and classifier if not given)
            session_factory: Database session factory
        """
        self.catalog = catalog
        self.processor = processor or ShowProcessor()
        self._session_factory = session_factory

    @property
    def resolver(self):
        return self.processor.resolver

    @property
    def classifier(self):
        return self.processor.classifier

    async def _get_session(self) -> AsyncSession:
        """Get a new database session."""
        return self._session_factory()

    def _season_as_of(self, repo: SeasonRepository, season_orm: SeasonORM, as_of: date) -> Season:
        """
        Load a stored season with its aired count and state taken on the reference date.

        Seasons stored from a summary have no episodes and keep their stored count.
        """
        season = repo.to_pydantic(season_orm)
        if season.episodes:
            season.aired_episode_count = self.resolver.count_aired_episodes(season.episodes, as_of)
        season.state = self.classifier.determine_state(season, as_of)
        return season

    def _require_catalog(self) -> Catalog:
        if self.catalog is None:
            raise CatalogUnavailableError()
        return self.catalog

    async def _fetch(
        self, tmdb_id: int, as_of: date
    ) -> tuple[Show, list[Season], list[Season]]:
        """
        Fetch and process a show from the catalog.

        Returns:
            Tuple of (show, fully resolved seasons, summary-only seasons)
        """
        catalog = self._require_catalog()
        details = await catalog.get_show_details(tmdb_id)
        season_details, failed = await catalog.fetch_all_seasons(details)

        show = self.processor.process_show(details, as_of)
        seasons = [self.processor.process_season(d, as_of) for d in season_details]
        summary_seasons = [self.processor.process_season_summary(s, as_of) for s in failed]
        return show, seasons, summary_seasons

    async def follow_show(self, tmdb_id: int, as_of: date) -> Show:
        """
        Start following a show, or refresh it if already followed.

        Args:
            tmdb_id: TMDB show ID
            as_of: Reference date

        Returns:
            The stored show with seasons

        Raises:
            CatalogUnavailableError: If no catalog is configured
            TMDBError: If the catalog lookup fails
        """
        async with await self._get_session() as session:
            repo = ShowRepository(session)
            existing = await repo.get_by_tmdb_id(tmdb_id)
            if existing:
                logger.info(f"Show {tmdb_id} already followed, refreshing instead")
                show_orm = await self._refresh(repo, existing, as_of)
            else:
                show, seasons, summary_seasons = await self._fetch(tmdb_id, as_of)
                all_seasons = sorted(seasons + summary_seasons, key=lambda s: s.season_number)
                show_orm = await repo.create_from_pydantic(show, all_seasons)
                logger.info(f"Following show: {show.title} ({tmdb_id}) with {len(all_seasons)} seasons")

            await session.commit()
            return repo.to_pydantic(show_orm)

    async def refresh_show(self, show_id: int, as_of: date) -> Show:
        """
        Re-fetch a followed show and update its seasons.

        Args:
            show_id: Local show ID
            as_of: Reference date

        Returns:
            The refreshed show

        Raises:
            ShowNotFoundError: If the show is not followed
            RefreshFailedError: If the catalog lookup fails
        """
        async with await self._get_session() as session:
            repo = ShowRepository(session)
            show_orm = await repo.get(show_id)
            if not show_orm:
                raise ShowNotFoundError(show_id)

            show_orm = await self._refresh(repo, show_orm, as_of)
            await session.commit()
            return repo.to_pydantic(show_orm)

    async def _refresh(self, repo: ShowRepository, show_orm: ShowORM, as_of: date) -> ShowORM:
        try:
            show, seasons, summary_seasons = await self._fetch(show_orm.tmdb_id, as_of)
        except TMDBError as e:
            raise RefreshFailedError(show_orm.tmdb_id, e) from e

        await repo.update_details(show_orm, show)

        by_tmdb_id = {s.tmdb_id: s for s in show_orm.seasons if s.tmdb_id is not None}
        by_number = {s.season_number: s for s in show_orm.seasons}

        for season in seasons:
            existing = by_tmdb_id.get(season.tmdb_id) or by_number.get(season.season_number)
            if existing is None:
                await repo.add_season(show_orm, season)
                logger.info(f"New season S{season.season_number} for show {show_orm.tmdb_id}")
                continue

            # The watched date is user-owned and survives every refresh
            season.watched_date = existing.watched_date
            season.state = self.classifier.determine_state(season, as_of)
            await repo.seasons.apply_refresh(existing, season)

        for season in summary_seasons:
            existing = by_tmdb_id.get(season.tmdb_id) or by_number.get(season.season_number)
            if existing is None:
                await repo.add_season(show_orm, season)
            else:
                # Keep the richer stored data, only bring it up to the reference date
                stored = self._season_as_of(repo.seasons, existing, as_of)
                await repo.seasons.set_state(existing, stored.state, stored.aired_episode_count)

        logger.info(f"Refreshed show: {show.title} ({show_orm.tmdb_id})")
        return show_orm

    async def refresh_all(self, as_of: date) -> RefreshSummary:
        """
        Refresh every followed show.

        Failures are logged and counted per show.

        Args:
            as_of: Reference date

        Returns:
            Counts of refreshed and failed shows
        """
        self._require_catalog()
        async with await self._get_session() as session:
            show_ids = [s.id for s in await ShowRepository(session).list_all()]

        summary = RefreshSummary()
        for show_id in show_ids:
            try:
                await self.refresh_show(show_id, as_of)
                summary.refreshed += 1
            except (RefreshFailedError, ShowNotFoundError) as e:
                logger.error(f"Refresh failed for show {show_id}: {e}")
                summary.failed += 1

        logger.info(f"Refresh complete: {summary.refreshed} refreshed, {summary.failed} failed")
        return summary

    async def reclassify_all(self, as_of: date) -> int:
        """
        Recompute the stored state and aired count of every season from stored facts.

        Args:
            as_of: Reference date

        Returns:
            Number of seasons whose state or aired count changed
        """
        changed = 0
        async with await self._get_session() as session:
            repo = SeasonRepository(session)
            for season_orm in await repo.list_all():
                stored_state = SeasonState(season_orm.state)
                stored_aired = season_orm.aired_episode_count
                season = self._season_as_of(repo, season_orm, as_of)
                if season.state == stored_state and season.aired_episode_count == stored_aired:
                    continue

                if season.state != stored_state:
                    logger.info(
                        f"Season {season_orm.id} moved {stored_state.value} -> {season.state.value}"
                    )
                await repo.set_state(season_orm, season.state, season.aired_episode_count)
                changed += 1
            await session.commit()
        return changed

    async def unfollow_show(self, show_id: int) -> None:
        """
        Stop following a show, deleting its seasons and episodes.

        Raises:
            ShowNotFoundError: If the show is not followed
        """
        async with await self._get_session() as session:
            if not await ShowRepository(session).delete_by_id(show_id):
                raise ShowNotFoundError(show_id)
            await session.commit()
            logger.info(f"Unfollowed show {show_id}")

    async def mark_watched(self, season_id: int, watched_on: date) -> Season:
        """
        Record that the user watched a season.

        Args:
            season_id: Local season ID
            watched_on: Date the season was watched

        Returns:
            The updated season

        Raises:
            SeasonNotFoundError: If the season does not exist
        """
        async with await self._get_session() as session:
            repo = SeasonRepository(session)
            season_orm = await repo.set_watched(season_id, watched_on)
            if not season_orm:
                raise SeasonNotFoundError(season_id)
            await repo.set_state(season_orm, SeasonState.WATCHED)
            await session.commit()
            logger.info(f"Season {season_id} marked watched on {watched_on}")
            return repo.to_pydantic(season_orm)

    async def unmark_watched(self, season_id: int, as_of: date) -> Season:
        """
        Clear a season's watched date and reclassify it.

        Args:
            season_id: Local season ID
            as_of: Reference date for the new state

        Returns:
            The updated season

        Raises:
            SeasonNotFoundError: If the season does not exist
        """
        async with await self._get_session() as session:
            repo = SeasonRepository(session)
            season_orm = await repo.set_watched(season_id, None)
            if not season_orm:
                raise SeasonNotFoundError(season_id)

            season = self._season_as_of(repo, season_orm, as_of)
            await repo.set_state(season_orm, season.state, season.aired_episode_count)
            await session.commit()
            return season

    async def list_shows(self) -> list[Show]:
        """Get all followed shows without their seasons."""
        async with await self._get_session() as session:
            repo = ShowRepository(session)
            return [repo.to_pydantic(s, include_seasons=False) for s in await repo.list_all()]

    async def get_show(self, show_id: int) -> Show:
        """
        Get a followed show with its seasons.

        Raises:
            ShowNotFoundError: If the show is not followed
        """
        async with await self._get_session() as session:
            repo = ShowRepository(session)
            show_orm = await repo.get(show_id)
            if not show_orm:
                raise ShowNotFoundError(show_id)
            return repo.to_pydantic(show_orm)

    async def list_seasons(
        self, as_of: date, state: Optional[SeasonState] = None
    ) -> list[Season]:
        """
        Get stored seasons with aired count and state computed against the reference date.

        Args:
            as_of: Reference date
            state: Only return seasons currently in this state

        Returns:
            Seasons without episodes
        """
        async with await self._get_session() as session:
            repo = SeasonRepository(session)
            seasons = []
            for season_orm in await repo.list_all():
                season = self._season_as_of(repo, season_orm, as_of)
                if state is None or season.state == state:
                    seasons.append(season.model_copy(update={"episodes": []}))
            return seasons

    async def get_countdown(self, season_id: int, as_of: date) -> SeasonCountdown:
        """
        Get countdown figures for a stored season.

        Raises:
            SeasonNotFoundError: If the season does not exist
        """
        async with await self._get_session() as session:
            repo = SeasonRepository(session)
            season_orm: Optional[SeasonORM] = await repo.get(season_id)
            if not season_orm:
                raise SeasonNotFoundError(season_id)
            return self.classifier.countdown(self._season_as_of(repo, season_orm, as_of), as_of)
