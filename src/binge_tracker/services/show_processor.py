"""Conversion of TMDB payloads into tracked shows, seasons and episodes."""

import logging
from datetime import date
from typing import Optional

from ..models.season import Episode, ReleasePattern, Season
from ..models.show import Show, ShowStatus
from ..models.tmdb import TMDBEpisode, TMDBSeasonDetails, TMDBSeasonSummary, TMDBShowDetails
from .release_pattern import ReleasePatternResolver
from .season_state import SeasonLifecycleClassifier

logger = logging.getLogger(__name__)


def parse_date(value: Optional[str]) -> Optional[date]:
    """Parse a TMDB date string (YYYY-MM-DD); blank or malformed gives None."""
    if not value or not value.strip():
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        logger.debug(f"Ignoring malformed TMDB date: {value!r}")
        return None


class ShowProcessor:
    """Turns catalog data into domain models, resolving dates and state."""

    def __init__(
        self,
        resolver: Optional[ReleasePatternResolver] = None,
        classifier: Optional[SeasonLifecycleClassifier] = None,
    ):
        """
        Initialize show processor.

        Args:
            resolver: Release pattern resolver (default constants if not given)
            classifier: Season lifecycle classifier
        """
        self.resolver = resolver or ReleasePatternResolver()
        self.classifier = classifier or SeasonLifecycleClassifier()

    def process_show(self, details: TMDBShowDetails, as_of: date) -> Show:
        """Build a Show (without seasons) from TMDB show details."""
        return Show(
            tmdb_id=details.id,
            title=details.name,
            overview=details.overview,
            poster_path=details.poster_path,
            backdrop_path=details.backdrop_path,
            first_air_date=parse_date(details.first_air_date),
            status=ShowStatus.from_tmdb(details.status),
            number_of_seasons=details.number_of_seasons or 0,
            number_of_episodes=details.number_of_episodes or 0,
            in_production=bool(details.in_production),
            vote_average=details.vote_average,
            added_date=as_of,
        )

    @staticmethod
    def process_episode(tmdb_episode: TMDBEpisode) -> Episode:
        """Build an Episode from TMDB episode data."""
        return Episode(
            tmdb_id=tmdb_episode.id,
            episode_number=tmdb_episode.episode_number,
            season_number=tmdb_episode.season_number,
            name=tmdb_episode.name or f"Episode {tmdb_episode.episode_number}",
            overview=tmdb_episode.overview,
            air_date=parse_date(tmdb_episode.air_date),
            runtime=tmdb_episode.runtime,
            still_path=tmdb_episode.still_path,
            vote_average=tmdb_episode.vote_average,
        )

    def process_episodes(self, details: TMDBSeasonDetails) -> list[Episode]:
        """Build all episodes of a season, skipping unnumbered entries."""
        episodes = []
        for tmdb_episode in details.episodes or []:
            if tmdb_episode.episode_number <= 0:
                logger.warning(
                    f"Skipping episode {tmdb_episode.id} with invalid number "
                    f"{tmdb_episode.episode_number}"
                )
                continue
            episodes.append(self.process_episode(tmdb_episode))
        return episodes

    def process_season(self, details: TMDBSeasonDetails, as_of: date) -> Season:
        """
        Build a season from full TMDB season details.

        Dates are resolved and state is classified against the same reference date.

        Args:
            details: TMDB season details with episodes
            as_of: Reference date

        Returns:
            Season with resolved dates, state and episodes
        """
        episodes = self.process_episodes(details)

        date_info = self.resolver.resolve(
            season_air_date=parse_date(details.air_date),
            episode_count=len(episodes),
            episodes=episodes,
            as_of=as_of,
        )

        season = Season(
            tmdb_id=details.id,
            season_number=details.season_number,
            name=details.name or f"Season {details.season_number}",
            overview=details.overview or "",
            poster_path=details.poster_path,
            episode_count=len(episodes),
            episodes=episodes,
        ).with_date_info(date_info)

        season.state = self.classifier.determine_state(season, as_of)
        logger.debug(
            f"Processed S{details.season_number}: pattern={season.release_pattern.value} "
            f"state={season.state.value}"
        )
        return season

    def process_season_summary(self, summary: TMDBSeasonSummary, as_of: date) -> Season:
        """
        Build a season from the summary embedded in show details.

        Used when full season details could not be fetched: only the premiere
        date and episode count are known.

        Args:
            summary: TMDB season summary
            as_of: Reference date

        Returns:
            Season with premiere date and state only
        """
        season = Season(
            tmdb_id=summary.id,
            season_number=summary.season_number,
            name=summary.name or f"Season {summary.season_number}",
            overview=summary.overview or "",
            poster_path=summary.poster_path,
            vote_average=summary.vote_average,
            premiere_date=parse_date(summary.air_date),
            episode_count=summary.episode_count or 0,
            release_pattern=ReleasePattern.UNKNOWN,
        )
        season.state = self.classifier.determine_state(season, as_of)
        return season
