"""Release cadence inference and season date resolution."""

import logging
from datetime import date, timedelta
from typing import Optional, Sequence, Tuple

from ..core.config import Settings
from ..models.season import Episode, ReleasePattern, SeasonDateInfo

logger = logging.getLogger(__name__)


class ReleasePatternResolver:
    """Infers a season's release cadence and fills in missing premiere/finale dates.

    Every method is a pure function of its arguments. The reference date is
    always passed in by the caller; the resolver never reads the clock.
    """

    WEEKLY_INTERVAL_DAYS = 7
    WEEKLY_TOLERANCE_DAYS = 2
    SPLIT_SEASON_GAP_MULTIPLIER = 4

    def __init__(
        self,
        weekly_interval_days: int = WEEKLY_INTERVAL_DAYS,
        weekly_tolerance_days: int = WEEKLY_TOLERANCE_DAYS,
        split_season_gap_multiplier: int = SPLIT_SEASON_GAP_MULTIPLIER,
    ):
        """
        Initialize resolver.

        Args:
            weekly_interval_days: Nominal days between weekly episodes
            weekly_tolerance_days: Allowed deviation from the nominal interval
            split_season_gap_multiplier: A gap longer than interval * multiplier
                marks a mid-season break
        """
        self.weekly_interval_days = weekly_interval_days
        self.weekly_tolerance_days = weekly_tolerance_days
        self.split_season_gap_multiplier = split_season_gap_multiplier

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReleasePatternResolver":
        """Build a resolver using the configured cadence constants."""
        return cls(
            weekly_interval_days=settings.weekly_interval_days,
            weekly_tolerance_days=settings.weekly_tolerance_days,
            split_season_gap_multiplier=settings.split_season_gap_multiplier,
        )

    @property
    def split_season_gap_days(self) -> int:
        """Gap length (days) beyond which a season counts as split."""
        return self.weekly_interval_days * self.split_season_gap_multiplier

    def resolve(
        self,
        season_air_date: Optional[date],
        episode_count: int,
        episodes: Sequence[Episode],
        as_of: date,
    ) -> SeasonDateInfo:
        """
        Resolve all date information for a season.

        Args:
            season_air_date: Season-level air date from the catalog, if any
            episode_count: Total number of episodes in the season
            episodes: Known episodes (air dates may be missing)
            as_of: Reference date for counting aired episodes

        Returns:
            Resolved premiere/finale dates, release pattern and aired count
        """
        premiere_date = self.resolve_premiere_date(season_air_date, episodes)
        release_pattern = self.detect_release_pattern(episodes)
        aired_episode_count = self.count_aired_episodes(episodes, as_of)

        finale_date, is_estimated = self.resolve_finale_date(
            premiere_date=premiere_date,
            episode_count=episode_count,
            episodes=episodes,
            release_pattern=release_pattern,
        )

        return SeasonDateInfo(
            premiere_date=premiere_date,
            finale_date=finale_date,
            is_finale_estimated=is_estimated,
            release_pattern=release_pattern,
            aired_episode_count=aired_episode_count,
        )

    @staticmethod
    def resolve_premiere_date(
        season_air_date: Optional[date],
        episodes: Sequence[Episode],
    ) -> Optional[date]:
        """Premiere is episode 1's air date, falling back to the season air date."""
        for episode in episodes:
            if episode.episode_number == 1 and episode.air_date is not None:
                return episode.air_date
        return season_air_date

    def resolve_finale_date(
        self,
        premiere_date: Optional[date],
        episode_count: int,
        episodes: Sequence[Episode],
        release_pattern: ReleasePattern,
    ) -> Tuple[Optional[date], bool]:
        """
        Resolve the finale date, estimating it for weekly seasons.

        Args:
            premiere_date: Already-resolved premiere date
            episode_count: Total number of episodes in the season
            episodes: Known episodes
            release_pattern: Already-detected release pattern

        Returns:
            Tuple of (finale_date, is_estimated)
        """
        if episode_count > 0:
            for episode in episodes:
                if episode.episode_number == episode_count and episode.air_date is not None:
                    return episode.air_date, False

        # Binge drops end the day they start
        if release_pattern == ReleasePattern.ALL_AT_ONCE and premiere_date is not None:
            return premiere_date, False

        # Linear projection is only safe while no gap has been observed
        if (
            release_pattern == ReleasePattern.WEEKLY
            and premiere_date is not None
            and episode_count > 0
        ):
            estimated = premiere_date + timedelta(
                days=self.weekly_interval_days * (episode_count - 1)
            )
            logger.debug(
                f"Estimated weekly finale {estimated} from premiere {premiere_date} "
                f"and {episode_count} episodes"
            )
            return estimated, True

        return None, False

    def detect_release_pattern(self, episodes: Sequence[Episode]) -> ReleasePattern:
        """
        Detect the release pattern from episode air dates.

        Gaps are measured between consecutive episodes in episode-number order,
        even when the dates themselves are out of sequence.

        Args:
            episodes: Known episodes (undated ones are ignored)

        Returns:
            Detected release pattern, UNKNOWN when evidence is insufficient
        """
        dated = sorted(
            (e for e in episodes if e.air_date is not None),
            key=lambda e: e.episode_number,
        )

        if len(dated) < 2:
            return ReleasePattern.UNKNOWN

        first_date = dated[0].air_date
        if all(e.air_date == first_date for e in dated):
            return ReleasePattern.ALL_AT_ONCE

        gaps = [(b.air_date - a.air_date).days for a, b in zip(dated, dated[1:])]

        low = self.weekly_interval_days - self.weekly_tolerance_days
        high = self.weekly_interval_days + self.weekly_tolerance_days
        if all(low <= gap <= high for gap in gaps):
            return ReleasePattern.WEEKLY

        if any(gap > self.split_season_gap_days for gap in gaps):
            logger.debug(f"Split season detected, gaps: {gaps}")
            return ReleasePattern.SPLIT_SEASON

        logger.debug(f"No release pattern matched, gaps: {gaps}")
        return ReleasePattern.UNKNOWN

    @staticmethod
    def count_aired_episodes(episodes: Sequence[Episode], as_of: date) -> int:
        """Count episodes that aired on or before the reference date."""
        return sum(
            1 for episode in episodes
            if episode.air_date is not None and episode.air_date <= as_of
        )
