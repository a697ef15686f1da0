"""Season lifecycle classification."""

from datetime import date
from typing import Optional

from ..models.season import ReleasePattern, Season, SeasonCountdown, SeasonState


class SeasonLifecycleClassifier:
    """Derives a season's lifecycle state from its dates and watched status.

    State is recomputed from scratch on every call; there is no stored
    transition history. Rules are checked in order and the first match wins.
    """

    @staticmethod
    def determine_state(season: Season, as_of: date) -> SeasonState:
        """
        Determine the current state of a season.

        Args:
            season: Season with resolved dates
            as_of: Reference date

        Returns:
            The season's lifecycle state on the reference date
        """
        if season.watched_date is not None:
            return SeasonState.WATCHED

        # Not scheduled yet
        if season.premiere_date is None:
            return SeasonState.ANTICIPATED

        if as_of < season.premiere_date:
            return SeasonState.PREMIERING

        # Checked before the finale so a missing or stale finale cannot block it
        if season.release_pattern == ReleasePattern.ALL_AT_ONCE:
            return SeasonState.BINGE_READY

        # Premiere passed, end unknown
        if season.finale_date is None:
            return SeasonState.AIRING

        if as_of >= season.finale_date:
            return SeasonState.BINGE_READY

        return SeasonState.AIRING

    def is_binge_ready(self, season: Season, as_of: date) -> bool:
        """Check if a season is ready to binge."""
        return self.determine_state(season, as_of) == SeasonState.BINGE_READY

    @staticmethod
    def days_until_premiere(season: Season, as_of: date) -> Optional[int]:
        """Days until premiere, None if unknown or already reached."""
        return _days_until(season.premiere_date, as_of)

    @staticmethod
    def days_until_finale(season: Season, as_of: date) -> Optional[int]:
        """Days until finale, None if unknown or already reached."""
        return _days_until(season.finale_date, as_of)

    @staticmethod
    def is_finale_day(season: Season, as_of: date) -> bool:
        """Check if the reference date is the finale day."""
        return season.finale_date is not None and season.finale_date == as_of

    @staticmethod
    def is_complete(season: Season, as_of: date) -> bool:
        """Check if the finale has been reached."""
        return season.finale_date is not None and as_of >= season.finale_date

    @staticmethod
    def episodes_remaining(season: Season) -> Optional[int]:
        """Episodes left to air, None when the episode count is unknown."""
        if season.episode_count <= 0:
            return None
        return max(0, season.episode_count - season.aired_episode_count)

    def countdown(self, season: Season, as_of: date) -> SeasonCountdown:
        """
        Bundle every countdown figure for a season.

        Notification schedulers read these values instead of re-deriving dates.

        Args:
            season: Season with resolved dates
            as_of: Reference date

        Returns:
            SeasonCountdown for the reference date
        """
        state = self.determine_state(season, as_of)
        return SeasonCountdown(
            season_id=season.id,
            as_of=as_of,
            state=state,
            is_binge_ready=state == SeasonState.BINGE_READY,
            is_finale_day=self.is_finale_day(season, as_of),
            days_until_premiere=self.days_until_premiere(season, as_of),
            days_until_finale=self.days_until_finale(season, as_of),
            episodes_remaining=self.episodes_remaining(season),
        )


def _days_until(target: Optional[date], as_of: date) -> Optional[int]:
    if target is None or as_of >= target:
        return None
    return (target - as_of).days
