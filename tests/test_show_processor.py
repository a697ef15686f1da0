"""Tests for turning TMDB payloads into shows and seasons."""

from datetime import date

from binge_tracker.models.season import ReleasePattern, SeasonState
from binge_tracker.models.show import ShowStatus
from binge_tracker.models.tmdb import (
    TMDBEpisode,
    TMDBSeasonDetails,
    TMDBSeasonSummary,
    TMDBShowDetails,
)
from binge_tracker.services.show_processor import ShowProcessor, parse_date

from conftest import weekly_season_details


def test_parse_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date(" 2024-01-15 ") == date(2024, 1, 15)


def test_parse_date_blank_or_malformed():
    """TMDB sends empty strings for unknown dates."""
    assert parse_date(None) is None
    assert parse_date("") is None
    assert parse_date("   ") is None
    assert parse_date("not-a-date") is None
    assert parse_date("2024-13-40") is None


def test_show_status_mapping():
    assert ShowStatus.from_tmdb("Returning Series") == ShowStatus.RETURNING
    assert ShowStatus.from_tmdb("Ended") == ShowStatus.ENDED
    assert ShowStatus.from_tmdb("In Production") == ShowStatus.IN_PRODUCTION
    assert ShowStatus.from_tmdb("Pilot") == ShowStatus.UNKNOWN
    assert ShowStatus.from_tmdb(None) == ShowStatus.UNKNOWN


def test_process_show(as_of):
    details = TMDBShowDetails(
        id=1399,
        name="Dragon Keep",
        first_air_date="2011-04-17",
        status="Ended",
        number_of_seasons=8,
        number_of_episodes=73,
        in_production=False,
    )

    show = ShowProcessor().process_show(details, as_of)

    assert show.tmdb_id == 1399
    assert show.title == "Dragon Keep"
    assert show.first_air_date == date(2011, 4, 17)
    assert show.status == ShowStatus.ENDED
    assert show.number_of_seasons == 8
    assert show.added_date == as_of
    assert show.seasons == []


def test_process_season_weekly_airing():
    """Half-aired weekly season gets an estimated finale and is airing."""
    details = weekly_season_details(500, 2, date(2024, 1, 1), episode_count=10, dated_episodes=4)
    as_of = date(2024, 1, 20)

    season = ShowProcessor().process_season(details, as_of)

    assert season.tmdb_id == details.id
    assert season.season_number == 2
    assert season.episode_count == 10
    assert len(season.episodes) == 10
    assert season.premiere_date == date(2024, 1, 1)
    assert season.release_pattern == ReleasePattern.WEEKLY
    assert season.finale_date == date(2024, 3, 4)
    assert season.is_finale_estimated is True
    assert season.aired_episode_count == 3
    assert season.state == SeasonState.AIRING


def test_process_season_all_at_once():
    episodes = [
        TMDBEpisode(id=n, episode_number=n, season_number=1, air_date="2024-06-14")
        for n in range(1, 9)
    ]
    details = TMDBSeasonDetails(id=77, season_number=1, air_date="2024-06-14", episodes=episodes)

    season = ShowProcessor().process_season(details, date(2024, 6, 14))

    assert season.release_pattern == ReleasePattern.ALL_AT_ONCE
    assert season.finale_date == date(2024, 6, 14)
    assert season.state == SeasonState.BINGE_READY
    assert season.name == "Season 1"


def test_process_season_without_episodes(as_of):
    """An announced season with no episode list yet."""
    details = TMDBSeasonDetails(id=90, season_number=3, air_date="", episodes=None)

    season = ShowProcessor().process_season(details, as_of)

    assert season.episode_count == 0
    assert season.premiere_date is None
    assert season.state == SeasonState.ANTICIPATED


def test_process_episodes_skips_invalid_numbers():
    details = TMDBSeasonDetails(
        id=91,
        season_number=1,
        episodes=[
            TMDBEpisode(id=1, episode_number=0, season_number=1, air_date="2024-01-01"),
            TMDBEpisode(id=2, episode_number=1, season_number=1, air_date="2024-01-08"),
        ],
    )

    episodes = ShowProcessor().process_episodes(details)

    assert [e.episode_number for e in episodes] == [1]
    assert episodes[0].name == "Episode 1"
    assert episodes[0].air_date == date(2024, 1, 8)


def test_process_season_summary():
    """Summary-only seasons know their premiere but not their cadence."""
    summary = TMDBSeasonSummary(
        id=55, season_number=4, name="Season 4", episode_count=10, air_date="2024-09-01"
    )

    season = ShowProcessor().process_season_summary(summary, date(2024, 8, 1))

    assert season.premiere_date == date(2024, 9, 1)
    assert season.finale_date is None
    assert season.episode_count == 10
    assert season.release_pattern == ReleasePattern.UNKNOWN
    assert season.state == SeasonState.PREMIERING


def test_regular_seasons_skip_specials():
    details = TMDBShowDetails(
        id=1,
        name="Show",
        seasons=[
            TMDBSeasonSummary(id=3, season_number=2),
            TMDBSeasonSummary(id=1, season_number=0, name="Specials"),
            TMDBSeasonSummary(id=2, season_number=1),
        ],
    )

    assert [s.season_number for s in details.regular_seasons] == [1, 2]
