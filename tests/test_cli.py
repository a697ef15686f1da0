"""Tests for the command line interface."""

import json

from typer.testing import CliRunner

from binge_tracker import __version__
from binge_tracker.cli import app, load_season_file

runner = CliRunner()

SEASON = {
    "season_air_date": "2024-01-01",
    "episode_count": 10,
    "episodes": [
        {"episode_number": 1, "air_date": "2024-01-01"},
        {"episode_number": 2, "air_date": "2024-01-08"},
    ],
}


def test_version():
    result = runner.invoke(app, ["version"])

    assert result.exit_code == 0
    assert __version__ in result.stdout


def test_resolve_json_file(tmp_path):
    season_file = tmp_path / "season.json"
    season_file.write_text(json.dumps(SEASON))

    result = runner.invoke(app, ["resolve", str(season_file), "--as-of", "2024-01-20"])

    assert result.exit_code == 0
    assert "weekly" in result.stdout
    assert "2024-03-04" in result.stdout
    assert "airing" in result.stdout


def test_load_yaml_season_file(tmp_path):
    season_file = tmp_path / "season.yaml"
    season_file.write_text(
        "episode_count: 2\n"
        "episodes:\n"
        "  - episode_number: 1\n"
        "    air_date: 2024-06-14\n"
        "  - episode_number: 2\n"
        "    air_date: 2024-06-14\n"
    )

    request = load_season_file(season_file)

    assert request.episode_count == 2
    assert len(request.to_episodes()) == 2


def test_resolve_missing_file(tmp_path):
    result = runner.invoke(app, ["resolve", str(tmp_path / "nope.json")])

    assert result.exit_code == 1


def test_resolve_invalid_file(tmp_path):
    season_file = tmp_path / "broken.json"
    season_file.write_text("{not json")

    result = runner.invoke(app, ["resolve", str(season_file)])

    assert result.exit_code == 1


def test_serve_builds_app_from_config_file(tmp_path, monkeypatch):
    """Every setting in the config file reaches the served app."""
    db_path = tmp_path / "served.db"
    config_file = tmp_path / "config.yaml"
    config_file.write_text(
        "port: 8123\n"
        "weekly_tolerance_days: 3\n"
        "tmdb_api_key: from-file\n"
        f"database_url: sqlite+aiosqlite:///{db_path}\n"
    )
    served = {}

    def fake_run(served_app, **kwargs):
        served["app"] = served_app
        served.update(kwargs)

    monkeypatch.setattr("uvicorn.run", fake_run)

    result = runner.invoke(app, ["serve", "--config", str(config_file)])

    assert result.exit_code == 0
    assert served["port"] == 8123
    state = served["app"].state
    assert state.settings.tmdb_api_key == "from-file"
    assert state.engine.url.database == str(db_path)
    assert state.show_tracker.resolver.weekly_tolerance_days == 3
    assert state.show_tracker.catalog.api_key == "from-file"
