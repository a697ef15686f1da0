"""Command line entry point for Binge Tracker."""

import json
from datetime import date, datetime
from pathlib import Path
from typing import Optional

import structlog
import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from binge_tracker import __version__
from binge_tracker.core.config import Settings
from binge_tracker.models.api import ResolveRequest
from binge_tracker.models.season import Season
from binge_tracker.services.release_pattern import ReleasePatternResolver
from binge_tracker.services.season_state import SeasonLifecycleClassifier

app = typer.Typer(
    name="binge-tracker",
    help="Binge Tracker - release cadence inference and season lifecycle tracking",
)
console = Console()
logger = structlog.get_logger()


def load_settings(config_path: Optional[Path]) -> Settings:
    """Load settings from file or environment."""
    if config_path and config_path.exists():
        logger.info("loading_config", path=str(config_path))
        return Settings.from_yaml(config_path)

    logger.debug("using_default_config")
    return Settings()


def load_season_file(path: Path) -> ResolveRequest:
    """Read a JSON or YAML season document."""
    with open(path) as f:
        if path.suffix.lower() in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)
    return ResolveRequest.model_validate(data or {})


def _fmt(value: object) -> str:
    if value is None:
        return "-"
    if hasattr(value, "value"):
        return str(value.value)
    return str(value)


@app.command()
def resolve(
    file: Path = typer.Argument(..., help="JSON or YAML file with season and episode dates"),
    as_of: Optional[datetime] = typer.Option(
        None,
        "--as-of",
        formats=["%Y-%m-%d"],
        help="Reference date (defaults to today)",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
) -> None:
    """Resolve release pattern, dates and state for a season file."""
    if not file.exists():
        console.print(f"[red][X][/red] File not found: {file}")
        raise typer.Exit(code=1)

    try:
        request = load_season_file(file)
    except (ValueError, ValidationError, yaml.YAMLError) as e:
        console.print(f"[red][X][/red] Could not read {file}: {e}")
        raise typer.Exit(code=1)

    settings = load_settings(config)
    resolver = ReleasePatternResolver.from_settings(settings)
    classifier = SeasonLifecycleClassifier()

    reference = as_of.date() if as_of else (request.as_of or date.today())
    episodes = request.to_episodes()
    logger.info("resolving_season", file=str(file), episodes=len(episodes), as_of=str(reference))

    date_info = resolver.resolve(
        season_air_date=request.season_air_date,
        episode_count=request.episode_count,
        episodes=episodes,
        as_of=reference,
    )
    season = Season(
        episode_count=request.episode_count,
        watched_date=request.watched_date,
    ).with_date_info(date_info)
    countdown = classifier.countdown(season, reference)

    table = Table(title=f"Season resolution as of {reference}")
    table.add_column("Field", style="bold")
    table.add_column("Value")
    table.add_row("Release pattern", _fmt(date_info.release_pattern))
    table.add_row("Premiere", _fmt(date_info.premiere_date))
    finale = _fmt(date_info.finale_date)
    if date_info.is_finale_estimated:
        finale += " (estimated)"
    table.add_row("Finale", finale)
    table.add_row("Aired episodes", f"{date_info.aired_episode_count}/{request.episode_count}")
    table.add_row("State", _fmt(countdown.state))
    table.add_row("Days until premiere", _fmt(countdown.days_until_premiere))
    table.add_row("Days until finale", _fmt(countdown.days_until_finale))
    table.add_row("Episodes remaining", _fmt(countdown.episodes_remaining))
    console.print(table)


@app.command()
def serve(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
) -> None:
    """Run the HTTP server."""
    import uvicorn

    from binge_tracker.main import create_app

    settings = load_settings(config)
    logger.info("server_starting", host=settings.host, port=settings.port, version=__version__)
    # Reload needs an import string, so it is only available via binge_tracker.main
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level="debug" if settings.debug else "info",
    )


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"Binge Tracker v{__version__}")


if __name__ == "__main__":
    app()
