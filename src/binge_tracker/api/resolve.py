"""Stateless release pattern and lifecycle resolution endpoint."""

from datetime import date

from fastapi import APIRouter

from binge_tracker.api.deps import ClassifierDep, ResolverDep
from binge_tracker.models.api import ResolveRequest, ResolveResponse
from binge_tracker.models.season import Season

router = APIRouter(prefix="/api/resolve", tags=["resolve"])


@router.post("", response_model=ResolveResponse)
async def resolve_season(
    request: ResolveRequest,
    resolver: ResolverDep,
    classifier: ClassifierDep,
) -> ResolveResponse:
    """Resolve dates, cadence, state and countdowns for the given episode evidence."""
    as_of = request.as_of or date.today()

    date_info = resolver.resolve(
        season_air_date=request.season_air_date,
        episode_count=request.episode_count,
        episodes=request.to_episodes(),
        as_of=as_of,
    )
    season = Season(
        episode_count=request.episode_count,
        watched_date=request.watched_date,
    ).with_date_info(date_info)

    countdown = classifier.countdown(season, as_of)
    return ResolveResponse(date_info=date_info, state=countdown.state, countdown=countdown)
