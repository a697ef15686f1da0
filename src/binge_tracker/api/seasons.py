"""Season state, countdown and watched-status API endpoints."""

from datetime import date
from typing import Optional

from fastapi import APIRouter, HTTPException

from binge_tracker.api.deps import ApiKeyDep, AsOfDep, ShowTrackerDep
from binge_tracker.core.exceptions import SeasonNotFoundError
from binge_tracker.models.api import WatchedRequest
from binge_tracker.models.season import Season, SeasonCountdown, SeasonState

router = APIRouter(prefix="/api/seasons", tags=["seasons"])


@router.get("", response_model=list[Season])
async def list_seasons(
    show_tracker: ShowTrackerDep,
    as_of: AsOfDep,
    state: Optional[SeasonState] = None,
) -> list[Season]:
    """List seasons, optionally only those currently in a given state."""
    return await show_tracker.list_seasons(as_of, state=state)


@router.get("/{season_id}/countdown", response_model=SeasonCountdown)
async def get_countdown(
    season_id: int,
    show_tracker: ShowTrackerDep,
    as_of: AsOfDep,
) -> SeasonCountdown:
    """Get state and countdown figures for a season."""
    try:
        return await show_tracker.get_countdown(season_id, as_of)
    except SeasonNotFoundError:
        raise HTTPException(status_code=404, detail="Season not found")


@router.post("/{season_id}/watched", response_model=Season)
async def mark_watched(
    season_id: int,
    show_tracker: ShowTrackerDep,
    _: ApiKeyDep,
    request: Optional[WatchedRequest] = None,
) -> Season:
    """Mark a season as watched."""
    watched_on = (request.watched_date if request else None) or date.today()
    try:
        return await show_tracker.mark_watched(season_id, watched_on)
    except SeasonNotFoundError:
        raise HTTPException(status_code=404, detail="Season not found")


@router.delete("/{season_id}/watched", response_model=Season)
async def unmark_watched(
    season_id: int,
    show_tracker: ShowTrackerDep,
    as_of: AsOfDep,
    _: ApiKeyDep,
) -> Season:
    """Clear a season's watched status."""
    try:
        return await show_tracker.unmark_watched(season_id, as_of)
    except SeasonNotFoundError:
        raise HTTPException(status_code=404, detail="Season not found")
