"""Followed show API endpoints."""

from fastapi import APIRouter, HTTPException

from binge_tracker.api.deps import ApiKeyDep, AsOfDep, ShowTrackerDep
from binge_tracker.core.exceptions import (
    CatalogUnavailableError,
    RefreshFailedError,
    ShowNotFoundError,
    TMDBError,
    TMDBShowNotFound,
)
from binge_tracker.models.api import RefreshSummary
from binge_tracker.models.show import Show

router = APIRouter(prefix="/api/shows", tags=["shows"])


def _refresh_failed(error: RefreshFailedError) -> HTTPException:
    """Map a failed refresh to 404 when TMDB no longer knows the show, else 502."""
    if isinstance(error.__cause__, TMDBShowNotFound):
        return HTTPException(status_code=404, detail="Show not found in TMDB")
    return HTTPException(status_code=502, detail=str(error))


@router.get("", response_model=list[Show])
async def list_shows(show_tracker: ShowTrackerDep) -> list[Show]:
    """List all followed shows."""
    return await show_tracker.list_shows()


@router.post("/refresh", response_model=RefreshSummary)
async def refresh_all_shows(
    show_tracker: ShowTrackerDep,
    as_of: AsOfDep,
    _: ApiKeyDep,
) -> RefreshSummary:
    """Refresh every followed show from TMDB."""
    try:
        return await show_tracker.refresh_all(as_of)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))


@router.post("/follow/{tmdb_id}", response_model=Show)
async def follow_show(
    tmdb_id: int,
    show_tracker: ShowTrackerDep,
    as_of: AsOfDep,
    _: ApiKeyDep,
) -> Show:
    """Follow a show by TMDB ID."""
    try:
        return await show_tracker.follow_show(tmdb_id, as_of)
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except TMDBShowNotFound:
        raise HTTPException(status_code=404, detail="Show not found in TMDB")
    except RefreshFailedError as e:
        raise _refresh_failed(e)
    except TMDBError as e:
        raise HTTPException(status_code=502, detail=str(e))


@router.get("/{show_id}", response_model=Show)
async def get_show(show_id: int, show_tracker: ShowTrackerDep) -> Show:
    """Get a followed show with its seasons."""
    try:
        return await show_tracker.get_show(show_id)
    except ShowNotFoundError:
        raise HTTPException(status_code=404, detail="Show not found")


@router.post("/{show_id}/refresh", response_model=Show)
async def refresh_show(
    show_id: int,
    show_tracker: ShowTrackerDep,
    as_of: AsOfDep,
    _: ApiKeyDep,
) -> Show:
    """Re-fetch a followed show from TMDB."""
    try:
        return await show_tracker.refresh_show(show_id, as_of)
    except ShowNotFoundError:
        raise HTTPException(status_code=404, detail="Show not found")
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except RefreshFailedError as e:
        raise _refresh_failed(e)


@router.delete("/{show_id}")
async def unfollow_show(
    show_id: int,
    show_tracker: ShowTrackerDep,
    _: ApiKeyDep,
) -> dict:
    """Stop following a show."""
    try:
        await show_tracker.unfollow_show(show_id)
    except ShowNotFoundError:
        raise HTTPException(status_code=404, detail="Show not found")
    return {"status": "ok", "message": "Show unfollowed"}
