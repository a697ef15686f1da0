"""API dependencies."""

from datetime import date
from typing import Annotated, Optional

from fastapi import Depends, Header, HTTPException, Query

from binge_tracker.core.config import Settings, settings
from binge_tracker.services.release_pattern import ReleasePatternResolver
from binge_tracker.services.season_state import SeasonLifecycleClassifier
from binge_tracker.services.show_tracker import ShowTracker

# Global service instances
_show_tracker: ShowTracker | None = None
_resolver: ReleasePatternResolver | None = None
_classifier: SeasonLifecycleClassifier | None = None
_settings: Settings | None = None


def init_services(
    show_tracker: ShowTracker,
    resolver: ReleasePatternResolver,
    classifier: SeasonLifecycleClassifier,
    app_settings: Optional[Settings] = None,
) -> None:
    """Initialize service instances."""
    global _show_tracker, _resolver, _classifier, _settings
    _show_tracker = show_tracker
    _resolver = resolver
    _classifier = classifier
    _settings = app_settings


def get_show_tracker() -> ShowTracker:
    """Get the show tracker instance."""
    if _show_tracker is None:
        raise RuntimeError("Services not initialized")
    return _show_tracker


def get_resolver() -> ReleasePatternResolver:
    """Get the release pattern resolver instance."""
    if _resolver is None:
        raise RuntimeError("Services not initialized")
    return _resolver


def get_classifier() -> SeasonLifecycleClassifier:
    """Get the season lifecycle classifier instance."""
    if _classifier is None:
        raise RuntimeError("Services not initialized")
    return _classifier


def get_as_of(
    as_of: Annotated[Optional[date], Query(description="Reference date, defaults to today")] = None,
) -> date:
    """Reference date for a request."""
    return as_of or date.today()


async def verify_api_key(
    authorization: Annotated[str | None, Header()] = None,
) -> None:
    """Verify API key if configured."""
    api_key = (_settings or settings).api_key
    if not api_key:
        return  # No API key required

    if not authorization:
        raise HTTPException(status_code=401, detail="Missing authorization header")

    # Expect "Bearer <token>"
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise HTTPException(status_code=401, detail="Invalid authorization format")

    if parts[1] != api_key:
        raise HTTPException(status_code=401, detail="Invalid API key")


# Type aliases for dependency injection
ShowTrackerDep = Annotated[ShowTracker, Depends(get_show_tracker)]
ResolverDep = Annotated[ReleasePatternResolver, Depends(get_resolver)]
ClassifierDep = Annotated[SeasonLifecycleClassifier, Depends(get_classifier)]
AsOfDep = Annotated[date, Depends(get_as_of)]
ApiKeyDep = Annotated[None, Depends(verify_api_key)]
