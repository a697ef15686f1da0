"""API routers."""

from .resolve import router as resolve_router
from .seasons import router as seasons_router
from .shows import router as shows_router

__all__ = ["resolve_router", "seasons_router", "shows_router"]
