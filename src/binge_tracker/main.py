"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from binge_tracker import __version__
from binge_tracker.api import resolve_router, seasons_router, shows_router
from binge_tracker.api.deps import init_services
from binge_tracker.core.config import Settings, settings
from binge_tracker.database import (
    build_engine,
    build_session_factory,
    get_database_echo,
    get_database_url,
    init_db,
)
from binge_tracker.services.release_pattern import ReleasePatternResolver
from binge_tracker.services.season_state import SeasonLifecycleClassifier
from binge_tracker.services.show_processor import ShowProcessor
from binge_tracker.services.show_tracker import ShowTracker
from binge_tracker.services.tmdb_client import TMDBClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Build the application and its services from settings.

    Args:
        app_settings: Settings to use (environment settings if not given)

    Returns:
        Configured FastAPI application
    """
    app_settings = app_settings or settings

    # Engine instances
    resolver = ReleasePatternResolver.from_settings(app_settings)
    classifier = SeasonLifecycleClassifier()

    # Initialize TMDB client if API key is configured
    tmdb_client = None
    if app_settings.tmdb_api_key:
        logger.info("TMDB API key configured, initializing client")
        tmdb_client = TMDBClient.from_settings(app_settings)
    else:
        logger.warning(
            "TMDB API key not configured, following and refreshing shows will be disabled"
        )

    engine = build_engine(get_database_url(app_settings), echo=get_database_echo(app_settings))
    show_tracker = ShowTracker(
        catalog=tmdb_client,
        processor=ShowProcessor(resolver=resolver, classifier=classifier),
        session_factory=build_session_factory(engine),
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        logger.info(f"Starting Binge Tracker v{__version__}")

        logger.info("Initializing database...")
        await init_db(engine)
        logger.info("Database initialized")

        init_services(show_tracker, resolver, classifier, app_settings)

        logger.info(f"Server ready on {app_settings.host}:{app_settings.port}")

        yield

        # Shutdown
        logger.info("Shutting down...")
        if tmdb_client:
            await tmdb_client.close()
        await engine.dispose()

    app = FastAPI(
        title="Binge Tracker",
        description="Release cadence inference and season lifecycle tracking",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = app_settings
    app.state.engine = engine
    app.state.show_tracker = show_tracker

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(resolve_router)
    app.include_router(shows_router)
    app.include_router(seasons_router)

    @app.get("/")
    async def root() -> dict:
        """Root endpoint with server info."""
        return {
            "name": "Binge Tracker",
            "version": __version__,
            "status": "running",
        }

    @app.get("/health")
    async def health() -> dict:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": __version__,
            "catalog": "enabled" if show_tracker.catalog else "disabled",
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "binge_tracker.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
