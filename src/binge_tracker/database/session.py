"""Database session management."""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from .base import Base
from .config import get_database_echo, get_database_url

logger = logging.getLogger(__name__)


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for a database URL.

    SQLite connections are opened per session so they never outlive an event loop.
    """
    return create_async_engine(
        database_url,
        echo=echo,
        poolclass=NullPool if database_url.startswith("sqlite") else None,
    )


def build_session_factory(bind: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory bound to an engine."""
    return async_sessionmaker(
        bind,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


# Default engine and session factory from environment settings
engine = build_engine(get_database_url(), echo=get_database_echo())
SessionLocal = build_session_factory(engine)


async def init_db(bind: Optional[AsyncEngine] = None) -> None:
    """
    Initialize database tables.

    Creates all tables defined in ORM models.

    Args:
        bind: Engine to use (default engine if not given)
    """
    async with (bind or engine).begin() as conn:
        # Import all models to register them with Base
        from .models import EpisodeORM, SeasonORM, ShowORM  # noqa: F401

        await conn.run_sync(Base.metadata.create_all)

    logger.info("Database initialized successfully")
