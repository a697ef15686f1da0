"""Database package initialization."""

from .base import Base
from .config import get_database_echo, get_database_url
from .session import SessionLocal, build_engine, build_session_factory, engine, init_db

__all__ = [
    "Base",
    "SessionLocal",
    "build_engine",
    "build_session_factory",
    "engine",
    "get_database_echo",
    "get_database_url",
    "init_db",
]
