"""Repositories for database access."""

from .base import BaseRepository
from .season_repository import SeasonRepository
from .show_repository import ShowRepository

__all__ = [
    "BaseRepository",
    "SeasonRepository",
    "ShowRepository",
]
