"""Database ORM models."""

from .show import EpisodeORM, SeasonORM, ShowORM

__all__ = [
    "ShowORM",
    "SeasonORM",
    "EpisodeORM",
]
