"""Show, season and episode ORM models."""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Boolean, Date, Float, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from ..base import Base


class ShowORM(Base):
    """ORM model for shows table."""

    __tablename__ = "shows"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Catalog identity
    tmdb_id: Mapped[int] = mapped_column(Integer, nullable=False, unique=True, index=True)

    # Basic info
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    overview: Mapped[Optional[str]] = mapped_column(Text)
    poster_path: Mapped[Optional[str]] = mapped_column(String(255))
    backdrop_path: Mapped[Optional[str]] = mapped_column(String(255))
    first_air_date: Mapped[Optional[date]] = mapped_column(Date)
    status: Mapped[str] = mapped_column(String(20), default="unknown")
    number_of_seasons: Mapped[int] = mapped_column(Integer, default=0)
    number_of_episodes: Mapped[int] = mapped_column(Integer, default=0)
    in_production: Mapped[bool] = mapped_column(Boolean, default=False)
    vote_average: Mapped[Optional[float]] = mapped_column(Float)
    added_date: Mapped[Optional[date]] = mapped_column(Date)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        default=func.now(), onupdate=func.now()
    )

    seasons: Mapped[list["SeasonORM"]] = relationship(
        "SeasonORM",
        back_populates="show",
        cascade="all, delete-orphan",
        order_by="SeasonORM.season_number",
        lazy="selectin",
    )


class SeasonORM(Base):
    """ORM model for seasons table."""

    __tablename__ = "seasons"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Foreign key
    show_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("shows.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Basic info
    tmdb_id: Mapped[Optional[int]] = mapped_column(Integer, index=True)
    season_number: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(255), default="")
    overview: Mapped[str] = mapped_column(Text, default="")
    poster_path: Mapped[Optional[str]] = mapped_column(String(255))
    vote_average: Mapped[Optional[float]] = mapped_column(Float)

    # Resolved dates and cadence
    premiere_date: Mapped[Optional[date]] = mapped_column(Date)
    finale_date: Mapped[Optional[date]] = mapped_column(Date)
    is_finale_estimated: Mapped[bool] = mapped_column(Boolean, default=False)
    episode_count: Mapped[int] = mapped_column(Integer, default=0)
    aired_episode_count: Mapped[int] = mapped_column(Integer, default=0)
    release_pattern: Mapped[str] = mapped_column(String(20), default="unknown")

    # Lifecycle
    state: Mapped[str] = mapped_column(String(20), default="anticipated", index=True)
    watched_date: Mapped[Optional[date]] = mapped_column(Date)

    show: Mapped["ShowORM"] = relationship("ShowORM", back_populates="seasons")
    episodes: Mapped[list["EpisodeORM"]] = relationship(
        "EpisodeORM",
        back_populates="season",
        cascade="all, delete-orphan",
        order_by="EpisodeORM.episode_number",
        lazy="selectin",
    )


class EpisodeORM(Base):
    """ORM model for episodes table."""

    __tablename__ = "episodes"

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Foreign key
    season_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("seasons.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Basic info
    tmdb_id: Mapped[Optional[int]] = mapped_column(Integer)
    episode_number: Mapped[int] = mapped_column(Integer, nullable=False)
    season_number: Mapped[int] = mapped_column(Integer, default=0)
    name: Mapped[str] = mapped_column(String(255), default="")
    overview: Mapped[Optional[str]] = mapped_column(Text)
    air_date: Mapped[Optional[date]] = mapped_column(Date)
    runtime: Mapped[Optional[int]] = mapped_column(Integer)  # minutes
    still_path: Mapped[Optional[str]] = mapped_column(String(255))
    vote_average: Mapped[Optional[float]] = mapped_column(Float)

    season: Mapped["SeasonORM"] = relationship("SeasonORM", back_populates="episodes")
