"""Initial database schema.

Revision ID: 001
Revises:
Create Date: 2026-10-19

Creates the shows, seasons and episodes tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Create shows table
    op.create_table(
        "shows",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("tmdb_id", sa.Integer, nullable=False, unique=True, index=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("overview", sa.Text, nullable=True),
        sa.Column("poster_path", sa.String(255), nullable=True),
        sa.Column("backdrop_path", sa.String(255), nullable=True),
        sa.Column("first_air_date", sa.Date, nullable=True),
        sa.Column("status", sa.String(20), default="unknown"),
        sa.Column("number_of_seasons", sa.Integer, default=0),
        sa.Column("number_of_episodes", sa.Integer, default=0),
        sa.Column("in_production", sa.Boolean, default=False),
        sa.Column("vote_average", sa.Float, nullable=True),
        sa.Column("added_date", sa.Date, nullable=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now()),
    )

    # Create seasons table
    op.create_table(
        "seasons",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "show_id",
            sa.Integer,
            sa.ForeignKey("shows.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("tmdb_id", sa.Integer, nullable=True, index=True),
        sa.Column("season_number", sa.Integer, nullable=False),
        sa.Column("name", sa.String(255), default=""),
        sa.Column("overview", sa.Text, default=""),
        sa.Column("poster_path", sa.String(255), nullable=True),
        sa.Column("vote_average", sa.Float, nullable=True),
        sa.Column("premiere_date", sa.Date, nullable=True),
        sa.Column("finale_date", sa.Date, nullable=True),
        sa.Column("is_finale_estimated", sa.Boolean, default=False),
        sa.Column("episode_count", sa.Integer, default=0),
        sa.Column("aired_episode_count", sa.Integer, default=0),
        sa.Column("release_pattern", sa.String(20), default="unknown"),
        sa.Column("state", sa.String(20), default="anticipated", index=True),
        sa.Column("watched_date", sa.Date, nullable=True),
    )

    # Create episodes table
    op.create_table(
        "episodes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column(
            "season_id",
            sa.Integer,
            sa.ForeignKey("seasons.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("tmdb_id", sa.Integer, nullable=True),
        sa.Column("episode_number", sa.Integer, nullable=False),
        sa.Column("season_number", sa.Integer, default=0),
        sa.Column("name", sa.String(255), default=""),
        sa.Column("overview", sa.Text, nullable=True),
        sa.Column("air_date", sa.Date, nullable=True),
        sa.Column("runtime", sa.Integer, nullable=True),
        sa.Column("still_path", sa.String(255), nullable=True),
        sa.Column("vote_average", sa.Float, nullable=True),
    )


def downgrade() -> None:
    op.drop_table("episodes")
    op.drop_table("seasons")
    op.drop_table("shows")
