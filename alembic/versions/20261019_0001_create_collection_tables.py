"""create watchlist, list and playlist tables

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 10:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _media_item_columns() -> list[sa.Column]:
    return [
        sa.Column("tmdb_id", sa.Integer(), nullable=False),
        sa.Column("media_type", sa.String(length=10), nullable=False, comment="movie | tv"),
        sa.Column("title", sa.String(length=500), nullable=False),
        sa.Column("poster_path", sa.String(length=255), nullable=True),
        sa.Column("backdrop_path", sa.String(length=255), nullable=True),
        sa.Column("release_date", sa.Text(), nullable=True),
        sa.Column("first_air_date", sa.Text(), nullable=True),
    ]


def _timestamp_columns() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "watchlist_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False, comment="Owning user identifier"),
        *_media_item_columns(),
        sa.Column("order", sa.Integer(), nullable=False, comment="1-based display order"),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "tmdb_id", "media_type", name="uq_watchlist_items_user_tmdb_media"),
    )
    op.create_index("ix_watchlist_items_user_id", "watchlist_items", ["user_id"], unique=False)
    op.create_index("ix_watchlist_items_user_order", "watchlist_items", ["user_id", "order"], unique=False)

    op.create_table(
        "user_lists",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False, comment="Owning user identifier"),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_user_lists_user_id", "user_lists", ["user_id"], unique=False)

    op.create_table(
        "list_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("list_id", postgresql.UUID(as_uuid=True), nullable=False),
        *_media_item_columns(),
        sa.Column("position", sa.Integer(), nullable=False, comment="1-based display position"),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(["list_id"], ["user_lists.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("list_id", "tmdb_id", "media_type", name="uq_list_items_list_tmdb_media"),
    )
    op.create_index("ix_list_items_list_id", "list_items", ["list_id"], unique=False)
    op.create_index("ix_list_items_list_position", "list_items", ["list_id", "position"], unique=False)

    op.create_table(
        "playlists",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.String(length=255), nullable=False, comment="Owning user identifier"),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        *_timestamp_columns(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_playlists_user_id", "playlists", ["user_id"], unique=False)

    op.create_table(
        "playlist_items",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("playlist_id", postgresql.UUID(as_uuid=True), nullable=False),
        *_media_item_columns(),
        sa.Column("order", sa.Integer(), nullable=False, comment="1-based display order"),
        sa.Column("note", sa.Text(), nullable=True),
        *_timestamp_columns(),
        sa.ForeignKeyConstraint(["playlist_id"], ["playlists.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "playlist_id",
            "tmdb_id",
            "media_type",
            name="uq_playlist_items_playlist_tmdb_media",
        ),
    )
    op.create_index("ix_playlist_items_playlist_id", "playlist_items", ["playlist_id"], unique=False)
    op.create_index(
        "ix_playlist_items_playlist_order",
        "playlist_items",
        ["playlist_id", "order"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_playlist_items_playlist_order", table_name="playlist_items")
    op.drop_index("ix_playlist_items_playlist_id", table_name="playlist_items")
    op.drop_table("playlist_items")
    op.drop_index("ix_playlists_user_id", table_name="playlists")
    op.drop_table("playlists")
    op.drop_index("ix_list_items_list_position", table_name="list_items")
    op.drop_index("ix_list_items_list_id", table_name="list_items")
    op.drop_table("list_items")
    op.drop_index("ix_user_lists_user_id", table_name="user_lists")
    op.drop_table("user_lists")
    op.drop_index("ix_watchlist_items_user_order", table_name="watchlist_items")
    op.drop_index("ix_watchlist_items_user_id", table_name="watchlist_items")
    op.drop_table("watchlist_items")
