"""
db/models/playlist.py

User-owned playlists. Playlist entries are the only collection entries that
carry a free-text note.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, MediaItemMixin, TimestampMixin, UUIDPrimaryKeyMixin


class Playlist(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "playlists"

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Owning user identifier",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    items: Mapped[list["PlaylistItem"]] = relationship(
        back_populates="playlist",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (Index("ix_playlists_user_id", "user_id"),)


class PlaylistItem(Base, UUIDPrimaryKeyMixin, MediaItemMixin, TimestampMixin):
    __tablename__ = "playlist_items"

    playlist_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("playlists.id", ondelete="CASCADE"),
        nullable=False,
    )
    order: Mapped[int] = mapped_column(
        "order",
        Integer,
        nullable=False,
        default=1,
        comment="1-based display order",
    )
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    playlist: Mapped[Playlist] = relationship(back_populates="items")

    __table_args__ = (
        UniqueConstraint(
            "playlist_id",
            "tmdb_id",
            "media_type",
            name="uq_playlist_items_playlist_tmdb_media",
        ),
        Index("ix_playlist_items_playlist_id", "playlist_id"),
        Index("ix_playlist_items_playlist_order", "playlist_id", "order"),
    )
