"""
db/models/watchlist_item.py

Per-user watchlist entries. The watchlist is an implicit singleton keyed by
the owning user.
"""

from __future__ import annotations

from sqlalchemy import Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base, MediaItemMixin, TimestampMixin, UUIDPrimaryKeyMixin


class WatchlistItem(Base, UUIDPrimaryKeyMixin, MediaItemMixin, TimestampMixin):
    __tablename__ = "watchlist_items"

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Owning user identifier",
    )
    order: Mapped[int] = mapped_column(
        "order",
        Integer,
        nullable=False,
        default=1,
        comment="1-based display order",
    )

    __table_args__ = (
        UniqueConstraint(
            "user_id",
            "tmdb_id",
            "media_type",
            name="uq_watchlist_items_user_tmdb_media",
        ),
        Index("ix_watchlist_items_user_id", "user_id"),
        Index("ix_watchlist_items_user_order", "user_id", "order"),
    )
