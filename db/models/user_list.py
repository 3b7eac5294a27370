"""
db/models/user_list.py

User-owned named lists and their entries.
"""

from __future__ import annotations

import uuid

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base, MediaItemMixin, TimestampMixin, UUIDPrimaryKeyMixin


class UserList(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    __tablename__ = "user_lists"

    user_id: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Owning user identifier",
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_public: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    items: Mapped[list["ListItem"]] = relationship(
        back_populates="user_list",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    __table_args__ = (Index("ix_user_lists_user_id", "user_id"),)


class ListItem(Base, UUIDPrimaryKeyMixin, MediaItemMixin, TimestampMixin):
    __tablename__ = "list_items"

    list_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("user_lists.id", ondelete="CASCADE"),
        nullable=False,
    )
    position: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=1,
        comment="1-based display position",
    )

    user_list: Mapped[UserList] = relationship(back_populates="items")

    __table_args__ = (
        UniqueConstraint("list_id", "tmdb_id", "media_type", name="uq_list_items_list_tmdb_media"),
        Index("ix_list_items_list_id", "list_id"),
        Index("ix_list_items_list_position", "list_id", "position"),
    )
