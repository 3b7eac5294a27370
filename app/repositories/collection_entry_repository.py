"""
app/repositories/collection_entry_repository.py

SQLAlchemy collection adapters for watchlist, list and playlist entries.

Every write commits immediately so a later row failure never rolls back an
entry an earlier row produced.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, ClassVar

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.domain.collection_import import (
    CollectionEntry,
    CollectionEntryUpdate,
    NewCollectionEntry,
)
from app.repositories.base import CollectionAdapter, CollectionPersistenceError
from db.models.playlist import PlaylistItem
from db.models.user_list import ListItem
from db.models.watchlist_item import WatchlistItem

logger = logging.getLogger(__name__)


class _SQLAlchemyCollectionRepository(CollectionAdapter):
    """
    Shared adapter over one entry table scoped by an owning key.
    """

    model: ClassVar[type[Any]]
    owner_attribute: ClassVar[str]
    order_attribute: ClassVar[str] = "order"

    def __init__(self, session: Session, owner_id: Any) -> None:
        self._session = session
        self._owner_id = owner_id

    def list_entries(self) -> list[CollectionEntry]:
        stmt = (
            select(self.model)
            .where(self._owner_column() == self._owner_id)
            .order_by(self._order_column())
        )
        return [self._to_entry(record) for record in self._session.scalars(stmt).all()]

    def max_order(self) -> int:
        stmt = select(func.max(self._order_column())).where(self._owner_column() == self._owner_id)
        value = self._session.scalar(stmt)
        return int(value) if value is not None else 0

    def create_entry(self, entry: NewCollectionEntry) -> CollectionEntry:
        entity = entry.entity
        record = self.model(
            tmdb_id=entity.tmdb_id,
            media_type=entity.media_kind,
            title=entity.title,
            poster_path=entity.poster_path,
            backdrop_path=entity.backdrop_path,
            release_date=entity.release_date,
            first_air_date=entity.first_air_date,
            **{
                self.owner_attribute: self._owner_id,
                self.order_attribute: entry.order,
            },
        )
        if self.supports_note:
            record.note = entry.note

        self._session.add(record)
        self._commit(action="create", tmdb_id=entity.tmdb_id)
        return self._to_entry(record)

    def update_entry(self, entry_id: str, changes: CollectionEntryUpdate) -> CollectionEntry:
        record = self._session.get(self.model, uuid.UUID(entry_id))
        if record is None or getattr(record, self.owner_attribute) != self._owner_id:
            raise CollectionPersistenceError(f"Collection entry {entry_id} not found.")

        record.title = changes.title
        if changes.release_date is not None:
            record.release_date = changes.release_date
        if changes.first_air_date is not None:
            record.first_air_date = changes.first_air_date
        if changes.note is not None and self.supports_note:
            record.note = changes.note
        if changes.order is not None:
            setattr(record, self.order_attribute, changes.order)

        self._commit(action="update", tmdb_id=record.tmdb_id)
        return self._to_entry(record)

    def _commit(self, *, action: str, tmdb_id: int) -> None:
        try:
            self._session.commit()
        except SQLAlchemyError as exc:
            self._session.rollback()
            logger.error(
                "Collection write failed collection=%s action=%s tmdb_id=%s error=%s",
                self.collection_type,
                action,
                tmdb_id,
                exc,
            )
            raise CollectionPersistenceError("Failed to persist collection entry.") from exc

    def _owner_column(self) -> Any:
        return getattr(self.model, self.owner_attribute)

    def _order_column(self) -> Any:
        return getattr(self.model, self.order_attribute)

    def _to_entry(self, record: Any) -> CollectionEntry:
        return CollectionEntry(
            id=str(record.id),
            tmdb_id=record.tmdb_id,
            media_kind=record.media_type,
            title=record.title,
            order=getattr(record, self.order_attribute),
            poster_path=record.poster_path,
            backdrop_path=record.backdrop_path,
            release_date=record.release_date,
            first_air_date=record.first_air_date,
            note=record.note if self.supports_note else None,
        )


class WatchlistRepository(_SQLAlchemyCollectionRepository):
    collection_type = "watchlist"
    model = WatchlistItem
    owner_attribute = "user_id"

    def __init__(self, session: Session, user_id: str) -> None:
        super().__init__(session, user_id)


class ListItemRepository(_SQLAlchemyCollectionRepository):
    collection_type = "list"
    model = ListItem
    owner_attribute = "list_id"
    order_attribute = "position"

    def __init__(self, session: Session, list_id: uuid.UUID) -> None:
        super().__init__(session, list_id)


class PlaylistItemRepository(_SQLAlchemyCollectionRepository):
    collection_type = "playlist"
    supports_note = True
    model = PlaylistItem
    owner_attribute = "playlist_id"

    def __init__(self, session: Session, playlist_id: uuid.UUID) -> None:
        super().__init__(session, playlist_id)
