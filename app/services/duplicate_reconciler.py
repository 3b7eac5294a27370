"""
app/services/duplicate_reconciler.py

Matches resolved entities against the target collection and applies the
caller's duplicate policy.
"""

from __future__ import annotations

import logging

from app.domain.collection_import import (
    CollectionEntry,
    CollectionEntryUpdate,
    DuplicatePolicy,
    MediaKind,
    NewCollectionEntry,
    ResolvedEntity,
)
from app.repositories.base import CollectionAdapter

logger = logging.getLogger(__name__)


class ReconcileDecision:
    CREATE = "create"
    SKIP = "skip"
    UPDATE = "update"


class DuplicateReconciler:
    """
    Keeps an in-job index of the collection keyed by ``(tmdb_id, media_kind)``.

    The index is loaded once from the adapter. Entries created by the job are
    registered so later rows of the same upload see them as duplicates.
    """

    def __init__(self, *, adapter: CollectionAdapter, policy: str) -> None:
        if policy not in DuplicatePolicy.ALL:
            raise ValueError(f"Unsupported duplicate policy: {policy}")
        self._adapter = adapter
        self._policy = policy
        self._index: dict[tuple[int, str], CollectionEntry] = {}
        for entry in adapter.list_entries():
            self._index.setdefault(entry.key, entry)
        logger.debug(
            "Duplicate index loaded collection=%s entries=%s",
            adapter.collection_type,
            len(self._index),
        )

    def entries(self) -> list[CollectionEntry]:
        return list(self._index.values())

    def find(self, entity: ResolvedEntity) -> CollectionEntry | None:
        return self._index.get(entity.key)

    def decide(self, entity: ResolvedEntity) -> tuple[str, CollectionEntry | None]:
        existing = self.find(entity)
        if existing is None:
            return ReconcileDecision.CREATE, None
        if self._policy == DuplicatePolicy.UPDATE:
            return ReconcileDecision.UPDATE, existing
        return ReconcileDecision.SKIP, existing

    def update(
        self,
        existing: CollectionEntry,
        entity: ResolvedEntity,
        *,
        supplied_date: str | None = None,
        note: str | None = None,
        order: int | None = None,
    ) -> CollectionEntry:
        """
        Overwrite the title, plus date, note and order when the row supplied them.
        """

        is_movie = entity.media_kind == MediaKind.MOVIE
        changes = CollectionEntryUpdate(
            title=entity.title,
            release_date=supplied_date if is_movie else None,
            first_air_date=None if is_movie else supplied_date,
            note=note if self._adapter.supports_note else None,
            order=order,
        )
        updated = self._adapter.update_entry(existing.id, changes)
        self.register(updated)
        return updated

    def create(
        self,
        entity: ResolvedEntity,
        *,
        order: int,
        note: str | None = None,
    ) -> CollectionEntry:
        created = self._adapter.create_entry(
            NewCollectionEntry(
                entity=entity,
                order=order,
                note=note if self._adapter.supports_note else None,
            )
        )
        self.register(created)
        return created

    def register(self, entry: CollectionEntry) -> None:
        self._index[entry.key] = entry
