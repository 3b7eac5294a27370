"""
app/repositories/base.py

Collection adapter contract consumed by the import engine.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from app.domain.collection_import import (
    CollectionEntry,
    CollectionEntryUpdate,
    NewCollectionEntry,
)


class CollectionPersistenceError(RuntimeError):
    """
    Raised when a collection write cannot be committed.
    """


class CollectionNotFoundError(LookupError):
    """Raised when a referenced list or playlist does not exist."""


class CollectionAccessDeniedError(PermissionError):
    """Raised when the caller does not own the referenced collection."""


class CollectionAdapter(ABC):
    """
    Capability set the import engine needs from one target collection.

    Watchlist, list and playlist storage differ only in their owning key,
    the name of their ordering column and whether entries carry a note.
    """

    collection_type: str
    supports_note: bool = False

    @abstractmethod
    def list_entries(self) -> list[CollectionEntry]:
        """
        Return every entry currently stored in the collection.
        """

    @abstractmethod
    def max_order(self) -> int:
        """
        Return the highest stored order, or 0 for an empty collection.
        """

    @abstractmethod
    def create_entry(self, entry: NewCollectionEntry) -> CollectionEntry:
        """
        Persist a new entry and return its snapshot.
        """

    @abstractmethod
    def update_entry(self, entry_id: str, changes: CollectionEntryUpdate) -> CollectionEntry:
        """
        Apply field changes to an existing entry and return its snapshot.
        """
