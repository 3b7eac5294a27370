"""
app/repositories package marker.
"""

from app.repositories.base import (
    CollectionAccessDeniedError,
    CollectionAdapter,
    CollectionNotFoundError,
    CollectionPersistenceError,
)
from app.repositories.collection_entry_repository import (
    ListItemRepository,
    PlaylistItemRepository,
    WatchlistRepository,
)
from app.repositories.collection_ownership_repository import CollectionOwnershipRepository

__all__ = [
    "CollectionAccessDeniedError",
    "CollectionAdapter",
    "CollectionNotFoundError",
    "CollectionOwnershipRepository",
    "CollectionPersistenceError",
    "ListItemRepository",
    "PlaylistItemRepository",
    "WatchlistRepository",
]
