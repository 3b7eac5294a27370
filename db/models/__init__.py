"""
Model package exports.

Import all SQLAlchemy models here so metadata registration and Alembic
autogeneration work without extra imports.
"""

from db.models.playlist import Playlist, PlaylistItem
from db.models.user_list import ListItem, UserList
from db.models.watchlist_item import WatchlistItem

__all__ = [
    "ListItem",
    "Playlist",
    "PlaylistItem",
    "UserList",
    "WatchlistItem",
]
