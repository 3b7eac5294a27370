"""
app/repositories/collection_ownership_repository.py

Resolves import targets and checks that the caller owns them.
"""

from __future__ import annotations

import uuid

from sqlalchemy.orm import Session

from app.repositories.base import CollectionAccessDeniedError, CollectionNotFoundError
from db.models.playlist import Playlist
from db.models.user_list import UserList


class CollectionOwnershipRepository:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get_owned_list(self, *, list_id: uuid.UUID, user_id: str) -> UserList:
        user_list = self._session.get(UserList, list_id)
        if user_list is None:
            raise CollectionNotFoundError("List not found")
        if user_list.user_id != user_id:
            raise CollectionAccessDeniedError("Forbidden")
        return user_list

    def get_owned_playlist(self, *, playlist_id: uuid.UUID, user_id: str) -> Playlist:
        playlist = self._session.get(Playlist, playlist_id)
        if playlist is None:
            raise CollectionNotFoundError("Playlist not found")
        if playlist.user_id != user_id:
            raise CollectionAccessDeniedError("Forbidden")
        return playlist
