"""
tests/test_collection_import_router.py

HTTP-level tests for the collection import endpoints. Repositories are
replaced with in-memory collections so no database is needed.
"""

from __future__ import annotations

import uuid

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from app.api.routers import collection_import as collection_import_module
from app.api.routers import collection_import_router
from app.config import CollectionImportSettings, get_collection_import_settings
from app.repositories.base import CollectionAccessDeniedError, CollectionNotFoundError
from app.services.collection_import_service import (
    CollectionImportService,
    get_collection_import_service,
)
from db.session import get_db
from tests.fakes import FakeCatalog, InMemoryCollection, movie

NATIVE_CSV = b"Title,Type,TMDB ID\nHeat,movie,949\nHeat,movie,949\n"
OWNER = "user-1"
KNOWN_LIST_ID = uuid.uuid4()
FOREIGN_LIST_ID = uuid.uuid4()


class FakeOwnershipRepository:
    def __init__(self, session: object) -> None:
        self._session = session

    def _check(self, collection_id: uuid.UUID, user_id: str, label: str) -> None:
        if collection_id not in {KNOWN_LIST_ID, FOREIGN_LIST_ID}:
            raise CollectionNotFoundError(f"{label} not found")
        if collection_id == FOREIGN_LIST_ID or user_id != OWNER:
            raise CollectionAccessDeniedError("Forbidden")

    def get_owned_list(self, *, list_id: uuid.UUID, user_id: str) -> None:
        self._check(list_id, user_id, "List")

    def get_owned_playlist(self, *, playlist_id: uuid.UUID, user_id: str) -> None:
        self._check(playlist_id, user_id, "Playlist")


@pytest.fixture()
def collections(monkeypatch: pytest.MonkeyPatch) -> dict[str, InMemoryCollection]:
    created = {
        "watchlist": InMemoryCollection(collection_type="watchlist"),
        "list": InMemoryCollection(collection_type="list"),
        "playlist": InMemoryCollection(collection_type="playlist", supports_note=True),
    }
    monkeypatch.setattr(
        collection_import_module, "WatchlistRepository", lambda db, user_id: created["watchlist"]
    )
    monkeypatch.setattr(collection_import_module, "ListItemRepository", lambda db, list_id: created["list"])
    monkeypatch.setattr(
        collection_import_module, "PlaylistItemRepository", lambda db, playlist_id: created["playlist"]
    )
    monkeypatch.setattr(collection_import_module, "CollectionOwnershipRepository", FakeOwnershipRepository)
    return created


@pytest.fixture()
def client(collections: dict[str, InMemoryCollection]) -> TestClient:
    app = FastAPI()
    app.include_router(collection_import_router)

    service = CollectionImportService(
        catalog=FakeCatalog(details=[movie(949, "Heat", poster_path="/heat.jpg", release_date="1995-12-15")]),
        log_row_errors=False,
    )
    app.dependency_overrides[get_db] = lambda: None
    app.dependency_overrides[get_collection_import_service] = lambda: service
    app.dependency_overrides[get_collection_import_settings] = lambda: CollectionImportSettings(
        max_upload_bytes=256
    )
    return TestClient(app)


def _upload(content: bytes = NATIVE_CSV, filename: str = "export.csv") -> dict:
    return {"file": (filename, content, "text/csv")}


def test_watchlist_import_reports_duplicates_as_skipped(
    client: TestClient,
    collections: dict[str, InMemoryCollection],
) -> None:
    response = client.post("/watchlist/import", files=_upload(), headers={"X-User-Id": OWNER})

    assert response.status_code == 200
    assert response.json() == {
        "success": True,
        "imported": 1,
        "skipped": 1,
        "errors": [],
        "warnings": [],
    }
    assert len(collections["watchlist"].created) == 1


def test_missing_identity_is_unauthorized(client: TestClient) -> None:
    response = client.post("/watchlist/import", files=_upload())

    assert response.status_code == 401


def test_invalid_duplicate_action(client: TestClient) -> None:
    response = client.post(
        "/watchlist/import",
        files=_upload(),
        data={"duplicate_action": "merge"},
        headers={"X-User-Id": OWNER},
    )

    assert response.status_code == 400
    assert "duplicate_action" in response.json()["detail"]


def test_non_csv_upload_is_rejected(client: TestClient) -> None:
    response = client.post(
        "/watchlist/import",
        files={"file": ("export.json", b"{}", "application/json")},
        headers={"X-User-Id": OWNER},
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Only CSV files are allowed."


def test_oversized_upload(client: TestClient) -> None:
    content = NATIVE_CSV + b"Heat,movie,949\n" * 50

    response = client.post("/watchlist/import", files=_upload(content), headers={"X-User-Id": OWNER})

    assert response.status_code == 413


def test_mapping_failure_returns_structured_detail(client: TestClient) -> None:
    response = client.post(
        "/watchlist/import",
        files=_upload(b"Rating,Comment\n5,great\n"),
        headers={"X-User-Id": OWNER},
    )

    assert response.status_code == 400
    assert isinstance(response.json()["detail"], dict)


def test_empty_upload_is_rejected(client: TestClient) -> None:
    response = client.post("/watchlist/import", files=_upload(b""), headers={"X-User-Id": OWNER})

    assert response.status_code == 400


def test_list_import_with_update_policy(
    client: TestClient,
    collections: dict[str, InMemoryCollection],
) -> None:
    response = client.post(
        f"/lists/{KNOWN_LIST_ID}/import",
        files=_upload(),
        data={"duplicate_action": "update"},
        headers={"X-User-Id": OWNER},
    )

    assert response.status_code == 200
    assert response.json()["imported"] == 2
    assert response.json()["skipped"] == 0
    assert len(collections["list"].created) == 1
    assert len(collections["list"].updates) == 1


def test_unknown_list(client: TestClient) -> None:
    response = client.post(f"/lists/{uuid.uuid4()}/import", files=_upload(), headers={"X-User-Id": OWNER})

    assert response.status_code == 404
    assert response.json()["detail"] == "List not found"


def test_playlist_owned_by_someone_else(client: TestClient) -> None:
    response = client.post(
        f"/playlists/{FOREIGN_LIST_ID}/import",
        files=_upload(),
        headers={"X-User-Id": OWNER},
    )

    assert response.status_code == 403


def test_preview_does_not_write(
    client: TestClient,
    collections: dict[str, InMemoryCollection],
) -> None:
    response = client.post("/imports/preview", files=_upload())

    assert response.status_code == 200
    body = response.json()
    assert body["dialect"] == "native"
    assert body["total_rows"] == 2
    assert body["is_valid"] is True
    assert body["column_mapping"]["canonical_id"] == "TMDB ID"
    assert all(not collection.created for collection in collections.values())
