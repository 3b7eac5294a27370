"""
app/api/routers/collection_import.py

CSV import HTTP endpoints for watchlists, lists and playlists.
"""

from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_current_user_id, get_duplicate_policy, read_csv_upload
from app.parsers.csv_table_parser import MalformedTableError
from app.repositories.base import (
    CollectionAccessDeniedError,
    CollectionAdapter,
    CollectionNotFoundError,
)
from app.repositories.collection_entry_repository import (
    ListItemRepository,
    PlaylistItemRepository,
    WatchlistRepository,
)
from app.repositories.collection_ownership_repository import CollectionOwnershipRepository
from app.schemas.collection_import import ImportPreviewResponse, ImportReportResponse
from app.services.collection_import_service import (
    CollectionImportService,
    get_collection_import_service,
)
from app.validators.mapping_validator import SchemaMappingError
from db.session import get_db

router = APIRouter(tags=["collection-import"])


def _run_import(
    *,
    import_service: CollectionImportService,
    content: bytes,
    collection: CollectionAdapter,
    duplicate_policy: str,
) -> ImportReportResponse:
    try:
        report = import_service.import_csv(
            content=content,
            collection=collection,
            duplicate_policy=duplicate_policy,
        )
    except SchemaMappingError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=exc.to_dict(),
        ) from exc
    except MalformedTableError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return ImportReportResponse.from_report(report)


@router.post("/watchlist/import", response_model=ImportReportResponse)
def import_watchlist(
    content: bytes = Depends(read_csv_upload),
    duplicate_policy: str = Depends(get_duplicate_policy),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    import_service: CollectionImportService = Depends(get_collection_import_service),
) -> ImportReportResponse:
    """
    Import a CSV export into the caller's watchlist.
    """

    return _run_import(
        import_service=import_service,
        content=content,
        collection=WatchlistRepository(db, user_id),
        duplicate_policy=duplicate_policy,
    )


@router.post("/lists/{list_id}/import", response_model=ImportReportResponse)
def import_list(
    list_id: uuid.UUID,
    content: bytes = Depends(read_csv_upload),
    duplicate_policy: str = Depends(get_duplicate_policy),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    import_service: CollectionImportService = Depends(get_collection_import_service),
) -> ImportReportResponse:
    """
    Import a CSV export into one of the caller's lists.
    """

    try:
        CollectionOwnershipRepository(db).get_owned_list(list_id=list_id, user_id=user_id)
    except CollectionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except CollectionAccessDeniedError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc

    return _run_import(
        import_service=import_service,
        content=content,
        collection=ListItemRepository(db, list_id),
        duplicate_policy=duplicate_policy,
    )


@router.post("/playlists/{playlist_id}/import", response_model=ImportReportResponse)
def import_playlist(
    playlist_id: uuid.UUID,
    content: bytes = Depends(read_csv_upload),
    duplicate_policy: str = Depends(get_duplicate_policy),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    import_service: CollectionImportService = Depends(get_collection_import_service),
) -> ImportReportResponse:
    """
    Import a CSV export into one of the caller's playlists.
    """

    try:
        CollectionOwnershipRepository(db).get_owned_playlist(playlist_id=playlist_id, user_id=user_id)
    except CollectionNotFoundError as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except CollectionAccessDeniedError as exc:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(exc)) from exc

    return _run_import(
        import_service=import_service,
        content=content,
        collection=PlaylistItemRepository(db, playlist_id),
        duplicate_policy=duplicate_policy,
    )


@router.post("/imports/preview", response_model=ImportPreviewResponse)
def preview_import(
    content: bytes = Depends(read_csv_upload),
    import_service: CollectionImportService = Depends(get_collection_import_service),
) -> ImportPreviewResponse:
    """
    Detect the dialect and column mapping of an upload without importing it.
    """

    try:
        preview = import_service.preview_csv(content)
    except MalformedTableError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc

    return ImportPreviewResponse.from_preview(preview)
