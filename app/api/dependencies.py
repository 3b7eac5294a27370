"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import Depends, File, Form, Header, HTTPException, UploadFile, status

from app.config import CollectionImportSettings, get_collection_import_settings
from app.domain.collection_import import DuplicatePolicy

CSV_CONTENT_TYPES = {
    "text/csv",
    "application/csv",
    "application/vnd.ms-excel",
}


def get_csv_upload(file: UploadFile = File(...)) -> UploadFile:
    """
    Validate that the uploaded file is a CSV by extension or MIME type.
    """

    filename = (file.filename or "").strip().lower()
    content_type = (file.content_type or "").strip().lower()

    is_csv_filename = filename.endswith(".csv")
    is_csv_content_type = content_type in CSV_CONTENT_TYPES

    if not is_csv_filename and not is_csv_content_type:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Only CSV files are allowed.",
        )

    return file


def read_csv_upload(
    file: UploadFile = Depends(get_csv_upload),
    settings: CollectionImportSettings = Depends(get_collection_import_settings),
) -> bytes:
    """
    Read the whole upload, rejecting files over the configured size limit.
    """

    try:
        file.file.seek(0)
        content = file.file.read(settings.max_upload_bytes + 1)
    finally:
        file.file.close()

    if len(content) > settings.max_upload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"CSV file exceeds the {settings.max_upload_bytes} byte upload limit.",
        )
    return content


def get_current_user_id(x_user_id: str | None = Header(default=None, alias="X-User-Id")) -> str:
    """
    Return the caller identity forwarded by the upstream gateway.
    """

    user_id = (x_user_id or "").strip()
    if not user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return user_id


def get_duplicate_policy(duplicate_action: str = Form(default=DuplicatePolicy.SKIP)) -> str:
    policy = duplicate_action.strip().lower()
    if policy not in DuplicatePolicy.ALL:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid duplicate_action '{duplicate_action}'. Allowed values: "
            + ", ".join(sorted(DuplicatePolicy.ALL)),
        )
    return policy
