"""
app/config.py

Application-level configuration helpers.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

from db.config import load_env_files

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading app settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_float_env(name: str, default: float) -> float:
    """
    Read a float from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return float(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def _get_optional_str_env(name: str) -> str | None:
    """
    Read an optional string value from environment variables.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return None
    stripped = value.strip()
    return stripped if stripped else None


@dataclass(frozen=True)
class CatalogHTTPSettings:
    """
    HTTP behavior settings for catalog connectors.
    """

    timeout_seconds: float = 10.0
    rate_limit_per_second: float = 20.0


@dataclass(frozen=True)
class MovieDBSettings:
    """
    TheMovieDB connector settings.
    """

    access_token: str | None = None
    base_url: str = "https://api.themoviedb.org/3"
    language: str = "en-US"


@dataclass(frozen=True)
class CollectionImportSettings:
    """
    Runtime settings for collection imports.
    """

    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES
    preview_sample_rows: int = 5
    log_row_errors: bool = True


@lru_cache(maxsize=1)
def get_catalog_http_settings() -> CatalogHTTPSettings:
    """
    Return catalog HTTP settings from environment variables.
    """

    return CatalogHTTPSettings(
        timeout_seconds=max(1.0, _get_float_env("CATALOG_HTTP_TIMEOUT_SECONDS", 10.0)),
        rate_limit_per_second=max(0.0, _get_float_env("CATALOG_HTTP_RATE_LIMIT_PER_SECOND", 20.0)),
    )


@lru_cache(maxsize=1)
def get_movie_db_settings() -> MovieDBSettings:
    """
    Return TheMovieDB connector settings from environment variables.
    """

    return MovieDBSettings(
        access_token=_get_optional_str_env("MOVIEDB_ACCESS_TOKEN"),
        base_url=_get_str_env("MOVIEDB_BASE_URL", "https://api.themoviedb.org/3"),
        language=_get_str_env("MOVIEDB_LANGUAGE", "en-US"),
    )


@lru_cache(maxsize=1)
def get_collection_import_settings() -> CollectionImportSettings:
    """
    Return cached collection import settings from environment variables.
    """

    return CollectionImportSettings(
        max_upload_bytes=max(1, _get_int_env("COLLECTION_IMPORT_MAX_UPLOAD_BYTES", DEFAULT_MAX_UPLOAD_BYTES)),
        preview_sample_rows=max(1, _get_int_env("COLLECTION_IMPORT_PREVIEW_SAMPLE_ROWS", 5)),
        log_row_errors=_get_bool_env("COLLECTION_IMPORT_LOG_ROW_ERRORS", True),
    )
