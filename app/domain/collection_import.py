"""
app/domain/collection_import.py

Domain models used by the collection import flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping


class MediaKind:
    MOVIE = "movie"
    TV = "tv"

    ALL = frozenset({MOVIE, TV})


class Dialect:
    NATIVE = "native"
    FOREIGN_EXPORT = "foreign_export"
    GENERIC = "generic"

    ALL = frozenset({NATIVE, FOREIGN_EXPORT, GENERIC})


class DuplicatePolicy:
    SKIP = "skip"
    UPDATE = "update"

    ALL = frozenset({SKIP, UPDATE})


class CanonicalField:
    TITLE = "title"
    KIND = "kind"
    CANONICAL_ID = "canonical_id"
    FOREIGN_ID = "foreign_id"
    ORDER = "order"
    NOTE = "note"
    RELEASE_DATE = "release_date"


# Resolution order matters: a column claimed by an earlier field is not reused.
CANONICAL_FIELDS: tuple[str, ...] = (
    CanonicalField.CANONICAL_ID,
    CanonicalField.FOREIGN_ID,
    CanonicalField.KIND,
    CanonicalField.TITLE,
    CanonicalField.ORDER,
    CanonicalField.NOTE,
    CanonicalField.RELEASE_DATE,
)


@dataclass(frozen=True)
class RawTable:
    """
    Tokenized CSV content before dialect detection.
    """

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]


@dataclass(frozen=True)
class ParsedTable:
    """
    Tokenized table with its detected dialect and field-to-column mapping.
    """

    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]
    dialect: str
    column_mapping: Mapping[str, int]

    def value(self, row: tuple[str, ...], canonical_field: str) -> str | None:
        """
        Return the stripped cell for a canonical field, or None when unmapped or blank.
        """

        index = self.column_mapping.get(canonical_field)
        if index is None or index >= len(row):
            return None
        cell = (row[index] or "").strip()
        return cell or None

    def header_for(self, canonical_field: str) -> str | None:
        index = self.column_mapping.get(canonical_field)
        return self.headers[index] if index is not None else None

    @property
    def total_rows(self) -> int:
        return len(self.rows)


@dataclass(frozen=True)
class ResolvedEntity:
    """
    Canonical media identity produced by the row resolver.
    """

    tmdb_id: int
    media_kind: str
    title: str
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: str | None = None
    first_air_date: str | None = None
    # Set when the entity was built from a full catalog detail record.
    detailed: bool = field(default=False, compare=False)

    @property
    def key(self) -> tuple[int, str]:
        return (self.tmdb_id, self.media_kind)

    @property
    def date_value(self) -> str | None:
        if self.media_kind == MediaKind.MOVIE:
            return self.release_date
        return self.first_air_date

    @property
    def needs_enrichment(self) -> bool:
        if self.detailed:
            return False
        return self.poster_path is None or self.date_value is None


@dataclass(frozen=True)
class CollectionEntry:
    """
    Snapshot of one persisted collection entry.
    """

    id: str
    tmdb_id: int
    media_kind: str
    title: str
    order: int
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: str | None = None
    first_air_date: str | None = None
    note: str | None = None

    @property
    def key(self) -> tuple[int, str]:
        return (self.tmdb_id, self.media_kind)


@dataclass(frozen=True)
class NewCollectionEntry:
    """
    Values for an entry the import is about to create.
    """

    entity: ResolvedEntity
    order: int
    note: str | None = None


@dataclass(frozen=True)
class CollectionEntryUpdate:
    """
    Field changes applied to an existing entry under the update policy.

    None means "leave the stored value alone".
    """

    title: str
    release_date: str | None = None
    first_air_date: str | None = None
    note: str | None = None
    order: int | None = None


@dataclass(frozen=True)
class RowError:
    """
    Terminal row failure; the row produced no entry.
    """

    row: int
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "error": self.error}


@dataclass(frozen=True)
class RowWarning:
    """
    Non-terminal row issue; the entry was still produced.
    """

    row: int
    warning: str

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "warning": self.warning}


@dataclass(frozen=True)
class ImportedOutcome:
    row: int
    entry_id: str
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class SkippedOutcome:
    row: int
    reason: str = "duplicate"


@dataclass(frozen=True)
class ImportReport:
    """
    End-of-run import summary.
    """

    success: bool
    imported: int
    skipped: int
    errors: tuple[RowError, ...] = ()
    warnings: tuple[RowWarning, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": self.success,
            "imported": self.imported,
            "skipped": self.skipped,
            "errors": [error.to_dict() for error in self.errors],
            "warnings": [warning.to_dict() for warning in self.warnings],
        }


@dataclass(frozen=True)
class ImportPreview:
    """
    Read-only analysis of an upload before it is imported.
    """

    dialect: str
    headers: tuple[str, ...]
    total_rows: int
    column_mapping: dict[str, str]
    sample_rows: list[dict[str, str]] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors
