"""
app/mappers/dialect_mapper.py

Detects the export dialect of an uploaded table and maps its columns to
canonical import fields.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Sequence

from app.domain.collection_import import (
    CANONICAL_FIELDS,
    CanonicalField,
    Dialect,
    ParsedTable,
    RawTable,
)
from app.parsers.csv_table_parser import MalformedTableError

# The application's own round-trip export.
NATIVE_REQUIRED_HEADERS: frozenset[str] = frozenset({"title", "type"})
# Exactly one identifier column; older exports call it canonicalId.
NATIVE_ID_HEADERS: frozenset[str] = frozenset({"tmdbid", "canonicalid"})
NATIVE_OPTIONAL_HEADERS: frozenset[str] = frozenset(
    {"order", "position", "note", "releasedate", "datecreated", "datemodified"}
)
NATIVE_HEADER_FIELDS: dict[str, str] = {
    "title": CanonicalField.TITLE,
    "type": CanonicalField.KIND,
    "tmdbid": CanonicalField.CANONICAL_ID,
    "canonicalid": CanonicalField.CANONICAL_ID,
    "order": CanonicalField.ORDER,
    "position": CanonicalField.ORDER,
    "note": CanonicalField.NOTE,
    "releasedate": CanonicalField.RELEASE_DATE,
}

# IMDb list / watchlist / ratings export.
FOREIGN_REQUIRED_HEADERS: frozenset[str] = frozenset({"const"})
FOREIGN_OPTIONAL_HEADERS: frozenset[str] = frozenset(
    {
        "position",
        "created",
        "modified",
        "description",
        "title",
        "originaltitle",
        "url",
        "titletype",
        "imdbrating",
        "runtimemins",
        "year",
        "genres",
        "numvotes",
        "releasedate",
        "directors",
        "yourrating",
        "daterated",
    }
)
FOREIGN_HEADER_FIELDS: dict[str, str] = {
    "const": CanonicalField.FOREIGN_ID,
    "position": CanonicalField.ORDER,
    "description": CanonicalField.NOTE,
    "title": CanonicalField.TITLE,
}

DEFAULT_FIELD_SYNONYMS: dict[str, tuple[str, ...]] = {
    CanonicalField.CANONICAL_ID: ("tmdbid", "themoviedbid", "canonicalid"),
    CanonicalField.FOREIGN_ID: ("imdbid", "const", "imdbconst"),
    CanonicalField.KIND: ("type", "mediatype", "kind", "titletype"),
    CanonicalField.TITLE: ("title", "name", "movietitle", "tvtitle"),
    CanonicalField.ORDER: ("order", "position", "rank", "sortorder"),
    CanonicalField.NOTE: ("note", "notes", "description", "desc", "comment"),
    CanonicalField.RELEASE_DATE: ("releasedate", "date", "year"),
}


def normalize_header(header: str) -> str:
    """
    Normalize a column name for flexible matching.
    """

    return "".join(ch for ch in header.strip().lower() if ch.isalnum())


@dataclass(frozen=True)
class DialectResolution:
    """
    Detected dialect and canonical field to column index mapping.
    """

    dialect: str
    column_mapping: dict[str, int]


class DialectDetector:
    """
    Classifies a header row into a dialect and resolves its column mapping.

    Only the header row is consulted, so the same headers always produce the
    same resolution.
    """

    def __init__(self, *, synonyms: Mapping[str, Sequence[str]] | None = None) -> None:
        self._synonyms: dict[str, tuple[str, ...]] = {
            canonical: tuple(normalize_header(value) for value in values)
            for canonical, values in (synonyms or DEFAULT_FIELD_SYNONYMS).items()
        }

    def analyze(self, table: RawTable) -> ParsedTable:
        """
        Detect the dialect of a tokenized table and attach its mapping.
        """

        if not table.headers or not any(header.strip() for header in table.headers):
            raise MalformedTableError("CSV header row is missing.")
        if not table.rows:
            raise MalformedTableError("CSV file contains no data rows.")

        resolution = self.detect(table.headers)
        return ParsedTable(
            headers=table.headers,
            rows=table.rows,
            dialect=resolution.dialect,
            column_mapping=resolution.column_mapping,
        )

    def detect(self, headers: Sequence[str]) -> DialectResolution:
        normalized = [normalize_header(header) for header in headers]
        header_set = frozenset(value for value in normalized if value)

        if len(header_set & NATIVE_ID_HEADERS) == 1 and self._matches(
            header_set,
            NATIVE_REQUIRED_HEADERS,
            NATIVE_OPTIONAL_HEADERS | NATIVE_ID_HEADERS,
        ):
            return DialectResolution(
                dialect=Dialect.NATIVE,
                column_mapping=self._fixed_mapping(normalized, NATIVE_HEADER_FIELDS),
            )

        if self._matches(header_set, FOREIGN_REQUIRED_HEADERS, FOREIGN_OPTIONAL_HEADERS):
            return DialectResolution(
                dialect=Dialect.FOREIGN_EXPORT,
                column_mapping=self._fixed_mapping(normalized, FOREIGN_HEADER_FIELDS),
            )

        return DialectResolution(
            dialect=Dialect.GENERIC,
            column_mapping=self._synonym_mapping(normalized),
        )

    @staticmethod
    def _matches(
        header_set: frozenset[str],
        required: frozenset[str],
        optional: frozenset[str],
    ) -> bool:
        return required <= header_set <= (required | optional)

    @staticmethod
    def _fixed_mapping(normalized: Sequence[str], header_fields: Mapping[str, str]) -> dict[str, int]:
        mapping: dict[str, int] = {}
        for index, header in enumerate(normalized):
            canonical_field = header_fields.get(header)
            if canonical_field is not None and canonical_field not in mapping:
                mapping[canonical_field] = index
        return mapping

    def _synonym_mapping(self, normalized: Sequence[str]) -> dict[str, int]:
        mapping: dict[str, int] = {}
        used: set[int] = set()

        for canonical_field in CANONICAL_FIELDS:
            index = self._find_column(
                self._synonyms.get(canonical_field, ()),
                normalized,
                used,
            )
            if index is not None:
                mapping[canonical_field] = index
                used.add(index)

        return mapping

    @staticmethod
    def _find_column(
        synonyms: Sequence[str],
        normalized: Sequence[str],
        used: set[int],
    ) -> int | None:
        for synonym in synonyms:
            if not synonym:
                continue
            for index, header in enumerate(normalized):
                if index not in used and header == synonym:
                    return index
            for index, header in enumerate(normalized):
                if index not in used and header and synonym in header:
                    return index
        return None
