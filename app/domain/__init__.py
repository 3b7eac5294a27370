"""
app/domain package marker.
"""

from app.domain.catalog import CatalogDetail, ForeignIdMatches
from app.domain.collection_import import (
    CANONICAL_FIELDS,
    CanonicalField,
    CollectionEntry,
    CollectionEntryUpdate,
    Dialect,
    DuplicatePolicy,
    ImportedOutcome,
    ImportPreview,
    ImportReport,
    MediaKind,
    NewCollectionEntry,
    ParsedTable,
    RawTable,
    ResolvedEntity,
    RowError,
    RowWarning,
    SkippedOutcome,
)

__all__ = [
    "CANONICAL_FIELDS",
    "CanonicalField",
    "CatalogDetail",
    "CollectionEntry",
    "CollectionEntryUpdate",
    "Dialect",
    "DuplicatePolicy",
    "ForeignIdMatches",
    "ImportedOutcome",
    "ImportPreview",
    "ImportReport",
    "MediaKind",
    "NewCollectionEntry",
    "ParsedTable",
    "RawTable",
    "ResolvedEntity",
    "RowError",
    "RowWarning",
    "SkippedOutcome",
]
