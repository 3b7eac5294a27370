"""
app/services package marker.
"""

from app.services.collection_import_service import (
    CollectionImportService,
    get_collection_import_service,
)
from app.services.duplicate_reconciler import DuplicateReconciler, ReconcileDecision
from app.services.import_outcome import ImportOutcomeAggregator
from app.services.position_assigner import PositionAssigner
from app.services.row_resolver import RowResolutionError, RowResolver, parse_media_kind

__all__ = [
    "CollectionImportService",
    "DuplicateReconciler",
    "ImportOutcomeAggregator",
    "PositionAssigner",
    "ReconcileDecision",
    "RowResolutionError",
    "RowResolver",
    "get_collection_import_service",
    "parse_media_kind",
]
