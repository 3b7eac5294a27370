"""
app/schemas package marker.
"""

from app.schemas.collection_import import (
    ImportPreviewResponse,
    ImportReportResponse,
    ImportRowErrorResponse,
    ImportRowWarningResponse,
)

__all__ = [
    "ImportPreviewResponse",
    "ImportReportResponse",
    "ImportRowErrorResponse",
    "ImportRowWarningResponse",
]
