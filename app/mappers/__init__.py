"""
app/mappers package marker.
"""

from app.mappers.dialect_mapper import (
    DEFAULT_FIELD_SYNONYMS,
    DialectDetector,
    DialectResolution,
    normalize_header,
)

__all__ = [
    "DEFAULT_FIELD_SYNONYMS",
    "DialectDetector",
    "DialectResolution",
    "normalize_header",
]
