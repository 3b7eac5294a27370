"""
app/parsers package marker.
"""

from app.parsers.csv_table_parser import MalformedTableError, parse_csv_table

__all__ = [
    "MalformedTableError",
    "parse_csv_table",
]
