"""
app/parsers/csv_table_parser.py

Tokenizes uploaded CSV bytes into a RawTable.
"""

from __future__ import annotations

import csv
import io

from app.domain.collection_import import RawTable


class MalformedTableError(ValueError):
    """
    Raised when an upload cannot be read as a table with headers and data rows.
    """


def parse_csv_table(content: bytes | str) -> RawTable:
    """
    Decode and tokenize CSV content.

    Header cells are stripped, completely blank rows are dropped, short rows
    are padded with empty strings, and cells beyond the header width are
    ignored so every row has exactly one cell per header.
    """

    text = _decode(content)
    if not text.strip():
        raise MalformedTableError("CSV file is empty.")

    try:
        reader = csv.reader(io.StringIO(text, newline=""))
        header_cells = next(reader, None)
        if header_cells is None:
            raise MalformedTableError("CSV file is empty.")

        headers = tuple(cell.strip() for cell in header_cells)
        if not any(headers):
            raise MalformedTableError("CSV header row is missing.")

        width = len(headers)
        rows: list[tuple[str, ...]] = []
        for cells in reader:
            if not cells or all(not cell.strip() for cell in cells):
                continue
            padded = list(cells[:width])
            padded.extend("" for _ in range(width - len(padded)))
            rows.append(tuple(padded))
    except csv.Error as exc:
        raise MalformedTableError(f"Invalid CSV format: {exc}") from exc

    return RawTable(headers=headers, rows=tuple(rows))


def _decode(content: bytes | str) -> str:
    if isinstance(content, str):
        return content[1:] if content.startswith("\ufeff") else content
    try:
        return content.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise MalformedTableError("CSV must be UTF-8 encoded.") from exc
