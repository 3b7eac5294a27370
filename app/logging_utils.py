"""
app/logging_utils.py

Structured logging helpers for import jobs.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from app.domain.collection_import import ImportReport


def log_event(
    logger: logging.Logger,
    level: int,
    event: str,
    **fields: Any,
) -> None:
    """
    Emit one structured log line as compact JSON.
    """

    payload = {"event": event, **fields}
    logger.log(level, json.dumps(payload, default=str, sort_keys=True))


def log_import_completed(
    logger: logging.Logger,
    *,
    collection_type: str,
    dialect: str,
    duplicate_policy: str,
    total_rows: int,
    report: ImportReport,
    duration_ms: int,
) -> None:
    """
    Emit the per-job summary line. Jobs with row errors log at WARNING.
    """

    level = logging.WARNING if report.errors else logging.INFO
    log_event(
        logger,
        level,
        "import_completed",
        collection_type=collection_type,
        dialect=dialect,
        duplicate_policy=duplicate_policy,
        total_rows=total_rows,
        imported=report.imported,
        skipped=report.skipped,
        errors=len(report.errors),
        warnings=len(report.warnings),
        duration_ms=duration_ms,
    )
