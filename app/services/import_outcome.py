"""
app/services/import_outcome.py

Collects per-row outcomes into an ImportReport.
"""

from __future__ import annotations

from app.domain.collection_import import (
    ImportedOutcome,
    ImportReport,
    RowError,
    RowWarning,
    SkippedOutcome,
)


class ImportOutcomeAggregator:
    """
    Accumulates outcomes in row order.

    Warnings are attached to an imported outcome, so a row that ends up
    skipped or failed never publishes the warnings raised while it ran.
    """

    def __init__(self) -> None:
        self._imported: list[ImportedOutcome] = []
        self._skipped: list[SkippedOutcome] = []
        self._errors: list[RowError] = []

    def record_imported(self, outcome: ImportedOutcome) -> None:
        self._imported.append(outcome)

    def record_skipped(self, outcome: SkippedOutcome) -> None:
        self._skipped.append(outcome)

    def record_error(self, error: RowError) -> None:
        self._errors.append(error)

    @property
    def processed_rows(self) -> int:
        return len(self._imported) + len(self._skipped) + len(self._errors)

    def build(self) -> ImportReport:
        warnings = tuple(
            RowWarning(row=outcome.row, warning=message)
            for outcome in self._imported
            for message in outcome.warnings
        )
        return ImportReport(
            success=True,
            imported=len(self._imported),
            skipped=len(self._skipped),
            errors=tuple(self._errors),
            warnings=warnings,
        )
