"""
app/schemas/collection_import.py

Response schemas for collection import endpoints.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from app.domain.collection_import import ImportPreview, ImportReport


class ImportRowErrorResponse(BaseModel):
    """
    One row that produced no entry.
    """

    row: int = Field(..., ge=2)
    error: str


class ImportRowWarningResponse(BaseModel):
    """
    One non-fatal issue on a row that was still imported.
    """

    row: int = Field(..., ge=2)
    warning: str


class ImportReportResponse(BaseModel):
    """
    API response model for a completed import job.
    """

    success: bool
    imported: int = Field(..., ge=0)
    skipped: int = Field(..., ge=0)
    errors: list[ImportRowErrorResponse] = Field(default_factory=list)
    warnings: list[ImportRowWarningResponse] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: ImportReport) -> "ImportReportResponse":
        return cls(
            success=report.success,
            imported=report.imported,
            skipped=report.skipped,
            errors=[ImportRowErrorResponse(row=error.row, error=error.error) for error in report.errors],
            warnings=[
                ImportRowWarningResponse(row=warning.row, warning=warning.warning)
                for warning in report.warnings
            ],
        )


class ImportPreviewResponse(BaseModel):
    """
    API response model for a dry-run analysis of an upload.
    """

    dialect: str
    headers: list[str]
    total_rows: int = Field(..., ge=0)
    column_mapping: dict[str, str] = Field(default_factory=dict)
    sample_rows: list[dict[str, str]] = Field(default_factory=list)
    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @classmethod
    def from_preview(cls, preview: ImportPreview) -> "ImportPreviewResponse":
        return cls(
            dialect=preview.dialect,
            headers=list(preview.headers),
            total_rows=preview.total_rows,
            column_mapping=dict(preview.column_mapping),
            sample_rows=list(preview.sample_rows),
            is_valid=preview.is_valid,
            errors=list(preview.errors),
            warnings=list(preview.warnings),
        )
