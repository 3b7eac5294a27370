import json

import pytest
from pydantic import ValidationError

from app.domain.collection_import import Dialect, ImportPreview, ImportReport, RowError, RowWarning
from app.schemas.collection_import import ImportPreviewResponse, ImportReportResponse, ImportRowErrorResponse


def _report() -> ImportReport:
    return ImportReport(
        success=True,
        imported=2,
        skipped=1,
        errors=(RowError(row=4, error="Movie not found"),),
        warnings=(RowWarning(row=2, warning="Invalid order value: x. Will be assigned automatically."),),
    )


def test_import_report_contract() -> None:
    payload = _report().to_dict()

    assert set(payload.keys()) == {"success", "imported", "skipped", "errors", "warnings"}
    assert payload["errors"] == [{"row": 4, "error": "Movie not found"}]
    assert payload["warnings"][0]["row"] == 2


def test_report_response_matches_domain_dict() -> None:
    report = _report()
    response = ImportReportResponse.from_report(report)

    parsed = json.loads(response.model_dump_json())
    assert parsed == report.to_dict()


def test_row_numbers_start_after_header() -> None:
    with pytest.raises(ValidationError):
        ImportRowErrorResponse(row=1, error="header row")


def test_preview_response_contract() -> None:
    preview = ImportPreview(
        dialect=Dialect.FOREIGN_EXPORT,
        headers=("Const", "Title"),
        total_rows=1,
        column_mapping={"foreign_id": "Const", "title": "Title"},
        sample_rows=[{"Const": "tt0113277", "Title": "Heat"}],
    )

    response = ImportPreviewResponse.from_preview(preview)
    parsed = response.model_dump()

    assert parsed["is_valid"] is True
    assert parsed["headers"] == ["Const", "Title"]
    assert parsed["sample_rows"] == [{"Const": "tt0113277", "Title": "Heat"}]
    assert parsed["errors"] == []


def test_preview_with_errors_is_invalid() -> None:
    preview = ImportPreview(
        dialect=Dialect.GENERIC,
        headers=("Rating",),
        total_rows=0,
        column_mapping={},
        errors=["CSV file contains no data rows."],
    )

    assert ImportPreviewResponse.from_preview(preview).is_valid is False
