"""
app/validators/mapping_validator.py

Batch-level validation of a detected dialect's column mapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from app.domain.collection_import import CANONICAL_FIELDS, CanonicalField, Dialect

# Every listed field must be mapped.
REQUIRED_FIELDS_BY_DIALECT: dict[str, tuple[str, ...]] = {
    Dialect.NATIVE: (
        CanonicalField.TITLE,
        CanonicalField.KIND,
        CanonicalField.CANONICAL_ID,
    ),
    Dialect.FOREIGN_EXPORT: (CanonicalField.FOREIGN_ID,),
    Dialect.GENERIC: (),
}

# At least one of the listed fields must be mapped.
ANY_OF_FIELDS_BY_DIALECT: dict[str, tuple[str, ...]] = {
    Dialect.NATIVE: (),
    Dialect.FOREIGN_EXPORT: (),
    Dialect.GENERIC: (
        CanonicalField.TITLE,
        CanonicalField.CANONICAL_ID,
        CanonicalField.FOREIGN_ID,
    ),
}

FIELD_LABELS: dict[str, str] = {
    CanonicalField.TITLE: "Title",
    CanonicalField.KIND: "Type",
    CanonicalField.CANONICAL_ID: "TMDB ID",
    CanonicalField.FOREIGN_ID: "IMDb ID",
    CanonicalField.ORDER: "Order",
    CanonicalField.NOTE: "Note",
    CanonicalField.RELEASE_DATE: "Release Date",
}


@dataclass(frozen=True)
class MappingErrorDetail:
    """
    Structured mapping error detail.
    """

    code: str
    message: str
    canonical_field: str | None = None
    source_column: str | None = None
    context: dict[str, Any] | None = None


class SchemaMappingError(ValueError):
    """
    Raised when the detected dialect lacks the columns it needs.
    """

    def __init__(self, *, message: str, errors: Sequence[MappingErrorDetail]) -> None:
        super().__init__(message)
        self.message = message
        self.errors = tuple(errors)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "errors": [
                {
                    "code": error.code,
                    "message": error.message,
                    "canonical_field": error.canonical_field,
                    "source_column": error.source_column,
                    "context": error.context,
                }
                for error in self.errors
            ],
        }


class MappingValidator:
    """
    Validates a dialect's field-to-column mapping against its required columns.
    """

    def __init__(
        self,
        *,
        required_fields: Mapping[str, Sequence[str]] | None = None,
        any_of_fields: Mapping[str, Sequence[str]] | None = None,
    ) -> None:
        self._required_fields = {
            dialect: tuple(fields)
            for dialect, fields in (required_fields or REQUIRED_FIELDS_BY_DIALECT).items()
        }
        self._any_of_fields = {
            dialect: tuple(fields)
            for dialect, fields in (any_of_fields or ANY_OF_FIELDS_BY_DIALECT).items()
        }

    def collect_errors(
        self,
        *,
        dialect: str,
        column_mapping: Mapping[str, int],
        headers: Sequence[str],
    ) -> list[MappingErrorDetail]:
        """
        Return every mapping problem without raising.
        """

        errors: list[MappingErrorDetail] = []
        context = {"dialect": dialect, "source_headers": list(headers)}

        if dialect not in Dialect.ALL:
            errors.append(
                MappingErrorDetail(
                    code="unknown_dialect",
                    message=f"Unknown dialect '{dialect}'.",
                    context=context,
                )
            )
            return errors

        for canonical_field, index in column_mapping.items():
            if canonical_field not in CANONICAL_FIELDS:
                errors.append(
                    MappingErrorDetail(
                        code="invalid_canonical_field",
                        message="Unknown canonical field in mapping.",
                        canonical_field=canonical_field,
                    )
                )
            if not 0 <= index < len(headers):
                errors.append(
                    MappingErrorDetail(
                        code="unknown_source_column",
                        message="Mapped column index does not exist in CSV headers.",
                        canonical_field=canonical_field,
                        context={"column_index": index, **context},
                    )
                )

        for required in self._required_fields.get(dialect, ()):
            if required not in column_mapping:
                errors.append(
                    MappingErrorDetail(
                        code="required_field_unmapped",
                        message=f"Missing required column: {FIELD_LABELS.get(required, required)}",
                        canonical_field=required,
                        context=context,
                    )
                )

        any_of = self._any_of_fields.get(dialect, ())
        if any_of and not any(candidate in column_mapping for candidate in any_of):
            labels = ", ".join(FIELD_LABELS.get(candidate, candidate) for candidate in any_of)
            errors.append(
                MappingErrorDetail(
                    code="identifying_field_unmapped",
                    message=f"Missing required column: one of {labels}",
                    context=context,
                )
            )

        return errors

    def validate(
        self,
        *,
        dialect: str,
        column_mapping: Mapping[str, int],
        headers: Sequence[str],
    ) -> None:
        """
        Raise SchemaMappingError when the mapping is not importable.
        """

        errors = self.collect_errors(
            dialect=dialect,
            column_mapping=column_mapping,
            headers=headers,
        )
        if errors:
            raise SchemaMappingError(
                message="CSV validation failed: " + ", ".join(error.message for error in errors),
                errors=errors,
            )
