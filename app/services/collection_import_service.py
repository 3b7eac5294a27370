"""
app/services/collection_import_service.py

Service layer for importing CSV exports into watchlists, lists and playlists.

One job runs strictly in file order:

    1. parse the upload and detect its dialect (batch-level failures abort here)
    2. validate the dialect's column mapping
    3. for each row: resolve -> reconcile -> enrich + order (new entries only)
    4. aggregate per-row outcomes into an ImportReport

Every row runs inside its own failure boundary. Each write is committed by
the collection adapter before the next row starts, so a failing row never
rolls back earlier rows.
"""

from __future__ import annotations

import logging
import time
from functools import lru_cache

from app.config import (
    get_catalog_http_settings,
    get_collection_import_settings,
    get_movie_db_settings,
)
from app.connectors.base import BaseCatalogConnector
from app.connectors.tmdb_connector import TMDBCatalogConnector
from app.domain.collection_import import (
    CANONICAL_FIELDS,
    CanonicalField,
    Dialect,
    DuplicatePolicy,
    ImportedOutcome,
    ImportPreview,
    ImportReport,
    ParsedTable,
    RowError,
    SkippedOutcome,
)
from app.logging_utils import log_import_completed
from app.mappers.dialect_mapper import DialectDetector
from app.parsers.csv_table_parser import parse_csv_table
from app.repositories.base import CollectionAdapter, CollectionPersistenceError
from app.services.duplicate_reconciler import DuplicateReconciler, ReconcileDecision
from app.services.import_outcome import ImportOutcomeAggregator
from app.services.position_assigner import PositionAssigner
from app.services.row_resolver import FOREIGN_ID_PATTERN, RowResolutionError, RowResolver
from app.validators.mapping_validator import MappingValidator

logger = logging.getLogger(__name__)


class CollectionImportService:
    """
    Coordinates parsing, dialect detection, row resolution and persistence.
    """

    def __init__(
        self,
        *,
        catalog: BaseCatalogConnector,
        detector: DialectDetector | None = None,
        validator: MappingValidator | None = None,
        sample_rows: int = 5,
        log_row_errors: bool = True,
    ) -> None:
        self._resolver = RowResolver(catalog=catalog)
        self._detector = detector or DialectDetector()
        self._validator = validator or MappingValidator()
        self._sample_rows = max(1, sample_rows)
        self._log_row_errors = log_row_errors

    def parse(self, content: bytes | str) -> ParsedTable:
        """
        Parse, detect and validate an upload.

        Raises MalformedTableError or SchemaMappingError before any row runs.
        """

        table = self._detector.analyze(parse_csv_table(content))
        self._validator.validate(
            dialect=table.dialect,
            column_mapping=table.column_mapping,
            headers=table.headers,
        )
        return table

    def import_csv(
        self,
        *,
        content: bytes | str,
        collection: CollectionAdapter,
        duplicate_policy: str = DuplicatePolicy.SKIP,
    ) -> ImportReport:
        table = self.parse(content)
        return self.import_table(
            table=table,
            collection=collection,
            duplicate_policy=duplicate_policy,
        )

    def import_table(
        self,
        *,
        table: ParsedTable,
        collection: CollectionAdapter,
        duplicate_policy: str = DuplicatePolicy.SKIP,
    ) -> ImportReport:
        """
        Import every row of a parsed table into one collection.

        Invariant: ``imported + skipped + len(errors) == table.total_rows``.
        """

        started = time.monotonic()
        reconciler = DuplicateReconciler(adapter=collection, policy=duplicate_policy)
        assigner = PositionAssigner.from_collection(collection, reconciler.entries())
        aggregator = ImportOutcomeAggregator()

        logger.info(
            "Collection import started collection=%s dialect=%s policy=%s rows=%s",
            collection.collection_type,
            table.dialect,
            duplicate_policy,
            table.total_rows,
        )

        # Row 1 is the header.
        for row_number, row in enumerate(table.rows, start=2):
            try:
                outcome = self._process_row(
                    table=table,
                    row=row,
                    row_number=row_number,
                    reconciler=reconciler,
                    assigner=assigner,
                )
            except (RowResolutionError, CollectionPersistenceError) as exc:
                self._record_error(aggregator, row_number, str(exc))
                continue
            except Exception as exc:  # noqa: BLE001
                logger.exception(
                    "Unexpected collection import failure collection=%s row=%s",
                    collection.collection_type,
                    row_number,
                )
                self._record_error(aggregator, row_number, str(exc) or "Unknown error")
                continue

            if isinstance(outcome, SkippedOutcome):
                aggregator.record_skipped(outcome)
            else:
                aggregator.record_imported(outcome)

        report = aggregator.build()
        log_import_completed(
            logger,
            collection_type=collection.collection_type,
            dialect=table.dialect,
            duplicate_policy=duplicate_policy,
            total_rows=table.total_rows,
            report=report,
            duration_ms=int((time.monotonic() - started) * 1000),
        )
        return report

    def preview_csv(self, content: bytes | str) -> ImportPreview:
        """
        Analyse an upload without writing anything.

        Unreadable files still raise MalformedTableError. A readable file with
        missing columns or no data rows yields a preview whose errors explain
        why it cannot be imported.
        """

        raw = parse_csv_table(content)
        resolution = self._detector.detect(raw.headers)

        errors: list[str] = []
        if not raw.rows:
            errors.append("CSV file contains no data rows.")
        errors.extend(
            detail.message
            for detail in self._validator.collect_errors(
                dialect=resolution.dialect,
                column_mapping=resolution.column_mapping,
                headers=raw.headers,
            )
        )

        table = ParsedTable(
            headers=raw.headers,
            rows=raw.rows,
            dialect=resolution.dialect,
            column_mapping=resolution.column_mapping,
        )
        sample = table.rows[: self._sample_rows]

        return ImportPreview(
            dialect=table.dialect,
            headers=table.headers,
            total_rows=table.total_rows,
            column_mapping={
                canonical_field: table.headers[table.column_mapping[canonical_field]]
                for canonical_field in CANONICAL_FIELDS
                if canonical_field in table.column_mapping
            },
            sample_rows=[dict(zip(table.headers, row)) for row in sample],
            errors=errors,
            warnings=self._sample_warnings(table, sample),
        )

    # ------------------------------------------------------------------
    # Row internals
    # ------------------------------------------------------------------

    def _process_row(
        self,
        *,
        table: ParsedTable,
        row: tuple[str, ...],
        row_number: int,
        reconciler: DuplicateReconciler,
        assigner: PositionAssigner,
    ) -> ImportedOutcome | SkippedOutcome:
        entity = self._resolver.resolve(table, row)

        decision, existing = reconciler.decide(entity)
        if decision == ReconcileDecision.SKIP:
            return SkippedOutcome(row=row_number)

        warnings: list[str] = []
        supplied_order, order_warning = PositionAssigner.parse_supplied(
            table.value(row, CanonicalField.ORDER)
        )
        if order_warning:
            warnings.append(order_warning)
        note = table.value(row, CanonicalField.NOTE)

        if decision == ReconcileDecision.UPDATE and existing is not None:
            # Only the native export carries a date the row itself supplied.
            supplied_date = (
                table.value(row, CanonicalField.RELEASE_DATE)
                if table.dialect == Dialect.NATIVE
                else None
            )
            updated = reconciler.update(
                existing,
                entity,
                supplied_date=supplied_date,
                note=note,
                order=supplied_order,
            )
            assigner.observe(updated.id, updated.order)
            return ImportedOutcome(row=row_number, entry_id=updated.id, warnings=tuple(warnings))

        entity, enrich_warning = self._resolver.enrich(entity)
        if enrich_warning:
            warnings.append(enrich_warning)

        created = reconciler.create(
            entity,
            order=assigner.propose(supplied_order),
            note=note,
        )
        assigner.observe(created.id, created.order)
        return ImportedOutcome(row=row_number, entry_id=created.id, warnings=tuple(warnings))

    def _record_error(
        self,
        aggregator: ImportOutcomeAggregator,
        row_number: int,
        message: str,
    ) -> None:
        if self._log_row_errors:
            logger.warning("Collection import row failed row=%s error=%s", row_number, message)
        aggregator.record_error(RowError(row=row_number, error=message))

    @staticmethod
    def _sample_warnings(table: ParsedTable, sample: tuple[tuple[str, ...], ...]) -> list[str]:
        warnings: list[str] = []
        for row_number, row in enumerate(sample, start=2):
            if table.dialect == Dialect.NATIVE:
                if table.value(row, CanonicalField.TITLE) is None:
                    warnings.append(f"Row {row_number}: Missing title")
                if table.value(row, CanonicalField.KIND) is None:
                    warnings.append(f"Row {row_number}: Missing type")
            elif table.dialect == Dialect.FOREIGN_EXPORT:
                foreign_id = table.value(row, CanonicalField.FOREIGN_ID)
                if foreign_id is None or not FOREIGN_ID_PATTERN.match(foreign_id):
                    warnings.append(f"Row {row_number}: Invalid or missing IMDb ID in Const column")
        return warnings


@lru_cache(maxsize=1)
def get_collection_import_service() -> CollectionImportService:
    """
    Return a cached collection import service backed by the TMDB connector.
    """

    settings = get_collection_import_settings()
    catalog = TMDBCatalogConnector(
        settings=get_movie_db_settings(),
        http_settings=get_catalog_http_settings(),
    )
    return CollectionImportService(
        catalog=catalog,
        sample_rows=settings.preview_sample_rows,
        log_row_errors=settings.log_row_errors,
    )
