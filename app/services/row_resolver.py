"""
app/services/row_resolver.py

Turns one imported row into a canonical media identity.

Each dialect has its own resolution strategy:

    native          title, type and TMDB id are read straight from the row
    foreign_export  the IMDb id is translated through one catalog find call
    generic         TMDB id detail fetch when present, IMDb id lookup otherwise

Enrichment (artwork and date) is a separate step so that duplicate rows
skipped by the reconciler never pay for a detail fetch.
"""

from __future__ import annotations

import logging
import re
from dataclasses import replace
from typing import Callable

from app.connectors.base import BaseCatalogConnector, CatalogRequestError
from app.domain.catalog import CatalogDetail
from app.domain.collection_import import (
    CanonicalField,
    Dialect,
    MediaKind,
    ParsedTable,
    ResolvedEntity,
)

logger = logging.getLogger(__name__)

FOREIGN_ID_PATTERN = re.compile(r"^tt[0-9]+$")
CANONICAL_ID_PATTERN = re.compile(r"[0-9]+")

MISSING_IDENTIFIER_MESSAGE = "missing required identifier"


class RowResolutionError(Exception):
    """
    Raised when a row cannot be resolved to a canonical entity.
    """


def parse_media_kind(raw: str | None) -> str | None:
    """
    Map a free-text type cell to a media kind, or None when it names neither.
    """

    if not raw:
        return None
    value = raw.strip().lower()
    if "movie" in value or "film" in value:
        return MediaKind.MOVIE
    if "tv" in value or "series" in value or "show" in value:
        return MediaKind.TV
    return None


def parse_canonical_id(raw: str) -> int | None:
    cell = raw.strip()
    if not CANONICAL_ID_PATTERN.fullmatch(cell):
        return None
    value = int(cell)
    return value if value > 0 else None


def _entity_from_detail(detail: CatalogDetail, *, detailed: bool = False) -> ResolvedEntity:
    if not detail.title:
        raise RowResolutionError("Could not determine required fields")
    is_movie = detail.media_kind == MediaKind.MOVIE
    return ResolvedEntity(
        tmdb_id=detail.tmdb_id,
        media_kind=detail.media_kind,
        title=detail.title,
        poster_path=detail.poster_path,
        backdrop_path=detail.backdrop_path,
        release_date=detail.release_date if is_movie else None,
        first_air_date=None if is_movie else detail.release_date,
        detailed=detailed,
    )


class RowResolver:
    """
    Resolves rows of a parsed table using the strategy of its dialect.
    """

    def __init__(self, *, catalog: BaseCatalogConnector) -> None:
        self._catalog = catalog
        self._strategies: dict[str, Callable[[ParsedTable, tuple[str, ...]], ResolvedEntity]] = {
            Dialect.NATIVE: self._resolve_native,
            Dialect.FOREIGN_EXPORT: self._resolve_foreign_export,
            Dialect.GENERIC: self._resolve_generic,
        }

    def resolve(self, table: ParsedTable, row: tuple[str, ...]) -> ResolvedEntity:
        """
        Resolve one row or raise RowResolutionError.
        """

        strategy = self._strategies.get(table.dialect)
        if strategy is None:
            raise RowResolutionError(f"Unsupported dialect: {table.dialect}")
        return strategy(table, row)

    def enrich(self, entity: ResolvedEntity) -> tuple[ResolvedEntity, str | None]:
        """
        Fill missing artwork and date from a catalog detail fetch.

        Returns the (possibly unchanged) entity and a warning message when the
        fetch failed. Values already present on the entity are kept.
        """

        if not entity.needs_enrichment:
            return entity, None

        try:
            detail = self._catalog.fetch_detail(entity.tmdb_id, entity.media_kind)
        except CatalogRequestError as exc:
            logger.warning(
                "Catalog enrichment failed tmdb_id=%s media_kind=%s error=%s",
                entity.tmdb_id,
                entity.media_kind,
                exc,
            )
            return entity, f"Could not fetch poster/backdrop for {entity.title}"

        is_movie = entity.media_kind == MediaKind.MOVIE
        enriched = replace(
            entity,
            poster_path=entity.poster_path or detail.poster_path,
            backdrop_path=entity.backdrop_path or detail.backdrop_path,
            release_date=(entity.release_date or detail.release_date) if is_movie else None,
            first_air_date=None if is_movie else (entity.first_air_date or detail.release_date),
        )
        return enriched, None

    # ------------------------------------------------------------------
    # Strategies
    # ------------------------------------------------------------------

    def _resolve_native(self, table: ParsedTable, row: tuple[str, ...]) -> ResolvedEntity:
        title = table.value(row, CanonicalField.TITLE)
        kind_raw = table.value(row, CanonicalField.KIND)
        tmdb_raw = table.value(row, CanonicalField.CANONICAL_ID)

        if not title or not kind_raw or not tmdb_raw:
            raise RowResolutionError("Missing required fields: title, type, or tmdbId")

        media_kind = parse_media_kind(kind_raw)
        if media_kind is None:
            raise RowResolutionError(f"Invalid type: {kind_raw.lower()}. Must be 'movie' or 'tv'")

        tmdb_id = parse_canonical_id(tmdb_raw)
        if tmdb_id is None:
            raise RowResolutionError(f"Invalid TMDB ID: {tmdb_raw}")

        date = table.value(row, CanonicalField.RELEASE_DATE)
        is_movie = media_kind == MediaKind.MOVIE
        return ResolvedEntity(
            tmdb_id=tmdb_id,
            media_kind=media_kind,
            title=title,
            release_date=date if is_movie else None,
            first_air_date=None if is_movie else date,
        )

    def _resolve_foreign_export(self, table: ParsedTable, row: tuple[str, ...]) -> ResolvedEntity:
        foreign_id = table.value(row, CanonicalField.FOREIGN_ID)
        return self._lookup_foreign_id(foreign_id)

    def _resolve_generic(self, table: ParsedTable, row: tuple[str, ...]) -> ResolvedEntity:
        tmdb_raw = table.value(row, CanonicalField.CANONICAL_ID)
        if tmdb_raw is not None:
            tmdb_id = parse_canonical_id(tmdb_raw)
            if tmdb_id is None:
                raise RowResolutionError(f"Invalid TMDB ID: {tmdb_raw}")
            media_kind = parse_media_kind(table.value(row, CanonicalField.KIND))
            return self._fetch_by_canonical_id(tmdb_id, media_kind)

        foreign_id = table.value(row, CanonicalField.FOREIGN_ID)
        if foreign_id is not None:
            return self._lookup_foreign_id(foreign_id)

        raise RowResolutionError(MISSING_IDENTIFIER_MESSAGE)

    # ------------------------------------------------------------------
    # Catalog helpers
    # ------------------------------------------------------------------

    def _lookup_foreign_id(self, foreign_id: str | None) -> ResolvedEntity:
        if not foreign_id or not FOREIGN_ID_PATTERN.match(foreign_id):
            raise RowResolutionError(f"Invalid IMDb ID: {foreign_id or ''}")

        try:
            matches = self._catalog.lookup_by_foreign_id(foreign_id)
        except CatalogRequestError as exc:
            raise RowResolutionError(
                f"Failed to lookup TMDB ID for IMDb ID {foreign_id}: {exc}"
            ) from exc

        if matches.is_empty:
            raise RowResolutionError(f"No TMDB match found for IMDb ID: {foreign_id}")

        # Movie results rank ahead of series results; catalog order breaks ties.
        if matches.movie_matches:
            return _entity_from_detail(matches.movie_matches[0])
        return _entity_from_detail(matches.series_matches[0])

    def _fetch_by_canonical_id(self, tmdb_id: int, media_kind: str | None) -> ResolvedEntity:
        attempts = (media_kind,) if media_kind else (MediaKind.MOVIE, MediaKind.TV)
        last_error: CatalogRequestError | None = None

        for kind in attempts:
            try:
                detail = self._catalog.fetch_detail(tmdb_id, kind)
            except CatalogRequestError as exc:
                last_error = exc
                continue
            return _entity_from_detail(detail, detailed=True)

        logger.info("Catalog detail fetch failed tmdb_id=%s error=%s", tmdb_id, last_error)
        raise RowResolutionError(f"Failed to fetch details for TMDB ID {tmdb_id}") from last_error
