"""
app/domain/catalog.py

Catalog lookup results consumed by the row resolver.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class CatalogDetail:
    """
    One catalog record for a canonical id and media kind.

    `release_date` holds the movie release date or the series first air date.
    """

    tmdb_id: int
    media_kind: str
    title: str | None
    poster_path: str | None = None
    backdrop_path: str | None = None
    release_date: str | None = None


@dataclass(frozen=True)
class ForeignIdMatches:
    """
    Catalog matches for one foreign id, grouped by media kind in catalog order.
    """

    movie_matches: list[CatalogDetail] = field(default_factory=list)
    series_matches: list[CatalogDetail] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.movie_matches and not self.series_matches
