"""
app/connectors/tmdb_connector.py

TheMovieDB catalog connector.
"""

from __future__ import annotations

import logging
from typing import Any

import requests

from app.config import CatalogHTTPSettings, MovieDBSettings
from app.connectors.base import BaseCatalogConnector, CatalogRequestError
from app.domain.catalog import CatalogDetail, ForeignIdMatches
from app.domain.collection_import import MediaKind

logger = logging.getLogger(__name__)

_DETAIL_PATHS: dict[str, str] = {
    MediaKind.MOVIE: "movie",
    MediaKind.TV: "tv",
}


class TMDBCatalogConnector(BaseCatalogConnector):
    """
    Resolves IMDb ids and canonical ids against the TMDB v3 API.
    """

    def __init__(
        self,
        *,
        settings: MovieDBSettings,
        http_settings: CatalogHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        super().__init__(source="tmdb", http_settings=http_settings, session=session)
        self._settings = settings

    def lookup_by_foreign_id(self, foreign_id: str) -> ForeignIdMatches:
        payload = self._get(
            f"/find/{foreign_id}",
            params={"external_source": "imdb_id"},
        )
        if not isinstance(payload, dict):
            raise CatalogRequestError(f"{self.source}: unexpected find response shape.")

        movie_matches = [
            detail
            for detail in (
                self._normalize_detail(item, MediaKind.MOVIE)
                for item in payload.get("movie_results") or []
            )
            if detail is not None
        ]
        series_matches = [
            detail
            for detail in (
                self._normalize_detail(item, MediaKind.TV)
                for item in payload.get("tv_results") or []
            )
            if detail is not None
        ]
        logger.debug(
            "TMDB find foreign_id=%s movie_matches=%s series_matches=%s",
            foreign_id,
            len(movie_matches),
            len(series_matches),
        )
        return ForeignIdMatches(movie_matches=movie_matches, series_matches=series_matches)

    def fetch_detail(self, tmdb_id: int, media_kind: str) -> CatalogDetail:
        path = _DETAIL_PATHS.get(media_kind)
        if path is None:
            raise CatalogRequestError(f"{self.source}: unsupported media kind '{media_kind}'.")

        payload = self._get(f"/{path}/{tmdb_id}")
        detail = self._normalize_detail(payload, media_kind)
        if detail is None:
            raise CatalogRequestError(f"{self.source}: unexpected {path} detail response shape.")
        return detail

    def _get(self, endpoint: str, *, params: dict[str, Any] | None = None) -> Any:
        if not self._settings.access_token:
            raise CatalogRequestError("MOVIEDB_ACCESS_TOKEN is not set")

        query: dict[str, Any] = {"language": self._settings.language}
        query.update(params or {})
        return self._request_json(
            method="GET",
            url=f"{self._settings.base_url.rstrip('/')}{endpoint}",
            params=query,
            headers={
                "Authorization": f"Bearer {self._settings.access_token}",
                "Accept": "application/json",
            },
        )

    @staticmethod
    def _normalize_detail(item: Any, media_kind: str) -> CatalogDetail | None:
        if not isinstance(item, dict):
            return None

        raw_id = item.get("id")
        if isinstance(raw_id, bool) or not isinstance(raw_id, int):
            return None

        if media_kind == MediaKind.MOVIE:
            title = item.get("title")
            date = item.get("release_date")
        else:
            title = item.get("name")
            date = item.get("first_air_date")

        return CatalogDetail(
            tmdb_id=raw_id,
            media_kind=media_kind,
            title=(title or "").strip() or None,
            poster_path=item.get("poster_path") or None,
            backdrop_path=item.get("backdrop_path") or None,
            release_date=date or None,
        )
