"""
app/connectors/base.py

Base catalog connector abstraction and shared HTTP mechanics.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import requests

from app.config import CatalogHTTPSettings
from app.domain.catalog import CatalogDetail, ForeignIdMatches

logger = logging.getLogger(__name__)


class CatalogRequestError(RuntimeError):
    """
    Raised when a catalog request fails. Requests are never retried.
    """


class BaseCatalogConnector(ABC):
    """
    Catalog interface used to translate and enrich imported rows.
    """

    source: str

    def __init__(
        self,
        *,
        source: str,
        http_settings: CatalogHTTPSettings,
        session: requests.Session | None = None,
    ) -> None:
        self.source = source
        self._session = session or requests.Session()
        self._timeout_seconds = http_settings.timeout_seconds
        self._min_request_interval_seconds = (
            1.0 / http_settings.rate_limit_per_second if http_settings.rate_limit_per_second > 0 else 0.0
        )
        self._last_request_monotonic: float = 0.0

    @abstractmethod
    def lookup_by_foreign_id(self, foreign_id: str) -> ForeignIdMatches:
        """
        Translate a foreign id into canonical matches grouped by media kind.
        """

    @abstractmethod
    def fetch_detail(self, tmdb_id: int, media_kind: str) -> CatalogDetail:
        """
        Fetch one catalog record by canonical id and media kind.
        """

    def _request_json(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Execute an HTTP request and return parsed JSON.
        """

        response = self._request(method=method, url=url, params=params, headers=headers)
        try:
            return response.json()
        except ValueError as exc:
            raise CatalogRequestError(f"{self.source}: response was not valid JSON.") from exc

    def _request(
        self,
        *,
        method: str,
        url: str,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> requests.Response:
        """
        Execute one rate-limited HTTP request.
        """

        self._apply_rate_limit()
        try:
            response = self._session.request(
                method=method,
                url=url,
                params=params,
                headers=headers,
                timeout=self._timeout_seconds,
            )
            response.raise_for_status()
        except requests.HTTPError as exc:
            status_code = exc.response.status_code if exc.response is not None else None
            reason = exc.response.reason if exc.response is not None else None
            logger.error(
                "Catalog request failed source=%s status=%s url=%s error=%s",
                self.source,
                status_code,
                url,
                exc,
            )
            raise CatalogRequestError(
                f"{self.source} API error: {reason or status_code or 'unknown status'}"
            ) from exc
        except requests.RequestException as exc:
            logger.error(
                "Catalog request transport failure source=%s url=%s error=%s",
                self.source,
                url,
                exc,
            )
            raise CatalogRequestError(f"{self.source}: request failed: {exc}") from exc

        return response

    def _apply_rate_limit(self) -> None:
        """
        Enforce minimum interval between outbound requests.
        """

        if self._min_request_interval_seconds <= 0:
            return

        now = time.monotonic()
        elapsed = now - self._last_request_monotonic
        remaining = self._min_request_interval_seconds - elapsed
        if remaining > 0:
            time.sleep(remaining)
        self._last_request_monotonic = time.monotonic()
