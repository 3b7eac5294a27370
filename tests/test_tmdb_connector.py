from __future__ import annotations

import pytest
import requests

from app.config import CatalogHTTPSettings, MovieDBSettings
from app.connectors.base import CatalogRequestError
from app.connectors.tmdb_connector import TMDBCatalogConnector
from app.domain.collection_import import MediaKind
from tests.fakes import FakeHTTPSession, json_response


def _connector(session: FakeHTTPSession, *, token: str | None = "secret") -> TMDBCatalogConnector:
    return TMDBCatalogConnector(
        settings=MovieDBSettings(access_token=token, base_url="https://api.themoviedb.org/3/"),
        http_settings=CatalogHTTPSettings(timeout_seconds=3.0, rate_limit_per_second=0.0),
        session=session,  # type: ignore[arg-type]
    )


class TestLookupByForeignId:
    def test_groups_results_by_kind(self) -> None:
        session = FakeHTTPSession(
            json_response(
                200,
                {
                    "movie_results": [
                        {"id": 949, "title": "Heat", "poster_path": "/heat.jpg", "release_date": "1995-12-15"},
                        {"id": True, "title": "bogus"},
                    ],
                    "tv_results": [{"id": 70523, "name": "Dark", "first_air_date": "2017-12-01"}],
                },
            )
        )

        matches = _connector(session).lookup_by_foreign_id("tt0113277")

        assert [detail.tmdb_id for detail in matches.movie_matches] == [949]
        assert matches.movie_matches[0].release_date == "1995-12-15"
        assert matches.series_matches[0].title == "Dark"
        assert matches.series_matches[0].media_kind == MediaKind.TV
        assert matches.series_matches[0].release_date == "2017-12-01"

        sent = session.requests[0]
        assert sent["method"] == "GET"
        assert sent["url"] == "https://api.themoviedb.org/3/find/tt0113277"
        assert sent["params"] == {"language": "en-US", "external_source": "imdb_id"}
        assert sent["headers"]["Authorization"] == "Bearer secret"
        assert sent["timeout"] == 3.0

    def test_empty_results(self) -> None:
        session = FakeHTTPSession(json_response(200, {"movie_results": [], "tv_results": []}))

        assert _connector(session).lookup_by_foreign_id("tt0000001").is_empty

    def test_http_error_is_not_retried(self) -> None:
        session = FakeHTTPSession(json_response(503, {}, reason="Service Unavailable"))

        with pytest.raises(CatalogRequestError, match="tmdb API error: Service Unavailable"):
            _connector(session).lookup_by_foreign_id("tt0113277")
        assert len(session.requests) == 1

    def test_transport_error(self) -> None:
        session = FakeHTTPSession(requests.ConnectionError("connection refused"))

        with pytest.raises(CatalogRequestError, match="request failed"):
            _connector(session).lookup_by_foreign_id("tt0113277")

    @pytest.mark.parametrize(
        "error",
        [
            requests.exceptions.ChunkedEncodingError("connection broken mid-body"),
            requests.exceptions.ContentDecodingError("bad gzip"),
            requests.exceptions.TooManyRedirects("redirect loop"),
            requests.exceptions.InvalidURL("bad url"),
        ],
    )
    def test_any_requests_failure_is_wrapped(self, error: requests.RequestException) -> None:
        session = FakeHTTPSession(error)

        with pytest.raises(CatalogRequestError, match="tmdb: request failed"):
            _connector(session).lookup_by_foreign_id("tt0113277")

    def test_invalid_json(self) -> None:
        session = FakeHTTPSession(json_response(200, body=b"<html>"))

        with pytest.raises(CatalogRequestError, match="not valid JSON"):
            _connector(session).lookup_by_foreign_id("tt0113277")

    def test_missing_token_makes_no_request(self) -> None:
        session = FakeHTTPSession()

        with pytest.raises(CatalogRequestError, match="MOVIEDB_ACCESS_TOKEN is not set"):
            _connector(session, token=None).lookup_by_foreign_id("tt0113277")
        assert session.requests == []


class TestFetchDetail:
    def test_movie_detail(self) -> None:
        session = FakeHTTPSession(
            json_response(200, {"id": 949, "title": "Heat", "poster_path": "/p.jpg", "backdrop_path": "/b.jpg"})
        )

        detail = _connector(session).fetch_detail(949, MediaKind.MOVIE)

        assert detail.title == "Heat"
        assert detail.backdrop_path == "/b.jpg"
        assert detail.release_date is None
        assert session.requests[0]["url"] == "https://api.themoviedb.org/3/movie/949"

    def test_tv_detail_uses_name_and_first_air_date(self) -> None:
        session = FakeHTTPSession(json_response(200, {"id": 70523, "name": "Dark", "first_air_date": "2017-12-01"}))

        detail = _connector(session).fetch_detail(70523, MediaKind.TV)

        assert detail.title == "Dark"
        assert detail.release_date == "2017-12-01"
        assert session.requests[0]["url"] == "https://api.themoviedb.org/3/tv/70523"

    def test_not_found(self) -> None:
        session = FakeHTTPSession(json_response(404, {"status_message": "not found"}, reason="Not Found"))

        with pytest.raises(CatalogRequestError, match="Not Found"):
            _connector(session).fetch_detail(1, MediaKind.MOVIE)

    def test_unexpected_shape(self) -> None:
        session = FakeHTTPSession(json_response(200, ["not", "an", "object"]))

        with pytest.raises(CatalogRequestError, match="unexpected movie detail response shape"):
            _connector(session).fetch_detail(1, MediaKind.MOVIE)

    def test_unsupported_kind(self) -> None:
        with pytest.raises(CatalogRequestError, match="unsupported media kind"):
            _connector(FakeHTTPSession()).fetch_detail(1, "podcast")
