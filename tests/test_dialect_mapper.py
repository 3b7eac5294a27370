from __future__ import annotations

import unittest

from app.domain.collection_import import CanonicalField, Dialect, RawTable
from app.mappers.dialect_mapper import DialectDetector, normalize_header
from app.parsers.csv_table_parser import MalformedTableError

IMDB_HEADERS = (
    "Position",
    "Const",
    "Created",
    "Modified",
    "Description",
    "Title",
    "Original Title",
    "URL",
    "Title Type",
    "IMDb Rating",
    "Runtime (mins)",
    "Year",
    "Genres",
    "Num Votes",
    "Release Date",
    "Directors",
)


class TestNormalizeHeader(unittest.TestCase):
    def test_keeps_lowercase_alphanumerics(self) -> None:
        self.assertEqual(normalize_header(" TMDB ID "), "tmdbid")
        self.assertEqual(normalize_header("Runtime (mins)"), "runtimemins")
        self.assertEqual(normalize_header("Release-Date"), "releasedate")


class TestDialectDetection(unittest.TestCase):
    def setUp(self) -> None:
        self.detector = DialectDetector()

    def test_native_export_headers(self) -> None:
        headers = ("Title", "Type", "TMDB ID", "Release Date", "Order", "Date Created")

        resolution = self.detector.detect(headers)

        self.assertEqual(resolution.dialect, Dialect.NATIVE)
        self.assertEqual(resolution.column_mapping[CanonicalField.TITLE], 0)
        self.assertEqual(resolution.column_mapping[CanonicalField.KIND], 1)
        self.assertEqual(resolution.column_mapping[CanonicalField.CANONICAL_ID], 2)
        self.assertEqual(resolution.column_mapping[CanonicalField.RELEASE_DATE], 3)
        self.assertEqual(resolution.column_mapping[CanonicalField.ORDER], 4)

    def test_native_detection_ignores_column_order(self) -> None:
        first = self.detector.detect(("TMDB ID", "Title", "Type"))
        second = self.detector.detect(("Type", "TMDB ID", "Title"))

        self.assertEqual(first.dialect, Dialect.NATIVE)
        self.assertEqual(second.dialect, Dialect.NATIVE)
        self.assertEqual(second.column_mapping[CanonicalField.CANONICAL_ID], 1)

    def test_native_export_with_canonical_id_header(self) -> None:
        resolution = self.detector.detect(("title", "type", "canonicalId", "order"))

        self.assertEqual(resolution.dialect, Dialect.NATIVE)
        self.assertEqual(resolution.column_mapping[CanonicalField.CANONICAL_ID], 2)
        self.assertEqual(resolution.column_mapping[CanonicalField.ORDER], 3)

    def test_native_requires_a_single_identifier_column(self) -> None:
        resolution = self.detector.detect(("Title", "Type", "TMDB ID", "Canonical ID"))

        self.assertEqual(resolution.dialect, Dialect.GENERIC)

    def test_imdb_export_headers(self) -> None:
        resolution = self.detector.detect(IMDB_HEADERS)

        self.assertEqual(resolution.dialect, Dialect.FOREIGN_EXPORT)
        self.assertEqual(resolution.column_mapping[CanonicalField.FOREIGN_ID], 1)
        self.assertEqual(resolution.column_mapping[CanonicalField.ORDER], 0)
        self.assertEqual(resolution.column_mapping[CanonicalField.NOTE], 4)
        self.assertEqual(resolution.column_mapping[CanonicalField.TITLE], 5)
        self.assertNotIn(CanonicalField.CANONICAL_ID, resolution.column_mapping)

    def test_unknown_extra_column_falls_back_to_generic(self) -> None:
        resolution = self.detector.detect(("Title", "Type", "TMDB ID", "Mood"))

        self.assertEqual(resolution.dialect, Dialect.GENERIC)
        self.assertEqual(resolution.column_mapping[CanonicalField.CANONICAL_ID], 2)
        self.assertEqual(resolution.column_mapping[CanonicalField.KIND], 1)
        self.assertEqual(resolution.column_mapping[CanonicalField.TITLE], 0)

    def test_generic_walks_synonyms_in_order(self) -> None:
        resolution = self.detector.detect(("Movie Title", "Name", "IMDb ID"))

        self.assertEqual(resolution.dialect, Dialect.GENERIC)
        # "title" is searched before "name": the substring hit on "Movie Title" wins.
        self.assertEqual(resolution.column_mapping[CanonicalField.TITLE], 0)
        self.assertEqual(resolution.column_mapping[CanonicalField.FOREIGN_ID], 2)

    def test_generic_does_not_reuse_claimed_columns(self) -> None:
        resolution = self.detector.detect(("Title Type", "Title"))

        # kind claims "Title Type" first; title must then pick the exact "Title" column.
        self.assertEqual(resolution.column_mapping[CanonicalField.KIND], 0)
        self.assertEqual(resolution.column_mapping[CanonicalField.TITLE], 1)

    def test_generic_ignores_rating_columns_for_identifiers(self) -> None:
        resolution = self.detector.detect(("Name", "IMDb Rating", "Year"))

        self.assertNotIn(CanonicalField.FOREIGN_ID, resolution.column_mapping)
        self.assertEqual(resolution.column_mapping[CanonicalField.TITLE], 0)
        self.assertEqual(resolution.column_mapping[CanonicalField.RELEASE_DATE], 2)

    def test_detection_is_deterministic(self) -> None:
        headers = ("Film Name", "Kind", "tmdb_id", "Rank", "Comment")

        resolutions = {
            (resolution.dialect, tuple(sorted(resolution.column_mapping.items())))
            for resolution in (self.detector.detect(headers) for _ in range(5))
        }

        self.assertEqual(len(resolutions), 1)


class TestAnalyze(unittest.TestCase):
    def setUp(self) -> None:
        self.detector = DialectDetector()

    def test_rejects_table_without_rows(self) -> None:
        with self.assertRaises(MalformedTableError):
            self.detector.analyze(RawTable(headers=("Title", "Type", "TMDB ID"), rows=()))

    def test_rejects_table_without_headers(self) -> None:
        with self.assertRaises(MalformedTableError):
            self.detector.analyze(RawTable(headers=(), rows=(("x",),)))

    def test_row_content_does_not_change_mapping(self) -> None:
        headers = ("Title", "Type", "TMDB ID")
        first = self.detector.analyze(RawTable(headers=headers, rows=(("Heat", "movie", "949"),)))
        second = self.detector.analyze(RawTable(headers=headers, rows=(("", "", "not a number"),)))

        self.assertEqual(first.dialect, second.dialect)
        self.assertEqual(dict(first.column_mapping), dict(second.column_mapping))


if __name__ == "__main__":
    unittest.main()
