from __future__ import annotations

import pytest

from app.domain.collection_import import CollectionEntry, MediaKind
from app.services.position_assigner import PositionAssigner
from tests.fakes import InMemoryCollection


def _entry(entry_id: str, tmdb_id: int, order: int) -> CollectionEntry:
    return CollectionEntry(id=entry_id, tmdb_id=tmdb_id, media_kind=MediaKind.MOVIE, title="x", order=order)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("3", (3, None)),
        (" 12 ", (12, None)),
        (None, (None, None)),
        ("", (None, None)),
        ("abc", (None, "Invalid order value: abc. Will be assigned automatically.")),
        ("0", (None, "Invalid order value: 0. Will be assigned automatically.")),
        ("-4", (None, "Invalid order value: -4. Will be assigned automatically.")),
        ("2.5", (None, "Invalid order value: 2.5. Will be assigned automatically.")),
        ("+5", (None, "Invalid order value: +5. Will be assigned automatically.")),
        ("1_000", (None, "Invalid order value: 1_000. Will be assigned automatically.")),
        ("٣", (None, "Invalid order value: ٣. Will be assigned automatically.")),
    ],
)
def test_parse_supplied(raw: str | None, expected: tuple[int | None, str | None]) -> None:
    assert PositionAssigner.parse_supplied(raw) == expected


def test_empty_collection_starts_at_one() -> None:
    assigner = PositionAssigner.from_collection(InMemoryCollection())

    assert assigner.propose() == 1


def test_seeded_from_collection() -> None:
    collection = InMemoryCollection(entries=[_entry("a", 1, 2), _entry("b", 2, 7)])

    assert PositionAssigner.from_collection(collection).propose() == 8


def test_running_max_advances_only_on_observe() -> None:
    assigner = PositionAssigner(seed_max=4)

    assert assigner.propose() == 5
    assert assigner.propose() == 5

    assigner.observe("new-1", 5)
    assert assigner.propose() == 6


def test_explicit_order_is_used_verbatim_and_raises_max() -> None:
    assigner = PositionAssigner(seed_max=4)

    assert assigner.propose(2) == 2
    assigner.observe("new-1", 2)
    assert assigner.running_max == 4

    assigner.observe("new-2", 10)
    assert assigner.propose() == 11


def test_lowering_the_highest_entry_lowers_the_running_max() -> None:
    assigner = PositionAssigner(seed_max=3, orders={"heat": 3})

    assigner.observe("heat", 1)

    assert assigner.running_max == 1
    assert assigner.propose() == 2


def test_lowering_one_of_two_highest_entries_keeps_the_max() -> None:
    assigner = PositionAssigner(seed_max=5, orders={"a": 5, "b": 5, "c": 2})

    assigner.observe("a", 1)

    assert assigner.running_max == 5
