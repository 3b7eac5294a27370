"""
app/services/position_assigner.py

In-job ordering for newly created collection entries.
"""

from __future__ import annotations

import re
from typing import Iterable, Mapping

from app.domain.collection_import import CollectionEntry
from app.repositories.base import CollectionAdapter

_ORDER_PATTERN = re.compile(r"[0-9]+")


class PositionAssigner:
    """
    Hands out 1-based order values for one import job.

    The collection is read once per job. After that the assigner tracks the
    order of every entry it has seen, so the running maximum always equals the
    collection's current maximum, including after an update lowers the entry
    that held it. Explicit orders supplied by the file are used verbatim, even
    when they collide with an existing entry.
    """

    def __init__(self, seed_max: int = 0, orders: Mapping[str, int] | None = None) -> None:
        self._orders: dict[str, int] = dict(orders or {})
        self._running_max = max(0, seed_max, *self._orders.values())

    @classmethod
    def from_collection(
        cls,
        adapter: CollectionAdapter,
        entries: Iterable[CollectionEntry] | None = None,
    ) -> "PositionAssigner":
        if entries is None:
            entries = adapter.list_entries()
        return cls(adapter.max_order(), {entry.id: entry.order for entry in entries})

    @property
    def running_max(self) -> int:
        return self._running_max

    @staticmethod
    def parse_supplied(raw: str | None) -> tuple[int | None, str | None]:
        """
        Parse a supplied order cell.

        Returns ``(value, None)`` for a positive integer, ``(None, None)`` for
        a blank cell and ``(None, warning)`` for anything else. Only plain
        ASCII digits count; signs, separators and other numerals do not.
        """

        if raw is None or not raw.strip():
            return None, None
        cell = raw.strip()
        value = int(cell) if _ORDER_PATTERN.fullmatch(cell) else 0
        if value < 1:
            return None, f"Invalid order value: {raw}. Will be assigned automatically."
        return value, None

    def propose(self, supplied: int | None = None) -> int:
        """
        Return the order for the next new entry without reserving it.

        Callers observe the order once the entry is stored, so a failed write
        does not leave a hole in the sequence.
        """

        return supplied if supplied is not None else self._running_max + 1

    def observe(self, entry_id: str, order: int) -> None:
        """
        Record the stored order of a created or updated entry.
        """

        previous = self._orders.get(entry_id)
        self._orders[entry_id] = order
        if order >= self._running_max:
            self._running_max = order
        elif previous == self._running_max:
            self._running_max = max(self._orders.values(), default=0)
