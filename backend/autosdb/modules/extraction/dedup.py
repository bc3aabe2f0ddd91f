"""Insertion-ordered deduplication."""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class OrderedSet:
    """Set that remembers insertion order.

    Backed by a dict, so membership is O(1) and iteration yields values in
    the order they were first added.
    """

    def __init__(self, values: Iterable[str] = ()) -> None:
        self._items: dict[str, None] = {}
        self.update(values)

    def add(self, value: str) -> bool:
        """Add ``value``; return False if it was already present."""
        if value in self._items:
            return False
        self._items[value] = None
        return True

    def update(self, values: Iterable[str]) -> None:
        for value in values:
            self.add(value)

    def to_list(self) -> list[str]:
        return list(self._items)

    def __contains__(self, value: object) -> bool:
        return value in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"OrderedSet({self.to_list()!r})"


def dedupe(values: Iterable[str]) -> list[str]:
    """Return each distinct value once, in order of first occurrence.

    No sorting happens here; callers that need sorted output sort afterwards.
    """
    return OrderedSet(values).to_list()
