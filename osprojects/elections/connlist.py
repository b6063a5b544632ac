"""A singly ordered or insertion-ordered list with keyed deletion."""

from __future__ import annotations

from typing import Any, Callable, Iterator, Optional


class ConnList:
    """A list of items.

    ``matches(key, item)`` tells whether ``item`` is the one identified by
    ``key`` and is used for deletion. With an optional ``key`` function the
    list keeps its items in descending key order and refuses duplicate keys;
    without one, items stay in insertion order.
    """

    def __init__(
        self,
        matches: Callable[[Any, Any], bool],
        key: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        if matches is None:
            raise ValueError("a matching function is required")
        self._matches = matches
        self._key = key
        self._items: list = []

    def insert(self, data) -> None:
        """Add ``data``; raise ValueError if its key is already present."""
        if self._key is None:
            self._items.append(data)
            return
        new_key = self._key(data)
        for position, item in enumerate(self._items):
            other = self._key(item)
            if new_key == other:
                raise ValueError(f"duplicate key {new_key!r}")
            if new_key > other:
                self._items.insert(position, data)
                return
        self._items.append(data)

    def delete(self, key):
        """Remove and return the first item matching ``key``."""
        for position, item in enumerate(self._items):
            if self._matches(key, item):
                del self._items[position]
                return item
        raise KeyError(key)

    def __iter__(self) -> Iterator:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)