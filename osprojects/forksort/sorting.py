"""In-place heapsort and quicksort driven by a "greater than" predicate."""

from __future__ import annotations

from typing import Any, Callable, MutableSequence

Greater = Callable[[Any, Any], bool]


def _sift_down(items: MutableSequence, size: int, root: int, greater: Greater) -> None:
    while True:
        left = 2 * root + 1
        right = left + 1
        largest = root
        if left < size and greater(items[left], items[root]):
            largest = left
        if right < size and greater(items[right], items[largest]):
            largest = right
        if largest == root:
            return
        items[root], items[largest] = items[largest], items[root]
        root = largest


def heapsort(items: MutableSequence, greater: Greater) -> None:
    """Sort ``items`` in place in ascending order of ``greater``."""
    size = len(items)
    for root in range(size // 2 - 1, -1, -1):
        _sift_down(items, size, root, greater)
    for end in range(size - 1, 0, -1):
        items[0], items[end] = items[end], items[0]
        _sift_down(items, end, 0, greater)


def quicksort(items: MutableSequence, greater: Greater) -> None:
    """Sort ``items`` in place, partitioning around the last element."""
    pending = [(0, len(items) - 1)]
    while pending:
        low, high = pending.pop()
        if low >= high:
            continue
        pivot = items[high]
        boundary = low - 1
        for index in range(low, high):
            if not greater(items[index], pivot):
                boundary += 1
                items[boundary], items[index] = items[index], items[boundary]
        boundary += 1
        items[boundary], items[high] = items[high], items[boundary]
        pending.append((boundary + 1, high))
        pending.append((low, boundary - 1))