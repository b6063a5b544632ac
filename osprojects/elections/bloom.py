"""A Bloom filter driven by three caller-supplied hash functions."""

from __future__ import annotations

from typing import Callable, Hashable

HashFunction = Callable[[Hashable], int]


def compute_size(count: int) -> int:
    """Return the number of bits used for a filter sized for ``count`` keys.

    This is the first number above ``3 * count - 1`` that has no divisor
    between 2 and half of itself (exclusive).
    """
    size = 3 * count - 1
    while True:
        size += 1
        if not any(size % divisor == 0 for divisor in range(2, size // 2)):
            return size


class BloomFilter:
    """Probabilistic set membership: no false negatives, some false positives."""

    def __init__(
        self,
        count: int,
        h1: HashFunction,
        h2: HashFunction,
        h3: HashFunction,
    ) -> None:
        if any(h is None for h in (h1, h2, h3)):
            raise ValueError("all three hash functions must be given")
        if count <= 0:
            raise ValueError("count must be positive")
        self.size = compute_size(count)
        self._hashes = (h1, h2, h3)
        self._bits = bytearray((self.size + 7) // 8)

    def _positions(self, key):
        return (h(key) % self.size for h in self._hashes)

    def insert(self, key) -> None:
        """Set the three bits that ``key`` hashes to."""
        for position in self._positions(key):
            self._bits[position >> 3] |= 1 << (position & 7)

    def __contains__(self, key) -> bool:
        return all(
            self._bits[position >> 3] & (1 << (position & 7))
            for position in self._positions(key)
        )