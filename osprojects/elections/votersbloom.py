"""A Bloom filter over voters' identity numbers that rebuilds itself."""

from __future__ import annotations

from .bloom import BloomFilter
from .votersrbt import VotersTree

_MASK = (1 << 64) - 1


def _signed(byte: int) -> int:
    """A byte read as a signed char and widened to 64 bits."""
    return (byte - 256) & _MASK if byte >= 128 else byte


def djb2_hash(key: str) -> int:
    """The djb2 string hash over the key's UTF-8 bytes, in 64 bits."""
    value = 5381
    for byte in key.encode("utf-8"):
        value = (value * 33 + _signed(byte)) & _MASK
    return value


def murmur3_32(key: str) -> int:
    """A murmur3-style hash worked on 64-bit words.

    Blocks are read as 8-byte little-endian words; bytes past the end of
    the key read as zero.
    """
    data = key.encode("utf-8")
    length = len(data)
    h = 33
    offset = 0
    for _ in range(length >> 2):
        chunk = data[offset:offset + 8].ljust(8, b"\0")
        offset += 8
        k = (int.from_bytes(chunk, "little") * 0xCC9E2D51) & _MASK
        k = ((k << 15) | (k >> 17)) & _MASK
        k = (k * 0x1B873593) & _MASK
        h ^= k
        h = ((h << 13) | (h >> 19)) & _MASK
        h = (h * 5 + 0xE6546B64) & _MASK

    tail = length & 3
    if tail:
        k = 0
        for index in range(tail, 0, -1):
            position = offset + index - 1
            byte = data[position] if position < length else 0
            k = ((k << 8) & _MASK) | _signed(byte)
        k = (k * 0xCC9E2D51) & _MASK
        k = ((k << 15) | (k >> 17)) & _MASK
        k = (k * 0x1B873593) & _MASK
        h ^= k

    h ^= length
    h ^= h >> 16
    h = (h * 0x85EBCA6B) & _MASK
    h ^= h >> 13
    h = (h * 0xC2B2AE35) & _MASK
    h ^= h >> 16
    return h


def linear_hash(key: str) -> int:
    """A combination of the other two hashes."""
    return (djb2_hash(key) + 33 * murmur3_32(key)) & _MASK


class VotersBloomFilter:
    """Bloom filter of identity numbers, rebuilt from the registry once the
    number of updates reaches ``num_of_updates``.

    Every key put into the filter, including those of a rebuild, counts as
    an update, as does every deletion.
    """

    def __init__(self, count: int, num_of_updates: int) -> None:
        self.bloom = self._new_filter(count)
        self.num_of_updates = num_of_updates
        self.updates_done = 0

    @staticmethod
    def _new_filter(count: int) -> BloomFilter:
        return BloomFilter(max(count, 1), djb2_hash, murmur3_32, linear_hash)

    def _insert(self, key: str) -> None:
        self.bloom.insert(key)
        self.updates_done += 1

    def _remake_if_due(self, count: int, tree: VotersTree) -> None:
        if self.updates_done >= self.num_of_updates:
            self.bloom = self._new_filter(count)
            self.fill(tree)

    def insert_update(self, key: str, count: int, tree: VotersTree) -> None:
        """Add ``key`` and rebuild for ``count`` voters if the time has come."""
        self._insert(key)
        self._remake_if_due(count, tree)

    def delete_update(self, count: int, tree: VotersTree) -> None:
        """Record a deletion and rebuild for ``count`` voters if due."""
        self.updates_done += 1
        self._remake_if_due(count, tree)

    def __contains__(self, key: str) -> bool:
        return key in self.bloom

    def fill(self, tree: VotersTree) -> None:
        """Add the identity number of every voter in ``tree``."""
        for voter in tree:
            self._insert(voter.id_num)