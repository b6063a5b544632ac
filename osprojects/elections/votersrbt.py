"""Voters indexed by identity number in a red-black tree."""

from __future__ import annotations

from typing import Iterator, Optional

from .rbt import RedBlackTree
from .voter import Voter


class VotersTree:
    """The registry of voters, ordered by identity number."""

    def __init__(self) -> None:
        self._tree = RedBlackTree(key=lambda voter: voter.id_num)

    def insert(self, voter: Voter) -> None:
        """Add ``voter``; DuplicateKeyError if its identity number exists."""
        self._tree.insert(voter)

    def find(self, id_num: str) -> Optional[Voter]:
        """Return the voter with ``id_num``, or None."""
        return self._tree.find(id_num)

    def delete(self, id_num: str) -> Voter:
        """Remove and return the voter with ``id_num``; KeyError if absent."""
        return self._tree.delete(id_num)

    def __contains__(self, id_num: str) -> bool:
        return self._tree.find(id_num) is not None

    def __iter__(self) -> Iterator[Voter]:
        return iter(self._tree)

    def __len__(self) -> int:
        return len(self._tree)