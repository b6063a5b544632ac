"""Voters kept in descending order of identity number."""

from __future__ import annotations

from typing import Iterator

from .connlist import ConnList
from .voter import Voter


class VotersList:
    """A list of voters with unique identity numbers."""

    def __init__(self) -> None:
        self._list = ConnList(
            matches=lambda id_num, voter: voter.id_num == id_num,
            key=lambda voter: voter.id_num,
        )

    def insert(self, voter: Voter) -> None:
        """Add ``voter``; ValueError if its identity number is present."""
        self._list.insert(voter)

    def delete(self, voter: Voter) -> Voter:
        """Remove the voter with ``voter``'s identity number; KeyError if absent."""
        return self._list.delete(voter.id_num)

    def __iter__(self) -> Iterator[Voter]:
        return iter(self._list)

    def __len__(self) -> int:
        return len(self._list)