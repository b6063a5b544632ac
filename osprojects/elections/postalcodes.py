"""Voters grouped by postal code."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from .rbt import RedBlackTree
from .voter import Voter
from .voterslist import VotersList


@dataclass(eq=False)
class PostalCode:
    """A postal code with its voters and how many of them have voted."""

    code: int
    voters: VotersList = field(default_factory=VotersList, repr=False)
    have_voted: int = 0
    voters_number: int = 0


class PostalCodes:
    """Postal codes ordered by code; a code exists while it has voters."""

    def __init__(self) -> None:
        self._tree = RedBlackTree(key=lambda postal: postal.code)

    def insert(self, code: int, voter: Voter) -> PostalCode:
        """Attach ``voter`` to ``code``, creating the code if needed."""
        postal = self._tree.find(code)
        if postal is None:
            postal = PostalCode(code)
            self._tree.insert(postal)
        voter.post = postal
        postal.voters.insert(voter)
        postal.voters_number += 1
        return postal

    def remove_voter(self, voter: Voter) -> None:
        """Detach ``voter`` from its code, dropping the code if it empties."""
        postal = voter.post
        postal.voters.delete(voter)
        if voter.has_voted:
            postal.have_voted -= 1
        postal.voters_number -= 1
        if postal.voters_number == 0:
            self.delete(postal.code)

    def delete(self, code: int) -> PostalCode:
        """Remove and return the postal code; KeyError if absent."""
        return self._tree.delete(code)

    def get_votes(self, code: int) -> Optional[int]:
        """Return how many voters of ``code`` have voted, or None if unknown."""
        postal = self._tree.find(code)
        return None if postal is None else postal.have_voted

    def __iter__(self) -> Iterator[PostalCode]:
        return iter(self._tree)

    def __len__(self) -> int:
        return len(self._tree)