"""The registry and the commands a session runs against it."""

from __future__ import annotations

import re
from typing import List, Optional

from .postalcodes import PostalCodes
from .rbt import DuplicateKeyError
from .voter import _leading_int, parse_voter
from .votersbloom import VotersBloomFilter
from .votersrbt import VotersTree

_KEY_END = re.compile(r"[ \n\t]")


class Registry:
    """Voters, their postal codes and the Bloom filter in front of them.

    Each command returns the line (or lines) it reports.
    """

    def __init__(
        self,
        tree: VotersTree,
        postcodes: PostalCodes,
        count: int,
        num_of_updates: int,
    ) -> None:
        self.tree = tree
        self.postcodes = postcodes
        self.count = count
        self.have_voted = 0
        self.bloom = VotersBloomFilter(count, num_of_updates)
        self.bloom.fill(tree)

    def lbf(self, key: str) -> str:
        """Look ``key`` up in the Bloom filter."""
        if key in self.bloom:
            return f"# KEY {key} POSSIBLY-IN REGISTRY."
        return f"- KEY {key} NOT-IN-BF."

    def lrb(self, key: str) -> str:
        """Look ``key`` up in the tree."""
        if self.tree.find(key) is not None:
            return f"# KEY {key} FOUND-IN-RBT."
        return f"- KEY {key} NOT-IN-RBT."

    def ins(self, record: str) -> str:
        """Insert a voter parsed from ``record``; ValueError if malformed."""
        voter, code = parse_voter(record)
        if voter.id_num not in self.bloom:
            try:
                self.tree.insert(voter)
            except DuplicateKeyError:
                pass
            else:
                self.postcodes.insert(code, voter)
                self.count += 1
                self.bloom.insert_update(voter.id_num, self.count, self.tree)
                return f"# REC-WITH KEY {voter.id_num} INSERTED"
        return f"- REC-WITH KEY {voter.id_num} EXISTS"

    def find(self, key: str) -> str:
        """Report the record of ``key``."""
        found = self.tree.find(key) if key in self.bloom else None
        if found is None:
            return f"- REC-WITH KEY {key} NOT-IN-STRUCTS"
        return (
            f"# REC-IS: {found.id_num} {found.name} {found.surname} "
            f"{found.post.code} {found.age}"
        )

    def delete(self, key: str) -> str:
        """Remove the voter with ``key`` from every structure."""
        found = self.tree.find(key) if key in self.bloom else None
        if found is None:
            return f"- KEY {key} NOT-IN-STRUCTS"
        if found.has_voted:
            self.have_voted -= 1
        self.count -= 1
        self.postcodes.remove_voter(found)
        self.tree.delete(key)
        self.bloom.delete_update(self.count, self.tree)
        return f"# DELETED KEY {key} FROM-STRUCTS"

    def vote(self, key: str) -> str:
        """Mark the voter with ``key`` as having voted."""
        found = self.tree.find(key) if key in self.bloom else None
        if found is None:
            return f"- REC-WITH KEY {key} NOT-IN-STRUCTS"
        if found.has_voted:
            return f"- REC-WITH KEY {key} ALREADY-VOTED"
        found.has_voted = True
        found.post.have_voted += 1
        self.have_voted += 1
        return f"# REC-WITH KEY {key} SET-VOTED"

    def load(self, path) -> List[str]:
        """Vote for the key at the start of every line of the file ``path``."""
        with open(path, encoding="utf-8") as keys:
            return [self.vote(_KEY_END.split(line, 1)[0]) for line in keys]

    def voted(self, code: Optional[str] = None) -> str:
        """Report votes in total, or in the postal code ``code``."""
        if not code:
            return f"# NUMBER {self.have_voted}"
        number = _leading_int(code)
        votes = self.postcodes.get_votes(number)
        if votes is None:
            return f"- NO-VOTERS-WITH POSTCODE {number}"
        return f"# IN POSTCODE {number} VOTERS-ARE {votes}"

    def votedperpc(self) -> List[str]:
        """Report the turnout of every postal code, in order of code."""
        lines = [
            f"# IN POSTCODE {postal.code} VOTERS-ARE "
            f"{postal.have_voted / postal.voters_number * 100:.2f}%"
            for postal in self.postcodes
        ]
        return lines or ["- NO-RECORD"]