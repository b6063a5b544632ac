"""Voter records and the parsing of registry lines."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Tuple

if TYPE_CHECKING:
    from .postalcodes import PostalCode

_FIELD_COUNT = 6
_SEPARATORS = re.compile(r"[ \n]+")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


@dataclass(eq=False)
class Voter:
    """One registered voter."""

    id_num: str
    name: str
    surname: str
    age: int
    sex: str
    has_voted: bool = False
    post: Optional["PostalCode"] = field(default=None, repr=False)


def _leading_int(text: str) -> int:
    """Read the integer at the start of ``text``; 0 if there is none."""
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def split_fields(record: str) -> List[str]:
    """Split a record on spaces and newlines, dropping empty fields."""
    return [token for token in _SEPARATORS.split(record) if token]


def parse_voter(record: str) -> Tuple[Voter, int]:
    """Parse ``id name surname age sex postcode`` into a voter and its code.

    Raises ValueError if the record has fewer than six fields.
    """
    fields = split_fields(record)
    if len(fields) < _FIELD_COUNT:
        raise ValueError(f"malformed voter record: {record!r}")
    id_num, name, surname, age, sex, postcode = fields[:_FIELD_COUNT]
    voter = Voter(
        id_num=id_num,
        name=name,
        surname=surname,
        age=_leading_int(age),
        sex=sex[0],
    )
    return voter, _leading_int(postcode)