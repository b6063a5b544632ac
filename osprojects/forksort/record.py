"""Fixed-size customer records and their binary file format.

String fields are stored NUL-terminated and read as latin-1, so that
comparing them compares their bytes.
"""

from __future__ import annotations

import os
import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import List

NAME_SIZE = 20
POSTCODE_SIZE = 6

_STRUCT = struct.Struct("<q20s20s20si20s6s2xf")
RECORD_SIZE = _STRUCT.size

_ENCODING = "latin-1"


class Column(IntEnum):
    """The columns a record can be sorted by."""

    CUSTID = 1
    FIRSTNAME = 2
    LASTNAME = 3
    STREET = 4
    HOUSEID = 5
    CITY = 6
    POSTCODE = 7
    AMOUNT = 8

    @property
    def field_name(self) -> str:
        """The name of the Record attribute this column holds."""
        return _FIELD_NAMES[self.value]


_FIELD_NAMES = {
    1: "custid",
    2: "first_name",
    3: "last_name",
    4: "street",
    5: "house_id",
    6: "city",
    7: "postcode",
    8: "amount",
}


def _encode(text: str, size: int, name: str) -> bytes:
    data = text.encode(_ENCODING)
    if len(data) >= size:
        raise ValueError(f"{name} must be shorter than {size} bytes")
    return data


def _decode(data: bytes) -> str:
    return data.split(b"\0", 1)[0].decode(_ENCODING)


def format_real(value: float) -> str:
    """Format a real number with two decimals."""
    return f"{value:.2f}"


@dataclass
class Record:
    """One customer record."""

    custid: int
    first_name: str
    last_name: str
    street: str
    house_id: int
    city: str
    postcode: str
    amount: float

    def pack(self) -> bytes:
        """The record's bytes in the file format."""
        return _STRUCT.pack(
            self.custid,
            _encode(self.first_name, NAME_SIZE, "first_name"),
            _encode(self.last_name, NAME_SIZE, "last_name"),
            _encode(self.street, NAME_SIZE, "street"),
            self.house_id,
            _encode(self.city, NAME_SIZE, "city"),
            _encode(self.postcode, POSTCODE_SIZE, "postcode"),
            self.amount,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "Record":
        """Read a record from exactly RECORD_SIZE bytes."""
        if len(data) != RECORD_SIZE:
            raise ValueError(f"a record takes {RECORD_SIZE} bytes, got {len(data)}")
        return cls._from_fields(_STRUCT.unpack(data))

    @classmethod
    def _from_fields(cls, fields) -> "Record":
        custid, first, last, street, house_id, city, postcode, amount = fields
        return cls(
            custid=custid,
            first_name=_decode(first),
            last_name=_decode(last),
            street=_decode(street),
            house_id=house_id,
            city=_decode(city),
            postcode=_decode(postcode),
            amount=amount,
        )

    def to_line(self) -> str:
        """The record as a line of space-separated fields, without newline."""
        return (
            f"{self.custid} {self.first_name} {self.last_name} {self.street} "
            f"{self.house_id} {self.city} {self.postcode} {format_real(self.amount)}"
        )


def count_records(path) -> int:
    """The number of whole records in the file at ``path``."""
    return os.path.getsize(path) // RECORD_SIZE


def read_records(path, start: int, end: int) -> List[Record]:
    """Read records ``start`` (inclusive) to ``end`` (exclusive) from ``path``.

    Raises ValueError for an invalid range or a file that is too short.
    """
    if not 0 <= start <= end:
        raise ValueError(f"invalid record range {start}..{end}")
    wanted = (end - start) * RECORD_SIZE
    with open(path, "rb") as source:
        source.seek(start * RECORD_SIZE)
        data = source.read(wanted)
    if len(data) != wanted:
        raise ValueError("the file holds fewer records than requested")
    return [Record._from_fields(fields) for fields in _STRUCT.iter_unpack(data)]