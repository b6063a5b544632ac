"""Command-line arguments of the sorting coordinator."""

from __future__ import annotations

import re
from collections import deque
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from .record import Column

PROGRAM_NAME = "mysort"
USAGE = f"Usage:\n{PROGRAM_NAME} -f inputfile -h|q columnid [-h|q columnid]"
MAX_COACHES = 4
MIN_COLUMN = int(Column.CUSTID)
MAX_COLUMN = int(Column.AMOUNT)
DEFAULT_COLUMN = int(Column.CUSTID)

MAX_COACHES_MESSAGE = f"Maximum number of coaches is {MAX_COACHES}."
MIN_COACHES_MESSAGE = "Minimum number of coaches is 1."
COLUMN_MESSAGE = (
    "The column's id flag after a -h or -q must be an integer between "
    f"{MIN_COLUMN} and {MAX_COLUMN} inclusive."
)

# Only a value starting with one of these is read as a column id.
_COLUMN_LEADS = frozenset("2345678")
_DIGITS = re.compile(r"[0-9]+")


class ArgumentError(ValueError):
    """Raised when the command line cannot be used."""


@dataclass(frozen=True)
class CoachSpec:
    """One coach: its sorting algorithm ('h' or 'q') and the column to sort by."""

    algorithm: str
    columnid: int


@dataclass(frozen=True)
class Arguments:
    """The input file, the coaches to start and the warnings raised on the way."""

    filename: str
    coaches: Tuple[CoachSpec, ...]
    warnings: Tuple[str, ...] = field(default=())

    @property
    def numofcoaches(self) -> int:
        return len(self.coaches)


def _ignore_warning(number: int) -> str:
    return (
        f"Warning: Coach {number} will be ignored because there is already a "
        "coach with the same column id."
    )


def parse_arguments(argv: Sequence[str]) -> Arguments:
    """Parse ``-f inputfile -h|q [columnid] ...``; ``argv`` has no program name.

    A coach whose column id is already taken is dropped with a warning.
    Raises ArgumentError when the arguments cannot be used.
    """
    pending = deque(argv)
    if len(pending) < 3:
        raise ArgumentError(USAGE)

    filename = None
    coaches = []
    warnings = []
    ignored = 0

    while pending:
        token = pending.popleft()
        if token == "-f":
            if filename is not None or not pending:
                raise ArgumentError(USAGE)
            filename = pending.popleft()
        elif token in ("-h", "-q"):
            if len(coaches) >= MAX_COACHES:
                raise ArgumentError(MAX_COACHES_MESSAGE)
            algorithm = token[1]
            if pending and pending[0][:1] in _COLUMN_LEADS:
                text = pending.popleft()
                if not _DIGITS.fullmatch(text) or not (
                    MIN_COLUMN <= int(text) <= MAX_COLUMN
                ):
                    raise ArgumentError(COLUMN_MESSAGE)
                columnid = int(text)
            else:
                columnid = DEFAULT_COLUMN
            if any(coach.columnid == columnid for coach in coaches):
                warnings.append(_ignore_warning(len(coaches) + 1 + ignored))
                ignored += 1
                continue
            coaches.append(CoachSpec(algorithm, columnid))

    if not coaches:
        raise ArgumentError(MIN_COACHES_MESSAGE)
    if filename is None:
        raise ArgumentError(USAGE)
    return Arguments(filename, tuple(coaches), tuple(warnings))