"""Command-line arguments of an election session."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .voter import _leading_int

USAGE = "Usage:\n./runelection -i inputfile -o outfile (-n numofupdates)"
DEFAULT_UPDATES = "5"

_FLAGS = {"-i": "input", "-o": "output", "-n": "updates"}


class UsageError(ValueError):
    """Raised when the command line does not follow the usage."""

    def __init__(self, message: str = USAGE) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class CmdParams:
    """The registry to read, the file to write and the rebuild interval."""

    input: str
    output: str
    num_of_updates: int = 5


def parse_args(argv: Sequence[str]) -> CmdParams:
    """Parse ``-i inputfile -o outfile [-n numofupdates]`` in any order.

    ``argv`` holds the arguments without the program name.
    Raises UsageError when the arguments do not follow the usage.
    """
    arguments = list(argv)
    if len(arguments) not in (4, 6):
        raise UsageError()
    found = {}
    for flag, value in zip(arguments[::2], arguments[1::2]):
        name = _FLAGS.get(flag)
        if name is None or name in found:
            raise UsageError()
        found[name] = value
    if "input" not in found or "output" not in found:
        raise UsageError()
    return CmdParams(
        input=found["input"],
        output=found["output"],
        num_of_updates=_leading_int(found.get("updates", DEFAULT_UPDATES)),
    )