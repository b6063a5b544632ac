"""How a coach splits the records among its sorters, and their run times."""

from __future__ import annotations

from statistics import fmean
from typing import List, NamedTuple, Sequence, Tuple

# For each coach number: the divisor of the record count giving one unit,
# and the size in units of every sorter's share but the last, which takes
# whatever remains.
_SHARES = {
    0: (1, ()),
    1: (2, (1,)),
    2: (8, (1, 1, 2)),
    3: (16, (1, 1, 1, 1, 2, 2, 4)),
}


class SorterTimes(NamedTuple):
    """The minimum, maximum and average run time of a coach's sorters."""

    minimum: float
    maximum: float
    average: float


def record_ranges(coachnum: int, numofrecords: int) -> List[Tuple[int, int]]:
    """Return ``(start, end)`` record ranges for the ``2 ** coachnum`` sorters.

    The ranges are contiguous and together cover every record.
    Raises ValueError for a coach number outside 0..3.
    """
    if coachnum not in _SHARES:
        raise ValueError(f"coach number must be between 0 and 3, not {coachnum}")
    divisor, multipliers = _SHARES[coachnum]
    unit = numofrecords // divisor
    ranges = []
    start = 0
    for multiplier in multipliers:
        end = start + unit * multiplier
        ranges.append((start, end))
        start = end
    ranges.append((start, numofrecords))
    return ranges


def compute_times(runtimes: Sequence[float]) -> SorterTimes:
    """Summarise the sorters' run times; ValueError if there are none."""
    if not runtimes:
        raise ValueError("no run times to summarise")
    return SorterTimes(min(runtimes), max(runtimes), fmean(runtimes))