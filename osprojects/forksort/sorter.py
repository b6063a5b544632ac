"""Sort a range of records from a file and send them down a pipe."""

from __future__ import annotations

import os
import signal
import struct
import sys
import threading
import time
from typing import BinaryIO, Callable, Iterable, List, Optional, Sequence

from .record import RECORD_SIZE, Column, Record, read_records
from .sorting import heapsort, quicksort

COUNT = struct.Struct("<Q")
RUNTIME = struct.Struct("<d")
DEFAULT_PIPE_SIZE = 65536

USAGE = "Usage:\nsorter filename start end columnid algorithm [fd]"


class _Stopped(Exception):
    """Raised by the SIGUSR1 handler to stop the sorter."""


def _on_stop(signum, frame) -> None:
    raise _Stopped


def greater_by(column: int) -> Callable[[Record, Record], bool]:
    """A predicate telling whether one record is greater than another in ``column``.

    For a column that does not exist, no record is ever greater.
    """
    try:
        name = Column(column).field_name
    except ValueError:
        return lambda first, second: False
    return lambda first, second: getattr(first, name) > getattr(second, name)


def sort_records(records: Iterable[Record], column: int, algorithm: str) -> List[Record]:
    """Return the records sorted by ``column``: heapsort for 'h', else quicksort."""
    items = list(records)
    sort = heapsort if algorithm == "h" else quicksort
    sort(items, greater_by(column))
    return items


def _chunk_size(fd: int) -> int:
    try:
        import fcntl

        size = fcntl.fcntl(fd, fcntl.F_GETPIPE_SZ)
    except (ImportError, AttributeError, OSError):
        size = DEFAULT_PIPE_SIZE
    return max(1, (size - COUNT.size) // RECORD_SIZE)


def _send(pipe: BinaryIO, records: Sequence[Record], runtime: float) -> None:
    chunk = _chunk_size(pipe.fileno())
    for offset in range(0, len(records), chunk):
        batch = records[offset:offset + chunk]
        pipe.write(COUNT.pack(len(batch)))
        pipe.write(b"".join(record.pack() for record in batch))
    pipe.write(RUNTIME.pack(runtime))


def _report(pipe: BinaryIO, message: str) -> None:
    data = message.encode("utf-8")
    pipe.write(COUNT.pack(len(data)))
    pipe.write(data)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Sort records ``start`` to ``end`` of a file and write them to a descriptor.

    Arguments: filename, start, end, column id, algorithm and optionally the
    descriptor to write to (standard output otherwise, left open). The
    output is chunks of a record count followed by the records, then the
    sort's run time; on failure it is a length-prefixed error message.
    """
    arguments = sys.argv[1:] if argv is None else list(argv)
    if len(arguments) < 5:
        print(USAGE, file=sys.stderr)
        return 1

    owns_fd = len(arguments) > 5
    try:
        fd = int(arguments[5]) if owns_fd else sys.stdout.fileno()
    except ValueError:
        print(USAGE, file=sys.stderr)
        return 1

    in_main_thread = threading.current_thread() is threading.main_thread()
    previous = signal.signal(signal.SIGUSR1, _on_stop) if in_main_thread else None
    started = time.perf_counter()
    try:
        with open(fd, "wb", closefd=owns_fd) as pipe:
            try:
                filename, first, last, columnid, algorithm = arguments[:5]
                records = read_records(filename, int(first), int(last))
                ordered = sort_records(records, int(columnid), algorithm[:1])
                _send(pipe, ordered, time.perf_counter() - started)
            except _Stopped:
                return 1
            except (OSError, ValueError) as exc:
                _report(pipe, getattr(exc, "strerror", None) or str(exc))
                return 1
    finally:
        if in_main_thread:
            signal.signal(signal.SIGUSR1, previous)

    os.kill(os.getppid(), signal.SIGUSR2)
    return 0