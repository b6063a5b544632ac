"""A coach: split a record file among sorter processes and merge their output."""

from __future__ import annotations

import os
import selectors
import signal
import struct
import sys
import time
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from . import sorter
from .partition import compute_times, record_ranges
from .record import RECORD_SIZE, Record
from .sorter import COUNT, RUNTIME

USAGE = "Usage:\ncoach filename numofrecords columnid algorithm coachnum [fd]"

_REPORT = struct.Struct("<ddddi")
REPORT_SIZE = _REPORT.size

_READ_SIZE = 65536
_OUTPUT_MODE = 0o644


class CoachError(Exception):
    """Raised when a sorter fails or its output cannot be used."""


class _Stopped(Exception):
    """Raised by the SIGUSR1 handler to stop the coach."""


def _on_stop(signum, frame) -> None:
    raise _Stopped


@dataclass(frozen=True)
class CoachReport:
    """The sorters' run times, the coach's own and the SIGUSR2 signals counted."""

    min_time: float
    max_time: float
    avg_time: float
    runtime: float
    sigusr2_received: int

    def pack(self) -> bytes:
        """The report as sent to the coordinator."""
        return _REPORT.pack(
            self.min_time,
            self.max_time,
            self.avg_time,
            self.runtime,
            self.sigusr2_received,
        )

    @classmethod
    def unpack(cls, data: bytes) -> "CoachReport":
        """Read a report from exactly REPORT_SIZE bytes."""
        if len(data) != REPORT_SIZE:
            raise ValueError(f"a report takes {REPORT_SIZE} bytes, got {len(data)}")
        return cls(*_REPORT.unpack(data))


@dataclass
class _Sorter:
    pid: Optional[int]
    fd: Optional[int]


def output_path(filename: str, columnid: int) -> str:
    """The file the coach writes its results to: ``filename.columnid``."""
    return f"{filename}.{columnid}"


def _getting_error(number: int) -> CoachError:
    return CoachError(f"An error occurred when getting records from sorter {number}.")


def _communicating_error(number: int) -> CoachError:
    return CoachError(f"An error occurred when communicating with sorter {number}.")


def _start_sorter(
    filename: str, start: int, end: int, columnid: int, algorithm: str
) -> _Sorter:
    read_fd, write_fd = os.pipe()
    sys.stdout.flush()
    sys.stderr.flush()
    try:
        pid = os.fork()
    except OSError:
        os.close(read_fd)
        os.close(write_fd)
        raise
    if pid == 0:
        code = 1
        try:
            os.close(read_fd)
            code = sorter.main(
                [filename, str(start), str(end), str(columnid), algorithm, str(write_fd)]
            )
        finally:
            os._exit(code)
    os.close(write_fd)
    return _Sorter(pid, read_fd)


def _collect(fds: Sequence[int]) -> Dict[int, bytes]:
    """Read every descriptor until end of file, whichever is ready first."""
    buffers = {fd: bytearray() for fd in fds}
    with selectors.DefaultSelector() as selector:
        for fd in fds:
            selector.register(fd, selectors.EVENT_READ)
        while selector.get_map():
            for key, _ in selector.select():
                chunk = os.read(key.fd, _READ_SIZE)
                if chunk:
                    buffers[key.fd] += chunk
                else:
                    selector.unregister(key.fd)
    return {fd: bytes(data) for fd, data in buffers.items()}


def _reap(child: _Sorter) -> int:
    _, status = os.waitpid(child.pid, 0)
    child.pid = None
    return os.waitstatus_to_exitcode(status)


def _stop(children: Sequence[_Sorter]) -> None:
    for child in children:
        if child.fd is not None:
            os.close(child.fd)
            child.fd = None
        if child.pid is not None:
            try:
                os.kill(child.pid, signal.SIGUSR1)
            except ProcessLookupError:
                pass
            os.waitpid(child.pid, 0)
            child.pid = None


def _error_message(data: bytes) -> Optional[str]:
    try:
        (length,) = COUNT.unpack_from(data, 0)
    except struct.error:
        return None
    text = data[COUNT.size:COUNT.size + length]
    if len(text) != length:
        return None
    return text.decode("utf-8", errors="replace")


def _decode(
    data: bytes, exitcode: int, expected: int, number: int
) -> Tuple[List[Record], float]:
    if exitcode != 0:
        message = _error_message(data)
        if exitcode == 1 and message is not None:
            raise CoachError(f"Sorter {number} : {message}")
        raise _communicating_error(number)
    records: List[Record] = []
    offset = 0
    try:
        while len(records) < expected:
            (count,) = COUNT.unpack_from(data, offset)
            offset += COUNT.size
            size = count * RECORD_SIZE
            block = data[offset:offset + size]
            if count == 0 or len(block) != size:
                raise _communicating_error(number)
            offset += size
            records.extend(
                Record.unpack(block[position:position + RECORD_SIZE])
                for position in range(0, size, RECORD_SIZE)
            )
            if len(records) > expected:
                raise _getting_error(number)
        (runtime,) = RUNTIME.unpack_from(data, offset)
    except struct.error:
        raise _communicating_error(number) from None
    return records, runtime


def run_coach(
    filename: str, numofrecords: int, columnid: int, algorithm: str, coachnum: int
) -> CoachReport:
    """Sort ``filename`` by ``columnid`` with ``2 ** coachnum`` sorter processes.

    Each sorter's sorted share is written, in order of share, to
    ``output_path(filename, columnid)``. Must run in the main thread, since
    sorters signal their completion with SIGUSR2. Raises CoachError when a
    sorter fails and ValueError for a coach number outside 0..3.
    """
    ranges = record_ranges(coachnum, numofrecords)
    received = 0

    def on_finished(signum, frame) -> None:
        nonlocal received
        received += 1

    previous = signal.signal(signal.SIGUSR2, on_finished)
    started = time.perf_counter()
    children: List[_Sorter] = []
    try:
        for start, end in ranges:
            children.append(_start_sorter(filename, start, end, columnid, algorithm))
        outputs = _collect([child.fd for child in children])
        for child in children:
            os.close(child.fd)
            child.fd = None
        exitcodes = [_reap(child) for child in children]

        shares: List[List[Record]] = []
        runtimes: List[float] = []
        for number, (child_output, exitcode, (start, end)) in enumerate(
            zip(outputs.values(), exitcodes, ranges), 1
        ):
            records, runtime = _decode(child_output, exitcode, end - start, number)
            shares.append(records)
            runtimes.append(runtime)
    finally:
        _stop(children)
        signal.signal(signal.SIGUSR2, previous)

    with open(
        output_path(filename, columnid),
        "w",
        encoding="latin-1",
        newline="\n",
        opener=lambda path, flags: os.open(path, flags, _OUTPUT_MODE),
    ) as results:
        for share in shares:
            for record in share:
                results.write(record.to_line() + "\n")

    times = compute_times(runtimes)
    return CoachReport(
        min_time=times.minimum,
        max_time=times.maximum,
        avg_time=times.average,
        runtime=time.perf_counter() - started,
        sigusr2_received=received,
    )


def _report_error(pipe, message: str) -> None:
    data = message.encode("utf-8")
    pipe.write(COUNT.pack(len(data)))
    pipe.write(data)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a coach and send its report down a descriptor.

    Arguments: filename, number of records, column id, algorithm, coach
    number and optionally the descriptor to write to (standard output
    otherwise, left open). On success the output is a packed CoachReport;
    on failure it is a length-prefixed error message.
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

    previous = signal.signal(signal.SIGUSR1, _on_stop)
    try:
        with open(fd, "wb", closefd=owns_fd) as pipe:
            try:
                filename, numofrecords, columnid, algorithm, coachnum = arguments[:5]
                report = run_coach(
                    filename,
                    int(numofrecords),
                    int(columnid),
                    algorithm[:1],
                    int(coachnum),
                )
            except _Stopped:
                _report_error(pipe, "Coach stopped.")
                return 1
            except OSError as exc:
                _report_error(pipe, exc.strerror or str(exc))
                return 1
            except (CoachError, ValueError) as exc:
                _report_error(pipe, str(exc))
                return 1
            pipe.write(report.pack())
    finally:
        signal.signal(signal.SIGUSR1, previous)
    return 0