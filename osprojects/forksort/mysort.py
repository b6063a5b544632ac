"""The coordinator: start one coach per requested sort and report their times."""

from __future__ import annotations

import os
import signal
import stat
import struct
import sys
import time
from dataclasses import dataclass
from pathlib import Path
from statistics import fmean
from typing import List, Optional, Sequence

from . import coach
from .arguments import PROGRAM_NAME, ArgumentError, Arguments, CoachSpec, parse_arguments
from .coach import CoachError, CoachReport
from .record import count_records
from .sorter import COUNT

_READ_SIZE = 65536


@dataclass(frozen=True)
class CoachResult:
    """What one coach reported, with its number (from 1) and what it sorted."""

    number: int
    spec: CoachSpec
    report: CoachReport


@dataclass
class _Child:
    pid: Optional[int]
    fd: Optional[int]


def format_results(prog_name: str, results: Sequence[CoachResult], runtime: float) -> str:
    """The coordinator's report on its own run time and every coach's.

    Raises ValueError when there are no results.
    """
    if not results:
        raise ValueError("no coach results to report")
    lines = [
        f"***** {prog_name} *****",
        f"Coordinator run time: {runtime:.2f} sec",
        f"Results for {len(results)} coach(es):",
    ]
    for result in results:
        report = result.report
        lines += [
            f"Coach {result.number}: Run time: {report.runtime:.6f}",
            f"\tMinimum run time of sorters: {report.min_time:.2f} sec",
            f"\tMaximum run time of sorters: {report.max_time:.2f} sec",
            f"\tAverage run time of sorters: {report.avg_time:.2f} sec",
            f"\tNumber of SIGUSR2 signals received: {report.sigusr2_received}",
            "",
        ]
    coach_times = [result.report.runtime for result in results]
    lines += [
        f"Minimum run time of coaches: {min(coach_times):.2f} sec",
        f"Maximum run time of coaches: {max(coach_times):.2f} sec",
        f"Average run time of coaches: {fmean(coach_times):.2f} sec",
    ]
    return "\n".join(lines) + "\n"


def _start_coach(filename: str, numofrecords: int, spec: CoachSpec, index: int) -> _Child:
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
            code = coach.main(
                [
                    filename,
                    str(numofrecords),
                    str(spec.columnid),
                    spec.algorithm,
                    str(index),
                    str(write_fd),
                ]
            )
        finally:
            os._exit(code)
    os.close(write_fd)
    return _Child(pid, read_fd)


def _read_all(fd: int) -> bytes:
    data = bytearray()
    while True:
        chunk = os.read(fd, _READ_SIZE)
        if not chunk:
            return bytes(data)
        data += chunk


def _stop(children: Sequence[_Child]) -> None:
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


def _decode(data: bytes, exitcode: int, number: int) -> CoachReport:
    if exitcode == 0:
        try:
            return CoachReport.unpack(data)
        except ValueError:
            raise CoachError(f"Coach {number} : malformed report") from None
    if exitcode == 1:
        try:
            (length,) = COUNT.unpack_from(data, 0)
        except struct.error:
            length = None
        if length is not None:
            text = data[COUNT.size:COUNT.size + length]
            if len(text) == length:
                message = text.decode("utf-8", errors="replace")
                raise CoachError(f"Coach {number} : {message}")
    raise CoachError(f"Coach {number} : exited with status {exitcode}")


def run_coaches(arguments: Arguments, filename: str, numofrecords: int) -> List[CoachResult]:
    """Start a coach process for every coach in ``arguments`` and gather reports.

    Coach ``i`` (from 0) sorts with ``2 ** i`` sorters. When a coach fails,
    the others are stopped and CoachError is raised with its message.
    """
    children: List[_Child] = []
    try:
        for index, spec in enumerate(arguments.coaches):
            children.append(_start_coach(filename, numofrecords, spec, index))
        results = []
        for number, (spec, child) in enumerate(zip(arguments.coaches, children), 1):
            data = _read_all(child.fd)
            os.close(child.fd)
            child.fd = None
            _, status = os.waitpid(child.pid, 0)
            child.pid = None
            report = _decode(data, os.waitstatus_to_exitcode(status), number)
            results.append(CoachResult(number, spec, report))
        return results
    finally:
        _stop(children)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Sort a record file by every requested column and print the timings."""
    started = time.perf_counter()
    arguments_list = sys.argv[1:] if argv is None else list(argv)
    try:
        arguments = parse_arguments(arguments_list)
    except ArgumentError as exc:
        print(exc, file=sys.stderr)
        return 1
    for warning in arguments.warnings:
        print(warning, file=sys.stderr)

    try:
        path = Path(arguments.filename).resolve(strict=True)
    except OSError as exc:
        print(
            f"{arguments.filename} - realpath() : {exc.strerror or exc}",
            file=sys.stderr,
        )
        return 1
    filename = str(path)

    try:
        mode = os.stat(filename).st_mode
    except OSError as exc:
        print(f"{filename} - stat() : {exc.strerror or exc}", file=sys.stderr)
        return 1
    if not stat.S_ISREG(mode):
        print(f"{filename} : is not a regular file.", file=sys.stderr)
        return 1

    try:
        numofrecords = count_records(filename)
        results = run_coaches(arguments, filename, numofrecords)
    except OSError as exc:
        print(exc.strerror or str(exc), file=sys.stderr)
        return 1
    except CoachError as exc:
        print(exc, file=sys.stderr)
        return 1

    runtime = time.perf_counter() - started
    print(format_results(PROGRAM_NAME, results, runtime), end="")
    return 0