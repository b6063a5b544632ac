"""The interactive election session over a voters' registry."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO, Tuple

from .commands import Registry
from .postalcodes import PostalCodes
from .rbt import DuplicateKeyError
from .run import UsageError, parse_args
from .voter import parse_voter
from .votersrbt import VotersTree

PROGRAM_NAME = "runelection"

WRONG_COMMAND = (
    "Wrong command, try:\nlbf key (lookup bloom-filter)\nlrb "
    "key(lookup red-black tree)\nins record(insert record to "
    "red-black tree)\nfind key\ndelete key\nvote key\nload "
    "fileofkeys\nvoted\nvoted postcode\nvotedperpc\nexit"
)

_KEYED_COMMANDS = frozenset({"lbf", "lrb", "find", "delete", "vote"})


def _first_word(text: Optional[str]) -> Optional[str]:
    return None if text is None else text.split(" ", 1)[0]


def read_key(text: Optional[str]) -> str:
    """Return the key at the start of ``text``; ValueError if there is none."""
    key = _first_word(text)
    if not key:
        raise ValueError("Could not read a key.")
    return key


def load_registry(path) -> Tuple[VotersTree, PostalCodes, int]:
    """Read voters from the registry file at ``path``.

    Voters whose identity number is already registered are reported on
    standard error and skipped. Returns the tree, the postal codes and the
    number of voters read.
    """
    tree = VotersTree()
    postcodes = PostalCodes()
    count = 0
    with open(path, encoding="utf-8") as registry:
        for line in registry:
            if not line.strip():
                continue
            voter, code = parse_voter(line)
            try:
                tree.insert(voter)
            except DuplicateKeyError:
                print(
                    f"A voter with id number {voter.id_num} already exists "
                    "in the registry.",
                    file=sys.stderr,
                )
                continue
            postcodes.insert(code, voter)
            count += 1
    return tree, postcodes, count


def _dispatch(registry: Registry, command: str, rest: Optional[str]) -> Optional[List[str]]:
    if command in _KEYED_COMMANDS:
        return [getattr(registry, command)(read_key(rest))]
    if command == "ins":
        if rest is None:
            raise ValueError("Could not read a record.")
        return [registry.ins(rest)]
    if command == "load":
        path = _first_word(rest)
        if not path:
            raise ValueError("Could not read a filename.")
        return registry.load(path)
    if command == "voted":
        return [registry.voted(_first_word(rest))]
    if command == "votedperpc":
        return registry.votedperpc()
    return None


def run_session(registry: Registry, lines: Iterable[str], out: TextIO, err: TextIO) -> bool:
    """Run the commands read from ``lines`` against ``registry``.

    Returns True when the session ends with ``exit`` and False when the
    input runs out first.
    """
    source = iter(lines)
    while True:
        out.write("Give command:\n")
        line = next(source, None)
        if line is None:
            err.write("Error: Failed to read a command.\n")
            return False
        if line.endswith("\n"):
            line = line[:-1]
        command, separator, rest = line.partition(" ")
        if not command:
            continue
        if command == "exit":
            out.write(f"{PROGRAM_NAME} exits.\n")
            return True
        try:
            replies = _dispatch(registry, command, rest if separator else None)
        except OSError as exc:
            err.write(f"load open(): {exc.strerror or exc}\n")
            continue
        except ValueError as exc:
            err.write(f"- Error: {exc}\n")
            continue
        if replies is None:
            err.write(WRONG_COMMAND + "\n")
            continue
        for reply in replies:
            out.write(reply + "\n")


def write_registry(tree: VotersTree, out: TextIO) -> None:
    """Write every voter, in order of identity number, one per line."""
    for voter in tree:
        out.write(
            f"{voter.id_num} {voter.surname} {voter.name} {voter.age} "
            f"{voter.sex} {voter.post.code}\n"
        )


def main(argv: Optional[List[str]] = None) -> int:
    """Read the registry, run a session on standard input, write the result."""
    arguments = sys.argv[1:] if argv is None else argv
    print(f"********* {PROGRAM_NAME} *********")
    try:
        params = parse_args(arguments)
    except UsageError as exc:
        print(exc, file=sys.stderr)
        return 1

    try:
        registry_path = Path(params.input).resolve(strict=True)
    except OSError as exc:
        print(f"registry - realpath(): {exc.strerror or exc}", file=sys.stderr)
        return 1

    try:
        tree, postcodes, count = load_registry(registry_path)
    except OSError as exc:
        print(f"Registry open(): {exc.strerror or exc}", file=sys.stderr)
        return 1
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print("Finished reading from file")

    try:
        outfile = open(params.output, "w", encoding="utf-8")
    except OSError as exc:
        print(f"Outfile open(): {exc.strerror or exc}", file=sys.stderr)
        return 1

    with outfile:
        if count == 0:
            print(
                "Error: Could not read any registration. The program exits.",
                file=sys.stderr,
            )
            return 1
        registry = Registry(tree, postcodes, count, params.num_of_updates)
        run_session(registry, sys.stdin, sys.stdout, sys.stderr)
        write_registry(registry.tree, outfile)
    return 0