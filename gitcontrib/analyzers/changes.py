"""Sum line additions and deletions per author from `git log --numstat`.

The log is printed with ``--pretty='%aN'`` so every commit contributes one
quoted author header followed by its numstat records. The quotes keep names
that start with a digit or symbol recognisable as headers::

    'Jane Doe'

    12      3       src/app.py
    -       -       assets/logo.png
    '42 Labs'

    1       0       README.md
"""

from __future__ import annotations

import enum
import logging

from gitcontrib.errors import ParseFailure
from gitcontrib.models import LineChanges
from gitcontrib.repo import Runner

logger = logging.getLogger(__name__)

BINARY_MARKER = "-"


class ParserState(enum.Enum):
    AWAITING_AUTHOR = "awaiting_author"
    IN_AUTHOR_BLOCK = "in_author_block"


def _is_author_header(line: str) -> bool:
    first = line[0]
    return first.isalpha() or first == "'"


def _author_name(header: str) -> str:
    """Drop one enclosing pair of single quotes and collapse whitespace."""
    name = header
    if len(name) >= 2 and name.startswith("'") and name.endswith("'"):
        name = name[1:-1]
    return " ".join(name.split())


def _count(field: str, lineno: int) -> int:
    if field == BINARY_MARKER:
        return 0
    if not (field.isascii() and field.isdigit()):
        raise ParseFailure(f"line {lineno}: invalid line count {field!r}")
    return int(field)


def parse_line_changes(numstat_output: str) -> dict[str, LineChanges]:
    """Map author name to accumulated :class:`LineChanges`.

    Authors whose header appears several times accumulate across all of
    their blocks. Binary files (``-`` counts) add nothing.
    """
    authors: dict[str, LineChanges] = {}
    state = ParserState.AWAITING_AUTHOR
    current: LineChanges | None = None

    for lineno, raw in enumerate(numstat_output.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        if _is_author_header(line):
            current = authors.setdefault(_author_name(line), LineChanges())
            state = ParserState.IN_AUTHOR_BLOCK
            continue

        if state is ParserState.AWAITING_AUTHOR or current is None:
            raise ParseFailure(f"line {lineno}: change line before any author header: {line!r}")

        fields = line.split()
        if len(fields) < 2:
            raise ParseFailure(f"line {lineno}: expected additions and deletions, got {line!r}")
        current.add(_count(fields[0], lineno), _count(fields[1], lineno))

    return authors


def get_line_changes(run: Runner, branch: str | None = None) -> dict[str, LineChanges]:
    """Return line changes per author for *branch* (default: HEAD)."""
    args = ["log", "--numstat", "--no-merges", "--pretty='%aN'"]
    if branch:
        args.append(branch)
    authors = parse_line_changes(run(*args))
    logger.debug("numstat log: %d author(s)", len(authors))
    return authors
