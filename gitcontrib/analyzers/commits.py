"""Count non-merge commits per author from `git shortlog -sn` output."""

from __future__ import annotations

import logging

from gitcontrib.analyzers.branch import get_checked_out_branch
from gitcontrib.errors import ParseFailure
from gitcontrib.repo import Runner

logger = logging.getLogger(__name__)


def map_author_commits(shortlog_output: str) -> dict[str, int]:
    """Map author name to commit count.

    Each line reads ``<count> <author name...>``. Whitespace inside the name
    is collapsed to single spaces. A later line for the same author replaces
    the earlier one. A count that is not plain ASCII digits (signs, underscores
    and other numerals included) aborts the whole parse.
    """
    authors: dict[str, int] = {}
    for lineno, line in enumerate(shortlog_output.splitlines(), start=1):
        fields = line.split()
        if not fields:
            continue
        if not (fields[0].isascii() and fields[0].isdigit()):
            raise ParseFailure(f"line {lineno}: invalid commit count {fields[0]!r}")
        authors[" ".join(fields[1:])] = int(fields[0])
    return authors


def get_author_commits(run: Runner, branch: str | None = None) -> dict[str, int]:
    """Return non-merge commit counts per author on *branch*.

    Defaults to the checked-out branch. The revision is always passed
    explicitly: without one, shortlog reads a log from stdin instead.
    """
    target = branch or get_checked_out_branch(run)
    authors = map_author_commits(run("shortlog", "-sn", "--no-merges", target))
    logger.debug("shortlog on %s: %d author(s)", target, len(authors))
    return authors
