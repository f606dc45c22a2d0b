"""Find the checked-out branch in `git branch` output."""

from __future__ import annotations

import re

from gitcontrib.errors import ParseFailure
from gitcontrib.repo import Runner

_CURRENT_RE = re.compile(r"^\* *")


def extract_checked_out_branch(branch_output: str) -> str:
    """Return the name on the line marked with ``*`` in *branch_output*."""
    for line in branch_output.splitlines():
        if _CURRENT_RE.match(line):
            fields = line[1:].split()
            if fields:
                return fields[0]
    raise ParseFailure("no checked-out branch found in git branch output")


def get_checked_out_branch(run: Runner) -> str:
    return extract_checked_out_branch(run("branch"))
