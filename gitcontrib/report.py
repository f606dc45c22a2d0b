"""Combine commit counts and line changes into contribution reports."""

from __future__ import annotations

import logging
import math
from typing import Iterable, Mapping, Sequence, TextIO

from gitcontrib.analyzers.branch import get_checked_out_branch
from gitcontrib.analyzers.changes import get_line_changes
from gitcontrib.analyzers.commits import get_author_commits
from gitcontrib.models import LineChanges, ReportRow, Summary, to_json
from gitcontrib.repo import Runner

logger = logging.getLogger(__name__)

SUMMARY_HEADERS = (
    "Author",
    "Commits",
    "Additions",
    "Deletions",
    "Line ratio",
    "Commit ratio",
    "Granularity",
)


def ratio(numerator: float, denominator: float) -> float:
    """Divide with float semantics: ``x/0`` is ``inf`` and ``0/0`` is ``nan``."""
    if denominator == 0:
        return math.nan if numerator == 0 else math.inf
    return numerator / denominator


def compose_summary(
    commit_map: Mapping[str, int],
    line_map: Mapping[str, LineChanges],
    repo: str | None = None,
    branch: str | None = None,
) -> Summary:
    """Build a :class:`Summary` over every author present in either map.

    An author missing from one map counts as zero there. Granularity is
    commits per changed line, i.e. ``1 / (lines / commits)``.
    """
    total_commits = sum(commit_map.values())
    total_lines = sum(changes.sum for changes in line_map.values())

    rows = []
    for author in set(commit_map) | set(line_map):
        commits = commit_map.get(author, 0)
        changes = line_map.get(author, LineChanges())
        rows.append(
            ReportRow(
                author=author,
                commits=commits,
                additions=changes.additions,
                deletions=changes.deletions,
                line_ratio=ratio(changes.sum, total_lines),
                commit_ratio=ratio(commits, total_commits),
                granularity=ratio(commits, changes.sum),
            )
        )
    rows.sort(key=lambda r: (-r.commits, r.author))

    return Summary(
        rows=rows,
        total_commits=total_commits,
        total_lines=total_lines,
        granularity=ratio(total_commits, total_lines),
        repo=repo,
        branch=branch,
    )


def exclude_authors(mapping: Mapping[str, object], names: Iterable[str]) -> dict:
    """Drop entries whose author is in *names* (case-insensitive)."""
    lowered = {n.lower() for n in names}
    return {k: v for k, v in mapping.items() if k.lower() not in lowered}


def collect_summary(
    run: Runner,
    branch: str | None = None,
    excluded: Sequence[str] = (),
    repo: str | None = None,
) -> Summary:
    """Run git for commit counts and line changes and compose them."""
    target = branch or get_checked_out_branch(run)
    commit_map = get_author_commits(run, target)
    line_map = get_line_changes(run, target)
    if excluded:
        commit_map = exclude_authors(commit_map, excluded)
        line_map = exclude_authors(line_map, excluded)
    logger.debug(
        "composing summary for %s: %d commit author(s), %d change author(s)",
        target,
        len(commit_map),
        len(line_map),
    )
    return compose_summary(commit_map, line_map, repo=repo, branch=target)


def _write_table(headers: Sequence[str], rows: Sequence[Sequence[str]], stream: TextIO) -> None:
    widths = [len(h) for h in headers]
    for row in rows:
        widths = [max(w, len(cell)) for w, cell in zip(widths, row)]

    def line(cells: Sequence[str]) -> str:
        return " " + "  ".join(c.ljust(w) for c, w in zip(cells, widths)).rstrip() + "\n"

    stream.write(line(headers))
    stream.write(line(["-" * len(h) for h in headers]))
    for row in rows:
        stream.write(line(row))


def render_author_commits(commit_map: Mapping[str, int], stream: TextIO) -> None:
    ordered = sorted(commit_map.items(), key=lambda kv: (-kv[1], kv[0]))
    _write_table(("Author", "Commits"), [(a, str(c)) for a, c in ordered], stream)


def render_author_changes(line_map: Mapping[str, LineChanges], stream: TextIO) -> None:
    ordered = sorted(line_map.items(), key=lambda kv: (-kv[1].sum, kv[0]))
    _write_table(
        ("Author", "Additions", "Deletions"),
        [(a, str(c.additions), str(c.deletions)) for a, c in ordered],
        stream,
    )


def render_table(summary: Summary, stream: TextIO) -> None:
    rows = [
        (
            r.author,
            str(r.commits),
            str(r.additions),
            str(r.deletions),
            f"{r.line_ratio:.3f}",
            f"{r.commit_ratio:.3f}",
            f"{r.granularity:.3f}",
        )
        for r in summary.rows
    ]
    _write_table(SUMMARY_HEADERS, rows, stream)
    stream.write(f"\n Overall repo commit granularity: {summary.granularity:.3f}\n")


def _quote(value: str) -> str:
    return '"' + value.replace('"', '""') + '"'


def csv_record(repo_name: str, row: ReportRow) -> str:
    """Return one CSV record: quoted strings, bare numbers, 3-decimal ratios."""
    fields = [
        _quote(repo_name),
        _quote(row.author),
        str(row.commits),
        str(row.additions),
        str(row.deletions),
        f"{row.line_ratio:.3f}",
        f"{row.commit_ratio:.3f}",
        f"{row.granularity:.3f}",
    ]
    return ",".join(fields)


def render_csv(summary: Summary, repo_name: str, stream: TextIO) -> None:
    """Write one CSV record per author. No header row is printed."""
    for row in summary.rows:
        stream.write(csv_record(repo_name, row) + "\n")


def render_json(summary: Summary, stream: TextIO) -> None:
    stream.write(to_json(summary) + "\n")
