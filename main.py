"""CLI entrypoint for gitcontrib.

Usage:
    gitcontrib [--repo PATH] [--branch NAME] [--exclude-author NAME] [--json] [--output FILE] <command>

Commands:
    authorcommits (ac)      Non-merge commits per author on the branch
    authorchanges (ach)     Lines added/deleted per author
    summary (s)             Commits, line changes, line/commit ratios and granularity
    csv summary (c s)       The summary as header-less CSV rows, prefixed with the repo name

Options:
    --repo PATH              Path to the git repository (default: $GITCONTRIB_REPO or .)
    --branch NAME            Branch to analyse (default: the checked-out branch)
    --exclude-author NAME    Leave this author out of the report (repeatable)
    --json                   Print the summary as JSON
    --output FILE            Write the report to FILE instead of stdout
    -v, --verbose            Log git invocations to stderr

Granularity is commits per changed line: smaller numbers mean bigger,
less granular commits.
"""

from __future__ import annotations

import argparse
import io
import logging
import os
import sys
from pathlib import Path

from gitcontrib.analyzers import get_author_commits, get_line_changes
from gitcontrib.errors import GitContribError
from gitcontrib.repo import Runner, git_runner, open_repo, repo_dir_name
from gitcontrib.report import (
    collect_summary,
    exclude_authors,
    render_author_changes,
    render_author_commits,
    render_csv,
    render_json,
    render_table,
)

logger = logging.getLogger("gitcontrib")


def make_runner(path: str) -> Runner:
    return git_runner(open_repo(path))


def cmd_authorcommits(args: argparse.Namespace) -> str:
    run = make_runner(args.repo)
    commits = exclude_authors(get_author_commits(run, args.branch), args.exclude_authors)
    out = io.StringIO()
    render_author_commits(commits, out)
    return out.getvalue()


def cmd_authorchanges(args: argparse.Namespace) -> str:
    run = make_runner(args.repo)
    changes = exclude_authors(get_line_changes(run, args.branch), args.exclude_authors)
    out = io.StringIO()
    render_author_changes(changes, out)
    return out.getvalue()


def cmd_summary(args: argparse.Namespace) -> str:
    run = make_runner(args.repo)
    summary = collect_summary(
        run, branch=args.branch, excluded=args.exclude_authors, repo=repo_dir_name(run)
    )
    out = io.StringIO()
    if args.json:
        render_json(summary, out)
    else:
        render_table(summary, out)
    return out.getvalue()


def cmd_csv_summary(args: argparse.Namespace) -> str:
    run = make_runner(args.repo)
    repo_name = repo_dir_name(run)
    summary = collect_summary(run, branch=args.branch, excluded=args.exclude_authors, repo=repo_name)
    out = io.StringIO()
    render_csv(summary, repo_name, out)
    return out.getvalue()


def _emit(text: str, output_path: str | None) -> None:
    if output_path:
        Path(output_path).write_text(text)
        print(f"Output written to: {output_path}", file=sys.stderr)
    else:
        sys.stdout.write(text)


def _shared_flags(exclude_dest: str) -> argparse.ArgumentParser:
    """Flags accepted by every parser level.

    SUPPRESS keeps a subcommand from resetting a flag given before it.
    argparse copies a subcommand's namespace over its parent's, so each level
    appends ``--exclude-author`` to its own list and ``main`` joins them.
    """
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--repo", default=argparse.SUPPRESS, metavar="PATH", help="Path to the git repo (default: $GITCONTRIB_REPO or .)")
    common.add_argument("--branch", default=argparse.SUPPRESS, metavar="NAME", help="Branch to analyse (default: checked-out branch)")
    common.add_argument(
        "--exclude-author",
        dest=exclude_dest,
        metavar="NAME",
        action="append",
        default=argparse.SUPPRESS,
        help="Exclude this author name (repeatable, case-insensitive)",
    )
    common.add_argument("--json", action="store_true", default=argparse.SUPPRESS, help="Print the summary as JSON")
    common.add_argument("--output", default=argparse.SUPPRESS, metavar="FILE", help="Write the report to FILE")
    common.add_argument("-v", "--verbose", action="store_true", default=argparse.SUPPRESS, help="Debug logging on stderr")
    return common


_EXCLUDE_DESTS = ("top_exclude_authors", "group_exclude_authors", "exclude_authors")


def build_parser() -> argparse.ArgumentParser:
    top, group, leaf = (_shared_flags(dest) for dest in _EXCLUDE_DESTS)

    parser = argparse.ArgumentParser(
        prog="gitcontrib",
        description="Analyse author contributions in a git repository.",
        parents=[top],
    )
    parser.set_defaults(
        repo=os.environ.get("GITCONTRIB_REPO", "."),
        branch=None,
        json=False,
        output=None,
        verbose=False,
        **{dest: [] for dest in _EXCLUDE_DESTS},
    )

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser(
        "authorcommits", aliases=["ac"], parents=[leaf], help="Commits per author"
    ).set_defaults(func=cmd_authorcommits)
    sub.add_parser(
        "authorchanges", aliases=["ach"], parents=[leaf], help="Line changes per author"
    ).set_defaults(func=cmd_authorchanges)
    sub.add_parser(
        "summary", aliases=["s"], parents=[leaf], help="Commits, line changes and aggregated metrics"
    ).set_defaults(func=cmd_summary)

    csv = sub.add_parser("csv", aliases=["c"], parents=[group], help="CSV rows for the reports")
    csv_sub = csv.add_subparsers(dest="csv_command", required=True)
    csv_sub.add_parser(
        "summary", aliases=["s"], parents=[leaf], help="CSV rows for the 'summary' report"
    ).set_defaults(func=cmd_csv_summary)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.exclude_authors = [name for dest in _EXCLUDE_DESTS for name in getattr(args, dest)]
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    try:
        text = args.func(args)
    except GitContribError as exc:
        logger.debug("report aborted", exc_info=True)
        parser.exit(1, f"{parser.prog}: error: {exc}\n")
    _emit(text, args.output)


if __name__ == "__main__":
    main()
