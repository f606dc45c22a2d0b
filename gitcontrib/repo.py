"""Thin helpers for opening a repo and running git commands against it."""

from __future__ import annotations

import logging
from pathlib import Path, PurePath
from typing import Callable

from git import GitError, InvalidGitRepositoryError, NoSuchPathError, Repo

from gitcontrib.errors import ProcessFailure

logger = logging.getLogger(__name__)

# run("shortlog", "-sn", "main") -> captured stdout of `git shortlog -sn main`
Runner = Callable[..., str]


def open_repo(path: str | Path = ".") -> Repo:
    """Open a git repository at *path* (or any of its parents)."""
    try:
        repo = Repo(str(path), search_parent_directories=True)
    except (InvalidGitRepositoryError, NoSuchPathError):
        raise ProcessFailure(f"No git repository found at or above: {path}")
    return repo


def git_runner(repo: Repo) -> Runner:
    """Return a :data:`Runner` that executes git inside *repo*'s working tree.

    The whole standard output is captured in memory. A non-zero exit status
    or a missing git executable is reported as :class:`ProcessFailure`.
    """

    def run(*args: str) -> str:
        command = ["git", *args]
        logger.debug("Running %s in %s", " ".join(command), repo.working_dir)
        try:
            return repo.git.execute(command)
        except GitError as exc:
            raise ProcessFailure(f"{' '.join(command)} failed: {exc}") from exc

    return run


def repo_dir_name(run: Runner) -> str:
    """Return the name of the repository's top-level directory."""
    output = run("rev-parse", "--show-toplevel").strip()
    if not output:
        raise ProcessFailure("error getting git repo directory path")
    return PurePath(output).name
