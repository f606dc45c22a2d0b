import shutil
from pathlib import Path

import pytest
from git import Actor, Repo

from gitcontrib.errors import ProcessFailure
from gitcontrib.report import collect_summary
from gitcontrib.repo import git_runner, open_repo, repo_dir_name

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git executable not available")

ALICE = Actor("Alice Example", "alice@example.com")
BOB = Actor("Bob Builder", "bob@example.com")


def _commit(repo: Repo, path: Path, content: str, author: Actor, message: str) -> None:
    path.write_text(content, encoding="utf-8")
    repo.index.add([str(path)])
    repo.index.commit(message, author=author, committer=author)


@pytest.fixture
def repo(tmp_path: Path) -> Repo:
    repo_dir = tmp_path / "sample-repo"
    repo_dir.mkdir()
    repo = Repo.init(repo_dir)
    target = repo_dir / "notes.txt"
    _commit(repo, target, "one\ntwo\n", ALICE, "initial notes")
    _commit(repo, target, "one\n2\n3\n", BOB, "rework notes")
    _commit(repo, repo_dir / "extra.txt", "x\n", ALICE, "add extra")
    return repo


def test_repo_dir_name(fake_git):
    assert repo_dir_name(fake_git({("rev-parse", "--show-toplevel"): "/home/dev/myrepo\n"})) == "myrepo"


def test_repo_dir_name_empty_output(fake_git):
    with pytest.raises(ProcessFailure):
        repo_dir_name(fake_git({("rev-parse", "--show-toplevel"): ""}))


@requires_git
def test_open_repo_outside_repository(tmp_path: Path):
    lonely = tmp_path / "not-a-repo"
    lonely.mkdir()
    with pytest.raises(ProcessFailure):
        open_repo(lonely)


@requires_git
def test_open_repo_from_subdirectory(repo: Repo):
    sub = Path(repo.working_dir) / "nested"
    sub.mkdir()
    assert Path(open_repo(sub).working_dir) == Path(repo.working_dir)


@requires_git
def test_git_runner_failure(repo: Repo):
    run = git_runner(repo)
    with pytest.raises(ProcessFailure):
        run("rev-parse", "--verify", "no-such-branch")


@requires_git
def test_collect_summary_against_real_repository(repo: Repo):
    run = git_runner(repo)
    assert repo_dir_name(run) == "sample-repo"

    summary = collect_summary(run, repo="sample-repo")
    assert summary.branch == repo.active_branch.name
    rows = {r.author: r for r in summary.rows}
    assert rows["Alice Example"].commits == 2
    assert (rows["Alice Example"].additions, rows["Alice Example"].deletions) == (3, 0)
    assert rows["Bob Builder"].commits == 1
    assert (rows["Bob Builder"].additions, rows["Bob Builder"].deletions) == (2, 1)
    assert summary.total_commits == 3
    assert summary.total_lines == 6


@requires_git
def test_collect_summary_author_name_starting_with_digit(tmp_path: Path):
    repo_dir = tmp_path / "labs-repo"
    repo_dir.mkdir()
    repo = Repo.init(repo_dir)
    _commit(repo, repo_dir / "a.txt", "a\nb\n", Actor("42 Labs", "labs@example.com"), "labs work")
    _commit(repo, repo_dir / "b.txt", "c\n", ALICE, "alice work")

    summary = collect_summary(git_runner(repo))
    rows = {r.author: r for r in summary.rows}
    assert set(rows) == {"42 Labs", "Alice Example"}
    assert rows["42 Labs"].commits == 1
    assert (rows["42 Labs"].additions, rows["42 Labs"].deletions) == (2, 0)
    assert rows["Alice Example"].additions == 1
