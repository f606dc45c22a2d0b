import pytest

from gitcontrib.analyzers.commits import get_author_commits, map_author_commits
from gitcontrib.errors import ParseFailure


def test_map_author_commits():
    output = "    42  Author One\n     3  Author Two\n"
    assert map_author_commits(output) == {"Author One": 42, "Author Two": 3}


def test_map_author_commits_collapses_name_whitespace():
    assert map_author_commits("  7\tJane   van  Doe  \n") == {"Jane van Doe": 7}


def test_map_author_commits_later_line_overwrites():
    assert map_author_commits("  5  Dup\n  2  Dup\n") == {"Dup": 2}


def test_map_author_commits_skips_blank_lines():
    assert map_author_commits("\n  1  Solo\n\n") == {"Solo": 1}


@pytest.mark.parametrize(
    "line", ["  x  Author", "  -3  Author", "  4.5  Author", "  +3  Author", "  1_000  Author", "  ٣  Author"]
)
def test_map_author_commits_rejects_bad_counts(line):
    with pytest.raises(ParseFailure):
        map_author_commits(f"  1  Good\n{line}\n")


def test_map_author_commits_is_idempotent():
    output = "  9  A\n  1  B\n"
    assert map_author_commits(output) == map_author_commits(output)


def test_get_author_commits_resolves_checked_out_branch(fake_git):
    run = fake_git(
        {
            ("branch",): "  old\n* main\n",
            ("shortlog", "-sn", "--no-merges", "main"): "    42  Author One\n",
        }
    )
    assert get_author_commits(run) == {"Author One": 42}
    assert run.calls[0] == ("branch",)


def test_get_author_commits_explicit_branch_skips_lookup(fake_git):
    run = fake_git({("shortlog", "-sn", "--no-merges", "dev"): "  2  Dev\n"})
    assert get_author_commits(run, "dev") == {"Dev": 2}
    assert run.calls == [("shortlog", "-sn", "--no-merges", "dev")]
