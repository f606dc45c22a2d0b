from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

DATA_DIR = Path(__file__).parent / "data"


class FakeGit:
    """Runner stand-in: maps a git argument tuple to canned stdout."""

    def __init__(self, outputs: dict[tuple[str, ...], str]):
        self.outputs = outputs
        self.calls: list[tuple[str, ...]] = []

    def __call__(self, *args: str) -> str:
        self.calls.append(args)
        try:
            return self.outputs[args]
        except KeyError:
            raise AssertionError(f"unexpected git call: {args}")


@pytest.fixture
def numstat_example() -> str:
    return (DATA_DIR / "numstat-example").read_text(encoding="utf-8")


@pytest.fixture
def fake_git():
    return FakeGit
