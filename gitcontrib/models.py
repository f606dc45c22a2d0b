"""Shared dataclasses for analyzer and report outputs."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any


def to_json(data: Any, indent: int = 2) -> str:
    if isinstance(data, list):
        serializable = [asdict(item) if hasattr(item, "__dataclass_fields__") else item for item in data]
    elif hasattr(data, "__dataclass_fields__"):
        serializable = asdict(data)
    else:
        serializable = data
    return json.dumps(serializable, indent=indent)


@dataclass
class LineChanges:
    additions: int = 0
    deletions: int = 0

    @property
    def sum(self) -> int:
        return self.additions + self.deletions

    def add(self, additions: int, deletions: int) -> None:
        self.additions += additions
        self.deletions += deletions


@dataclass(frozen=True)
class ReportRow:
    author: str
    commits: int
    additions: int
    deletions: int
    line_ratio: float
    commit_ratio: float
    granularity: float  # commits per changed line; lower means bigger commits

    @property
    def line_sum(self) -> int:
        return self.additions + self.deletions


@dataclass(frozen=True)
class Summary:
    rows: list[ReportRow] = field(default_factory=list)
    total_commits: int = 0
    total_lines: int = 0
    granularity: float = 0.0
    repo: str | None = None
    branch: str | None = None
