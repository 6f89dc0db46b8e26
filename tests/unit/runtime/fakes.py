"""Fixture repository and terminal doubles shared by runtime tests."""

from __future__ import annotations

from contextlib import contextmanager
from os import terminal_size

from changelogger.git import Commit


def make_commits(count: int) -> list[Commit]:
    """Return up to 15 commits, oldest first, with ids ``111…``, ``222…`` and so on."""
    assert count <= 15
    return [
        Commit(
            full_id=f"{idx + 1:x}" * 40,
            short_id=f"{idx + 1:x}" * 7,
            date=f"2024-05-{idx + 1:02d}",
            subject=f"Change {idx}",
            body="detail" if idx % 2 else "",
        )
        for idx in range(count)
    ]


def graph_for(commits: list[Commit], *, connectors: bool = True) -> str:
    """Build ``git log --graph`` style text, newest first, with connector lines."""
    lines: list[str] = []
    for commit in reversed(commits):
        lines.append(f"* {commit.short_id} {commit.subject}")
        if connectors:
            lines.append("|")
    return "\n".join(lines) + "\n"


class FakeRepository:
    """In-memory stand-in for ``GitRepository``."""

    def __init__(self, commits: list[Commit], graph: str | None = None) -> None:
        self.commits = list(commits)
        self.graph = graph if graph is not None else graph_for(self.commits)
        self.graph_calls: list[bool] = []

    def list_commits(self) -> list[Commit]:
        return list(self.commits)

    def graph_text(self, force: bool = False) -> str:
        self.graph_calls.append(force)
        return self.graph


class FakeTerminal:
    def __init__(self, columns: int = 100, lines: int = 20) -> None:
        self.columns = columns
        self.lines = lines
        self.raw_mode_entered = 0

    @contextmanager
    def raw_mode(self):
        self.raw_mode_entered += 1
        yield

    def size(self) -> terminal_size:
        return terminal_size((self.columns, self.lines))
