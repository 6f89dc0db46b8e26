"""Immutable value types read from a repository."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Commit:
    """One commit, created once per repository read."""

    full_id: str
    short_id: str
    date: str
    subject: str
    body: str = ""

    def matches(self, identifier: str) -> bool:
        """Return whether ``identifier`` is this commit's id or an id prefix."""
        token = identifier.strip().lower()
        if not token:
            return False
        return self.full_id.lower().startswith(token) or token == self.short_id.lower()


@dataclass(frozen=True)
class RepoInfo:
    """Repository metadata shown in the status row."""

    name: str
    path: str
    branch: str = "(detached)"
    head_short: str = ""
    dirty: bool = False

    def label(self) -> str:
        branch = f"{self.branch}*" if self.dirty else self.branch
        return f"{self.name} ({branch})"
