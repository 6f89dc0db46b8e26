"""Read-only git queries behind the commit-repository contract.

The core never shells out itself: it talks to an object exposing
``list_commits()`` and ``graph_text()``. ``GitRepository`` is the git-backed
implementation; failures degrade to empty or placeholder results.
"""

from __future__ import annotations

import logging
import re
import subprocess
from pathlib import Path
from typing import Protocol

from ..errors import RepositoryReadFailure, UnresolvableToken
from .graph_cache import GraphCache, default_cache_path
from .types import Commit, RepoInfo

FIELD_SEP = "\x01"
RECORD_SEP = "\x1e"
GIT_TIMEOUT_SECONDS = 30.0
GRAPH_PRETTY_FORMAT = "%h %d %s"
EMPTY_GRAPH_TEXT = "(no git graph available - empty repo or not a git repository)\n"
_FULL_ID_RE = re.compile(r"^[0-9a-f]{40}$", re.IGNORECASE)

logger = logging.getLogger(__name__)


class CommitRepository(Protocol):
    """Source of commits (oldest first) and raw graph text."""

    def list_commits(self) -> list[Commit]: ...

    def graph_text(self, force: bool = False) -> str: ...


def parse_commit_log(output: str) -> list[Commit]:
    """Parse ``git log`` output produced with ``FIELD_SEP``/``RECORD_SEP`` markers."""
    commits: list[Commit] = []
    for record in output.split(RECORD_SEP):
        record = record.strip("\n")
        if not record.strip():
            continue
        parts = record.split(FIELD_SEP, 4)
        if len(parts) < 4:
            logger.debug("Skipping malformed log record: %r", record[:80])
            continue
        full_id, short_id, date, subject = (part.strip() for part in parts[:4])
        body = parts[4].strip() if len(parts) > 4 else ""
        commits.append(Commit(full_id=full_id, short_id=short_id, date=date, subject=subject, body=body))
    return commits


class GitRepository:
    """Git-backed commit repository rooted at ``root``."""

    def __init__(
        self,
        root: Path,
        *,
        cache_path: Path | None = None,
        timeout_seconds: float = GIT_TIMEOUT_SECONDS,
    ) -> None:
        self.root = root
        self.timeout_seconds = timeout_seconds
        self._cache_path = cache_path
        self._cache: GraphCache | None = None

    def _run_git(self, args: list[str]) -> str:
        """Run one git command and return stdout, raising ``RepositoryReadFailure``."""
        try:
            proc = subprocess.run(
                ["git", "-C", str(self.root), *args],
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
                timeout=self.timeout_seconds,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            raise RepositoryReadFailure(f"git {args[0]} failed: {exc}") from exc
        if proc.returncode != 0:
            detail = proc.stderr.strip().splitlines()[0] if proc.stderr.strip() else f"exit {proc.returncode}"
            raise RepositoryReadFailure(f"git {args[0]} failed: {detail}")
        return proc.stdout

    def _git_dir(self) -> Path | None:
        try:
            raw = self._run_git(["rev-parse", "--absolute-git-dir"]).strip()
        except RepositoryReadFailure:
            return None
        return Path(raw) if raw else None

    @property
    def graph_cache(self) -> GraphCache:
        if self._cache is None:
            path = self._cache_path or default_cache_path(self.root.resolve())
            self._cache = GraphCache(path, self._git_dir())
        return self._cache

    def list_commits(self) -> list[Commit]:
        """Return commits oldest to newest, or ``[]`` when git cannot be read."""
        pretty = "%x01".join(["%H", "%h", "%ad", "%s", "%b"]) + "%x1e"
        try:
            output = self._run_git(["log", "--date=short", "--reverse", f"--pretty=format:{pretty}"])
        except RepositoryReadFailure as exc:
            logger.warning("Could not list commits: %s", exc)
            return []
        return parse_commit_log(output)

    def _generate_graph_text(self) -> str:
        try:
            content = self._run_git(
                [
                    "log",
                    "--graph",
                    "--decorate=short",
                    "--date=short",
                    f"--pretty=format:{GRAPH_PRETTY_FORMAT}",
                ]
            )
        except RepositoryReadFailure as exc:
            logger.warning("Could not generate graph: %s", exc)
            return f"(error generating graph: {exc})\n"
        if not content.strip():
            return EMPTY_GRAPH_TEXT
        return content

    def graph_text(self, force: bool = False) -> str:
        """Return graph drawing text, regenerating the cache when forced or stale."""
        return self.graph_cache.load(self._generate_graph_text, force=force)

    def resolve_token(self, token: str) -> str:
        """Resolve a SHA, tag, or branch name to a full 40-character commit id."""
        try:
            full = self._run_git(["rev-parse", "-q", "--verify", f"{token}^{{commit}}"]).strip()
        except RepositoryReadFailure as exc:
            raise UnresolvableToken(token) from exc
        if not _FULL_ID_RE.match(full):
            raise UnresolvableToken(token)
        return full

    def _query(self, args: list[str]) -> str:
        try:
            return self._run_git(args).strip()
        except RepositoryReadFailure:
            return ""

    def info(self) -> RepoInfo:
        """Read repo name, branch, HEAD short id, and dirty flag for display."""
        toplevel = self._query(["rev-parse", "--show-toplevel"])
        path = toplevel or str(self.root.resolve())
        branch = self._query(["rev-parse", "--abbrev-ref", "HEAD"])
        if not branch or branch == "HEAD":
            branch = "(detached)"
        return RepoInfo(
            name=Path(path).name,
            path=path,
            branch=branch,
            head_short=self._query(["rev-parse", "--short", "HEAD"]),
            dirty=bool(self._query(["status", "--porcelain"])),
        )
