"""Resolve the ``REPO`` command-line argument to a local checkout.

Accepts a local directory, a GitHub slug (``owner/repo`` or
``github.com/owner/repo``), or a git URL. Remote repositories are cloned into a
temporary directory that is removed when the context exits.
"""

from __future__ import annotations

import contextlib
import logging
import re
import shutil
import subprocess
import tempfile
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

CLONE_TIMEOUT_SECONDS = 300.0
CLONE_GRAPH_CACHE_NAME = "changelogger.graph"
_GITHUB_URL_RE = re.compile(r"^https?://(?:www\.)?github\.com/([\w.-]+/[\w.-]+?)(?:\.git)?/?$", re.IGNORECASE)
_GITHUB_SLUG_RE = re.compile(r"^(?:github\.com/)?([\w.-]+/[\w.-]+?)(?:\.git)?$", re.IGNORECASE)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Checkout:
    """A local repository root, and whether it is a throwaway clone."""

    root: Path
    cloned: bool = False

    @property
    def graph_cache_path(self) -> Path | None:
        """Return the cache file inside a clone's git dir, or ``None`` for local roots."""
        if not self.cloned:
            return None
        return self.root / ".git" / CLONE_GRAPH_CACHE_NAME


def looks_like_url(repo_arg: str) -> bool:
    return repo_arg.startswith(("http://", "https://", "git@", "ssh://"))


def github_slug_to_url(repo_arg: str) -> str | None:
    """Convert ``owner/repo`` or a GitHub web URL into a clone URL."""
    for pattern in (_GITHUB_URL_RE, _GITHUB_SLUG_RE):
        match = pattern.match(repo_arg)
        if match is not None:
            return f"https://github.com/{match.group(1)}.git"
    return None


def is_git_work_tree(path: Path) -> bool:
    try:
        proc = subprocess.run(
            ["git", "-C", str(path), "rev-parse", "--is-inside-work-tree"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
            timeout=10.0,
        )
    except (OSError, subprocess.SubprocessError):
        return False
    return proc.returncode == 0


def _clone(url: str, target: Path) -> bool:
    """Clone ``url`` into ``target``, trying a partial clone before a full one."""
    attempts = (
        ["git", "clone", "--no-checkout", "--filter=blob:none", "--depth=1000", url, str(target)],
        ["git", "clone", url, str(target)],
    )
    for command in attempts:
        if target.exists():
            shutil.rmtree(target, ignore_errors=True)
        try:
            proc = subprocess.run(
                command,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                check=False,
                timeout=CLONE_TIMEOUT_SECONDS,
            )
        except (OSError, subprocess.SubprocessError) as exc:
            logger.debug("Clone attempt %s failed: %s", command, exc)
            continue
        if proc.returncode == 0:
            return True
    return False


@contextlib.contextmanager
def open_repository(repo_arg: str | None, default: Path | None = None) -> Iterator[Checkout]:
    """Yield a ``Checkout`` for ``repo_arg``.

    Unrecognized arguments and failed clones fall back to ``default`` (the current
    directory when omitted) with a warning.
    """
    fallback = (default or Path.cwd()).resolve()
    if not repo_arg:
        yield Checkout(fallback)
        return

    candidate = Path(repo_arg).expanduser()
    if candidate.is_dir():
        root = candidate.resolve()
        if not is_git_work_tree(root):
            logger.warning("%s is not a git repository; output may be empty", repo_arg)
        yield Checkout(root)
        return

    url = repo_arg if looks_like_url(repo_arg) else github_slug_to_url(repo_arg)
    if url is None:
        logger.warning(
            "Unrecognized repo argument %r; expected a directory, GitHub slug (owner/repo), or git URL",
            repo_arg,
        )
        yield Checkout(fallback)
        return

    with tempfile.TemporaryDirectory(prefix="changelogger-") as tmp:
        target = Path(tmp) / "repo"
        if _clone(url, target):
            yield Checkout(target, cloned=True)
        else:
            logger.warning("Failed to clone %s; running in %s", url, fallback)
            yield Checkout(fallback)
