"""Plain-text cache of the last generated ``git log --graph`` drawing.

The cache is purely a performance artifact: a missing, unreadable, or stale
file means "regenerate", never an error. Staleness is judged by comparing the
cache mtime against the git control files that move whenever HEAD moves.
"""

from __future__ import annotations

import hashlib
import logging
from collections.abc import Callable
from pathlib import Path

from platformdirs import user_cache_dir

APP_NAME = "changelogger"
CACHE_SUFFIX = ".graph"

logger = logging.getLogger(__name__)


def default_cache_path(repo_root: Path) -> Path:
    """Return the per-repository cache file under the user cache directory."""
    digest = hashlib.blake2b(str(repo_root).encode("utf-8", errors="surrogateescape"), digest_size=10)
    return Path(user_cache_dir(APP_NAME, appauthor=False)) / f"{digest.hexdigest()}{CACHE_SUFFIX}"


def _mtime_ns(path: Path) -> int | None:
    try:
        return path.stat().st_mtime_ns
    except OSError:
        return None


def head_state_mtime_ns(git_dir: Path | None) -> int:
    """Return the newest mtime among HEAD-related control files in ``git_dir``.

    Returns ``0`` when ``git_dir`` is unknown or none of the files exist.
    """
    if git_dir is None:
        return 0

    candidates = [git_dir / "HEAD", git_dir / "packed-refs", git_dir / "logs" / "HEAD"]
    try:
        head_text = (git_dir / "HEAD").read_text(encoding="utf-8", errors="replace").strip()
    except OSError:
        head_text = ""
    if head_text.startswith("ref: "):
        candidates.append(git_dir / head_text[5:].strip())

    newest = 0
    for candidate in candidates:
        mtime = _mtime_ns(candidate)
        if mtime is not None and mtime > newest:
            newest = mtime
    return newest


class GraphCache:
    """Read-through cache for graph text stored as one plain-text file."""

    def __init__(self, path: Path, git_dir: Path | None = None) -> None:
        self.path = path
        self.git_dir = git_dir

    def is_stale(self) -> bool:
        """Return ``True`` when the cache file is missing or older than HEAD state."""
        cached_mtime = _mtime_ns(self.path)
        if cached_mtime is None:
            return True
        return cached_mtime < head_state_mtime_ns(self.git_dir)

    def read(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None

    def write(self, text: str) -> None:
        """Store ``text``; filesystem errors are logged and otherwise ignored."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(text, encoding="utf-8")
        except OSError as exc:
            logger.warning("Could not write graph cache %s: %s", self.path, exc)

    def load(self, generate: Callable[[], str], *, force: bool = False) -> str:
        """Return cached text, regenerating via ``generate`` when forced or stale."""
        if not force and not self.is_stale():
            cached = self.read()
            if cached is not None:
                logger.debug("Graph cache hit: %s", self.path)
                return cached

        logger.debug("Regenerating graph cache: %s", self.path)
        text = generate()
        self.write(text)
        return text
