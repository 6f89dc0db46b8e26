"""Markdown CHANGELOG rendering and the ``render``/``generate`` entry points.

Output is a pure function of the commits, anchors, and version scheme: no
timestamps beyond commit dates, no escaping, no truncation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from pathlib import Path

from ..errors import InsufficientAnchors
from ..git.types import Commit
from .versioning import (
    DEFAULT_BASE_PATCH,
    DEFAULT_MAJOR,
    DEFAULT_MINOR_START,
    VersionedCommit,
    VersionScheme,
    assign_versions,
)

UNRELEASED_HEADER = "## [Unreleased]"

logger = logging.getLogger(__name__)


def section_lines(entry: VersionedCommit) -> list[str]:
    commit = entry.commit
    lines = [f"## [{entry.version}] - {commit.date}", "", f"- {commit.subject} ({commit.short_id})"]
    if commit.body:
        lines.extend(f"  {body_line}" for body_line in commit.body.split("\n"))
    lines.append("")
    return lines


def render_changelog(versioned: Iterable[VersionedCommit]) -> str:
    """Render versioned commits, ascending by position, as markdown."""
    lines = [UNRELEASED_HEADER, ""]
    for entry in sorted(versioned, key=lambda item: item.position):
        lines.extend(section_lines(entry))
    return "\n".join(lines)


def resolve_anchor_positions(commits: Sequence[Commit], identifiers: Iterable[str]) -> list[int]:
    """Map commit identifiers to positions in ``commits``; unknown ids are dropped."""
    positions: list[int] = []
    for identifier in identifiers:
        position = next((idx for idx, commit in enumerate(commits) if commit.full_id == identifier), None)
        if position is None:
            position = next((idx for idx, commit in enumerate(commits) if commit.matches(identifier)), None)
        if position is None:
            logger.warning("Dropping anchor %r: not found in commit list", identifier)
            continue
        positions.append(position)
    return positions


def render(
    commits: Sequence[Commit],
    anchor_identifiers: Iterable[str],
    major: int = DEFAULT_MAJOR,
    minor_start: int = DEFAULT_MINOR_START,
    base_patch: int = DEFAULT_BASE_PATCH,
) -> str:
    """Render the CHANGELOG for ``anchor_identifiers``.

    Raises ``InsufficientAnchors`` when fewer than 2 distinct anchors resolve.
    """
    positions = sorted(set(resolve_anchor_positions(commits, anchor_identifiers)))
    if len(positions) < 2:
        raise InsufficientAnchors(len(positions))
    scheme = VersionScheme(major=major, minor_start=minor_start, base_patch=base_patch)
    return render_changelog(assign_versions(commits, positions, scheme))


def generate(
    commits: Sequence[Commit],
    anchor_identifiers: Iterable[str],
    output_path: Path | str = "CHANGELOG.md",
    major: int = DEFAULT_MAJOR,
    minor_start: int = DEFAULT_MINOR_START,
    base_patch: int = DEFAULT_BASE_PATCH,
) -> Path:
    """Render and write the document verbatim, overwriting ``output_path``."""
    content = render(commits, anchor_identifiers, major=major, minor_start=minor_start, base_patch=base_patch)
    path = Path(output_path)
    with path.open("w", encoding="utf-8", newline="") as handle:
        handle.write(content)
    logger.debug("Wrote %d bytes to %s", len(content.encode("utf-8")), path)
    return path
