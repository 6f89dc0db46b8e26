"""Version assignment for anchors and the commits between them.

The j-th anchor gets ``major.(minor_start + j).0``. The ``k`` commits between
two adjacent anchors get strictly increasing patch numbers spread over
``1..base_patch`` with half-up rounding; when ``k`` is large relative to
``base_patch`` the monotonic repair pushes patches past ``base_patch``.
Existing changelogs depend on this exact formula, so it is kept as is.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from ..errors import ConfigurationError, InsufficientAnchors
from ..git.types import Commit

DEFAULT_MAJOR = 0
DEFAULT_MINOR_START = 1
DEFAULT_BASE_PATCH = 10


@dataclass(frozen=True)
class VersionScheme:
    major: int = DEFAULT_MAJOR
    minor_start: int = DEFAULT_MINOR_START
    base_patch: int = DEFAULT_BASE_PATCH

    def __post_init__(self) -> None:
        for name in ("major", "minor_start", "base_patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if self.major < 0:
            raise ConfigurationError(f"major must be >= 0, got {self.major}")
        if self.minor_start < 0:
            raise ConfigurationError(f"minor_start must be >= 0, got {self.minor_start}")
        if self.base_patch <= 0:
            raise ConfigurationError(f"base_patch must be > 0, got {self.base_patch}")


@dataclass(frozen=True)
class VersionedCommit:
    position: int
    commit: Commit
    version: str


def _round_half_up(numerator: int, denominator: int) -> int:
    quotient = Decimal(numerator) / Decimal(denominator)
    return int(quotient.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def distribute_patches(count: int, base_patch: int = DEFAULT_BASE_PATCH) -> list[int]:
    """Return ``count`` strictly increasing patch numbers spaced over ``1..base_patch``."""
    patches: list[int] = []
    previous = 0
    for i in range(1, count + 1):
        candidate = _round_half_up(i * base_patch, count + 1)
        if candidate <= previous:
            candidate = previous + 1
        patches.append(candidate)
        previous = candidate
    return patches


def normalize_anchor_positions(anchor_positions: Iterable[int]) -> list[int]:
    return sorted(set(anchor_positions))


def assign_versions(
    commits: Sequence[Commit],
    anchor_positions: Iterable[int],
    scheme: VersionScheme | None = None,
) -> list[VersionedCommit]:
    """Version every anchor and in-between commit, ordered by position.

    Commits before the first or after the last anchor get no version and are
    left out. Raises ``InsufficientAnchors`` with fewer than 2 distinct anchors.
    """
    scheme = scheme or VersionScheme()
    anchors = normalize_anchor_positions(anchor_positions)
    if len(anchors) < 2:
        raise InsufficientAnchors(len(anchors))
    for position in (anchors[0], anchors[-1]):
        if not 0 <= position < len(commits):
            raise IndexError(f"anchor position {position} outside 0..{len(commits) - 1}")

    versions: dict[int, str] = {}
    for j, position in enumerate(anchors):
        versions[position] = f"{scheme.major}.{scheme.minor_start + j}.0"

    for j, (start, end) in enumerate(zip(anchors, anchors[1:])):
        minor = scheme.minor_start + j
        patches = distribute_patches(max(end - start - 1, 0), scheme.base_patch)
        for position, patch in zip(range(start + 1, end), patches):
            versions[position] = f"{scheme.major}.{minor}.{patch}"

    return [VersionedCommit(position, commits[position], versions[position]) for position in sorted(versions)]
