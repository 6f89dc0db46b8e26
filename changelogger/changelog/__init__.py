"""Version assignment and CHANGELOG document rendering."""

from .document import UNRELEASED_HEADER, generate, render, render_changelog, resolve_anchor_positions
from .versioning import VersionedCommit, VersionScheme, assign_versions, distribute_patches

__all__ = [
    "UNRELEASED_HEADER",
    "VersionScheme",
    "VersionedCommit",
    "assign_versions",
    "distribute_patches",
    "generate",
    "render",
    "render_changelog",
    "resolve_anchor_positions",
]
