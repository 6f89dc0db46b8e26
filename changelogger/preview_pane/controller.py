"""Live CHANGELOG preview with its own scroll offset.

The preview re-renders only when the resolved anchors or the commit list
change. Any failure while versioning or rendering becomes a one-line
diagnostic; the preview never raises into the session.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..ansi import split_lines
from ..changelog import VersionScheme, render
from ..errors import RenderFailure
from ..git.types import Commit
from ..graph_pane.viewport import clamp_scroll_offset, max_scroll_offset
from ..highlight import DEFAULT_STYLE, colorize_markdown_lines, sanitize_terminal_text

PREVIEW_HELP_TEXT = "↑/↓ j/k scroll • PgUp/PgDn • g top • G bottom • Tab focus"
PLACEHOLDER_LINES: tuple[str, ...] = (
    "Preview - select at least 2 commits with SPACE to generate.",
    f"Controls: {PREVIEW_HELP_TEXT}",
)
ERROR_PREFIX = "Preview error: "

logger = logging.getLogger(__name__)


class PreviewController:
    """Rendered preview text, its styled twin, and an independent scroll offset."""

    def __init__(
        self,
        scheme: VersionScheme | None = None,
        *,
        style: str = DEFAULT_STYLE,
        colorize: bool = True,
    ) -> None:
        self.scheme = scheme or VersionScheme()
        self.style = style
        self.colorize = colorize
        self.lines: list[str] = list(PLACEHOLDER_LINES)
        self.styled_lines: list[str] = list(PLACEHOLDER_LINES)
        self.offset = 0
        self.error: RenderFailure | None = None
        self.document: str | None = None
        self._commits: tuple[Commit, ...] = ()
        self._generation = 0
        self._last_key: tuple[int, tuple[str, ...]] | None = None

    def set_commits(self, commits: Sequence[Commit]) -> None:
        """Replace the commit list; the next recompute renders again."""
        self._commits = tuple(commits)
        self._generation += 1

    @property
    def showing_placeholder(self) -> bool:
        return self.document is None and self.error is None

    def _render_lines(self, identifiers: tuple[str, ...]) -> None:
        self.document = None
        self.error = None
        if len(identifiers) < 2:
            self._set_lines(list(PLACEHOLDER_LINES), styled=False)
            return
        try:
            document = render(
                self._commits,
                identifiers,
                major=self.scheme.major,
                minor_start=self.scheme.minor_start,
                base_patch=self.scheme.base_patch,
            )
        except Exception as exc:
            self.error = RenderFailure(str(exc) or exc.__class__.__name__)
            logger.debug("Preview render failed", exc_info=True)
            first_line = str(self.error).splitlines()[0] if str(self.error) else ""
            self._set_lines([f"{ERROR_PREFIX}{first_line}"], styled=False)
            return
        self.document = document
        self._set_lines(split_lines(sanitize_terminal_text(document)), styled=self.colorize)

    def _set_lines(self, lines: list[str], *, styled: bool) -> None:
        self.lines = lines
        self.styled_lines = colorize_markdown_lines(lines, self.style) if styled else list(lines)

    def recompute(self, anchor_identifiers: Sequence[str], rows: int, *, reset_offset: bool = False) -> bool:
        """Refresh the preview for ``anchor_identifiers``; return whether it re-rendered."""
        identifiers = tuple(anchor_identifiers)
        key = (self._generation, identifiers)
        rendered = key != self._last_key
        if rendered:
            self._render_lines(identifiers)
            self._last_key = key
        if reset_offset:
            self.offset = 0
        self.clamp(rows)
        return rendered

    def clamp(self, rows: int) -> int:
        self.offset = clamp_scroll_offset(self.offset, len(self.lines), rows)
        return self.offset

    def step(self, delta: int, rows: int) -> int:
        self.offset += delta
        return self.clamp(rows)

    def page(self, direction: int, rows: int) -> int:
        return self.step(max(1, rows) * (1 if direction > 0 else -1), rows)

    def top(self) -> int:
        self.offset = 0
        return self.offset

    def bottom(self, rows: int) -> int:
        self.offset = max_scroll_offset(len(self.lines), rows)
        return self.offset

    def visible_slice(self, rows: int, *, styled: bool = True) -> list[str]:
        source = self.styled_lines if styled else self.lines
        start = self.offset
        return source[start : start + max(1, rows)]
