"""Interaction state machine for the two-pane session.

``FocusCoordinator`` owns every piece of mutable session state: the parsed
graph, its viewport and selection, the preview, focus, and outcome. Events
arrive already normalized; each is processed to completion before the next.
Across a refresh, the cursor and selection travel as commit identifiers and are
re-resolved against the rebuilt graph.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum

from ..changelog import VersionScheme, resolve_anchor_positions
from ..git.repository import CommitRepository
from ..git.types import Commit, RepoInfo
from ..graph_pane import ParsedGraph, SelectionModel, ViewportController, ViewportState, parse_graph
from ..highlight import DEFAULT_STYLE
from ..input.events import MOVEMENT_EVENTS, EventKind
from ..preview_pane import PreviewController
from .layout import (
    DEFAULT_LEFT_MIN,
    DEFAULT_RIGHT_MIN,
    RESIZE_STEP,
    adjust_left_width,
    clamp_left_width,
    compute_left_width,
)

NEED_MORE_ANCHORS_NOTICE = "Select at least 2 commits (space)"

logger = logging.getLogger(__name__)


class Focus(Enum):
    LEFT = "left"
    RIGHT = "right"


class Outcome(Enum):
    RUNNING = "running"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class FocusCoordinator:
    """Route normalized events to the graph pane or the preview pane."""

    def __init__(
        self,
        repository: CommitRepository,
        *,
        scheme: VersionScheme | None = None,
        style: str = DEFAULT_STYLE,
        colorize: bool = True,
        fit_full_block: bool = True,
        left_min: int = DEFAULT_LEFT_MIN,
        right_min: int = DEFAULT_RIGHT_MIN,
        columns: int = 80,
        lines: int = 24,
        info_loader: Callable[[], RepoInfo] | None = None,
    ) -> None:
        self.repository = repository
        self.left_min = left_min
        self.right_min = right_min
        self.columns = max(1, columns)
        self.lines = max(1, lines)
        self._info_loader = info_loader
        self.repo_info: RepoInfo | None = info_loader() if info_loader is not None else None

        self.commits: list[Commit] = list(repository.list_commits())
        self.graph: ParsedGraph = parse_graph(repository.graph_text())
        self.viewport = ViewportController(
            self.graph.headers,
            self.graph.total_lines,
            ViewportState(fit_full_block=fit_full_block),
        )
        self.selection = SelectionModel()
        self.preview = PreviewController(scheme, style=style, colorize=colorize)
        self.preview.set_commits(self.commits)

        self.focus = Focus.LEFT
        self.outcome = Outcome.RUNNING
        self.notice: str | None = None
        self.left_width = compute_left_width(self.columns, self.graph.texts, left_min, right_min)

        self.viewport.ensure_visible(self.rows)
        self.preview.recompute(self.anchor_identifiers(), self.rows, reset_offset=True)

    @property
    def rows(self) -> int:
        """Content rows available to each pane (title row and status row excluded)."""
        return max(1, self.lines - 2)

    @property
    def right_width(self) -> int:
        return max(1, self.columns - self.left_width - 1)

    @property
    def finished(self) -> bool:
        return self.outcome is not Outcome.RUNNING

    def anchor_identifiers(self) -> list[str]:
        return self.selection.resolved_identifiers(self.graph)

    def resolved_anchor_count(self) -> int:
        return len(set(resolve_anchor_positions(self.commits, self.anchor_identifiers())))

    @property
    def result_identifiers(self) -> list[str] | None:
        """Selected commit identifiers once confirmed, ``None`` otherwise."""
        if self.outcome is not Outcome.CONFIRMED:
            return None
        return self.anchor_identifiers()

    def resize(self, columns: int, lines: int) -> bool:
        """Apply a terminal size sample; return whether geometry changed."""
        columns = max(1, columns)
        lines = max(1, lines)
        left_width = clamp_left_width(columns, self.left_width, self.left_min, self.right_min)
        if (columns, lines, left_width) == (self.columns, self.lines, self.left_width):
            return False
        self.columns = columns
        self.lines = lines
        self.left_width = left_width
        self.viewport.ensure_visible(self.rows)
        self.preview.clamp(self.rows)
        return True

    def dispatch(self, event: EventKind) -> bool:
        """Process one event to completion; return whether a redraw is needed."""
        had_notice = self.notice is not None
        self.notice = None
        if self.finished:
            return False

        if event is EventKind.SWITCH_FOCUS:
            self.focus = Focus.RIGHT if self.focus is Focus.LEFT else Focus.LEFT
            return True
        if event is EventKind.QUIT:
            self.outcome = Outcome.CANCELLED
            return True
        if event is EventKind.CONFIRM:
            return self._confirm()
        if event in MOVEMENT_EVENTS:
            if self.focus is Focus.LEFT:
                self._move_cursor(event)
            else:
                self._scroll_preview(event)
            return True
        if event is EventKind.TOGGLE_SELECTION:
            return self._toggle_selection() or had_notice
        if event is EventKind.TOGGLE_FIT:
            if self.focus is not Focus.LEFT:
                return had_notice
            self.viewport.toggle_fit_mode(self.rows)
            return True
        if event is EventKind.REFRESH:
            self.refresh()
            return True
        if event is EventKind.SHRINK_LEFT:
            return self._resize_split(-RESIZE_STEP) or had_notice
        if event is EventKind.GROW_LEFT:
            return self._resize_split(RESIZE_STEP) or had_notice
        return had_notice

    def _confirm(self) -> bool:
        if self.resolved_anchor_count() >= 2:
            self.outcome = Outcome.CONFIRMED
        else:
            self.notice = NEED_MORE_ANCHORS_NOTICE
        return True

    def _move_cursor(self, event: EventKind) -> None:
        rows = self.rows
        if event is EventKind.MOVE_UP:
            self.viewport.step(-1, rows)
        elif event is EventKind.MOVE_DOWN:
            self.viewport.step(1, rows)
        elif event is EventKind.PAGE_UP:
            self.viewport.page(-1, rows)
        elif event is EventKind.PAGE_DOWN:
            self.viewport.page(1, rows)
        elif event is EventKind.TOP:
            self.viewport.jump_first(rows)
        elif event is EventKind.BOTTOM:
            self.viewport.jump_last(rows)
        self.preview.recompute(self.anchor_identifiers(), rows)

    def _scroll_preview(self, event: EventKind) -> None:
        rows = self.rows
        if event is EventKind.MOVE_UP:
            self.preview.step(-1, rows)
        elif event is EventKind.MOVE_DOWN:
            self.preview.step(1, rows)
        elif event is EventKind.PAGE_UP:
            self.preview.page(-1, rows)
        elif event is EventKind.PAGE_DOWN:
            self.preview.page(1, rows)
        elif event is EventKind.TOP:
            self.preview.top()
        elif event is EventKind.BOTTOM:
            self.preview.bottom(rows)

    def _toggle_selection(self) -> bool:
        if self.focus is not Focus.LEFT or not self.graph.headers:
            return False
        self.selection.toggle(self.viewport.cursor)
        self.preview.recompute(self.anchor_identifiers(), self.rows, reset_offset=True)
        return True

    def _resize_split(self, delta: int) -> bool:
        left_width = adjust_left_width(self.columns, self.left_width, delta, self.left_min, self.right_min)
        if left_width == self.left_width:
            return False
        self.left_width = left_width
        return True

    def refresh(self) -> None:
        """Re-read the repository and rebuild the graph, keeping cursor and selection by id."""
        cursor_identifier = self.graph.header_identifier(self.viewport.cursor)
        selected_identifiers = self.anchor_identifiers()
        logger.debug("Refreshing repository data (%d anchors selected)", len(selected_identifiers))

        self.commits = list(self.repository.list_commits())
        self.graph = parse_graph(self.repository.graph_text(force=True))
        if self._info_loader is not None:
            self.repo_info = self._info_loader()

        cursor = self.graph.find_header(cursor_identifier)
        self.viewport.rebind(self.graph.headers, self.graph.total_lines, cursor if cursor is not None else 0)
        self.selection.rehydrate(selected_identifiers, self.graph)
        self.preview.set_commits(self.commits)

        self.viewport.ensure_visible(self.rows)
        reset = self.anchor_identifiers() != selected_identifiers
        self.preview.recompute(self.anchor_identifiers(), self.rows, reset_offset=reset)
