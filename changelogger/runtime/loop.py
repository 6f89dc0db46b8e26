"""Main interactive event loop for the terminal UI.

Blocks on one key at a time: sample the terminal size, draw when something
changed, read and normalize a key, dispatch it, repeat until the coordinator
reaches a terminal outcome. There are no timers and no background work.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from .. import __version__
from ..input import normalize_key, read_key
from ..render import RenderContext, pane_help_text, render_split_page
from .coordinator import Focus, FocusCoordinator
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_status_text(coordinator: FocusCoordinator) -> str:
    parts = [f"changelogger {__version__}"]
    if coordinator.repo_info is not None:
        parts.append(coordinator.repo_info.label())
    parts.append(f"anchors: {len(coordinator.selection)}")
    parts.append(f"fit: {'on' if coordinator.viewport.state.fit_full_block else 'off'}")
    return " │ ".join(parts)


def build_render_context(coordinator: FocusCoordinator) -> RenderContext:
    """Snapshot coordinator state into a ``RenderContext`` for one frame."""
    graph_focused = coordinator.focus is Focus.LEFT
    preview = coordinator.preview
    return RenderContext(
        graph=coordinator.graph,
        graph_start=coordinator.viewport.state.scroll_offset,
        cursor_block=coordinator.graph.block_range(coordinator.viewport.cursor),
        selected_headers=coordinator.selection.indices,
        preview_lines=preview.styled_lines if preview.colorize else preview.lines,
        preview_start=preview.offset,
        rows=coordinator.rows,
        width=coordinator.columns,
        left_width=coordinator.left_width,
        graph_focused=graph_focused,
        status_text=build_status_text(coordinator),
        notice=coordinator.notice,
        help_text=pane_help_text(graph_focused),
    )


def run_main_loop(
    coordinator: FocusCoordinator,
    terminal: TerminalController,
    stdin_fd: int,
    *,
    render_frame: Callable[[RenderContext], None] = render_split_page,
) -> list[str] | None:
    """Run the session to completion; return confirmed identifiers or ``None``."""
    dirty = True
    with terminal.raw_mode():
        while not coordinator.finished:
            term = terminal.size()
            if coordinator.resize(term.columns, term.lines):
                dirty = True
            if dirty:
                render_frame(build_render_context(coordinator))
                dirty = False

            key = read_key(stdin_fd)
            if key == "":
                # stdin closed
                logger.debug("Input stream ended; cancelling session")
                key = "ESC"
            dirty = coordinator.dispatch(normalize_key(key)) or dirty
    return coordinator.result_identifiers
