"""Rendering engine for the split graph/preview terminal view.

Defines render context data and writes fully composed ANSI frames.
Rendering reads session state but never mutates it.
"""

from __future__ import annotations

import os
import sys
from collections.abc import Sequence
from dataclasses import dataclass, field

from ..ansi import clip_ansi_line, display_width, fit_ansi_line
from ..graph_pane import ParsedGraph
from ..highlight import sanitize_terminal_text
from .help import GRAPH_HELP_TEXT, pane_help_text

SELECTED_HEADER_SGR = "30;43"
CURSOR_BLOCK_SGR = "30;46"
BOUNDARY_RULE_SGR = "2;38;5;245"
DIVIDER = "\033[2m│\033[0m"


@dataclass
class RenderContext:
    graph: ParsedGraph
    graph_start: int
    cursor_block: range
    selected_headers: Sequence[int]
    preview_lines: list[str]
    preview_start: int
    rows: int
    width: int
    left_width: int
    graph_focused: bool = True
    status_text: str = ""
    notice: str | None = None
    help_text: str = field(default=GRAPH_HELP_TEXT)


def styled_with_background(text: str, sgr: str) -> str:
    """Apply a background style that survives internal resets in ``text``."""
    if not text:
        return text
    return f"\033[{sgr}m" + text.replace("\033[0m", f"\033[0;{sgr}m") + "\033[0m"


def selected_with_ansi(text: str) -> str:
    """Apply reverse-video styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def build_status_line(left_text: str, width: int, right_text: str = "") -> str:
    """Compose a status row: ``left_text`` first, ``right_text`` right-aligned in the rest."""
    usable = max(1, width - 1)
    left = left_text[:usable]
    room = usable - len(left) - 1
    if room <= 0 or not right_text:
        return left + " " * (usable - len(left))
    right = right_text[:room]
    gap = " " * (usable - len(left) - len(right))
    return f"{left}{gap}{right}"


def _pane_title(label: str, width: int, focused: bool) -> str:
    title = clip_ansi_line(f" {label} ", width)
    if focused:
        title = f"\033[1m{selected_with_ansi(title)}"
    else:
        title = f"\033[2m{title}\033[0m"
    return fit_ansi_line(title, width)


def format_graph_row(context: RenderContext, line_index: int, selected_lines: frozenset[int]) -> str:
    """Return the padded, styled graph-pane cell for absolute line ``line_index``."""
    width = context.left_width
    graph = context.graph
    if not 0 <= line_index < graph.total_lines:
        return " " * width

    text = clip_ansi_line(sanitize_terminal_text(graph.lines[line_index].text), width)
    shown = display_width(text)
    if line_index in selected_lines:
        return styled_with_background(text + " " * (width - shown), SELECTED_HEADER_SGR)
    if line_index in context.cursor_block:
        return styled_with_background(text + " " * (width - shown), CURSOR_BLOCK_SGR)

    block = graph.lines[line_index].block_index
    multi_line_block = block >= 0 and len(graph.block_range(block)) > 1
    if graph.is_boundary(line_index) and multi_line_block and shown < width - 1:
        rule = "─" * (width - shown - 1)
        return f"{text} \033[{BOUNDARY_RULE_SGR}m{rule}\033[0m"
    return text + " " * (width - shown)


def render_split_page(context: RenderContext) -> None:
    """Write one full frame: titles, graph rows beside preview rows, status row."""
    out: list[str] = ["\033[H\033[J"]
    left_width = max(1, context.left_width)
    right_width = max(1, context.width - left_width - 1)
    selected_lines = frozenset(
        context.graph.headers[index] for index in context.selected_headers if 0 <= index < len(context.graph.headers)
    )

    out.append(_pane_title("Graph", left_width, context.graph_focused))
    out.append(DIVIDER)
    out.append(_pane_title("Preview", right_width, not context.graph_focused))
    out.append("\r\n")

    for row in range(max(1, context.rows)):
        out.append(format_graph_row(context, context.graph_start + row, selected_lines))
        out.append(DIVIDER)
        preview_idx = context.preview_start + row
        if 0 <= preview_idx < len(context.preview_lines):
            preview_text = clip_ansi_line(context.preview_lines[preview_idx].rstrip("\r\n"), right_width)
            out.append(preview_text)
            if "\033" in preview_text:
                out.append("\033[0m")
        out.append("\r\n")

    left_status = context.status_text
    if context.notice:
        left_status = f"{left_status} │ {context.notice}" if left_status else context.notice
    status = build_status_line(left_status, context.width, context.help_text)
    out.append("\033[7m")
    out.append(status)
    out.append("\033[0m")

    os.write(sys.stdout.fileno(), "".join(out).encode("utf-8", errors="replace"))


__all__ = [
    "RenderContext",
    "build_status_line",
    "format_graph_row",
    "pane_help_text",
    "render_split_page",
    "selected_with_ansi",
    "styled_with_background",
]
