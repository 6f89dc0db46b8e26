"""Pane-split policy for the two-pane session.

The graph pane prefers to be as wide as its widest line plus a small margin;
both panes keep a configured minimum width whenever the terminal allows it.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..ansi import display_width

DEFAULT_LEFT_MIN = 24
DEFAULT_RIGHT_MIN = 28
GRAPH_MARGIN = 4
RESIZE_STEP = 4


def clamp_left_width(
    total_width: int,
    desired_left: int,
    left_min: int = DEFAULT_LEFT_MIN,
    right_min: int = DEFAULT_RIGHT_MIN,
) -> int:
    """Clamp a requested graph-pane width to ``[left_min, total - right_min]``.

    On terminals too narrow for both minimums the graph pane wins, but it never
    exceeds ``total_width - 2`` so the divider and one preview column survive.
    """
    max_possible = max(1, total_width - 2)
    max_left = min(max_possible, max(1, total_width - right_min))
    min_left = min(max(1, left_min), max_possible)
    max_left = max(min_left, max_left)
    return max(min_left, min(desired_left, max_left))


def compute_left_width(
    total_width: int,
    graph_lines: Iterable[str],
    left_min: int = DEFAULT_LEFT_MIN,
    right_min: int = DEFAULT_RIGHT_MIN,
) -> int:
    """Choose the initial graph-pane width from the widest graph line."""
    widest = max((display_width(line) for line in graph_lines), default=0)
    return clamp_left_width(total_width, widest + GRAPH_MARGIN, left_min, right_min)


def adjust_left_width(
    total_width: int,
    current_left: int,
    delta: int,
    left_min: int = DEFAULT_LEFT_MIN,
    right_min: int = DEFAULT_RIGHT_MIN,
) -> int:
    return clamp_left_width(total_width, current_left + delta, left_min, right_min)
