"""Graph pane model: parsed graph text, viewport policy, and anchor selection."""

from .parser import GraphLine, ParsedGraph, extract_identifier, is_header_line, parse_graph
from .selection import SelectionModel
from .viewport import PAGE_STEP, ViewportController, ViewportState, clamp_scroll_offset, max_scroll_offset

__all__ = [
    "GraphLine",
    "PAGE_STEP",
    "ParsedGraph",
    "SelectionModel",
    "ViewportController",
    "ViewportState",
    "clamp_scroll_offset",
    "extract_identifier",
    "is_header_line",
    "max_scroll_offset",
    "parse_graph",
]
