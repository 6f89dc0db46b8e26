"""Key help shown on the status row for the focused pane.

Presentation-only strings; the bindings themselves live in the input layer.
"""

from __future__ import annotations

from ..preview_pane import PREVIEW_HELP_TEXT

GRAPH_HELP_TEXT = (
    "↑/↓ j/k move • Space select • Tab focus • Enter generate • PgUp/PgDn"
    " • f fit • r refresh • </> split"
)


def pane_help_text(graph_focused: bool) -> str:
    return GRAPH_HELP_TEXT if graph_focused else PREVIEW_HELP_TEXT
