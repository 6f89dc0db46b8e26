"""Terminal-safe text and Pygments highlighting for the preview pane.

Commit subjects and bodies are user text: control bytes are escaped before
they reach the terminal. Highlighting is best effort and falls back to plain
lines whenever Pygments fails or does not preserve the line structure.
"""

from __future__ import annotations

import logging
import re
from functools import lru_cache

from pygments import highlight as pygments_highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import MarkdownLexer
from pygments.styles import get_style_by_name
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"
_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]")

logger = logging.getLogger(__name__)


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for ch in source:
        code = ord(ch)
        if ch in {"\n", "\r", "\t"}:
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


@lru_cache(maxsize=None)
def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    try:
        get_style_by_name(style)
    except ClassNotFound:
        return DEFAULT_STYLE
    return style


@lru_cache(maxsize=None)
def _formatter_for_style(style: str) -> TerminalFormatter:
    return TerminalFormatter(style=style)


def colorize_markdown_lines(lines: list[str], style: str = DEFAULT_STYLE) -> list[str]:
    """Return ANSI-colored copies of markdown ``lines``, one output line per input line."""
    if not lines:
        return []
    source = "\n".join(lines) + "\n"
    try:
        rendered = pygments_highlight(source, MarkdownLexer(), _formatter_for_style(normalize_style(style)))
    except Exception as exc:  # pygments lexers can fail on odd input
        logger.debug("Markdown highlighting failed: %s", exc)
        return list(lines)
    colored = rendered.split("\n")
    if colored and colored[-1] == "":
        colored.pop()
    if len(colored) != len(lines):
        return list(lines)
    return colored
