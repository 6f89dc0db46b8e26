"""Cursor and scroll policy for the graph pane.

The cursor is a header index, not a line. Scrolling follows the cursor only at
the viewport edges; optional fit mode additionally pulls the viewport so a
short enough commit block is shown whole.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

PAGE_STEP = 5


@dataclass
class ViewportState:
    cursor_header_index: int = 0
    scroll_offset: int = 0
    fit_full_block: bool = True


def max_scroll_offset(total_lines: int, rows: int) -> int:
    """Return max valid scroll offset for ``total_lines`` shown in ``rows`` rows."""
    return max(0, total_lines - max(1, rows))


def clamp_scroll_offset(offset: int, total_lines: int, rows: int) -> int:
    return max(0, min(offset, max_scroll_offset(total_lines, rows)))


class ViewportController:
    """Owns one ``ViewportState`` over a header index and a line count."""

    def __init__(
        self,
        headers: Sequence[int] = (),
        total_lines: int = 0,
        state: ViewportState | None = None,
    ) -> None:
        self.headers: Sequence[int] = headers
        self.total_lines = total_lines
        self.state = state if state is not None else ViewportState()
        self._clamp_cursor()

    def rebind(self, headers: Sequence[int], total_lines: int, cursor_header_index: int = 0) -> None:
        """Point at a rebuilt header index; scroll and fit mode are kept."""
        self.headers = headers
        self.total_lines = total_lines
        self.state.cursor_header_index = cursor_header_index
        self._clamp_cursor()

    def _clamp_cursor(self) -> None:
        last = max(0, len(self.headers) - 1)
        self.state.cursor_header_index = max(0, min(self.state.cursor_header_index, last))

    @property
    def cursor(self) -> int:
        return self.state.cursor_header_index

    def header_line(self) -> int:
        """Return the absolute line of the cursor header (``0`` with no headers)."""
        if not self.headers:
            return 0
        return self.headers[self.state.cursor_header_index]

    def block_stop(self) -> int:
        """Return the line after the cursor block: next header or end of text."""
        next_index = self.state.cursor_header_index + 1
        if next_index < len(self.headers):
            return self.headers[next_index]
        return self.total_lines

    def ensure_visible(self, rows: int) -> int:
        """Scroll so the cursor header is inside a viewport of ``rows`` rows.

        Edge-follow first; then, in fit mode with a block no taller than the
        viewport, pull the viewport down to the block end while keeping the
        header visible; finally clamp to the valid offset range.
        """
        rows = max(1, rows)
        state = self.state
        header_line = self.header_line()
        stop = self.block_stop()
        block_size = stop - header_line
        offset = state.scroll_offset

        if header_line < offset:
            offset = header_line
        elif header_line >= offset + rows:
            offset = header_line - (rows - 1)

        if state.fit_full_block and block_size <= rows:
            if stop > offset + rows:
                offset = stop - rows
            if header_line < offset:
                offset = header_line

        state.scroll_offset = clamp_scroll_offset(offset, self.total_lines, rows)
        return state.scroll_offset

    def _move_to(self, header_index: int, rows: int) -> bool:
        if not self.headers:
            return False
        target = max(0, min(header_index, len(self.headers) - 1))
        moved = target != self.state.cursor_header_index
        self.state.cursor_header_index = target
        self.ensure_visible(rows)
        return moved

    def step(self, delta: int, rows: int) -> bool:
        """Move the cursor by ``delta`` headers, bounded at both ends."""
        return self._move_to(self.state.cursor_header_index + delta, rows)

    def page(self, direction: int, rows: int) -> bool:
        return self.step(PAGE_STEP if direction > 0 else -PAGE_STEP, rows)

    def jump_first(self, rows: int) -> bool:
        return self._move_to(0, rows)

    def jump_last(self, rows: int) -> bool:
        return self._move_to(len(self.headers) - 1, rows)

    def toggle_fit_mode(self, rows: int) -> bool:
        self.state.fit_full_block = not self.state.fit_full_block
        self.ensure_visible(rows)
        return self.state.fit_full_block

    def visible_range(self, rows: int) -> range:
        start = self.state.scroll_offset
        return range(start, min(self.total_lines, start + max(1, rows)))

    def visible_slice(self, lines: Sequence[str], rows: int) -> list[str]:
        """Return the in-range lines for a pane of ``rows`` rows."""
        window = self.visible_range(rows)
        return list(lines[window.start : window.stop])
