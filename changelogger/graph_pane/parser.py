"""Line-indexed view of ``git log --graph`` text.

A header is a line whose graph-drawing prefix (pipes, slashes, spaces) ends in
a ``*`` node marker. Every line from one header up to the next belongs to that
header's block; lines before the first header belong to no block. Order is
taken as given, never re-sorted.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..ansi import split_lines

HEADER_RE = re.compile(r"^\s*[|\s\\/]*\*\s")
IDENTIFIER_RE = re.compile(r"\b([0-9a-f]{7,40})\b", re.IGNORECASE)
NO_BLOCK = -1


@dataclass(frozen=True)
class GraphLine:
    text: str
    is_header: bool
    block_index: int = NO_BLOCK


@dataclass(frozen=True)
class ParsedGraph:
    """Parsed graph lines plus header positions and block boundaries.

    ``headers[j]`` is the absolute line position of the j-th header.
    ``boundaries[j]`` is the last line position of block ``j``.
    """

    lines: tuple[GraphLine, ...] = ()
    headers: tuple[int, ...] = ()
    boundaries: tuple[int, ...] = ()
    _boundary_set: frozenset[int] = field(default=frozenset(), repr=False, compare=False)

    @property
    def total_lines(self) -> int:
        return len(self.lines)

    @property
    def texts(self) -> list[str]:
        return [line.text for line in self.lines]

    def header_text(self, header_index: int) -> str:
        if not 0 <= header_index < len(self.headers):
            return ""
        return self.lines[self.headers[header_index]].text

    def header_identifier(self, header_index: int) -> str | None:
        """Return the commit id token printed on header ``header_index``."""
        return extract_identifier(self.header_text(header_index))

    def block_range(self, header_index: int) -> range:
        """Return the line positions covered by block ``header_index``."""
        if not 0 <= header_index < len(self.headers):
            return range(0)
        start = self.headers[header_index]
        stop = self.headers[header_index + 1] if header_index + 1 < len(self.headers) else self.total_lines
        return range(start, stop)

    def is_boundary(self, line_index: int) -> bool:
        return line_index in self._boundary_set

    def find_header(self, identifier: str | None) -> int | None:
        """Return the header index whose id token matches ``identifier`` by prefix."""
        if not identifier:
            return None
        wanted = identifier.lower()
        for header_index in range(len(self.headers)):
            token = self.header_identifier(header_index)
            if token is None:
                continue
            token = token.lower()
            if wanted.startswith(token) or token.startswith(wanted):
                return header_index
        return None


def is_header_line(text: str) -> bool:
    return HEADER_RE.match(text) is not None


def extract_identifier(text: str) -> str | None:
    """Return the first 7-40 character hex token in ``text``."""
    match = IDENTIFIER_RE.search(text)
    return match.group(1) if match else None


def parse_graph(text: str) -> ParsedGraph:
    """Build a ``ParsedGraph`` from raw graph text.

    Empty or unrecognizable input yields a graph with zero headers, which is a
    valid (unselectable) state for every downstream component.
    """
    raw_lines = split_lines(text)
    lines: list[GraphLine] = []
    headers: list[int] = []
    block = NO_BLOCK
    for position, raw in enumerate(raw_lines):
        header = is_header_line(raw)
        if header:
            headers.append(position)
            block = len(headers) - 1
        lines.append(GraphLine(text=raw, is_header=header, block_index=block))

    boundaries = [next_header - 1 for next_header in headers[1:]]
    if headers:
        boundaries.append(len(raw_lines) - 1)

    return ParsedGraph(
        lines=tuple(lines),
        headers=tuple(headers),
        boundaries=tuple(boundaries),
        _boundary_set=frozenset(boundaries),
    )
