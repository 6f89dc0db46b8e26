"""Anchor selection over graph headers.

Selections are header indices while a graph is alive. Across a graph rebuild
they are carried as commit identifiers and re-resolved, because header indices
mean nothing against a new line layout.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterable, Iterator

from .parser import ParsedGraph


class SelectionModel:
    """Sorted, deduplicated set of selected header indices."""

    def __init__(self, indices: Iterable[int] = ()) -> None:
        self._indices: list[int] = sorted(set(indices))

    @property
    def indices(self) -> tuple[int, ...]:
        return tuple(self._indices)

    def __len__(self) -> int:
        return len(self._indices)

    def __contains__(self, header_index: object) -> bool:
        return header_index in self._indices

    def __iter__(self) -> Iterator[int]:
        return iter(self._indices)

    def toggle(self, header_index: int) -> bool:
        """Remove ``header_index`` if present, else insert it; return new membership."""
        position = bisect.bisect_left(self._indices, header_index)
        if position < len(self._indices) and self._indices[position] == header_index:
            del self._indices[position]
            return False
        self._indices.insert(position, header_index)
        return True

    def resolved_identifiers(self, graph: ParsedGraph) -> list[str]:
        """Map selected headers to commit ids, dropping headers without one."""
        identifiers: list[str] = []
        for header_index in self._indices:
            identifier = graph.header_identifier(header_index)
            if identifier is not None:
                identifiers.append(identifier)
        return identifiers

    def rehydrate(self, identifiers: Iterable[str], graph: ParsedGraph) -> None:
        """Rebuild the selection against ``graph``; unmatched ids are dropped."""
        matched = (graph.find_header(identifier) for identifier in identifiers)
        self._indices = sorted({header_index for header_index in matched if header_index is not None})
