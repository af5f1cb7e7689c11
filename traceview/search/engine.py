"""Case-insensitive substring search over a flattened trace view.

``SearchEngine`` is an immutable value: every operation returns a new
engine, so a viewer frame can hold one without worrying about later
mutation. Match indices are only meaningful against the flattened view the
engine last searched; use ``refresh`` after the tree shape changes.
"""

from __future__ import annotations

from dataclasses import dataclass, replace

from ..trace_model import FlatNode, TraceNode


@dataclass(frozen=True)
class Match:
    """A matching node and its row index at search time."""

    node: TraceNode
    index: int


def node_matches(node: TraceNode, folded_query: str) -> bool:
    """Return whether any populated text field contains ``folded_query``."""
    return any(folded_query in text.casefold() for text in node.search_fields())


def find_matches(flat: tuple[FlatNode, ...], query: str) -> tuple[Match, ...]:
    if not query:
        return ()
    folded = query.casefold()
    return tuple(
        Match(node=row.node, index=idx)
        for idx, row in enumerate(flat)
        if node_matches(row.node, folded)
    )


@dataclass(frozen=True)
class SearchEngine:
    query: str = ""
    matches: tuple[Match, ...] = ()
    current: int = -1

    def set_query(self, query: str) -> SearchEngine:
        """Store ``query`` without recomputing matches."""
        return replace(self, query=query)

    def search(self, flat: tuple[FlatNode, ...]) -> SearchEngine:
        """Rebuild matches for the stored query against ``flat``."""
        matches = find_matches(flat, self.query)
        return replace(self, matches=matches, current=0 if matches else -1)

    def refresh(self, flat: tuple[FlatNode, ...]) -> SearchEngine:
        """Re-search ``flat`` keeping the current match on the same node.

        When that node is no longer visible, the first match at or after its
        old row wins, wrapping to the first match.
        """
        previous = self.current_match()
        engine = self.search(flat)
        if previous is None or not engine.matches:
            return engine
        for pos, match in enumerate(engine.matches):
            if match.node is previous.node:
                return replace(engine, current=pos)
        for pos, match in enumerate(engine.matches):
            if match.index >= previous.index:
                return replace(engine, current=pos)
        return engine

    def clear(self) -> SearchEngine:
        return SearchEngine()

    def get_query(self) -> str:
        return self.query

    def is_active(self) -> bool:
        return bool(self.query)

    def match_count(self) -> int:
        return len(self.matches)

    def current_match(self) -> Match | None:
        if not self.matches or self.current < 0:
            return None
        return self.matches[self.current]

    def current_match_number(self) -> int:
        """Return 1-based position of the current match, ``0`` when none."""
        return self.current + 1 if self.current_match() is not None else 0

    def next_match(self) -> SearchEngine:
        count = len(self.matches)
        if count == 0:
            return self
        return replace(self, current=(self.current + 1) % count)

    def previous_match(self) -> SearchEngine:
        count = len(self.matches)
        if count == 0:
            return self
        return replace(self, current=(self.current - 1 + count) % count)
