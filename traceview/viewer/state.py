"""Per-frame viewer state and the transitions shared by key handlers.

``ViewerState`` is frozen: handlers take a state and return the next one.
The only mutation anywhere is the trace tree's per-node ``expanded`` flag,
and every transition that touches it goes through ``reflatten`` so the
flattened rows, cursor, scroll offset, and search matches move together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace

from ..search import SearchEngine
from ..trace_model import FlatNode, TraceNode, flatten

logger = logging.getLogger(__name__)

MODE_NORMAL = "normal"
MODE_SEARCH = "search"

DEFAULT_WIDTH = 80
DEFAULT_HEIGHT = 24


@dataclass(frozen=True)
class Resize:
    """Terminal resize event carrying the new list viewport size."""

    width: int
    height: int


@dataclass(frozen=True)
class ViewerState:
    root: TraceNode
    flat: tuple[FlatNode, ...]
    search: SearchEngine = field(default_factory=SearchEngine)
    cursor: int = 0
    scroll: int = 0
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    mode: str = MODE_NORMAL
    search_input: str = ""
    quitting: bool = False

    @property
    def last_index(self) -> int:
        return max(0, len(self.flat) - 1)

    def selected(self) -> FlatNode | None:
        if not self.flat:
            return None
        return self.flat[clamp_index(self.cursor, len(self.flat))]


def new_viewer_state(
    root: TraceNode,
    width: int = DEFAULT_WIDTH,
    height: int = DEFAULT_HEIGHT,
) -> ViewerState:
    """Build the initial frame: default expand states, cursor and scroll at 0."""
    return ViewerState(
        root=root,
        flat=flatten(root),
        width=max(1, width),
        height=max(1, height),
    )


def clamp_index(index: int, length: int) -> int:
    """Clamp ``index`` into ``[0, length-1]``; ``0`` for empty sequences."""
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


def ensure_visible(cursor: int, scroll: int, height: int) -> int:
    """Return the scroll offset that shows ``cursor`` with the smallest move."""
    height = max(1, height)
    if cursor < scroll:
        return cursor
    if cursor >= scroll + height:
        return cursor - height + 1
    return scroll


def clamp_scroll(scroll: int, length: int, height: int) -> int:
    """Clamp ``scroll`` into ``[0, max(0, length-height)]``."""
    return max(0, min(scroll, length - max(1, height)))


def move_cursor(state: ViewerState, target: int) -> ViewerState:
    """Place the cursor at ``target`` (clamped) and scroll it into view."""
    cursor = clamp_index(target, len(state.flat))
    return replace(state, cursor=cursor, scroll=ensure_visible(cursor, state.scroll, state.height))


def reflatten(state: ViewerState) -> ViewerState:
    """Re-derive rows after expand flags changed, then restore every invariant.

    The cursor and scroll offset are clamped into the new range, and an
    active search is re-run so match indices point at current rows.
    """
    flat = flatten(state.root)
    cursor = clamp_index(state.cursor, len(flat))
    scroll = clamp_scroll(state.scroll, len(flat), state.height)
    search = state.search.refresh(flat) if state.search.is_active() else state.search
    logger.debug("reflatten rows=%d cursor=%d matches=%d", len(flat), cursor, search.match_count())
    return replace(
        state,
        flat=flat,
        cursor=cursor,
        scroll=ensure_visible(cursor, scroll, state.height),
        search=search,
    )


def resize(state: ViewerState, width: int, height: int) -> ViewerState:
    """Apply a new viewport size; a taller viewport pulls hidden rows back into view."""
    height = max(1, height)
    scroll = clamp_scroll(state.scroll, len(state.flat), height)
    return replace(
        state,
        width=max(1, width),
        height=height,
        scroll=ensure_visible(state.cursor, scroll, height),
    )


def run_search(state: ViewerState, query: str) -> ViewerState:
    """Search the current rows for ``query`` and jump to the first match."""
    search = state.search.set_query(query).search(state.flat)
    logger.debug("search query=%r matches=%d", query, search.match_count())
    state = replace(state, search=search)
    first = search.current_match()
    if first is None:
        return state
    return move_cursor(state, first.index)


def jump_to_match(state: ViewerState, direction: int) -> ViewerState:
    """Advance (``direction > 0``) or retreat to a match and move the cursor there.

    Matches are re-validated against the current rows first, so a jump never
    lands on an index from an older tree shape.
    """
    if state.search.match_count() == 0:
        return state
    search = state.search.refresh(state.flat)
    if search.match_count() == 0:
        return replace(state, search=search)
    search = search.next_match() if direction > 0 else search.previous_match()
    match = search.current_match()
    assert match is not None
    return move_cursor(replace(state, search=search), match.index)
