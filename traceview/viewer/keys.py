"""Keyboard dispatch for normal and search-input modes.

``update`` is the single entry point used by the runtime loop: it takes the
current frame and one event and returns the next frame plus a flag telling
the host to stop its loop.
"""

from __future__ import annotations

import logging
from dataclasses import replace

from ..trace_model import collapse_all, expand_all, parent_row_index, toggle_expanded
from .key_registry import KeyComboBinding, KeyComboRegistry
from .state import (
    MODE_NORMAL,
    MODE_SEARCH,
    Resize,
    ViewerState,
    jump_to_match,
    move_cursor,
    reflatten,
    resize,
    run_search,
)

logger = logging.getLogger(__name__)

INTERRUPT_KEYS = ("CTRL_C", "\x03")
QUIT_KEYS = ("q",) + INTERRUPT_KEYS
ENTER_KEYS = ("ENTER", "ENTER_CR", "ENTER_LF")


def quit_action(state: ViewerState) -> ViewerState:
    """Latch the terminating flag."""
    return replace(state, quitting=True)


def move_up_action(state: ViewerState) -> ViewerState:
    return move_cursor(state, state.cursor - 1)


def move_down_action(state: ViewerState) -> ViewerState:
    return move_cursor(state, state.cursor + 1)


def move_home_action(state: ViewerState) -> ViewerState:
    return move_cursor(state, 0)


def move_end_action(state: ViewerState) -> ViewerState:
    return move_cursor(state, state.last_index)


def page_up_action(state: ViewerState) -> ViewerState:
    return move_cursor(state, state.cursor - state.height)


def page_down_action(state: ViewerState) -> ViewerState:
    return move_cursor(state, state.cursor + state.height)


def toggle_node_action(state: ViewerState) -> ViewerState:
    """Toggle expand state of the row under the cursor; leaves are a no-op."""
    row = state.selected()
    if row is None or not toggle_expanded(row.node):
        return state
    return reflatten(state)


def open_node_action(state: ViewerState) -> ViewerState:
    """Expand a collapsed row, or step into the first child of an expanded one."""
    row = state.selected()
    if row is None or row.node.is_leaf():
        return state
    if not row.node.expanded:
        row.node.expanded = True
        return reflatten(state)
    return move_cursor(state, state.cursor + 1)


def close_node_action(state: ViewerState) -> ViewerState:
    """Collapse an expanded row, or move to the parent row."""
    row = state.selected()
    if row is None:
        return state
    if not row.node.is_leaf() and row.node.expanded:
        row.node.expanded = False
        return reflatten(state)
    parent = parent_row_index(state.flat, state.cursor)
    if parent is None:
        return state
    return move_cursor(state, parent)


def expand_all_action(state: ViewerState) -> ViewerState:
    expand_all(state.root)
    return reflatten(state)


def collapse_all_action(state: ViewerState) -> ViewerState:
    collapse_all(state.root)
    return reflatten(state)


def begin_search_action(state: ViewerState) -> ViewerState:
    return replace(state, mode=MODE_SEARCH, search_input="")


def next_match_action(state: ViewerState) -> ViewerState:
    return jump_to_match(state, 1)


def previous_match_action(state: ViewerState) -> ViewerState:
    return jump_to_match(state, -1)


def clear_search_action(state: ViewerState) -> ViewerState:
    return replace(state, search=state.search.clear())


NORMAL_BINDINGS = KeyComboRegistry().register_bindings(
    KeyComboBinding(QUIT_KEYS, quit_action),
    KeyComboBinding(("UP", "k"), move_up_action),
    KeyComboBinding(("DOWN", "j"), move_down_action),
    KeyComboBinding(("HOME", "g"), move_home_action),
    KeyComboBinding(("END", "G"), move_end_action),
    KeyComboBinding(("PAGE_UP",), page_up_action),
    KeyComboBinding(("PAGE_DOWN",), page_down_action),
    KeyComboBinding(ENTER_KEYS + (" ",), toggle_node_action),
    KeyComboBinding(("RIGHT", "l"), open_node_action),
    KeyComboBinding(("LEFT", "h"), close_node_action),
    KeyComboBinding(("e",), expand_all_action),
    KeyComboBinding(("c",), collapse_all_action),
    KeyComboBinding(("/",), begin_search_action),
    KeyComboBinding(("n",), next_match_action),
    KeyComboBinding(("N",), previous_match_action),
    KeyComboBinding(("ESC",), clear_search_action),
)


def handle_normal_key(state: ViewerState, key: str) -> ViewerState:
    """Apply one normal-mode key; unbound keys leave the state untouched."""
    handled = NORMAL_BINDINGS.dispatch(key, state)
    if handled is None:
        return state
    logger.debug("normal key=%r cursor=%d scroll=%d", key, handled.cursor, handled.scroll)
    return handled


def handle_search_key(state: ViewerState, key: str) -> ViewerState:
    """Edit the pending query; Enter runs it, Esc abandons it."""
    if key in INTERRUPT_KEYS:
        return quit_action(state)
    if key == "ESC":
        return replace(state, mode=MODE_NORMAL, search_input="")
    if key in ENTER_KEYS:
        query = state.search_input
        return run_search(replace(state, mode=MODE_NORMAL, search_input=""), query)
    if key == "BACKSPACE":
        return replace(state, search_input=state.search_input[:-1])
    if len(key) == 1 and key.isprintable():
        return replace(state, search_input=state.search_input + key)
    return state


def update(state: ViewerState, event: str | Resize) -> tuple[ViewerState, bool]:
    """Advance one frame; the flag is ``True`` when this event requested quit."""
    if state.quitting:
        return state, False
    if isinstance(event, Resize):
        return resize(state, event.width, event.height), False
    if state.mode == MODE_SEARCH:
        next_state = handle_search_key(state, event)
    else:
        next_state = handle_normal_key(state, event)
    return next_state, next_state.quitting
