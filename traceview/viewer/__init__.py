"""Viewer state machine: frozen per-frame state plus key-driven transitions."""

from .keys import handle_normal_key, handle_search_key, update
from .state import (
    MODE_NORMAL,
    MODE_SEARCH,
    Resize,
    ViewerState,
    ensure_visible,
    new_viewer_state,
)

__all__ = [
    "MODE_NORMAL",
    "MODE_SEARCH",
    "Resize",
    "ViewerState",
    "ensure_visible",
    "handle_normal_key",
    "handle_search_key",
    "new_viewer_state",
    "update",
]
