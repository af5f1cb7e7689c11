"""Main interactive event loop for the terminal UI.

One iteration: notice terminal resizes, draw the frame if anything changed,
read at most one key, and feed it to the state machine. The loop ends when
the state's quit latch is set.
"""

from __future__ import annotations

import logging
import os
import shutil
import sys
from collections.abc import Callable
from typing import Protocol

from ..render import render_view
from ..trace_model import TraceNode
from ..ui_theme import DEFAULT_THEME, UITheme
from ..viewer import Resize, ViewerState, new_viewer_state, update
from .input import KeyReader
from .terminal import TerminalController

logger = logging.getLogger(__name__)

RESIZE_POLL_MS = 100
FOOTER_ROWS = 1


class FrameTerminal(Protocol):
    def raw_mode(self): ...

    def draw(self, frame: str) -> None: ...


class KeySource(Protocol):
    def read_key(self, timeout_ms: int | None = None) -> str: ...


def viewport_rows(terminal_lines: int) -> int:
    """Rows available to the tree once the footer is reserved."""
    return max(1, terminal_lines - FOOTER_ROWS)


def _default_terminal_size() -> os.terminal_size:
    return shutil.get_terminal_size((80, 24))


def run_main_loop(
    state: ViewerState,
    terminal: FrameTerminal,
    keys: KeySource,
    theme: UITheme | None = None,
    terminal_size: Callable[[], os.terminal_size] = _default_terminal_size,
) -> ViewerState:
    """Drive ``state`` until quit and return the final frame state."""
    active_theme = theme or DEFAULT_THEME
    last_size: tuple[int, int] | None = None
    dirty = True

    with terminal.raw_mode():
        while not state.quitting:
            size = terminal_size()
            if (size.columns, size.lines) != last_size:
                last_size = (size.columns, size.lines)
                state, _ = update(state, Resize(size.columns, viewport_rows(size.lines)))
                dirty = True

            if dirty:
                terminal.draw(render_view(state, active_theme))
                dirty = False

            key = keys.read_key(timeout_ms=RESIZE_POLL_MS)
            if not key:
                continue
            next_state, should_quit = update(state, key)
            dirty = next_state is not state
            state = next_state
            if should_quit:
                logger.info("quit requested")
                break
    return state


def run_viewer(
    root: TraceNode,
    *,
    theme: UITheme | None = None,
    stdin_fd: int | None = None,
    stdout_fd: int | None = None,
    initial: Callable[[ViewerState], ViewerState] | None = None,
) -> ViewerState:
    """Show ``root`` in the interactive viewer until the user quits.

    ``initial`` may adjust the first frame (pre-applied search, collapsed
    tree) before the terminal switches to raw mode.
    """
    in_fd = sys.stdin.fileno() if stdin_fd is None else stdin_fd
    out_fd = sys.stdout.fileno() if stdout_fd is None else stdout_fd
    size = _default_terminal_size()
    state = new_viewer_state(root, width=size.columns, height=viewport_rows(size.lines))
    if initial is not None:
        state = initial(state)

    logger.info("viewer start rows=%d", len(state.flat))
    final_state = run_main_loop(
        state,
        TerminalController(in_fd, out_fd),
        KeyReader(in_fd),
        theme=theme,
    )
    logger.info("viewer exit")
    return final_state
