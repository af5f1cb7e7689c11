"""Command-line front door for traceview.

Parses CLI options, loads the trace document, and either prints a
non-interactive rendering or hands the tree to the interactive viewer.
"""

from __future__ import annotations

import argparse
import json
import logging
import shutil
import sys
from pathlib import Path

from .config import load_theme_name
from .highlight import DEFAULT_STYLE, colorize_json
from .log import setup_logging
from .render import render_view
from .runtime import run_viewer
from .trace_model import (
    TraceFormatError,
    TraceNode,
    count_branches,
    count_nodes,
    load_trace_file,
    sample_trace,
    trace_to_dict,
)
from .ui_theme import available_theme_names, resolve_theme
from .viewer import Resize, ViewerState, new_viewer_state, update
from .viewer.keys import collapse_all_action, expand_all_action
from .viewer.state import run_search

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="traceview",
        description="Browse and search an execution trace (calls, events, errors) in the terminal.",
    )
    parser.add_argument("path", nargs="?", default=None, help="Path to a JSON trace document.")
    parser.add_argument("--demo", action="store_true", help="Open the built-in demo trace.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--render", action="store_true", help="Print one viewer frame and exit.")
    parser.add_argument("--dump", action="store_true", help="Print the trace as JSON and exit.")
    parser.add_argument("--style", default=DEFAULT_STYLE, help="Pygments style name for --dump.")
    parser.add_argument("--width", type=_positive_int, default=None, help="Columns for --render (default: terminal).")
    parser.add_argument("--height", type=_positive_int, default=None, help="Tree rows for --render (default: all rows).")
    fold = parser.add_mutually_exclusive_group()
    fold.add_argument("--expand", action="store_true", help="Start with every node expanded.")
    fold.add_argument("--collapse", action="store_true", help="Start with every node collapsed.")
    parser.add_argument("--search", metavar="QUERY", default=None, help="Start with QUERY searched.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write debug log records to this file.")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=("DEBUG", "INFO", "WARNING", "ERROR"),
        default=None,
        help="Log level (default: $TRACEVIEW_LOG_LEVEL or INFO).",
    )
    return parser


def prepare_state(
    state: ViewerState,
    *,
    expand: bool = False,
    collapse: bool = False,
    query: str | None = None,
) -> ViewerState:
    """Apply start-up folding and search to the first frame."""
    if expand:
        state = expand_all_action(state)
    elif collapse:
        state = collapse_all_action(state)
    if query:
        state = run_search(state, query)
    return state


def render_trace(
    root: TraceNode,
    *,
    width: int,
    height: int | None = None,
    no_color: bool = False,
    theme_name: str | None = None,
    expand: bool = False,
    collapse: bool = False,
    query: str | None = None,
) -> str:
    """Render one viewer frame for ``root`` as text.

    Without ``height`` the frame is tall enough to show every visible row.
    """
    state = prepare_state(new_viewer_state(root, width=width), expand=expand, collapse=collapse)
    rows = height if height is not None else len(state.flat)
    state, _ = update(state, Resize(width, rows))
    state = prepare_state(state, query=query)
    return render_view(state, resolve_theme(theme_name, no_color=no_color))


def dump_trace(root: TraceNode, *, style: str = DEFAULT_STYLE, color: bool = True) -> str:
    text = json.dumps(trace_to_dict(root), indent=2) + "\n"
    return colorize_json(text, style) if color else text


def _load_root(args: argparse.Namespace) -> TraceNode:
    if args.demo:
        if args.path is not None:
            raise SystemExit("Cannot combine a trace path with --demo.")
        return sample_trace()
    if args.path is None:
        raise SystemExit("No trace given: pass a JSON trace path or --demo.")
    path = Path(args.path)
    if not path.is_file():
        raise SystemExit(f"Trace not found: {path}")
    try:
        return load_trace_file(path)
    except TraceFormatError as exc:
        raise SystemExit(f"Invalid trace: {exc}") from exc


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and show, render, or dump a trace."""
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_file, args.log_level)

    root = _load_root(args)
    logger.debug("trace loaded nodes=%d branches=%d", count_nodes(root), count_branches(root))
    theme_name = args.theme if args.theme is not None else load_theme_name()

    if args.dump:
        color = not args.no_color and sys.stdout.isatty()
        sys.stdout.write(dump_trace(root, style=args.style, color=color))
        return

    if args.render:
        width = args.width if args.width is not None else shutil.get_terminal_size((80, 24)).columns
        sys.stdout.write(
            render_trace(
                root,
                width=width,
                height=args.height,
                no_color=args.no_color,
                theme_name=theme_name,
                expand=args.expand,
                collapse=args.collapse,
                query=args.search,
            )
            + "\n"
        )
        return

    if not sys.stdin.isatty() or not sys.stdout.isatty():
        raise SystemExit("traceview needs an interactive terminal; use --render or --dump.")

    logger.debug("opening viewer theme=%s", theme_name)
    run_viewer(
        root,
        theme=resolve_theme(theme_name, no_color=args.no_color),
        initial=lambda state: prepare_state(
            state,
            expand=args.expand,
            collapse=args.collapse,
            query=args.search,
        ),
    )


if __name__ == "__main__":
    main()
