"""Public runtime entry points.

``run_viewer`` owns the terminal for the lifetime of one viewing session;
``run_main_loop`` is the injectable loop used by tests.
"""

from __future__ import annotations


def run_viewer(*args, **kwargs):
    """Lazily import the loop so importing the package does not touch termios."""
    from .loop import run_viewer as _run_viewer

    return _run_viewer(*args, **kwargs)


def run_main_loop(*args, **kwargs):
    """Lazily import loop runner to avoid package-import cycles."""
    from .loop import run_main_loop as _run_main_loop

    return _run_main_loop(*args, **kwargs)


__all__ = [
    "run_main_loop",
    "run_viewer",
]
