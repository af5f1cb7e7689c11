"""Footer help hints and the search prompt.

Presentation-only; keybinding text lives here so the renderer and tests
share one source.
"""

from __future__ import annotations

from ..ui_theme import UITheme

NORMAL_HINTS: tuple[tuple[str, str], ...] = (
    ("↑/↓ j/k", "navigate"),
    ("enter/space", "toggle"),
    ("h/l", "fold"),
    ("e/c", "expand/collapse all"),
    ("/", "search"),
    ("n/N", "next/prev"),
    ("esc", "clear"),
    ("q", "quit"),
)

SEARCH_HINTS: tuple[tuple[str, str], ...] = (
    ("enter", "search"),
    ("esc", "cancel"),
)

SEARCH_PROMPT = "/"


def _format_hints(hints: tuple[tuple[str, str], ...], theme: UITheme) -> str:
    return "  ".join(f"{theme.footer_key}{key}{theme.reset} {label}" for key, label in hints)


def footer_help_text(theme: UITheme) -> str:
    """Return normal-mode navigation/search/quit hints."""
    return _format_hints(NORMAL_HINTS, theme)


def search_prompt_text(buffer: str, theme: UITheme) -> str:
    """Return the live search prompt followed by search-mode hints."""
    prompt = f"{theme.footer_query}{SEARCH_PROMPT}{buffer}{theme.reset}{theme.reverse} {theme.reset}"
    return f"{prompt}  {_format_hints(SEARCH_HINTS, theme)}"
