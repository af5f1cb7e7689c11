"""UI theme definitions and selection helpers.

Themes are ANSI palettes for tree rows and the footer. Match markers use
underline plus a background color and close only those attributes, so they
stay visible inside the reverse-video cursor row. The plain theme
carries no escape codes at all and marks search hits with brackets instead.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reverse: str
    reset: str
    tree_marker: str
    cursor_marker: str
    match_marker: str
    node_call: str
    node_event: str
    node_error: str
    node_step: str
    match_open: str
    match_close: str
    footer_key: str
    footer_dim: str
    footer_query: str


DEFAULT_THEME = UITheme(
    name="default",
    reverse="\033[7m",
    reset="\033[0m",
    tree_marker="\033[38;5;44m",
    cursor_marker="\033[1;38;5;81m",
    match_marker="\033[1;38;5;214m",
    node_call="\033[1;34m",
    node_event="\033[38;5;110m",
    node_error="\033[1;31m",
    node_step="\033[38;5;252m",
    match_open="\033[4;48;5;58m",
    match_close="\033[24;49m",
    footer_key="\033[38;5;229m",
    footer_dim="\033[2;38;5;250m",
    footer_query="\033[1;38;5;81m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reverse="\033[7m",
    reset="\033[0m",
    tree_marker="\033[38;5;39m",
    cursor_marker="\033[1;38;5;45m",
    match_marker="\033[1;38;5;215m",
    node_call="\033[1;38;5;45m",
    node_event="\033[38;5;117m",
    node_error="\033[1;38;5;203m",
    node_step="\033[38;5;252m",
    match_open="\033[4;48;5;24m",
    match_close="\033[24;49m",
    footer_key="\033[38;5;153m",
    footer_dim="\033[2;38;5;110m",
    footer_query="\033[1;38;5;45m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reverse="",
    reset="",
    tree_marker="",
    cursor_marker="",
    match_marker="",
    node_call="",
    node_event="",
    node_error="",
    node_step="",
    match_open="[",
    match_close="]",
    footer_key="",
    footer_dim="",
    footer_query="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
