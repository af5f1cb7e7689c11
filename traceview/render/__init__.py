"""Rendering: ANSI helpers, footer hints, and full-frame view composition."""

from .ansi import ANSI_ESCAPE_RE, clip_ansi_line, display_width, strip_ansi
from .view import (
    format_match_status,
    format_node_content,
    highlight_matches,
    render_footer,
    render_row,
    render_view,
)

__all__ = [
    "ANSI_ESCAPE_RE",
    "clip_ansi_line",
    "display_width",
    "format_match_status",
    "format_node_content",
    "highlight_matches",
    "render_footer",
    "render_row",
    "render_view",
    "strip_ansi",
]
