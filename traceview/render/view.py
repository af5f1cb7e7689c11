"""Frame rendering for the trace viewer.

Everything here is a pure function of a ``ViewerState`` snapshot: the
visible window of rows, the footer, and the per-row glyphs are derived from
state fields only, so a frame can be asserted on directly in tests.
"""

from __future__ import annotations

from ..search import SearchEngine
from ..trace_model import KIND_CONTRACT_CALL, KIND_ERROR, KIND_EVENT, FlatNode, TraceNode
from ..ui_theme import DEFAULT_THEME, UITheme
from ..viewer.state import MODE_SEARCH, ViewerState
from .ansi import clip_ansi_line, sanitize_terminal_text
from .help import footer_help_text, search_prompt_text

CURSOR_GLYPH = ">"
MATCH_GLYPH = "●"
EXPANDED_GLYPH = "▾ "
COLLAPSED_GLYPH = "▸ "
LEAF_GLYPH = "  "
INDENT = "  "


def format_node_content(node: TraceNode) -> str:
    """Return the plain-text label for ``node``.

    Falls back to the bare identifier when the node's variant fields are
    all empty.
    """
    if node.kind == KIND_CONTRACT_CALL:
        target = node.contract_id
        if node.function:
            target = f"{target}::{node.function}" if target else node.function
        if target:
            return f"{node.kind} {target}"
    elif node.kind == KIND_ERROR:
        if node.error_message:
            return f"error: {node.error_message}"
    elif node.kind == KIND_EVENT:
        if node.payload:
            return f"event: {node.payload}"
    return node.node_id


def match_spans(text: str, query: str) -> list[tuple[int, int]]:
    """Return non-overlapping ``(start, end)`` spans of ``query`` in ``text``.

    Uses the same ``str.casefold`` rule as the search engine. Offsets refer
    to ``text``; a character that folds to several (``ß`` -> ``ss``) is
    covered whole when a hit touches it.
    """
    folded_query = query.casefold()
    if not folded_query:
        return []
    origins: list[int] = []
    folded_parts: list[str] = []
    for idx, ch in enumerate(text):
        folded = ch.casefold()
        folded_parts.append(folded)
        origins.extend([idx] * len(folded))
    folded_text = "".join(folded_parts)

    spans: list[tuple[int, int]] = []
    pos = 0
    while True:
        hit = folded_text.find(folded_query, pos)
        if hit < 0:
            return spans
        start = origins[hit]
        end = origins[hit + len(folded_query) - 1] + 1
        if not spans or start >= spans[-1][1]:
            spans.append((start, end))
        pos = hit + len(folded_query)


def highlight_matches(text: str, query: str, theme: UITheme | None = None) -> str:
    """Wrap every case-insensitive occurrence of ``query`` in match markers."""
    spans = match_spans(text, query)
    if not spans:
        return text
    active_theme = theme or DEFAULT_THEME
    out: list[str] = []
    last = 0
    for start, end in spans:
        out.append(text[last:start])
        out.append(f"{active_theme.match_open}{text[start:end]}{active_theme.match_close}")
        last = end
    out.append(text[last:])
    return "".join(out)


def node_color(node: TraceNode, theme: UITheme) -> str:
    if node.kind == KIND_CONTRACT_CALL:
        return theme.node_call
    if node.kind == KIND_EVENT:
        return theme.node_event
    if node.kind == KIND_ERROR:
        return theme.node_error
    return theme.node_step


def selected_with_ansi(text: str, theme: UITheme) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text or not theme.reverse:
        return text
    # Keep reverse video active even when the text contains internal resets.
    return theme.reverse + text.replace("\033[0m", "\033[0;7m") + theme.reset


def render_row(
    row: FlatNode,
    index: int,
    cursor: int,
    search: SearchEngine,
    theme: UITheme | None = None,
) -> str:
    """Render one tree row: cursor and match glyphs, indent, expand glyph, label."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    node = row.node

    cursor_glyph = CURSOR_GLYPH if index == cursor else " "
    current = search.current_match()
    is_current_match = current is not None and current.index == index and current.node is node
    match_glyph = MATCH_GLYPH if is_current_match else " "

    if node.is_leaf():
        expand_glyph = LEAF_GLYPH
    else:
        glyph = EXPANDED_GLYPH if node.expanded else COLLAPSED_GLYPH
        expand_glyph = f"{active_theme.tree_marker}{glyph}{reset}"

    content = highlight_matches(
        sanitize_terminal_text(format_node_content(node)),
        search.get_query(),
        active_theme,
    )
    return (
        f"{active_theme.cursor_marker}{cursor_glyph}{reset}"
        f"{active_theme.match_marker}{match_glyph}{reset} "
        f"{INDENT * row.depth}{expand_glyph}"
        f"{node_color(node, active_theme)}{content}{reset}"
    )


def format_match_status(search: SearchEngine) -> str:
    """Return ``N matches (i/N)`` for an active search, ``""`` otherwise."""
    if not search.is_active():
        return ""
    count = search.match_count()
    if count <= 0:
        return "no matches"
    noun = "match" if count == 1 else "matches"
    return f"{count:,} {noun} ({search.current_match_number()}/{count})"


def render_footer(state: ViewerState, theme: UITheme | None = None) -> str:
    active_theme = theme or DEFAULT_THEME
    if state.mode == MODE_SEARCH:
        left = search_prompt_text(state.search_input, active_theme)
    else:
        left = footer_help_text(active_theme)
    parts = [left]
    status = format_match_status(state.search)
    if status:
        parts.append(f"{active_theme.footer_query}{status}{active_theme.reset}")
    if state.flat:
        parts.append(f"{active_theme.footer_dim}{state.cursor + 1}/{len(state.flat)}{active_theme.reset}")
    return "  ".join(parts)


def render_view(state: ViewerState, theme: UITheme | None = None) -> str:
    """Render the visible window plus footer; empty once quitting."""
    if state.quitting:
        return ""
    active_theme = theme or DEFAULT_THEME
    width = max(1, state.width)
    start = max(0, state.scroll)
    end = min(len(state.flat), start + max(1, state.height))

    lines: list[str] = []
    for index in range(start, end):
        line = render_row(state.flat[index], index, state.cursor, state.search, active_theme)
        line = clip_ansi_line(line, width) + active_theme.reset
        if index == state.cursor:
            line = selected_with_ansi(line, active_theme)
        lines.append(line)
    while len(lines) < state.height:
        lines.append("")

    lines.append(clip_ansi_line(render_footer(state, active_theme), width) + active_theme.reset)
    return "\n".join(lines)
