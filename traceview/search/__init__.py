"""Search over flattened trace views."""

from .engine import Match, SearchEngine, find_matches, node_matches

__all__ = [
    "Match",
    "SearchEngine",
    "find_matches",
    "node_matches",
]
