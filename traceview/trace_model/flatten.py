"""Flattening and bulk expand/collapse over trace trees.

``flatten`` is the single source of row order for rendering, cursor
movement, and search. Traversal is iterative so very deep call stacks do not
hit the interpreter recursion limit.
"""

from __future__ import annotations

from collections.abc import Iterator

from .types import FlatNode, TraceNode


def iter_nodes(root: TraceNode) -> Iterator[TraceNode]:
    """Yield every node in pre-order, ignoring expand state."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def flatten(root: TraceNode) -> tuple[FlatNode, ...]:
    """Return visible rows: pre-order, pruned below collapsed nodes.

    A collapsed node keeps its own row; only its descendants are omitted.
    """
    rows: list[FlatNode] = []
    stack: list[tuple[TraceNode, int]] = [(root, 0)]
    while stack:
        node, depth = stack.pop()
        rows.append(FlatNode(node=node, depth=depth))
        if node.expanded and node.children:
            stack.extend((child, depth + 1) for child in reversed(node.children))
    return tuple(rows)


def expand_all(root: TraceNode) -> None:
    for node in iter_nodes(root):
        if not node.is_leaf():
            node.expanded = True


def collapse_all(root: TraceNode) -> None:
    """Collapse every branch node, root included (root itself stays visible)."""
    for node in iter_nodes(root):
        if not node.is_leaf():
            node.expanded = False


def toggle_expanded(node: TraceNode) -> bool:
    """Flip ``node.expanded``; return ``False`` for leaves, which never toggle."""
    if node.is_leaf():
        return False
    node.expanded = not node.expanded
    return True


def count_nodes(root: TraceNode) -> int:
    return sum(1 for _ in iter_nodes(root))


def count_branches(root: TraceNode) -> int:
    """Count nodes that have at least one child."""
    return sum(1 for node in iter_nodes(root) if not node.is_leaf())


def parent_row_index(flat: tuple[FlatNode, ...], index: int) -> int | None:
    """Return row index of the nearest shallower row above ``index``."""
    if not 0 <= index < len(flat):
        return None
    depth = flat[index].depth
    idx = index - 1
    while idx >= 0:
        if flat[idx].depth < depth:
            return idx
        idx -= 1
    return None
