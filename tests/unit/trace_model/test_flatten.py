"""Flattening and bulk expand/collapse tests.

Covers pre-order row order, pruning below collapsed nodes, and the size
bounds that hold for every tree after expand-all / collapse-all.
"""

from __future__ import annotations

import random
import unittest

from traceview.trace_model import (
    ContractCall,
    EmittedEvent,
    TraceNode,
    collapse_all,
    count_branches,
    count_nodes,
    expand_all,
    flatten,
    parent_row_index,
    sample_trace,
    toggle_expanded,
)


def _random_tree(rng: random.Random, max_nodes: int) -> TraceNode:
    root = TraceNode(node_id="root")
    nodes = [root]
    for idx in range(rng.randint(0, max_nodes)):
        parent = rng.choice(nodes)
        child = TraceNode(node_id=f"n{idx}", expanded=rng.random() < 0.7)
        parent.children.append(child)
        nodes.append(child)
    return root


class FlattenTests(unittest.TestCase):
    def test_flatten_is_preorder_with_depths(self) -> None:
        rows = flatten(sample_trace())

        self.assertEqual(
            [(row.node.node_id, row.depth) for row in rows],
            [
                ("tx", 0),
                ("call-1", 1),
                ("call-1.1", 2),
                ("event-1", 3),
                ("event-2", 3),
                ("call-1.2", 2),
                ("host-1", 3),
                ("event-3", 2),
                ("call-2", 1),
                ("event-4", 2),
                ("error-1", 2),
                ("event-5", 1),
            ],
        )

    def test_collapsed_node_keeps_its_row_but_hides_descendants(self) -> None:
        root = sample_trace()
        root.children[0].expanded = False

        ids = [row.node.node_id for row in flatten(root)]

        self.assertEqual(ids, ["tx", "call-1", "call-2", "event-4", "error-1", "event-5"])

    def test_collapse_all_leaves_only_root(self) -> None:
        root = sample_trace()
        collapse_all(root)

        rows = flatten(root)

        self.assertEqual(len(rows), 1)
        self.assertIs(rows[0].node, root)

    def test_expand_all_shows_every_node(self) -> None:
        root = sample_trace()
        collapse_all(root)
        expand_all(root)

        self.assertEqual(len(flatten(root)), count_nodes(root))

    def test_single_node_tree(self) -> None:
        root = TraceNode(node_id="only")
        collapse_all(root)

        self.assertEqual(len(flatten(root)), 1)
        self.assertTrue(root.is_leaf())

    def test_bulk_operations_bounds_hold_for_random_trees(self) -> None:
        rng = random.Random(1234)
        for _ in range(50):
            root = _random_tree(rng, max_nodes=40)
            total = count_nodes(root)

            expand_all(root)
            expanded_len = len(flatten(root))
            self.assertEqual(expanded_len, total)

            collapse_all(root)
            collapsed_len = len(flatten(root))
            self.assertLessEqual(collapsed_len, count_branches(root) + 1)
            if not root.is_leaf():
                self.assertLess(collapsed_len, expanded_len)

    def test_toggle_leaf_is_noop(self) -> None:
        root = sample_trace()
        before = flatten(root)
        leaf = before[3].node

        self.assertFalse(toggle_expanded(leaf))
        self.assertEqual(flatten(root), before)

    def test_toggle_branch_flips_flag(self) -> None:
        node = TraceNode(node_id="p", children=[TraceNode(node_id="c")])

        self.assertTrue(toggle_expanded(node))
        self.assertFalse(node.expanded)
        self.assertTrue(toggle_expanded(node))
        self.assertTrue(node.expanded)

    def test_parent_row_index(self) -> None:
        rows = flatten(sample_trace())

        self.assertEqual(parent_row_index(rows, 4), 2)
        self.assertEqual(parent_row_index(rows, 8), 0)
        self.assertIsNone(parent_row_index(rows, 0))
        self.assertIsNone(parent_row_index(rows, 99))

    def test_deep_chain_does_not_recurse(self) -> None:
        root = TraceNode(node_id="0")
        node = root
        for depth in range(1, 5000):
            child = TraceNode(node_id=str(depth))
            node.children.append(child)
            node = child

        rows = flatten(root)

        self.assertEqual(len(rows), 5000)
        self.assertEqual(rows[-1].depth, 4999)


class TraceNodeFieldTests(unittest.TestCase):
    def test_variant_fields_are_empty_when_not_carried(self) -> None:
        call = TraceNode(node_id="c", body=ContractCall(contract_id="CDLZFC3", function="transfer"))
        event = TraceNode(node_id="e", body=EmittedEvent(payload="Transfer: 100 XLM"))

        self.assertEqual(call.kind, "contract_call")
        self.assertEqual(call.payload, "")
        self.assertEqual(call.error_message, "")
        self.assertEqual(event.contract_id, "")
        self.assertEqual(event.payload, "Transfer: 100 XLM")

    def test_search_fields_follow_priority_order_and_skip_empty(self) -> None:
        call = TraceNode(node_id="c", body=ContractCall(contract_id="CDLZFC3", function="transfer"))

        self.assertEqual(call.search_fields(), ("c", "transfer", "CDLZFC3", "contract_call"))
        self.assertEqual(TraceNode(node_id="bare").search_fields(), ("bare", "step"))


if __name__ == "__main__":
    unittest.main()
