"""Trace document parsing tests."""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from traceview.trace_model import (
    CallError,
    ContractCall,
    EmittedEvent,
    Step,
    TraceFormatError,
    load_trace_file,
    sample_trace,
    trace_from_dict,
    trace_to_dict,
)


class TraceBuildTests(unittest.TestCase):
    def test_trace_from_dict_builds_variants_by_type(self) -> None:
        root = trace_from_dict(
            {
                "id": "tx",
                "type": "transaction",
                "children": [
                    {"id": "c1", "type": "contract_call", "contract_id": "CDLZFC3", "function": "transfer"},
                    {"id": "e1", "type": "event", "event_data": "Transfer: 100 XLM"},
                    {"id": "x1", "type": "error", "error": "boom"},
                ],
            }
        )

        self.assertEqual(root.body, Step(kind="transaction"))
        self.assertEqual(root.children[0].body, ContractCall(contract_id="CDLZFC3", function="transfer"))
        self.assertEqual(root.children[1].body, EmittedEvent(payload="Transfer: 100 XLM"))
        self.assertEqual(root.children[2].body, CallError(message="boom"))

    def test_missing_type_is_inferred_from_fields(self) -> None:
        root = trace_from_dict(
            {
                "id": "r",
                "children": [
                    {"id": "a", "error": "oops"},
                    {"id": "b", "event_data": "ping"},
                    {"id": "c", "function": "swap"},
                    {"id": "d"},
                ],
            }
        )

        self.assertEqual([child.kind for child in root.children], ["error", "event", "contract_call", "step"])

    def test_structured_event_payload_is_kept_as_compact_json(self) -> None:
        node = trace_from_dict({"id": "e", "type": "event", "event_data": {"amount": 100, "asset": "XLM"}})

        self.assertEqual(node.payload, '{"amount":100,"asset":"XLM"}')

    def test_numeric_ids_and_expanded_flag(self) -> None:
        node = trace_from_dict({"id": 7, "expanded": False, "children": [{"id": 8}]})

        self.assertEqual(node.node_id, "7")
        self.assertFalse(node.expanded)

    def test_invalid_documents_raise_trace_format_error(self) -> None:
        with self.assertRaises(TraceFormatError):
            trace_from_dict([])
        with self.assertRaises(TraceFormatError):
            trace_from_dict({"type": "event"})
        with self.assertRaises(TraceFormatError):
            trace_from_dict({"id": "a", "children": {"id": "b"}})
        with self.assertRaisesRegex(TraceFormatError, r"children\[0\]"):
            trace_from_dict({"id": "a", "children": [{"id": "b", "function": 3}]})

    def test_trace_to_dict_round_trips_sample(self) -> None:
        document = trace_to_dict(sample_trace())

        self.assertEqual(trace_to_dict(trace_from_dict(document)), document)

    def test_load_trace_file_reads_json_and_reports_bad_json(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            good = Path(tmp) / "trace.json"
            good.write_text(json.dumps({"id": "tx", "children": [{"id": "e", "event_data": "hi"}]}), encoding="utf-8")
            bad = Path(tmp) / "bad.json"
            bad.write_text("{not json", encoding="utf-8")

            root = load_trace_file(good)
            self.assertEqual(root.children[0].payload, "hi")
            with self.assertRaisesRegex(TraceFormatError, "invalid JSON"):
                load_trace_file(bad)


    def test_unreadable_file_raises_trace_format_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "trace.json"
            path.write_text("{}", encoding="utf-8")
            denied = PermissionError(13, "Permission denied")
            with mock.patch("traceview.trace_model.build.read_text", side_effect=denied):
                with self.assertRaisesRegex(TraceFormatError, "cannot read trace \\(Permission denied\\)"):
                    load_trace_file(path)

    def test_deeply_nested_document_raises_trace_format_error(self) -> None:
        depth = 5000
        source = '{"id": "n", "children": [' * depth + '{"id": "leaf"}' + "]}" * depth
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "deep.json"
            path.write_text(source, encoding="utf-8")

            with self.assertRaisesRegex(TraceFormatError, "nested too deeply"):
                load_trace_file(path)


if __name__ == "__main__":
    unittest.main()
