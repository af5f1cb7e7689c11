"""Trace-tree construction from JSON trace documents.

A document is one object per node::

    {"id": "...", "type": "contract_call", "contract_id": "...",
     "function": "...", "event_data": "...", "error": "...",
     "expanded": true, "children": [...]}

Only ``id`` is required. When ``type`` is missing the variant is inferred
from whichever payload field is present.
"""

from __future__ import annotations

import json
from pathlib import Path

from .types import (
    KIND_CONTRACT_CALL,
    KIND_ERROR,
    KIND_EVENT,
    CallError,
    ContractCall,
    EmittedEvent,
    NodeBody,
    Step,
    TraceNode,
)


class TraceFormatError(ValueError):
    """Raised when a trace document cannot be turned into a tree."""


def read_text(path: Path) -> str:
    """Read text using tolerant encoding fallback order."""
    for encoding in ("utf-8", "utf-8-sig", "latin-1"):
        try:
            return path.read_text(encoding=encoding)
        except UnicodeDecodeError:
            continue
    return path.read_bytes().decode("utf-8", errors="replace")


def _string_field(data: dict, key: str, where: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if key == "event_data":
        # Structured payloads are kept searchable as compact JSON.
        return json.dumps(value, sort_keys=True, separators=(",", ":"))
    raise TraceFormatError(f"{where}: field {key!r} must be a string")


def _body_from_fields(kind: str, contract_id: str, function: str, payload: str, error: str) -> NodeBody:
    """Pick the node variant for ``kind``, inferring it when ``kind`` is empty."""
    if not kind:
        if error:
            kind = KIND_ERROR
        elif payload:
            kind = KIND_EVENT
        elif contract_id or function:
            kind = KIND_CONTRACT_CALL
    if kind == KIND_CONTRACT_CALL:
        return ContractCall(contract_id=contract_id, function=function)
    if kind == KIND_EVENT:
        return EmittedEvent(payload=payload)
    if kind == KIND_ERROR:
        return CallError(message=error)
    return Step(kind=kind or "step")


def trace_from_dict(data: object, where: str = "$") -> TraceNode:
    """Build a ``TraceNode`` tree from a decoded JSON document."""
    if not isinstance(data, dict):
        raise TraceFormatError(f"{where}: expected an object, got {type(data).__name__}")

    node_id = data.get("id")
    if isinstance(node_id, int) and not isinstance(node_id, bool):
        node_id = str(node_id)
    if not isinstance(node_id, str) or not node_id:
        raise TraceFormatError(f"{where}: missing node id")

    body = _body_from_fields(
        kind=_string_field(data, "type", where),
        contract_id=_string_field(data, "contract_id", where),
        function=_string_field(data, "function", where),
        payload=_string_field(data, "event_data", where),
        error=_string_field(data, "error", where),
    )

    raw_children = data.get("children") or []
    if not isinstance(raw_children, list):
        raise TraceFormatError(f"{where}: 'children' must be a list")
    children = [
        trace_from_dict(child, f"{where}.children[{idx}]")
        for idx, child in enumerate(raw_children)
    ]

    expanded = data.get("expanded", True)
    return TraceNode(
        node_id=node_id,
        body=body,
        children=children,
        expanded=expanded if isinstance(expanded, bool) else True,
    )


def load_trace_file(path: Path) -> TraceNode:
    """Read and parse a JSON trace document from ``path``.

    Unreadable files and documents nested beyond the interpreter's recursion
    limit are reported as ``TraceFormatError`` like malformed JSON.
    """
    try:
        text = read_text(path)
    except OSError as exc:
        raise TraceFormatError(f"{path}: cannot read trace ({exc.strerror or exc})") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TraceFormatError(f"{path}: invalid JSON ({exc.msg} at line {exc.lineno})") from exc
    except RecursionError as exc:
        raise TraceFormatError(f"{path}: trace nested too deeply") from exc
    try:
        return trace_from_dict(data)
    except RecursionError as exc:
        raise TraceFormatError(f"{path}: trace nested too deeply") from exc


def trace_to_dict(node: TraceNode) -> dict[str, object]:
    """Serialize a tree back into the document shape read by ``trace_from_dict``."""
    out: dict[str, object] = {"id": node.node_id, "type": node.kind}
    if node.contract_id:
        out["contract_id"] = node.contract_id
    if node.function:
        out["function"] = node.function
    if node.payload:
        out["event_data"] = node.payload
    if node.error_message:
        out["error"] = node.error_message
    if node.children:
        out["children"] = [trace_to_dict(child) for child in node.children]
    return out
