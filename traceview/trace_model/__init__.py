"""Trace-model creation, flattening, and bulk expand/collapse.

Defines ``TraceNode`` with its tagged-union bodies and ``FlatNode`` rows.
"""

from __future__ import annotations

from .build import TraceFormatError, load_trace_file, trace_from_dict, trace_to_dict
from .flatten import (
    collapse_all,
    count_branches,
    count_nodes,
    expand_all,
    flatten,
    iter_nodes,
    parent_row_index,
    toggle_expanded,
)
from .sample import sample_trace
from .types import (
    KIND_CONTRACT_CALL,
    KIND_ERROR,
    KIND_EVENT,
    CallError,
    ContractCall,
    EmittedEvent,
    FlatNode,
    NodeBody,
    Step,
    TraceNode,
)

__all__ = [
    "KIND_CONTRACT_CALL",
    "KIND_ERROR",
    "KIND_EVENT",
    "CallError",
    "ContractCall",
    "EmittedEvent",
    "FlatNode",
    "NodeBody",
    "Step",
    "TraceNode",
    "TraceFormatError",
    "collapse_all",
    "count_branches",
    "count_nodes",
    "expand_all",
    "flatten",
    "iter_nodes",
    "load_trace_file",
    "parent_row_index",
    "sample_trace",
    "toggle_expanded",
    "trace_from_dict",
    "trace_to_dict",
]
