"""Trace node datatypes shared by the flattener, search, and renderer.

Node bodies form a tagged union: each execution step carries exactly the
fields that make sense for its kind, so a node can never hold (say) both an
error message and an event payload.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

KIND_CONTRACT_CALL = "contract_call"
KIND_EVENT = "event"
KIND_ERROR = "error"


@dataclass(frozen=True)
class ContractCall:
    """Invocation of ``function`` on contract ``contract_id``."""

    contract_id: str = ""
    function: str = ""

    @property
    def kind(self) -> str:
        return KIND_CONTRACT_CALL


@dataclass(frozen=True)
class EmittedEvent:
    """Event emitted during execution, with its payload rendered as text."""

    payload: str = ""

    @property
    def kind(self) -> str:
        return KIND_EVENT


@dataclass(frozen=True)
class CallError:
    """Failure raised by the enclosing call."""

    message: str = ""

    @property
    def kind(self) -> str:
        return KIND_ERROR


@dataclass(frozen=True)
class Step:
    """Any other step (transaction root, host function, budget entry...)."""

    kind: str = "step"


NodeBody = Union[ContractCall, EmittedEvent, CallError, Step]


@dataclass(eq=False)
class TraceNode:
    """One node of an execution trace.

    Shape is fixed once built; only ``expanded`` changes while viewing.
    ``eq=False`` keeps identity semantics so the same node can be located in
    a rebuilt flattened view.
    """

    node_id: str
    body: NodeBody = field(default_factory=Step)
    children: list[TraceNode] = field(default_factory=list)
    expanded: bool = True

    @property
    def kind(self) -> str:
        return self.body.kind

    @property
    def contract_id(self) -> str:
        return self.body.contract_id if isinstance(self.body, ContractCall) else ""

    @property
    def function(self) -> str:
        return self.body.function if isinstance(self.body, ContractCall) else ""

    @property
    def payload(self) -> str:
        return self.body.payload if isinstance(self.body, EmittedEvent) else ""

    @property
    def error_message(self) -> str:
        return self.body.message if isinstance(self.body, CallError) else ""

    def is_leaf(self) -> bool:
        return not self.children

    def search_fields(self) -> tuple[str, ...]:
        """Return populated text fields in search priority order."""
        candidates = (
            self.node_id,
            self.function,
            self.contract_id,
            self.payload,
            self.error_message,
            self.kind,
        )
        return tuple(text for text in candidates if text)


@dataclass(frozen=True)
class FlatNode:
    """One visible row of the linearized tree."""

    node: TraceNode
    depth: int
