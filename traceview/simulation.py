"""Boundary types for the external transaction simulator.

The viewer never talks to a simulator itself. Callers hand a
``SimulationRunner`` (local binary, RPC client, or test double) a request and
turn the response into a trace tree with ``trace_from_simulation`` before the
viewer starts.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Protocol

from .trace_model import CallError, EmittedEvent, Step, TraceNode

logger = logging.getLogger(__name__)

STATUS_SUCCESS = "success"


@dataclass(frozen=True)
class SimulationRequest:
    """Encoded transaction envelope plus its result metadata."""

    envelope_xdr: str
    result_meta_xdr: str


@dataclass(frozen=True)
class SimulationResponse:
    status: str
    events: list[str] = field(default_factory=list)
    error: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == STATUS_SUCCESS


class SimulationRunner(Protocol):
    def run(self, request: SimulationRequest) -> SimulationResponse: ...


class SimulationError(RuntimeError):
    """Raised when a runner reports a failure without producing a response."""


def trace_from_simulation(response: SimulationResponse, node_id: str = "tx") -> TraceNode:
    """Build a transaction trace: one event row per emitted event.

    A failed simulation gets a trailing error row carrying the runner's
    message (or the raw status when no message was given).
    """
    children = [
        TraceNode(node_id=f"event-{idx}", body=EmittedEvent(payload=event))
        for idx, event in enumerate(response.events, start=1)
    ]
    if not response.succeeded:
        message = response.error or f"simulation status: {response.status}"
        children.append(TraceNode(node_id="error", body=CallError(message=message)))
    return TraceNode(node_id=node_id, body=Step(kind="transaction"), children=children)


def simulate_trace(runner: SimulationRunner, request: SimulationRequest) -> TraceNode:
    """Run ``request`` through ``runner`` and return the resulting trace tree."""
    try:
        response = runner.run(request)
    except SimulationError:
        raise
    except Exception as exc:
        raise SimulationError(f"simulator failed: {exc}") from exc
    logger.debug("simulation status=%s events=%d", response.status, len(response.events))
    return trace_from_simulation(response)
