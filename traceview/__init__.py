"""Public package surface for traceview.

Exports ``main`` for programmatic CLI invocation, ``run_viewer`` for hosts
that already hold a built trace tree, and the simulator boundary
(``simulate_trace`` and its request/response records) for hosts that build
the tree from a transaction simulation first.
"""

from __future__ import annotations

from .simulation import (
    SimulationError,
    SimulationRequest,
    SimulationResponse,
    SimulationRunner,
    simulate_trace,
    trace_from_simulation,
)


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def run_viewer(*args, **kwargs):
    """Lazily import the interactive runtime."""
    from .runtime import run_viewer as _run_viewer

    return _run_viewer(*args, **kwargs)


__all__ = [
    "SimulationError",
    "SimulationRequest",
    "SimulationResponse",
    "SimulationRunner",
    "main",
    "run_viewer",
    "simulate_trace",
    "trace_from_simulation",
]
