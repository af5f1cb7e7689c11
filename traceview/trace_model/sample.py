"""Built-in demo trace used by ``traceview --demo`` and the test-suite."""

from __future__ import annotations

from .types import CallError, ContractCall, EmittedEvent, Step, TraceNode

TOKEN_CONTRACT = "CDLZFC3SYJYDZT7K67VZ75HPJVIEUVNIXF47ZG2FB2RMQQVU2HHGCYSC"
DEX_CONTRACT = "CAS3J7GYLGXMF6TDJBBYYSE3HQ6BBSMLNUQ34T6TZMYMW2EVH34XOWMA"


def sample_trace() -> TraceNode:
    """Return a fresh swap-transaction trace with nested calls, events, and an error."""
    return TraceNode(
        node_id="tx",
        body=Step(kind="transaction"),
        children=[
            TraceNode(
                node_id="call-1",
                body=ContractCall(contract_id=DEX_CONTRACT, function="swap"),
                children=[
                    TraceNode(
                        node_id="call-1.1",
                        body=ContractCall(contract_id=TOKEN_CONTRACT, function="transfer"),
                        children=[
                            TraceNode(node_id="event-1", body=EmittedEvent(payload="Transfer: 100 XLM")),
                            TraceNode(node_id="event-2", body=EmittedEvent(payload="Approval: 0 XLM")),
                        ],
                    ),
                    TraceNode(
                        node_id="call-1.2",
                        body=ContractCall(contract_id=TOKEN_CONTRACT, function="balance"),
                        children=[
                            TraceNode(node_id="host-1", body=Step(kind="host_fn")),
                        ],
                    ),
                    TraceNode(node_id="event-3", body=EmittedEvent(payload="Swap: 100 XLM -> 42 USDC")),
                ],
            ),
            TraceNode(
                node_id="call-2",
                body=ContractCall(contract_id=TOKEN_CONTRACT, function="transfer_from"),
                children=[
                    TraceNode(node_id="event-4", body=EmittedEvent(payload="Transfer: 42 USDC")),
                    TraceNode(node_id="error-1", body=CallError(message="insufficient allowance")),
                ],
            ),
            TraceNode(node_id="event-5", body=EmittedEvent(payload="fee_charged: 100 stroops")),
        ],
    )
