"""
org_provisioner.orchestrator.graph

LangGraph wiring for the provisioning pipeline.

Responsibilities:
- Compile PIPELINE into a strictly linear graph (START -> tenant -> domain -> admin -> END).
- Bind per-request collaborators (store, cache, caller permissions) into each node.
"""

from __future__ import annotations

from org_provisioner.orchestrator.nodes import PIPELINE, StepContext, bind_step
from org_provisioner.orchestrator.state import ProvisionState


def build_graph(*, ctx: StepContext):
    """
    Returns a compiled LangGraph runnable executing PIPELINE strictly in order.
    """

    try:
        from langgraph.graph import END, START, StateGraph  # type: ignore[import-not-found]
    except Exception as e:  # pragma: no cover
        raise RuntimeError(
            "LangGraph is not available. Install the project dependencies."
        ) from e

    graph = StateGraph(ProvisionState)

    previous = START
    for step in PIPELINE:
        graph.add_node(step.name, bind_step(step, ctx))
        graph.add_edge(previous, step.name)
        previous = step.name
    graph.add_edge(previous, END)

    return graph.compile()


# --- Module Notes -----------------------------------------------------------
# No checkpointer is attached: a failed run is not resumed, and the caller sees
# the error raised by the failing node.
