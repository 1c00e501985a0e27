"""LangGraph graph definition — the insight workflow.

This module wires the node methods of
:class:`~spendr_insights.insight.nodes.InsightNodes` into a compiled
:class:`StateGraph`:

1. **Embed** the query.
2. **Retrieve** the top-k similar expenses; stop with the no-data
   sentinel when none has a usable amount.
3. **Aggregate** totals and the month-over-month trend.
4. **Compose** the context block.
5. **Generate** the insight.
6. **Retry** once with a shorter prompt when the output is degenerate.
7. **Finalize** into an insight or the no-insight sentinel.
"""

from __future__ import annotations

from typing import Any

from langgraph.graph import END, StateGraph

from spendr_insights.insight.nodes import InsightNodes
from spendr_insights.insight.state import InsightState


def build_insight_graph(nodes: InsightNodes) -> Any:
    """Construct and return the compiled insight graph.

    Graph topology::

        embed_query → retrieve ─┬─ no usable hits ──► no_data ──► END
                                └─► aggregate → compose_context → generate
                                                                     │
                                         degenerate ◄────────────────┤
                                             ▼                       │ ok
                                           retry ──► finalize ◄──────┘
                                                        │
                                                        ▼
                                                       END

    Returns
    -------
    CompiledGraph
        A compiled LangGraph workflow ready for ``.invoke()``.
    """
    workflow = StateGraph(InsightState)

    # -- Nodes ---------------------------------------------------------------
    workflow.add_node("embed_query", nodes.embed_query)
    workflow.add_node("retrieve", nodes.retrieve)
    workflow.add_node("no_data", nodes.no_data)
    workflow.add_node("aggregate", nodes.aggregate)
    workflow.add_node("compose_context", nodes.compose_context)
    workflow.add_node("generate", nodes.generate)
    workflow.add_node("retry", nodes.retry)
    workflow.add_node("finalize", nodes.finalize)

    # -- Edges ---------------------------------------------------------------
    workflow.set_entry_point("embed_query")
    workflow.add_edge("embed_query", "retrieve")
    workflow.add_conditional_edges(
        "retrieve",
        nodes.route_after_retrieve,
        {
            "no_data": "no_data",
            "aggregate": "aggregate",
        },
    )
    workflow.add_edge("no_data", END)
    workflow.add_edge("aggregate", "compose_context")
    workflow.add_edge("compose_context", "generate")
    workflow.add_conditional_edges(
        "generate",
        nodes.should_retry,
        {
            "retry": "retry",
            "finalize": "finalize",
        },
    )
    workflow.add_edge("retry", "finalize")
    workflow.add_edge("finalize", END)

    return workflow.compile()
