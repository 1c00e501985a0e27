"""Insight workflow state — shared across all graph nodes.

The state is the single source of truth flowing through every node of
the insight graph.  It is created fresh for each query and discarded
once the run finishes.
"""

from __future__ import annotations

from typing import TypedDict

from spendr_insights.models import InsightKind, RetrievedExpense, TrendSummary


class InsightState(TypedDict):
    """Typed state that flows through the insight graph.

    Attributes
    ----------
    query:
        The user's natural-language question.
    query_embedding:
        Vector for ``query`` (populated by ``embed_query``).
    hit_count:
        Number of raw hits the index returned, before amount filtering.
    expenses:
        Hits that survived amount coercion.
    summary:
        Totals and trend computed by ``aggregate``.
    context:
        Fixed-format context block embedded in both prompts.
    insight:
        Cleaned model output; replaced by a sentinel when nothing usable
        was produced.
    attempts:
        Number of generation calls made (at most 2).
    primary_failed:
        ``True`` when the first generation call raised.
    kind:
        Outcome tag set by ``no_data`` or ``finalize``.
    """

    query: str
    query_embedding: list[float]
    hit_count: int
    expenses: list[RetrievedExpense]
    summary: TrendSummary | None
    context: str
    insight: str
    attempts: int
    primary_failed: bool
    kind: InsightKind | None


def create_initial_state(query: str) -> InsightState:
    """Build the initial state dict for ``graph.invoke()``."""
    return {
        "query": query,
        "query_embedding": [],
        "hit_count": 0,
        "expenses": [],
        "summary": None,
        "context": "",
        "insight": "",
        "attempts": 0,
        "primary_failed": False,
        "kind": None,
    }
