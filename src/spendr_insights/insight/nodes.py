"""Graph nodes — each method is one step in the insight workflow.

Node contract
-------------
* Accepts the full :class:`InsightState` dict.
* Returns a *partial* dict with **only the keys that changed**.
* Depends only on its input and the adapters injected into
  :class:`InsightNodes`; no hidden global state, so every node is
  independently testable.
"""

from __future__ import annotations

import logging
from typing import Any

from spendr_insights.embedding.base import EmbeddingProvider
from spendr_insights.exceptions import GenerationError
from spendr_insights.generation.base import Generator
from spendr_insights.insight.aggregation import parse_hits, summarize
from spendr_insights.insight.prompts import (
    NO_DATA_MESSAGE,
    NO_INSIGHT_MESSAGE,
    build_insight_prompt,
    build_retry_prompt,
    clean_generated_text,
    format_context,
)
from spendr_insights.insight.state import InsightState
from spendr_insights.models import InsightKind
from spendr_insights.retrieval.base import VectorIndexBase

logger = logging.getLogger(__name__)


class InsightNodes:
    """Node functions bound to the adapters they call.

    Parameters
    ----------
    embedder:
        Embeds the query text.
    index:
        Vector index searched for similar expenses.
    generator:
        Chat model producing the insight text.
    top_k:
        Number of nearest expenses to retrieve.
    min_chars:
        Cleaned output shorter than this is treated as degenerate.
    """

    def __init__(
        self,
        embedder: EmbeddingProvider,
        index: VectorIndexBase,
        generator: Generator,
        *,
        top_k: int = 3,
        min_chars: int = 10,
    ) -> None:
        self._embedder = embedder
        self._index = index
        self._generator = generator
        self.top_k = top_k
        self.min_chars = min_chars

    # ── 1. EMBED QUERY ────────────────────────────────────────────────

    def embed_query(self, state: InsightState) -> dict[str, Any]:
        """Embed the query.  Failures propagate: nothing can be retrieved without it."""
        return {"query_embedding": self._embedder.embed(state["query"])}

    # ── 2. RETRIEVE ───────────────────────────────────────────────────

    def retrieve(self, state: InsightState) -> dict[str, Any]:
        """Fetch the top-k hits and keep those with a numeric amount."""
        hits = self._index.search(state["query_embedding"], self.top_k)
        expenses = parse_hits(hits)
        logger.info("Retrieved %d hit(s), %d usable, for %r", len(hits), len(expenses), state["query"])
        return {"hit_count": len(hits), "expenses": expenses}

    def route_after_retrieve(self, state: InsightState) -> str:
        """Conditional edge: stop early when no usable expense was found."""
        if not state.get("expenses"):
            return "no_data"
        return "aggregate"

    def no_data(self, state: InsightState) -> dict[str, Any]:
        return {"insight": NO_DATA_MESSAGE, "kind": InsightKind.NO_DATA}

    # ── 3. AGGREGATE ──────────────────────────────────────────────────

    def aggregate(self, state: InsightState) -> dict[str, Any]:
        return {"summary": summarize(state["expenses"])}

    # ── 4. COMPOSE CONTEXT ────────────────────────────────────────────

    def compose_context(self, state: InsightState) -> dict[str, Any]:
        return {"context": format_context(state["expenses"], state["summary"])}

    # ── 5. GENERATE ───────────────────────────────────────────────────

    def generate(self, state: InsightState) -> dict[str, Any]:
        """Primary generation call.

        A fault here is recorded and handled like an empty answer, which
        routes to the single retry.
        """
        try:
            raw = self._generator.generate(build_insight_prompt(state["context"]))
        except GenerationError:
            logger.warning("Primary generation call failed", exc_info=True)
            return {"insight": "", "attempts": 1, "primary_failed": True}
        return {"insight": clean_generated_text(raw), "attempts": 1, "primary_failed": False}

    def should_retry(self, state: InsightState) -> str:
        """Conditional edge after ``generate``.

        Returns
        -------
        str
            ``"retry"`` when the cleaned output is empty or shorter than
            ``min_chars``, ``"finalize"`` otherwise.
        """
        if len(state.get("insight", "")) < self.min_chars:
            logger.warning("Degenerate model output (%d chars), retrying once", len(state.get("insight", "")))
            return "retry"
        return "finalize"

    # ── 6. RETRY ──────────────────────────────────────────────────────

    def retry(self, state: InsightState) -> dict[str, Any]:
        """Second and last generation call, with the shorter prompt.

        The retry's text wins when non-empty; otherwise the first answer
        is kept.  If both calls raised, the error propagates.
        """
        try:
            raw = self._generator.generate(build_retry_prompt(state["context"]))
        except GenerationError:
            if state.get("primary_failed"):
                raise
            logger.warning("Retry generation call failed; keeping first answer", exc_info=True)
            return {"attempts": state.get("attempts", 1) + 1}
        cleaned = clean_generated_text(raw)
        return {
            "insight": cleaned or state.get("insight", ""),
            "attempts": state.get("attempts", 1) + 1,
        }

    # ── 7. FINALIZE ───────────────────────────────────────────────────

    def finalize(self, state: InsightState) -> dict[str, Any]:
        if not state.get("insight"):
            return {"insight": NO_INSIGHT_MESSAGE, "kind": InsightKind.GENERATION_FAILED}
        return {"kind": InsightKind.OK}
