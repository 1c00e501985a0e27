"""Online path: query text → grounded spending insight."""

from __future__ import annotations

import logging

from spendr_insights.config import settings
from spendr_insights.embedding.base import EmbeddingProvider
from spendr_insights.generation.base import Generator
from spendr_insights.insight.graph import build_insight_graph
from spendr_insights.insight.nodes import InsightNodes
from spendr_insights.insight.state import create_initial_state
from spendr_insights.models import InsightKind, InsightResult
from spendr_insights.retrieval.base import VectorIndexBase

logger = logging.getLogger(__name__)


class InsightPipeline:
    """Embeds a query, retrieves similar expenses, and asks the model for an insight.

    The graph is compiled once and reused; each :meth:`run` gets its own
    state, so concurrent runs do not interfere.

    Usage::

        pipeline = InsightPipeline(embedder, index, ChatGenerator())
        print(pipeline.run("How much am I spending on coffee?"))
    """

    def __init__(
        self,
        embedder: EmbeddingProvider,
        index: VectorIndexBase,
        generator: Generator,
        *,
        top_k: int = settings.insight_top_k,
        min_chars: int = settings.min_insight_chars,
    ) -> None:
        self.nodes = InsightNodes(embedder, index, generator, top_k=top_k, min_chars=min_chars)
        self._graph = build_insight_graph(self.nodes)

    def run_detailed(self, query: str) -> InsightResult:
        """Run the workflow and return the tagged result.

        No-data and degenerate-output outcomes are returned, not raised.

        Raises
        ------
        EmbeddingError
            The query could not be embedded.
        VectorIndexError
            The index search failed.
        GenerationError
            Both the primary and the retry generation calls failed.
        """
        final = self._graph.invoke(create_initial_state(query))
        result = InsightResult(kind=final["kind"] or InsightKind.GENERATION_FAILED, text=final["insight"])
        logger.info("Insight run finished: kind=%s attempts=%d", result.kind.value, final.get("attempts", 0))
        return result

    def run(self, query: str) -> str:
        """Return the insight text, or the sentinel string for a no-op outcome."""
        return self.run_detailed(query).text
