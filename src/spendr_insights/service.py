"""Service facade — the boundary the HTTP layer talks to.

Adapters are constructed exactly once, in :func:`build_service`, and
injected into both pipelines.
"""

from __future__ import annotations

import logging
from typing import Any

from spendr_insights.config import Settings, settings as default_settings
from spendr_insights.ingestion.pipeline import IngestionPipeline
from spendr_insights.insight.pipeline import InsightPipeline
from spendr_insights.models import IngestionReport, InsightResult
from spendr_insights.retrieval.base import VectorIndexBase
from spendr_insights.sources.base import RecordSource

logger = logging.getLogger(__name__)


class InsightService:
    """Groups the ingestion and insight pipelines over a shared index and record source."""

    def __init__(
        self,
        ingestion: IngestionPipeline,
        insight: InsightPipeline,
        index: VectorIndexBase,
        source: RecordSource,
        *,
        default_peek_limit: int = 10,
    ) -> None:
        self._ingestion = ingestion
        self._insight = insight
        self._index = index
        self._source = source
        self.default_peek_limit = default_peek_limit

    def ingest(self) -> IngestionReport:
        return self._ingestion.run()

    def get_insight(self, query: str) -> str:
        return self._insight.run(query)

    def get_insight_detailed(self, query: str) -> InsightResult:
        return self._insight.run_detailed(query)

    def debug_peek(self, limit: int | None = None) -> list[dict[str, Any]]:
        """Read-only sample of what is currently stored in the index."""
        return self._index.peek(limit or self.default_peek_limit)

    def health(self) -> dict[str, Any]:
        """Reachability of the vector index and the expense store."""
        checks = {
            "vector_index": self._index.health_check(),
            "expense_store": self._source.health_check(),
        }
        return {"status": "ok" if all(checks.values()) else "degraded", **checks}


def build_service(config: Settings | None = None) -> InsightService:
    """Construct every adapter from *config* and wire the pipelines."""
    from spendr_insights.embedding.huggingface import HuggingFaceEmbeddingProvider
    from spendr_insights.generation.base import ChatGenerator
    from spendr_insights.generation.llm import get_llm
    from spendr_insights.retrieval.chroma_store import ChromaVectorIndex
    from spendr_insights.sources.sql import SqlRecordSource

    config = config or default_settings
    embedder = HuggingFaceEmbeddingProvider(config.embedding_model)
    index = ChromaVectorIndex(
        config.chroma_collection,
        host=config.chroma_host,
        port=config.chroma_port,
        dimension=config.embedding_dimension,
    )
    source = SqlRecordSource(config.database_url, table=config.expenses_table)
    generator = ChatGenerator(get_llm(config))

    logger.info("Insight service ready (collection=%s, model=%s)", config.chroma_collection, config.llm_model_name)
    return InsightService(
        IngestionPipeline(source, embedder, index),
        InsightPipeline(
            embedder,
            index,
            generator,
            top_k=config.insight_top_k,
            min_chars=config.min_insight_chars,
        ),
        index,
        source,
        default_peek_limit=config.debug_peek_limit,
    )
