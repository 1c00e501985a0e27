"""Unit tests for the service facade wired with in-memory fakes."""

from __future__ import annotations

from collections.abc import Iterator
from unittest.mock import MagicMock, patch

import pytest

from spendr_insights.config import Settings
from spendr_insights.ingestion.pipeline import IngestionPipeline
from spendr_insights.insight.pipeline import InsightPipeline
from spendr_insights.insight.prompts import NO_DATA_MESSAGE
from spendr_insights.models import InsightKind
from spendr_insights.service import InsightService, build_service


@pytest.fixture()
def service(records, source_factory, embedder, index_factory, generator_factory) -> InsightService:  # noqa: ANN001
    index = index_factory()
    source = source_factory(records)
    generator = generator_factory(["You spend most in May; consider a monthly budget."])
    return InsightService(
        IngestionPipeline(source, embedder, index),
        InsightPipeline(embedder, index, generator, top_k=3, min_chars=10),
        index,
        source,
        default_peek_limit=2,
    )


class TestInsightService:
    def test_insight_before_ingest_has_no_data(self, service: InsightService) -> None:
        assert service.get_insight("where does my money go?") == NO_DATA_MESSAGE

    def test_ingest_then_insight(self, service: InsightService) -> None:
        report = service.ingest()
        assert (report.embedded, report.failed) == (5, 0)
        result = service.get_insight_detailed("where does my money go?")
        assert result.kind is InsightKind.OK
        assert result.text.startswith("You spend most in May")

    def test_debug_peek_uses_default_limit(self, service: InsightService) -> None:
        service.ingest()
        assert len(service.debug_peek()) == 2
        assert len(service.debug_peek(4)) == 4

    def test_debug_peek_is_read_only(self, service: InsightService) -> None:
        service.ingest()
        before = service.debug_peek(10)
        service.debug_peek(10)
        assert service.debug_peek(10) == before

    def test_health_reports_each_backend(self, service: InsightService) -> None:
        assert service.health() == {"status": "ok", "vector_index": True, "expense_store": True}

    def test_health_degraded_when_store_down(
        self, records, source_factory, embedder, index_factory, generator_factory  # noqa: ANN001
    ) -> None:
        index = index_factory()
        source = source_factory(records, broken=True)
        service = InsightService(
            IngestionPipeline(source, embedder, index),
            InsightPipeline(embedder, index, generator_factory()),
            index,
            source,
        )
        assert service.health() == {"status": "degraded", "vector_index": True, "expense_store": False}


# ── build_service wiring ───────────────────────────────────────────────


@pytest.fixture()
def custom_settings() -> Settings:
    return Settings(
        openai_api_key="sk-custom",
        llm_model_name="custom/model",
        llm_base_url="http://custom:9000/v1",
        llm_max_tokens=256,
        llm_temperature=0.1,
        chroma_host="chroma.internal",
        chroma_port=9001,
        chroma_collection="spending",
        embedding_model="custom-embedder",
        embedding_dimension=768,
        database_url="sqlite://",
        expenses_table="ledger",
        insight_top_k=5,
        min_insight_chars=20,
        debug_peek_limit=7,
    )


@pytest.fixture()
def adapters() -> Iterator[dict[str, MagicMock]]:
    pytest.importorskip("chromadb")
    pytest.importorskip("langchain_huggingface")
    with (
        patch("spendr_insights.embedding.huggingface.HuggingFaceEmbeddingProvider") as embedder_cls,
        patch("spendr_insights.retrieval.chroma_store.ChromaVectorIndex") as index_cls,
        patch("spendr_insights.sources.sql.SqlRecordSource") as source_cls,
        patch("spendr_insights.generation.llm.ChatOpenAI") as chat_cls,
    ):
        yield {"embedder": embedder_cls, "index": index_cls, "source": source_cls, "chat": chat_cls}


class TestBuildService:
    def test_chat_model_comes_from_given_settings(
        self, custom_settings: Settings, adapters: dict[str, MagicMock]
    ) -> None:
        service = build_service(custom_settings)
        kwargs = adapters["chat"].call_args.kwargs
        assert kwargs["model"] == "custom/model"
        assert kwargs["base_url"] == "http://custom:9000/v1"
        assert kwargs["api_key"] == "sk-custom"
        assert kwargs["max_tokens"] == 256
        assert kwargs["temperature"] == 0.1
        assert service._insight.nodes._generator._llm is adapters["chat"].return_value

    def test_adapters_come_from_given_settings(
        self, custom_settings: Settings, adapters: dict[str, MagicMock]
    ) -> None:
        service = build_service(custom_settings)
        adapters["embedder"].assert_called_once_with("custom-embedder")
        adapters["index"].assert_called_once_with(
            "spending", host="chroma.internal", port=9001, dimension=768
        )
        adapters["source"].assert_called_once_with("sqlite://", table="ledger")
        assert service._insight.nodes.top_k == 5
        assert service._insight.nodes.min_chars == 20
        assert service.default_peek_limit == 7

    def test_health_uses_built_adapters(self, custom_settings: Settings, adapters: dict[str, MagicMock]) -> None:
        adapters["index"].return_value.health_check.return_value = True
        adapters["source"].return_value.health_check.return_value = False
        assert build_service(custom_settings).health()["status"] == "degraded"
