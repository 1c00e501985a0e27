"""Shared pytest configuration, in-memory fakes, and fixtures."""

from __future__ import annotations

import datetime as dt
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import pytest
from langchain_core.messages import BaseMessage

from spendr_insights.embedding.base import EmbeddingProvider
from spendr_insights.exceptions import EmbeddingError, GenerationError, SourceReadError, VectorIndexError
from spendr_insights.generation.base import Generator
from spendr_insights.models import ExpenseRecord
from spendr_insights.retrieval.base import VectorIndexBase
from spendr_insights.sources.base import RecordSource


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: marks tests requiring external services")


# ── Fakes ──────────────────────────────────────────────────────────────


class FakeRecordSource(RecordSource):
    """Returns a fixed list of records, or raises ``SourceReadError``."""

    def __init__(self, records: list[ExpenseRecord] | None = None, *, broken: bool = False) -> None:
        self.records = list(records or [])
        self.broken = broken

    def list_all(self) -> list[ExpenseRecord]:
        if self.broken:
            raise SourceReadError("database unreachable")
        return list(self.records)

    def health_check(self) -> bool:
        return not self.broken


class FakeEmbedder(EmbeddingProvider):
    """Deterministic 3-d embeddings; raises for texts containing a marked substring."""

    def __init__(self, *, fail_on: Sequence[str] = (), dimension: int = 3) -> None:
        self.fail_on = list(fail_on)
        self.dimension = dimension
        self.calls: list[str] = []

    def embed(self, text: str) -> list[float]:
        self.calls.append(text)
        if any(marker in text for marker in self.fail_on):
            raise EmbeddingError(f"cannot embed {text!r}")
        base = [float(len(text)), float(sum(map(ord, text)) % 97), 1.0]
        return (base * self.dimension)[: self.dimension]


class InMemoryVectorIndex(VectorIndexBase):
    """Dict-backed index.

    When *hits* is given, :meth:`search` returns those canned metadata
    dicts instead of ranking the stored entries.
    """

    def __init__(
        self,
        hits: list[dict[str, Any]] | None = None,
        *,
        dimension: int | None = None,
        fail_upsert_ids: Sequence[str] = (),
        broken_search: bool = False,
    ) -> None:
        super().__init__("test-expenses", dimension=dimension)
        self.entries: dict[str, tuple[list[float], dict[str, Any]]] = {}
        self.hits = hits
        self.fail_upsert_ids = set(fail_upsert_ids)
        self.broken_search = broken_search
        self.search_calls: list[int] = []

    def upsert(self, record_id: str, vector: Sequence[float], metadata: dict[str, Any]) -> None:
        self.check_dimension(vector)
        if record_id in self.fail_upsert_ids:
            raise VectorIndexError(f"write rejected for {record_id}")
        self.entries[record_id] = (list(vector), dict(metadata))

    def search(self, vector: Sequence[float], k: int) -> list[dict[str, Any]]:
        self.search_calls.append(k)
        if self.broken_search:
            raise VectorIndexError("index unreachable")
        if self.hits is not None:
            return [dict(h) for h in self.hits[:k]]

        def distance(item: tuple[str, tuple[list[float], dict[str, Any]]]) -> float:
            stored = item[1][0]
            return sum((a - b) ** 2 for a, b in zip(stored, vector))

        ranked = sorted(self.entries.items(), key=distance)
        return [dict(meta) for _, (_, meta) in ranked[:k]]

    def peek(self, limit: int = 10) -> list[dict[str, Any]]:
        return [{"id": i, "metadata": dict(m)} for i, (_, m) in list(self.entries.items())[:limit]]

    def health_check(self) -> bool:
        return not self.broken_search


class ScriptedGenerator(Generator):
    """Replays scripted replies in order; an ``Exception`` entry is raised instead."""

    def __init__(self, replies: Sequence[str | Exception] = ()) -> None:
        self.replies = list(replies)
        self.calls: list[list[BaseMessage]] = []

    def generate(self, messages: Sequence[BaseMessage]) -> str:
        self.calls.append(list(messages))
        if not self.replies:
            raise AssertionError("generator called more often than scripted")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


# ── Sample data ────────────────────────────────────────────────────────

COFFEE_HITS: list[dict[str, Any]] = [
    {"text": "Expense: Coffee, Amount: $4.50, Date: 2024-01-05", "note": "Coffee", "amount": 4.50, "date": "2024-01-05"},
    {"text": "Expense: Coffee, Amount: $5.00, Date: 2024-02-03", "note": "Coffee", "amount": 5.00, "date": "2024-02-03"},
]


def make_records(n: int = 5) -> list[ExpenseRecord]:
    return [
        ExpenseRecord(
            id=i,
            note=f"Expense number {i}",
            amount=Decimal(f"{i}.25"),
            date=dt.date(2024, i, 10),
        )
        for i in range(1, n + 1)
    ]


# ── Fixtures ───────────────────────────────────────────────────────────


@pytest.fixture()
def records() -> list[ExpenseRecord]:
    return make_records(5)


@pytest.fixture()
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture()
def coffee_index() -> InMemoryVectorIndex:
    return InMemoryVectorIndex(hits=COFFEE_HITS)


@pytest.fixture()
def generator_factory():  # noqa: ANN201
    """Return the ``ScriptedGenerator`` class for per-test scripting."""
    return ScriptedGenerator


@pytest.fixture()
def index_factory():  # noqa: ANN201
    return InMemoryVectorIndex


@pytest.fixture()
def source_factory():  # noqa: ANN201
    return FakeRecordSource


@pytest.fixture()
def embedder_factory():  # noqa: ANN201
    return FakeEmbedder
