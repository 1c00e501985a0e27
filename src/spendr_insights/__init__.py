"""Spendr insights — retrieval-grounded spending insights over expense records."""

from spendr_insights.exceptions import (
    DimensionMismatchError,
    EmbeddingError,
    GenerationError,
    SourceReadError,
    SpendrError,
    VectorIndexError,
)
from spendr_insights.models import (
    ExpenseRecord,
    IngestionReport,
    InsightKind,
    InsightResult,
    RetrievedExpense,
    TrendSummary,
)

__version__ = "0.1.0"

__all__ = [
    "DimensionMismatchError",
    "EmbeddingError",
    "ExpenseRecord",
    "GenerationError",
    "IngestionReport",
    "InsightKind",
    "InsightResult",
    "RetrievedExpense",
    "SourceReadError",
    "SpendrError",
    "TrendSummary",
    "VectorIndexError",
]
