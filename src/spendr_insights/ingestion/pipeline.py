"""Batch ingestion of expense records into the vector index."""

from __future__ import annotations

import logging
import math
from typing import Any

from spendr_insights.embedding.base import EmbeddingProvider
from spendr_insights.exceptions import DimensionMismatchError
from spendr_insights.models import ExpenseRecord, IngestionReport
from spendr_insights.retrieval.base import VectorIndexBase
from spendr_insights.sources.base import RecordSource

logger = logging.getLogger(__name__)


def render_display_text(record: ExpenseRecord) -> str:
    """Canonical text used both as the embedding input and the stored document."""
    date = record.date.isoformat() if record.date is not None else "unknown"
    return f"Expense: {record.note}, Amount: ${record.amount}, Date: {date}"


def build_metadata(record: ExpenseRecord) -> dict[str, Any]:
    """Metadata stored alongside the vector so search hits need no join.

    Raises
    ------
    ValueError
        When the amount is missing or not a finite number; the record
        must then be skipped rather than stored without an amount.
    """
    if record.amount is None:
        raise ValueError(f"expense {record.id} has no amount")
    amount = float(record.amount)
    if not math.isfinite(amount):
        raise ValueError(f"expense {record.id} has non-finite amount {record.amount}")
    return {
        "text": render_display_text(record),
        "note": record.note,
        "amount": amount,
        "date": record.date.isoformat() if record.date is not None else "",
    }


class IngestionPipeline:
    """Reads every expense, embeds it, and upserts it into the index.

    Parameters
    ----------
    source:
        Where expense records come from.
    embedder:
        Provider used to embed each record's display text.
    index:
        Destination vector index.
    """

    def __init__(
        self,
        source: RecordSource,
        embedder: EmbeddingProvider,
        index: VectorIndexBase,
    ) -> None:
        self._source = source
        self._embedder = embedder
        self._index = index

    def run(self) -> IngestionReport:
        """Ingest all records, one at a time.

        A failure on one record is logged with its id and counted; the
        loop then moves on.  :class:`SourceReadError` (nothing to ingest)
        and :class:`DimensionMismatchError` (misconfigured model) abort
        the run.
        """
        records = self._source.list_all()
        logger.info("Found %d expense(s) to embed", len(records))

        report = IngestionReport()
        for record in records:
            record_id = str(record.id)
            try:
                metadata = build_metadata(record)
                vector = self._embedder.embed(metadata["text"])
                self._index.upsert(record_id, vector, metadata)
            except DimensionMismatchError:
                raise
            except Exception:
                logger.exception("Failed to embed expense id=%s", record_id)
                report.failed += 1
                report.failed_ids.append(record_id)
                continue
            report.embedded += 1

        logger.info(
            "Ingestion finished: %d embedded, %d failed",
            report.embedded,
            report.failed,
        )
        return report
