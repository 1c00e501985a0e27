"""Domain models for expense records, retrieval hits, and pipeline results."""

from __future__ import annotations

import datetime as dt
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class ExpenseRecord(BaseModel):
    """A single expense row as read from the expense store.

    Attributes
    ----------
    id:
        Opaque, stable identifier (string or integer) unique per record.
    note:
        Free-text description entered by the user.
    amount:
        Monetary amount. ``None`` when the stored value is NULL; such a
        record cannot be indexed and is skipped during ingestion.
    date:
        Calendar date of the expense.
    """

    model_config = ConfigDict(frozen=True)

    id: str | int
    note: str = ""
    amount: Decimal | None = None
    date: dt.date | None = None


class RetrievedExpense(BaseModel):
    """A search hit converted into the pipeline's working representation."""

    model_config = ConfigDict(frozen=True)

    note: str
    amount: float
    date: str


class TrendSummary(BaseModel):
    """Quantitative summary of the retrieved expenses.

    Attributes
    ----------
    total:
        Plain arithmetic sum of every retrieved amount.
    monthly_totals:
        ``"Month Year"`` label → summed spend, in calendar order.
    trend:
        Sentence comparing the two most recent months, or ``""`` when
        fewer than two distinct months are present.
    """

    model_config = ConfigDict(frozen=True)

    total: float = 0.0
    monthly_totals: dict[str, float] = Field(default_factory=dict)
    trend: str = ""


class IngestionReport(BaseModel):
    """Outcome of one ingestion run."""

    embedded: int = 0
    failed: int = 0
    failed_ids: list[str] = Field(default_factory=list)


class InsightKind(str, Enum):
    """Tag distinguishing a generated insight from the no-op outcomes."""

    OK = "ok"
    NO_DATA = "no_data"
    GENERATION_FAILED = "generation_failed"


class InsightResult(BaseModel):
    """Tagged result of an insight run.

    ``text`` is always non-empty: either the cleaned model output or the
    sentinel string matching ``kind``.
    """

    kind: InsightKind
    text: str

    @property
    def ok(self) -> bool:
        return self.kind is InsightKind.OK
