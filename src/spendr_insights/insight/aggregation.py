"""Hit parsing and trend aggregation.

Everything here is a pure function of its arguments so each step can be
tested without an index or a model.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from spendr_insights.models import RetrievedExpense, TrendSummary

logger = logging.getLogger(__name__)

# Date.toString() output written by older ingestion runs, e.g. "Fri Jan 05 2024 ...".
_LEGACY_DATE_FORMAT = "%a %b %d %Y"


def to_retrieved_expense(metadata: Mapping[str, Any]) -> RetrievedExpense | None:
    """Convert one hit's metadata, or return ``None`` if its amount is not numeric."""
    raw = metadata.get("amount")
    try:
        amount = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if math.isnan(amount):
        return None
    return RetrievedExpense(
        note=str(metadata.get("note") or ""),
        amount=amount,
        date=str(metadata.get("date") or ""),
    )


def parse_hits(hits: Iterable[Mapping[str, Any]]) -> list[RetrievedExpense]:
    """Convert raw search hits, silently dropping those with a corrupt amount."""
    expenses: list[RetrievedExpense] = []
    dropped = 0
    for meta in hits:
        expense = to_retrieved_expense(meta)
        if expense is None:
            dropped += 1
            continue
        expenses.append(expense)
    if dropped:
        logger.warning("Dropped %d hit(s) with a non-numeric amount", dropped)
    return expenses


def parse_date(value: str) -> dt.date | None:
    """Parse an ISO date (or ISO datetime) string; ``None`` when unrecognised."""
    value = value.strip()
    try:
        return dt.date.fromisoformat(value[:10])
    except ValueError:
        pass
    try:
        return dt.datetime.strptime(value[:15], _LEGACY_DATE_FORMAT).date()
    except ValueError:
        return None


def month_label(date: dt.date) -> str:
    """Human-readable ``"Month Year"`` label, e.g. ``"January 2024"``."""
    return date.strftime("%B %Y")


def summarize(expenses: Iterable[RetrievedExpense]) -> TrendSummary:
    """Compute the total, per-month totals, and the month-over-month trend.

    Months are ordered by calendar, and the trend compares the last two.
    Expenses whose date cannot be parsed still count towards the total
    but belong to no month.
    """
    total = 0.0
    by_month: dict[tuple[int, int], float] = {}
    for expense in expenses:
        total += expense.amount
        date = parse_date(expense.date)
        if date is None:
            continue
        key = (date.year, date.month)
        by_month[key] = by_month.get(key, 0.0) + expense.amount

    ordered = sorted(by_month)
    monthly_totals = {month_label(dt.date(year, month, 1)): by_month[(year, month)] for year, month in ordered}

    trend = ""
    if len(ordered) >= 2:
        previous, latest = ordered[-2], ordered[-1]
        diff = by_month[latest] - by_month[previous]
        direction = "higher" if diff >= 0 else "lower"
        trend = (
            f"Compared to {month_label(dt.date(*previous, 1))}, your spending in "
            f"{month_label(dt.date(*latest, 1))} is {direction} by ${abs(diff):.2f}."
        )

    return TrendSummary(total=total, monthly_totals=monthly_totals, trend=trend)
