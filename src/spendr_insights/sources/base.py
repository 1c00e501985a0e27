"""Abstract base class for expense record sources."""

from __future__ import annotations

from abc import ABC, abstractmethod

from spendr_insights.models import ExpenseRecord


class RecordSource(ABC):
    """Read-only view over the store that owns expense records."""

    @abstractmethod
    def list_all(self) -> list[ExpenseRecord]:
        """Return every expense record.  Order is not significant.

        Raises
        ------
        SourceReadError
            When the backing store is unreachable or the query fails.
        """
        ...

    def health_check(self) -> bool:
        """Return ``True`` when the backing store is reachable."""
        return True
