"""
Sources — read access to the persistent store of expense records.

Public surface
--------------
- :class:`RecordSource` — abstract source of :class:`ExpenseRecord` objects.
- :class:`SqlRecordSource` — SQLAlchemy-backed source (PostgreSQL in production).
"""

from spendr_insights.sources.base import RecordSource
from spendr_insights.sources.sql import SqlRecordSource

__all__ = ["RecordSource", "SqlRecordSource"]
