"""Abstract base class for vector-index backends.

Adding a new backend only requires subclassing :class:`VectorIndexBase`
and implementing the abstract methods.  The pipelines are
backend-agnostic.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from spendr_insights.exceptions import DimensionMismatchError


class VectorIndexBase(ABC):
    """Backend-agnostic vector-index interface.

    Parameters
    ----------
    collection_name:
        Logical name of the collection / index / namespace.
    dimension:
        Vector length the index was built with.  ``None`` (or ``0``)
        means "learn it from the first vector seen".
    """

    def __init__(self, collection_name: str, *, dimension: int | None = None) -> None:
        self.collection_name = collection_name
        self.dimension = dimension or None

    # -- required overrides ---------------------------------------------------

    @abstractmethod
    def upsert(self, record_id: str, vector: Sequence[float], metadata: dict[str, Any]) -> None:
        """Insert or overwrite the entry keyed by *record_id*.

        The full *metadata* set is written or nothing is.

        Raises
        ------
        VectorIndexError
            When the backend rejects the write.
        """
        ...

    @abstractmethod
    def search(self, vector: Sequence[float], k: int) -> list[dict[str, Any]]:
        """Return the metadata of the top-*k* nearest entries, best first.

        The result has at most *k* elements.
        """
        ...

    @abstractmethod
    def peek(self, limit: int = 10) -> list[dict[str, Any]]:
        """Return up to *limit* stored entries as ``{"id", "metadata"}`` dicts."""
        ...

    @abstractmethod
    def health_check(self) -> bool:
        """Return ``True`` when the backend is reachable and ready."""
        ...

    # -- helpers --------------------------------------------------------------

    def check_dimension(self, vector: Sequence[float]) -> None:
        """Raise :class:`DimensionMismatchError` unless *vector* fits this index."""
        if self.dimension is None:
            self.dimension = len(vector)
        elif len(vector) != self.dimension:
            raise DimensionMismatchError(self.dimension, len(vector))
