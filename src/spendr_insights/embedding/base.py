"""Abstract base class for embedding providers."""

from __future__ import annotations

from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """Converts text into a dense vector of fixed dimensionality."""

    @abstractmethod
    def embed(self, text: str) -> list[float]:
        """Return the embedding for *text*.

        Raises
        ------
        EmbeddingError
            When the underlying model or service fails.
        """
        ...
