"""Error taxonomy shared by adapters and pipelines.

Adapters translate backend-specific failures (SQLAlchemy, Chroma,
sentence-transformers, the chat API client) into these types so the
pipelines never depend on a backend's exception hierarchy.
"""

from __future__ import annotations


class SpendrError(Exception):
    """Base class for every error raised by this package."""


class SourceReadError(SpendrError):
    """The expense store could not be read."""


class EmbeddingError(SpendrError):
    """The embedding provider failed to produce a vector."""


class VectorIndexError(SpendrError):
    """The vector index rejected a write or failed a search."""


class GenerationError(SpendrError):
    """The text-generation service failed."""


class DimensionMismatchError(SpendrError):
    """A vector's length differs from the dimensionality of the index.

    This is a configuration problem (wrong embedding model for the
    collection) and is never recovered from.
    """

    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(f"Embedding dimension mismatch: index expects {expected}, got {actual}")
        self.expected = expected
        self.actual = actual
