"""
Retrieval — vector index storage and similarity search.

This module wraps the vector store behind a clean interface so that the
pipelines never need to know which DB is backing retrieval.

Public surface
--------------
- :class:`VectorIndexBase` — abstract backend (subclass for Qdrant, pgvector, etc.).
- :class:`ChromaVectorIndex` — default Chroma backend.
"""

from spendr_insights.retrieval.base import VectorIndexBase

__all__ = [
    "ChromaVectorIndex",
    "VectorIndexBase",
]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import ChromaVectorIndex to avoid pulling in chromadb at import time."""
    if name == "ChromaVectorIndex":
        from spendr_insights.retrieval.chroma_store import ChromaVectorIndex

        return ChromaVectorIndex
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
