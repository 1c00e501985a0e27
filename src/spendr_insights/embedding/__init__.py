"""
Embedding — text → fixed-length vector conversion.

Public surface
--------------
- :class:`EmbeddingProvider` — abstract provider used by both pipelines.
- :class:`HuggingFaceEmbeddingProvider` — local sentence-transformer model.
"""

from spendr_insights.embedding.base import EmbeddingProvider

__all__ = ["EmbeddingProvider", "HuggingFaceEmbeddingProvider"]


def __getattr__(name: str):  # noqa: ANN001
    """Lazy-import the HuggingFace provider to avoid loading torch at import time."""
    if name == "HuggingFaceEmbeddingProvider":
        from spendr_insights.embedding.huggingface import HuggingFaceEmbeddingProvider

        return HuggingFaceEmbeddingProvider
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
