"""Sentence-transformer embeddings via ``langchain_huggingface``."""

from __future__ import annotations

import logging

from langchain_huggingface import HuggingFaceEmbeddings

from spendr_insights.config import settings
from spendr_insights.embedding.base import EmbeddingProvider
from spendr_insights.exceptions import EmbeddingError

logger = logging.getLogger(__name__)


class HuggingFaceEmbeddingProvider(EmbeddingProvider):
    """Local embedding model, loaded once at construction.

    Embeddings are mean-pooled (the sentence-transformers default for
    MiniLM models) and L2-normalised.

    Parameters
    ----------
    model_name:
        HuggingFace model id.
    embeddings:
        Pre-built LangChain embeddings object; mainly for tests.
    """

    def __init__(
        self,
        model_name: str = settings.embedding_model,
        *,
        embeddings: HuggingFaceEmbeddings | None = None,
    ) -> None:
        self.model_name = model_name
        if embeddings is None:
            embeddings = HuggingFaceEmbeddings(
                model_name=model_name,
                encode_kwargs={"normalize_embeddings": True},
            )
            logger.info("Loaded embedding model %s", model_name)
        self._embeddings = embeddings

    def embed(self, text: str) -> list[float]:
        try:
            vector = self._embeddings.embed_query(text)
        except Exception as exc:
            raise EmbeddingError(f"Embedding failed with {self.model_name}: {exc}") from exc
        return [float(x) for x in vector]
