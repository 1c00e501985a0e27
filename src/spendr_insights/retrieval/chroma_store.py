"""Chroma implementation of the vector-index abstraction."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import chromadb

from spendr_insights.config import settings
from spendr_insights.exceptions import VectorIndexError
from spendr_insights.retrieval.base import VectorIndexBase

logger = logging.getLogger(__name__)


class ChromaVectorIndex(VectorIndexBase):
    """Chroma-backed vector index.

    The collection is created on first use; connecting to an existing
    collection is not an error, so construction can be retried freely.

    Parameters
    ----------
    collection_name:
        Name of the Chroma collection.
    host:
        Chroma server hostname.
    port:
        Chroma server port.
    dimension:
        Expected embedding length (``0`` to learn it from the first vector).
    client:
        Pre-built Chroma client; when given, *host* and *port* are ignored.
    """

    def __init__(
        self,
        collection_name: str = settings.chroma_collection,
        *,
        host: str = settings.chroma_host,
        port: int = settings.chroma_port,
        dimension: int | None = settings.embedding_dimension,
        client: Any = None,
    ) -> None:
        super().__init__(collection_name, dimension=dimension)
        self._host = host
        self._port = port
        self._client = client if client is not None else chromadb.HttpClient(host=host, port=port)
        try:
            self._collection = self._client.get_or_create_collection(collection_name)
        except Exception as exc:
            raise VectorIndexError(f"Could not open Chroma collection {collection_name!r}: {exc}") from exc
        logger.info("Chroma collection %r ready", collection_name)

    # -- VectorIndexBase overrides --------------------------------------------

    def upsert(self, record_id: str, vector: Sequence[float], metadata: dict[str, Any]) -> None:
        self.check_dimension(vector)
        try:
            self._collection.upsert(
                ids=[record_id],
                embeddings=[list(vector)],
                metadatas=[metadata],
                documents=[str(metadata.get("text", ""))],
            )
        except Exception as exc:
            raise VectorIndexError(f"Chroma upsert failed for id={record_id}: {exc}") from exc

    def search(self, vector: Sequence[float], k: int) -> list[dict[str, Any]]:
        self.check_dimension(vector)
        try:
            results = self._collection.query(
                query_embeddings=[list(vector)],
                n_results=k,
                include=["metadatas", "distances"],
            )
        except Exception as exc:
            raise VectorIndexError(f"Chroma query failed: {exc}") from exc

        metas = (results.get("metadatas") or [[]])[0] or []
        return [dict(meta or {}) for meta in metas[:k]]

    def peek(self, limit: int = 10) -> list[dict[str, Any]]:
        try:
            results = self._collection.get(limit=limit, include=["metadatas"])
        except Exception as exc:
            raise VectorIndexError(f"Chroma get failed: {exc}") from exc

        ids = results.get("ids") or []
        metas = results.get("metadatas") or [None] * len(ids)
        return [{"id": doc_id, "metadata": dict(meta or {})} for doc_id, meta in zip(ids, metas)]

    def health_check(self) -> bool:
        try:
            self._client.heartbeat()
            return True
        except Exception:
            logger.warning("Chroma health-check failed", exc_info=True)
            return False
