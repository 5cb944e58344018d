"""Nearest-neighbor retrieval of indexed chunks."""

import logging
from pathlib import Path

from coderag.models import RetrievedChunk
from coderag.protocols import EmbeddingProvider
from coderag.storage import ChromaStore

logger = logging.getLogger(__name__)

DEFAULT_TOP_K = 5


class Retriever:
    """Finds the chunks of a project closest to a natural-language query."""

    def __init__(self, store: ChromaStore, embedder: EmbeddingProvider):
        self.store = store
        self.embedder = embedder

    def retrieve(
        self, query: str, project_path: Path | str, top_k: int = DEFAULT_TOP_K
    ) -> list[RetrievedChunk]:
        """Return up to ``top_k`` chunks, nearest first.

        A project that was never indexed gives an empty list.
        """
        if top_k < 1:
            raise ValueError(f"top_k must be >= 1, got {top_k}")

        collection = self.store.get(project_path)
        if collection is None:
            logger.debug("No collection for %s", project_path)
            return []

        results = collection.query(self.embedder.embed_one(query), top_k)

        ids = results["ids"]
        documents = results["documents"] or [None] * len(ids)
        metadatas = results["metadatas"] or [None] * len(ids)
        distances = results["distances"] or [None] * len(ids)

        return [
            RetrievedChunk(
                id=chunk_id,
                content=document,
                metadata=dict(metadata or {}),
                distance=float(distance) if distance is not None else None,
            )
            for chunk_id, document, metadata, distance in zip(ids, documents, metadatas, distances)
        ]
