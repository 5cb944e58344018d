"""Local code-chunk embeddings with sentence-transformers."""

import logging
import threading

import numpy as np
from sentence_transformers import SentenceTransformer

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedder:
    """Turns code chunks and questions into unit-length vectors.

    Chunks and queries must go through the same instance (or the same
    model name) so that they land in one vector space. The model is
    loaded on first use and shared by the indexer's worker threads.
    """

    DEFAULT_MODEL = "all-MiniLM-L6-v2"
    BATCH_SIZE = 32

    def __init__(self, model_name: str | None = None, batch_size: int = BATCH_SIZE):
        """
        Args:
            model_name: sentence-transformers model id. Defaults to all-MiniLM-L6-v2.
            batch_size: Texts encoded per forward pass.
        """
        self._model_name = model_name or self.DEFAULT_MODEL
        self._batch_size = batch_size
        self._model: SentenceTransformer | None = None
        self._load_lock = threading.Lock()

    @property
    def model(self) -> SentenceTransformer:
        if self._model is None:
            with self._load_lock:
                if self._model is None:
                    logger.debug("Loading embedding model %s", self._model_name)
                    self._model = SentenceTransformer(self._model_name)
        return self._model

    @property
    def dimension(self) -> int:
        return self.model.get_sentence_embedding_dimension()

    @property
    def model_name(self) -> str:
        return self._model_name

    def embed(self, texts: list[str]) -> np.ndarray:
        """Embed a batch; returns shape (len(texts), dimension)."""
        if not texts:
            return np.array([])

        return self.model.encode(
            texts,
            batch_size=self._batch_size,
            convert_to_numpy=True,
            normalize_embeddings=True,  # distances compare like cosine
            show_progress_bar=False,
        )

    def embed_one(self, text: str) -> np.ndarray:
        """Embed one chunk or question; returns shape (dimension,)."""
        return self.embed([text])[0]
