"""Protocol for embedding providers."""

from typing import Protocol, runtime_checkable

import numpy as np


@runtime_checkable
class EmbeddingProvider(Protocol):
    """Maps code and questions into one vector space.

    Indexing and retrieval must use the same provider; vectors from
    different models are not comparable.
    """

    @property
    def dimension(self) -> int: ...

    @property
    def model_name(self) -> str: ...

    def embed(self, texts: list[str]) -> np.ndarray:
        """Shape (len(texts), dimension), one unit-length row per text."""
        ...

    def embed_one(self, text: str) -> np.ndarray:
        """Shape (dimension,), unit length."""
        ...
