"""Protocol definitions for extensible components."""

from coderag.protocols.backend import AnswerBackend, RerankCandidate, RerankCapable
from coderag.protocols.chunker import ChunkingStrategy
from coderag.protocols.embedder import EmbeddingProvider
from coderag.protocols.ingester import Ingester

__all__ = [
    "AnswerBackend",
    "ChunkingStrategy",
    "EmbeddingProvider",
    "Ingester",
    "RerankCandidate",
    "RerankCapable",
]
