"""Vector storage for code-rag."""

from coderag.storage.chroma_store import (
    COLLECTION_PREFIX,
    ChromaStore,
    ProjectCollection,
    collection_name,
    sanitize_name,
)

__all__ = [
    "COLLECTION_PREFIX",
    "ChromaStore",
    "ProjectCollection",
    "collection_name",
    "sanitize_name",
]
