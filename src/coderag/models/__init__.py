"""Data models for code-rag."""

from coderag.models.chunk import CodeChunk, RetrievedChunk, ScannedFile, chunk_id

__all__ = ["ScannedFile", "CodeChunk", "RetrievedChunk", "chunk_id"]
