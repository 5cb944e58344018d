"""Render retrieved chunks as a single context block."""

from typing import Sequence

from coderag.models import RetrievedChunk

CHUNK_SEPARATOR = "\n---\n"


def format_chunk(position: int, chunk: RetrievedChunk) -> str:
    """Render one chunk with its 1-based position, location and content."""
    header = f"[{position}] {chunk.file_path}:{chunk.start_line}-{chunk.end_line}"
    return f"\n{header}\n{chunk.content or ''}\n"


def build_context(chunks: Sequence[RetrievedChunk]) -> str:
    """Join chunks in the order given. Content is never trimmed."""
    return CHUNK_SEPARATOR.join(
        format_chunk(position, chunk) for position, chunk in enumerate(chunks, start=1)
    )
