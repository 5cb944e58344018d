"""Chunking strategy that picks structural extraction or line windows."""

import logging

from coderag.chunkers.line_chunker import LineWindowChunker
from coderag.chunkers.syntax_chunker import SyntaxChunker
from coderag.models import CodeChunk, ScannedFile

logger = logging.getLogger(__name__)


class CodeChunker:
    """Default chunking: declarations where a grammar exists, windows elsewhere.

    Never raises. A file that cannot be parsed, or that has no recognized
    declarations, is split into line windows instead.
    """

    def __init__(
        self,
        syntax: SyntaxChunker | None = None,
        fallback: LineWindowChunker | None = None,
    ):
        self.syntax = syntax or SyntaxChunker()
        self.fallback = fallback or LineWindowChunker()

    def chunk(self, file: ScannedFile) -> list[CodeChunk]:
        if self.syntax.supports(file):
            try:
                chunks = self.syntax.chunk(file)
            except Exception as exc:
                logger.debug("Structural chunking failed for %s: %s", file.path, exc)
            else:
                if chunks:
                    return chunks

        return self.fallback.chunk(file)
