"""Chunking strategies for source files."""

from coderag.chunkers.code_chunker import CodeChunker
from coderag.chunkers.line_chunker import LineWindowChunker
from coderag.chunkers.syntax_chunker import NodeKind, SyntaxChunker

__all__ = ["CodeChunker", "LineWindowChunker", "NodeKind", "SyntaxChunker"]
