"""Index and ask pipelines that tie the components together."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from coderag.context import build_context
from coderag.errors import InvalidProjectPathError
from coderag.indexer import Indexer, IndexReport
from coderag.models import CodeChunk, RetrievedChunk
from coderag.protocols import AnswerBackend, ChunkingStrategy, Ingester
from coderag.rerank import rerank_chunks
from coderag.retriever import DEFAULT_TOP_K, Retriever

logger = logging.getLogger(__name__)


@dataclass
class IndexSummary:
    """What an index run did."""

    project_path: Path
    files: int = 0
    chunks: int = 0
    report: IndexReport = field(default_factory=IndexReport)


@dataclass
class AskResult:
    """Chunks used, the context built from them and the generated answer."""

    chunks: list[RetrievedChunk] = field(default_factory=list)
    context: str = ""
    answer: Optional[str] = None  # None when nothing relevant was found
    reranked: bool = False

    @property
    def found(self) -> bool:
        return bool(self.chunks)


def resolve_project_path(path: Path | str) -> Path:
    """Return the absolute project directory.

    Raises:
        InvalidProjectPathError: the path is missing or not a directory.
    """
    resolved = Path(os.path.abspath(Path(path).expanduser()))
    if not resolved.exists():
        raise InvalidProjectPathError(f"Path does not exist: {path}")
    if not resolved.is_dir():
        raise InvalidProjectPathError(f"Path is not a directory: {path}")
    return resolved


def index_project(
    path: Path | str,
    scanner: Ingester,
    chunker: ChunkingStrategy,
    indexer: Indexer,
) -> IndexSummary:
    """Scan, chunk and index a project directory."""
    project_path = resolve_project_path(path)
    summary = IndexSummary(project_path=project_path)

    files = scanner.scan(project_path)
    summary.files = len(files)
    if not files:
        logger.warning("No files found to index in %s", project_path)
        return summary

    chunks: list[CodeChunk] = []
    for file in files:
        chunks.extend(chunker.chunk(file))
    summary.chunks = len(chunks)
    logger.info("Chunked %d files into %d chunks", len(files), len(chunks))

    if chunks:
        summary.report = indexer.index(chunks, project_path)
    return summary


def ask_question(
    question: str,
    project_path: Path | str,
    retriever: Retriever,
    answer_backend: AnswerBackend,
    rerank_backend: object | None = None,
    top_k: int = DEFAULT_TOP_K,
) -> AskResult:
    """Answer ``question`` from the project's most relevant chunks.

    The answer backend is not called when retrieval finds nothing.
    """
    resolved = resolve_project_path(project_path)

    chunks = retriever.retrieve(question, resolved, top_k)
    if not chunks:
        return AskResult()

    chunks, reranked = rerank_chunks(rerank_backend, question, chunks, top_k)
    context = build_context(chunks)
    answer = answer_backend.answer(question, context)

    return AskResult(chunks=chunks, context=context, answer=answer, reranked=reranked)
