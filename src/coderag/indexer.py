"""Embed code chunks and store them in a project's collection."""

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Any, Callable, Sequence

from coderag.models import CodeChunk
from coderag.protocols import EmbeddingProvider
from coderag.storage import ChromaStore, ProjectCollection

logger = logging.getLogger(__name__)


@dataclass
class IndexReport:
    """Outcome of an indexing run."""

    submitted: int = 0
    indexed: int = 0
    failures: dict[str, str] = field(default_factory=dict)  # chunk id -> error
    duplicates: int = 0  # chunks skipped because an earlier chunk had the same id

    @property
    def failed(self) -> int:
        return len(self.failures)


def chunk_metadata(chunk: CodeChunk, project_path: str) -> dict[str, Any]:
    """Metadata stored next to each chunk. Chroma only accepts scalar values."""
    metadata: dict[str, Any] = {
        "filePath": chunk.file_path,
        "startLine": chunk.start_line,
        "endLine": chunk.end_line,
        "language": chunk.language,
        "projectPath": project_path,
    }
    if chunk.symbol:
        metadata["symbol"] = chunk.symbol
    return metadata


def unique_chunks(chunks: Sequence[CodeChunk]) -> list[CodeChunk]:
    """Drop chunks whose id was already seen, keeping the first."""
    seen: set[str] = set()
    unique = []
    for chunk in chunks:
        if chunk.chunk_id not in seen:
            seen.add(chunk.chunk_id)
            unique.append(chunk)
    return unique


class Indexer:
    """Stores every chunk of a project under its identity key.

    A chunk that fails to embed or upsert is recorded in the report and the
    run carries on with the rest. Declarations nested on the same line span
    share an id; only the first (outermost) of them is stored.
    """

    def __init__(self, store: ChromaStore, embedder: EmbeddingProvider, workers: int = 1):
        self.store = store
        self.embedder = embedder
        self.workers = max(1, workers)

    def index(self, chunks: Sequence[CodeChunk], project_path: Path | str) -> IndexReport:
        absolute = os.path.abspath(os.fspath(project_path))
        collection = self.store.get_or_create(absolute)

        unique = unique_chunks(chunks)
        report = IndexReport(submitted=len(unique), duplicates=len(chunks) - len(unique))
        if report.duplicates:
            logger.info("Skipped %d chunks whose line span repeats an earlier chunk", report.duplicates)
        chunks = unique

        if self.workers == 1:
            for chunk in chunks:
                self._record(report, chunk, partial(self._index_one, collection, chunk, absolute))
        else:
            with ThreadPoolExecutor(max_workers=self.workers) as pool:
                futures = {
                    pool.submit(self._index_one, collection, chunk, absolute): chunk
                    for chunk in chunks
                }
                for future in as_completed(futures):
                    self._record(report, futures[future], future.result)

        logger.debug(
            "Indexed %d/%d chunks into %s", report.indexed, report.submitted, collection.name
        )
        return report

    def _index_one(self, collection: ProjectCollection, chunk: CodeChunk, project_path: str) -> None:
        embedding = self.embedder.embed_one(chunk.content)
        collection.upsert(
            ids=[chunk.chunk_id],
            embeddings=[embedding],
            documents=[chunk.content],
            metadatas=[chunk_metadata(chunk, project_path)],
        )

    @staticmethod
    def _record(report: IndexReport, chunk: CodeChunk, run: Callable[[], None]) -> None:
        try:
            run()
        except Exception as exc:
            logger.warning("Failed to index %s: %s", chunk.chunk_id, exc)
            report.failures[chunk.chunk_id] = str(exc)
        else:
            report.indexed += 1
