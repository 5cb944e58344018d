"""Best-effort reordering of retrieved chunks by an LLM backend."""

import logging
from typing import Any, Sequence

from coderag.models import RetrievedChunk
from coderag.protocols import RerankCandidate, RerankCapable

logger = logging.getLogger(__name__)


def apply_ranking(
    chunks: Sequence[RetrievedChunk], ranked_ids: Sequence[str], top_k: int
) -> list[RetrievedChunk]:
    """Reorder ``chunks`` to follow ``ranked_ids``.

    Unknown and repeated ids are ignored; at most ``top_k`` chunks are kept.
    """
    by_id = {chunk.id: chunk for chunk in chunks}
    ordered: list[RetrievedChunk] = []
    seen: set[str] = set()
    for chunk_id in ranked_ids:
        if chunk_id in by_id and chunk_id not in seen:
            seen.add(chunk_id)
            ordered.append(by_id[chunk_id])
        if len(ordered) == top_k:
            break
    return ordered


def rerank_chunks(
    backend: Any,
    query: str,
    chunks: Sequence[RetrievedChunk],
    top_k: int,
) -> tuple[list[RetrievedChunk], bool]:
    """Ask ``backend`` to reorder ``chunks``.

    Returns the chunks to use and whether the rerank was applied. Any failure,
    including a malformed response, keeps the original order.
    """
    original = list(chunks)
    if backend is None or not original or not isinstance(backend, RerankCapable):
        return original, False

    candidates = [
        RerankCandidate(id=chunk.id, content=chunk.content, metadata=chunk.metadata)
        for chunk in original
        if chunk.content is not None
    ]
    if not candidates:
        return original, False

    try:
        ranked_ids = backend.rerank(query, candidates, top_k)
    except Exception as exc:
        logger.warning("Reranking failed, using original order: %s", exc)
        return original, False

    if not isinstance(ranked_ids, (list, tuple)) or not all(isinstance(i, str) for i in ranked_ids):
        logger.warning("Reranking returned %r, using original order", type(ranked_ids).__name__)
        return original, False

    reordered = apply_ranking(original, ranked_ids, top_k)
    if not reordered:
        logger.warning("Reranking matched no known chunks, using original order")
        return original, False

    return reordered, True
