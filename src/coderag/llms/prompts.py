"""Prompt templates and response parsing shared by LLM backends."""

import json
import re
from typing import Sequence

from coderag.errors import RerankResponseError
from coderag.protocols import RerankCandidate

ANSWER_PROMPT = """You are a helpful coding assistant. Answer the user's question about their codebase using the provided context.

Context (relevant code snippets):
{context}

User Question: {query}

Please provide a clear, concise answer based on the code context above."""

RERANK_PROMPT = """Given the following code chunks and a user query, rank the chunks by relevance to the query. Return ONLY a JSON array of chunk IDs in order of relevance (most relevant first), limited to the top {top_k} chunks.

Query: {query}

Code Chunks:
{chunks}

Return format: ["id1", "id2", "id3", ...]"""

_CODE_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)


def answer_prompt(query: str, context: str) -> str:
    return ANSWER_PROMPT.format(query=query, context=context)


def rerank_prompt(query: str, chunks: Sequence[RerankCandidate], top_k: int) -> str:
    chunks_text = "\n\n".join(f"[{chunk.id}]\n{chunk.content}" for chunk in chunks)
    return RERANK_PROMPT.format(query=query, chunks=chunks_text, top_k=top_k)


def parse_ranked_ids(response_text: str, top_k: int) -> list[str]:
    """Parse a JSON array of chunk ids from a model response.

    Raises:
        RerankResponseError: the response is not a JSON array of strings.
    """
    text = response_text.strip()
    fenced = _CODE_FENCE.match(text)
    if fenced:
        text = fenced.group(1)

    try:
        ranked = json.loads(text)
    except json.JSONDecodeError as e:
        raise RerankResponseError(f"Rerank response is not JSON: {response_text[:200]!r}") from e

    if not isinstance(ranked, list) or not all(isinstance(item, str) for item in ranked):
        raise RerankResponseError(f"Rerank response is not a list of ids: {response_text[:200]!r}")

    return ranked[:top_k]
