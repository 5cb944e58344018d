"""Protocols for answer-generation and rerank backends.

Every backend answers questions. Reranking is a separate capability that a
backend may or may not have; callers check for it with
``isinstance(backend, RerankCapable)`` at call time.
"""

from dataclasses import dataclass, field
from typing import Any, Mapping, Protocol, runtime_checkable


@dataclass(frozen=True)
class RerankCandidate:
    """One chunk offered to a rerank backend."""

    id: str
    content: str
    metadata: Mapping[str, Any] = field(default_factory=dict)


@runtime_checkable
class AnswerBackend(Protocol):
    """A text-generation backend that answers questions from context."""

    @property
    def name(self) -> str:
        ...

    def answer(self, query: str, context: str) -> str:
        """Return a free-text answer to ``query`` grounded in ``context``."""
        ...


@runtime_checkable
class RerankCapable(Protocol):
    """A backend that can reorder candidate chunks by relevance."""

    def rerank(
        self, query: str, chunks: list[RerankCandidate], top_k: int
    ) -> list[str]:
        """Return at most ``top_k`` chunk ids, most relevant first."""
        ...
