"""Answer-generation and rerank backends."""

from coderag.llms.claude import ClaudeBackend
from coderag.llms.gemini import GeminiBackend
from coderag.llms.registry import available_backends, get_backend, register_backend

__all__ = [
    "ClaudeBackend",
    "GeminiBackend",
    "available_backends",
    "get_backend",
    "register_backend",
]
