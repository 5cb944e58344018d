"""code-rag: ask questions about a codebase using retrieval-augmented generation."""

__version__ = "0.1.0"
