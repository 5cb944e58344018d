"""Input source handlers (ingesters) for code-rag."""

from coderag.ingesters.repository import MAX_FILE_SIZE, RepositoryScanner, scan_repository

__all__ = ["MAX_FILE_SIZE", "RepositoryScanner", "scan_repository"]
