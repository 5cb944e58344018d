"""Protocol for chunking strategies."""

from typing import Protocol, runtime_checkable

from coderag.models import CodeChunk, ScannedFile


@runtime_checkable
class ChunkingStrategy(Protocol):
    """Splits one source file into retrieval units.

    Every chunk covers whole lines of the file it came from.
    """

    def chunk(self, file: ScannedFile) -> list[CodeChunk]: ...
