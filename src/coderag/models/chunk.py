"""Core data models for scanned files and code chunks."""

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional


def chunk_id(file_path: str, start_line: int, end_line: int) -> str:
    """Stable identity for a chunk: ``path:start-end``."""
    return f"{file_path}:{start_line}-{end_line}"


@dataclass(frozen=True)
class ScannedFile:
    """A source file read from a repository."""

    path: str  # Relative to the project root, forward slashes
    content: str
    language: str
    size: int  # Bytes on disk


@dataclass(frozen=True)
class CodeChunk:
    """A contiguous span of whole lines from one source file."""

    content: str
    file_path: str
    language: str
    start_line: int  # 1-based, inclusive
    end_line: int  # 1-based, inclusive
    symbol: Optional[str] = None

    @property
    def chunk_id(self) -> str:
        return chunk_id(self.file_path, self.start_line, self.end_line)

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


@dataclass(frozen=True)
class RetrievedChunk:
    """A chunk returned by a nearest-neighbor query."""

    id: str
    content: Optional[str]  # None if the store lost the document
    metadata: Mapping[str, Any] = field(default_factory=dict)
    distance: Optional[float] = None  # Lower is closer

    @property
    def file_path(self) -> str:
        return str(self.metadata.get("filePath", ""))

    @property
    def start_line(self) -> Optional[int]:
        return self.metadata.get("startLine")

    @property
    def end_line(self) -> Optional[int]:
        return self.metadata.get("endLine")

    @property
    def symbol(self) -> Optional[str]:
        return self.metadata.get("symbol")
