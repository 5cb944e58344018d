"""Protocol for source scanners."""

from pathlib import Path
from typing import Protocol, runtime_checkable

from coderag.models import ScannedFile


@runtime_checkable
class Ingester(Protocol):
    """Finds the indexable source files under a root."""

    @property
    def source_type(self) -> str:
        """Kind of source handled, e.g. 'folder'."""
        ...

    def can_handle(self, source: Path) -> bool: ...

    def scan(self, source: Path | str) -> list[ScannedFile]:
        """Supported, non-ignored files in a stable order."""
        ...
