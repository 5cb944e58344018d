"""Scanner for source-code repositories on the local filesystem."""

import logging
import os
from pathlib import Path
from typing import Iterator

from coderag.models import ScannedFile
from coderag.utils.ignore import DEFAULT_IGNORES, should_ignore
from coderag.utils.language import detect_language

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 500_000


class RepositoryScanner:
    """Walks a directory tree and yields the source files worth indexing."""

    source_type = "folder"

    def __init__(
        self,
        max_file_size: int = MAX_FILE_SIZE,
        ignore_patterns: tuple[str, ...] = DEFAULT_IGNORES,
    ):
        self.max_file_size = max_file_size
        self.ignore_patterns = ignore_patterns

    def can_handle(self, source: Path) -> bool:
        """Check if this is an existing directory."""
        return source.is_dir()

    def scan(self, source: Path | str) -> list[ScannedFile]:
        """Return every eligible file under ``source``."""
        return list(self.iter_files(Path(source)))

    def iter_files(self, source: Path) -> Iterator[ScannedFile]:
        """Yield scanned files from a folder recursively.

        Ignored directories are pruned before ``os.walk`` descends into them.
        Files that cannot be read are skipped.
        """
        for root, dirnames, filenames in os.walk(source):
            root_path = Path(root)

            dirnames[:] = sorted(
                d
                for d in dirnames
                if not self._ignored((root_path / d).relative_to(source))
            )

            for filename in sorted(filenames):
                full_path = root_path / filename
                rel_path = full_path.relative_to(source)

                if self._ignored(rel_path):
                    continue

                language = detect_language(filename)
                if language is None:
                    continue

                scanned = self._read(full_path, rel_path, language)
                if scanned is not None:
                    yield scanned

    def _read(self, full_path: Path, rel_path: Path, language: str) -> ScannedFile | None:
        try:
            if not full_path.is_file():
                return None
            size = full_path.stat().st_size
            if size > self.max_file_size:
                logger.debug("Skipping %s (%d bytes)", rel_path, size)
                return None
            raw_content = full_path.read_bytes()
        except OSError as exc:
            logger.debug("Skipping unreadable file %s: %s", rel_path, exc)
            return None

        return ScannedFile(
            path=rel_path.as_posix(),
            content=raw_content.decode("utf-8", errors="replace"),
            language=language,
            size=size,
        )

    def _ignored(self, rel_path: Path) -> bool:
        return should_ignore(rel_path.as_posix(), self.ignore_patterns)


def scan_repository(root: Path | str) -> list[ScannedFile]:
    """Scan ``root`` with the default scanner settings."""
    return RepositoryScanner().scan(root)
