"""Fixed-size line window chunking."""

from coderag.models import CodeChunk, ScannedFile
from coderag.utils.lines import split_lines


class LineWindowChunker:
    """Split a file into consecutive, non-overlapping windows of lines.

    Every line lands in exactly one window and the final window may be
    shorter, so joining the chunk contents in order rebuilds the file.
    """

    DEFAULT_WINDOW_SIZE = 50

    def __init__(self, window_size: int = DEFAULT_WINDOW_SIZE):
        if window_size < 1:
            raise ValueError(f"window_size must be >= 1, got {window_size}")
        self.window_size = window_size

    def chunk(self, file: ScannedFile) -> list[CodeChunk]:
        lines = split_lines(file.content)

        chunks = []
        for i in range(0, len(lines), self.window_size):
            window = lines[i : i + self.window_size]
            chunks.append(
                CodeChunk(
                    content="".join(window),
                    file_path=file.path,
                    language=file.language,
                    start_line=i + 1,
                    end_line=i + len(window),
                )
            )

        return chunks
