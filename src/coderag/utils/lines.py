"""Line helpers shared by the chunkers.

Lines keep their trailing ``\\n`` so that joining any run of them gives back
the exact source text for that span.
"""


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only, keeping terminators. Empty text has no lines."""
    if not text:
        return []
    parts = text.split("\n")
    lines = [part + "\n" for part in parts[:-1]]
    if parts[-1]:
        lines.append(parts[-1])
    return lines


def slice_lines(text: str, start_line: int, end_line: int) -> str:
    """Return lines ``start_line..end_line`` (1-based, inclusive) of ``text``."""
    return "".join(split_lines(text)[start_line - 1 : end_line])
