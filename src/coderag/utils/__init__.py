"""Utility functions for code-rag."""

from coderag.utils.ignore import DEFAULT_IGNORES, should_ignore
from coderag.utils.language import detect_language
from coderag.utils.lines import slice_lines, split_lines

__all__ = [
    "DEFAULT_IGNORES",
    "detect_language",
    "should_ignore",
    "slice_lines",
    "split_lines",
]
