"""Map file names to language tags."""

from typing import Optional

# Checked in order; first match wins. Matching is case-sensitive.
LANGUAGE_EXTENSIONS: tuple[tuple[str, str], ...] = (
    (".ts", "typescript"),
    (".tsx", "typescript"),
    (".js", "javascript"),
    (".jsx", "javascript"),
    (".py", "python"),
    (".rs", "rust"),
    (".go", "go"),
    (".java", "java"),
)


def detect_language(filename: str) -> Optional[str]:
    """Return the language tag for a file name, or None if unsupported."""
    for extension, language in LANGUAGE_EXTENSIONS:
        if filename.endswith(extension):
            return language
    return None


def supported_languages() -> set[str]:
    """Return every language tag the classifier can produce."""
    return {language for _, language in LANGUAGE_EXTENSIONS}
