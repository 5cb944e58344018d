"""Path filtering for repository scans."""

from fnmatch import fnmatchcase

DEFAULT_IGNORES: tuple[str, ...] = (
    # Dependencies
    "node_modules",
    "bower_components",
    "vendor",
    "venv",
    ".venv",
    # Version control
    ".git",
    ".svn",
    ".hg",
    # Build output and caches
    "dist",
    "build",
    "target",
    ".next",
    ".turbo",
    "coverage",
    "__pycache__",
    ".tox",
    ".pytest_cache",
    ".mypy_cache",
    ".ruff_cache",
    "*.egg-info",
    # Lockfiles
    "*.lock",
    "package-lock.json",
    "pnpm-lock.yaml",
    # Logs
    "*.log",
)


def normalize_path(path: str) -> str:
    """Use forward slashes and drop leading ``./`` and trailing slashes."""
    normalized = path.replace("\\", "/")
    while normalized.startswith("./"):
        normalized = normalized[2:]
    return normalized.strip("/")


def should_ignore(relative_path: str, patterns: tuple[str, ...] = DEFAULT_IGNORES) -> bool:
    """Check whether a path relative to the project root should be skipped.

    A pattern matches when it matches any single segment of the path (so a
    nested ``node_modules`` is caught at any depth) or the whole path.
    """
    path = normalize_path(relative_path)
    if not path:
        return False

    segments = path.split("/")
    for pattern in patterns:
        if fnmatchcase(path, pattern):
            return True
        if any(fnmatchcase(segment, pattern) for segment in segments):
            return True
    return False
