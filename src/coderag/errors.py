"""Exception hierarchy for code-rag."""


class CodeRagError(Exception):
    """Base class for all errors raised by code-rag."""


class ConfigError(CodeRagError):
    """The configuration file is missing required fields or is malformed."""


class InvalidProjectPathError(CodeRagError):
    """A project path does not exist or is not a directory."""


class StoreConnectionError(CodeRagError):
    """The Chroma server could not be reached."""


class CollectionNotFoundError(CodeRagError):
    """No collection exists for the requested project."""


class BackendNotFoundError(CodeRagError):
    """The configured LLM backend name is unknown."""


class MissingCredentialsError(CodeRagError):
    """The API key for a selected backend is not set."""


class QuotaExceededError(CodeRagError):
    """The LLM provider rejected a call due to rate limits or quota."""


class RerankResponseError(CodeRagError):
    """A rerank backend returned something other than a list of chunk ids."""


class ChunkExtractionError(CodeRagError):
    """Structural extraction could not be applied to a file."""
