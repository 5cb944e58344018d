"""Lookup of LLM backends by configured name."""

from typing import Callable, Mapping

from coderag.config import Config
from coderag.errors import BackendNotFoundError, MissingCredentialsError
from coderag.llms.claude import ClaudeBackend
from coderag.llms.gemini import GeminiBackend
from coderag.protocols import AnswerBackend

BackendFactory = Callable[[str, str], AnswerBackend]

# Registry of available backends: name -> factory(api_key, model)
_BACKENDS: dict[str, BackendFactory] = {
    "claude": ClaudeBackend,
    "gemini": GeminiBackend,
}


def available_backends() -> list[str]:
    return sorted(_BACKENDS)


def register_backend(name: str, factory: BackendFactory) -> None:
    """Register a custom backend (for plugins/extensions)."""
    _BACKENDS[name] = factory


def get_backend(
    name: str, config: Config, environ: Mapping[str, str] | None = None
) -> AnswerBackend:
    """Build the backend called ``name`` using its configured model and key.

    Raises:
        BackendNotFoundError: unknown backend, or no model entry for it.
        MissingCredentialsError: the API key variable is unset. Checked
            before any network call.
    """
    factory = _BACKENDS.get(name)
    if factory is None:
        raise BackendNotFoundError(
            f'LLM backend "{name}" not found. Available: {", ".join(available_backends())}'
        )

    model_config = config.model_config(name)
    if model_config is None:
        raise BackendNotFoundError(f'No "models.{name}" entry in the configuration')

    api_key = model_config.api_key(environ)
    if not api_key:
        raise MissingCredentialsError(
            f"{name} API key not configured. Please set {model_config.api_key_env} "
            "in your environment or .env file."
        )

    return factory(api_key, model_config.model)
