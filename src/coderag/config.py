"""Configuration module for code-rag.

Settings come from a ``.coderag.json`` file (current directory first, then
the home directory) with environment overrides for the Chroma address. API
keys are never stored in the file; each model entry names the environment
variable that holds its key, and that variable is read when a backend is
built.

Example ``.coderag.json``::

    {
      "answerModel": "claude",
      "reranker": "gemini",
      "models": {
        "claude": {"apiKey": "ANTHROPIC_API_KEY", "model": "claude-sonnet-4-5"},
        "gemini": {"apiKey": "GEMINI_API_KEY", "model": "gemini-2.0-flash"}
      },
      "chroma": {"host": "localhost", "port": 8000, "ssl": false}
    }
"""

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from coderag.errors import ConfigError

CONFIG_FILENAME = ".coderag.json"


@dataclass(frozen=True)
class ModelConfig:
    """Settings for one LLM backend."""

    api_key_env: str  # Name of the environment variable holding the key
    model: str

    def api_key(self, environ: Mapping[str, str] | None = None) -> Optional[str]:
        """Read the API key from ``environ`` (defaults to ``os.environ``)."""
        env = os.environ if environ is None else environ
        return env.get(self.api_key_env) or None


@dataclass(frozen=True)
class Config:
    """Application configuration."""

    answer_model: str = ""
    reranker: Optional[str] = None
    models: Mapping[str, ModelConfig] = field(default_factory=lambda: MappingProxyType({}))
    chroma_host: str = "localhost"
    chroma_port: int = 8000
    chroma_ssl: bool = False
    embedding_model: Optional[str] = None
    source: Optional[Path] = None  # File the config was read from

    @classmethod
    def from_dict(
        cls,
        raw: Mapping[str, Any],
        environ: Mapping[str, str] | None = None,
        source: Optional[Path] = None,
    ) -> "Config":
        """Build a config from parsed JSON plus environment overrides."""
        env = os.environ if environ is None else environ
        where = f" in {source}" if source else ""

        models_raw = raw.get("models", {})
        if not isinstance(models_raw, Mapping):
            raise ConfigError(f"Missing or invalid 'models' configuration{where}")

        models = {}
        for name, entry in models_raw.items():
            if not isinstance(entry, Mapping) or not entry.get("apiKey") or not entry.get("model"):
                raise ConfigError(
                    f"Invalid configuration for model '{name}': missing apiKey or model field{where}"
                )
            models[name] = ModelConfig(api_key_env=entry["apiKey"], model=entry["model"])

        chroma = raw.get("chroma", {})
        if not isinstance(chroma, Mapping):
            raise ConfigError(f"Invalid 'chroma' configuration{where}")

        port_value = env.get("CODERAG_CHROMA_PORT", chroma.get("port", 8000))
        try:
            chroma_port = int(port_value)
            if not 1 <= chroma_port <= 65535:
                raise ValueError(f"Port must be between 1 and 65535, got {chroma_port}")
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Invalid Chroma port '{port_value}': {e}") from e

        return cls(
            answer_model=raw.get("answerModel") or "",
            reranker=raw.get("reranker") or None,
            models=MappingProxyType(models),
            chroma_host=env.get("CODERAG_CHROMA_HOST", chroma.get("host", "localhost")),
            chroma_port=chroma_port,
            chroma_ssl=bool(chroma.get("ssl", False)),
            embedding_model=raw.get("embeddingModel") or None,
            source=source,
        )

    @classmethod
    def from_file(cls, path: Path, environ: Mapping[str, str] | None = None) -> "Config":
        """Load configuration from a JSON file."""
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to parse {path}: {e}") from e
        if not isinstance(raw, Mapping):
            raise ConfigError(f"Failed to parse {path}: expected a JSON object")
        return cls.from_dict(raw, environ=environ, source=path)

    def model_config(self, name: str) -> Optional[ModelConfig]:
        return self.models.get(name)


def find_config_path(cwd: Path | None = None, home: Path | None = None) -> Optional[Path]:
    """Return the first existing config file, or None."""
    locations = [
        (cwd or Path.cwd()) / CONFIG_FILENAME,
        (home or Path.home()) / CONFIG_FILENAME,
    ]
    for location in locations:
        if location.is_file():
            return location
    return None


def load_config(
    cwd: Path | None = None,
    home: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load the config file if there is one, otherwise use defaults."""
    path = find_config_path(cwd, home)
    if path is None:
        return Config.from_dict({}, environ=environ)
    return Config.from_file(path, environ=environ)
