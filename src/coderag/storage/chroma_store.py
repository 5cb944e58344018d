"""Chroma-backed storage for per-project chunk collections."""

import hashlib
import logging
import os
import re
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional, Sequence

import chromadb
import httpx
import numpy as np

from coderag.errors import CollectionNotFoundError, StoreConnectionError

logger = logging.getLogger(__name__)

COLLECTION_PREFIX = "code-rag"
MAX_COLLECTION_NAME_LENGTH = 63
COLLECTION_DESCRIPTION = "Codebase embeddings"

_INVALID_CHARS = re.compile(r"[^a-z0-9_-]")
_REPEATED_DASHES = re.compile(r"-{2,}")


def sanitize_name(name: str) -> str:
    """Lowercase and reduce ``name`` to ``[a-z0-9_-]``."""
    sanitized = _INVALID_CHARS.sub("-", name.lower())
    sanitized = _REPEATED_DASHES.sub("-", sanitized)
    return sanitized.strip("-_")


def collection_name(project_path: Path | str, prefix: str = COLLECTION_PREFIX) -> str:
    """Derive the collection name for a project.

    The name is ``prefix-<hash8>-<basename>`` where hash8 is taken from the
    SHA-256 of the absolute path. Only 8 hex characters are kept, so two
    projects with the same basename can collide with small probability.
    """
    absolute = os.path.abspath(os.fspath(project_path))
    digest = hashlib.sha256(absolute.encode("utf-8")).hexdigest()[:8]
    parts = [prefix, digest]
    base = sanitize_name(os.path.basename(absolute.rstrip(os.sep)))
    if base:
        parts.append(base)
    name = "-".join(parts)
    return name[:MAX_COLLECTION_NAME_LENGTH].rstrip("-_")


@contextmanager
def connection_errors(address: str) -> Iterator[None]:
    """Raise StoreConnectionError when the server goes away mid-operation."""
    try:
        yield
    except (httpx.RequestError, ConnectionError) as exc:
        raise StoreConnectionError(f"Lost connection to Chroma at {address}: {exc}") from exc


class ProjectCollection:
    """One project's collection of chunk records."""

    def __init__(self, collection: Any, address: str = "chroma"):
        self._collection = collection
        self._address = address

    @property
    def name(self) -> str:
        return self._collection.name

    @property
    def metadata(self) -> Mapping[str, Any]:
        return self._collection.metadata or {}

    @property
    def project_path(self) -> Optional[str]:
        return self.metadata.get("projectPath")

    @property
    def created_at(self) -> Optional[str]:
        return self.metadata.get("createdAt")

    def count(self) -> int:
        with connection_errors(self._address):
            return self._collection.count()

    def upsert(
        self,
        ids: Sequence[str],
        embeddings: Sequence[Sequence[float]] | np.ndarray,
        documents: Sequence[str],
        metadatas: Sequence[Mapping[str, Any]],
    ) -> None:
        """Insert or replace records. Re-upserting an id overwrites it."""
        if not (len(ids) == len(embeddings) == len(documents) == len(metadatas)):
            raise ValueError("ids, embeddings, documents and metadatas must have the same length")
        if not ids:
            return

        with connection_errors(self._address):
            self._collection.upsert(
                ids=list(ids),
                embeddings=[np.asarray(e, dtype=np.float32).tolist() for e in embeddings],
                documents=list(documents),
                metadatas=[dict(m) for m in metadatas],
            )

    def query(self, embedding: Sequence[float] | np.ndarray, top_k: int) -> dict[str, list]:
        """Find the nearest records to ``embedding``.

        Returns Chroma's parallel arrays for the single query vector
        (``ids``, ``documents``, ``metadatas``, ``distances``), nearest first,
        with at most ``min(top_k, count())`` entries.
        """
        n_results = min(top_k, self.count())
        if n_results <= 0:
            return {"ids": [], "documents": [], "metadatas": [], "distances": []}

        with connection_errors(self._address):
            results = self._collection.query(
                query_embeddings=[np.asarray(embedding, dtype=np.float32).tolist()],
                n_results=n_results,
                include=["documents", "metadatas", "distances"],
            )

        def first(key: str) -> list:
            values = results.get(key)
            return list(values[0]) if values else []

        return {
            "ids": first("ids"),
            "documents": first("documents"),
            "metadatas": first("metadatas"),
            "distances": first("distances"),
        }


class ChromaStore:
    """Collection lifecycle for projects on a Chroma server.

    Every operation is keyed by project path; the collection name is derived
    from the path, so no lookup table is needed.
    """

    def __init__(
        self,
        host: str = "localhost",
        port: int = 8000,
        ssl: bool = False,
        client: Any = None,
        prefix: str = COLLECTION_PREFIX,
    ):
        self.host = host
        self.port = port
        self.ssl = ssl
        self.prefix = prefix
        self._client = client

    @property
    def client(self) -> Any:
        """Connect on first access."""
        if self._client is None:
            try:
                client = chromadb.HttpClient(host=self.host, port=self.port, ssl=self.ssl)
                client.heartbeat()
            except Exception as exc:
                raise StoreConnectionError(
                    f"Cannot connect to Chroma at {self.address}: {exc}"
                ) from exc
            self._client = client
        return self._client

    @property
    def address(self) -> str:
        scheme = "https" if self.ssl else "http"
        return f"{scheme}://{self.host}:{self.port}"

    def name_for(self, project_path: Path | str) -> str:
        return collection_name(project_path, self.prefix)

    def get_or_create(self, project_path: Path | str) -> ProjectCollection:
        """Return the project's collection, creating it on first use."""
        absolute = os.path.abspath(os.fspath(project_path))
        with connection_errors(self.address):
            collection = self.client.get_or_create_collection(
                name=self.name_for(absolute),
                metadata={
                    "description": COLLECTION_DESCRIPTION,
                    "projectPath": absolute,
                    "createdAt": datetime.now(timezone.utc).isoformat(),
                },
                embedding_function=None,
            )
        return ProjectCollection(collection, self.address)

    def get(self, project_path: Path | str) -> Optional[ProjectCollection]:
        """Return the project's collection, or None if it was never indexed."""
        name = self.name_for(project_path)
        if name not in self._names():
            return None
        with connection_errors(self.address):
            collection = self.client.get_collection(name=name, embedding_function=None)
        return ProjectCollection(collection, self.address)

    def list(self) -> list[ProjectCollection]:
        """List collections created by code-rag."""
        with connection_errors(self.address):
            collections = self.client.list_collections()
        return [
            ProjectCollection(c, self.address)
            for c in collections
            if c.name.startswith(f"{self.prefix}-")
        ]

    def delete(self, project_path: Path | str) -> None:
        """Delete the project's collection.

        Raises:
            CollectionNotFoundError: the project has no collection.
        """
        name = self.name_for(project_path)
        if name not in self._names():
            raise CollectionNotFoundError(
                f"Collection not found for {os.path.abspath(os.fspath(project_path))}"
            )
        with connection_errors(self.address):
            self.client.delete_collection(name=name)
        logger.debug("Deleted collection %s", name)

    def delete_all(self) -> int:
        """Delete every code-rag collection and return how many were removed."""
        collections = self.list()
        with connection_errors(self.address):
            for collection in collections:
                self.client.delete_collection(name=collection.name)
        return len(collections)

    def _names(self) -> set[str]:
        with connection_errors(self.address):
            return {c.name for c in self.client.list_collections()}
