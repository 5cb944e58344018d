"""Shared fixtures: an in-memory Chroma client and a deterministic embedder."""

import hashlib
import re
from pathlib import Path
from typing import Any

import numpy as np
import pytest

from coderag.storage import ChromaStore


class FakeCollection:
    """Implements the slice of the Chroma collection API that code-rag uses."""

    def __init__(self, name: str, metadata: dict | None = None):
        self.name = name
        self.metadata = metadata
        self.records: dict[str, dict[str, Any]] = {}
        self.upsert_calls = 0
        self.query_calls = 0

    def count(self) -> int:
        return len(self.records)

    def upsert(self, ids, embeddings, documents, metadatas):
        self.upsert_calls += 1
        for record_id, embedding, document, metadata in zip(ids, embeddings, documents, metadatas):
            self.records[record_id] = {
                "embedding": np.asarray(embedding, dtype=np.float32),
                "document": document,
                "metadata": metadata,
            }

    def query(self, query_embeddings, n_results, include=None):
        self.query_calls += 1
        if n_results > len(self.records):
            raise ValueError("n_results exceeds collection size")

        query = np.asarray(query_embeddings[0], dtype=np.float32)
        scored = sorted(
            (float(np.sum((record["embedding"] - query) ** 2)), record_id)
            for record_id, record in self.records.items()
        )[:n_results]

        return {
            "ids": [[record_id for _, record_id in scored]],
            "documents": [[self.records[record_id]["document"] for _, record_id in scored]],
            "metadatas": [[self.records[record_id]["metadata"] for _, record_id in scored]],
            "distances": [[distance for distance, _ in scored]],
        }


class FakeChromaClient:
    """In-memory stand-in for ``chromadb.HttpClient``."""

    def __init__(self):
        self.collections: dict[str, FakeCollection] = {}

    def heartbeat(self) -> int:
        return 1

    def get_or_create_collection(self, name, metadata=None, embedding_function=None):
        if name not in self.collections:
            self.collections[name] = FakeCollection(name, metadata)
        return self.collections[name]

    def get_collection(self, name, embedding_function=None):
        if name not in self.collections:
            raise ValueError(f"Collection {name} does not exist.")
        return self.collections[name]

    def list_collections(self):
        return list(self.collections.values())

    def delete_collection(self, name):
        if name not in self.collections:
            raise ValueError(f"Collection {name} does not exist.")
        del self.collections[name]


class FakeEmbedder:
    """Bag-of-words hashing embedder; texts sharing words land close together."""

    def __init__(self, dimension: int = 32):
        self._dimension = dimension
        self.calls: list[str] = []

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def model_name(self) -> str:
        return "fake-hashing"

    def embed_one(self, text: str) -> np.ndarray:
        self.calls.append(text)
        vector = np.zeros(self._dimension, dtype=np.float32)
        for word in re.findall(r"[a-z0-9]+", text.lower()):
            bucket = int(hashlib.md5(word.encode()).hexdigest(), 16) % self._dimension
            vector[bucket] += 1.0
        norm = np.linalg.norm(vector)
        if norm == 0:
            vector[0] = 1.0
            return vector
        return vector / norm

    def embed(self, texts: list[str]) -> np.ndarray:
        if not texts:
            return np.array([])
        return np.stack([self.embed_one(text) for text in texts])


@pytest.fixture
def chroma_client() -> FakeChromaClient:
    return FakeChromaClient()


@pytest.fixture
def store(chroma_client: FakeChromaClient) -> ChromaStore:
    return ChromaStore(client=chroma_client)


@pytest.fixture
def embedder() -> FakeEmbedder:
    return FakeEmbedder()


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small repository with one TypeScript, one Python and one Go file."""
    root = tmp_path / "demo-project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "math.ts").write_text(
        "export function add(a: number, b: number): number {\n"
        "  return a + b;\n"
        "}\n"
        "\n"
        "export class Calculator {\n"
        "  total(values: number[]): number {\n"
        "    return values.reduce((sum, v) => add(sum, v), 0);\n"
        "  }\n"
        "}\n"
    )
    (root / "src" / "config.py").write_text(
        "def load_settings(path):\n"
        "    with open(path) as handle:\n"
        "        return handle.read()\n"
    )
    (root / "main.go").write_text("package main\n\nfunc main() {\n}\n")
    (root / "node_modules" / "lib").mkdir(parents=True)
    (root / "node_modules" / "lib" / "index.js").write_text("function vendored() {}\n")
    return root
