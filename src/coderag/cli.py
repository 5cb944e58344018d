"""CLI entry point for code-rag."""

import argparse
import logging
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from coderag.chunkers import CodeChunker
from coderag.config import Config, load_config
from coderag.embedders import SentenceTransformerEmbedder
from coderag.errors import (
    CodeRagError,
    CollectionNotFoundError,
    ConfigError,
    MissingCredentialsError,
    QuotaExceededError,
    StoreConnectionError,
)
from coderag.indexer import Indexer
from coderag.ingesters import RepositoryScanner
from coderag.llms import get_backend
from coderag.pipeline import ask_question, index_project
from coderag.retriever import DEFAULT_TOP_K, Retriever
from coderag.storage import ChromaStore

logger = logging.getLogger(__name__)

# Extra guidance printed after specific failures
HINTS: dict[type, str] = {
    StoreConnectionError: "Make sure Chroma is running. Run: docker run -p 8000:8000 chromadb/chroma",
    MissingCredentialsError: "Set the API key variable named in .coderag.json (a .env file works too).",
    QuotaExceededError: "API rate limit or quota exceeded. Please check your API usage and billing.",
    CollectionNotFoundError: "Use 'code-rag collections list' to see indexed projects.",
    ConfigError: "Check your .coderag.json configuration.",
}


def make_store(config: Config) -> ChromaStore:
    return ChromaStore(host=config.chroma_host, port=config.chroma_port, ssl=config.chroma_ssl)


def index(path: str, config: Config, workers: int = 1, store: ChromaStore | None = None) -> None:
    """Index a codebase into its project collection.

    Args:
        path: Repository directory
        config: Loaded configuration
        workers: Number of threads embedding and upserting chunks
    """
    store = store or make_store(config)
    embedder = SentenceTransformerEmbedder(config.embedding_model)

    logger.info(f"Indexing {path}")
    summary = index_project(
        path,
        scanner=RepositoryScanner(),
        chunker=CodeChunker(),
        indexer=Indexer(store, embedder, workers=workers),
    )

    if summary.files == 0:
        logger.warning("No files found to index. Check your ignore patterns or repository content.")
        return

    report = summary.report
    logger.info(
        f"Indexed {summary.files} files -> {summary.chunks} chunks "
        f"({report.indexed}/{report.submitted} stored) from {summary.project_path}"
    )
    if report.failed:
        logger.warning(f"{report.failed} chunks failed to index; re-run to retry them.")


def ask(
    question: str,
    config: Config,
    project: str | None = None,
    top_k: int = DEFAULT_TOP_K,
    store: ChromaStore | None = None,
) -> None:
    """Answer a question about an indexed project.

    Args:
        question: Natural-language question
        config: Loaded configuration
        project: Project directory (defaults to the current directory)
        top_k: Number of chunks to retrieve
    """
    if not config.answer_model:
        raise ConfigError("Missing required field 'answerModel' in .coderag.json")

    answer_backend = get_backend(config.answer_model, config)
    rerank_backend = get_backend(config.reranker, config) if config.reranker else None

    store = store or make_store(config)
    retriever = Retriever(store, SentenceTransformerEmbedder(config.embedding_model))
    project_path = Path(project or os.getcwd())

    result = ask_question(
        question,
        project_path,
        retriever=retriever,
        answer_backend=answer_backend,
        rerank_backend=rerank_backend,
        top_k=top_k,
    )

    if not result.found:
        logger.warning("No relevant code found.")
        logger.warning(f"No results found in project: {project_path.resolve()}")
        logger.warning("Make sure you've indexed this project first with: code-rag index <path>")
        return

    print("Relevant Code Context:")
    print(result.context)
    print()
    print("Answer:")
    print(result.answer)


def collections_list(config: Config, store: ChromaStore | None = None) -> None:
    """Show every indexed project."""
    store = store or make_store(config)
    collections = store.list()

    if not collections:
        print("No indexed projects found. Index a project with: code-rag index <path>")
        return

    print(f"Indexed Projects ({len(collections)}):")
    print()
    for collection in collections:
        project_path = collection.project_path or "Unknown"
        print(f"  - {os.path.basename(project_path)}")
        print(f"    Path: {project_path}")
        print(f"    Collection: {collection.name}")
        print(f"    Chunks: {collection.count()}")
        print(f"    Created: {collection.created_at or 'Unknown'}")
        print()


def collections_delete(path: str, config: Config, store: ChromaStore | None = None) -> None:
    """Delete one project's collection."""
    store = store or make_store(config)
    absolute = os.path.abspath(path)
    store.delete(absolute)
    logger.info(f"Deleted collection for: {absolute}")


def collections_clear(config: Config, store: ChromaStore | None = None) -> None:
    """Delete every code-rag collection."""
    store = store or make_store(config)
    removed = store.delete_all()
    if removed == 0:
        logger.info("No collections to clear")
    else:
        logger.info(f"Cleared {removed} collections")


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="code-rag",
        description="Ask questions about a codebase using retrieval-augmented generation",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # index command
    index_parser = subparsers.add_parser(
        "index",
        help="Index a codebase into the vector store",
    )
    index_parser.add_argument("path", help="Path to repository")
    index_parser.add_argument(
        "--workers",
        type=positive_int,
        default=1,
        help="Threads used to embed and store chunks (default: 1)",
    )

    # ask command
    ask_parser = subparsers.add_parser(
        "ask",
        help="Ask a question about an indexed repository",
    )
    ask_parser.add_argument("question", help="Question about the codebase")
    ask_parser.add_argument(
        "-k",
        "--topk",
        type=positive_int,
        default=DEFAULT_TOP_K,
        help=f"Number of chunks (default: {DEFAULT_TOP_K})",
    )
    ask_parser.add_argument(
        "-p",
        "--project",
        default=None,
        help="Path to the indexed project (default: current directory)",
    )

    # collections command
    collections_parser = subparsers.add_parser(
        "collections",
        help="Manage indexed project collections",
    )
    collections_sub = collections_parser.add_subparsers(dest="action", required=True)
    collections_sub.add_parser("list", aliases=["ls"], help="List all indexed projects")
    delete_parser = collections_sub.add_parser("delete", aliases=["rm"], help="Delete an indexed project")
    delete_parser.add_argument("path", help="Path to the project to remove")
    collections_sub.add_parser("clear", help="Delete all indexed projects (use with caution)")

    return parser


def run(args: argparse.Namespace, config: Config) -> None:
    if args.command == "index":
        index(args.path, config, workers=args.workers)
    elif args.command == "ask":
        ask(args.question, config, project=args.project, top_k=args.topk)
    elif args.command == "collections":
        if args.action in ("list", "ls"):
            collections_list(config)
        elif args.action in ("delete", "rm"):
            collections_delete(args.path, config)
        elif args.action == "clear":
            collections_clear(config)


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(message)s",
    )
    load_dotenv()

    try:
        run(args, load_config())
    except CodeRagError as e:
        logger.error(f"Error: {e}")
        hint = HINTS.get(type(e))
        if hint:
            logger.error(hint)
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        if os.getenv("DEBUG"):
            logger.exception("Traceback")
        sys.exit(1)


if __name__ == "__main__":
    main()
