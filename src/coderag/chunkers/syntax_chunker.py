"""Declaration-level chunking backed by tree-sitter grammars."""

import enum
import importlib
import logging
from typing import Iterator, Optional

from tree_sitter import Language, Node, Parser

from coderag.errors import ChunkExtractionError
from coderag.models import CodeChunk, ScannedFile
from coderag.utils.lines import split_lines

logger = logging.getLogger(__name__)


class NodeKind(enum.Enum):
    """Declaration kinds that become chunks."""

    FUNCTION = "function"
    METHOD = "method"
    LAMBDA = "lambda"
    CLASS = "class"


# grammar key -> (module, factory function)
GRAMMARS: dict[str, tuple[str, str]] = {
    "typescript": ("tree_sitter_typescript", "language_typescript"),
    "tsx": ("tree_sitter_typescript", "language_tsx"),
    "javascript": ("tree_sitter_javascript", "language"),
    "python": ("tree_sitter_python", "language"),
}

_ECMASCRIPT_KINDS: dict[str, NodeKind] = {
    "function_declaration": NodeKind.FUNCTION,
    "generator_function_declaration": NodeKind.FUNCTION,
    "method_definition": NodeKind.METHOD,
    "arrow_function": NodeKind.LAMBDA,
    "class_declaration": NodeKind.CLASS,
    "abstract_class_declaration": NodeKind.CLASS,
    "class": NodeKind.CLASS,  # anonymous, e.g. `export default class {}`
}

_PYTHON_KINDS: dict[str, NodeKind] = {
    "function_definition": NodeKind.FUNCTION,
    "lambda": NodeKind.LAMBDA,
    "class_definition": NodeKind.CLASS,
}

NODE_KINDS: dict[str, dict[str, NodeKind]] = {
    "typescript": _ECMASCRIPT_KINDS,
    "tsx": _ECMASCRIPT_KINDS,
    "javascript": _ECMASCRIPT_KINDS,
    "python": _PYTHON_KINDS,
}

NAME_NODE_TYPES = {
    "identifier",
    "property_identifier",
    "private_property_identifier",
    "type_identifier",
}


def grammar_key(file: ScannedFile) -> Optional[str]:
    """Pick the grammar for a file, or None if there is no grammar for it."""
    if file.language == "typescript" and file.path.endswith(".tsx"):
        return "tsx"
    if file.language in GRAMMARS:
        return file.language
    return None


def _walk(root: Node) -> Iterator[Node]:
    """Pre-order traversal without recursion."""
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _is_default_export(node: Node) -> bool:
    parent = node.parent
    return parent is not None and parent.type == "export_statement"


def _is_python_method(node: Node) -> bool:
    parent = node.parent
    if parent is not None and parent.type == "decorated_definition":
        parent = parent.parent
    return (
        parent is not None
        and parent.type == "block"
        and parent.parent is not None
        and parent.parent.type == "class_definition"
    )


class _DeclarationVisitor:
    """Collects one chunk per declaration node; other nodes are inert."""

    def __init__(self, file: ScannedFile, key: str, source: bytes):
        self.file = file
        self.key = key
        self.kinds = NODE_KINDS[key]
        self.source = source
        self.lines = split_lines(file.content)

    def classify(self, node: Node) -> Optional[NodeKind]:
        # Keyword tokens share their text with node types ("class", "lambda")
        if not node.is_named:
            return None
        if node.type == "function_expression":
            return NodeKind.FUNCTION if _is_default_export(node) else None
        kind = self.kinds.get(node.type)
        if kind is NodeKind.FUNCTION and self.key == "python" and _is_python_method(node):
            return NodeKind.METHOD
        return kind

    def visit(self, root: Node) -> list[CodeChunk]:
        chunks = []
        for node in _walk(root):
            if self.classify(node) is not None:
                chunks.append(self._emit(node))
        return chunks

    def _emit(self, node: Node) -> CodeChunk:
        start_row = node.start_point[0]
        end_row, end_column = node.end_point[0], node.end_point[1]
        # A node ending at column 0 stops at the previous line's newline
        if end_column == 0 and end_row > start_row:
            end_row -= 1

        return CodeChunk(
            content="".join(self.lines[start_row : end_row + 1]),
            file_path=self.file.path,
            language=self.file.language,
            start_line=start_row + 1,
            end_line=end_row + 1,
            symbol=self._symbol(node),
        )

    def _symbol(self, node: Node) -> Optional[str]:
        name_node = node.child_by_field_name("name")
        if name_node is None or name_node.type not in NAME_NODE_TYPES:
            return None
        return self.source[name_node.start_byte : name_node.end_byte].decode(
            "utf-8", errors="replace"
        )


class SyntaxChunker:
    """Extract functions, methods, lambdas and classes as chunks.

    Nested declarations produce their own chunks, so a class chunk and the
    chunks of its methods overlap.
    """

    def __init__(self):
        self._parsers: dict[str, Parser] = {}

    def supports(self, file: ScannedFile) -> bool:
        """Whether a grammar exists for this file's language."""
        return grammar_key(file) is not None

    def chunk(self, file: ScannedFile) -> list[CodeChunk]:
        """Split a file into declaration chunks.

        Raises:
            ChunkExtractionError: no grammar is available, or the file
                does not parse cleanly.
        """
        key = grammar_key(file)
        if key is None:
            raise ChunkExtractionError(f"No grammar for language '{file.language}'")

        source = file.content.encode("utf-8")
        tree = self._parser(key).parse(source)
        if tree.root_node.has_error:
            raise ChunkExtractionError(f"Syntax errors in {file.path}")

        return _DeclarationVisitor(file, key, source).visit(tree.root_node)

    def _parser(self, key: str) -> Parser:
        if key not in self._parsers:
            module_name, factory = GRAMMARS[key]
            try:
                module = importlib.import_module(module_name)
            except ImportError as exc:
                raise ChunkExtractionError(f"Grammar package {module_name} is not installed") from exc
            self._parsers[key] = Parser(Language(getattr(module, factory)()))
            logger.debug("Loaded %s grammar", key)
        return self._parsers[key]
