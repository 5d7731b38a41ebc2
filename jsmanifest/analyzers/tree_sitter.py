"""Tree-sitter front-end: dialect selection, parsing and depth-first traversal."""

from __future__ import annotations

from pathlib import PurePath
from typing import Callable, Dict, Iterator, Mapping, Optional, TypeVar

import tree_sitter_javascript
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from ..errors import ParseError, Position

_DIALECT_BY_SUFFIX = {
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
}

_LANGUAGE_LOADERS: Dict[str, Callable[[], object]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

ContextT = TypeVar("ContextT")
Handler = Callable[[Node, ContextT], bool]


def dialect_for_path(path: str | PurePath) -> str:
    """Return the grammar used for ``path``; unknown suffixes parse as JavaScript."""
    return _DIALECT_BY_SUFFIX.get(PurePath(path).suffix.lower(), "javascript")


class SourceParser:
    """Parses JavaScript/TypeScript source into tree-sitter syntax trees."""

    def __init__(self) -> None:
        self._parsers: Dict[str, Parser] = {}

    def parse(self, source: str, path: str | PurePath) -> Tree:
        """Parse ``source`` using the dialect implied by ``path``.

        Raises :class:`ParseError` pointing at the first syntax error when the
        grammar could not produce an error-free tree.
        """
        parser = self._get_parser(dialect_for_path(path))
        data = source.encode("utf-8")
        tree = parser.parse(data)
        if tree.root_node.has_error:
            error_node = first_error_node(tree.root_node)
            position = node_position(error_node, data) if error_node is not None else None
            where = f" at line {position.line}, column {position.column}" if position else ""
            raise ParseError(f"Failed to parse {path}: syntax error{where}", str(path), position)
        return tree

    def _get_parser(self, dialect: str) -> Parser:
        parser = self._parsers.get(dialect)
        if parser is not None:
            return parser
        parser = Parser(Language(_LANGUAGE_LOADERS[dialect]()))
        self._parsers[dialect] = parser
        return parser


def walk(root: Node, handlers: Mapping[str, Handler[ContextT]], context: ContextT) -> None:
    """Visit ``root`` depth-first, calling the handler registered for each node type.

    A handler returns ``True`` to continue into the node's children and
    ``False`` to skip them. Node types without a handler are always descended.
    """
    stack = [root]
    while stack:
        node = stack.pop()
        handler = handlers.get(node.type)
        descend = handler(node, context) if handler is not None else True
        if descend:
            stack.extend(reversed(node.named_children))


def first_error_node(root: Node) -> Optional[Node]:
    """Return the first ``ERROR`` or missing node in document order."""
    for node in iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            return node
    return None


def iter_nodes(root: Node) -> Iterator[Node]:
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def node_text(node: Optional[Node]) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf-8", errors="ignore")


def char_column(source: bytes, byte_offset: int, byte_column: int) -> int:
    """Convert a tree-sitter byte column into a character column on the same line."""
    line_start = byte_offset - byte_column
    return len(source[line_start:byte_offset].decode("utf-8", errors="replace"))


def node_position(node: Node, source: Optional[bytes] = None) -> Position:
    """Return the start of ``node``; columns count characters when ``source`` is given."""
    row, column = node.start_point
    if source is not None:
        column = char_column(source, node.start_byte, column)
    return Position(line=row + 1, column=column)


_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
}
_LINE_CONTINUATIONS = {"\n", "\r\n", "\r", "\u2028", "\u2029"}
_OCTAL_DIGITS = set("01234567")


def string_value(node: Node) -> str:
    """Return the value of a string literal node: quotes stripped, escapes decoded."""
    if node.type != "string":
        text = node_text(node)
        if len(text) >= 2 and text[0] == text[-1] and text[0] in {'"', "'", "`"}:
            return text[1:-1]
        return text

    parts = []
    for child in node.named_children:
        if child.type == "escape_sequence":
            parts.append(_unescape(node_text(child)))
        elif child.type == "string_fragment":
            parts.append(node_text(child))
    # astral characters written as \uD83D\uDE00 arrive as two lone surrogates
    return "".join(parts).encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def _unescape(sequence: str) -> str:
    body = sequence[1:]
    if not body or body in _LINE_CONTINUATIONS:
        return ""
    head = body[0]
    if head == "x" and len(body) == 3:
        return chr(int(body[1:], 16))
    if head == "u" and len(body) > 1:
        digits = body[2:-1] if body.startswith("u{") else body[1:]
        return chr(int(digits, 16))
    if set(body) <= _OCTAL_DIGITS:
        # legacy octal, including \0
        return chr(int(body, 8))
    return _SIMPLE_ESCAPES.get(head, body)


def has_keyword(node: Node, *keywords: str) -> bool:
    """Return True when ``node`` has an anonymous child token among ``keywords``."""
    return any(not child.is_named and child.type in keywords for child in node.children)


__all__ = [
    "Handler",
    "SourceParser",
    "char_column",
    "dialect_for_path",
    "first_error_node",
    "has_keyword",
    "iter_nodes",
    "node_position",
    "node_text",
    "string_value",
    "walk",
]
