"""Tests for the tree-sitter front-end."""

from __future__ import annotations

from typing import List

import pytest

from jsmanifest.analyzers.tree_sitter import (
    SourceParser,
    char_column,
    dialect_for_path,
    string_value,
    walk,
)
from jsmanifest.errors import ParseError


@pytest.mark.parametrize(
    ("path", "dialect"),
    [
        ("src/app.js", "javascript"),
        ("src/App.jsx", "javascript"),
        ("lib/index.mjs", "javascript"),
        ("src/service.ts", "typescript"),
        ("src/View.TSX", "tsx"),
        ("README", "javascript"),
    ],
)
def test_dialect_for_path(path: str, dialect: str) -> None:
    assert dialect_for_path(path) == dialect


def test_parse_returns_tree_for_valid_source() -> None:
    tree = SourceParser().parse("const answer = 42;\n", "answer.js")
    assert tree.root_node.type == "program"
    assert not tree.root_node.has_error


def test_parse_accepts_typescript_annotations() -> None:
    tree = SourceParser().parse("let count: number = 1;\n", "count.ts")
    assert not tree.root_node.has_error


def test_parse_reports_syntax_errors_with_position() -> None:
    with pytest.raises(ParseError) as excinfo:
        SourceParser().parse("const ok = 1;\nfunction broken( {\n", "src/broken.js")

    error = excinfo.value
    assert error.path == "src/broken.js"
    assert error.position is not None
    assert error.position.line >= 1
    assert "src/broken.js" in str(error)


def test_walk_visits_depth_first_and_honours_skip() -> None:
    tree = SourceParser().parse(
        "function outer() { function inner() {} }\nfunction after() {}\n", "walk.js"
    )
    visited: List[str] = []

    def on_function(node, context: List[str]) -> bool:
        name = node.child_by_field_name("name").text.decode()
        context.append(name)
        return name != "outer"

    walk(tree.root_node, {"function_declaration": on_function}, visited)

    assert visited == ["outer", "after"]


def test_string_value_strips_quotes() -> None:
    tree = SourceParser().parse("import x from './module';\n", "quotes.js")
    statement = tree.root_node.named_children[0]
    assert string_value(statement.child_by_field_name("source")) == "./module"


def test_char_column_counts_multibyte_characters() -> None:
    source = "x\nlet é = 1;\n".encode("utf-8")
    offset = source.index(b"=")

    assert char_column(source, offset, offset - 2) == 6
