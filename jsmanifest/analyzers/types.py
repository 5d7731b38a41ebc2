"""Canonical string rendering of TypeScript type annotations."""

from __future__ import annotations

from typing import Iterator, Optional

from tree_sitter import Node

from ..models import ANY_TYPE
from .tree_sitter import node_text

_PRIMITIVES = {
    "string",
    "number",
    "boolean",
    "any",
    "void",
    "null",
    "undefined",
    "never",
    "unknown",
}


def resolve_type(node: Optional[Node]) -> str:
    """Return the canonical string for a type annotation node.

    Resolution is total: missing nodes and shapes outside primitives, arrays,
    generic references, unions and intersections all become ``"any"``.
    """
    if node is None:
        return ANY_TYPE

    kind = node.type
    if kind in {"type_annotation", "parenthesized_type"}:
        inner = node.named_children[0] if node.named_children else None
        return resolve_type(inner)
    if kind == "predefined_type":
        text = node_text(node)
        return text if text in _PRIMITIVES else ANY_TYPE
    if kind == "literal_type":
        # only the null/undefined literals are primitives
        inner = node.named_children[0] if node.named_children else None
        if inner is not None and inner.type in {"null", "undefined"}:
            return inner.type
        return ANY_TYPE
    if kind == "array_type":
        element = node.named_children[0] if node.named_children else None
        return f"{resolve_type(element)}[]"
    if kind == "type_identifier":
        return node_text(node)
    if kind == "generic_type":
        return _resolve_generic(node)
    if kind == "union_type":
        return " | ".join(resolve_type(member) for member in _flatten(node, kind))
    if kind == "intersection_type":
        return " & ".join(resolve_type(member) for member in _flatten(node, kind))
    return ANY_TYPE


def _resolve_generic(node: Node) -> str:
    name_node = node.child_by_field_name("name")
    if name_node is None or name_node.type != "type_identifier":
        return ANY_TYPE
    name = node_text(name_node)
    arguments = node.child_by_field_name("type_arguments")
    if arguments is None or not arguments.named_children:
        return name
    rendered = ", ".join(resolve_type(argument) for argument in arguments.named_children)
    return f"{name}<{rendered}>"


def _flatten(node: Node, kind: str) -> Iterator[Node]:
    # union/intersection nodes nest to the left: A | B | C is ((A | B) | C)
    for child in node.named_children:
        if child.type == kind:
            yield from _flatten(child, kind)
        else:
            yield child


__all__ = ["resolve_type"]
