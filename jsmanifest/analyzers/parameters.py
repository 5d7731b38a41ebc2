"""Classification of function parameters into uniform Parameter records."""

from __future__ import annotations

from typing import List, Optional, Tuple

from tree_sitter import Node

from ..models import ANY_TYPE, Parameter, ParameterShape, PatternMember
from .tree_sitter import node_text
from .types import resolve_type

_WRAPPERS = {"required_parameter", "optional_parameter"}


def classify_parameters(params_node: Optional[Node]) -> List[Parameter]:
    """Classify every parameter of a ``formal_parameters`` node (or a lone identifier)."""
    if params_node is None:
        return []
    if params_node.type != "formal_parameters":
        # arrow functions may take a single bare identifier: x => x
        return [classify_parameter(params_node)]
    return [
        classify_parameter(child)
        for child in params_node.named_children
        if child.type not in {"comment", "decorator"}
    ]


def classify_parameter(node: Node) -> Parameter:
    """Return the Parameter describing ``node``.

    Shapes are tried in order (identifier, defaulted, object pattern, array
    pattern, rest); anything else yields the ``"unknown"`` placeholder.
    """
    pattern, annotation, default = _unwrap(node)
    type_name = resolve_type(annotation)

    if pattern.type == "identifier" and default is None:
        return Parameter(name=node_text(pattern), type=type_name)

    if default is not None:
        name = node_text(pattern) if pattern.type == "identifier" else "destructured"
        return Parameter(
            name=name,
            type=type_name,
            shape=ParameterShape.DEFAULTED,
            has_default=True,
        )

    if pattern.type == "object_pattern":
        return Parameter(
            name="objectPattern",
            type=type_name,
            shape=ParameterShape.OBJECT_PATTERN,
            properties=[_object_member(child) for child in pattern.named_children if child.type != "comment"],
        )

    if pattern.type == "array_pattern":
        return Parameter(
            name="arrayPattern",
            type=type_name,
            shape=ParameterShape.ARRAY_PATTERN,
            elements=[
                PatternMember(name=node_text(child))
                for child in pattern.named_children
                if child.type == "identifier"
            ],
        )

    if pattern.type == "rest_pattern":
        target = pattern.named_children[0] if pattern.named_children else None
        name = node_text(target) if target is not None and target.type == "identifier" else "rest"
        return Parameter(name=f"...{name}", type=type_name, shape=ParameterShape.REST)

    return Parameter(name="unknown", shape=ParameterShape.UNKNOWN)


def _unwrap(node: Node) -> Tuple[Node, Optional[Node], Optional[Node]]:
    """Return ``(pattern, type annotation, default value)`` for a parameter node."""
    if node.type in _WRAPPERS:
        pattern = node.child_by_field_name("pattern")
        annotation = node.child_by_field_name("type")
        default = node.child_by_field_name("value")
        if pattern is None:
            return node, annotation, default
        if pattern.type == "assignment_pattern":
            left = pattern.child_by_field_name("left")
            default = pattern.child_by_field_name("right")
            if left is not None:
                pattern = left
        return pattern, annotation, default
    if node.type == "assignment_pattern":
        left = node.child_by_field_name("left")
        return (left if left is not None else node), None, node.child_by_field_name("right")
    return node, None, None


def _object_member(node: Node) -> PatternMember:
    if node.type == "shorthand_property_identifier_pattern":
        return PatternMember(name=node_text(node))
    if node.type == "object_assignment_pattern":
        left = node.child_by_field_name("left")
        if left is not None and left.type == "shorthand_property_identifier_pattern":
            return PatternMember(name=node_text(left))
        return PatternMember(name="computed")
    if node.type == "pair_pattern":
        key = node.child_by_field_name("key")
        if key is not None and key.type == "property_identifier":
            return PatternMember(name=node_text(key))
        return PatternMember(name="computed")
    # rest properties ({...others}) collapse to a placeholder
    return PatternMember(name="rest", type=ANY_TYPE)


__all__ = ["classify_parameter", "classify_parameters"]
