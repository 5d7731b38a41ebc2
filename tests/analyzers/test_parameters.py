"""Tests for parameter shape classification."""

from __future__ import annotations

from typing import List

from jsmanifest.analyzers.parameters import classify_parameters
from jsmanifest.analyzers.tree_sitter import SourceParser, iter_nodes
from jsmanifest.models import Parameter, ParameterShape


def _params(source: str, filename: str = "params.js") -> List[Parameter]:
    tree = SourceParser().parse(source, filename)
    function = next(
        node for node in iter_nodes(tree.root_node) if node.type == "function_declaration"
    )
    return classify_parameters(function.child_by_field_name("parameters"))


def test_javascript_parameter_shapes() -> None:
    params = _params("function f(a, b = 2, { c, d: e, f = 1, ...others }, [x, , y], ...rest) {}\n")

    assert [param.to_dict() for param in params] == [
        {"name": "a", "type": "any"},
        {"name": "b", "type": "any", "hasDefault": True},
        {
            "name": "objectPattern",
            "type": "any",
            "properties": [
                {"name": "c", "type": "any"},
                {"name": "d", "type": "any"},
                {"name": "f", "type": "any"},
                {"name": "rest", "type": "any"},
            ],
        },
        {
            "name": "arrayPattern",
            "type": "any",
            "elements": [{"name": "x", "type": "any"}, {"name": "y", "type": "any"}],
        },
        {"name": "...rest", "type": "any"},
    ]
    assert [param.shape for param in params] == [
        ParameterShape.SIMPLE,
        ParameterShape.DEFAULTED,
        ParameterShape.OBJECT_PATTERN,
        ParameterShape.ARRAY_PATTERN,
        ParameterShape.REST,
    ]


def test_defaulted_pattern_is_named_destructured() -> None:
    (param,) = _params("function f({ a } = {}) {}\n")
    assert param.name == "destructured"
    assert param.has_default is True


def test_typescript_parameters_carry_annotations() -> None:
    params = _params(
        "function g(name: string, count: number = 1, opts?: Options, ...items: string[]): void {}\n",
        "params.ts",
    )

    assert [param.to_dict() for param in params] == [
        {"name": "name", "type": "string"},
        {"name": "count", "type": "number", "hasDefault": True},
        {"name": "opts", "type": "Options"},
        {"name": "...items", "type": "string[]"},
    ]


def test_typescript_destructured_parameter_keeps_type() -> None:
    (param,) = _params("function h({ a, b }: Props) {}\n", "params.ts")
    assert param.name == "objectPattern"
    assert param.type == "Props"
    assert [member.name for member in param.properties or []] == ["a", "b"]


def test_unrecognised_parameter_degrades_to_unknown() -> None:
    (param,) = _params("function bound(this: Window) {}\n", "params.ts")
    assert param.name == "unknown"
    assert param.shape is ParameterShape.UNKNOWN


def test_missing_parameter_list_is_empty() -> None:
    assert classify_parameters(None) == []
