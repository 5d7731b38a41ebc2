"""Symbol and dependency extraction from JavaScript/TypeScript syntax trees."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Callable, Dict, List, Optional

from tree_sitter import Node, Tree

from ..errors import ParseError
from ..logging import NullTracer, Tracer
from ..models import (
    ClassField,
    ClassMethod,
    ClassSymbol,
    ConstantSymbol,
    Dependency,
    ExportSymbol,
    ExtractionResult,
    FunctionSymbol,
    ImportDependency,
    ImportSpecifier,
    Location,
    RequireDependency,
    Symbol,
)
from .parameters import classify_parameters
from .tree_sitter import (
    char_column,
    first_error_node,
    has_keyword,
    node_position,
    node_text,
    string_value,
    walk,
)
from .types import resolve_type

_FUNCTION_VALUES = {
    "arrow_function",
    "function",
    "function_expression",
    "generator_function",
}
_FIELD_MEMBERS = {"field_definition", "public_field_definition"}
_NAMED_KEYS = {"property_identifier", "private_property_identifier", "identifier"}


@dataclass
class ExtractionContext:
    """Accumulator threaded through every visit handler for one file."""

    path: str
    source: bytes = b""
    symbols: List[Symbol] = field(default_factory=list)
    dependencies: List[Dependency] = field(default_factory=list)
    has_default_export: bool = False

    def location(self, node: Node) -> Location:
        """Return the span of ``node`` with 1-based lines and character columns."""
        start_row, start_column = node.start_point
        end_row, end_column = node.end_point
        return Location(
            start_line=start_row + 1,
            start_column=char_column(self.source, node.start_byte, start_column),
            end_line=end_row + 1,
            end_column=char_column(self.source, node.end_byte, end_column),
        )

    def result(self) -> ExtractionResult:
        return ExtractionResult(
            symbols=list(self.symbols),
            dependencies=list(self.dependencies),
            has_default_export=self.has_default_export,
        )


VisitHandler = Callable[[Node, ExtractionContext], bool]


class SymbolExtractor:
    """Walks one syntax tree and records its symbols and module dependencies."""

    def __init__(self, tracer: Tracer | None = None) -> None:
        self._tracer = tracer or NullTracer()

    def extract(
        self, tree: Tree, path: str | PurePath, source: str | bytes | None = None
    ) -> ExtractionResult:
        """Return the symbols, dependencies and default-export flag of ``tree``.

        ``source`` is the text ``tree`` was parsed from; locations count its
        characters. When omitted it is read back from the tree.

        Extraction is all-or-nothing: any failure is raised as a
        :class:`ParseError` for ``path`` and no partial result is returned.
        """
        file_path = str(path)
        with self._tracer.span("extract", path=file_path):
            root = tree.root_node
            data = _source_bytes(root, source)
            error_node = first_error_node(root) if root.has_error else None
            if error_node is not None:
                position = node_position(error_node, data)
                raise ParseError(
                    f"Failed to parse {file_path}: syntax error at line {position.line}, "
                    f"column {position.column}",
                    file_path,
                    position,
                )
            context = ExtractionContext(path=file_path, source=data)
            try:
                walk(root, SYMBOL_HANDLERS, context)
            except ParseError:
                raise
            except Exception as exc:
                raise ParseError(f"Failed to parse {file_path}: {exc}", file_path) from exc
            return context.result()


# ----------------------------------------------------------------------
# Dependencies


def visit_import(node: Node, context: ExtractionContext) -> bool:
    source = node.child_by_field_name("source")
    if source is None:
        # TypeScript: import fs = require("fs")
        for child in node.named_children:
            if child.type == "import_require_clause":
                required = child.child_by_field_name("source")
                if required is not None:
                    context.dependencies.append(RequireDependency(source=string_value(required)))
        return False

    specifiers: List[ImportSpecifier] = []
    for clause in node.named_children:
        if clause.type != "import_clause":
            continue
        for child in clause.named_children:
            if child.type == "identifier":
                specifiers.append(ImportSpecifier(kind="default", local=node_text(child)))
            elif child.type == "namespace_import":
                local = _first_named(child, "identifier")
                specifiers.append(ImportSpecifier(kind="namespace", local=node_text(local)))
            elif child.type == "named_imports":
                specifiers.extend(
                    _named_import(spec)
                    for spec in child.named_children
                    if spec.type == "import_specifier"
                )
    context.dependencies.append(ImportDependency(source=string_value(source), specifiers=specifiers))
    return False


def _named_import(node: Node) -> ImportSpecifier:
    imported = _module_name(node.child_by_field_name("name"))
    alias = node.child_by_field_name("alias")
    local = node_text(alias) if alias is not None else imported
    return ImportSpecifier(kind="named", local=local, imported=imported)


def visit_call(node: Node, context: ExtractionContext) -> bool:
    source = _require_source(node)
    if source is not None:
        context.dependencies.append(RequireDependency(source=source))
    return True


def _require_source(node: Node) -> Optional[str]:
    """Return the module of a ``require("x")`` call, or None for any other call."""
    if node.type != "call_expression":
        return None
    callee = node.child_by_field_name("function")
    if callee is None or callee.type != "identifier" or node_text(callee) != "require":
        return None
    arguments = node.child_by_field_name("arguments")
    if arguments is None:
        return None
    values = [child for child in arguments.named_children if child.type != "comment"]
    if len(values) != 1 or values[0].type != "string":
        return None
    return string_value(values[0])


# ----------------------------------------------------------------------
# Declarations


def visit_function_declaration(node: Node, context: ExtractionContext) -> bool:
    name = node.child_by_field_name("name")
    if name is None:
        return True
    context.symbols.append(
        FunctionSymbol(
            name=node_text(name),
            params=classify_parameters(node.child_by_field_name("parameters")),
            return_type=resolve_type(node.child_by_field_name("return_type")),
            loc=context.location(node),
        )
    )
    return True


def visit_variable_declarator(node: Node, context: ExtractionContext) -> bool:
    name = node.child_by_field_name("name")
    value = node.child_by_field_name("value")
    if name is None or name.type != "identifier" or value is None:
        return True

    value = _unparenthesize(value)
    if value.type in _FUNCTION_VALUES:
        params_node = value.child_by_field_name("parameters")
        if params_node is None:
            params_node = value.child_by_field_name("parameter")
        context.symbols.append(
            FunctionSymbol(
                name=node_text(name),
                params=classify_parameters(params_node),
                return_type=resolve_type(value.child_by_field_name("return_type")),
                loc=context.location(node),
            )
        )
    elif _require_source(value) is None:
        context.symbols.append(ConstantSymbol(name=node_text(name), loc=context.location(node)))
    return True


def visit_class_declaration(node: Node, context: ExtractionContext) -> bool:
    name = node.child_by_field_name("name")
    if name is None:
        return True

    symbol = ClassSymbol(name=node_text(name), extends=_superclass(node), loc=context.location(node))
    body = node.child_by_field_name("body")
    members = body.named_children if body is not None else []
    for member in members:
        if member.type == "method_definition":
            symbol.methods.append(_class_method(member, context))
        elif member.type in _FIELD_MEMBERS:
            symbol.fields.append(_class_field(member, context))
    context.symbols.append(symbol)
    return True


def _superclass(node: Node) -> Optional[str]:
    heritage = _first_named(node, "class_heritage")
    if heritage is None:
        return None
    for part in heritage.named_children:
        if part.type == "extends_clause":
            value = part.child_by_field_name("value")
            return node_text(value) if value is not None and value.type == "identifier" else None
        if part.type == "identifier":
            return node_text(part)
        if part.type != "comment":
            return None
    return None


def _class_method(node: Node, context: ExtractionContext) -> ClassMethod:
    key = node.child_by_field_name("name")
    name = _member_name(key)
    if key is not None and key.type == "property_identifier" and name == "constructor":
        kind = "constructor"
    elif has_keyword(node, "get"):
        kind = "get"
    elif has_keyword(node, "set"):
        kind = "set"
    else:
        kind = "method"
    return ClassMethod(
        name=name,
        kind=kind,
        static=has_keyword(node, "static"),
        params=classify_parameters(node.child_by_field_name("parameters")),
        return_type=resolve_type(node.child_by_field_name("return_type")),
        loc=context.location(node),
    )


def _class_field(node: Node, context: ExtractionContext) -> ClassField:
    key = node.child_by_field_name("name")
    if key is None:
        key = node.child_by_field_name("property")
    return ClassField(
        name=_member_name(key),
        static=has_keyword(node, "static"),
        type=resolve_type(node.child_by_field_name("type")),
        loc=context.location(node),
    )


def _member_name(key: Optional[Node]) -> str:
    # Keys that cannot be resolved statically all share the "computed" placeholder.
    if key is None:
        return "computed"
    if key.type in _NAMED_KEYS:
        return node_text(key)
    if key.type == "string":
        return string_value(key)
    return "computed"


# ----------------------------------------------------------------------
# Exports


def visit_export(node: Node, context: ExtractionContext) -> bool:
    if has_keyword(node, "default"):
        context.has_default_export = True
        # the exported value contributes no symbols, only dependencies
        for child in node.named_children:
            walk(child, DEPENDENCY_HANDLERS, context)
        return False

    if node.child_by_field_name("declaration") is not None:
        return True

    clause = _first_named(node, "export_clause")
    if clause is not None:
        for spec in clause.named_children:
            if spec.type != "export_specifier":
                continue
            local = _module_name(spec.child_by_field_name("name"))
            alias = spec.child_by_field_name("alias")
            context.symbols.append(
                ExportSymbol(
                    name=_module_name(alias) if alias is not None else local,
                    local_name=local,
                    loc=context.location(spec),
                )
            )
    return False


# ----------------------------------------------------------------------
# Helpers


def _first_named(node: Node, kind: str) -> Optional[Node]:
    for child in node.named_children:
        if child.type == kind:
            return child
    return None


def _module_name(node: Optional[Node]) -> str:
    if node is None:
        return ""
    return string_value(node) if node.type == "string" else node_text(node)


def _source_bytes(root: Node, source: str | bytes | None) -> bytes:
    if isinstance(source, str):
        return source.encode("utf-8")
    if source is not None:
        return source
    # the root node starts after leading whitespace; pad so byte offsets line up
    return b" " * root.start_byte + (root.text or b"")


def _unparenthesize(node: Node) -> Node:
    while node.type == "parenthesized_expression" and node.named_children:
        node = node.named_children[0]
    return node


DEPENDENCY_HANDLERS: Dict[str, VisitHandler] = {
    "import_statement": visit_import,
    "call_expression": visit_call,
}

SYMBOL_HANDLERS: Dict[str, VisitHandler] = {
    **DEPENDENCY_HANDLERS,
    "function_declaration": visit_function_declaration,
    "generator_function_declaration": visit_function_declaration,
    "variable_declarator": visit_variable_declarator,
    "class_declaration": visit_class_declaration,
    "abstract_class_declaration": visit_class_declaration,
    "export_statement": visit_export,
}


__all__ = ["ExtractionContext", "SymbolExtractor"]
