"""Syntax-tree analysis: parsing front-end, type/parameter classification and extraction."""

from __future__ import annotations

from .parameters import classify_parameter, classify_parameters
from .symbols import ExtractionContext, SymbolExtractor
from .tree_sitter import SourceParser, dialect_for_path, walk
from .types import resolve_type

__all__ = [
    "ExtractionContext",
    "SourceParser",
    "SymbolExtractor",
    "classify_parameter",
    "classify_parameters",
    "dialect_for_path",
    "resolve_type",
    "walk",
]
