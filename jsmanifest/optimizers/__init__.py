"""Manifest optimizers applied after aggregation."""

from __future__ import annotations

from .interning import StringTable, intern_strings, resolve_string_refs
from .llm import simplify_for_llm

__all__ = ["StringTable", "intern_strings", "resolve_string_refs", "simplify_for_llm"]
