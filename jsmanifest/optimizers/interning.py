"""Lossless string interning for serialized manifests."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Union

from ..models import ProjectManifest

REF_KEY = "$ref"
STRING_TABLE_KEY = "stringTable"
# Top-level metadata is written verbatim rather than interned.
PASSTHROUGH_FIELDS = frozenset({"version", "generated", "rootPath"})


class StringTable:
    """Append-only, deduplicated table of interned strings."""

    def __init__(self) -> None:
        self._strings: List[str] = []
        self._index: Dict[str, int] = {}

    def intern(self, value: str) -> Dict[str, int]:
        index = self._index.get(value)
        if index is None:
            index = len(self._strings)
            self._strings.append(value)
            self._index[value] = index
        return {REF_KEY: index}

    def to_list(self) -> List[str]:
        return list(self._strings)

    def __len__(self) -> int:
        return len(self._strings)


def intern_strings(manifest: Union[ProjectManifest, Mapping[str, Any]]) -> Dict[str, Any]:
    """Return a copy of ``manifest`` whose string leaves reference a string table.

    Indices are assigned in first-encounter order of a depth-first walk over
    keys in insertion order. The table is attached under ``stringTable``.
    """
    data = manifest.to_dict() if isinstance(manifest, ProjectManifest) else manifest
    table = StringTable()
    optimized: Dict[str, Any] = {}
    for key, value in data.items():
        optimized[key] = value if key in PASSTHROUGH_FIELDS else _intern_value(value, table)
    optimized[STRING_TABLE_KEY] = table.to_list()
    return optimized


def _intern_value(value: Any, table: StringTable) -> Any:
    if isinstance(value, str):
        return table.intern(value)
    if isinstance(value, Mapping):
        return {key: _intern_value(item, table) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_intern_value(item, table) for item in value]
    return value


def resolve_string_refs(optimized: Mapping[str, Any]) -> Dict[str, Any]:
    """Invert :func:`intern_strings`, dropping the string table."""
    strings = list(optimized.get(STRING_TABLE_KEY, []))
    restored: Dict[str, Any] = {}
    for key, value in optimized.items():
        if key == STRING_TABLE_KEY:
            continue
        restored[key] = value if key in PASSTHROUGH_FIELDS else _resolve_value(value, strings)
    return restored


def _resolve_value(value: Any, strings: List[str]) -> Any:
    if isinstance(value, Mapping):
        if set(value) == {REF_KEY} and isinstance(value[REF_KEY], int):
            return strings[value[REF_KEY]]
        return {key: _resolve_value(item, strings) for key, item in value.items()}
    if isinstance(value, list):
        return [_resolve_value(item, strings) for item in value]
    return value


__all__ = [
    "PASSTHROUGH_FIELDS",
    "REF_KEY",
    "STRING_TABLE_KEY",
    "StringTable",
    "intern_strings",
    "resolve_string_refs",
]
