"""Lossy projection of a manifest for token-constrained LLM consumers."""

from __future__ import annotations

import copy
from typing import Any, Dict, List, Mapping, Union

from ..models import ProjectManifest

ManifestLike = Union[ProjectManifest, Mapping[str, Any]]


def simplify_for_llm(manifest: ManifestLike) -> Dict[str, Any]:
    """Return a reduced copy of ``manifest`` without locations, stats or provenance.

    The projection is pure and idempotent; re-running it on its own output
    returns an equal structure.
    """
    data = manifest.to_dict() if isinstance(manifest, ProjectManifest) else manifest
    simplified: Dict[str, Any] = {}
    if "version" in data:
        simplified["version"] = data["version"]
    if "rootPath" in data:
        simplified["rootPath"] = data["rootPath"]
    simplified["files"] = [_simplify_file(entry) for entry in data.get("files", [])]
    return simplified


def _simplify_file(entry: Mapping[str, Any]) -> Dict[str, Any]:
    return {
        "path": entry.get("path"),
        "symbols": [_simplify_symbol(symbol) for symbol in entry.get("symbols", [])],
        "dependencies": copy.deepcopy(list(entry.get("dependencies", []))),
        "hasDefaultExport": bool(entry.get("hasDefaultExport", False)),
    }


def _simplify_symbol(symbol: Mapping[str, Any]) -> Dict[str, Any]:
    kind = symbol.get("type")
    result: Dict[str, Any] = {"name": symbol.get("name"), "type": kind}
    if kind == "function":
        result["params"] = _simplify_params(symbol.get("params", []))
        result["returnType"] = symbol.get("returnType", "any")
    elif kind == "class":
        result["fields"] = [
            {
                "name": member.get("name"),
                "type": member.get("type", "any"),
                "static": bool(member.get("static", False)),
            }
            for member in symbol.get("fields", [])
        ]
        result["methods"] = [
            {
                "name": member.get("name"),
                "kind": member.get("kind", "method"),
                "static": bool(member.get("static", False)),
                "params": _simplify_params(member.get("params", [])),
                "returnType": member.get("returnType", "any"),
            }
            for member in symbol.get("methods", [])
        ]
        if symbol.get("extends") is not None:
            result["extends"] = symbol["extends"]
    elif kind == "export":
        result["localName"] = symbol.get("localName")
    return result


def _simplify_params(params: List[Mapping[str, Any]]) -> List[Dict[str, Any]]:
    simplified: List[Dict[str, Any]] = []
    for param in params:
        entry: Dict[str, Any] = {"name": param.get("name"), "type": param.get("type", "any")}
        if param.get("hasDefault"):
            entry["hasDefault"] = True
        for key in ("properties", "elements"):
            if param.get(key) is not None:
                entry[key] = [
                    {"name": member.get("name"), "type": member.get("type", "any")}
                    for member in param[key]
                ]
        simplified.append(entry)
    return simplified


__all__ = ["simplify_for_llm"]
