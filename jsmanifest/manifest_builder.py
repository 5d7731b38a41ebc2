"""Aggregation of per-file extraction results into a project manifest."""

from __future__ import annotations

import os
from datetime import UTC, datetime
from pathlib import Path, PurePath
from typing import Callable, Dict, List, Sequence

from .errors import UserInputError
from .logging import NullTracer, Tracer
from .models import (
    ExtractionResult,
    FileManifest,
    FileResult,
    ManifestStats,
    ProjectManifest,
    SymbolKind,
    TypeStats,
)

MANIFEST_VERSION = "1.0.0"

# Every SymbolKind must have a counter; a missing entry fails loudly in build().
TYPE_STAT_FIELDS: Dict[SymbolKind, str] = {
    SymbolKind.FUNCTION: "functions",
    SymbolKind.CLASS: "classes",
    SymbolKind.CONSTANT: "constants",
    SymbolKind.EXPORT: "exports",
}


def _utc_now() -> datetime:
    return datetime.now(UTC)


class ManifestBuilder:
    """Builds a :class:`ProjectManifest` from ordered file results."""

    def __init__(
        self,
        tracer: Tracer | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._tracer = tracer or NullTracer()
        self._clock = clock

    def build(self, file_results: Sequence[FileResult], root_path: str | PurePath) -> ProjectManifest:
        """Return the manifest for ``file_results`` in input order.

        Raises :class:`UserInputError` when there are no files to process.
        """
        if not file_results:
            raise UserInputError("No files to process")

        root = str(root_path)
        with self._tracer.span("build_manifest", files=len(file_results), root=root):
            stats = ManifestStats(total_files=len(file_results))
            files: List[FileManifest] = []
            for result in file_results:
                entry = _file_manifest(result, root)
                stats.total_symbols += len(entry.symbols)
                stats.total_dependencies += len(entry.dependencies)
                for symbol in entry.symbols:
                    _count(stats.type_stats, symbol.kind)
                files.append(entry)

            return ProjectManifest(
                version=MANIFEST_VERSION,
                generated=self._clock().isoformat().replace("+00:00", "Z"),
                root_path=root,
                files=files,
                stats=stats,
            )


def _file_manifest(result: FileResult, root: str) -> FileManifest:
    metadata = result.metadata or ExtractionResult()
    return FileManifest(
        path=relative_path(result.path, root),
        filename=PurePath(result.path).name,
        symbols=list(metadata.symbols or []),
        dependencies=list(metadata.dependencies or []),
        has_default_export=bool(metadata.has_default_export),
    )


def _count(type_stats: TypeStats, kind: SymbolKind) -> None:
    attribute = TYPE_STAT_FIELDS[kind]
    setattr(type_stats, attribute, getattr(type_stats, attribute) + 1)


def relative_path(path: str | PurePath, root: str | PurePath) -> str:
    """Return ``path`` relative to ``root`` using forward slashes.

    Relative inputs are resolved against the working directory first, so
    ``relative_path("src/lib/a.js", "src")`` is ``"lib/a.js"``.
    """
    relative = os.path.relpath(os.path.abspath(path), os.path.abspath(root))
    return Path(relative).as_posix()


__all__ = ["MANIFEST_VERSION", "ManifestBuilder", "TYPE_STAT_FIELDS", "relative_path"]
