"""Serialization of manifests to JSON files, optionally gzip-compressed."""

from __future__ import annotations

import gzip
import json
from pathlib import Path
from typing import Any, Mapping

from ..errors import FileSystemError
from ..logging import NullTracer, Tracer


class ManifestStore:
    """Writes manifest payloads to disk."""

    def __init__(self, tracer: Tracer | None = None) -> None:
        self._tracer = tracer or NullTracer()

    def write(self, data: Mapping[str, Any], output_path: str | Path, compress: bool = False) -> Path:
        """Write ``data`` as indented JSON and return the final path.

        With ``compress`` the payload is gzip-compressed into ``<output_path>.gz``.
        """
        target = Path(output_path)
        if compress:
            target = target.with_name(f"{target.name}.gz")

        with self._tracer.span("write_manifest", path=str(target), compress=compress):
            payload = json.dumps(data, indent=2).encode("utf-8")
            try:
                target.parent.mkdir(parents=True, exist_ok=True)
                if compress:
                    with gzip.open(target, "wb") as handle:
                        handle.write(payload)
                else:
                    target.write_bytes(payload)
            except OSError as exc:
                raise FileSystemError(f"Could not write manifest: {exc}", str(target)) from exc
        return target

    @staticmethod
    def load(path: str | Path) -> Any:
        """Read a manifest written by :meth:`write`, transparently handling gzip."""
        source = Path(path)
        try:
            if source.suffix == ".gz":
                with gzip.open(source, "rt", encoding="utf-8") as handle:
                    return json.load(handle)
            return json.loads(source.read_text(encoding="utf-8"))
        except OSError as exc:
            raise FileSystemError(f"Could not read manifest: {exc}", str(source)) from exc


__all__ = ["ManifestStore"]
