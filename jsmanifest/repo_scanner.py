"""Source discovery and reading for manifest extraction."""

from __future__ import annotations

import os
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Sequence

from .config import DEFAULT_EXTENSIONS
from .errors import FileSystemError
from .logging import NullTracer, Tracer

_EXCLUDED_DIRS = {
    ".git",
    "node_modules",
    "dist",
    "build",
}


class RepoScanner:
    """Walks a source tree and returns the JavaScript/TypeScript files to extract."""

    def __init__(
        self,
        extensions: Iterable[str] = DEFAULT_EXTENSIONS,
        exclude_paths: Sequence[str] = (),
        tracer: Tracer | None = None,
    ) -> None:
        self._extensions = {ext.lower() for ext in extensions}
        self._exclude_patterns = [pattern.strip().rstrip("/") for pattern in exclude_paths if pattern.strip()]
        self._tracer = tracer or NullTracer()

    def scan(self, root: str | Path) -> List[Path]:
        """Return absolute source paths under ``root`` in sorted order."""
        root_path = Path(root).expanduser().resolve()
        with self._tracer.span("scan", root=str(root_path)):
            if not root_path.exists():
                raise FileSystemError(f"Directory not found: {root}", str(root))
            if not root_path.is_dir():
                raise FileSystemError(f"Not a directory: {root}", str(root))
            try:
                return sorted(self._iter_files(root_path))
            except OSError as exc:
                raise FileSystemError(f"Error scanning directory: {exc}", str(root)) from exc

    def read(self, path: str | Path) -> str:
        """Return the UTF-8 text of ``path``."""
        with self._tracer.span("read", path=str(path)):
            try:
                return Path(path).read_text(encoding="utf-8")
            except FileNotFoundError as exc:
                raise FileSystemError(f"File not found: {path}", str(path)) from exc
            except (OSError, UnicodeDecodeError) as exc:
                raise FileSystemError(f"Could not read file: {exc}", str(path)) from exc

    def _iter_files(self, root: Path) -> Iterator[Path]:
        def _raise(exc: OSError) -> None:
            raise exc

        for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
            current_dir = Path(dirpath)
            rel_dir = current_dir.relative_to(root).as_posix() if current_dir != root else ""

            dirnames[:] = [
                name
                for name in dirnames
                if name not in _EXCLUDED_DIRS and not self._is_excluded(_join(rel_dir, name))
            ]

            for filename in filenames:
                if Path(filename).suffix.lower() not in self._extensions:
                    continue
                if self._is_excluded(_join(rel_dir, filename)):
                    continue
                yield current_dir / filename

    def _is_excluded(self, rel_path: str) -> bool:
        for pattern in self._exclude_patterns:
            if fnmatchcase(rel_path, pattern):
                return True
            if "/" not in pattern and any(fnmatchcase(part, pattern) for part in rel_path.split("/")):
                return True
        return False


def _join(rel_dir: str, name: str) -> str:
    return f"{rel_dir}/{name}" if rel_dir else name


__all__ = ["RepoScanner"]
