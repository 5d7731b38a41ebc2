"""Error taxonomy shared by the extraction pipeline and the CLI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar, Optional


@dataclass(frozen=True)
class Position:
    """Best-effort source position (1-based line, 0-based column)."""

    line: int
    column: int


class ManifestError(Exception):
    """Base class for errors surfaced by jsmanifest components."""

    kind: ClassVar[str] = "unexpected"


class UserInputError(ManifestError):
    """Raised when arguments or inputs supplied by the user are invalid."""

    kind = "input"


class ConfigError(UserInputError):
    """Raised when the configuration file cannot be parsed."""


class FileSystemError(ManifestError):
    """Raised when a directory or file cannot be scanned, read or written."""

    kind = "filesystem"

    def __init__(self, message: str, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class ParseError(ManifestError):
    """Raised when a source file cannot be parsed or traversed."""

    kind = "parse"

    def __init__(
        self, message: str, path: str | None = None, position: Position | None = None
    ) -> None:
        super().__init__(message)
        self.path = path
        self.position = position


@dataclass(frozen=True)
class ErrorReport:
    """Tagged description of a failure, one case per taxonomy entry."""

    kind: str
    message: str
    path: Optional[str] = None
    position: Optional[Position] = None


def describe_error(exc: BaseException) -> ErrorReport:
    """Return the tagged report for ``exc``; unknown exceptions are ``unexpected``."""
    if isinstance(exc, ParseError):
        return ErrorReport(kind=exc.kind, message=str(exc), path=exc.path, position=exc.position)
    if isinstance(exc, FileSystemError):
        return ErrorReport(kind=exc.kind, message=str(exc), path=exc.path)
    if isinstance(exc, ManifestError):
        return ErrorReport(kind=exc.kind, message=str(exc))
    return ErrorReport(kind=ManifestError.kind, message=str(exc) or type(exc).__name__)


__all__ = [
    "ConfigError",
    "ErrorReport",
    "FileSystemError",
    "ManifestError",
    "ParseError",
    "Position",
    "UserInputError",
    "describe_error",
]
