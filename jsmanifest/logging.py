"""Logging and call tracing utilities for jsmanifest."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Protocol

_LOGGER_NAME = "jsmanifest"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the jsmanifest hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the jsmanifest logger with console output and optional file sink."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI is invoked multiple times.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(logging.Formatter("[jsmanifest] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        # The file sink keeps call traces even when the console stays quiet.
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)
        logger.setLevel(logging.DEBUG)

    return logger


class Tracer(Protocol):
    """Records call, return and error events around a unit of work."""

    def span(self, name: str, **details: Any) -> Any:
        """Return a context manager wrapping one traced call."""


class NullTracer:
    """Tracer that records nothing."""

    @contextmanager
    def span(self, name: str, **details: Any) -> Iterator[None]:
        yield


class LoggingTracer:
    """Tracer that emits call/return/error records to a logger at DEBUG level."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or get_logger("trace")

    @contextmanager
    def span(self, name: str, **details: Any) -> Iterator[None]:
        self._logger.debug("call %s %s", name, _format_details(details))
        try:
            yield
        except Exception as exc:
            self._logger.debug("error %s %s: %s", name, type(exc).__name__, exc)
            raise
        self._logger.debug("return %s", name)


def _format_details(details: dict[str, Any]) -> str:
    return " ".join(f"{key}={value!r}" for key, value in details.items())


__all__ = [
    "LoggingTracer",
    "NullTracer",
    "Tracer",
    "configure_logging",
    "get_logger",
]
