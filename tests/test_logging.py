"""Tests for logging configuration and call tracing."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from jsmanifest.logging import LoggingTracer, NullTracer, configure_logging, get_logger


def test_get_logger_is_namespaced() -> None:
    assert get_logger().name == "jsmanifest"
    assert get_logger("cli").name == "jsmanifest.cli"


def test_configure_logging_sets_level_and_replaces_handlers() -> None:
    configure_logging(verbose=False)
    logger = configure_logging(verbose=True)

    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert logger.propagate is False


def test_configure_logging_writes_debug_records_to_file(tmp_path: Path) -> None:
    log_file = tmp_path / "logs" / "run.log"
    logger = configure_logging(verbose=False, log_file=log_file)

    get_logger("trace").debug("call scan root='/tmp'")
    for handler in logger.handlers:
        handler.flush()

    assert "call scan root='/tmp'" in log_file.read_text(encoding="utf-8")


def test_logging_tracer_records_call_and_return(caplog: pytest.LogCaptureFixture) -> None:
    tracer = LoggingTracer(logging.getLogger("tests.trace"))

    with caplog.at_level(logging.DEBUG, logger="tests.trace"):
        with tracer.span("extract", path="a.js"):
            pass

    assert [record.getMessage() for record in caplog.records] == [
        "call extract path='a.js'",
        "return extract",
    ]


def test_logging_tracer_records_errors_and_reraises(caplog: pytest.LogCaptureFixture) -> None:
    tracer = LoggingTracer(logging.getLogger("tests.trace"))

    with caplog.at_level(logging.DEBUG, logger="tests.trace"):
        with pytest.raises(ValueError, match="boom"):
            with tracer.span("parse", path="b.js"):
                raise ValueError("boom")

    assert [record.getMessage() for record in caplog.records] == [
        "call parse path='b.js'",
        "error parse ValueError: boom",
    ]


def test_null_tracer_is_transparent() -> None:
    with pytest.raises(KeyError):
        with NullTracer().span("anything", detail=1):
            raise KeyError("missing")
