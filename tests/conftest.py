from __future__ import annotations

import logging
import textwrap
from pathlib import Path
from typing import Callable, Iterator

import pytest

from jsmanifest.analyzers import SourceParser, SymbolExtractor
from jsmanifest.models import ExtractionResult
from tests._fixtures.repo_builder import RepoBuilder


@pytest.fixture
def repo_builder(tmp_path: Path) -> RepoBuilder:
    """Provide a reusable source tree builder rooted at the pytest tmp_path."""
    return RepoBuilder(tmp_path)


@pytest.fixture
def extract() -> Callable[..., ExtractionResult]:
    """Parse and extract a source snippet as if it were read from ``filename``."""
    parser = SourceParser()
    extractor = SymbolExtractor()

    def _extract(source: str, filename: str = "sample.js") -> ExtractionResult:
        text = textwrap.dedent(source)
        tree = parser.parse(text, filename)
        return extractor.extract(tree, filename, text)

    return _extract


@pytest.fixture(autouse=True)
def _reset_jsmanifest_logger() -> Iterator[None]:
    """Drop handlers installed by configure_logging so tests do not leak output."""
    yield
    logger = logging.getLogger("jsmanifest")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
