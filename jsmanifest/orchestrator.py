"""Pipeline orchestration: discover, extract, aggregate, optimize and write."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

from .analyzers import SourceParser, SymbolExtractor
from .logging import LoggingTracer, Tracer, get_logger
from .manifest_builder import ManifestBuilder
from .models import FileResult, ManifestStats, ProjectManifest
from .optimizers import intern_strings, simplify_for_llm
from .repo_scanner import RepoScanner
from .stores import ManifestStore


@dataclass
class RunResult:
    """Outcome of a successful extraction run."""

    output_path: Path
    manifest: ProjectManifest
    payload: Dict[str, Any]
    llm_optimized: bool
    compressed: bool

    @property
    def stats(self) -> ManifestStats:
        return self.manifest.stats


class Orchestrator:
    """Coordinates the extraction pipeline for one source tree.

    Files are processed strictly one after another so that the manifest keeps
    discovery order without a merge step.
    """

    def __init__(
        self,
        scanner: RepoScanner | None = None,
        parser: SourceParser | None = None,
        extractor: SymbolExtractor | None = None,
        builder: ManifestBuilder | None = None,
        store: ManifestStore | None = None,
        tracer: Tracer | None = None,
    ) -> None:
        self._tracer = tracer or LoggingTracer()
        self._scanner = scanner or RepoScanner(tracer=self._tracer)
        self._parser = parser or SourceParser()
        self._extractor = extractor or SymbolExtractor(tracer=self._tracer)
        self._builder = builder or ManifestBuilder(tracer=self._tracer)
        self._store = store or ManifestStore(tracer=self._tracer)
        self._logger = get_logger("orchestrator")

    def extract(self, source_path: str | Path) -> ProjectManifest:
        """Return the full manifest for every source file under ``source_path``."""
        root = Path(source_path).expanduser().resolve()
        file_paths = self._scanner.scan(root)
        self._logger.info("Found %d source files to process", len(file_paths))

        results: List[FileResult] = []
        for file_path in file_paths:
            self._logger.debug("Processing %s", file_path)
            content = self._scanner.read(file_path)
            with self._tracer.span("parse", path=str(file_path)):
                tree = self._parser.parse(content, file_path)
            metadata = self._extractor.extract(tree, file_path, content)
            results.append(FileResult(path=str(file_path), metadata=metadata))

        return self._builder.build(results, root)

    def run(
        self,
        source_path: str | Path,
        output_path: str | Path,
        *,
        compress: bool = False,
        llm_optimized: bool = True,
    ) -> RunResult:
        """Extract, optimize and write the manifest; return where it was written."""
        self._logger.info("Starting extraction of %s", source_path)
        manifest = self.extract(source_path)

        payload: Dict[str, Any] = manifest.to_dict()
        if llm_optimized:
            with self._tracer.span("simplify_for_llm"):
                payload = simplify_for_llm(payload)
        if compress:
            with self._tracer.span("intern_strings"):
                payload = intern_strings(payload)

        written = self._store.write(payload, output_path, compress)
        self._logger.info("Manifest written to %s", written)
        return RunResult(
            output_path=written,
            manifest=manifest,
            payload=payload,
            llm_optimized=llm_optimized,
            compressed=compress,
        )


__all__ = ["Orchestrator", "RunResult"]
