"""CLI entrypoint for manifest extraction."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import NoReturn

from .config import DEFAULT_OUTPUT, ManifestConfig, load_config
from .errors import ErrorReport, UserInputError, describe_error
from .logging import configure_logging, get_logger
from .orchestrator import Orchestrator, RunResult
from .repo_scanner import RepoScanner

_logger = get_logger("cli")


class _ManifestArgumentParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors as input errors (exit code 1)."""

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"Input error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    parser = _ManifestArgumentParser(
        prog="jsmanifest",
        description="Extract a symbol and dependency manifest from a JavaScript/TypeScript project.",
        epilog="Example: jsmanifest ./src --out my-project.manifest.json --compress",
    )
    parser.add_argument(
        "source",
        nargs="?",
        help="Source folder to scan.",
    )
    parser.add_argument(
        "-o",
        "--out",
        default=None,
        help=f"Output file path (default: {DEFAULT_OUTPUT}).",
    )
    parser.add_argument(
        "-c",
        "--compress",
        action="store_true",
        help="Intern strings and gzip the output.",
    )
    parser.add_argument(
        "-f",
        "--full-format",
        action="store_true",
        help="Write the full manifest instead of the LLM-optimized projection.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Increase log verbosity for troubleshooting.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Also write logs, including call traces, to this file.",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for jsmanifest."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.source:
        parser.print_usage(sys.stderr)
        parser.exit(1, "Input error: Source path is required\n")

    try:
        config = _resolve_config(args)
        configure_logging(verbose=bool(args.verbose), log_file=config.log_file)
        orchestrator = Orchestrator(
            scanner=RepoScanner(extensions=config.extensions, exclude_paths=config.exclude_paths)
        )
        result = orchestrator.run(
            config.root,
            config.output_path,
            compress=config.compress,
            llm_optimized=config.llm_optimized,
        )
    except Exception as exc:
        report = describe_error(exc)
        if report.kind == "unexpected":
            _logger.debug("Unexpected failure", exc_info=True)
        if isinstance(exc, UserInputError):
            parser.print_usage(sys.stderr)
        parser.exit(1, format_error(report))

    print(f"Manifest extraction complete. Output: {result.output_path}")
    print(format_summary(result))


def _resolve_config(args: argparse.Namespace) -> ManifestConfig:
    source = Path(args.source).expanduser()
    config = load_config(source) if source.is_dir() else ManifestConfig(root=source.resolve())
    config.root = source.resolve()
    if args.out:
        config.output_path = Path(args.out)
    if args.compress:
        config.compress = True
    if args.full_format:
        config.llm_optimized = False
    if args.log_file:
        config.log_file = Path(args.log_file)
    return config


def format_error(report: ErrorReport) -> str:
    """Render an error report as the lines printed to stderr."""
    if report.kind == "input":
        lines = [f"Input error: {report.message}"]
    elif report.kind == "filesystem":
        lines = [f"File system error: {report.message}"]
        if report.path:
            lines.append(f"  Path: {report.path}")
    elif report.kind == "parse":
        lines = [f"Parse error: {report.message}"]
        if report.path:
            lines.append(f"  File: {report.path}")
        if report.position is not None:
            lines.append(
                f"  Position: Line {report.position.line}, Column {report.position.column}"
            )
    else:
        lines = [
            f"Unexpected error: {report.message}",
            "Run with --verbose for more details.",
        ]
    return "\n".join(lines) + "\n"


def format_summary(result: RunResult) -> str:
    """Render the extraction statistics printed after a successful run."""
    stats = result.stats
    type_stats = stats.type_stats
    lines = [
        "Extraction summary:",
        f"- Total files processed: {stats.total_files}",
        f"- Total symbols discovered: {stats.total_symbols}",
        f"- Functions: {type_stats.functions}",
        f"- Classes: {type_stats.classes}",
        f"- Constants: {type_stats.constants}",
        f"- Exports: {type_stats.exports}",
        f"- Dependencies: {stats.total_dependencies}",
        (
            "- LLM optimization: ENABLED (use --full-format to disable)"
            if result.llm_optimized
            else "- Full format: ENABLED"
        ),
    ]
    if result.compressed:
        lines.append("- Compression: ENABLED")
    return "\n".join(lines)


if __name__ == "__main__":
    main(sys.argv[1:])
