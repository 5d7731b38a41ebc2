"""Tests for source discovery."""

from __future__ import annotations

from pathlib import Path

import pytest

from jsmanifest.errors import FileSystemError
from jsmanifest.repo_scanner import RepoScanner
from tests._fixtures.repo_builder import RepoBuilder


def _relative(paths, root: Path) -> list[str]:
    return [path.relative_to(root).as_posix() for path in paths]


def test_scan_returns_sorted_source_files(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/b.ts": "export const b = 1;\n",
            "src/a.js": "export const a = 1;\n",
            "src/view/App.tsx": "export const App = () => null;\n",
            "src/legacy.JSX": "const x = 1;\n",
            "README.md": "# readme\n",
            "styles.css": "body {}\n",
        }
    )

    files = repo_builder.scan()

    assert all(path.is_absolute() for path in files)
    assert _relative(files, repo_builder.path().resolve()) == [
        "src/a.js",
        "src/b.ts",
        "src/legacy.JSX",
        "src/view/App.tsx",
    ]


def test_scan_skips_vendor_and_build_directories(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "index.js": "module.exports = {};\n",
            "node_modules/pkg/index.js": "module.exports = {};\n",
            "dist/bundle.js": "var a;\n",
            "build/out.js": "var b;\n",
            ".git/hooks/pre-commit.js": "var c;\n",
        }
    )

    assert _relative(repo_builder.scan(), repo_builder.path().resolve()) == ["index.js"]


def test_scan_honours_extensions_and_exclude_patterns(repo_builder: RepoBuilder) -> None:
    repo_builder.write(
        {
            "src/main.js": "var a;\n",
            "src/main.test.js": "var b;\n",
            "src/tool.mjs": "var c;\n",
            "fixtures/sample.js": "var d;\n",
            "src/generated/api.js": "var e;\n",
        }
    )
    scanner = RepoScanner(
        extensions=[".js", ".mjs"],
        exclude_paths=["*.test.js", "fixtures/", "generated"],
    )

    files = scanner.scan(repo_builder.path())

    assert _relative(files, repo_builder.path().resolve()) == ["src/main.js", "src/tool.mjs"]


def test_scan_missing_directory_raises(tmp_path: Path) -> None:
    missing = tmp_path / "missing"
    with pytest.raises(FileSystemError, match="Directory not found") as excinfo:
        RepoScanner().scan(missing)
    assert excinfo.value.path == str(missing)


def test_scan_file_instead_of_directory_raises(tmp_path: Path) -> None:
    file_path = tmp_path / "index.js"
    file_path.write_text("var a;\n", encoding="utf-8")
    with pytest.raises(FileSystemError, match="Not a directory"):
        RepoScanner().scan(file_path)


def test_read_returns_text_and_reports_missing_files(tmp_path: Path) -> None:
    source = tmp_path / "a.js"
    source.write_text("const a = 1;\n", encoding="utf-8")
    scanner = RepoScanner()

    assert scanner.read(source) == "const a = 1;\n"
    with pytest.raises(FileSystemError, match="File not found"):
        scanner.read(tmp_path / "gone.js")


def test_read_rejects_undecodable_files(tmp_path: Path) -> None:
    source = tmp_path / "binary.js"
    source.write_bytes(b"\xff\xfe\x00bad")
    with pytest.raises(FileSystemError, match="Could not read file"):
        RepoScanner().read(source)
