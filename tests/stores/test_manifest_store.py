"""Tests for the manifest store."""

from __future__ import annotations

import gzip
import json
from pathlib import Path

import pytest

from jsmanifest.errors import FileSystemError
from jsmanifest.stores import ManifestStore


def test_write_plain_json_with_indentation(tmp_path: Path) -> None:
    target = tmp_path / "out" / "project.manifest.json"

    written = ManifestStore().write({"version": "1.0.0", "files": []}, target)

    assert written == target
    text = target.read_text(encoding="utf-8")
    assert text.startswith('{\n  "version": "1.0.0"')
    assert json.loads(text) == {"version": "1.0.0", "files": []}


def test_write_compressed_appends_gz_suffix(tmp_path: Path) -> None:
    target = tmp_path / "project.manifest.json"

    written = ManifestStore().write({"files": [], "stringTable": ["a"]}, target, compress=True)

    assert written == tmp_path / "project.manifest.json.gz"
    assert not target.exists()
    with gzip.open(written, "rt", encoding="utf-8") as handle:
        assert json.load(handle) == {"files": [], "stringTable": ["a"]}
    assert ManifestStore.load(written) == {"files": [], "stringTable": ["a"]}


def test_load_reads_plain_json(tmp_path: Path) -> None:
    target = ManifestStore().write({"files": []}, tmp_path / "m.json")
    assert ManifestStore.load(target) == {"files": []}


def test_write_failure_is_a_filesystem_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(FileSystemError) as excinfo:
        ManifestStore().write({"files": []}, blocker / "manifest.json")

    assert excinfo.value.path == str(blocker / "manifest.json")
