"""Configuration loading for jsmanifest (.jsmanifest.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .errors import ConfigError

CONFIG_FILENAME = ".jsmanifest.yml"
DEFAULT_OUTPUT = "project.manifest.json"
DEFAULT_EXTENSIONS = (".js", ".jsx", ".ts", ".tsx")


@dataclass
class ManifestConfig:
    """Settings for one extraction run, read from .jsmanifest.yml."""

    root: Path
    output_path: Path = Path(DEFAULT_OUTPUT)
    compress: bool = False
    llm_optimized: bool = True
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    exclude_paths: List[str] = field(default_factory=list)
    log_file: Optional[Path] = None


def load_config(config_path: Path) -> ManifestConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ManifestConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    config = ManifestConfig(root=root)

    output = _as_str(data.get("output"))
    if output:
        config.output_path = Path(output)

    compress = _as_bool(data.get("compress"))
    if compress is not None:
        config.compress = compress

    full_format = _as_bool(data.get("full_format"))
    if full_format is not None:
        config.llm_optimized = not full_format

    extensions = _as_str_list(data.get("extensions"))
    if extensions:
        config.extensions = [_normalise_extension(ext) for ext in extensions]

    config.exclude_paths = _as_str_list(data.get("exclude_paths"))

    log_file = _as_str(data.get("log_file"))
    if log_file:
        config.log_file = root / log_file

    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _normalise_extension(value: str) -> str:
    value = value.strip().lower()
    return value if value.startswith(".") else f".{value}"


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "DEFAULT_OUTPUT", "ConfigError", "ManifestConfig", "load_config"]
