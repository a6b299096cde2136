"""Config loading and normalization for Extrec."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from extrec.config.model import ExtrecConfig
from extrec.constants.config import ALLOWED_CONFIG_KEYS, CONFIG_FILENAME
from extrec.constants.reporting import DEFAULT_OUTPUT_FORMAT, VALID_OUTPUT_FORMATS
from extrec.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_config(root: Path, config_path: Path | None = None) -> ExtrecConfig:
    """Load and validate project config from ``extrec.yaml`` or an explicit path."""
    root = root.resolve()
    path = config_path.resolve() if config_path else (root / CONFIG_FILENAME)
    if not path.exists():
        if config_path is not None:
            raise ConfigError(f"Config file not found: {path}")
        return ExtrecConfig()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML config file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config file at {path} must be a YAML mapping")

    unknown = set(raw.keys()) - ALLOWED_CONFIG_KEYS
    if unknown:
        raise ConfigError(f"Unknown config keys in {path}: {sorted(unknown)}")

    core_profiler = raw.get("core_profiler", False)
    if not isinstance(core_profiler, bool):
        raise ConfigError("core_profiler must be a boolean")

    output_format = raw.get("output_format", DEFAULT_OUTPUT_FORMAT)
    if output_format not in VALID_OUTPUT_FORMATS:
        raise ConfigError(f"output_format must be one of {sorted(VALID_OUTPUT_FORMATS)}, got {output_format!r}")

    logger.debug("Loaded config from %s", path)
    return ExtrecConfig(
        catalog_path=_resolve_path(raw.get("catalog"), "catalog", path.parent),
        store_path=_resolve_path(raw.get("store"), "store", path.parent),
        core_profiler=core_profiler,
        output_format=output_format,
        bundles=tuple(_ensure_string_list(raw.get("bundles", []), "bundles")),
    )


def _resolve_path(value: Any, key_name: str, base: Path) -> Path | None:
    """Resolve a config path relative to the directory holding the config file."""
    if value is None:
        return None
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"{key_name} must be a non-empty path string")
    candidate = Path(value).expanduser()
    if not candidate.is_absolute():
        candidate = base / candidate
    return candidate.resolve()


def _ensure_string_list(value: Any, key_name: str) -> list[str]:
    """Coerce a value to a list of strings, raising ConfigError on type mismatch."""
    if value is None:
        return []
    if not isinstance(value, (list, tuple)) or not all(isinstance(item, str) for item in value):
        raise ConfigError(f"{key_name} must be a list of strings")
    return list(value)
