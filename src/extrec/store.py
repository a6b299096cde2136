"""Store state loading: YAML store-state files into snapshots."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from extrec.constants.config import STORE_STATE_KEYS
from extrec.exceptions import ConfigError
from extrec.model import StoreStateSnapshot


def load_store_state(path: Path) -> StoreStateSnapshot:
    """Load a store-state file into a snapshot.

    Keys that are absent stay unknown, so rules depending on them do not pass.
    """
    path = path.resolve()
    if not path.exists():
        raise ConfigError(f"Store state file not found: {path}")

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Failed to read store state file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML store state file at {path}: {exc}") from exc

    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Store state file at {path} must be a YAML mapping")
    return snapshot_from_mapping(raw)


def snapshot_from_mapping(data: dict[str, Any]) -> StoreStateSnapshot:
    """Build a snapshot from a plain mapping, validating value types."""
    unknown = set(data.keys()) - STORE_STATE_KEYS
    if unknown:
        raise ConfigError(f"Unknown store state keys: {sorted(unknown)}")

    default_country = data.get("default_country")
    if default_country is not None and not isinstance(default_country, str):
        raise ConfigError("default_country must be a string such as 'US' or 'US:CA'")

    active_plugins = data.get("active_plugins")
    if active_plugins is not None:
        if not isinstance(active_plugins, (list, tuple)) or not all(isinstance(item, str) for item in active_plugins):
            raise ConfigError("active_plugins must be a list of strings")
        active_plugins = tuple(active_plugins)

    options = data.get("options")
    if options is None:
        options = {}
    if not isinstance(options, dict):
        raise ConfigError("options must be a mapping")

    return StoreStateSnapshot(
        default_country=default_country or None,
        active_plugins=active_plugins,
        options={str(key): value for key, value in options.items()},
    )
