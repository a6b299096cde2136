"""Constants for project configuration and store-state files."""

from __future__ import annotations

CONFIG_FILENAME: str = "extrec.yaml"

ALLOWED_CONFIG_KEYS: frozenset[str] = frozenset(
    {"catalog", "store", "core_profiler", "output_format", "bundles"}
)

STORE_STATE_KEYS: frozenset[str] = frozenset({"default_country", "active_plugins", "options"})
