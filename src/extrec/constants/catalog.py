"""Schema constants for recommendation catalog files."""

from __future__ import annotations

from pathlib import Path

CATALOG_VERSION: int = 1
DEFAULT_CATALOG_PATH: Path = Path(__file__).resolve().parent.parent / "catalog" / "data" / "default_catalog.yaml"

REQUIRED_TOP_KEYS: frozenset[str] = frozenset({"version", "bundles"})
ALLOWED_TOP_KEYS: frozenset[str] = REQUIRED_TOP_KEYS | {"plugins"}

REQUIRED_BUNDLE_KEYS: frozenset[str] = frozenset({"key", "title", "plugins"})
ALLOWED_BUNDLE_KEYS: frozenset[str] = REQUIRED_BUNDLE_KEYS

ALLOWED_PLUGIN_KEYS: frozenset[str] = frozenset(
    {"key", "name", "description", "slug", "metadata", "rules", "core_profiler"}
)
PLUGIN_STRING_KEYS: tuple[str, ...] = ("name", "description", "slug")

CORE_PROFILER_RULES_KEY: str = "rules"
PLUGIN_KEY_SEPARATOR: str = ":"
