"""Catalog loading: YAML bundle/plugin catalogs into typed entities.

A catalog declares plugin definitions once under ``plugins`` and lists
them by key from any number of bundles, so one extension can be
recommended in several places with independent rules.
"""

from __future__ import annotations

import hashlib
import json
import logging
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from extrec.constants.catalog import (
    ALLOWED_BUNDLE_KEYS,
    ALLOWED_PLUGIN_KEYS,
    ALLOWED_TOP_KEYS,
    CATALOG_VERSION,
    CORE_PROFILER_RULES_KEY,
    DEFAULT_CATALOG_PATH,
    PLUGIN_STRING_KEYS,
    REQUIRED_BUNDLE_KEYS,
    REQUIRED_TOP_KEYS,
)
from extrec.exceptions import CatalogError, CatalogSchemaError
from extrec.model import Bundle, Plugin
from extrec.rules.parser import parse_rules

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Catalog:
    """Loaded recommendation catalog."""

    bundles: tuple[Bundle, ...]
    plugins: dict[str, Plugin]
    source_path: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def bundle_keys(self) -> list[str]:
        return [bundle.key for bundle in self.bundles]

    def get_plugin(self, key: str) -> Plugin:
        """Return the plugin definition declared under *key*."""
        try:
            return self.plugins[key]
        except KeyError:
            raise CatalogError(f"Plugin '{key}' is not defined in {self.source_path}") from None

    def select_bundles(self, keys: Iterable[str]) -> tuple[Bundle, ...]:
        """Return the bundles named in *keys*, in catalog order."""
        wanted = set(keys)
        missing = wanted - set(self.bundle_keys)
        if missing:
            raise CatalogError(f"Unknown bundle key(s) in {self.source_path}: {sorted(missing)}")
        return tuple(bundle for bundle in self.bundles if bundle.key in wanted)

    def fingerprint(self) -> str:
        """Return a stable hash of the catalog contents."""
        blob = json.dumps(self.raw, sort_keys=True, separators=(",", ":"), default=str).encode("utf-8")
        return hashlib.sha256(blob).hexdigest()


def load_catalog(path: Path | None = None) -> Catalog:
    """Load a catalog file, or the bundled default catalog when *path* is None."""
    catalog_path = (path if path is not None else DEFAULT_CATALOG_PATH).resolve()
    raw = _read_catalog(catalog_path)
    catalog = parse_catalog(raw, str(catalog_path))
    logger.debug(
        "Loaded catalog %s: %d bundle(s), %d plugin definition(s)",
        catalog_path,
        len(catalog.bundles),
        len(catalog.plugins),
    )
    return catalog


def parse_catalog(data: dict[str, Any], source: str) -> Catalog:
    """Build a Catalog from an already-parsed mapping.

    Raises CatalogSchemaError on any schema violation.
    """
    unknown_top = set(data.keys()) - ALLOWED_TOP_KEYS
    if unknown_top:
        raise CatalogSchemaError(f"{source}: unknown top-level keys: {sorted(unknown_top)}")
    for key in sorted(REQUIRED_TOP_KEYS):
        if key not in data:
            raise CatalogSchemaError(f"{source}: missing required key '{key}'")

    version = data["version"]
    if isinstance(version, bool) or version != CATALOG_VERSION:
        raise CatalogSchemaError(f"{source}: 'version' must be {CATALOG_VERSION}, got {version!r}")

    plugins_raw = data.get("plugins") or {}
    if not isinstance(plugins_raw, dict):
        raise CatalogSchemaError(f"{source}: 'plugins' must be a mapping of plugin key to definition")
    plugins = {
        str(key): parse_plugin(str(key), definition, f"{source}: plugins.{key}")
        for key, definition in plugins_raw.items()
    }

    bundles_raw = data["bundles"]
    if not isinstance(bundles_raw, list):
        raise CatalogSchemaError(f"{source}: 'bundles' must be a list")

    bundles: list[Bundle] = []
    seen_keys: set[str] = set()
    for index, bundle_raw in enumerate(bundles_raw):
        bundle = _parse_bundle(bundle_raw, plugins, f"{source}: bundles[{index}]")
        if bundle.key in seen_keys:
            raise CatalogSchemaError(f"{source}: duplicate bundle key '{bundle.key}'")
        seen_keys.add(bundle.key)
        bundles.append(bundle)

    return Catalog(bundles=tuple(bundles), plugins=plugins, source_path=source, raw=dict(data))


def parse_plugin(key: str, data: Any, source: str) -> Plugin:
    """Build a Plugin from its catalog definition."""
    if not isinstance(data, dict):
        raise CatalogSchemaError(f"{source}: plugin definition must be a mapping")
    if not key.strip():
        raise CatalogSchemaError(f"{source}: plugin key must be a non-empty string")

    unknown = set(data.keys()) - ALLOWED_PLUGIN_KEYS
    if unknown:
        raise CatalogSchemaError(f"{source}: unknown plugin keys: {sorted(unknown)}")

    for name in PLUGIN_STRING_KEYS:
        if name in data and not isinstance(data[name], str):
            raise CatalogSchemaError(f"{source}: '{name}' must be a string")

    metadata = data.get("metadata") or {}
    if not isinstance(metadata, dict):
        raise CatalogSchemaError(f"{source}: 'metadata' must be a mapping")

    core_profiler_raw = data.get("core_profiler") or {}
    if not isinstance(core_profiler_raw, dict):
        raise CatalogSchemaError(f"{source}: 'core_profiler' must be a mapping")
    core_profiler = dict(core_profiler_raw)
    core_profiler_rules = None
    if CORE_PROFILER_RULES_KEY in core_profiler:
        core_profiler_rules = parse_rules(
            core_profiler.pop(CORE_PROFILER_RULES_KEY),
            f"{source}.core_profiler.rules",
        )

    return Plugin(
        key=key,
        rules=parse_rules(data.get("rules"), f"{source}.rules"),
        name=data.get("name", ""),
        description=data.get("description", ""),
        slug=data.get("slug"),
        metadata=dict(metadata),
        core_profiler_fields=core_profiler,
        core_profiler_rules=core_profiler_rules,
    )


def with_core_profiler_fields(plugins: Iterable[Plugin]) -> tuple[Plugin, ...]:
    """Return *plugins* with their core profiler overrides applied.

    ``name`` and ``description`` overrides replace the plugin attributes,
    other fields are merged into ``metadata``, and core profiler rules
    replace the regular visibility rules.
    """
    adjusted: list[Plugin] = []
    for plugin in plugins:
        if not plugin.core_profiler_fields and plugin.core_profiler_rules is None:
            adjusted.append(plugin)
            continue

        fields = dict(plugin.core_profiler_fields)
        name = fields.pop("name", plugin.name)
        description = fields.pop("description", plugin.description)
        adjusted.append(
            replace(
                plugin,
                name=str(name),
                description=str(description),
                metadata={**plugin.metadata, **fields},
                rules=plugin.core_profiler_rules if plugin.core_profiler_rules is not None else plugin.rules,
            )
        )
    return tuple(adjusted)


def _parse_bundle(data: Any, plugins: dict[str, Plugin], source: str) -> Bundle:
    if not isinstance(data, dict):
        raise CatalogSchemaError(f"{source}: bundle must be a mapping")

    unknown = set(data.keys()) - ALLOWED_BUNDLE_KEYS
    if unknown:
        raise CatalogSchemaError(f"{source}: unknown bundle keys: {sorted(unknown)}")
    for key in sorted(REQUIRED_BUNDLE_KEYS):
        if key not in data:
            raise CatalogSchemaError(f"{source}: bundle missing required key '{key}'")

    bundle_key = data["key"]
    if not isinstance(bundle_key, str) or not bundle_key.strip():
        raise CatalogSchemaError(f"{source}: bundle 'key' must be a non-empty string")
    if not isinstance(data["title"], str):
        raise CatalogSchemaError(f"{source}: bundle 'title' must be a string")

    entries = data["plugins"]
    if not isinstance(entries, list):
        raise CatalogSchemaError(f"{source}: bundle 'plugins' must be a list")

    bundle_plugins: list[Plugin] = []
    for index, entry in enumerate(entries):
        entry_source = f"{source}.plugins[{index}]"
        if isinstance(entry, str):
            if entry not in plugins:
                raise CatalogSchemaError(f"{entry_source}: plugin '{entry}' is not defined under 'plugins'")
            bundle_plugins.append(plugins[entry])
            continue
        if isinstance(entry, dict):
            inline_key = entry.get("key")
            if not isinstance(inline_key, str):
                raise CatalogSchemaError(f"{entry_source}: inline plugin requires a string 'key'")
            inline = {name: value for name, value in entry.items() if name != "key"}
            bundle_plugins.append(parse_plugin(inline_key, inline, entry_source))
            continue
        raise CatalogSchemaError(f"{entry_source}: plugin entry must be a key or a mapping")

    return Bundle(key=bundle_key, title=data["title"], plugins=tuple(bundle_plugins))


def _read_catalog(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise CatalogError(f"Catalog file does not exist: {path}")
    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise CatalogError(f"Failed to read catalog file {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise CatalogError(f"Invalid YAML in {path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise CatalogError(f"Catalog file {path} must contain a mapping")
    return raw
