"""JSON report building and writing."""

from __future__ import annotations

import json
from pathlib import Path

from extrec.constants.reporting import REPORT_TEMP_PREFIX, REPORT_TEMP_SUFFIX, SCHEMA_VERSION
from extrec.io import write_text_atomic
from extrec.model import EvaluationResult, Plugin, StoreStateSnapshot
from extrec.rules.parser import rule_to_dict
from extrec.types import JsonObject


def build_report(result: EvaluationResult, snapshot: StoreStateSnapshot | None = None) -> JsonObject:
    """Build the JSON-serializable report for an evaluation result."""
    return {
        "schema_version": SCHEMA_VERSION,
        "total_plugins": result.total_plugins,
        "bundles": [
            {
                "key": bundle.key,
                "title": bundle.title,
                "plugins": [_plugin_payload(plugin, snapshot) for plugin in bundle.plugins],
            }
            for bundle in result.bundles
        ],
    }


def render_json(result: EvaluationResult, snapshot: StoreStateSnapshot | None = None) -> str:
    """Render the report as an indented JSON string."""
    return json.dumps(build_report(result, snapshot), indent=2, sort_keys=True, default=str)


def write_report(path: Path, result: EvaluationResult, snapshot: StoreStateSnapshot | None = None) -> None:
    """Write the JSON report to *path* atomically."""
    write_text_atomic(
        path,
        render_json(result, snapshot),
        temp_prefix=REPORT_TEMP_PREFIX,
        temp_suffix=REPORT_TEMP_SUFFIX,
    )


def _plugin_payload(plugin: Plugin, snapshot: StoreStateSnapshot | None) -> JsonObject:
    return {
        "key": plugin.key,
        "name": plugin.name,
        "description": plugin.description,
        "slug": plugin.package_slug,
        "is_activated": snapshot is not None and snapshot.is_plugin_active(plugin.package_slug),
        "metadata": dict(plugin.metadata),
        "rules": [rule_to_dict(rule) for rule in plugin.rules],
    }
