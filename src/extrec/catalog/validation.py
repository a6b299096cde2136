"""Collect-all validation for catalog files.

Returns a list of :class:`ValidationError` instances rather than raising,
so callers can report every problem in one pass.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from extrec.constants.catalog import (
    ALLOWED_BUNDLE_KEYS,
    ALLOWED_TOP_KEYS,
    CATALOG_VERSION,
    DEFAULT_CATALOG_PATH,
    REQUIRED_BUNDLE_KEYS,
    REQUIRED_TOP_KEYS,
)
from extrec.constants.validation import (
    CAT001,
    CAT002,
    CAT003,
    CAT004,
    CAT005,
    CAT006,
    CAT007,
    CAT008,
    CAT009,
)
from extrec.catalog.loader import parse_plugin
from extrec.exceptions import CatalogSchemaError, RuleSchemaError
from extrec.exceptions.validation import ValidationError, sort_errors
from extrec.model import Plugin
from extrec.rules.kinds import AndRule, NotRule, OrRule, Rule, UnknownRule


def validate_catalog_file(
    path: Path | None = None,
    *,
    strict_kinds: bool = False,
) -> list[ValidationError]:
    """Validate a catalog file and return all validation errors.

    Unknown rule kinds are accepted unless *strict_kinds* is set, in which
    case each one is reported as ``CAT007``.
    """
    catalog_path = (path if path is not None else DEFAULT_CATALOG_PATH).resolve()
    path_str = str(catalog_path)
    errors: list[ValidationError] = []

    if not catalog_path.is_file():
        errors.append(
            ValidationError(code=CAT001, path=path_str, field="", message=f"catalog file not found: {catalog_path}")
        )
        return errors

    try:
        raw = yaml.safe_load(catalog_path.read_text(encoding="utf-8"))
    except OSError as exc:
        errors.append(ValidationError(code=CAT001, path=path_str, field="", message=f"failed to read catalog: {exc}"))
        return errors
    except yaml.YAMLError as exc:
        errors.append(ValidationError(code=CAT002, path=path_str, field="", message=f"invalid YAML: {exc}"))
        return errors

    if not isinstance(raw, dict):
        errors.append(
            ValidationError(
                code=CAT003,
                path=path_str,
                field="",
                message=f"catalog must be a mapping, got {type(raw).__name__}",
            )
        )
        return errors

    _validate_top_level(raw, path_str, errors)
    plugin_defs = _validate_plugin_definitions(raw.get("plugins"), path_str, errors, strict_kinds)
    _validate_bundles(raw.get("bundles"), plugin_defs, path_str, errors, strict_kinds)
    return sort_errors(errors)


def _validate_top_level(raw: dict[str, Any], path: str, errors: list[ValidationError]) -> None:
    for key in sorted(set(raw.keys()) - ALLOWED_TOP_KEYS):
        errors.append(ValidationError(code=CAT004, path=path, field=str(key), message=f"unknown top-level key '{key}'"))

    for key in sorted(REQUIRED_TOP_KEYS - set(raw.keys())):
        errors.append(ValidationError(code=CAT005, path=path, field=key, message=f"missing required key '{key}'"))

    version = raw.get("version", CATALOG_VERSION)
    if isinstance(version, bool) or version != CATALOG_VERSION:
        errors.append(
            ValidationError(
                code=CAT005,
                path=path,
                field="version",
                message=f"'version' must be {CATALOG_VERSION}, got {version!r}",
            )
        )


def _validate_plugin_definitions(
    plugins_raw: Any,
    path: str,
    errors: list[ValidationError],
    strict_kinds: bool,
) -> set[str]:
    """Validate each plugin definition and return the keys that were declared."""
    if plugins_raw is None:
        return set()
    if not isinstance(plugins_raw, dict):
        errors.append(
            ValidationError(code=CAT005, path=path, field="plugins", message="'plugins' must be a mapping")
        )
        return set()

    for key, definition in plugins_raw.items():
        _check_plugin(str(key), definition, f"plugins.{key}", path, errors, strict_kinds)
    return {str(key) for key in plugins_raw}


def _validate_bundles(
    bundles_raw: Any,
    plugin_keys: set[str],
    path: str,
    errors: list[ValidationError],
    strict_kinds: bool,
) -> None:
    if bundles_raw is None:
        return
    if not isinstance(bundles_raw, list):
        errors.append(ValidationError(code=CAT005, path=path, field="bundles", message="'bundles' must be a list"))
        return

    seen: set[str] = set()
    for index, bundle in enumerate(bundles_raw):
        field_name = f"bundles[{index}]"
        if not isinstance(bundle, dict):
            errors.append(ValidationError(code=CAT005, path=path, field=field_name, message="bundle must be a mapping"))
            continue

        for key in sorted(set(bundle.keys()) - ALLOWED_BUNDLE_KEYS):
            errors.append(
                ValidationError(code=CAT004, path=path, field=field_name, message=f"unknown bundle key '{key}'")
            )
        for key in sorted(REQUIRED_BUNDLE_KEYS - set(bundle.keys())):
            errors.append(
                ValidationError(code=CAT005, path=path, field=field_name, message=f"missing required key '{key}'")
            )

        bundle_key = bundle.get("key")
        if "key" in bundle and (not isinstance(bundle_key, str) or not bundle_key.strip()):
            errors.append(
                ValidationError(
                    code=CAT005,
                    path=path,
                    field=field_name,
                    message="bundle 'key' must be a non-empty string",
                )
            )
        if "title" in bundle and not isinstance(bundle["title"], str):
            errors.append(
                ValidationError(code=CAT005, path=path, field=field_name, message="bundle 'title' must be a string")
            )

        if isinstance(bundle_key, str) and bundle_key.strip():
            if bundle_key in seen:
                errors.append(
                    ValidationError(
                        code=CAT009,
                        path=path,
                        field=field_name,
                        message=f"duplicate bundle key '{bundle_key}'",
                    )
                )
            seen.add(bundle_key)

        entries = bundle.get("plugins", [])
        if not isinstance(entries, list):
            errors.append(
                ValidationError(code=CAT005, path=path, field=field_name, message="bundle 'plugins' must be a list")
            )
            continue

        for entry_index, entry in enumerate(entries):
            entry_field = f"{field_name}.plugins[{entry_index}]"
            if isinstance(entry, str):
                if entry not in plugin_keys:
                    errors.append(
                        ValidationError(
                            code=CAT008,
                            path=path,
                            field=entry_field,
                            message=f"plugin '{entry}' is not defined under 'plugins'",
                            hint="declare it under the top-level 'plugins' mapping or inline it",
                        )
                    )
            elif isinstance(entry, dict) and isinstance(entry.get("key"), str):
                inline = {name: value for name, value in entry.items() if name != "key"}
                _check_plugin(entry["key"], inline, entry_field, path, errors, strict_kinds)
            else:
                errors.append(
                    ValidationError(
                        code=CAT005,
                        path=path,
                        field=entry_field,
                        message="plugin entry must be a key or a mapping with a string 'key'",
                    )
                )


def _check_plugin(
    key: str,
    definition: Any,
    field_name: str,
    path: str,
    errors: list[ValidationError],
    strict_kinds: bool,
) -> None:
    try:
        plugin = parse_plugin(key, definition, field_name)
    except CatalogSchemaError as exc:
        code = CAT006 if isinstance(exc, RuleSchemaError) else CAT005
        errors.append(ValidationError(code=code, path=path, field=field_name, message=str(exc)))
        return

    if strict_kinds:
        for kind in sorted(_unknown_kinds(plugin)):
            errors.append(
                ValidationError(
                    code=CAT007,
                    path=path,
                    field=field_name,
                    message=f"unknown rule kind '{kind}'",
                )
            )


def _unknown_kinds(plugin: Plugin) -> set[str]:
    rules = list(plugin.rules) + list(plugin.core_profiler_rules or ())
    kinds: set[str] = set()
    while rules:
        rule: Rule = rules.pop()
        match rule:
            case UnknownRule(kind=kind):
                kinds.add(kind)
            case NotRule(operand=operand):
                rules.append(operand)
            case AndRule(operands=operands) | OrRule(operands=operands):
                rules.extend(operands)
    return kinds
