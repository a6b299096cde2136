"""Parser: turn raw catalog rule mappings into typed rule objects.

Known kinds are validated strictly and raise RuleSchemaError on any
structural problem. Unknown kind tags are kept as UnknownRule so that a
catalog carrying newer rule kinds still loads.
"""

from __future__ import annotations

import logging
from typing import Any

from extrec.constants.rules import (
    KIND_ACTIVE_PLUGINS_CONTAINS,
    KIND_ACTIVE_PLUGINS_CONTAINS_ALL,
    KIND_ACTIVE_PLUGINS_DOES_NOT_CONTAIN,
    KIND_AND,
    KIND_BASE_LOCATION_COUNTRY_IN_SET,
    KIND_FAIL,
    KIND_NOT,
    KIND_OPTION_COMPARES,
    KIND_OR,
    KIND_PASS,
    KNOWN_RULE_KINDS,
    OPTION_OPERATIONS,
    RULE_ALLOWED_KEYS,
    RULE_TYPE_KEY,
)
from extrec.exceptions import RuleSchemaError
from extrec.rules.kinds import (
    ActivePluginsContains,
    ActivePluginsContainsAll,
    ActivePluginsDoesNotContain,
    AndRule,
    BaseLocationCountryInSet,
    FailRule,
    NotRule,
    OptionCompares,
    OrRule,
    PassRule,
    Rule,
    UnknownRule,
)

logger = logging.getLogger(__name__)


def parse_rule(data: Any, source: str) -> Rule:
    """Parse a single rule mapping.

    Raises RuleSchemaError when a known rule kind is malformed.
    """
    if not isinstance(data, dict):
        raise RuleSchemaError(f"{source}: rule must be a mapping, got {type(data).__name__}")

    kind = data.get(RULE_TYPE_KEY)
    if not isinstance(kind, str) or not kind.strip():
        raise RuleSchemaError(f"{source}: rule '{RULE_TYPE_KEY}' must be a non-empty string")

    if kind not in KNOWN_RULE_KINDS:
        logger.debug("%s: keeping unknown rule kind %r", source, kind)
        return UnknownRule(kind=kind, raw=dict(data))

    unknown_keys = set(data.keys()) - RULE_ALLOWED_KEYS[kind] - {RULE_TYPE_KEY}
    if unknown_keys:
        raise RuleSchemaError(f"{source}: unknown keys for rule '{kind}': {sorted(unknown_keys)}")

    if kind == KIND_ACTIVE_PLUGINS_CONTAINS:
        return ActivePluginsContains(plugins=_string_set(data, "plugins", source))
    if kind == KIND_ACTIVE_PLUGINS_DOES_NOT_CONTAIN:
        return ActivePluginsDoesNotContain(plugins=_string_set(data, "plugins", source))
    if kind == KIND_ACTIVE_PLUGINS_CONTAINS_ALL:
        return ActivePluginsContainsAll(plugins=_string_set(data, "plugins", source))
    if kind == KIND_BASE_LOCATION_COUNTRY_IN_SET:
        countries = _string_set(data, "countries", source)
        return BaseLocationCountryInSet(countries=frozenset(code.upper() for code in countries))
    if kind == KIND_OPTION_COMPARES:
        return _parse_option_compares(data, source)
    if kind == KIND_PASS:
        return PassRule()
    if kind == KIND_FAIL:
        return FailRule()
    if kind == KIND_NOT:
        if "operand" not in data:
            raise RuleSchemaError(f"{source}: rule 'not' missing 'operand'")
        return NotRule(operand=parse_rule(data["operand"], f"{source}.operand"))

    operands = data.get("operands")
    if not isinstance(operands, list) or not operands:
        raise RuleSchemaError(f"{source}: rule '{kind}' requires a non-empty 'operands' list")
    parsed = tuple(parse_rule(item, f"{source}.operands[{index}]") for index, item in enumerate(operands))
    if kind == KIND_AND:
        return AndRule(operands=parsed)
    assert kind == KIND_OR
    return OrRule(operands=parsed)


def parse_rules(data: Any, source: str) -> tuple[Rule, ...]:
    """Parse a rule list. A single mapping is accepted as a one-rule list."""
    if data is None:
        return ()
    if isinstance(data, dict):
        return (parse_rule(data, source),)
    if not isinstance(data, list):
        raise RuleSchemaError(f"{source}: rules must be a list of mappings")
    return tuple(parse_rule(item, f"{source}[{index}]") for index, item in enumerate(data))


def rule_to_dict(rule: Rule) -> dict[str, Any]:
    """Render a rule back into its catalog mapping form."""
    match rule:
        case ActivePluginsContains() | ActivePluginsDoesNotContain() | ActivePluginsContainsAll():
            return {RULE_TYPE_KEY: rule.kind, "plugins": sorted(rule.plugins)}
        case BaseLocationCountryInSet(countries=countries):
            return {RULE_TYPE_KEY: rule.kind, "countries": sorted(countries)}
        case OptionCompares():
            rendered: dict[str, Any] = {
                RULE_TYPE_KEY: rule.kind,
                "option_name": rule.option_name,
                "operation": rule.operation,
                "value": _thaw(rule.value),
            }
            if rule.has_default:
                rendered["default"] = _thaw(rule.default)
            return rendered
        case NotRule(operand=operand):
            return {RULE_TYPE_KEY: rule.kind, "operand": rule_to_dict(operand)}
        case AndRule(operands=operands) | OrRule(operands=operands):
            return {RULE_TYPE_KEY: rule.kind, "operands": [rule_to_dict(item) for item in operands]}
        case UnknownRule(kind=kind, raw=raw):
            return dict(raw) if raw else {RULE_TYPE_KEY: kind}
        case _:
            return {RULE_TYPE_KEY: rule.kind}


def _parse_option_compares(data: dict[str, Any], source: str) -> OptionCompares:
    option_name = data.get("option_name")
    if not isinstance(option_name, str) or not option_name.strip():
        raise RuleSchemaError(f"{source}: rule '{KIND_OPTION_COMPARES}' requires a non-empty 'option_name'")

    operation = data.get("operation")
    if operation not in OPTION_OPERATIONS:
        raise RuleSchemaError(
            f"{source}: operation must be one of {sorted(OPTION_OPERATIONS)}, got {operation!r}"
        )

    if "value" not in data:
        raise RuleSchemaError(f"{source}: rule '{KIND_OPTION_COMPARES}' missing 'value'")

    return OptionCompares(
        option_name=option_name,
        operation=operation,
        value=_freeze(data["value"]),
        default=_freeze(data.get("default")),
        has_default="default" in data,
    )


def _string_set(data: dict[str, Any], key: str, source: str) -> frozenset[str]:
    """Read a non-empty list of non-empty strings as a frozenset."""
    value = data.get(key)
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not value:
        raise RuleSchemaError(f"{source}: '{key}' must be a non-empty list of strings")
    if not all(isinstance(item, str) and item.strip() for item in value):
        raise RuleSchemaError(f"{source}: '{key}' must be a non-empty list of strings")
    return frozenset(item.strip() for item in value)


def _freeze(value: Any) -> Any:
    """Convert lists into tuples so parsed rules stay immutable."""
    if isinstance(value, list):
        return tuple(_freeze(item) for item in value)
    return value


def _thaw(value: Any) -> Any:
    if isinstance(value, tuple):
        return [_thaw(item) for item in value]
    return value
