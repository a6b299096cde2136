"""Rule kind tags and schema constants for catalog visibility rules."""

from __future__ import annotations

RULE_TYPE_KEY: str = "type"

KIND_ACTIVE_PLUGINS_CONTAINS: str = "active-plugins-contains"
KIND_ACTIVE_PLUGINS_DOES_NOT_CONTAIN: str = "active-plugins-does-not-contain"
KIND_ACTIVE_PLUGINS_CONTAINS_ALL: str = "active-plugins-contains-all"
KIND_BASE_LOCATION_COUNTRY_IN_SET: str = "base-location-country-in-set"
KIND_OPTION_COMPARES: str = "option-compares"
KIND_PASS: str = "none"
KIND_FAIL: str = "fail"
KIND_NOT: str = "not"
KIND_AND: str = "and"
KIND_OR: str = "or"

KNOWN_RULE_KINDS: frozenset[str] = frozenset(
    {
        KIND_ACTIVE_PLUGINS_CONTAINS,
        KIND_ACTIVE_PLUGINS_DOES_NOT_CONTAIN,
        KIND_ACTIVE_PLUGINS_CONTAINS_ALL,
        KIND_BASE_LOCATION_COUNTRY_IN_SET,
        KIND_OPTION_COMPARES,
        KIND_PASS,
        KIND_FAIL,
        KIND_NOT,
        KIND_AND,
        KIND_OR,
    }
)

# Allowed keys per known kind, excluding the type tag itself.
RULE_ALLOWED_KEYS: dict[str, frozenset[str]] = {
    KIND_ACTIVE_PLUGINS_CONTAINS: frozenset({"plugins"}),
    KIND_ACTIVE_PLUGINS_DOES_NOT_CONTAIN: frozenset({"plugins"}),
    KIND_ACTIVE_PLUGINS_CONTAINS_ALL: frozenset({"plugins"}),
    KIND_BASE_LOCATION_COUNTRY_IN_SET: frozenset({"countries"}),
    KIND_OPTION_COMPARES: frozenset({"option_name", "operation", "value", "default"}),
    KIND_PASS: frozenset(),
    KIND_FAIL: frozenset(),
    KIND_NOT: frozenset({"operand"}),
    KIND_AND: frozenset({"operands"}),
    KIND_OR: frozenset({"operands"}),
}

COUNTRY_STATE_SEPARATOR: str = ":"
PLUGIN_PATH_SEPARATOR: str = "/"
PLUGIN_FILE_SUFFIX: str = ".php"

OPTION_OPERATIONS: frozenset[str] = frozenset(
    {"=", "!=", "<", "<=", ">", ">=", "contains", "!contains", "in", "!in"}
)
