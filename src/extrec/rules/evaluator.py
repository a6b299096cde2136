"""Rule predicate evaluation against a store state snapshot.

Evaluation is side-effect free. A rule that references a fact missing
from the snapshot evaluates to false; only an unknown rule kind is an
error.
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any

from extrec.constants.rules import COUNTRY_STATE_SEPARATOR
from extrec.exceptions import UnknownRuleKind
from extrec.model.snapshot import StoreStateSnapshot
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

_ORDERING_OPERATIONS: dict[str, Callable[[Any, Any], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def evaluate_rule(rule: Rule, snapshot: StoreStateSnapshot) -> bool:
    """Return whether *rule* holds for *snapshot*.

    Raises UnknownRuleKind for rule kinds this evaluator does not implement.
    """
    match rule:
        case ActivePluginsContains(plugins=plugins):
            active = snapshot.active_plugin_slugs
            return active is not None and not active.isdisjoint(plugins)
        case ActivePluginsDoesNotContain(plugins=plugins):
            active = snapshot.active_plugin_slugs
            return active is not None and active.isdisjoint(plugins)
        case ActivePluginsContainsAll(plugins=plugins):
            active = snapshot.active_plugin_slugs
            return active is not None and plugins <= active
        case BaseLocationCountryInSet(countries=countries):
            return _base_location_in(countries, snapshot)
        case OptionCompares():
            return _option_compares(rule, snapshot)
        case PassRule():
            return True
        case FailRule():
            return False
        case NotRule(operand=operand):
            return not evaluate_rule(operand, snapshot)
        case AndRule(operands=operands):
            return all(evaluate_rule(item, snapshot) for item in operands)
        case OrRule(operands=operands):
            return any(evaluate_rule(item, snapshot) for item in operands)
        case UnknownRule(kind=kind):
            raise UnknownRuleKind(kind)
        case _:
            raise UnknownRuleKind(getattr(rule, "kind", type(rule).__name__))


def evaluate_rules(rules: tuple[Rule, ...], snapshot: StoreStateSnapshot) -> bool:
    """Return the conjunction of *rules*; an empty rule set holds."""
    return all(evaluate_rule(rule, snapshot) for rule in rules)


def _base_location_in(countries: frozenset[str], snapshot: StoreStateSnapshot) -> bool:
    """Match bare country codes on country, composite codes on both parts."""
    country = snapshot.country_code
    if country is None:
        return False
    state = snapshot.state_code

    for target in countries:
        target_country, sep, target_state = target.strip().upper().partition(COUNTRY_STATE_SEPARATOR)
        if target_country != country:
            continue
        if not sep or target_state == state:
            return True
    return False


def _option_compares(rule: OptionCompares, snapshot: StoreStateSnapshot) -> bool:
    if rule.option_name in snapshot.options:
        actual = _comparable(snapshot.options[rule.option_name])
    elif rule.has_default:
        actual = rule.default
    else:
        return False

    expected = rule.value
    try:
        if rule.operation == "=":
            return bool(actual == expected)
        if rule.operation == "!=":
            return bool(actual != expected)
        if rule.operation in _ORDERING_OPERATIONS:
            return bool(_ORDERING_OPERATIONS[rule.operation](actual, expected))
        if rule.operation == "contains":
            return _contains(actual, expected)
        if rule.operation == "!contains":
            return isinstance(actual, (str, tuple)) and not _contains(actual, expected)
        if rule.operation == "in":
            return _contains(expected, actual)
        if rule.operation == "!in":
            return isinstance(expected, (str, tuple)) and not _contains(expected, actual)
    except TypeError:
        return False
    return False


def _contains(container: Any, item: Any) -> bool:
    if isinstance(container, str):
        return isinstance(item, str) and item in container
    if isinstance(container, tuple):
        return item in container
    return False


def _comparable(value: Any) -> Any:
    """Store option lists compare equal to the tuples parsed from catalogs."""
    if isinstance(value, list):
        return tuple(_comparable(item) for item in value)
    return value
