"""Visibility rule kinds and their catalog parser.

The evaluator lives in :mod:`extrec.rules.evaluator`.
"""

from __future__ import annotations

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
from extrec.rules.parser import parse_rule, parse_rules, rule_to_dict

__all__ = [
    "ActivePluginsContains",
    "ActivePluginsContainsAll",
    "ActivePluginsDoesNotContain",
    "AndRule",
    "BaseLocationCountryInSet",
    "FailRule",
    "NotRule",
    "OptionCompares",
    "OrRule",
    "PassRule",
    "Rule",
    "UnknownRule",
    "parse_rule",
    "parse_rules",
    "rule_to_dict",
]
