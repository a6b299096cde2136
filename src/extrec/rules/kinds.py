"""Closed set of visibility rule kinds.

Each rule kind is a frozen dataclass carrying only the parameters it needs.
``Rule`` is the union of every kind, including :class:`UnknownRule` which
keeps rules from newer catalogs loadable until they are evaluated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar

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
)


@dataclass(frozen=True)
class ActivePluginsContains:
    """True when at least one of ``plugins`` is active."""

    kind: ClassVar[str] = KIND_ACTIVE_PLUGINS_CONTAINS

    plugins: frozenset[str]


@dataclass(frozen=True)
class ActivePluginsDoesNotContain:
    """True when none of ``plugins`` is active."""

    kind: ClassVar[str] = KIND_ACTIVE_PLUGINS_DOES_NOT_CONTAIN

    plugins: frozenset[str]


@dataclass(frozen=True)
class ActivePluginsContainsAll:
    """True when every one of ``plugins`` is active."""

    kind: ClassVar[str] = KIND_ACTIVE_PLUGINS_CONTAINS_ALL

    plugins: frozenset[str]


@dataclass(frozen=True)
class BaseLocationCountryInSet:
    """True when the store base location is one of ``countries``.

    Entries are bare country codes (``US``) or ``country:state`` pairs
    (``US:CA``).
    """

    kind: ClassVar[str] = KIND_BASE_LOCATION_COUNTRY_IN_SET

    countries: frozenset[str]


@dataclass(frozen=True)
class OptionCompares:
    """Compare a store option value against ``value`` with ``operation``."""

    kind: ClassVar[str] = KIND_OPTION_COMPARES

    option_name: str
    operation: str
    value: Any
    default: Any = None
    has_default: bool = False


@dataclass(frozen=True)
class PassRule:
    kind: ClassVar[str] = KIND_PASS


@dataclass(frozen=True)
class FailRule:
    kind: ClassVar[str] = KIND_FAIL


@dataclass(frozen=True)
class NotRule:
    kind: ClassVar[str] = KIND_NOT

    operand: Rule


@dataclass(frozen=True)
class AndRule:
    kind: ClassVar[str] = KIND_AND

    operands: tuple[Rule, ...]


@dataclass(frozen=True)
class OrRule:
    kind: ClassVar[str] = KIND_OR

    operands: tuple[Rule, ...]


@dataclass(frozen=True)
class UnknownRule:
    """A rule whose kind tag this evaluator does not implement."""

    kind: str
    raw: dict[str, Any] = field(default_factory=dict, compare=False)


type Rule = (
    ActivePluginsContains
    | ActivePluginsDoesNotContain
    | ActivePluginsContainsAll
    | BaseLocationCountryInSet
    | OptionCompares
    | PassRule
    | FailRule
    | NotRule
    | AndRule
    | OrRule
    | UnknownRule
)
