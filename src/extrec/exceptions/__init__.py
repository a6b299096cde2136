"""Shared exception hierarchy for Extrec."""

from __future__ import annotations

from .base import ExtrecError
from .catalog import CatalogError, CatalogSchemaError, RuleSchemaError, UnknownRuleKind
from .config import ConfigError

__all__ = [
    "CatalogError",
    "CatalogSchemaError",
    "ConfigError",
    "ExtrecError",
    "RuleSchemaError",
    "UnknownRuleKind",
]
