"""Catalog and rule evaluation exceptions."""

from __future__ import annotations

from extrec.exceptions.base import ExtrecError


class CatalogError(ExtrecError, ValueError):
    """Raised when a recommendation catalog cannot be loaded."""


class CatalogSchemaError(CatalogError):
    """Raised when a catalog or one of its rules violates the schema."""


class UnknownRuleKind(ExtrecError, LookupError):
    """Raised when evaluation meets a rule kind it does not implement.

    This is a data/schema mismatch between the catalog and this evaluator,
    not a condition to recover from.
    """

    def __init__(self, kind: str) -> None:
        super().__init__(f"Unknown rule kind: {kind!r}")
        self.kind = kind


class RuleSchemaError(CatalogSchemaError):
    """Raised when a rule of a known kind is malformed."""
