"""Shared type aliases for Extrec."""

from .common import JsonObject, JsonScalar, JsonValue, OutputFormat

__all__ = [
    "JsonObject",
    "JsonScalar",
    "JsonValue",
    "OutputFormat",
]
