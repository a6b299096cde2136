"""Recommendation catalog loading and validation."""

from __future__ import annotations

from extrec.catalog.loader import (
    Catalog,
    load_catalog,
    parse_catalog,
    parse_plugin,
    with_core_profiler_fields,
)
from extrec.catalog.validation import validate_catalog_file

__all__ = [
    "Catalog",
    "load_catalog",
    "parse_catalog",
    "parse_plugin",
    "validate_catalog_file",
    "with_core_profiler_fields",
]
