"""Stable validation error codes for catalog validation."""

from __future__ import annotations

CAT001: str = "CAT001"  # catalog file not found / unreadable
CAT002: str = "CAT002"  # invalid YAML parse
CAT003: str = "CAT003"  # top-level value is not a mapping
CAT004: str = "CAT004"  # unknown key
CAT005: str = "CAT005"  # missing required field / invalid value type
CAT006: str = "CAT006"  # malformed rule
CAT007: str = "CAT007"  # unknown rule kind (strict mode only)
CAT008: str = "CAT008"  # unresolved plugin reference
CAT009: str = "CAT009"  # duplicate bundle key
