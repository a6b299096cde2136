"""Constants for report output, atomic writing, and stdout formatting."""

from __future__ import annotations

SCHEMA_VERSION: str = "1.0.0"
REPORT_TEMP_PREFIX: str = ".tmp-"
REPORT_TEMP_SUFFIX: str = ".json"

OUTPUT_FORMAT_TEXT: str = "text"
OUTPUT_FORMAT_JSON: str = "json"
VALID_OUTPUT_FORMATS: frozenset[str] = frozenset({OUTPUT_FORMAT_TEXT, OUTPUT_FORMAT_JSON})
DEFAULT_OUTPUT_FORMAT: str = OUTPUT_FORMAT_TEXT

ANSI_RESET: str = "\033[0m"
ANSI_BOLD: str = "\033[1m"
ANSI_DIM: str = "\033[2m"
ANSI_GREEN: str = "\033[32m"
ANSI_YELLOW: str = "\033[33m"

ACTIVE_MARKER: str = "(active)"
EMPTY_BUNDLE_TEXT: str = "no recommendations"
