"""Branding constants for terminal output."""

from __future__ import annotations

BRAND_NAME: str = "EXTREC"
ASCII_LOGO_LINES: tuple[str, ...] = (
    ">_ EXTREC",
    "     // extension recommendations for your store",
)
RESULT_TITLE: str = "Recommended extensions"
CLI_DESCRIPTION: str = "\n".join((*ASCII_LOGO_LINES, "", f"{BRAND_NAME} recommendation evaluator"))
