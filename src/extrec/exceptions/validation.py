"""Catalog validation problems reported by ``extrec validate-catalog``."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class ValidationError:
    """One catalog problem, located by file and dotted field path.

    ``code`` is one of the stable ``CAT0xx`` identifiers.
    """

    code: str
    path: str
    field: str
    message: str
    hint: str = ""

    @property
    def sort_key(self) -> tuple[str, str, str]:
        return (self.code, self.path, self.field)

    def format(self) -> str:
        text = f"[{self.code}] {self.path}"
        if self.field:
            text += f" ({self.field})"
        text += f" {self.message}"
        if self.hint:
            text += f" ({self.hint})"
        return text


def sort_errors(errors: Iterable[ValidationError]) -> list[ValidationError]:
    return sorted(errors, key=lambda error: error.sort_key)


def format_errors(errors: Iterable[ValidationError]) -> str:
    """Render problems one per line, followed by a count."""
    ordered = sort_errors(errors)
    lines = [error.format() for error in ordered]
    lines.append(f"{len(ordered)} catalog problem(s) found")
    return "\n".join(lines)
