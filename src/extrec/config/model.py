"""Config data model for Extrec."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from extrec.constants.reporting import DEFAULT_OUTPUT_FORMAT
from extrec.types import OutputFormat


@dataclass(frozen=True)
class ExtrecConfig:
    """Resolved project config."""

    catalog_path: Path | None = None
    store_path: Path | None = None
    core_profiler: bool = False
    output_format: OutputFormat = DEFAULT_OUTPUT_FORMAT  # type: ignore[assignment]
    bundles: tuple[str, ...] = ()
