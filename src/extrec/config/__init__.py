"""Configuration loading for Extrec projects."""

from __future__ import annotations

from extrec.config.loader import load_config
from extrec.config.model import ExtrecConfig

__all__ = [
    "ExtrecConfig",
    "load_config",
]
