"""Configuration-related exceptions."""

from __future__ import annotations

from extrec.exceptions.base import ExtrecError


class ConfigError(ExtrecError, ValueError):
    """Raised when project configuration or store state is invalid."""
