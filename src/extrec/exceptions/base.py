"""Root exception for Extrec."""

from __future__ import annotations


class ExtrecError(Exception):
    """Base class for all errors raised by Extrec."""
