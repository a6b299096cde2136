"""File persistence helpers."""

from .atomic import write_text_atomic

__all__ = ["write_text_atomic"]
