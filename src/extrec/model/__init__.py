"""Core data models for Extrec."""

from .entities import Bundle, EvaluationResult, Plugin
from .snapshot import StoreStateSnapshot

__all__ = [
    "Bundle",
    "EvaluationResult",
    "Plugin",
    "StoreStateSnapshot",
]
