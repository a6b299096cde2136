"""Recommendation evaluation over bundles of candidate extensions."""

from __future__ import annotations

from extrec.recommendations.engine import (
    RecommendationEngine,
    evaluate_bundles,
    filter_plugins,
    is_visible,
)

__all__ = [
    "RecommendationEngine",
    "evaluate_bundles",
    "filter_plugins",
    "is_visible",
]
