"""Plugin filtering and bundle evaluation.

Pure transforms over (bundles, snapshot): bundles are never dropped,
order is preserved, and the same plugin key may be recommended more than
once when it is listed with independent rules.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace

from extrec.catalog.loader import Catalog, with_core_profiler_fields
from extrec.model import Bundle, EvaluationResult, Plugin, StoreStateSnapshot
from extrec.rules.evaluator import evaluate_rules

logger = logging.getLogger(__name__)


def is_visible(plugin: Plugin, snapshot: StoreStateSnapshot) -> bool:
    """Return True when every top-level rule of *plugin* passes."""
    return evaluate_rules(plugin.rules, snapshot)


def filter_plugins(plugins: Iterable[Plugin], snapshot: StoreStateSnapshot) -> tuple[Plugin, ...]:
    """Keep the plugins whose rules pass, in input order."""
    return tuple(plugin for plugin in plugins if is_visible(plugin, snapshot))


def evaluate_bundles(bundles: Iterable[Bundle], snapshot: StoreStateSnapshot) -> EvaluationResult:
    """Filter the plugins of every bundle against *snapshot*."""
    evaluated: list[Bundle] = []
    for bundle in bundles:
        kept = filter_plugins(bundle.plugins, snapshot)
        logger.debug("Bundle %s: %d of %d plugins visible", bundle.key, len(kept), len(bundle.plugins))
        evaluated.append(replace(bundle, plugins=kept))
    return EvaluationResult(bundles=tuple(evaluated))


class RecommendationEngine:
    """Evaluates a loaded catalog against store snapshots.

    With ``core_profiler`` enabled every plugin is evaluated with its core
    profiler overrides applied.
    """

    def __init__(self, catalog: Catalog, *, core_profiler: bool = False) -> None:
        self._catalog = catalog
        self._core_profiler = core_profiler

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    @property
    def core_profiler(self) -> bool:
        return self._core_profiler

    def bundles(self, bundle_keys: Iterable[str] | None = None) -> tuple[Bundle, ...]:
        """Return the catalog bundles to evaluate, optionally restricted by key."""
        selected = self._catalog.bundles if bundle_keys is None else self._catalog.select_bundles(bundle_keys)
        if not self._core_profiler:
            return selected
        return tuple(replace(bundle, plugins=with_core_profiler_fields(bundle.plugins)) for bundle in selected)

    def evaluate(
        self,
        snapshot: StoreStateSnapshot,
        *,
        bundle_keys: Iterable[str] | None = None,
    ) -> EvaluationResult:
        """Evaluate the selected bundles against *snapshot*."""
        result = evaluate_bundles(self.bundles(bundle_keys), snapshot)
        logger.debug(
            "Evaluated %d bundle(s): %d plugin(s) recommended",
            len(result.bundles),
            result.total_plugins,
        )
        return result
