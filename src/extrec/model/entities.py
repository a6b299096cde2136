"""Bundle, plugin, and evaluation result entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from extrec.constants.catalog import PLUGIN_KEY_SEPARATOR
from extrec.rules.kinds import Rule


@dataclass(frozen=True)
class Plugin:
    """A candidate extension and the rules that decide its visibility.

    Display fields are opaque to evaluation. ``core_profiler_fields`` and
    ``core_profiler_rules`` hold the overrides used when the plugin is shown
    in the onboarding core profiler.
    """

    key: str
    rules: tuple[Rule, ...] = ()
    name: str = ""
    description: str = ""
    slug: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)
    core_profiler_fields: dict[str, Any] = field(default_factory=dict)
    core_profiler_rules: tuple[Rule, ...] | None = None

    @property
    def package_slug(self) -> str:
        """Installable package slug, derived from the key when not set."""
        if self.slug:
            return self.slug
        head, _, _ = self.key.partition(PLUGIN_KEY_SEPARATOR)
        return head


@dataclass(frozen=True)
class Bundle:
    """Named, ordered group of candidate extensions."""

    key: str
    title: str
    plugins: tuple[Plugin, ...] = ()


@dataclass(frozen=True)
class EvaluationResult:
    """Bundles in input order, each holding only the plugins that passed."""

    bundles: tuple[Bundle, ...]

    @property
    def total_plugins(self) -> int:
        return sum(len(bundle.plugins) for bundle in self.bundles)

    def plugin_keys(self) -> list[str]:
        """Return recommended plugin keys across all bundles, duplicates kept."""
        return [plugin.key for bundle in self.bundles for plugin in bundle.plugins]
