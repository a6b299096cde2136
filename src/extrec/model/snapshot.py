"""Read-only store state consumed by rule evaluation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from extrec.constants.rules import (
    COUNTRY_STATE_SEPARATOR,
    PLUGIN_FILE_SUFFIX,
    PLUGIN_PATH_SEPARATOR,
)


def plugin_slug(entry: str) -> str:
    """Return the plugin slug for an active-plugins entry.

    ``woocommerce-tax/woocommerce-tax.php`` and ``hello.php`` become
    ``woocommerce-tax`` and ``hello``; a bare slug is returned unchanged.
    """
    entry = entry.strip()
    head, sep, _ = entry.partition(PLUGIN_PATH_SEPARATOR)
    if sep:
        return head
    if entry.endswith(PLUGIN_FILE_SUFFIX):
        return entry[: -len(PLUGIN_FILE_SUFFIX)]
    return entry


@dataclass(frozen=True)
class StoreStateSnapshot:
    """Point-in-time view of the store facts rules may reference.

    ``None`` marks a fact as unknown; rules that need an unknown fact
    evaluate to false.
    """

    default_country: str | None = None
    active_plugins: tuple[str, ...] | None = None
    options: dict[str, Any] = field(default_factory=dict)

    @property
    def country_code(self) -> str | None:
        if not self.default_country:
            return None
        country, _, _ = self.default_country.partition(COUNTRY_STATE_SEPARATOR)
        return country.strip().upper() or None

    @property
    def state_code(self) -> str | None:
        if not self.default_country:
            return None
        _, _, state = self.default_country.partition(COUNTRY_STATE_SEPARATOR)
        return state.strip().upper() or None

    @property
    def active_plugin_slugs(self) -> frozenset[str] | None:
        if self.active_plugins is None:
            return None
        return frozenset(slug for slug in (plugin_slug(entry) for entry in self.active_plugins) if slug)

    def is_plugin_active(self, slug: str) -> bool:
        """Return True when *slug* is known to be active."""
        active = self.active_plugin_slugs
        return active is not None and slug in active
