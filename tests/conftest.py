"""Shared pytest fixtures and builders for catalog and snapshot test data."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from extrec.model import Bundle, Plugin, StoreStateSnapshot
from extrec.rules import ActivePluginsDoesNotContain, BaseLocationCountryInSet

SHIPPING_TAX_EXCLUSIONS: frozenset[str] = frozenset({"ext-shipping-pkg", "ext-tax-pkg", "ext-bundle-pkg"})


def _snapshot(
    country: str | None = "US:CA",
    active: tuple[str, ...] | None = ("foo/foo.php",),
    options: dict[str, Any] | None = None,
) -> StoreStateSnapshot:
    """Return a snapshot with sensible store defaults."""
    return StoreStateSnapshot(default_country=country, active_plugins=active, options=dict(options or {}))


def _shipping_tax_plugin(key: str) -> Plugin:
    return Plugin(
        key=key,
        slug="ext-bundle-pkg",
        rules=(
            BaseLocationCountryInSet(countries=frozenset({"US:CA"})),
            ActivePluginsDoesNotContain(plugins=SHIPPING_TAX_EXCLUSIONS),
        ),
    )


def _minimal_catalog(**overrides: Any) -> dict[str, Any]:
    """Return a minimal valid catalog dict, merged with *overrides*."""
    base: dict[str, Any] = {
        "version": 1,
        "plugins": {
            "alpha": {
                "name": "Alpha",
                "rules": [{"type": "active-plugins-does-not-contain", "plugins": ["alpha"]}],
            },
            "beta": {"name": "Beta"},
        },
        "bundles": [
            {"key": "basics", "title": "Basics", "plugins": ["alpha", "beta"]},
        ],
    }
    base.update(overrides)
    return base


def _write_catalog(path: Path, **overrides: Any) -> Path:
    """Write a minimal catalog YAML file to *path*."""
    path.write_text(yaml.safe_dump(_minimal_catalog(**overrides), sort_keys=False), encoding="utf-8")
    return path


@pytest.fixture()
def shipping_tax_bundles() -> tuple[Bundle, ...]:
    """One bundle recommending the same extension as a shipping and a tax entry."""
    return (
        Bundle(
            key="foo",
            title="Test bundle",
            plugins=(_shipping_tax_plugin("ext:shipping"), _shipping_tax_plugin("ext:tax")),
        ),
    )
