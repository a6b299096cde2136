"""Tests for plugin filtering and bundle evaluation."""

from __future__ import annotations

from typing import Any

import pytest

from extrec.catalog import load_catalog
from extrec.exceptions import CatalogError, UnknownRuleKind
from extrec.model import Bundle, Plugin
from extrec.recommendations import RecommendationEngine, evaluate_bundles, filter_plugins, is_visible
from extrec.rules import ActivePluginsDoesNotContain, FailRule, PassRule, UnknownRule

from ..conftest import _snapshot


def _recommended_keys(bundles: tuple[Bundle, ...], **snapshot_kwargs: Any) -> list[str]:
    """Evaluate *bundles* and return the plugin keys kept in the first bundle."""
    result = evaluate_bundles(bundles, _snapshot(**snapshot_kwargs))
    return [plugin.key for plugin in result.bundles[0].plugins]


def test_shipping_and_tax_entries_are_both_recommended(shipping_tax_bundles: tuple[Bundle, ...]) -> None:
    keys = _recommended_keys(shipping_tax_bundles, country="US:CA", active=("foo/foo.php",))

    assert keys == ["ext:shipping", "ext:tax"]


def test_unsupported_country_drops_both_entries(shipping_tax_bundles: tuple[Bundle, ...]) -> None:
    assert _recommended_keys(shipping_tax_bundles, country="FOO") == []


@pytest.mark.parametrize(
    "active",
    [
        ("ext-shipping-pkg/ext-shipping-pkg.php", "ext-tax-pkg/ext-tax-pkg.php"),
        ("ext-shipping-pkg/ext-shipping-pkg.php",),
        ("ext-tax-pkg/ext-tax-pkg.php",),
        ("ext-bundle-pkg/ext-bundle-pkg.php",),
    ],
    ids=["shipping_and_tax_active", "shipping_active", "tax_active", "bundle_already_active"],
)
def test_active_conflicting_plugins_drop_both_entries(
    shipping_tax_bundles: tuple[Bundle, ...],
    active: tuple[str, ...],
) -> None:
    assert _recommended_keys(shipping_tax_bundles, active=active) == []


def test_bundle_count_and_order_are_preserved() -> None:
    bundles = (
        Bundle(key="b1", title="One", plugins=(Plugin(key="x", rules=(FailRule(),)),)),
        Bundle(key="b2", title="Two", plugins=()),
        Bundle(key="b3", title="Three", plugins=(Plugin(key="y"),)),
    )

    result = evaluate_bundles(bundles, _snapshot())

    assert [bundle.key for bundle in result.bundles] == ["b1", "b2", "b3"]
    assert [len(bundle.plugins) for bundle in result.bundles] == [0, 0, 1]
    assert result.bundles[0].title == "One"


def test_plugin_without_rules_is_always_kept() -> None:
    plugin = Plugin(key="always")

    for snapshot in (_snapshot(), _snapshot(country=None, active=None), _snapshot(country="FOO", active=())):
        assert is_visible(plugin, snapshot)
        assert filter_plugins([plugin], snapshot) == (plugin,)


def test_filter_plugins_keeps_input_order_and_duplicates() -> None:
    first = Plugin(key="dup", name="Shipping")
    hidden = Plugin(key="hidden", rules=(FailRule(),))
    second = Plugin(key="dup", name="Tax", rules=(PassRule(),))

    kept = filter_plugins([first, hidden, second], _snapshot())

    assert kept == (first, second)


def test_plugin_rules_are_a_conjunction() -> None:
    plugin = Plugin(key="p", rules=(PassRule(), FailRule()))

    assert not is_visible(plugin, _snapshot())


def test_evaluation_is_idempotent(shipping_tax_bundles: tuple[Bundle, ...]) -> None:
    extra = Bundle(
        key="other",
        title="Other",
        plugins=(Plugin(key="a"), Plugin(key="b", rules=(ActivePluginsDoesNotContain(plugins=frozenset({"foo"})),))),
    )
    bundles = (*shipping_tax_bundles, extra)
    snapshot = _snapshot()

    once = evaluate_bundles(bundles, snapshot)
    twice = evaluate_bundles(once.bundles, snapshot)

    assert twice == once
    assert once.plugin_keys() == ["ext:shipping", "ext:tax", "a"]


def test_evaluation_does_not_modify_input_bundles(shipping_tax_bundles: tuple[Bundle, ...]) -> None:
    evaluate_bundles(shipping_tax_bundles, _snapshot(country="FOO"))

    assert len(shipping_tax_bundles[0].plugins) == 2


def test_unknown_rule_kind_propagates_from_bundle_evaluation() -> None:
    bundles = (Bundle(key="b", title="B", plugins=(Plugin(key="p", rules=(UnknownRule(kind="future"),)),)),)

    with pytest.raises(UnknownRuleKind):
        evaluate_bundles(bundles, _snapshot())


def test_total_plugins_counts_across_bundles() -> None:
    bundles = (
        Bundle(key="a", title="A", plugins=(Plugin(key="x"), Plugin(key="y"))),
        Bundle(key="b", title="B", plugins=(Plugin(key="x"),)),
    )

    result = evaluate_bundles(bundles, _snapshot())

    assert result.total_plugins == 3
    assert result.plugin_keys() == ["x", "y", "x"]


def test_engine_restricts_to_requested_bundles() -> None:
    engine = RecommendationEngine(load_catalog())

    result = engine.evaluate(_snapshot(), bundle_keys=["task-list/reach", "obw/basics"])

    assert [bundle.key for bundle in result.bundles] == ["obw/basics", "task-list/reach"]


def test_engine_rejects_unknown_bundle_key() -> None:
    engine = RecommendationEngine(load_catalog())

    with pytest.raises(CatalogError, match="Unknown bundle key"):
        engine.evaluate(_snapshot(), bundle_keys=["missing"])


def test_engine_core_profiler_keeps_already_active_services() -> None:
    catalog = load_catalog()
    snapshot = _snapshot(active=("woocommerce-services/woocommerce-services.php",))

    regular = RecommendationEngine(catalog).evaluate(snapshot, bundle_keys=["obw/basics"])
    profiler = RecommendationEngine(catalog, core_profiler=True).evaluate(snapshot, bundle_keys=["obw/basics"])

    assert "woocommerce-services:shipping" not in regular.plugin_keys()
    assert "woocommerce-services:shipping" in profiler.plugin_keys()
    assert "woocommerce-services:tax" in profiler.plugin_keys()
