"""Tests for the human-readable stdout reporter."""

from __future__ import annotations

from extrec.constants.reporting import ANSI_RESET
from extrec.model import Bundle, EvaluationResult, Plugin, StoreStateSnapshot
from extrec.reporting import StdoutReporter


def _result() -> EvaluationResult:
    return EvaluationResult(
        bundles=(
            Bundle(
                key="obw/basics",
                title="Get the basics",
                plugins=(
                    Plugin(key="jetpack", name="Jetpack", description="Speed and security."),
                    Plugin(key="woocommerce-services:tax", name="WooCommerce Tax", slug="woocommerce-services"),
                ),
            ),
            Bundle(key="obw/grow", title="Grow your store"),
        )
    )


def test_render_lists_bundles_and_plugins() -> None:
    output = StdoutReporter(_result(), color=False).render()

    assert "Get the basics [obw/basics]" in output
    assert "  - jetpack  Jetpack" in output
    assert "Grow your store [obw/grow]" in output
    assert "  no recommendations" in output
    assert output.rstrip().endswith("2 bundle(s), 2 recommended plugin(s)")
    assert ANSI_RESET not in output


def test_render_marks_active_plugins() -> None:
    snapshot = StoreStateSnapshot(active_plugins=("woocommerce-services/woocommerce-services.php",))

    output = StdoutReporter(_result(), snapshot, color=False).render()

    assert "woocommerce-services:tax  WooCommerce Tax (active)" in output
    assert "jetpack  Jetpack (active)" not in output


def test_render_verbose_shows_store_state_and_descriptions() -> None:
    snapshot = StoreStateSnapshot(default_country="US:CA")

    output = StdoutReporter(_result(), snapshot, color=False, verbose=True).render()

    assert "store location: US:CA" in output
    assert "active plugins: unknown" in output
    assert "Speed and security." in output


def test_render_uses_color_when_enabled() -> None:
    assert ANSI_RESET in StdoutReporter(_result()).render()
