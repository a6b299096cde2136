"""CLI subcommand handlers."""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import replace

from extrec.catalog import load_catalog, validate_catalog_file
from extrec.config import ExtrecConfig, load_config
from extrec.constants.reporting import OUTPUT_FORMAT_JSON
from extrec.exceptions import CatalogError, ConfigError, ExtrecError
from extrec.exceptions.validation import format_errors
from extrec.model import EvaluationResult, StoreStateSnapshot
from extrec.recommendations import RecommendationEngine
from extrec.reporting import StdoutReporter, render_json, write_report
from extrec.store import load_store_state

logger = logging.getLogger(__name__)


def handle_evaluate(args: argparse.Namespace) -> int:
    """Run ``extrec evaluate`` and print the recommendations."""
    try:
        config = load_config(args.root, args.config)
        snapshot = build_snapshot(args, config)
        catalog = load_catalog(args.catalog if args.catalog is not None else config.catalog_path)
    except (ConfigError, CatalogError) as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2

    engine = RecommendationEngine(catalog, core_profiler=args.core_profiler or config.core_profiler)
    bundle_keys = args.bundle if args.bundle else (list(config.bundles) or None)

    try:
        result = engine.evaluate(snapshot, bundle_keys=bundle_keys)
    except CatalogError as exc:
        print(f"Configuration error: {exc}", file=sys.stderr)
        return 2
    except ExtrecError as exc:
        print(f"Evaluation error: {exc}", file=sys.stderr)
        return 1

    if args.output is not None:
        try:
            write_report(args.output, result, snapshot)
        except OSError as exc:
            print(f"Output error: {exc}", file=sys.stderr)
            return 2
        logger.info("Wrote report to %s", args.output)

    output_format = args.output_format or config.output_format
    use_color = not args.no_color and sys.stdout.isatty()
    print(_render(result, snapshot, output_format, color=use_color, verbose=args.verbose))
    return 0


def handle_validate_catalog(args: argparse.Namespace) -> int:
    """Validate a catalog file and report results."""
    errors = validate_catalog_file(args.catalog, strict_kinds=args.strict_kinds)
    if errors:
        print(format_errors(errors), file=sys.stderr)
        return 2

    print("Catalog is valid.")
    return 0


def build_snapshot(args: argparse.Namespace, config: ExtrecConfig) -> StoreStateSnapshot:
    """Load the store state file and apply command-line overrides."""
    store_path = args.store if args.store is not None else config.store_path
    snapshot = load_store_state(store_path) if store_path is not None else StoreStateSnapshot()

    if args.country is not None:
        snapshot = replace(snapshot, default_country=args.country.strip() or None)
    if args.active_plugin is not None:
        snapshot = replace(snapshot, active_plugins=tuple(args.active_plugin))
    return snapshot


def _render(
    result: EvaluationResult,
    snapshot: StoreStateSnapshot,
    output_format: str,
    *,
    color: bool,
    verbose: bool,
) -> str:
    if output_format == OUTPUT_FORMAT_JSON:
        return render_json(result, snapshot)
    return StdoutReporter(result, snapshot, color=color, verbose=verbose).render()
