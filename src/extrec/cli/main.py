"""CLI entrypoint for Extrec."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from extrec import __version__
from extrec.cli.handlers import handle_evaluate, handle_validate_catalog
from extrec.constants.branding import CLI_DESCRIPTION
from extrec.constants.reporting import VALID_OUTPUT_FORMATS


def build_parser() -> argparse.ArgumentParser:
    """Build top-level CLI parser."""
    parser = argparse.ArgumentParser(
        prog="extrec",
        description=CLI_DESCRIPTION,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    evaluate = subparsers.add_parser("evaluate", help="Evaluate catalog bundles against a store state")
    evaluate.add_argument(
        "-r",
        "--root",
        type=Path,
        default=Path("."),
        help="Project root holding extrec.yaml (default: current directory)",
    )
    evaluate.add_argument("-c", "--config", type=Path, help="Explicit config file")
    evaluate.add_argument("--catalog", type=Path, default=None, help="Catalog file (default: bundled catalog)")
    evaluate.add_argument("-s", "--store", type=Path, default=None, help="Store state YAML file")
    evaluate.add_argument(
        "--country",
        default=None,
        help="Store base location, a country code or COUNTRY:STATE pair (overrides the store file)",
    )
    evaluate.add_argument(
        "-a",
        "--active-plugin",
        action="append",
        default=None,
        help="Active plugin slug or path (repeat flag for multiple values; overrides the store file)",
    )
    evaluate.add_argument(
        "-b",
        "--bundle",
        action="append",
        default=None,
        help="Only evaluate this bundle key (repeat flag for multiple values)",
    )
    evaluate.add_argument(
        "--core-profiler",
        action="store_true",
        help="Apply core profiler overrides before evaluating",
    )
    evaluate.add_argument(
        "--output-format",
        choices=sorted(VALID_OUTPUT_FORMATS),
        default=None,
        help="Output format: text (default) or json",
    )
    evaluate.add_argument(
        "-o",
        "--output",
        type=Path,
        default=None,
        help="Write the JSON report to this file",
    )
    evaluate.add_argument("--no-color", action="store_true", help="Disable colored output")
    evaluate.add_argument("-v", "--verbose", action="store_true", help="Show store state and debug logging")

    validate = subparsers.add_parser("validate-catalog", help="Validate a catalog file without evaluating")
    validate.add_argument("--catalog", type=Path, default=None, help="Catalog file (default: bundled catalog)")
    validate.add_argument(
        "--strict-kinds",
        action="store_true",
        help="Report rule kinds this version does not implement",
    )

    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint."""
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.DEBUG if getattr(args, "verbose", False) else logging.INFO
    logging.basicConfig(level=level, format="%(levelname)s %(message)s")

    if args.command == "validate-catalog":
        return handle_validate_catalog(args)
    if args.command == "evaluate":
        return handle_evaluate(args)

    parser.error(f"Unsupported command: {args.command}")
    return 2


if __name__ == "__main__":
    raise SystemExit(main())
