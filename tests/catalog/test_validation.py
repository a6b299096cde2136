"""Tests for collect-all catalog validation."""

from __future__ import annotations

from pathlib import Path

import pytest

from extrec.catalog import load_catalog, validate_catalog_file
from extrec.constants.validation import (
    CAT001,
    CAT002,
    CAT003,
    CAT004,
    CAT005,
    CAT006,
    CAT007,
    CAT008,
    CAT009,
)
from extrec.exceptions import CatalogError
from extrec.exceptions.validation import format_errors

from ..conftest import _write_catalog


def _codes(path: Path, *, strict_kinds: bool = False) -> list[str]:
    return [error.code for error in validate_catalog_file(path, strict_kinds=strict_kinds)]


def test_valid_catalog_has_no_errors(tmp_path: Path) -> None:
    assert validate_catalog_file(_write_catalog(tmp_path / "catalog.yaml")) == []


def test_missing_file(tmp_path: Path) -> None:
    assert _codes(tmp_path / "missing.yaml") == [CAT001]


def test_invalid_yaml(tmp_path: Path) -> None:
    path = tmp_path / "catalog.yaml"
    path.write_text("bundles: [unclosed\n", encoding="utf-8")

    assert _codes(path) == [CAT002]


def test_non_mapping(tmp_path: Path) -> None:
    path = tmp_path / "catalog.yaml"
    path.write_text("- a\n", encoding="utf-8")

    assert _codes(path) == [CAT003]


def test_collects_every_problem_in_one_pass(tmp_path: Path) -> None:
    path = _write_catalog(
        tmp_path / "catalog.yaml",
        extra="nope",
        plugins={
            "alpha": {"rules": [{"type": "active-plugins-contains", "plugins": []}]},
            "beta": {"name": 7},
        },
        bundles=[
            {"key": "b", "title": "B", "plugins": ["alpha", "ghost"]},
            {"key": "b", "title": "Again", "plugins": []},
        ],
    )

    errors = validate_catalog_file(path)

    assert [error.code for error in errors] == [CAT004, CAT005, CAT006, CAT008, CAT009]
    ghost = next(error for error in errors if error.code == CAT008)
    assert ghost.field == "bundles[0].plugins[1]"
    assert "ghost" in ghost.message
    assert ghost.hint


def test_version_mismatch(tmp_path: Path) -> None:
    errors = validate_catalog_file(_write_catalog(tmp_path / "catalog.yaml", version=3))

    assert [(error.code, error.field) for error in errors] == [(CAT005, "version")]


def test_unknown_rule_kind_accepted_unless_strict(tmp_path: Path) -> None:
    path = _write_catalog(
        tmp_path / "catalog.yaml",
        plugins={"alpha": {"rules": [{"type": "or", "operands": [{"type": "future-kind"}]}]}},
        bundles=[{"key": "b", "title": "B", "plugins": ["alpha"]}],
    )

    assert _codes(path) == []
    strict = validate_catalog_file(path, strict_kinds=True)
    assert [error.code for error in strict] == [CAT007]
    assert "future-kind" in strict[0].message


def test_inline_plugins_are_validated(tmp_path: Path) -> None:
    path = _write_catalog(
        tmp_path / "catalog.yaml",
        bundles=[{"key": "b", "title": "B", "plugins": [{"key": "inline", "rules": "none"}, 42]}],
    )

    assert _codes(path) == [CAT005, CAT006]


def test_format_includes_code_and_location(tmp_path: Path) -> None:
    path = _write_catalog(tmp_path / "catalog.yaml", bundles=[{"key": "b", "title": "B", "plugins": ["ghost"]}])

    formatted = validate_catalog_file(path)[0].format()

    assert formatted.startswith(f"[{CAT008}] ")
    assert "bundles[0].plugins[0]" in formatted


def test_catalog_codes_are_unique_and_ordered() -> None:
    codes = [CAT001, CAT002, CAT003, CAT004, CAT005, CAT006, CAT007, CAT008, CAT009]

    assert codes == sorted(set(codes))


def test_format_errors_appends_problem_count(tmp_path: Path) -> None:
    path = _write_catalog(tmp_path / "catalog.yaml", bundles=[{"key": "b", "title": "B", "plugins": ["x", "y"]}])

    lines = format_errors(validate_catalog_file(path)).splitlines()

    assert len(lines) == 3
    assert lines[-1] == "2 catalog problem(s) found"


@pytest.mark.parametrize(
    "bundles",
    [
        [{"key": "", "title": "T", "plugins": []}],
        [{"key": 7, "title": "T", "plugins": []}],
        [{"key": "b", "title": 5, "plugins": []}],
        [{"key": "b", "title": "T", "plugins": ["ghost"]}],
        [{"key": "b", "title": "T", "plugins": []}, {"key": "b", "title": "U", "plugins": []}],
        [{"key": "b", "title": "T", "plugins": "alpha"}],
    ],
    ids=["empty_key", "int_key", "int_title", "unresolved_ref", "duplicate_key", "plugins_not_list"],
)
def test_validation_reports_every_catalog_the_loader_rejects(tmp_path: Path, bundles: list[object]) -> None:
    path = _write_catalog(tmp_path / "catalog.yaml", bundles=bundles)

    with pytest.raises(CatalogError):
        load_catalog(path)
    assert validate_catalog_file(path) != []
