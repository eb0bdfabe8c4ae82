# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""End-to-end tests for the docstring checking pipeline."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

import pytest

from rustdocstyle import DocstringChecker, Severity, Violation, aggregate
from rustdocstyle.errors import ParseError
from rustdocstyle.rules import RuleSelection


def _rules(violations: list[Violation]) -> list[str]:
    return [violation.rule for violation in violations]


def _line_of(path: Path, needle: str) -> int:
    for number, text in enumerate(path.read_text(encoding="utf-8").splitlines(), start=1):
        if needle in text:
            return number
    raise AssertionError(f"{needle!r} not found in {path}")


def test_lowercase_summary_without_period(checker: DocstringChecker) -> None:
    source = "/// calculate the sum\nfn add(a: i32, b: i32) -> i32 {\n    a + b\n}\n"

    violations = checker.check_source(source)

    assert _rules(violations) == ["D400", "D403"]
    assert all((violation.line, violation.column) == (1, 5) for violation in violations)


def test_undocumented_public_function(checker: DocstringChecker) -> None:
    violations = checker.check_source("pub fn add(a: i32, b: i32) -> i32 {\n    a + b\n}\n")

    assert len(violations) == 1
    assert violations[0].rule == "D103"
    assert violations[0].message == "Missing docstring in public function"
    assert (violations[0].line, violations[0].column) == (1, 5)


def test_undocumented_private_function(checker: DocstringChecker) -> None:
    assert checker.check_source("fn add(a: i32, b: i32) -> i32 {\n    a + b\n}\n") == []


def test_common_type_reference_and_backticks(checker: DocstringChecker) -> None:
    bracketed = checker.check_source(
        "/// Returns an [Option] containing the result.\npub fn find() -> Option<i32> {\n    None\n}\n",
    )
    backticked = checker.check_source(
        "/// Returns an `Option` containing the result.\npub fn find() -> Option<i32> {\n    None\n}\n",
    )

    assert _rules(bracketed).count("R402") == 1
    assert "R402" not in _rules(backticked)
    assert [rule for rule in _rules(bracketed) if rule != "R402"] == _rules(backticked)


def test_summary_separation_scenario(checker: DocstringChecker) -> None:
    joined = checker.check_source("/// Calculate X.\n/// This continues.\npub fn f() {}\n")
    separated = checker.check_source("/// Calculate X.\n///\n/// This continues.\npub fn f() {}\n")

    assert _rules(joined) == ["D205"]
    assert (joined[0].line, joined[0].column) == (2, 5)
    assert separated == []


def test_violations_are_sorted_by_location(checker: DocstringChecker) -> None:
    source = "pub fn second() {}\n\n/// lowercase\npub struct First;\n"

    violations = checker.check_source(source)

    assert [(violation.line, violation.rule) for violation in violations] == [
        (1, "D103"),
        (3, "D400"),
        (3, "D403"),
    ]


def test_aggregate_is_stable_and_keeps_duplicates() -> None:
    first = Violation(rule="D400", severity=Severity.ERROR, line=2, column=1, message="a")
    second = Violation(rule="D400", severity=Severity.ERROR, line=2, column=1, message="b")
    earlier = Violation(rule="D403", severity=Severity.ERROR, line=1, column=9, message="c")

    assert aggregate([[first], [second, earlier]]) == [earlier, first, second]


def test_selection_limits_rules() -> None:
    checker = DocstringChecker(selection=RuleSelection(ignore=("D403",)))

    assert _rules(checker.check_source("/// calculate the sum\nfn add() {}\n")) == ["D400"]


def test_good_fixture_is_clean(checker: DocstringChecker, fixtures_dir: Path) -> None:
    report = checker.check_file(fixtures_dir / "good_example.rs")

    assert report.violations == []
    assert not report.failed


def test_notations_fixture_is_clean(checker: DocstringChecker, fixtures_dir: Path) -> None:
    assert checker.check_file(fixtures_dir / "notations.rs").violations == []


def test_blank_line_fixture(checker: DocstringChecker, fixtures_dir: Path) -> None:
    report = checker.check_file(fixtures_dir / "blank_lines.rs")

    errors = report.filtered(show_warnings=False)
    assert _rules(errors).count("D201") == 5
    assert _rules(errors).count("D202") == 5
    assert len(errors) == 10
    assert (errors[0].rule, errors[0].line, errors[0].column) == ("D201", 4, 5)
    assert (errors[1].rule, errors[1].line, errors[1].column) == ("D202", 7, 5)


def test_doc_attribute_fixture(checker: DocstringChecker, fixtures_dir: Path) -> None:
    report = checker.check_file(fixtures_dir / "doc_attributes.rs")

    assert sorted(_rules(report.filtered(show_warnings=False))) == ["D400", "D400", "D403", "D403", "D403"]
    warnings = [violation for violation in report.violations if violation.severity is Severity.WARNING]
    assert _rules(warnings) == ["D401"]


def test_macro_fixture(checker: DocstringChecker, fixtures_dir: Path) -> None:
    path = fixtures_dir / "macros.rs"

    violations = checker.check_file(path).violations

    assert _rules(violations) == ["R103"]
    assert violations[0].message == "Missing docstring in public macro"
    assert (violations[0].line, violations[0].column) == (_line_of(path, "macro_rules! undocumented_macro"), 1)


def test_alias_fixture(checker: DocstringChecker, fixtures_dir: Path) -> None:
    path = fixtures_dir / "aliases.rs"

    violations = checker.check_file(path).violations

    assert [(violation.rule, violation.message) for violation in violations] == [
        ("R101", "Missing docstring in public type alias"),
        ("R102", "Missing docstring in public const"),
        ("R102", "Missing docstring in public static"),
    ]
    assert violations[0].line == _line_of(path, "UndocumentedType")


@pytest.mark.parametrize("name", ["lib.rs", "main.rs", "mod.rs"])
def test_package_root_requires_inner_docs(
    checker: DocstringChecker,
    fixtures_dir: Path,
    tmp_path: Path,
    name: str,
) -> None:
    target = tmp_path / name
    shutil.copyfile(fixtures_dir / "package_bad.rs", target)

    violations = checker.check_file(target).violations

    assert [(violation.rule, violation.line, violation.column) for violation in violations] == [("D104", 1, 1)]
    assert violations[0].message == "Missing docstring in public package"


def test_documented_package_root(checker: DocstringChecker, fixtures_dir: Path, tmp_path: Path) -> None:
    target = tmp_path / "lib.rs"
    shutil.copyfile(fixtures_dir / "package_good.rs", target)

    assert checker.check_file(target).filtered(show_warnings=False) == []


def test_ordinary_file_does_not_require_module_docs(checker: DocstringChecker, fixtures_dir: Path) -> None:
    assert checker.check_file(fixtures_dir / "package_bad.rs").violations == []


def test_undocumented_module_declaration(checker: DocstringChecker) -> None:
    violations = checker.check_source("pub mod storage;\n\n/// Cached entries.\npub mod cache;\n\nmod private;\n")

    assert [(violation.rule, violation.line, violation.column) for violation in violations] == [("D100", 1, 5)]
    assert violations[0].message == "Missing docstring in public module"


def test_license_block_before_crate_docs(checker: DocstringChecker, tmp_path: Path) -> None:
    target = tmp_path / "lib.rs"
    target.write_text("/* Copyright (c) Example.\n * Licensed under MIT.\n */\n//! Crate docs.\n", encoding="utf-8")

    assert checker.check_file(target).violations == []


def test_unterminated_leading_block_leaves_crate_undocumented(checker: DocstringChecker, tmp_path: Path) -> None:
    target = tmp_path / "lib.rs"
    target.write_text("/* Copyright\n//! Crate docs.\n", encoding="utf-8")

    assert [violation.rule for violation in checker.check_file(target).violations] == ["D104"]


def test_exported_macro_behind_plain_comment(checker: DocstringChecker) -> None:
    violations = checker.check_source("#[macro_export]\n// note\nmacro_rules! shout {\n    () => {};\n}\n")

    assert [(violation.rule, violation.line, violation.column) for violation in violations] == [("R103", 3, 1)]


def test_check_file_missing_path(checker: DocstringChecker, tmp_path: Path) -> None:
    with pytest.raises(ParseError) as excinfo:
        checker.check_file(tmp_path / "absent.rs")

    assert excinfo.value.path == tmp_path / "absent.rs"
    assert str(excinfo.value).startswith("Failed to read file:")


def test_check_file_invalid_utf8(checker: DocstringChecker, tmp_path: Path) -> None:
    target = tmp_path / "binary.rs"
    target.write_bytes(b"\xff\xfe\x00fn")

    with pytest.raises(ParseError):
        checker.check_file(target)


def test_check_paths_isolates_failures(checker: DocstringChecker, fixtures_dir: Path, tmp_path: Path) -> None:
    paths = [fixtures_dir / "macros.rs", tmp_path / "absent.rs", fixtures_dir / "aliases.rs"]

    reports = checker.check_paths(paths, jobs=2)

    assert [report.file for report in reports] == [str(path) for path in paths]
    assert [report.failed for report in reports] == [False, True, False]
    assert reports[1].violations == []


def test_parallel_results_match_sequential(checker: DocstringChecker, fixtures_dir: Path) -> None:
    paths = sorted(fixtures_dir.glob("*.rs"))

    sequential = checker.check_paths(paths)
    parallel = checker.check_paths(paths, jobs=4)

    assert sequential == parallel


def test_processing_is_logged(
    checker: DocstringChecker,
    fixtures_dir: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    path = fixtures_dir / "good_example.rs"

    with caplog.at_level(logging.INFO, logger="rustdocstyle"):
        checker.check_file(path)

    assert f"Processing file: {path}" in caplog.text


def test_repeated_runs_are_identical(checker: DocstringChecker, fixtures_dir: Path) -> None:
    source = (fixtures_dir / "blank_lines.rs").read_text(encoding="utf-8")

    first = checker.check_source(source)
    second = DocstringChecker().check_source(source)

    assert [violation.format("x.rs") for violation in first] == [violation.format("x.rs") for violation in second]
