# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for text and JSON report rendering."""

from __future__ import annotations

import io
import json

from rich.console import Console

from rustdocstyle.config import OutputFormat
from rustdocstyle.models import FileReport, Violation
from rustdocstyle.reporting import emit_reports, render_json, render_text, summarize
from rustdocstyle.severity import Severity

ERROR = Violation(rule="D400", severity=Severity.ERROR, line=3, column=5, message="First line should end with a period")
WARNING = Violation(
    rule="D401",
    severity=Severity.WARNING,
    line=3,
    column=5,
    message="First line should be in imperative mood",
)


def _report() -> FileReport:
    return FileReport(file="src/lib.rs", violations=[ERROR, WARNING])


def test_render_text_hides_warnings_by_default() -> None:
    assert render_text(_report(), show_warnings=False) == [
        "src/lib.rs:3:5 error [D400]: First line should end with a period",
    ]


def test_render_text_with_warnings() -> None:
    lines = render_text(_report(), show_warnings=True)

    assert lines[1] == "src/lib.rs:3:5 warning [D401]: First line should be in imperative mood"


def test_render_json_shape() -> None:
    payload = json.loads(render_json(_report(), show_warnings=True))

    assert payload == {
        "file": "src/lib.rs",
        "violations": [
            {
                "rule": "D400",
                "message": "First line should end with a period",
                "line": 3,
                "column": 5,
                "severity": "error",
            },
            {
                "rule": "D401",
                "message": "First line should be in imperative mood",
                "line": 3,
                "column": 5,
                "severity": "warning",
            },
        ],
    }


def test_render_json_uses_two_space_indent() -> None:
    rendered = render_json(FileReport(file="a.rs"), show_warnings=False)

    assert rendered == '{\n  "file": "a.rs",\n  "violations": []\n}'


def test_summarize_counts_visible_violations() -> None:
    failed = FileReport(file="broken.rs", error="Failed to read file: denied")

    hidden = summarize([_report(), failed], show_warnings=False)
    shown = summarize([_report(), failed], show_warnings=True)

    assert (hidden.files, hidden.errors, hidden.warnings, hidden.failed_files) == (2, 1, 0, 1)
    assert shown.reported == 2


def test_emit_reports_skips_failed_files() -> None:
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, color_system=None, highlight=False, soft_wrap=True)

    emit_reports(
        console,
        [_report(), FileReport(file="broken.rs", error="boom")],
        output_format=OutputFormat.TEXT,
        show_warnings=False,
    )

    assert buffer.getvalue() == "src/lib.rs:3:5 error [D400]: First line should end with a period\n"


def test_emit_reports_json_documents() -> None:
    buffer = io.StringIO()
    console = Console(file=buffer, width=200, color_system=None, highlight=False, soft_wrap=True)

    emit_reports(console, [_report()], output_format=OutputFormat.JSON, show_warnings=False)

    assert json.loads(buffer.getvalue())["violations"][0]["rule"] == "D400"
