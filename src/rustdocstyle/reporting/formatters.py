# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Render file reports as text lines or JSON documents."""

from __future__ import annotations

import json
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Final

from ..models import FileReport
from ..severity import Severity, count_by_severity

_JSON_INDENT: Final[int] = 2


def render_text(report: FileReport, *, show_warnings: bool) -> list[str]:
    """Return one ``<path>:<line>:<column> <severity> [<rule>]: <message>`` line per violation.

    Args:
        report: Report for a single file.
        show_warnings: Include warning-level violations.

    Returns:
        list[str]: Rendered lines in report order.
    """

    return [violation.format(report.file) for violation in report.filtered(show_warnings=show_warnings)]


def report_payload(report: FileReport, *, show_warnings: bool) -> dict[str, Any]:
    """Return the structured ``{"file", "violations"}`` payload for ``report``."""

    return {
        "file": report.file,
        "violations": [violation.to_payload() for violation in report.filtered(show_warnings=show_warnings)],
    }


def render_json(report: FileReport, *, show_warnings: bool) -> str:
    """Return ``report`` as pretty-printed JSON with two-space indentation."""

    return json.dumps(report_payload(report, show_warnings=show_warnings), indent=_JSON_INDENT, ensure_ascii=False)


@dataclass(frozen=True, slots=True)
class RunSummary:
    """Totals gathered across the reports of one run."""

    files: int
    errors: int
    warnings: int
    failed_files: int

    @property
    def reported(self) -> int:
        """Return the number of violations that were displayed."""

        return self.errors + self.warnings


def summarize(reports: Sequence[FileReport], *, show_warnings: bool) -> RunSummary:
    """Count visible violations and failed files across ``reports``.

    Args:
        reports: Reports produced by the checker.
        show_warnings: Count warnings only when they are displayed.

    Returns:
        RunSummary: Aggregated totals.
    """

    counts = count_by_severity(
        violation.severity for report in reports for violation in report.filtered(show_warnings=show_warnings)
    )
    return RunSummary(
        files=len(reports),
        errors=counts[Severity.ERROR],
        warnings=counts[Severity.WARNING],
        failed_files=sum(1 for report in reports if report.failed),
    )


__all__ = ["RunSummary", "render_json", "render_text", "report_payload", "summarize"]
