# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Write rendered reports to a Rich console."""

from __future__ import annotations

from collections.abc import Sequence

from rich.console import Console

from ..config import OutputFormat
from ..models import FileReport
from .formatters import render_json, render_text


def emit_reports(
    console: Console,
    reports: Sequence[FileReport],
    *,
    output_format: OutputFormat,
    show_warnings: bool,
) -> None:
    """Print ``reports`` in the requested format.

    Files that failed are skipped here; their errors are reported separately.
    Output goes through :meth:`Console.out` so bracketed rule codes are never
    read as markup.

    Args:
        console: Destination console.
        reports: Reports in display order.
        output_format: Text lines or one JSON document per file.
        show_warnings: Include warning-level violations.
    """

    for report in reports:
        if report.failed:
            continue
        if output_format is OutputFormat.JSON:
            console.out(render_json(report, show_warnings=show_warnings), highlight=False)
            continue
        for line in render_text(report, show_warnings=show_warnings):
            console.out(line, highlight=False)


__all__ = ["emit_reports"]
