# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Report rendering for text and JSON output."""

from __future__ import annotations

from .emitter import emit_reports
from .formatters import RunSummary, render_json, render_text, report_payload, summarize

__all__ = ["RunSummary", "emit_reports", "render_json", "render_text", "report_payload", "summarize"]
