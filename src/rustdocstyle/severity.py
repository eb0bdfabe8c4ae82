# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Severity related types and helpers."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class Severity(str, Enum):
    """Severity levels attached to every rule in the catalog."""

    ERROR = "error"
    WARNING = "warning"


def is_visible(severity: Severity, *, show_warnings: bool) -> bool:
    """Return whether a violation with ``severity`` should be reported.

    Args:
        severity: Severity attached to the violation.
        show_warnings: Flag indicating whether warnings were requested.

    Returns:
        bool: ``True`` for errors, and for warnings when requested.
    """

    return show_warnings or severity is Severity.ERROR


def count_by_severity(severities: Iterable[Severity]) -> dict[Severity, int]:
    """Tally ``severities`` into a mapping keyed by severity level."""

    counts = {level: 0 for level in Severity}
    for severity in severities:
        counts[severity] += 1
    return counts


__all__ = ["Severity", "count_by_severity", "is_visible"]
