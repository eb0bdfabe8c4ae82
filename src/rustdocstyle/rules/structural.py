# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rules about the layout of a docstring around its item."""

from __future__ import annotations

from ..models import Docstring, Item, ends_with_terminator
from ..severity import Severity
from .base import Finding, Rule, RulePhase


def blank_before(item: Item, docstring: Docstring) -> Finding | None:
    """Flag blank lines preceding the docstring text."""

    if docstring.blank_lines_before <= 0:
        return None
    return Finding(f"No blank lines allowed before {item.label} docstring", docstring.line, docstring.column)


def blank_after(item: Item, docstring: Docstring) -> Finding | None:
    """Flag blank lines between the docstring text and the item header."""

    if docstring.blank_lines_after <= 0:
        return None
    line, column = docstring.last_position
    return Finding(f"No blank lines allowed after {item.label} docstring", line, column)


def summary_separation(_item: Item, docstring: Docstring) -> Finding | None:
    """Flag a description that follows a complete summary without a blank line.

    Args:
        _item: Documented declaration (unused).
        docstring: Harvested docstring.

    Returns:
        Finding | None: Finding located at the second logical line.
    """

    if len(docstring.lines) < 2 or not ends_with_terminator(docstring.summary):
        return None
    if not docstring.lines[1].strip():
        return None
    line, column = docstring.position_of(1)
    return Finding("1 blank line required between summary line and description", line, column)


def empty_docstring(_item: Item, docstring: Docstring) -> Finding | None:
    if not docstring.is_empty:
        return None
    return Finding("Docstring is empty", docstring.line, docstring.column)


STRUCTURAL_RULES: tuple[Rule, ...] = (
    Rule("D201", Severity.ERROR, RulePhase.STRUCTURAL, "No blank lines allowed before docstring", blank_before),
    Rule("D202", Severity.ERROR, RulePhase.STRUCTURAL, "No blank lines allowed after docstring", blank_after),
    Rule(
        "D205",
        Severity.ERROR,
        RulePhase.STRUCTURAL,
        "1 blank line required between summary line and description",
        summary_separation,
    ),
    Rule("D419", Severity.ERROR, RulePhase.STRUCTURAL, "Docstring is empty", empty_docstring),
)

__all__ = ["STRUCTURAL_RULES", "blank_after", "blank_before", "empty_docstring", "summary_separation"]
