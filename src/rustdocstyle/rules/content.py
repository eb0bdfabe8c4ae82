# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rules inspecting the text of a docstring."""

from __future__ import annotations

import re
from typing import Final

from ..models import Docstring, Item, ItemKind, ends_with_terminator
from ..severity import Severity
from .base import Finding, Rule, RulePhase
from .markdown import iter_bracket_spans, mask_bracket_spans
from .vocabulary import COMMON_TYPES, is_non_imperative

_SIGNATURE_KINDS: Final[frozenset[ItemKind]] = frozenset({ItemKind.FUNCTION, ItemKind.METHOD})
_CALL_PREFIX_RE: Final[re.Pattern[str]] = re.compile(r"^[a-z_][A-Za-z0-9_]*\(")
_RETURN_ARROW: Final[str] = "->"
_PATH_SEPARATOR: Final[str] = "::"
_DOUBLE_BACKSLASH: Final[str] = "\\\\"


def _at_summary(message: str, docstring: Docstring) -> Finding:
    return Finding(message, docstring.line, docstring.column)


def ends_with_period(_item: Item, docstring: Docstring) -> Finding | None:
    """Flag a summary line without closing punctuation."""

    summary = docstring.summary
    if not summary or ends_with_terminator(summary):
        return None
    return _at_summary("First line should end with a period", docstring)


def imperative_mood(_item: Item, docstring: Docstring) -> Finding | None:
    """Flag a summary line whose first word reads as descriptive."""

    words = docstring.summary.split()
    if not words or not is_non_imperative(words[0]):
        return None
    return _at_summary("First line should be in imperative mood", docstring)


def looks_like_signature(text: str) -> bool:
    """Return ``True`` when ``text`` resembles a function signature.

    Markdown links collapse to their display text and bare ``[...]`` spans
    are ignored, so prose linking to call syntax does not match.

    Args:
        text: Summary line to inspect.

    Returns:
        bool: ``True`` for text such as ``add(a: i32) -> i32`` or ``run(x)``.
    """

    masked = mask_bracket_spans(text).strip()
    if "(" in masked and ")" in masked and _RETURN_ARROW in masked:
        return True
    return _CALL_PREFIX_RE.match(masked) is not None


def signature_summary(item: Item, docstring: Docstring) -> Finding | None:
    if item.kind not in _SIGNATURE_KINDS or not docstring.summary:
        return None
    if not looks_like_signature(docstring.summary):
        return None
    return _at_summary("First line should not be the function's signature", docstring)


def capitalized_summary(_item: Item, docstring: Docstring) -> Finding | None:
    """Flag a summary whose first letter is not uppercase.

    Leading characters that are not letters, such as backticks, are skipped.
    """

    first_letter = next((char for char in docstring.summary if char.isalpha()), None)
    if first_letter is None or first_letter.isupper():
        return None
    return _at_summary("First word of the first line should be properly capitalized", docstring)


def backslashes(_item: Item, docstring: Docstring) -> Finding | None:
    if not docstring.is_multiline:
        return None
    if not any(_DOUBLE_BACKSLASH in text for text in docstring.lines):
        return None
    return _at_summary("Consider using raw strings for docstrings with backslashes", docstring)


def unicode_content(_item: Item, docstring: Docstring) -> Finding | None:
    if not docstring.is_multiline:
        return None
    if all(text.isascii() for text in docstring.lines):
        return None
    return _at_summary("Docstring contains Unicode characters", docstring)


def looks_like_code(text: str) -> bool:
    """Return ``True`` when ``text`` is a path or a PascalCase identifier."""

    candidate = text.strip()
    if not candidate:
        return False
    if _PATH_SEPARATOR in candidate:
        return True
    if not candidate[0].isupper():
        return False
    has_lower = any(char.islower() for char in candidate)
    has_inner_upper = any(char.isupper() for char in candidate[1:])
    return has_lower and has_inner_upper


def code_reference_backticks(_item: Item, docstring: Docstring) -> list[Finding]:
    """Flag bracket references to code that lack inline-code backticks.

    Args:
        _item: Documented declaration (unused).
        docstring: Harvested docstring.

    Returns:
        list[Finding]: One finding per offending ``[`` in source order.
    """

    findings: list[Finding] = []
    for span in iter_bracket_spans(docstring.lines, docstring.positions):
        display = span.display
        if span.has_backticks or display in COMMON_TYPES or not looks_like_code(display):
            continue
        findings.append(
            Finding(
                f"Markdown link text looks like code but lacks backticks: [{display}] should be [`{display}`]",
                span.line,
                span.column,
            ),
        )
    return findings


def common_type_reference(_item: Item, docstring: Docstring) -> list[Finding]:
    """Flag bracket references to common standard-library types."""

    findings: list[Finding] = []
    for span in iter_bracket_spans(docstring.lines, docstring.positions):
        display = span.display
        if span.has_backticks or display not in COMMON_TYPES:
            continue
        tail = "(...)" if span.has_target else ""
        findings.append(
            Finding(
                f"Use inline code for common Rust type: [{display}]{tail} should be `{display}`",
                span.line,
                span.column,
            ),
        )
    return findings


CONTENT_RULES: tuple[Rule, ...] = (
    Rule("D400", Severity.ERROR, RulePhase.CONTENT, "First line should end with a period", ends_with_period),
    Rule("D401", Severity.WARNING, RulePhase.CONTENT, "First line should be in imperative mood", imperative_mood),
    Rule(
        "D402",
        Severity.ERROR,
        RulePhase.CONTENT,
        "First line should not be the function's signature",
        signature_summary,
    ),
    Rule(
        "D403",
        Severity.ERROR,
        RulePhase.CONTENT,
        "First word of the first line should be properly capitalized",
        capitalized_summary,
    ),
    Rule(
        "D301",
        Severity.WARNING,
        RulePhase.CONTENT,
        "Consider using raw strings for docstrings with backslashes",
        backslashes,
    ),
    Rule("D302", Severity.WARNING, RulePhase.CONTENT, "Docstring contains Unicode characters", unicode_content),
    Rule(
        "R401",
        Severity.WARNING,
        RulePhase.CONTENT,
        "Markdown link text looks like code but lacks backticks",
        code_reference_backticks,
    ),
    Rule(
        "R402",
        Severity.WARNING,
        RulePhase.CONTENT,
        "Use inline code for common Rust types",
        common_type_reference,
    ),
)

__all__ = [
    "CONTENT_RULES",
    "backslashes",
    "capitalized_summary",
    "code_reference_backticks",
    "common_type_reference",
    "ends_with_period",
    "imperative_mood",
    "looks_like_code",
    "looks_like_signature",
    "signature_summary",
    "unicode_content",
]
