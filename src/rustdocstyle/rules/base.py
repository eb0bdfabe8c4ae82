# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared primitives for docstring rules."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from ..models import Docstring, Item, Violation
from ..severity import Severity


class RulePhase(str, Enum):
    """Presentation groups in which rules are evaluated."""

    MISSING = "missing"
    STRUCTURAL = "structural"
    CONTENT = "content"


@dataclass(frozen=True, slots=True)
class Finding:
    """Location and message produced by a single rule check."""

    message: str
    line: int
    column: int


RuleResult = Finding | Sequence[Finding] | None
MissingCheck = Callable[[Item], RuleResult]
DocstringCheck = Callable[[Item, Docstring], RuleResult]


@dataclass(frozen=True, slots=True)
class Rule:
    """Describe one registered rule and how it is evaluated.

    Attributes:
        code: Stable rule identifier such as ``D400``.
        severity: Fixed severity attached to every violation of the rule.
        phase: Presentation group of the rule.
        summary: One-line description shown in the rule catalog.
        check: Pure check function. Missing-docstring checks receive only the
            item; the others receive the item and its docstring.
    """

    code: str
    severity: Severity
    phase: RulePhase
    summary: str
    check: MissingCheck | DocstringCheck

    def apply(self, item: Item, docstring: Docstring | None) -> list[Violation]:
        """Evaluate the rule for ``item`` and return its violations.

        Missing-docstring rules only run when ``docstring`` is ``None``; all
        other rules only run when it is present.

        Args:
            item: Classified declaration.
            docstring: Harvested docstring, if any.

        Returns:
            list[Violation]: Violations in the order the check produced them.
        """

        if self.phase is RulePhase.MISSING:
            if docstring is not None:
                return []
            result = self.check(item)  # type: ignore[call-arg]
        else:
            if docstring is None:
                return []
            result = self.check(item, docstring)  # type: ignore[call-arg]
        return [self._violation(finding) for finding in _normalise(result)]

    def _violation(self, finding: Finding) -> Violation:
        return Violation(
            rule=self.code,
            severity=self.severity,
            line=finding.line,
            column=finding.column,
            message=finding.message,
        )


def _normalise(result: RuleResult) -> tuple[Finding, ...]:
    if result is None:
        return ()
    if isinstance(result, Finding):
        return (result,)
    return tuple(result)


__all__ = ["DocstringCheck", "Finding", "MissingCheck", "Rule", "RulePhase", "RuleResult"]
