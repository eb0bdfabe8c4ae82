# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Registry of docstring rules and the per-item evaluation entry point."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..models import Docstring, Item, Violation
from .base import Finding, Rule, RulePhase
from .content import CONTENT_RULES
from .missing import MISSING_RULES
from .structural import STRUCTURAL_RULES

RULES: tuple[Rule, ...] = MISSING_RULES + STRUCTURAL_RULES + CONTENT_RULES


@dataclass(frozen=True, slots=True)
class RuleSelection:
    """Filter rules by code prefix.

    Attributes:
        select: Prefixes to enable. An empty tuple enables every rule.
        ignore: Prefixes to disable; these win over ``select``.
    """

    select: tuple[str, ...] = ()
    ignore: tuple[str, ...] = ()

    def allows(self, code: str) -> bool:
        """Return ``True`` when ``code`` passes the selection."""

        normalized = code.upper()
        if any(normalized.startswith(prefix.upper()) for prefix in self.ignore):
            return False
        if not self.select:
            return True
        return any(normalized.startswith(prefix.upper()) for prefix in self.select)


def active_rules(selection: RuleSelection | None = None) -> tuple[Rule, ...]:
    """Return the registered rules enabled by ``selection`` in presentation order."""

    if selection is None:
        return RULES
    return tuple(rule for rule in RULES if selection.allows(rule.code))


def evaluate(
    item: Item,
    docstring: Docstring | None,
    rules: Iterable[Rule] = RULES,
) -> list[Violation]:
    """Run ``rules`` against ``item`` and its docstring.

    Args:
        item: Classified declaration.
        docstring: Harvested docstring, or ``None`` when the item has none.
        rules: Rules to evaluate; defaults to the full registry.

    Returns:
        list[Violation]: Violations in rule presentation order.
    """

    violations: list[Violation] = []
    for rule in rules:
        violations.extend(rule.apply(item, docstring))
    return violations


def find_rule(code: str) -> Rule | None:
    """Return the registered rule named ``code``, if any."""

    normalized = code.upper()
    return next((rule for rule in RULES if rule.code == normalized), None)


__all__ = [
    "RULES",
    "Finding",
    "Rule",
    "RulePhase",
    "RuleSelection",
    "active_rules",
    "evaluate",
    "find_rule",
]
