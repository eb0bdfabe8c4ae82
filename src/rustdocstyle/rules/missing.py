# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Rules reporting public items that carry no documentation."""

from __future__ import annotations

from functools import partial

from ..models import Item, ItemKind
from ..severity import Severity
from .base import Finding, Rule, RulePhase


def missing_docstring(item: Item, *, kinds: frozenset[ItemKind]) -> Finding | None:
    """Return a finding when a public ``item`` of one of ``kinds`` is undocumented.

    Args:
        item: Classified declaration without a docstring.
        kinds: Item kinds handled by the calling rule.

    Returns:
        Finding | None: Finding located at the item's defining token.
    """

    if not item.is_public or item.kind not in kinds:
        return None
    return Finding(f"Missing docstring in public {item.label}", item.line, item.column)


def _missing_rule(code: str, summary: str, *kinds: ItemKind) -> Rule:
    return Rule(
        code=code,
        severity=Severity.ERROR,
        phase=RulePhase.MISSING,
        summary=summary,
        check=partial(missing_docstring, kinds=frozenset(kinds)),
    )


MISSING_RULES: tuple[Rule, ...] = (
    _missing_rule("D100", "Missing docstring in public module", ItemKind.MODULE),
    _missing_rule(
        "D101",
        "Missing docstring in public struct, enum, trait or union",
        ItemKind.STRUCTURED_TYPE,
        ItemKind.ENUMERATION,
        ItemKind.TRAIT_LIKE,
        ItemKind.UNION,
    ),
    _missing_rule("D102", "Missing docstring in public method", ItemKind.METHOD),
    _missing_rule("D103", "Missing docstring in public function", ItemKind.FUNCTION),
    _missing_rule("D104", "Missing docstring in public package", ItemKind.PACKAGE_ROOT),
    _missing_rule("D106", "Missing docstring in public nested type", ItemKind.NESTED_STRUCTURED_TYPE),
    _missing_rule("R101", "Missing docstring in public type alias", ItemKind.TYPE_ALIAS),
    _missing_rule("R102", "Missing docstring in public const or static", ItemKind.CONSTANT_OR_STATIC),
    _missing_rule("R103", "Missing docstring in public macro", ItemKind.MACRO),
)

__all__ = ["MISSING_RULES", "missing_docstring"]
