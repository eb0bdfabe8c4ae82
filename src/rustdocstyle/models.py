# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core data models shared across the rustdocstyle package."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final

from pydantic import BaseModel, ConfigDict, Field

from .severity import Severity, is_visible

_SUMMARY_TERMINATORS: Final[tuple[str, ...]] = (".", "!", "?")


class ItemKind(str, Enum):
    """Enumerate the declaration kinds the classifier can emit."""

    FUNCTION = "function"
    METHOD = "method"
    STRUCTURED_TYPE = "struct"
    ENUMERATION = "enum"
    TRAIT_LIKE = "trait"
    UNION = "union"
    MODULE = "module"
    PACKAGE_ROOT = "package"
    NESTED_STRUCTURED_TYPE = "nested"
    TYPE_ALIAS = "type alias"
    CONSTANT_OR_STATIC = "constant"
    MACRO = "macro"


class Visibility(str, Enum):
    """Visibility of a declaration as written in the source."""

    PUBLIC = "public"
    PRIVATE = "private"


class Notation(str, Enum):
    """Documentation comment syntaxes understood by the harvester."""

    LINE = "line"
    BLOCK = "block"
    ATTRIBUTE = "attribute"


@dataclass(frozen=True, slots=True)
class Item:
    """Describe one checkable declaration discovered in a syntax tree.

    Attributes:
        kind: Classified declaration kind.
        visibility: Public when the declaration carries an explicit marker.
        name: Identifier used in diagnostics only.
        line: 1-based line of the defining keyword.
        column: 1-based column of the defining keyword.
        label: Human-readable kind label used in rule messages.
        header_line: 1-based line where outer attributes begin.
        is_nested: ``True`` when declared inside another item body.
        is_file: ``True`` for the synthetic whole-file item.
        is_external: ``True`` for ``mod name;`` declarations.
        body_line: First line inside an inline module body.
        signature_text: Whitespace-collapsed header for functions and methods.
    """

    kind: ItemKind
    visibility: Visibility
    name: str | None
    line: int
    column: int
    label: str
    header_line: int
    is_nested: bool = False
    is_file: bool = False
    is_external: bool = False
    body_line: int | None = None
    signature_text: str | None = None

    @property
    def is_public(self) -> bool:
        """Return ``True`` when the item is publicly visible."""

        return self.visibility is Visibility.PUBLIC


@dataclass(frozen=True, slots=True)
class Docstring:
    """Normalised documentation harvested for a single item.

    ``lines`` never starts or ends with a blank logical line; those are
    folded into ``blank_lines_before`` and ``blank_lines_after``.
    ``positions`` holds the 1-based ``(line, column)`` of the first
    character of each logical line in the original source.
    """

    lines: tuple[str, ...]
    positions: tuple[tuple[int, int], ...]
    blank_lines_before: int
    blank_lines_after: int
    notation: Notation
    anchor: tuple[int, int]

    @property
    def is_empty(self) -> bool:
        """Return ``True`` when the docstring holds no text at all."""

        return not self.lines

    @property
    def is_multiline(self) -> bool:
        """Return ``True`` for multi-paragraph or multi-line docstrings."""

        non_empty = sum(1 for text in self.lines if text.strip())
        return non_empty > 1 or any(not text.strip() for text in self.lines)

    @property
    def summary(self) -> str:
        """Return the stripped summary line, or an empty string."""

        return self.lines[0].strip() if self.lines else ""

    @property
    def line(self) -> int:
        """Return the source line of the first logical line."""

        return self.positions[0][0] if self.positions else self.anchor[0]

    @property
    def column(self) -> int:
        """Return the source column of the first logical line."""

        return self.positions[0][1] if self.positions else self.anchor[1]

    @property
    def last_position(self) -> tuple[int, int]:
        """Return the source location of the final logical line."""

        return self.positions[-1] if self.positions else self.anchor

    def position_of(self, index: int) -> tuple[int, int]:
        """Return the source location of logical line ``index``.

        Args:
            index: Zero-based index into :attr:`lines`.

        Returns:
            tuple[int, int]: 1-based ``(line, column)`` pair.
        """

        return self.positions[index]


def ends_with_terminator(text: str) -> bool:
    """Return ``True`` when ``text`` ends with sentence punctuation."""

    return text.rstrip().endswith(_SUMMARY_TERMINATORS)


class Violation(BaseModel):
    """Describe a single rule failure at a specific source location."""

    model_config = ConfigDict(frozen=True)

    rule: str
    severity: Severity
    line: int
    column: int
    message: str

    @property
    def sort_key(self) -> tuple[int, int, str]:
        """Return the ``(line, column, rule)`` ordering key."""

        return (self.line, self.column, self.rule)

    def format(self, path: str) -> str:
        """Render the violation in the line-oriented text form.

        Args:
            path: Display path of the file the violation belongs to.

        Returns:
            str: ``<path>:<line>:<column> <severity> [<rule>]: <message>``.
        """

        return f"{path}:{self.line}:{self.column} {self.severity.value} [{self.rule}]: {self.message}"

    def to_payload(self) -> dict[str, str | int]:
        """Return the structured representation used by JSON output."""

        return {
            "rule": self.rule,
            "message": self.message,
            "line": self.line,
            "column": self.column,
            "severity": self.severity.value,
        }


class FileReport(BaseModel):
    """Capture the violations (or failure) produced for one file."""

    model_config = ConfigDict(validate_assignment=True)

    file: str
    violations: list[Violation] = Field(default_factory=list)
    error: str | None = None

    @property
    def failed(self) -> bool:
        """Return ``True`` when the file could not be checked."""

        return self.error is not None

    def filtered(self, *, show_warnings: bool) -> list[Violation]:
        """Return violations visible under the warning preference.

        Args:
            show_warnings: Flag indicating whether warnings are reported.

        Returns:
            list[Violation]: Violations in report order.
        """

        return [item for item in self.violations if is_visible(item.severity, show_warnings=show_warnings)]


__all__ = [
    "Docstring",
    "FileReport",
    "Item",
    "ItemKind",
    "Notation",
    "Violation",
    "Visibility",
    "ends_with_terminator",
]
