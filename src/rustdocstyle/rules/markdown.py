# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Scan documentation text for markdown bracket references."""

from __future__ import annotations

import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Final

_BACKTICK: Final[str] = "`"
_OPEN: Final[str] = "["
_CLOSE: Final[str] = "]"
_LINK_TARGET_CLOSERS: Final[dict[str, str]] = {"(": ")", "[": "]"}
_INLINE_LINK_RE: Final[re.Pattern[str]] = re.compile(r"\[([^\[\]]*)\]\([^)]*\)")
_BRACKET_RE: Final[re.Pattern[str]] = re.compile(r"\[[^\[\]]*\]")


@dataclass(frozen=True, slots=True)
class BracketSpan:
    """Describe one ``[text]`` reference found outside inline code.

    Attributes:
        text: Raw display text between the brackets.
        line: Source line of the opening bracket.
        column: Source column of the opening bracket.
        has_target: ``True`` when followed by ``(url)`` or ``[label]``.
    """

    text: str
    line: int
    column: int
    has_target: bool

    @property
    def display(self) -> str:
        """Return the display text without surrounding whitespace."""

        return self.text.strip()

    @property
    def has_backticks(self) -> bool:
        """Return ``True`` when the display text already uses inline code."""

        return _BACKTICK in self.text


@dataclass(frozen=True, slots=True)
class _Char:
    value: str
    line: int
    column: int


def _char_stream(lines: Sequence[str], positions: Sequence[tuple[int, int]]) -> list[_Char]:
    """Flatten logical lines into characters tagged with source positions."""

    stream: list[_Char] = []
    for index, (text, (line, column)) in enumerate(zip(lines, positions, strict=True)):
        if index:
            stream.append(_Char("\n", line, column))
        stream.extend(_Char(value, line, column + offset) for offset, value in enumerate(text))
    return stream


def _skip_target(stream: list[_Char], index: int) -> tuple[bool, int]:
    """Consume a ``(url)`` or ``[label]`` tail that follows a closing bracket.

    Args:
        stream: Character stream being scanned.
        index: Position just after the closing bracket.

    Returns:
        tuple[bool, int]: Whether a tail was consumed and the resume position.
    """

    cursor = index
    while cursor < len(stream) and stream[cursor].value.isspace():
        cursor += 1
    if cursor >= len(stream) or stream[cursor].value not in _LINK_TARGET_CLOSERS:
        return False, index
    closer = _LINK_TARGET_CLOSERS[stream[cursor].value]
    cursor += 1
    while cursor < len(stream) and stream[cursor].value != closer:
        cursor += 1
    return True, min(cursor + 1, len(stream))


def iter_bracket_spans(lines: Sequence[str], positions: Sequence[tuple[int, int]]) -> Iterator[BracketSpan]:
    """Yield bracket references in ``lines`` outside inline code spans.

    Backticks toggle inline code across the whole docstring. The label of a
    reference-style link is consumed with its display text and never
    reported. When the display text contains another ``[`` the innermost
    span wins.

    Args:
        lines: Logical docstring lines.
        positions: Source ``(line, column)`` of the first character of each line.

    Yields:
        BracketSpan: Display spans in source order.
    """

    stream = _char_stream(lines, positions)
    in_code = False
    index = 0
    while index < len(stream):
        char = stream[index]
        if char.value == _BACKTICK:
            in_code = not in_code
            index += 1
            continue
        if in_code or char.value != _OPEN:
            index += 1
            continue
        start = index
        cursor = index + 1
        while cursor < len(stream) and stream[cursor].value != _CLOSE:
            if stream[cursor].value == _OPEN:
                start = cursor
            cursor += 1
        if cursor >= len(stream):
            return
        text = "".join(item.value for item in stream[start + 1 : cursor])
        has_target, index = _skip_target(stream, cursor + 1)
        opener = stream[start]
        yield BracketSpan(text=text, line=opener.line, column=opener.column, has_target=has_target)


def strip_markdown_links(text: str) -> str:
    """Replace ``[text](url)`` links with their display text.

    Args:
        text: Single line of documentation.

    Returns:
        str: ``text`` with inline links collapsed to their display text.
    """

    return _INLINE_LINK_RE.sub(r"\1", text)


def mask_bracket_spans(text: str) -> str:
    """Return ``text`` with inline links collapsed and bare ``[...]`` spans removed."""

    return _BRACKET_RE.sub("", strip_markdown_links(text))


__all__ = ["BracketSpan", "iter_bracket_spans", "mask_bracket_spans", "strip_markdown_links"]
