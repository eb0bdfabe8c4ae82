# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Harvest and normalise the documentation attached to Rust items.

Outer documentation (``///``, ``/** */`` and ``#[doc = ...]``) is found by
scanning upward from an item's header. Inner documentation (``//!``,
``/*! */`` and ``#![doc = ...]``) is found by scanning downward from the top
of a file or the start of an inline module body.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from functools import partial
from typing import Final

from .models import Docstring, Item, Notation

_OUTER_LINE_MARKER: Final[str] = "///"
_INNER_LINE_MARKER: Final[str] = "//!"
_PLAIN_COMMENT: Final[str] = "//"
_BLOCK_OPEN: Final[str] = "/*"
_BLOCK_CLOSE: Final[str] = "*/"
_OUTER_BLOCK_OPEN: Final[str] = "/**"
_INNER_BLOCK_OPEN: Final[str] = "/*!"
_MARKER_WIDTH: Final[int] = 3
_SHEBANG: Final[str] = "#!"
_INNER_ATTRIBUTE_OPEN: Final[str] = "#!["

_DOC_ATTRIBUTE_RE: Final[re.Pattern[str]] = re.compile(
    r"""^\s*\#(?P<bang>!?)\[\s*doc\s*=\s*
        (?:r(?P<hashes>\#*)"(?P<raw>.*)"(?P=hashes)|"(?P<text>(?:[^"\\]|\\.)*)")
        \s*\]\s*$""",
    re.VERBOSE,
)
_ESCAPE_RE: Final[re.Pattern[str]] = re.compile(r"\\(u\{[0-9a-fA-F]{1,6}\}|x[0-9a-fA-F]{2}|.)")
_SIMPLE_ESCAPES: Final[dict[str, str]] = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "0": "\0",
    "\\": "\\",
    '"': '"',
    "'": "'",
}


class _ScanState(Enum):
    SCANNING = auto()
    STOPPED = auto()


@dataclass(slots=True)
class _Segment:
    """One logical line with the 0-based source row and column of its text."""

    text: str
    row: int
    column: int


@dataclass(slots=True)
class _Run:
    """Consecutive documentation lines sharing a single notation."""

    notation: Notation
    segments: list[_Segment]
    first_row: int
    anchor_column: int


def source_lines(source: str) -> list[str]:
    """Split ``source`` into lines addressed the same way as the syntax tree.

    Args:
        source: Rust source text.

    Returns:
        list[str]: Lines split on ``\\n`` with any trailing ``\\r`` removed.
    """

    return [line.removesuffix("\r") for line in source.split("\n")]


def _replace_escape(match: re.Match[str]) -> str:
    token = match.group(1)
    if token.startswith("u{"):
        return chr(int(token[2:-1], 16))
    if token.startswith("x") and len(token) == 3:
        return chr(int(token[1:], 16))
    return _SIMPLE_ESCAPES.get(token, match.group(0))


def _unescape(literal: str) -> str:
    """Decode the escape sequences of a Rust string literal body."""

    return _ESCAPE_RE.sub(_replace_escape, literal)


def _is_line_doc(raw: str, *, marker: str) -> bool:
    stripped = raw.lstrip()
    if marker == _OUTER_LINE_MARKER:
        return stripped.startswith(_OUTER_LINE_MARKER) and not stripped.startswith("////")
    return stripped.startswith(marker)


def _doc_attribute(raw: str, *, inner: bool) -> re.Match[str] | None:
    match = _DOC_ATTRIBUTE_RE.match(raw)
    if match is None or bool(match.group("bang")) != inner:
        return None
    return match


def _is_doc_attribute(raw: str, *, inner: bool) -> bool:
    return _doc_attribute(raw, inner=inner) is not None


def _is_outer_block_opener(raw: str) -> bool:
    stripped = raw.lstrip()
    return (
        stripped.startswith(_OUTER_BLOCK_OPEN)
        and not stripped.startswith("/***")
        and not stripped.startswith("/**/")
    )


def _strip_one_space(text: str, column: int) -> tuple[str, int]:
    if text.startswith(" "):
        return text[1:], column + 1
    return text, column


def _line_segments(raw: str, row: int, *, marker: str) -> list[_Segment]:
    start = raw.index(marker) + _MARKER_WIDTH
    text, column = _strip_one_space(raw[start:], start)
    return [_Segment(text.rstrip(), row, column)]


def _attribute_segments(raw: str, row: int, *, inner: bool) -> list[_Segment]:
    match = _doc_attribute(raw, inner=inner)
    if match is None:
        return []
    if match.group("raw") is not None:
        content, column = match.group("raw"), match.start("raw")
    else:
        content, column = _unescape(match.group("text")), match.start("text")
    content, column = _strip_one_space(content, column)
    return [_Segment(part.rstrip(), row, column) for part in content.split("\n")]


def _block_segments(lines: Sequence[str], start: int, end: int) -> list[_Segment]:
    """Strip block delimiters and ``*`` decoration from rows ``start..end``.

    Args:
        lines: Source lines.
        start: Row holding the opening delimiter.
        end: Row holding the closing delimiter.

    Returns:
        list[_Segment]: Logical lines with delimiter-only rows removed and
        common indentation stripped.
    """

    segments: list[_Segment] = []
    for row in range(start, end + 1):
        raw = lines[row]
        begin = raw.index(_BLOCK_OPEN) + _MARKER_WIDTH if row == start else 0
        stop = raw.rindex(_BLOCK_CLOSE) if row == end else len(raw)
        body = raw[begin:stop] if stop >= begin else ""
        column = begin
        if row == start:
            body, column = _strip_one_space(body, column)
        else:
            stripped = body.lstrip()
            if stripped.startswith("*"):
                column = begin + len(body) - len(stripped) + 1
                body, column = _strip_one_space(stripped[1:], column)
        segments.append(_Segment(body.rstrip(), row, column))

    if segments and not segments[-1].text and segments[-1].row == end:
        segments.pop()
    if segments and not segments[0].text and segments[0].row == start:
        segments.pop(0)

    indents = [len(item.text) - len(item.text.lstrip()) for item in segments if item.text.strip()]
    indent = min(indents, default=0)
    if indent:
        for item in segments:
            if item.text.strip():
                item.text = item.text[indent:]
                item.column += indent
    return segments


def _collect(
    lines: Sequence[str],
    row: int,
    step: int,
    matches: Callable[[str], bool],
) -> list[int]:
    """Collect consecutive rows satisfying ``matches`` starting at ``row``.

    Args:
        lines: Source lines.
        row: First row to test.
        step: ``-1`` to scan upward, ``1`` to scan downward.
        matches: Predicate deciding whether a row continues the run.

    Returns:
        list[int]: Matching rows in top-down source order.
    """

    rows: list[int] = []
    state = _ScanState.SCANNING
    cursor = row
    while state is _ScanState.SCANNING:
        if 0 <= cursor < len(lines) and matches(lines[cursor]):
            rows.append(cursor)
            cursor += step
        else:
            state = _ScanState.STOPPED
    return sorted(rows)


def _block_start(lines: Sequence[str], end: int) -> int | None:
    """Return the row opening the block comment that closes on ``end``."""

    for row in range(end, -1, -1):
        if lines[row].lstrip().startswith(_BLOCK_OPEN):
            return row
        if _BLOCK_OPEN in lines[row]:
            return None
        if row != end and _BLOCK_CLOSE in lines[row]:
            return None
    return None


def _block_end(lines: Sequence[str], start: int) -> int | None:
    """Return the row closing the block comment opened on ``start``."""

    opener = lines[start].index(_BLOCK_OPEN) + len(_BLOCK_OPEN)
    if _BLOCK_CLOSE in lines[start][opener + 1 :]:
        return start
    for row in range(start + 1, len(lines)):
        if _BLOCK_CLOSE in lines[row]:
            return row
    return None


def _run_from_rows(
    lines: Sequence[str],
    rows: list[int],
    notation: Notation,
    build: Callable[[str, int], list[_Segment]],
) -> _Run:
    segments = [segment for row in rows for segment in build(lines[row], row)]
    first = lines[rows[0]]
    return _Run(notation, segments, rows[0], len(first) - len(first.lstrip()))


def _block_run(lines: Sequence[str], start: int, end: int) -> _Run:
    anchor = lines[start].index(_BLOCK_OPEN)
    return _Run(Notation.BLOCK, _block_segments(lines, start, end), start, anchor)


def _outer_run(lines: Sequence[str], row: int) -> _Run | None:
    """Return the outer documentation run whose last line is ``row``."""

    raw = lines[row]
    if _is_line_doc(raw, marker=_OUTER_LINE_MARKER):
        rows = _collect(lines, row, -1, partial(_is_line_doc, marker=_OUTER_LINE_MARKER))
        return _run_from_rows(
            lines,
            rows,
            Notation.LINE,
            partial(_line_segments, marker=_OUTER_LINE_MARKER),
        )
    if _is_doc_attribute(raw, inner=False):
        rows = _collect(lines, row, -1, partial(_is_doc_attribute, inner=False))
        return _run_from_rows(
            lines,
            rows,
            Notation.ATTRIBUTE,
            partial(_attribute_segments, inner=False),
        )
    if raw.rstrip().endswith(_BLOCK_CLOSE):
        start = _block_start(lines, row)
        if start is not None and _is_outer_block_opener(lines[start]):
            return _block_run(lines, start, row)
    return None


def _is_outer_doc(lines: Sequence[str], row: int) -> bool:
    raw = lines[row]
    if _is_line_doc(raw, marker=_OUTER_LINE_MARKER) or _is_doc_attribute(raw, inner=False):
        return True
    if raw.rstrip().endswith(_BLOCK_CLOSE):
        start = _block_start(lines, row)
        return start is not None and _is_outer_block_opener(lines[start])
    return False


def _split_gap(lines: Sequence[str], top_row: int) -> int:
    """Return blank rows above ``top_row`` when another doc comment sits above them."""

    cursor = top_row - 1
    blanks = 0
    while cursor >= 0 and not lines[cursor].strip():
        blanks += 1
        cursor -= 1
    if blanks == 0 or cursor < 0:
        return 0
    return blanks if _is_outer_doc(lines, cursor) else 0


def _to_docstring(run: _Run, *, extra_before: int, extra_after: int) -> Docstring:
    """Trim blank logical lines from ``run`` and build the docstring record."""

    segments = run.segments
    leading = next((index for index, item in enumerate(segments) if item.text.strip()), len(segments))
    anchor = (run.first_row + 1, run.anchor_column + 1)
    if leading == len(segments):
        return Docstring(
            lines=(),
            positions=(),
            blank_lines_before=extra_before,
            blank_lines_after=extra_after,
            notation=run.notation,
            anchor=anchor,
        )
    trailing = next(index for index, item in enumerate(reversed(segments)) if item.text.strip())
    kept = segments[leading : len(segments) - trailing]
    return Docstring(
        lines=tuple(item.text for item in kept),
        positions=tuple((item.row + 1, item.column + 1) for item in kept),
        blank_lines_before=leading + extra_before,
        blank_lines_after=trailing + extra_after,
        notation=run.notation,
        anchor=anchor,
    )


def harvest_outer(item: Item, lines: Sequence[str]) -> Docstring | None:
    """Return the outer documentation attached directly above ``item``.

    Args:
        item: Classified declaration.
        lines: Source lines of the file.

    Returns:
        Docstring | None: Normalised docstring, or ``None`` when the nearest
        non-blank line above the header is not documentation.
    """

    row = item.header_line - 2
    gap_after = 0
    while row >= 0 and not lines[row].strip():
        gap_after += 1
        row -= 1
    if row < 0:
        return None
    run = _outer_run(lines, row)
    if run is None:
        return None
    return _to_docstring(run, extra_before=_split_gap(lines, run.first_row), extra_after=gap_after)


def _is_inner_preamble(raw: str) -> bool:
    """Return ``True`` for rows that may precede inner documentation."""

    stripped = raw.strip()
    if not stripped:
        return True
    if stripped.startswith(_PLAIN_COMMENT):
        return not (_is_line_doc(stripped, marker=_OUTER_LINE_MARKER) or stripped.startswith(_INNER_LINE_MARKER))
    if stripped.startswith(_INNER_ATTRIBUTE_OPEN):
        return not _is_doc_attribute(stripped, inner=True) and stripped.endswith("]")
    return False


def _is_plain_block_opener(raw: str) -> bool:
    stripped = raw.lstrip()
    return (
        stripped.startswith(_BLOCK_OPEN)
        and not stripped.startswith(_INNER_BLOCK_OPEN)
        and not _is_outer_block_opener(stripped)
    )


def _after_plain_block(lines: Sequence[str], start: int) -> int | None:
    """Return the row following the plain block comment opened on ``start``."""

    opener = lines[start].index(_BLOCK_OPEN) + len(_BLOCK_OPEN)
    if _BLOCK_CLOSE in lines[start][opener:]:
        return start + 1
    for row in range(start + 1, len(lines)):
        if _BLOCK_CLOSE in lines[row]:
            return row + 1
    return None


def harvest_inner(item: Item, lines: Sequence[str]) -> Docstring | None:
    """Return inner documentation for a file or inline module ``item``.

    The scan starts at the top of the file (after any shebang) for whole-file
    items, or at ``item.body_line`` for inline modules. Blank rows, plain
    line and block comments and non-doc inner attributes before the run are
    skipped.

    Args:
        item: Whole-file or inline module item.
        lines: Source lines of the file.

    Returns:
        Docstring | None: Normalised docstring, or ``None`` when absent.
    """

    if item.is_file:
        row = 0
        if lines and lines[0].startswith(_SHEBANG) and not lines[0].startswith(_INNER_ATTRIBUTE_OPEN):
            row = 1
    elif item.body_line is not None:
        row = item.body_line - 1
    else:
        return None
    while row < len(lines):
        if _is_inner_preamble(lines[row]):
            row += 1
        elif _is_plain_block_opener(lines[row]):
            after = _after_plain_block(lines, row)
            if after is None:
                return None
            row = after
        else:
            break
    if row >= len(lines):
        return None

    raw = lines[row]
    run: _Run | None = None
    if _is_line_doc(raw, marker=_INNER_LINE_MARKER):
        rows = _collect(lines, row, 1, partial(_is_line_doc, marker=_INNER_LINE_MARKER))
        run = _run_from_rows(
            lines,
            rows,
            Notation.LINE,
            partial(_line_segments, marker=_INNER_LINE_MARKER),
        )
    elif _is_doc_attribute(raw, inner=True):
        rows = _collect(lines, row, 1, partial(_is_doc_attribute, inner=True))
        run = _run_from_rows(
            lines,
            rows,
            Notation.ATTRIBUTE,
            partial(_attribute_segments, inner=True),
        )
    elif raw.lstrip().startswith(_INNER_BLOCK_OPEN):
        end = _block_end(lines, row)
        if end is not None:
            run = _block_run(lines, row, end)
    if run is None:
        return None
    return _to_docstring(run, extra_before=0, extra_after=0)


def harvest(item: Item, lines: Sequence[str]) -> Docstring | None:
    """Return the docstring attached to ``item``, if any.

    Whole-file items use inner documentation. Inline modules prefer outer
    documentation and fall back to inner documentation in their body.

    Args:
        item: Classified declaration.
        lines: Source lines of the file.

    Returns:
        Docstring | None: Normalised docstring or ``None``.
    """

    if item.is_file:
        return harvest_inner(item, lines)
    docstring = harvest_outer(item, lines)
    if docstring is None and item.body_line is not None:
        return harvest_inner(item, lines)
    return docstring


__all__ = ["harvest", "harvest_inner", "harvest_outer", "source_lines"]
