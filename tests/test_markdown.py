# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for markdown bracket scanning."""

from __future__ import annotations

from rustdocstyle.rules.markdown import iter_bracket_spans, mask_bracket_spans, strip_markdown_links


def test_spans_carry_source_positions_across_lines() -> None:
    lines = ("First [Alpha] line.", "", "Then [Beta](url).")
    positions = ((3, 5), (4, 5), (5, 9))

    spans = list(iter_bracket_spans(lines, positions))

    assert [(span.display, span.line, span.column, span.has_target) for span in spans] == [
        ("Alpha", 3, 11, False),
        ("Beta", 5, 14, True),
    ]


def test_backticks_toggle_across_lines() -> None:
    lines = ("Start `code [Hidden]", "still code` then [Shown].")
    positions = ((1, 5), (2, 5))

    assert [span.display for span in iter_bracket_spans(lines, positions)] == ["Shown"]


def test_reference_label_is_consumed() -> None:
    spans = list(iter_bracket_spans(("See [text] [Label] and [Next].",), ((1, 1),)))

    assert [span.display for span in spans] == ["text", "Next"]
    assert spans[0].has_target


def test_unclosed_bracket_ends_the_scan() -> None:
    assert list(iter_bracket_spans(("Open [Alpha and more",), ((1, 1),))) == []


def test_backticked_display_text() -> None:
    (span,) = iter_bracket_spans(("Use [`Vec`].",), ((1, 1),))

    assert span.has_backticks
    assert span.display == "`Vec`"


def test_strip_markdown_links() -> None:
    assert strip_markdown_links("Call [run()](crate::run) now.") == "Call run() now."


def test_mask_bracket_spans_removes_bare_references() -> None:
    assert mask_bracket_spans("Call [run()](x) or [`walk(y)`].") == "Call run() or ."
