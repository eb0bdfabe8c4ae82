# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared Rich consoles for report output and user messages."""

from __future__ import annotations

import sys
from functools import lru_cache

from rich.console import Console


def detect_tty(*, stderr: bool = False) -> bool:
    """Return whether standard output, or standard error, is a terminal."""

    stream = sys.stderr if stderr else sys.stdout
    try:
        return stream.isatty()
    except (AttributeError, ValueError):
        return False


@lru_cache(maxsize=8)
def _console(stderr: bool, styled: bool) -> Console:
    # No file is bound: Rich resolves sys.stdout/sys.stderr on every write.
    return Console(
        color_system="auto" if styled else None,
        force_terminal=styled,
        no_color=not styled,
        emoji=False,
        highlight=False,
        soft_wrap=True,
        stderr=stderr,
    )


def get_console(*, stderr: bool = False, color: bool = False) -> Console:
    """Return the shared console for a stream.

    Colour is only honoured when the stream is a terminal, so redirected
    output never carries ANSI escapes.

    Args:
        stderr: Write to standard error instead of standard output.
        color: Request styled output.

    Returns:
        Console: Cached console for the requested stream and styling.
    """

    return _console(stderr, color and detect_tty(stderr=stderr))


__all__ = ["detect_tty", "get_console"]
