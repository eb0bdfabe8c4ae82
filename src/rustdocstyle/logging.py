# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""User-facing message helpers and diagnostic logger configuration."""

from __future__ import annotations

import logging
import sys
from typing import Final, TextIO

from rich.text import Text

from .console import detect_tty, get_console

ROOT_LOGGER_NAME: Final[str] = "rustdocstyle"
_LOG_FORMAT: Final[str] = "%(levelname)s: %(message)s"


def _print_line(msg: str, *, style: str | None, use_color: bool | None = None) -> None:
    """Render ``msg`` on standard error without markup parsing.

    Args:
        msg: Message text to print.
        style: Rich style name applied when colour output is active.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    color_enabled = detect_tty(stderr=True) if use_color is None else use_color
    console = get_console(stderr=True, color=color_enabled)
    text = Text(msg)
    if style and color_enabled:
        text.stylize(style)
    console.print(text)


def warn(msg: str, *, use_color: bool | None = None) -> None:
    """Emit a warning message on standard error."""

    _print_line(msg, style="yellow", use_color=use_color)


def fail(msg: str, *, use_color: bool | None = None) -> None:
    """Emit an error message on standard error.

    Args:
        msg: Message text to display.
        use_color: Optional explicit colour flag overriding TTY detection.
    """

    _print_line(msg, style="red", use_color=use_color)


def level_for(verbosity: int, *, quiet: bool = False) -> int:
    """Map CLI verbosity flags onto a :mod:`logging` level.

    Args:
        verbosity: Number of ``-v`` flags supplied.
        quiet: ``True`` when ``-q`` was supplied; wins over ``verbosity``.

    Returns:
        int: ``ERROR`` when quiet, ``DEBUG`` for two or more ``-v``, ``INFO``
        for one, otherwise ``WARNING``.
    """

    if quiet:
        return logging.ERROR
    if verbosity >= 2:
        return logging.DEBUG
    if verbosity == 1:
        return logging.INFO
    return logging.WARNING


class _StderrHandler(logging.StreamHandler):
    """Stream handler bound to whatever ``sys.stderr`` is at emit time."""

    def __init__(self) -> None:
        super().__init__(stream=sys.stderr)

    @property
    def stream(self) -> TextIO:  # type: ignore[override]
        return sys.stderr

    @stream.setter
    def stream(self, _value: TextIO) -> None:
        return None


def configure_logging(verbosity: int = 0, *, quiet: bool = False) -> logging.Logger:
    """Stream ``rustdocstyle`` log records to standard error at the chosen level.

    Repeated calls reuse the installed handler, which always writes to the
    current ``sys.stderr``.

    Args:
        verbosity: Number of ``-v`` flags supplied.
        quiet: ``True`` to only report errors.

    Returns:
        logging.Logger: The configured package logger.
    """

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    if not any(isinstance(item, _StderrHandler) for item in logger.handlers):
        handler = _StderrHandler()
        handler.setFormatter(logging.Formatter(_LOG_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level_for(verbosity, quiet=quiet))
    return logger


__all__ = ["ROOT_LOGGER_NAME", "configure_logging", "fail", "level_for", "warn"]
