# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Exception hierarchy shared by the checker, discovery and configuration layers."""

from __future__ import annotations

from pathlib import Path


class RustDocError(Exception):
    """Base class for errors raised by rustdocstyle."""


class ParseError(RustDocError):
    """Raised when a source file cannot be read or parsed."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialise the error with a message and the offending path.

        Args:
            message: Human-readable description of the failure.
            path: Optional path of the file that failed to parse.
        """

        super().__init__(message)
        self.path = path


class ConfigError(RustDocError):
    """Raised when configuration input is invalid."""


class DiscoveryError(RustDocError):
    """Raised when a directory cannot be walked for Rust sources."""


__all__ = ["ConfigError", "DiscoveryError", "ParseError", "RustDocError"]
