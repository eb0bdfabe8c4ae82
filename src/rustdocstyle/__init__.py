# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Core package metadata and convenience exports."""

from __future__ import annotations

from importlib import metadata

from .engine import DocstringChecker, aggregate
from .models import Docstring, FileReport, Item, ItemKind, Notation, Violation, Visibility
from .severity import Severity

__all__ = [
    "Docstring",
    "DocstringChecker",
    "FileReport",
    "Item",
    "ItemKind",
    "Notation",
    "Severity",
    "Violation",
    "Visibility",
    "__version__",
    "aggregate",
]

try:
    __version__ = metadata.version("rustdocstyle")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"
