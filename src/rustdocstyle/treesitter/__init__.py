# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tree-sitter integration for Rust syntax trees."""

from __future__ import annotations

from .parser import build_rust_parser, load_rust_language, parse_source

__all__ = ["build_rust_parser", "load_rust_language", "parse_source"]
