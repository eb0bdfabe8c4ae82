# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Shared helpers for building Tree-sitter parsers for Rust sources."""

from __future__ import annotations

from functools import lru_cache

import tree_sitter_rust
from tree_sitter import Language, Parser, Tree

from ..errors import ParseError


@lru_cache(maxsize=1)
def load_rust_language() -> Language:
    """Return the Rust grammar bundled with ``tree-sitter-rust``.

    The language object is built once per process and shared by every parser.

    Raises:
        ParseError: If the bundled grammar is incompatible with the installed
            ``tree-sitter`` runtime.
    """

    try:
        return Language(tree_sitter_rust.language())
    except (TypeError, ValueError) as exc:
        raise ParseError(f"Unable to load the Rust Tree-sitter grammar: {exc}") from exc


def build_rust_parser() -> Parser:
    """Return a new parser for Rust.

    Parsers are not shared between threads; callers keep one per worker.
    """

    return Parser(load_rust_language())


def parse_source(parser: Parser, source: str) -> Tree:
    """Parse ``source`` with ``parser`` and return the syntax tree.

    Args:
        parser: Parser configured for the Rust grammar.
        source: Rust source text.

    Returns:
        Tree: Parsed syntax tree.

    Raises:
        ParseError: If Tree-sitter fails to produce a tree.
    """

    tree = parser.parse(source.encode("utf-8"))
    if tree is None:
        raise ParseError("Failed to parse file: tree-sitter error")
    return tree


__all__ = ["build_rust_parser", "load_rust_language", "parse_source"]
