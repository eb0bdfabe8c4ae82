# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Shared pytest fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from rustdocstyle.classifier import classify
from rustdocstyle.engine import DocstringChecker
from rustdocstyle.models import Item
from rustdocstyle.treesitter import build_rust_parser, parse_source

FIXTURES_DIR = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the directory holding the Rust fixture files."""
    return FIXTURES_DIR


@pytest.fixture
def checker() -> DocstringChecker:
    """Return a checker evaluating the full rule catalog."""
    return DocstringChecker()


@pytest.fixture
def classify_source() -> Callable[..., list[Item]]:
    """Return a helper that parses Rust text and classifies its items."""

    parser = build_rust_parser()

    def _classify(source: str, path: Path | None = None) -> list[Item]:
        tree = parse_source(parser, source)
        return classify(tree, source, path=path)

    return _classify
