# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run the classify, harvest, evaluate and aggregate pipeline over Rust files."""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from tree_sitter import Parser, Tree

from .classifier import classify
from .errors import ParseError
from .harvester import harvest, source_lines
from .models import FileReport, Violation
from .rules import Rule, RuleSelection, active_rules, evaluate
from .treesitter import build_rust_parser, parse_source

LOGGER = logging.getLogger(__name__)


def aggregate(groups: Iterable[Iterable[Violation]]) -> list[Violation]:
    """Flatten per-item violation lists into report order.

    The sort on ``(line, column, rule)`` is stable, so violations with equal
    keys keep their evaluation order. Nothing is merged or deduplicated.

    Args:
        groups: Violation lists, typically one per item.

    Returns:
        list[Violation]: Ordered violations.
    """

    flattened = [violation for group in groups for violation in group]
    return sorted(flattened, key=lambda violation: violation.sort_key)


def read_source(path: Path) -> str:
    """Return the UTF-8 text of ``path``.

    Raises:
        ParseError: If the file cannot be read or decoded.
    """

    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(f"Failed to read file: {exc}", path=path) from exc


class DocstringChecker:
    """Check Rust sources for documentation style violations."""

    def __init__(self, *, selection: RuleSelection | None = None) -> None:
        """Create a checker evaluating the rules enabled by ``selection``.

        Args:
            selection: Optional code-prefix filter applied to the rule registry.
        """

        self._rules = active_rules(selection)
        self._local = threading.local()

    @property
    def rules(self) -> tuple[Rule, ...]:
        """Return the rules this checker evaluates."""

        return self._rules

    def _parser(self) -> Parser:
        """Return the parser owned by the calling thread."""

        parser: Parser | None = getattr(self._local, "parser", None)
        if parser is None:
            parser = build_rust_parser()
            self._local.parser = parser
        return parser

    def check_tree(self, tree: Tree, source: str, *, path: Path | None = None) -> list[Violation]:
        """Return the ordered violations for an already parsed ``tree``.

        Args:
            tree: Syntax tree parsed from ``source``.
            source: Rust source text.
            path: Optional file path used to recognise crate and module roots.

        Returns:
            list[Violation]: Violations sorted by location and rule.
        """

        lines = source_lines(source)
        groups: list[list[Violation]] = []
        for item in classify(tree, source, path=path):
            docstring = harvest(item, lines)
            groups.append(evaluate(item, docstring, self._rules))
        return aggregate(groups)

    def check_source(self, source: str, *, path: Path | None = None) -> list[Violation]:
        """Parse ``source`` and return its ordered violations.

        Raises:
            ParseError: If Tree-sitter cannot produce a tree.
        """

        tree = parse_source(self._parser(), source)
        return self.check_tree(tree, source, path=path)

    def check_file(self, path: Path) -> FileReport:
        """Check a single Rust file.

        Args:
            path: File to check.

        Returns:
            FileReport: Violations recorded for ``path``.

        Raises:
            ParseError: If the file cannot be read or parsed.
        """

        LOGGER.info("Processing file: %s", path)
        source = read_source(path)
        try:
            violations = self.check_source(source, path=path)
        except ParseError as exc:
            raise ParseError(str(exc), path=path) from exc
        LOGGER.debug("Found %d violation(s) in %s", len(violations), path)
        return FileReport(file=str(path), violations=violations)

    def check_paths(self, paths: Sequence[Path], *, jobs: int = 1) -> list[FileReport]:
        """Check ``paths`` and return one report per path in input order.

        Files that cannot be read or parsed produce a report whose ``error``
        is set instead of stopping the run.

        Args:
            paths: Files to check.
            jobs: Worker threads to use; ``1`` runs sequentially.

        Returns:
            list[FileReport]: Reports aligned with ``paths``.
        """

        if jobs <= 1 or len(paths) <= 1:
            return [self._check_isolated(path) for path in paths]
        with ThreadPoolExecutor(max_workers=jobs, thread_name_prefix="rustdocstyle") as executor:
            return list(executor.map(self._check_isolated, paths))

    def _check_isolated(self, path: Path) -> FileReport:
        try:
            return self.check_file(path)
        except ParseError as exc:
            LOGGER.debug("Recording failure for %s: %s", path, exc)
            return FileReport(file=str(path), error=str(exc))


__all__ = ["DocstringChecker", "aggregate", "read_source"]
