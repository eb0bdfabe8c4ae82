# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Classify Rust declarations in a Tree-sitter syntax tree into checkable items."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator
from pathlib import Path
from typing import Final

from tree_sitter import Node, Tree

from .models import Item, ItemKind, Visibility

LOGGER = logging.getLogger(__name__)

_VISIBILITY_NODE: Final[str] = "visibility_modifier"
_ATTRIBUTE_NODE: Final[str] = "attribute_item"
_DECLARATION_LIST: Final[str] = "declaration_list"
_COMMENT_NODES: Final[frozenset[str]] = frozenset({"line_comment", "block_comment"})
_PACKAGE_ROOT_FILES: Final[frozenset[str]] = frozenset({"lib.rs", "main.rs", "mod.rs"})
_NESTING_CONTAINERS: Final[frozenset[str]] = frozenset({"function_item", "impl_item", "trait_item"})
_SCOPE_BOUNDARIES: Final[frozenset[str]] = frozenset({"source_file", "mod_item"})
_METHOD_CONTAINERS: Final[frozenset[str]] = frozenset({"impl_item", "trait_item"})
_SIGNATURE_CONTAINERS: Final[frozenset[str]] = frozenset({"trait_item"})
_FUNCTION_KINDS: Final[frozenset[ItemKind]] = frozenset({ItemKind.FUNCTION, ItemKind.METHOD})

_DOC_ATTRIBUTE_RE: Final[re.Pattern[str]] = re.compile(r"^#\s*\[\s*doc\s*=")
_MACRO_EXPORT_RE: Final[re.Pattern[str]] = re.compile(r"^#\s*\[\s*macro_export\b")
_DOC_COMMENT_RE: Final[re.Pattern[str]] = re.compile(r"^(?:///(?!/)|//!|/\*!|/\*\*(?![*/]))")

_KEYWORDS: Final[dict[str, tuple[str, ...]]] = {
    "function_item": ("fn",),
    "function_signature_item": ("fn",),
    "struct_item": ("struct",),
    "enum_item": ("enum",),
    "union_item": ("union",),
    "trait_item": ("trait",),
    "type_item": ("type",),
    "const_item": ("const",),
    "static_item": ("static",),
    "mod_item": ("mod",),
    "macro_definition": ("macro_rules!", "macro_rules"),
}

_STRUCTURED_KINDS: Final[dict[str, ItemKind]] = {
    "struct_item": ItemKind.STRUCTURED_TYPE,
    "enum_item": ItemKind.ENUMERATION,
    "union_item": ItemKind.UNION,
    "trait_item": ItemKind.TRAIT_LIKE,
}

_STRUCTURED_LABELS: Final[dict[str, str]] = {
    "struct_item": "struct",
    "enum_item": "enum",
    "union_item": "union",
    "trait_item": "trait",
}

_KIND_LABELS: Final[dict[ItemKind, str]] = {
    ItemKind.FUNCTION: "function",
    ItemKind.METHOD: "method",
    ItemKind.STRUCTURED_TYPE: "struct",
    ItemKind.ENUMERATION: "enum",
    ItemKind.TRAIT_LIKE: "trait",
    ItemKind.UNION: "union",
    ItemKind.MODULE: "module",
    ItemKind.PACKAGE_ROOT: "package",
    ItemKind.TYPE_ALIAS: "type alias",
    ItemKind.MACRO: "macro",
}


class ItemClassifier:
    """Walk a Rust syntax tree and emit items in source order."""

    def __init__(self, source: str, *, path: Path | None = None) -> None:
        """Prepare the classifier for ``source``.

        Args:
            source: Rust source text the tree was parsed from.
            path: Optional file path, used to detect crate and module roots.
        """

        self._source_bytes = source.encode("utf-8")
        self._byte_lines = self._source_bytes.split(b"\n")
        self._path = path

    def classify(self, tree: Tree) -> list[Item]:
        """Return the checkable items found in ``tree``.

        The synthetic whole-file item always comes first, followed by the
        declarations in pre-order (source) order.

        Args:
            tree: Syntax tree produced by the Rust grammar.

        Returns:
            list[Item]: Items in source order.
        """

        root = tree.root_node
        if root.has_error:
            LOGGER.debug("Syntax errors present in %s; classification continues", self._path or "<source>")
        items = [self._file_item()]
        for node in self._walk(root):
            kind = self._kind_for(node)
            if kind is not None:
                items.append(self._build_item(node, kind))
        return items

    def _walk(self, root: Node) -> Iterator[Node]:
        """Yield descendants of ``root`` in pre-order without recursion."""

        stack = list(reversed(root.named_children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.named_children))

    def _file_item(self) -> Item:
        """Return the synthetic item standing for the whole file."""

        is_root = self._path is not None and self._path.name in _PACKAGE_ROOT_FILES
        kind = ItemKind.PACKAGE_ROOT if is_root else ItemKind.MODULE
        return Item(
            kind=kind,
            visibility=Visibility.PUBLIC if is_root else Visibility.PRIVATE,
            name=self._path.stem if self._path is not None else None,
            line=1,
            column=1,
            label=_KIND_LABELS[kind],
            header_line=1,
            is_file=True,
        )

    def _kind_for(self, node: Node) -> ItemKind | None:
        """Return the item kind for ``node`` or ``None`` when it is not checked."""

        match node.type:
            case "function_item":
                return ItemKind.METHOD if _inside(node, _METHOD_CONTAINERS) else ItemKind.FUNCTION
            case "function_signature_item":
                return ItemKind.METHOD if _inside(node, _SIGNATURE_CONTAINERS) else None
            case "struct_item" | "enum_item" | "union_item" | "trait_item":
                if _is_nested(node):
                    return ItemKind.NESTED_STRUCTURED_TYPE
                return _STRUCTURED_KINDS[node.type]
            case "type_item":
                return ItemKind.TYPE_ALIAS
            case "const_item" | "static_item":
                return ItemKind.CONSTANT_OR_STATIC
            case "macro_definition":
                return ItemKind.MACRO
            case "mod_item":
                return ItemKind.MODULE
            case _:
                return None

    def _build_item(self, node: Node, kind: ItemKind) -> Item:
        """Assemble the :class:`Item` record for ``node``."""

        attributes, header_row = self._outer_attributes(node)
        keyword = _keyword_node(node)
        anchor = keyword if keyword is not None else node
        row, byte_column = anchor.start_point
        body_line: int | None = None
        is_external = False
        if kind is ItemKind.MODULE:
            body = node.child_by_field_name("body")
            if body is None:
                is_external = True
            else:
                body_line = body.start_point[0] + 2
        return Item(
            kind=kind,
            visibility=self._visibility(node, attributes),
            name=self._name(node),
            line=row + 1,
            column=self._char_column(row, byte_column) + 1,
            label=_label(kind, node),
            header_line=header_row + 1,
            is_nested=kind is not ItemKind.METHOD and _is_nested(node),
            is_external=is_external,
            body_line=body_line,
            signature_text=self._signature(node) if kind in _FUNCTION_KINDS else None,
        )

    def _outer_attributes(self, node: Node) -> tuple[list[str], int]:
        """Return non-doc attributes directly above ``node`` and the header row.

        Plain comments between attributes are stepped over. Doc comments and
        doc attributes end the walk.

        Args:
            node: Declaration node whose attributes are collected.

        Returns:
            tuple[list[str], int]: Attribute texts and the zero-based row where
            the declaration header (attributes included) begins.
        """

        attributes: list[str] = []
        header_row = node.start_point[0]
        sibling = node.prev_named_sibling
        while sibling is not None:
            text = self._text(sibling)
            if sibling.type in _COMMENT_NODES and not _DOC_COMMENT_RE.match(text):
                sibling = sibling.prev_named_sibling
                continue
            if sibling.type != _ATTRIBUTE_NODE or _DOC_ATTRIBUTE_RE.match(text):
                break
            attributes.append(text)
            header_row = sibling.start_point[0]
            sibling = sibling.prev_named_sibling
        return attributes, header_row

    @staticmethod
    def _visibility(node: Node, attributes: list[str]) -> Visibility:
        """Return the visibility of ``node`` from its marker or export attribute."""

        if node.type == "macro_definition":
            exported = any(_MACRO_EXPORT_RE.match(text) for text in attributes)
            return Visibility.PUBLIC if exported else Visibility.PRIVATE
        if any(child.type == _VISIBILITY_NODE for child in node.children):
            return Visibility.PUBLIC
        return Visibility.PRIVATE

    def _name(self, node: Node) -> str | None:
        name_node = node.child_by_field_name("name")
        return self._text(name_node) if name_node is not None else None

    def _signature(self, node: Node) -> str:
        """Return the whitespace-collapsed declaration header for ``node``."""

        body = node.child_by_field_name("body")
        end = body.start_byte if body is not None else node.end_byte
        raw = self._source_bytes[node.start_byte : end].decode("utf-8", errors="replace")
        return " ".join(raw.split()).rstrip(";").rstrip()

    def _text(self, node: Node) -> str:
        return self._source_bytes[node.start_byte : node.end_byte].decode("utf-8", errors="replace")

    def _char_column(self, row: int, byte_column: int) -> int:
        """Convert a Tree-sitter byte column into a character column."""

        if row >= len(self._byte_lines):
            return byte_column
        prefix = self._byte_lines[row][:byte_column]
        return len(prefix.decode("utf-8", errors="ignore"))


def _inside(node: Node, containers: frozenset[str]) -> bool:
    """Return ``True`` when ``node`` sits directly in a container's body."""

    parent = node.parent
    if parent is None or parent.type != _DECLARATION_LIST:
        return False
    owner = parent.parent
    return owner is not None and owner.type in containers


def _is_nested(node: Node) -> bool:
    """Return ``True`` when ``node`` is declared inside another item body."""

    parent = node.parent
    while parent is not None:
        if parent.type in _NESTING_CONTAINERS:
            return True
        if parent.type in _SCOPE_BOUNDARIES:
            return False
        parent = parent.parent
    return False


def _keyword_node(node: Node) -> Node | None:
    keywords = _KEYWORDS.get(node.type, ())
    for child in node.children:
        if child.type in keywords:
            return child
    return None


def _label(kind: ItemKind, node: Node) -> str:
    match kind:
        case ItemKind.NESTED_STRUCTURED_TYPE:
            return f"nested {_STRUCTURED_LABELS[node.type]}"
        case ItemKind.CONSTANT_OR_STATIC:
            return "static" if node.type == "static_item" else "const"
        case _:
            return _KIND_LABELS[kind]


def classify(tree: Tree, source: str, *, path: Path | None = None) -> list[Item]:
    """Return the ordered checkable items of ``tree``.

    Args:
        tree: Syntax tree parsed from ``source``.
        source: Rust source text.
        path: Optional file path used to recognise crate and module roots.

    Returns:
        list[Item]: Items in source order, whole-file item first.
    """

    return ItemClassifier(source, path=path).classify(tree)


__all__ = ["ItemClassifier", "classify"]
