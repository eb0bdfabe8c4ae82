# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for classifying Rust declarations into items."""

from __future__ import annotations

from pathlib import Path

import pytest

from rustdocstyle.models import ItemKind, Visibility


def test_file_item_comes_first_and_is_private_module(classify_source) -> None:
    items = classify_source("fn helper() {}\n")

    file_item = items[0]
    assert file_item.is_file
    assert file_item.kind is ItemKind.MODULE
    assert file_item.visibility is Visibility.PRIVATE
    assert (file_item.line, file_item.column) == (1, 1)


@pytest.mark.parametrize("name", ["lib.rs", "main.rs", "mod.rs"])
def test_crate_and_module_roots_are_public_packages(classify_source, name: str) -> None:
    items = classify_source("fn helper() {}\n", path=Path("src") / name)

    assert items[0].kind is ItemKind.PACKAGE_ROOT
    assert items[0].visibility is Visibility.PUBLIC
    assert items[0].label == "package"


def test_function_location_points_at_keyword(classify_source) -> None:
    items = classify_source("pub fn add(a: i32, b: i32) -> i32 {\n    a + b\n}\n")

    function = items[1]
    assert function.kind is ItemKind.FUNCTION
    assert function.is_public
    assert function.name == "add"
    assert (function.line, function.column) == (1, 5)
    assert function.signature_text == "pub fn add(a: i32, b: i32) -> i32"


def test_private_function_and_restricted_visibility(classify_source) -> None:
    items = classify_source("fn private() {}\npub(crate) fn crate_visible() {}\n")

    assert items[1].visibility is Visibility.PRIVATE
    assert items[2].visibility is Visibility.PUBLIC
    assert items[2].column == 12


def test_column_counts_characters_not_bytes(classify_source) -> None:
    items = classify_source("/* é */ pub fn f() {}\n")

    assert items[1].column == 13


def test_impl_functions_are_methods(classify_source) -> None:
    source = "struct S;\n\nimpl S {\n    pub fn new() -> Self {\n        S\n    }\n\n    fn helper(&self) {}\n}\n"
    items = classify_source(source)

    kinds = [(item.kind, item.name, item.visibility) for item in items[1:]]
    assert kinds == [
        (ItemKind.STRUCTURED_TYPE, "S", Visibility.PRIVATE),
        (ItemKind.METHOD, "new", Visibility.PUBLIC),
        (ItemKind.METHOD, "helper", Visibility.PRIVATE),
    ]
    assert (items[2].line, items[2].column) == (4, 9)
    assert items[2].label == "method"


def test_trait_members_are_private_methods(classify_source) -> None:
    source = "pub trait Shape {\n    fn area(&self) -> f64;\n    fn name(&self) -> String {\n        String::new()\n    }\n}\n"
    items = classify_source(source)

    trait, required, provided = items[1:]
    assert trait.kind is ItemKind.TRAIT_LIKE
    assert trait.is_public
    assert required.kind is ItemKind.METHOD
    assert provided.kind is ItemKind.METHOD
    assert not required.is_public
    assert not provided.is_public
    assert required.signature_text == "fn area(&self) -> f64"


def test_structured_types_inside_functions_are_nested(classify_source) -> None:
    source = "pub fn outer() {\n    pub struct Inner;\n    pub enum Choice { A }\n}\n"
    items = classify_source(source)

    inner, choice = items[2:]
    assert inner.kind is ItemKind.NESTED_STRUCTURED_TYPE
    assert inner.label == "nested struct"
    assert inner.is_nested
    assert choice.label == "nested enum"


def test_structured_types_inside_modules_are_not_nested(classify_source) -> None:
    items = classify_source("pub mod shapes {\n    pub struct Square;\n}\n")

    module, square = items[1:]
    assert module.kind is ItemKind.MODULE
    assert module.body_line == 2
    assert not module.is_external
    assert square.kind is ItemKind.STRUCTURED_TYPE
    assert not square.is_nested


def test_external_module_has_no_body(classify_source) -> None:
    items = classify_source("pub mod helpers;\n")

    module = items[1]
    assert module.is_external
    assert module.body_line is None


def test_macro_visibility_follows_macro_export(classify_source) -> None:
    source = (
        "#[macro_export]\n"
        "macro_rules! exported {\n    () => {};\n}\n\n"
        "macro_rules! local {\n    () => {};\n}\n"
    )
    items = classify_source(source)

    exported, local = items[1:]
    assert exported.kind is ItemKind.MACRO
    assert exported.is_public
    assert exported.header_line == 1
    assert (exported.line, exported.column) == (2, 1)
    assert not local.is_public


def test_macro_export_found_past_plain_comments(classify_source) -> None:
    source = "/// Build things.\n#[macro_export]\n// note\n/* aside */\nmacro_rules! m {\n    () => {};\n}\n"
    items = classify_source(source)

    macro = items[1]
    assert macro.is_public
    assert macro.header_line == 2
    assert (macro.line, macro.column) == (5, 1)


def test_aliases_constants_and_statics(classify_source) -> None:
    source = "pub type Id = u64;\npub const LIMIT: usize = 3;\npub static NAME: &str = \"x\";\n"
    items = classify_source(source)

    alias, constant, static = items[1:]
    assert alias.kind is ItemKind.TYPE_ALIAS
    assert alias.label == "type alias"
    assert constant.kind is ItemKind.CONSTANT_OR_STATIC
    assert constant.label == "const"
    assert static.label == "static"
    assert alias.signature_text is None


def test_associated_constants_are_classified(classify_source) -> None:
    items = classify_source("struct S;\nimpl S {\n    pub const MAX: u8 = 1;\n}\n")

    assert items[-1].kind is ItemKind.CONSTANT_OR_STATIC
    assert items[-1].is_public


def test_header_line_includes_plain_attributes_only(classify_source) -> None:
    source = '#[doc = "Doc."]\n#[derive(Debug)]\n#[allow(dead_code)]\npub struct S;\n'
    items = classify_source(source)

    struct = items[1]
    assert struct.header_line == 2
    assert struct.line == 4


def test_items_are_emitted_in_source_order(classify_source) -> None:
    source = "pub fn first() {\n    struct Local;\n}\n\npub struct Second;\n\nimpl Second {\n    fn third() {}\n}\n"
    items = classify_source(source)

    assert [item.name for item in items[1:]] == ["first", "Local", "Second", "third"]


def test_syntax_errors_do_not_stop_classification(classify_source) -> None:
    items = classify_source("pub fn fine() {}\n\nfn broken( {\n")

    assert any(item.name == "fine" for item in items)
