# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Tests for locating Rust sources on disk."""

from __future__ import annotations

import shutil
import subprocess
from collections.abc import Sequence
from pathlib import Path

import pytest

from rustdocstyle.discovery import (
    collect_rust_files,
    collect_rust_files_recursive,
    git_ignored,
    should_skip_target_dir,
)
from rustdocstyle.errors import DiscoveryError


def _touch(path: Path, text: str = "fn f() {}\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _ignore_nothing(paths: Sequence[Path], root: Path) -> set[Path]:
    return set()


def test_collect_rust_files_is_flat_and_sorted(tmp_path: Path) -> None:
    second = _touch(tmp_path / "b.rs")
    first = _touch(tmp_path / "a.rs")
    _touch(tmp_path / "notes.txt")
    _touch(tmp_path / "nested" / "c.rs")

    assert collect_rust_files(tmp_path) == [first, second]


def test_collect_rust_files_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(DiscoveryError, match="Directory not found"):
        collect_rust_files(tmp_path / "absent")


def test_collect_rust_files_rejects_files(tmp_path: Path) -> None:
    target = _touch(tmp_path / "main.rs")

    with pytest.raises(DiscoveryError, match="Not a directory"):
        collect_rust_files(target)


def test_recursive_walk_prunes_excluded_directories(tmp_path: Path) -> None:
    lib = _touch(tmp_path / "src" / "lib.rs")
    util = _touch(tmp_path / "src" / "util" / "mod.rs")
    _touch(tmp_path / ".git" / "hooks" / "hook.rs")
    _touch(tmp_path / "node_modules" / "pkg" / "binding.rs")
    _touch(tmp_path / "vendor" / "dep.rs")

    files = collect_rust_files_recursive(
        tmp_path,
        exclude=(".git", "node_modules", "vendor"),
        ignore_checker=_ignore_nothing,
    )

    assert files == [lib, util]


def test_target_directory_next_to_cargo_lock_is_skipped(tmp_path: Path) -> None:
    _touch(tmp_path / "Cargo.lock", "")
    _touch(tmp_path / "target" / "generated.rs")
    main = _touch(tmp_path / "src" / "main.rs")

    assert collect_rust_files_recursive(tmp_path, respect_gitignore=False) == [main]


def test_target_directory_with_sources_is_kept(tmp_path: Path) -> None:
    source = _touch(tmp_path / "target" / "lib.rs")

    assert not should_skip_target_dir(tmp_path / "target")
    assert collect_rust_files_recursive(tmp_path, respect_gitignore=False) == [source]


def test_target_directory_without_sources_is_skipped(tmp_path: Path) -> None:
    _touch(tmp_path / "target" / "debug" / "build" / "out.rs")

    assert should_skip_target_dir(tmp_path / "target")
    assert not should_skip_target_dir(tmp_path / "src")
    assert collect_rust_files_recursive(tmp_path, respect_gitignore=False) == []


def test_ignore_checker_filters_results(tmp_path: Path) -> None:
    kept = _touch(tmp_path / "kept.rs")
    dropped = _touch(tmp_path / "generated.rs")
    seen: list[Path] = []

    def checker(paths: Sequence[Path], root: Path) -> set[Path]:
        seen.append(root)
        return {dropped}

    assert collect_rust_files_recursive(tmp_path, ignore_checker=checker) == [kept]
    assert seen == [tmp_path]


def test_ignore_checker_skipped_when_gitignore_disabled(tmp_path: Path) -> None:
    kept = _touch(tmp_path / "kept.rs")

    def checker(paths: Sequence[Path], root: Path) -> set[Path]:
        raise AssertionError("checker should not run")

    assert collect_rust_files_recursive(tmp_path, respect_gitignore=False, ignore_checker=checker) == [kept]


@pytest.mark.skipif(shutil.which("git") is None, reason="git not installed")
def test_git_ignored_uses_gitignore(tmp_path: Path) -> None:
    subprocess.run(["git", "init", "-q"], cwd=tmp_path, check=True)
    (tmp_path / ".gitignore").write_text("generated.rs\n", encoding="utf-8")
    kept = _touch(tmp_path / "kept.rs")
    dropped = _touch(tmp_path / "generated.rs")

    assert git_ignored([kept, dropped], tmp_path) == {dropped}
    assert collect_rust_files_recursive(tmp_path) == [kept]


def test_git_ignored_without_git(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(shutil, "which", lambda name: None)

    assert git_ignored([_touch(tmp_path / "a.rs")], tmp_path) == set()
