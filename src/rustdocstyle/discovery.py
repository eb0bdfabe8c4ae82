# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate Rust source files beneath a directory."""

from __future__ import annotations

import logging
import os
import shutil

# Shell-free git invocation with fixed arguments.
import subprocess  # nosec B404
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from typing import Final

from .config.models import DEFAULT_EXCLUDE_DIRS
from .errors import DiscoveryError

LOGGER = logging.getLogger(__name__)

RUST_SUFFIX: Final[str] = ".rs"
TARGET_DIR: Final[str] = "target"
CARGO_LOCK: Final[str] = "Cargo.lock"
_GIT_NO_MATCH: Final[int] = 1

IgnoreChecker = Callable[[Sequence[Path], Path], set[Path]]


def _ensure_directory(directory: Path) -> None:
    if not directory.exists():
        raise DiscoveryError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise DiscoveryError(f"Not a directory: {directory}")


def collect_rust_files(directory: Path) -> list[Path]:
    """Return the ``.rs`` files directly inside ``directory``.

    Args:
        directory: Directory to list.

    Returns:
        list[Path]: Sorted Rust source files.

    Raises:
        DiscoveryError: If ``directory`` is missing or not a directory.
    """

    _ensure_directory(directory)
    try:
        entries = list(directory.iterdir())
    except OSError as exc:
        raise DiscoveryError(f"Unable to list {directory}: {exc}") from exc
    return sorted(entry for entry in entries if entry.is_file() and entry.suffix == RUST_SUFFIX)


def should_skip_target_dir(path: Path) -> bool:
    """Return ``True`` for Cargo build directories that hold no sources.

    A directory named ``target`` is skipped when it has no ``.rs`` files of
    its own, or when its parent holds a ``Cargo.lock``.

    Args:
        path: Directory under consideration.

    Returns:
        bool: ``True`` when the walk should not descend into ``path``.
    """

    if path.name != TARGET_DIR:
        return False
    if (path.parent / CARGO_LOCK).is_file():
        return True
    try:
        return not any(entry.is_file() and entry.suffix == RUST_SUFFIX for entry in path.iterdir())
    except OSError:
        return True


def _run_git(command: Sequence[str], root: Path, *, stdin: str | None = None) -> subprocess.CompletedProcess[str] | None:
    try:
        return subprocess.run(  # nosec B603
            list(command),
            cwd=root,
            input=stdin,
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as exc:
        LOGGER.debug("Unable to run git in %s: %s", root, exc)
        return None


def git_ignored(paths: Sequence[Path], root: Path) -> set[Path]:
    """Return the subset of ``paths`` that git ignores.

    Git being absent, or ``root`` lying outside a work tree, yields an empty
    set rather than an error.

    Args:
        paths: Candidate files.
        root: Directory used as the git working directory.

    Returns:
        set[Path]: Paths reported by ``git check-ignore``.
    """

    git = shutil.which("git")
    if git is None or not paths:
        return set()
    inside = _run_git([git, "rev-parse", "--is-inside-work-tree"], root)
    if inside is None or inside.returncode != 0 or inside.stdout.strip() != "true":
        return set()
    lookup = {str(path.resolve()): path for path in paths}
    completed = _run_git([git, "check-ignore", "--stdin"], root, stdin="\n".join(lookup))
    if completed is None:
        return set()
    if completed.returncode not in (0, _GIT_NO_MATCH):
        LOGGER.debug("git check-ignore failed in %s: %s", root, completed.stderr.strip())
        return set()
    return {lookup[line] for line in completed.stdout.splitlines() if line in lookup}


def _walk(directory: Path, excluded: frozenset[str]) -> Iterable[Path]:
    for dirpath, dirnames, filenames in os.walk(directory):
        current = Path(dirpath)
        dirnames[:] = sorted(
            name for name in dirnames if name not in excluded and not should_skip_target_dir(current / name)
        )
        for filename in sorted(filenames):
            if filename.endswith(RUST_SUFFIX):
                yield current / filename


def collect_rust_files_recursive(
    directory: Path,
    *,
    exclude: Iterable[str] = DEFAULT_EXCLUDE_DIRS,
    respect_gitignore: bool = True,
    ignore_checker: IgnoreChecker | None = None,
) -> list[Path]:
    """Return every ``.rs`` file beneath ``directory``.

    Args:
        directory: Root of the walk.
        exclude: Directory names that are never entered.
        respect_gitignore: Drop files ignored by git when inside a work tree.
        ignore_checker: Optional replacement for :func:`git_ignored`.

    Returns:
        list[Path]: Sorted Rust source files.

    Raises:
        DiscoveryError: If ``directory`` is missing or not a directory.
    """

    _ensure_directory(directory)
    files = sorted(_walk(directory, frozenset(exclude)))
    if not respect_gitignore:
        return files
    checker = ignore_checker or git_ignored
    ignored = checker(files, directory)
    if ignored:
        LOGGER.debug("Skipping %d git-ignored file(s) under %s", len(ignored), directory)
    return [path for path in files if path not in ignored]


__all__ = [
    "collect_rust_files",
    "collect_rust_files_recursive",
    "git_ignored",
    "should_skip_target_dir",
]
