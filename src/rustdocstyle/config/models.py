# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Pydantic models describing checker configuration."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..rules import RuleSelection

DEFAULT_EXCLUDE_DIRS: Final[tuple[str, ...]] = (
    ".git",
    ".hg",
    ".svn",
    ".idea",
    ".vscode",
    ".venv",
    "__pycache__",
    "node_modules",
)


class OutputFormat(str, Enum):
    """Report renderings supported by the CLI."""

    TEXT = "text"
    JSON = "json"


class Config(BaseModel):
    """Resolved configuration for a checker run."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    show_warnings: bool = False
    output_format: OutputFormat = OutputFormat.TEXT
    no_fail: bool = False
    recursive: bool = False
    respect_gitignore: bool = True
    jobs: int = Field(default=1, ge=1)
    select: tuple[str, ...] = ()
    ignore: tuple[str, ...] = ()
    exclude: tuple[str, ...] = DEFAULT_EXCLUDE_DIRS

    @field_validator("select", "ignore", "exclude", mode="before")
    @classmethod
    def _coerce_sequence(cls, value: Any) -> Any:
        """Accept a single string wherever a list of strings is expected."""

        if isinstance(value, str):
            return (value,)
        return value

    @field_validator("select", "ignore")
    @classmethod
    def _normalise_codes(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(code.strip().upper() for code in value if code.strip())

    def rule_selection(self) -> RuleSelection:
        """Return the rule filter described by ``select`` and ``ignore``."""

        return RuleSelection(select=self.select, ignore=self.ignore)

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-compatible snapshot of the configuration."""

        return self.model_dump(mode="json")

    @classmethod
    def field_names(cls) -> frozenset[str]:
        """Return the names of every configurable field."""

        return frozenset(cls.model_fields)


def normalise_keys(fragment: Iterable[tuple[str, Any]]) -> dict[str, Any]:
    """Return ``fragment`` with hyphenated TOML keys mapped to field names."""

    return {key.replace("-", "_"): value for key, value in fragment}


__all__ = ["DEFAULT_EXCLUDE_DIRS", "Config", "OutputFormat", "normalise_keys"]
