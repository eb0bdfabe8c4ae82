# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Concrete configuration sources (defaults, TOML files, Cargo metadata, CLI)."""

from __future__ import annotations

import copy
import tomllib
from abc import ABC, abstractmethod
from collections.abc import Mapping, MutableMapping
from pathlib import Path
from typing import Any, Final

from ..errors import ConfigError
from .models import Config

CARGO_SECTION_KEY: Final[str] = "rustdocstyle"
CARGO_METADATA_KEY: Final[str] = "metadata"
CARGO_TABLES: Final[tuple[str, ...]] = ("package", "workspace")

_TOML_CACHE: dict[tuple[Path, int, int], Mapping[str, Any]] = {}


class ConfigSource(ABC):
    """Produce one layer of configuration data."""

    name: str

    @abstractmethod
    def load(self) -> Mapping[str, Any]:
        """Return the configuration fragment provided by this source."""

    @abstractmethod
    def describe(self) -> str:
        """Return a human-readable description used in error messages."""


class DefaultConfigSource(ConfigSource):
    """Return the built-in defaults as a configuration fragment."""

    name = "defaults"

    def load(self) -> Mapping[str, Any]:
        return Config().to_dict()

    def describe(self) -> str:
        return "Built-in defaults"


class TomlConfigSource(ConfigSource):
    """Load configuration data from the top-level table of a TOML document."""

    def __init__(self, path: Path, *, name: str | None = None, required: bool = False) -> None:
        self._path = path
        self.name = name or str(path)
        self._required = required

    @property
    def path(self) -> Path:
        """Return the file this source reads."""

        return self._path

    def load(self) -> Mapping[str, Any]:
        return self._read()

    def _read(self) -> dict[str, Any]:
        """Return the parsed document, cached by modification time and size.

        Raises:
            ConfigError: If the file is required but missing, or is not valid TOML.
        """

        if not self._path.exists():
            if self._required:
                raise ConfigError(f"Configuration file not found: {self._path}")
            return {}
        resolved = self._path.resolve()
        stat = resolved.stat()
        cache_key = (resolved, stat.st_mtime_ns, stat.st_size)
        if cached := _TOML_CACHE.get(cache_key):
            return copy.deepcopy(dict(cached))
        try:
            with resolved.open("rb") as handle:
                data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid TOML in {self._path}: {exc}") from exc
        except OSError as exc:
            raise ConfigError(f"Unable to read {self._path}: {exc}") from exc
        _TOML_CACHE[cache_key] = copy.deepcopy(data)
        return dict(data)

    def describe(self) -> str:
        return f"TOML configuration at {self.name}"


class CargoConfigSource(TomlConfigSource):
    """Read ``[package.metadata.rustdocstyle]`` or its workspace variant from ``Cargo.toml``."""

    def __init__(self, path: Path) -> None:
        super().__init__(path, name=str(path))

    def load(self) -> Mapping[str, Any]:
        data = self._read()
        merged: dict[str, Any] = {}
        for table in reversed(CARGO_TABLES):
            section = _nested_table(data, table, CARGO_METADATA_KEY, CARGO_SECTION_KEY)
            if section is not None:
                merged.update(section)
        return merged

    def describe(self) -> str:
        return f"Cargo.toml metadata ({self.name})"


class OverrideConfigSource(ConfigSource):
    """Expose explicit overrides (usually CLI flags) as the final layer."""

    def __init__(self, values: Mapping[str, Any], *, name: str = "cli") -> None:
        self.name = name
        self._values = {key: value for key, value in values.items() if value is not None}

    def load(self) -> Mapping[str, Any]:
        return dict(self._values)

    def describe(self) -> str:
        return "command-line options"


def _nested_table(data: Mapping[str, Any], *keys: str) -> Mapping[str, Any] | None:
    current: Any = data
    for key in keys:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    if current is None:
        return None
    if not isinstance(current, MutableMapping):
        raise ConfigError(f"[{'.'.join(keys)}] must be a table")
    return current


__all__ = [
    "CargoConfigSource",
    "ConfigSource",
    "DefaultConfigSource",
    "OverrideConfigSource",
    "TomlConfigSource",
]
