# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Layer configuration sources into a validated :class:`Config`."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ..errors import ConfigError
from .models import Config, normalise_keys
from .sources import (
    CargoConfigSource,
    ConfigSource,
    DefaultConfigSource,
    OverrideConfigSource,
    TomlConfigSource,
)

LOGGER = logging.getLogger(__name__)

PROJECT_CONFIG_NAMES: Final[tuple[str, ...]] = (".rustdocstyle.toml", "rustdocstyle.toml")
CARGO_MANIFEST: Final[str] = "Cargo.toml"


class FieldUpdate(BaseModel):
    """Description of a single configuration field mutation."""

    model_config = ConfigDict(validate_assignment=True)

    field: str
    source: str
    value: Any


class ConfigLoadResult(BaseModel):
    """Container bundling a resolved config with provenance metadata."""

    model_config = ConfigDict(validate_assignment=True)

    config: Config
    updates: list[FieldUpdate] = Field(default_factory=list)
    sources: list[str] = Field(default_factory=list)


class ConfigLoader:
    """Apply layered configuration sources with predictable precedence."""

    def __init__(self, *, sources: Sequence[ConfigSource]) -> None:
        """Initialise a loader that merges the supplied sources in order.

        Args:
            sources: Configuration sources, lowest precedence first.
        """

        if not sources:
            raise ValueError("at least one configuration source is required")
        self._sources = list(sources)

    @classmethod
    def for_root(
        cls,
        project_root: Path,
        *,
        config_file: Path | None = None,
        overrides: Mapping[str, Any] | None = None,
    ) -> ConfigLoader:
        """Build a loader for ``project_root`` with the default precedence.

        Args:
            project_root: Directory searched for ``Cargo.toml`` and project files.
            config_file: Explicit configuration file replacing project discovery.
            overrides: Values that win over every file source.

        Returns:
            ConfigLoader: Loader ordered defaults, Cargo metadata, project file, overrides.
        """

        root = project_root.resolve()
        sources: list[ConfigSource] = [DefaultConfigSource()]
        manifest = root / CARGO_MANIFEST
        if manifest.is_file():
            sources.append(CargoConfigSource(manifest))
        if config_file is not None:
            sources.append(TomlConfigSource(config_file, required=True))
        else:
            project_file = next((root / name for name in PROJECT_CONFIG_NAMES if (root / name).is_file()), None)
            if project_file is not None:
                sources.append(TomlConfigSource(project_file))
        if overrides:
            sources.append(OverrideConfigSource(overrides))
        return cls(sources=sources)

    def load(self) -> Config:
        """Return the resolved configuration without provenance metadata."""

        return self.load_with_trace().config

    def load_with_trace(self) -> ConfigLoadResult:
        """Return the resolved configuration with trace metadata.

        Returns:
            ConfigLoadResult: Resolved configuration, field updates and the
            names of sources that contributed values.

        Raises:
            ConfigError: If a source contains unknown keys or invalid values.
        """

        config = Config()
        updates: list[FieldUpdate] = []
        contributed: list[str] = []
        for source in self._sources:
            if not (fragment := source.load()):
                continue
            normalised = normalise_keys(fragment.items())
            unknown = sorted(set(normalised) - Config.field_names())
            if unknown:
                raise ConfigError(f"Unknown configuration key(s) in {source.describe()}: {', '.join(unknown)}")
            config, changed = _apply(config, normalised, source)
            if changed:
                updates.extend(changed)
                contributed.append(source.name)
                LOGGER.debug("Applied %d setting(s) from %s", len(changed), source.describe())
        return ConfigLoadResult(config=config, updates=updates, sources=contributed)


def _apply(config: Config, data: Mapping[str, Any], source: ConfigSource) -> tuple[Config, list[FieldUpdate]]:
    """Return ``config`` updated with ``data`` and the fields that changed."""

    current = config.model_dump()
    try:
        updated = Config.model_validate({**current, **data})
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration in {source.describe()}: {exc}") from exc
    after = updated.model_dump()
    changed = [
        FieldUpdate(field=name, source=source.name, value=after[name])
        for name in data
        if after[name] != current[name]
    ]
    return updated, changed


def load_config(
    project_root: Path,
    overrides: Mapping[str, Any] | None = None,
    *,
    config_file: Path | None = None,
) -> ConfigLoadResult:
    """Load configuration for ``project_root`` using the default tiered sources.

    Args:
        project_root: Directory anchoring configuration discovery.
        overrides: Highest-precedence values, ``None`` entries ignored.
        config_file: Explicit configuration file to use instead of discovery.

    Returns:
        ConfigLoadResult: Resolved configuration with provenance.
    """

    return ConfigLoader.for_root(project_root, config_file=config_file, overrides=overrides).load_with_trace()


__all__ = ["PROJECT_CONFIG_NAMES", "ConfigLoadResult", "ConfigLoader", "FieldUpdate", "load_config"]
