# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Configuration models and layered loading."""

from __future__ import annotations

from .loader import PROJECT_CONFIG_NAMES, ConfigLoader, ConfigLoadResult, FieldUpdate, load_config
from .models import DEFAULT_EXCLUDE_DIRS, Config, OutputFormat
from .sources import (
    CargoConfigSource,
    ConfigSource,
    DefaultConfigSource,
    OverrideConfigSource,
    TomlConfigSource,
)

__all__ = [
    "DEFAULT_EXCLUDE_DIRS",
    "PROJECT_CONFIG_NAMES",
    "CargoConfigSource",
    "Config",
    "ConfigLoadResult",
    "ConfigLoader",
    "ConfigSource",
    "DefaultConfigSource",
    "FieldUpdate",
    "OutputFormat",
    "OverrideConfigSource",
    "TomlConfigSource",
    "load_config",
]
