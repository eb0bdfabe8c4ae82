# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Typer application factory with stable, alphabetised help output."""

from __future__ import annotations

from typing import Any, Final

import typer
from typer.core import TyperCommand, TyperGroup

HELP_FLAG: Final[str] = "--help"
ARGUMENT_PARAM_TYPE: Final[str] = "argument"


def option_sort_key(param: Any) -> tuple[bool, str]:
    """Return the help ordering key for an option.

    Options sort by their first long flag with dashes stripped, falling back
    to the short flag and then the parameter name. ``--help`` always sorts
    last.

    Args:
        param: Command-line option being ordered.

    Returns:
        tuple[bool, str]: ``(is_help, name)`` key for :func:`sorted`.
    """

    flags = [*getattr(param, "opts", ()), *getattr(param, "secondary_opts", ())]
    if HELP_FLAG in flags:
        return True, ""
    long_flags = [flag for flag in flags if flag.startswith("--")]
    name = long_flags[0] if long_flags else (flags[0] if flags else param.name or "")
    return False, name.lstrip("-").lower()


def _is_argument(param: Any) -> bool:
    return getattr(param, "param_type_name", "") == ARGUMENT_PARAM_TYPE


def _ordered(params: list[Any]) -> list[Any]:
    # Positional order is significant; only options are reordered.
    arguments = [param for param in params if _is_argument(param)]
    options = sorted((param for param in params if not _is_argument(param)), key=option_sort_key)
    return [*arguments, *options]


class SortedTyperCommand(TyperCommand):
    """Command whose help lists its options alphabetically."""

    def get_params(self, ctx: typer.Context) -> list[Any]:
        return _ordered(super().get_params(ctx))


class SortedTyperGroup(TyperGroup):
    """Group whose global options are listed alphabetically."""

    def get_params(self, ctx: typer.Context) -> list[Any]:
        return _ordered(super().get_params(ctx))


class SortedTyper(typer.Typer):
    """Typer application that builds sorted groups and commands by default."""

    def __init__(self, *args: Any, cls: type[TyperGroup] | None = None, **kwargs: Any) -> None:
        super().__init__(*args, cls=cls or SortedTyperGroup, **kwargs)

    def command(self, name: str | None = None, *, cls: type[TyperCommand] | None = None, **kwargs: Any) -> Any:
        """Register a command that defaults to :class:`SortedTyperCommand`."""

        return super().command(name, cls=cls or SortedTyperCommand, **kwargs)


def create_typer(**kwargs: Any) -> SortedTyper:
    """Return the CLI application object.

    Rich help rendering is disabled unless a caller asks for it, so help text
    stays plain when piped.

    Args:
        **kwargs: Arguments forwarded to :class:`typer.Typer`.

    Returns:
        SortedTyper: Configured application.
    """

    kwargs.setdefault("rich_markup_mode", None)
    return SortedTyper(**kwargs)


__all__ = ["SortedTyper", "SortedTyperCommand", "SortedTyperGroup", "create_typer", "option_sort_key"]
