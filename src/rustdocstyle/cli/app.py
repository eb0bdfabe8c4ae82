# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command line interface for checking Rust documentation comments."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Any, Final

import typer
from rich.table import Table
from rich.text import Text

from .. import __version__
from ..config import Config, OutputFormat, load_config
from ..console import get_console
from ..discovery import collect_rust_files, collect_rust_files_recursive
from ..engine import DocstringChecker
from ..errors import ConfigError, DiscoveryError
from ..logging import configure_logging, fail, warn
from ..reporting import RunSummary, emit_reports, summarize
from ..rules import RULES
from .typer_ext import create_typer

LOGGER = logging.getLogger(__name__)

EXIT_OK: Final[int] = 0
EXIT_VIOLATIONS: Final[int] = 1
EXIT_ERROR: Final[int] = 2
NO_INPUT_MESSAGE: Final[str] = "No file or command specified. Use --help for usage information."


class CLIError(Exception):
    """Raised when a command cannot proceed; carries its exit status."""

    def __init__(self, message: str, *, exit_code: int = EXIT_ERROR) -> None:
        super().__init__(message)
        self.exit_code = exit_code


@dataclass(slots=True)
class CLISettings:
    """Global options captured by the application callback.

    Attributes:
        config_file: Explicit configuration file, if supplied.
        overrides: Configuration values set on the command line; ``None``
            entries defer to file sources.
    """

    config_file: Path | None = None
    overrides: dict[str, Any] = field(default_factory=dict)

    def with_overrides(self, **values: Any) -> dict[str, Any]:
        """Return the global overrides merged with command-specific ``values``."""

        return {**self.overrides, **values}


app = create_typer(
    name="rustdocstyle",
    help="Check Rust documentation comments against PEP 257 conventions.",
    invoke_without_command=True,
    no_args_is_help=False,
    add_completion=False,
)


def _print_version(value: bool) -> None:
    if value:
        typer.echo(f"rustdocstyle {__version__}")
        raise typer.Exit(code=EXIT_OK)


def _flag(enabled: bool, value: bool = True) -> bool | None:
    """Return ``value`` when a switch was given so unset switches defer to config files."""

    return value if enabled else None


def _settings(ctx: typer.Context) -> CLISettings:
    settings = ctx.find_root().obj
    return settings if isinstance(settings, CLISettings) else CLISettings()


def _load(project_root: Path, settings: CLISettings, **values: Any) -> Config:
    """Resolve configuration for ``project_root``.

    Raises:
        CLIError: If a configuration source is invalid.
    """

    try:
        result = load_config(project_root, settings.with_overrides(**values), config_file=settings.config_file)
    except ConfigError as exc:
        raise CLIError(f"Configuration invalid: {exc}") from exc
    if result.sources:
        LOGGER.debug("Configuration sources: %s", ", ".join(result.sources))
    return result.config


def _exit_code(summary: RunSummary, config: Config) -> int:
    if summary.failed_files:
        return EXIT_ERROR
    if summary.reported and not config.no_fail:
        return EXIT_VIOLATIONS
    return EXIT_OK


def run_check(paths: Sequence[Path], config: Config) -> int:
    """Check ``paths``, print their reports and return the process exit code.

    Args:
        paths: Rust files to check, in display order.
        config: Resolved configuration.

    Returns:
        int: ``2`` when any file failed, ``1`` when violations were shown
        and ``no_fail`` is off, otherwise ``0``.
    """

    checker = DocstringChecker(selection=config.rule_selection())
    reports = checker.check_paths(paths, jobs=config.jobs)
    console = get_console()
    emit_reports(console, reports, output_format=config.output_format, show_warnings=config.show_warnings)
    for report in reports:
        if report.failed:
            fail(f"Error processing {report.file}: {report.error}")
    summary = summarize(reports, show_warnings=config.show_warnings)
    LOGGER.info(
        "Checked %d file(s): %d error(s), %d warning(s)",
        summary.files,
        summary.errors,
        summary.warnings,
    )
    return _exit_code(summary, config)


def _finish(action: Callable[..., int], *args: Any) -> None:
    """Run ``action`` and translate its outcome into :class:`typer.Exit`."""

    try:
        code = action(*args)
    except CLIError as exc:
        fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    raise typer.Exit(code=code)


def _check_single(path: Path, settings: CLISettings) -> int:
    config = _load(Path.cwd(), settings)
    return run_check([path], config)


def _check_directory(directory: Path, settings: CLISettings, recursive: bool, no_gitignore: bool) -> int:
    config = _load(
        directory,
        settings,
        recursive=_flag(recursive),
        respect_gitignore=_flag(no_gitignore, False),
    )
    try:
        if config.recursive:
            files = collect_rust_files_recursive(
                directory,
                exclude=config.exclude,
                respect_gitignore=config.respect_gitignore,
            )
        else:
            files = collect_rust_files(directory)
    except DiscoveryError as exc:
        raise CLIError(str(exc)) from exc
    if not files:
        warn(f"No Rust files found in {directory}")
        return EXIT_OK
    LOGGER.info("Found %d Rust file(s) in %s", len(files), directory)
    return run_check(files, config)


@app.callback()
def main_callback(
    ctx: typer.Context,
    file: Annotated[
        Path | None,
        typer.Option("-f", "--file", help="Check a single Rust file (legacy mode)."),
    ] = None,
    warnings: Annotated[bool, typer.Option("-w", "--warnings", help="Show warnings in addition to errors.")] = False,
    output_format: Annotated[
        OutputFormat | None,
        typer.Option("--format", case_sensitive=False, help="Output format."),
    ] = None,
    no_fail: Annotated[bool, typer.Option("--no-fail", help="Exit with 0 even when violations are found.")] = False,
    verbose: Annotated[int, typer.Option("-v", "--verbose", count=True, help="Increase log verbosity.")] = 0,
    quiet: Annotated[bool, typer.Option("-q", "--quiet", help="Only log errors.")] = False,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Configuration file to use instead of project discovery."),
    ] = None,
    jobs: Annotated[int | None, typer.Option("-j", "--jobs", min=1, help="Number of files checked in parallel.")] = None,
    version: Annotated[
        bool,
        typer.Option("--version", callback=_print_version, is_eager=True, help="Show the version and exit."),
    ] = False,
) -> None:
    """Check Rust documentation comments against PEP 257 conventions."""

    del version
    configure_logging(verbose, quiet=quiet)
    settings = CLISettings(
        config_file=config_file,
        overrides={
            "show_warnings": _flag(warnings),
            "output_format": output_format,
            "no_fail": _flag(no_fail),
            "jobs": jobs,
        },
    )
    ctx.obj = settings
    if ctx.invoked_subcommand:
        return
    if file is None:
        fail(NO_INPUT_MESSAGE)
        raise typer.Exit(code=EXIT_VIOLATIONS)
    _finish(_check_single, file, settings)


@app.command("check")
def check_command(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Rust source file to check.")],
) -> None:
    """Check a single Rust file."""

    _finish(_check_single, file, _settings(ctx))


@app.command("check-dir")
def check_dir_command(
    ctx: typer.Context,
    directory: Annotated[Path, typer.Argument(help="Directory containing Rust files.")],
    recursive: Annotated[bool, typer.Option("-r", "--recursive", help="Descend into subdirectories.")] = False,
    no_gitignore: Annotated[
        bool,
        typer.Option("--no-gitignore", help="Check files even when git ignores them."),
    ] = False,
) -> None:
    """Check every Rust file in a directory.

    Args:
        ctx: Typer context carrying the global options.
        directory: Directory to scan.
        recursive: Walk subdirectories as well.
        no_gitignore: Disable git ignore filtering during recursive walks.
    """

    _finish(_check_directory, directory, _settings(ctx), recursive, no_gitignore)


@app.command("rules")
def rules_command() -> None:
    """List the rule catalog."""

    table = Table(show_header=True, header_style=None, box=None, pad_edge=False)
    table.add_column("Code", no_wrap=True)
    table.add_column("Severity", no_wrap=True)
    table.add_column("Summary")
    for rule in RULES:
        table.add_row(Text(rule.code), Text(rule.severity.value), Text(rule.summary))
    get_console().print(table)


def main() -> None:
    """Run the ``rustdocstyle`` console script."""

    app()


__all__ = ["CLIError", "CLISettings", "app", "main", "run_check"]
