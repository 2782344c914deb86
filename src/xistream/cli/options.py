# xistream:header:start
#
#   project      : XIStream
#   file         : options.py
#   file_relpath : src/xistream/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Common CLI option utilities.

This module centralizes reusable options (verbosity, color, configuration,
reader settings, output format) and their resolution logic, so the group and
the commands can stay thin. The helpers here are Click-aware.
"""

from __future__ import annotations

import os
import sys
from enum import Enum
from typing import Callable, ParamSpec, TypeVar

import click

from xistream.cli.cli_types import EnumChoiceParam, OutputFormat
from xistream.cli.errors import XIStreamUsageError

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from the ``-v``/``-q`` counts.

    Args:
        verbose_count (int): Number of times ``-v`` was passed.
        quiet_count (int): Number of times ``-q`` was passed.

    Returns:
        int: ``-1`` (quiet), ``0`` (default) or the ``-v`` count capped at 2.

    Raises:
        XIStreamUsageError: If both ``-v`` and ``-q`` are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise XIStreamUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if quiet_count > 0:
        return -1
    return min(verbose_count, 2)


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` (counted, mutually exclusive)."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase verbosity. Specify up to twice for more detail.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Suppress non-essential output.",
    )(f)
    return f


class ColorMode(str, Enum):
    """User intent for colorized terminal output."""

    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


def resolve_color_mode(
    *,
    cli_mode: ColorMode | None,
    output_format: str | None,
    stdout_isatty: bool | None = None,
) -> bool:
    """Determine whether color output should be enabled.

    Args:
        cli_mode (ColorMode | None): Explicit color mode from the CLI.
        output_format (str | None): Output format, e.g. ``"json"``.
        stdout_isatty (bool | None): Whether stdout is a TTY; auto-detected if None.

    Returns:
        bool: True if color output should be enabled.

    Behavior:
        Machine formats (JSON/NDJSON) are never colored. Otherwise ``--color``
        wins, then ``FORCE_COLOR`` and ``NO_COLOR``, then TTY detection.
    """
    if output_format and output_format.lower() in {"json", "ndjson"}:
        return False
    if cli_mode == ColorMode.ALWAYS:
        return True
    if cli_mode == ColorMode.NEVER:
        return False
    force_color: str | None = os.getenv("FORCE_COLOR")
    if force_color and force_color != "0":
        return True
    if os.getenv("NO_COLOR") is not None:
        return False
    if stdout_isatty is None:
        try:
            stdout_isatty = sys.stdout.isatty()
        except (AttributeError, ValueError):
            stdout_isatty = False
    return bool(stdout_isatty)


def common_color_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--color`` (auto/always/never) and ``--no-color``."""
    f = click.option(
        "--color",
        "color_mode",
        type=EnumChoiceParam(ColorMode),
        default=None,
        help="Color output: auto (default), always, or never.",
    )(f)
    f = click.option(
        "--no-color",
        "no_color",
        is_flag=True,
        help="Disable color output (equivalent to --color=never).",
    )(f)
    return f


def common_config_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--config FILE`` (repeatable) and ``--no-config``."""
    f = click.option(
        "--no-config",
        "no_config",
        is_flag=True,
        help="Ignore discovered config files (only use defaults and --config files).",
    )(f)
    f = click.option(
        "--config",
        "config_paths",
        multiple=True,
        metavar="FILE",
        type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True),
        help="Additional config file(s) to load and merge.",
    )(f)
    return f


def common_reader_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add the reader setting overrides: ``--max-depth``, ``--chunk-size``, ``--timeout``."""
    f = click.option(
        "--max-depth",
        "max_include_depth",
        type=click.IntRange(min=0),
        default=None,
        help="Maximum include nesting depth (0 forbids includes).",
    )(f)
    f = click.option(
        "--chunk-size",
        "chunk_size",
        type=click.IntRange(min=1),
        default=None,
        help="Number of bytes fed to the parser at a time.",
    )(f)
    f = click.option(
        "--timeout",
        "fetch_timeout",
        type=click.FloatRange(min=0, min_open=True),
        default=None,
        help="Network timeout in seconds for http(s) includes.",
    )(f)
    return f


def common_format_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``--format`` (default/json/ndjson)."""
    return click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)
