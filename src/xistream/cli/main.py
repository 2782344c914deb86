# xistream:header:start
#
#   project      : XIStream
#   file         : main.py
#   file_relpath : src/xistream/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Click entry point of the ``xistream`` command line tool.

Group-level options (verbosity, color) are resolved once and placed into
``ctx.obj`` together with the program-output console; subcommands read them
from there.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from xistream.cli.commands.check import check_command
from xistream.cli.commands.dump_config import dump_config_command
from xistream.cli.commands.events import events_command
from xistream.cli.commands.version import version_command
from xistream.cli.console import ClickConsole
from xistream.cli.options import (
    ColorMode,
    common_color_options,
    common_verbose_options,
    resolve_color_mode,
    resolve_verbosity,
)
from xistream.config.logging import get_logger, resolve_env_log_level, setup_logging
from xistream.constants import CLI_PROG_NAME

if TYPE_CHECKING:
    from xistream.cli.console_api import ConsoleLike

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Initialize shared state (verbosity, logging, color, console) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        color_mode (ColorMode | None): Explicit color mode from ``--color`` (or ``None``).
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    # Internal logging is configured from the environment only.
    level_env: int | None = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    effective_color_mode: ColorMode = (
        ColorMode.NEVER if no_color else (color_mode or ColorMode.AUTO)
    )
    enable_color: bool = resolve_color_mode(cli_mode=effective_color_mode, output_format=None)
    ctx.obj["color_enabled"] = enable_color
    ctx.color = enable_color

    ctx.obj["console"] = ClickConsole(enable_color=enable_color)


@click.group(
    cls=click.Group,
    name=CLI_PROG_NAME,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="XIStream: read XML as events with xi:include elements resolved.",
)
@common_verbose_options
@common_color_options
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    color_mode: ColorMode | None,
    no_color: bool,
) -> None:
    """Entry point for the XIStream CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        color_mode=color_mode,
        no_color=no_color,
    )
    console: ConsoleLike = ctx.obj["console"]

    if ctx.invoked_subcommand is None:
        console.print("Hint: use 'xistream events PATH' to print the merged event stream.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(events_command)

cli.add_command(check_command)

cli.add_command(dump_config_command)

if __name__ == "__main__":
    cli()
