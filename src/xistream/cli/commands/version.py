# xistream:header:start
#
#   project      : XIStream
#   file         : version.py
#   file_relpath : src/xistream/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""XIStream `version` command.

Prints the XIStream version as installed in the active Python environment.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import click

from xistream.cli.cli_types import OutputFormat
from xistream.cli.options import common_format_options
from xistream.constants import XISTREAM_VERSION

if TYPE_CHECKING:
    from xistream.cli.console_api import ConsoleLike


@click.command(
    name="version",
    help="Show the current version of XIStream.",
)
@common_format_options
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of XIStream.

    Args:
        output_format (OutputFormat | None): Optional output format.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = int(ctx.obj.get("verbosity_level", 0))

    fmt: OutputFormat = output_format or OutputFormat.DEFAULT
    if fmt in (OutputFormat.JSON, OutputFormat.NDJSON):
        console.print(json.dumps({"version": XISTREAM_VERSION}))
    elif vlevel > 0:
        console.print(console.styled("XIStream version:\n", bold=True, underline=True))
        console.print(f"    {console.styled(XISTREAM_VERSION, bold=True)}")
    else:
        console.print(console.styled(XISTREAM_VERSION, bold=True))
