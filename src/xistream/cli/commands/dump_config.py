# xistream:header:start
#
#   project      : XIStream
#   file         : dump_config.py
#   file_relpath : src/xistream/cli/commands/dump_config.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""XIStream `dump-config` command.

Prints the effective reader configuration (defaults, discovered files,
``--config`` files and CLI overrides merged) as TOML. The output is a valid
``xistream.toml``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from xistream.cli.config_resolver import resolve_config
from xistream.cli.options import common_config_options, common_reader_options

if TYPE_CHECKING:
    from xistream.cli.console_api import ConsoleLike
    from xistream.config.model import ReaderConfig


@click.command(
    name="dump-config",
    help="Print the effective reader configuration as TOML.",
)
@click.argument("source", metavar="[PATH_OR_URI]", required=False)
@common_config_options
@common_reader_options
def dump_config_command(
    *,
    source: str | None,
    config_paths: tuple[str, ...],
    no_config: bool,
    max_include_depth: int | None,
    chunk_size: int | None,
    fetch_timeout: float | None,
) -> None:
    """Print the configuration that would be used to read ``source``."""
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    vlevel: int = int(ctx.obj.get("verbosity_level", 0))

    config: ReaderConfig = resolve_config(
        source=source,
        config_paths=config_paths,
        no_config=no_config,
        overrides={
            "max_include_depth": max_include_depth,
            "chunk_size": chunk_size,
            "fetch_timeout": fetch_timeout,
        },
    )
    if vlevel > 0:
        for origin in config.config_files:
            console.print(f"# source: {origin}")
    console.print(config.to_toml().rstrip("\n"))
