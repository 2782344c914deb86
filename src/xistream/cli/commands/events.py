# xistream:header:start
#
#   project      : XIStream
#   file         : events.py
#   file_relpath : src/xistream/cli/commands/events.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""XIStream `events` command.

Reads a document with its ``xi:include`` elements resolved and prints the
merged event stream, one event per line (default), as a JSON array (``json``)
or as one JSON object per line (``ndjson``).

Examples:
    xistream events book.xml
    xistream events --format ndjson --skip-whitespace book.xml
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from xistream.cli.cli_types import OutputFormat
from xistream.cli.config_resolver import resolve_config
from xistream.cli.errors import cli_error_for
from xistream.cli.options import (
    common_config_options,
    common_format_options,
    common_reader_options,
)
from xistream.cli.render import event_to_dict, event_to_text
from xistream.config.logging import get_logger
from xistream.errors import ContextStackError, XIStreamError
from xistream.reader import IncludeAwareEventReader
from xistream.stax.events import Characters

if TYPE_CHECKING:
    from xistream.cli.console_api import ConsoleLike
    from xistream.config.logging import XIStreamLogger
    from xistream.config.model import ReaderConfig
    from xistream.stax.events import XMLEvent

logger: XIStreamLogger = get_logger(__name__)


def keep_event(event: XMLEvent, *, skip_whitespace: bool, skip_pi: bool) -> bool:
    """Return True if ``event`` survives the ``--skip-*`` filters."""
    if skip_whitespace and isinstance(event, Characters) and event.is_whitespace:
        return False
    if skip_pi and event.is_processing_instruction:
        return False
    return True


@click.command(
    name="events",
    help="Print the event stream of a document with its xi:include elements resolved.",
)
@click.argument("source", metavar="PATH_OR_URI")
@common_format_options
@click.option(
    "--skip-whitespace",
    is_flag=True,
    help="Omit whitespace-only text events.",
)
@click.option(
    "--skip-pi",
    is_flag=True,
    help="Omit processing instructions.",
)
@common_config_options
@common_reader_options
def events_command(
    *,
    source: str,
    output_format: OutputFormat | None,
    skip_whitespace: bool,
    skip_pi: bool,
    config_paths: tuple[str, ...],
    no_config: bool,
    max_include_depth: int | None,
    chunk_size: int | None,
    fetch_timeout: float | None,
) -> None:
    """Print the merged event stream of ``source``.

    Args:
        source (str): Path or URI of the root document.
        output_format (OutputFormat | None): Output format (default text if None).
        skip_whitespace (bool): Omit whitespace-only text events.
        skip_pi (bool): Omit processing instructions.
        config_paths (tuple[str, ...]): Extra config files.
        no_config (bool): Skip config discovery.
        max_include_depth (int | None): Override of ``max_include_depth``.
        chunk_size (int | None): Override of ``chunk_size``.
        fetch_timeout (float | None): Override of ``fetch_timeout``.
    """
    ctx = click.get_current_context()
    ctx.ensure_object(dict)
    console: ConsoleLike = ctx.obj["console"]
    verbosity: int = int(ctx.obj.get("verbosity_level", 0))
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

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

    with_location: bool = verbosity > 0
    collected: list[dict[str, Any]] = []
    try:
        with IncludeAwareEventReader(source, config) as reader:
            for event in reader:
                if not keep_event(event, skip_whitespace=skip_whitespace, skip_pi=skip_pi):
                    continue
                if fmt == OutputFormat.JSON:
                    collected.append(event_to_dict(event, with_location=with_location))
                elif fmt == OutputFormat.NDJSON:
                    console.print(
                        json.dumps(event_to_dict(event, with_location=with_location))
                    )
                else:
                    console.print(event_to_text(event, console, with_location=with_location))
    except (XIStreamError, ContextStackError) as exc:
        logger.debug("Reading %s failed: %r", source, exc)
        raise cli_error_for(exc) from exc

    if fmt == OutputFormat.JSON:
        console.print(json.dumps(collected, indent=2))
