# xistream:header:start
#
#   project      : XIStream
#   file         : check.py
#   file_relpath : src/xistream/cli/commands/check.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""XIStream `check` command.

Reads each document to the end with its includes resolved and reports, per
document, whether it could be read, how many includes were resolved and the
deepest nesting reached. All documents are checked even if one fails; the exit
code is the one of the first failure.

Examples:
    xistream check book.xml manual.xml
    xistream check --format json book.xml
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import click

from xistream.cli.cli_types import OutputFormat
from xistream.cli.config_resolver import resolve_config
from xistream.cli.errors import cli_error_for
from xistream.cli.exit_codes import ExitCode
from xistream.cli.options import (
    common_config_options,
    common_format_options,
    common_reader_options,
)
from xistream.config.logging import get_logger
from xistream.errors import ContextStackError, XIStreamError
from xistream.reader import IncludeAwareEventReader

if TYPE_CHECKING:
    from xistream.cli.console_api import ConsoleLike
    from xistream.config.logging import XIStreamLogger
    from xistream.config.model import ReaderConfig

logger: XIStreamLogger = get_logger(__name__)


@dataclass(frozen=True)
class CheckResult:
    """Outcome of reading one document.

    Attributes:
        source (str): The document as given on the command line.
        exit_code (ExitCode): ``SUCCESS`` or the code mapped from the failure.
        events (int): Number of merged events read.
        includes (int): Number of includes resolved.
        max_depth (int): Deepest stack depth reached (1 = no includes).
        message (str | None): Failure message, if any.
    """

    source: str
    exit_code: ExitCode
    events: int = 0
    includes: int = 0
    max_depth: int = 1
    message: str | None = None

    @property
    def ok(self) -> bool:
        """True if the document was read without error."""
        return self.exit_code == ExitCode.SUCCESS

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable mapping."""
        return {
            "source": self.source,
            "ok": self.ok,
            "exit_code": int(self.exit_code),
            "events": self.events,
            "includes": self.includes,
            "max_depth": self.max_depth,
            "message": self.message,
        }


def check_source(source: str, config: ReaderConfig) -> CheckResult:
    """Read ``source`` to the end and summarize the outcome."""
    events: int = 0
    reader: IncludeAwareEventReader | None = None
    try:
        reader = IncludeAwareEventReader(source, config)
        with reader:
            for _event in reader:
                events += 1
    except (XIStreamError, ContextStackError) as exc:
        logger.debug("Checking %s failed: %r", source, exc)
        return CheckResult(
            source=source,
            exit_code=ExitCode(cli_error_for(exc).exit_code),
            events=events,
            includes=reader.include_count if reader is not None else 0,
            max_depth=reader.max_depth if reader is not None else 1,
            message=str(exc),
        )
    return CheckResult(
        source=source,
        exit_code=ExitCode.SUCCESS,
        events=events,
        includes=reader.include_count,
        max_depth=reader.max_depth,
    )


def _render_result(result: CheckResult, console: ConsoleLike, verbosity: int) -> None:
    if result.ok:
        if verbosity < 0:
            return
        status: str = console.styled("OK  ", fg="green", bold=True)
        console.print(
            f"{status} {result.source} "
            f"(includes: {result.includes}, max depth: {result.max_depth})"
        )
        if verbosity > 0:
            console.print(f"     {result.events} event(s)")
    else:
        status = console.styled("FAIL", fg="bright_red", bold=True)
        console.print(f"{status} {result.source}: {result.message}")


@click.command(
    name="check",
    help="Read documents to the end, resolving includes, and report any failure.",
)
@click.argument("sources", metavar="PATH_OR_URI...", nargs=-1, required=True)
@common_format_options
@common_config_options
@common_reader_options
def check_command(
    *,
    sources: tuple[str, ...],
    output_format: OutputFormat | None,
    config_paths: tuple[str, ...],
    no_config: bool,
    max_include_depth: int | None,
    chunk_size: int | None,
    fetch_timeout: float | None,
) -> None:
    """Check that every source can be read with its includes resolved.

    Args:
        sources (tuple[str, ...]): Paths or URIs of the documents.
        output_format (OutputFormat | None): Output format (default text if None).
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
        source=sources[0],
        config_paths=config_paths,
        no_config=no_config,
        overrides={
            "max_include_depth": max_include_depth,
            "chunk_size": chunk_size,
            "fetch_timeout": fetch_timeout,
        },
    )

    results: list[CheckResult] = []
    for source in sources:
        result: CheckResult = check_source(source, config)
        results.append(result)
        if fmt == OutputFormat.NDJSON:
            console.print(json.dumps(result.to_dict()))
        elif fmt == OutputFormat.DEFAULT:
            _render_result(result, console, verbosity)

    if fmt == OutputFormat.JSON:
        console.print(json.dumps([r.to_dict() for r in results], indent=2))

    failures: list[CheckResult] = [r for r in results if not r.ok]
    if fmt == OutputFormat.DEFAULT and verbosity >= 0 and len(results) > 1:
        console.print(f"{len(results) - len(failures)} of {len(results)} document(s) OK")
    if failures:
        ctx.exit(int(failures[0].exit_code))
