# xistream:header:start
#
#   project      : XIStream
#   file         : errors.py
#   file_relpath : src/xistream/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Exceptions for the XIStream CLI.

Commands raise these (usually via `cli_error_for`) to terminate with a
standardized message and exit code. When a project console is available in the
Click context, `XIStreamCliError.show` uses it; otherwise Click's default error
display is used.
"""

from __future__ import annotations

from typing import IO, Any

import click

from xistream.cli.exit_codes import ExitCode
from xistream.errors import (
    ContextStackError,
    IncludeDepthError,
    IncludeOpenError,
    XIStreamError,
    XMLStreamError,
)


class XIStreamCliError(click.ClickException):
    """Base class for all XIStream CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:  # pragma: no cover - trivial
        """Return the plain error message text (color is applied in `show`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:  # pragma: no cover - Click prints errors
        """Display the error using the project console if available."""
        ctx: click.Context | None = click.get_current_context(silent=True)
        if ctx is not None and isinstance(ctx.obj, dict):
            console = ctx.obj.get("console")
            if console is not None:
                console.error(console.styled(self.format_message(), fg="bright_red"))
                return
        super().show(file)


class XIStreamUsageError(XIStreamCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class XIStreamDataError(XIStreamCliError):
    """Error for malformed XML or invalid include elements."""

    exit_code = ExitCode.DATA_ERROR


class XIStreamFileNotFoundError(XIStreamCliError):
    """Error when a document (root or included) cannot be opened."""

    exit_code = ExitCode.FILE_NOT_FOUND


class XIStreamInternalError(XIStreamCliError):
    """Error for reader consistency failures."""

    exit_code = ExitCode.INTERNAL_ERROR


class XIStreamUnexpectedError(XIStreamCliError):
    """Error for unhandled/unknown errors (last resort)."""

    exit_code = ExitCode.UNEXPECTED_ERROR


def cli_error_for(exc: Exception) -> XIStreamCliError:
    """Map a reader exception onto the CLI error carrying the matching exit code.

    Mapping:
        - `IncludeDepthError` → `XIStreamDataError` (65)
        - `IncludeOpenError` caused by malformed XML → `XIStreamDataError` (65)
        - any other `IncludeOpenError` → `XIStreamFileNotFoundError` (66)
        - any other `XIStreamError` → `XIStreamDataError` (65)
        - `ContextStackError` → `XIStreamInternalError` (70)
        - anything else → `XIStreamUnexpectedError` (255)

    Args:
        exc (Exception): The exception raised while reading.

    Returns:
        XIStreamCliError: The CLI error to raise (the caller chains it).
    """
    if isinstance(exc, IncludeDepthError):
        return XIStreamDataError(str(exc))
    if isinstance(exc, IncludeOpenError):
        if isinstance(exc.__cause__, XMLStreamError):
            return XIStreamDataError(str(exc))
        return XIStreamFileNotFoundError(str(exc))
    if isinstance(exc, XIStreamError):
        return XIStreamDataError(str(exc))
    if isinstance(exc, ContextStackError):
        return XIStreamInternalError(f"Internal error: {exc}")
    return XIStreamUnexpectedError(f"Unexpected error: {exc}")
