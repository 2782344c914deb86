# xistream:header:start
#
#   project      : XIStream
#   file         : console.py
#   file_relpath : src/xistream/cli/console.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Console for user-facing program output.

Events, reports and error summaries go through `ClickConsole`; diagnostics go
through `logging` (see `xistream.config.logging`) and never mix with it.
"""

from __future__ import annotations

import sys
from typing import Any, TextIO

import click

from xistream.cli.console_api import ConsoleLike


class ClickConsole(ConsoleLike):
    """Program-output console backed by ``click.echo``.

    Args:
        enable_color (bool): If True, ANSI styles are emitted; otherwise output is plain.
        out (TextIO | None): Stream for standard output (defaults to ``sys.stdout``).
        err (TextIO | None): Stream for error output (defaults to ``sys.stderr``).
    """

    enable_color: bool
    out: TextIO
    err: TextIO

    def __init__(
        self,
        *,
        enable_color: bool = True,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ) -> None:
        self.enable_color = enable_color
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def print(self, text: str = "", *, nl: bool = True) -> None:
        """Write a message to stdout."""
        click.echo(text, nl=nl, file=self.out, color=self.enable_color)

    def error(self, text: str, *, nl: bool = True) -> None:
        """Write an error message to stderr."""
        click.secho(text, nl=nl, file=self.err, color=self.enable_color, fg="bright_red")

    def styled(self, text: str, **style_kwargs: Any) -> str:
        """Return ``text`` styled with ``click.style`` (unchanged if color is disabled)."""
        if not self.enable_color:
            return text
        return click.style(text, **style_kwargs)
