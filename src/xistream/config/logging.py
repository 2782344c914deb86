# xistream:header:start
#
#   project      : XIStream
#   file         : logging.py
#   file_relpath : src/xistream/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""XIStream logging with a TRACE level and colored output.

This module extends the standard logging module with a custom TRACE level
(below DEBUG), a logger class exposing ``trace()``, and a `yachalk`-based
formatter. The reader logs context-stack transitions at DEBUG and individual
lookahead decisions at TRACE.

Log records go to ``stderr`` so that program output on ``stdout`` (for example
the event listing of ``xistream events``) stays machine-readable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Mapping

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "XISTREAM_LOG_LEVEL"


class XIStreamLogger(logging.Logger):
    """Logger class with support for a TRACE log level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log 'msg % args' with severity 'TRACE'.

        Args:
            msg (object): The message to be logged.
            *args (object): Variable length argument list for the message.
            extra (Mapping[str, object] | None): Optional dictionary of extra information to pass
                to the logger.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(
                TRACE_LEVEL,
                msg=msg,
                args=args,
                extra=extra,
                stacklevel=2,
            )


if not hasattr(logging, "TRACE"):
    logging.addLevelName(TRACE_LEVEL, "TRACE")
    logging.TRACE = TRACE_LEVEL  # type: ignore

logging.setLoggerClass(XIStreamLogger)


LOG_FORMAT = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT = "[%(levelname)s] [%(filename)s:%(lineno)d] [%(funcName)s] %(message)s"


class ChalkFormatter(logging.Formatter):
    """Formatter that colors log records according to their severity."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the specified record with colors based on log level.

        Args:
            record (logging.LogRecord): The LogRecord to be formatted.

        Returns:
            str: The colorized formatted log message.
        """
        level = record.levelno
        message = super().format(record)

        if level >= logging.CRITICAL:
            return chalk.red_bright(message)
        if level >= logging.ERROR:
            return chalk.red(message)
        if level >= logging.WARNING:
            return chalk.yellow(message)
        if level >= logging.INFO:
            return chalk.green(message)
        if level >= logging.DEBUG:
            return chalk.gray(message)
        if level >= TRACE_LEVEL:
            return chalk.blue(message)
        return chalk.dim.red(message)


_LEVEL_NAMES: Final[dict[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


def parse_log_level(value: str | None) -> int | None:
    """Translate a level name (``"TRACE"``, ``"debug"``) or number (``"10"``) to an int.

    Args:
        value (str | None): Level name or numeric string.

    Returns:
        int | None: The numeric level, or None if ``value`` is empty or unknown.
    """
    if not value:
        return None
    v = value.strip().upper()
    if v.isdigit():
        return int(v)
    return _LEVEL_NAMES.get(v)


def resolve_env_log_level() -> int | None:
    """Return a logging level from the ``XISTREAM_LOG_LEVEL`` environment variable, or None."""
    return parse_log_level(os.environ.get(LOG_LEVEL_ENV_VAR))


def setup_logging(level: int | None = None) -> None:
    """Configure the root logger with a specified log level and colored output.

    If ``level`` is None, the environment is consulted via `resolve_env_log_level`.
    Default is CRITICAL when unspecified.

    Args:
        level (int | None): Explicit logging level.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to prevent duplicate log messages
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    formatter = ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)


def get_logger(name: str) -> XIStreamLogger:
    """Retrieve an XIStreamLogger instance with the specified name.

    Args:
        name (str): The name of the logger.

    Returns:
        XIStreamLogger: The logger.
    """
    logger = logging.getLogger(name)
    return cast("XIStreamLogger", logger)
