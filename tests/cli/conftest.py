# xistream:header:start
#
#   project      : XIStream
#   file         : conftest.py
#   file_relpath : tests/cli/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""CLI test helpers for running XIStream in a controlled working directory.

`run_cli_in()` changes the process working directory to the given ``tmp_path``
before invoking the Click CLI, so relative document paths and upward config
discovery are evaluated against the temporary test directory.

The CLI reconfigures the root logger on every invocation (level from the
environment, handler on the runner's captured stderr); the autouse fixture
below restores the suite-wide TRACE logging afterwards.
"""

from __future__ import annotations

import json
import os
from typing import TYPE_CHECKING, Any

import pytest
from click.testing import CliRunner, Result

from xistream.cli.exit_codes import ExitCode
from xistream.cli.main import cli
from xistream.config import logging

if TYPE_CHECKING:
    from collections.abc import Iterator, Sequence
    from pathlib import Path


@pytest.fixture(autouse=True)
def plain_cli_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Disable forced color and restore logging after each CLI invocation."""
    monkeypatch.delenv("FORCE_COLOR", raising=False)
    yield
    logging.setup_logging(level=logging.TRACE_LEVEL)


def run_cli_in(tmp_path: Path, argv: str | Sequence[str] | None) -> Result:
    """Invoke the CLI with ``tmp_path`` as the working directory.

    Args:
        tmp_path (Path): Pytest-provided temporary directory used as the CWD for the
            command invocation.
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["events", "book.xml"]``.

    Returns:
        Result: The `click.testing.Result` produced by `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    cwd: str = os.getcwd()
    try:
        os.chdir(tmp_path)
        return runner.invoke(cli, argv)
    finally:
        os.chdir(cwd)


def run_cli(argv: str | Sequence[str] | None) -> Result:
    """Invoke the CLI without changing the working directory.

    Use this helper when the test does not depend on relative paths (``--help``,
    ``version``) or when all provided paths are absolute.

    Args:
        argv (str | Sequence[str] | None): CLI argument vector, e.g. ``["--help"]``.

    Returns:
        Result: The `click.testing.Result` produced by `click.testing.CliRunner.invoke`.
    """
    runner = CliRunner()
    return runner.invoke(cli, argv)


def output_json(result: Result) -> Any:
    """Parse the whole output of a successful machine-format run."""
    return json.loads(result.output)


def output_ndjson(result: Result) -> list[Any]:
    """Parse the output of a successful NDJSON run, one object per line."""
    return [json.loads(line) for line in result.output.splitlines() if line.strip()]


def assert_SUCCESS(result: Result) -> None:
    """Assert that the command exited successfully (code 0).

    Args:
        result (Result): The Result object returned by `run_cli` or `run_cli_in`.
    """
    assert result.exit_code == ExitCode.SUCCESS, result.output


def assert_USAGE_ERROR(result: Result) -> None:
    """Assert that the command exited with USAGE_ERROR (code 64)."""
    assert result.exit_code == ExitCode.USAGE_ERROR, result.output


def assert_DATA_ERROR(result: Result) -> None:
    """Assert that the command exited with DATA_ERROR (code 65)."""
    assert result.exit_code == ExitCode.DATA_ERROR, result.output


def assert_FILE_NOT_FOUND(result: Result) -> None:
    """Assert that the command exited with FILE_NOT_FOUND (code 66)."""
    assert result.exit_code == ExitCode.FILE_NOT_FOUND, result.output


def assert_CLICK_USAGE(result: Result) -> None:
    """Assert that Click itself rejected the invocation (code 2)."""
    assert result.exit_code == 2, result.output
