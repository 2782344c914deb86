# xistream:header:start
#
#   project      : XIStream
#   file         : test_version_command.py
#   file_relpath : tests/cli/test_version_command.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""CLI tests: `version` command and group-level behavior."""

from __future__ import annotations

import json

from tests.cli.conftest import assert_SUCCESS, assert_USAGE_ERROR, run_cli
from tests.conftest import mark_cli, parametrize
from xistream.constants import XISTREAM_VERSION


@mark_cli
def test_version_outputs_installed_version() -> None:
    result = run_cli(["--no-color", "version"])
    assert_SUCCESS(result)
    assert result.output.strip() == XISTREAM_VERSION


@mark_cli
@parametrize("fmt", ["json", "ndjson"])
def test_version_machine_output(fmt: str) -> None:
    result = run_cli(["version", "--format", fmt])
    assert_SUCCESS(result)
    assert json.loads(result.output) == {"version": XISTREAM_VERSION}


@mark_cli
def test_version_verbose_has_heading() -> None:
    result = run_cli(["--no-color", "-v", "version"])
    assert_SUCCESS(result)
    lines: list[str] = [line for line in result.output.splitlines() if line.strip()]
    assert lines == ["XIStream version:", f"    {XISTREAM_VERSION}"]


@mark_cli
def test_group_without_command_prints_hint_and_help() -> None:
    result = run_cli([])
    assert_SUCCESS(result)
    assert result.output.startswith("Hint: use 'xistream events PATH'")
    assert "Commands:" in result.output
    for name in ("events", "check", "dump-config", "version"):
        assert name in result.output


@mark_cli
def test_verbose_and_quiet_are_mutually_exclusive() -> None:
    result = run_cli(["-v", "-q", "version"])
    assert_USAGE_ERROR(result)
    assert "mutually exclusive" in result.output
