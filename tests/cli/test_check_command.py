# xistream:header:start
#
#   project      : XIStream
#   file         : test_check_command.py
#   file_relpath : tests/cli/test_check_command.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""CLI tests: `check` command summaries and exit codes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from tests.cli.conftest import (
    assert_CLICK_USAGE,
    assert_DATA_ERROR,
    assert_FILE_NOT_FOUND,
    assert_SUCCESS,
    output_json,
    output_ndjson,
    run_cli_in,
)
from tests.conftest import include, make_config, mark_cli, write_xml
from xistream.cli.commands.check import CheckResult, check_source
from xistream.cli.exit_codes import ExitCode

if TYPE_CHECKING:
    from pathlib import Path

    from click.testing import Result


def _nested(tmp_path: Path) -> None:
    """Write ``top.xml`` → ``mid.xml`` → ``leaf.xml`` (two levels of inclusion)."""
    write_xml(tmp_path / "leaf.xml", "<leaf/>")
    write_xml(tmp_path / "mid.xml", f"<mid>{include('leaf.xml')}</mid>")
    write_xml(tmp_path / "top.xml", f"<top>{include('mid.xml')}{include('leaf.xml')}</top>")


def test_check_source_reports_statistics(tmp_path: Path) -> None:
    _nested(tmp_path)
    result: CheckResult = check_source(str(tmp_path / "top.xml"), make_config())
    assert result.ok
    assert result.includes == 3
    assert result.max_depth == 3
    assert result.message is None
    # Document markers of the root plus start/end events of four elements.
    assert result.events == 2 + 2 * 4


def test_check_source_reports_failure(tmp_path: Path) -> None:
    _nested(tmp_path)
    result: CheckResult = check_source(str(tmp_path / "top.xml"), make_config(max_include_depth=1))
    assert not result.ok
    assert result.exit_code == ExitCode.DATA_ERROR
    assert result.includes == 1
    assert result.message is not None
    assert "maximum include depth" in result.message


@mark_cli
def test_check_single_document_text(tmp_path: Path) -> None:
    _nested(tmp_path)
    result: Result = run_cli_in(tmp_path, ["--no-color", "check", "top.xml"])
    assert_SUCCESS(result)
    assert result.output.strip() == "OK   top.xml (includes: 3, max depth: 3)"


@mark_cli
def test_check_quiet_prints_nothing_on_success(tmp_path: Path) -> None:
    _nested(tmp_path)
    result: Result = run_cli_in(tmp_path, ["-q", "check", "top.xml", "leaf.xml"])
    assert_SUCCESS(result)
    assert result.output == ""


@mark_cli
def test_check_continues_after_failure_and_exits_with_first_code(tmp_path: Path) -> None:
    """All documents are checked; the exit code is the one of the first failure."""
    _nested(tmp_path)
    write_xml(tmp_path / "broken.xml", f"<doc>{include('absent.xml')}</doc>")
    write_xml(tmp_path / "bad.xml", "<doc><a></doc>")

    result: Result = run_cli_in(
        tmp_path, ["--no-color", "check", "broken.xml", "top.xml", "bad.xml"]
    )
    assert_FILE_NOT_FOUND(result)
    lines: list[str] = result.output.splitlines()
    assert lines[0].startswith("FAIL broken.xml:")
    assert "absent.xml" in lines[0]
    assert lines[1].startswith("OK   top.xml")
    assert lines[2].startswith("FAIL bad.xml:")
    assert lines[-1] == "1 of 3 document(s) OK"


@mark_cli
def test_check_json_output(tmp_path: Path) -> None:
    _nested(tmp_path)
    write_xml(tmp_path / "bad.xml", "<doc><a></doc>")

    result: Result = run_cli_in(tmp_path, ["check", "--format", "json", "top.xml", "bad.xml"])
    assert_DATA_ERROR(result)
    reports: list[dict[str, Any]] = output_json(result)
    assert [r["source"] for r in reports] == ["top.xml", "bad.xml"]
    assert reports[0]["ok"] is True
    assert reports[0]["includes"] == 3
    assert reports[1]["ok"] is False
    assert reports[1]["exit_code"] == int(ExitCode.DATA_ERROR)


@mark_cli
def test_check_ndjson_output(tmp_path: Path) -> None:
    _nested(tmp_path)
    result: Result = run_cli_in(
        tmp_path, ["check", "--format", "ndjson", "top.xml", "mid.xml", "leaf.xml"]
    )
    assert_SUCCESS(result)
    reports: list[Any] = output_ndjson(result)
    assert [(r["source"], r["max_depth"]) for r in reports] == [
        ("top.xml", 3),
        ("mid.xml", 2),
        ("leaf.xml", 1),
    ]


@mark_cli
def test_check_requires_a_source(tmp_path: Path) -> None:
    assert_CLICK_USAGE(run_cli_in(tmp_path, ["check"]))
