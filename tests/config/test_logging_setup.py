# xistream:header:start
#
#   project      : XIStream
#   file         : test_logging_setup.py
#   file_relpath : tests/config/test_logging_setup.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Tests for log level parsing, the environment override and the TRACE logger."""

from __future__ import annotations

import logging as std_logging
from typing import TYPE_CHECKING

import pytest

from tests.conftest import fixture, parametrize
from xistream.config import logging

if TYPE_CHECKING:
    from collections.abc import Iterator


@fixture()
def restore_root_logging() -> Iterator[None]:
    """Reinstate the suite-wide TRACE logging after a test reconfigures it."""
    yield
    logging.setup_logging(level=logging.TRACE_LEVEL)


@parametrize(
    "value, expected",
    [
        ("TRACE", logging.TRACE_LEVEL),
        ("debug", std_logging.DEBUG),
        (" Warn ", std_logging.WARNING),
        ("fatal", std_logging.CRITICAL),
        ("15", 15),
        ("", None),
        (None, None),
        ("loud", None),
    ],
)
def test_parse_log_level(value: str | None, expected: int | None) -> None:
    assert logging.parse_log_level(value) == expected


def test_env_log_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(logging.LOG_LEVEL_ENV_VAR, "info")
    assert logging.resolve_env_log_level() == std_logging.INFO


@pytest.mark.usefixtures("restore_root_logging")
def test_setup_logging_uses_env_when_no_level(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(logging.LOG_LEVEL_ENV_VAR, "ERROR")
    logging.setup_logging()
    root = std_logging.getLogger()
    assert root.level == std_logging.ERROR
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, logging.ChalkFormatter)


@pytest.mark.usefixtures("restore_root_logging")
def test_setup_logging_defaults_to_critical() -> None:
    logging.setup_logging()
    assert std_logging.getLogger().level == std_logging.CRITICAL


def test_get_logger_supports_trace(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.get_logger("xistream.tests.trace")
    assert isinstance(logger, logging.XIStreamLogger)
    with caplog.at_level(logging.TRACE_LEVEL):
        logger.trace("lookahead %s", "decision")
    assert [r.levelname for r in caplog.records] == ["TRACE"]
    assert caplog.records[0].getMessage() == "lookahead decision"


def test_chalk_formatter_keeps_message_text() -> None:
    record = std_logging.LogRecord(
        "x", std_logging.WARNING, __file__, 1, "careful %s", ("now",), None
    )
    formatted: str = logging.ChalkFormatter(logging.LOG_FORMAT).format(record)
    assert "[WARNING] careful now" in formatted
