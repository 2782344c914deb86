# xistream:header:start
#
#   project      : XIStream
#   file         : test_locations.py
#   file_relpath : tests/resources/test_locations.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Tests for location normalization, resolution and fetching."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from tests.conftest import make_config, parametrize, write_xml
from xistream.errors import IncludeOpenError
from xistream.resources import (
    SourceOpener,
    UnsupportedSchemeError,
    fetch_location,
    has_scheme,
    location_to_path,
    resolve_location,
    to_location,
)

if TYPE_CHECKING:
    from pathlib import Path


@parametrize(
    ("raw", "expected"),
    [
        ("http://example.test/a.xml", True),
        ("file:///tmp/a.xml", True),
        ("a.xml", False),
        ("dir/a.xml", False),
        ("C:/docs/a.xml", False),
    ],
)
def test_has_scheme(raw: str, expected: bool) -> None:
    assert has_scheme(raw) is expected


def test_to_location_makes_paths_absolute(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    location = to_location("book.xml")
    assert location == (tmp_path / "book.xml").resolve().as_uri()
    assert to_location(tmp_path / "book.xml") == location


def test_to_location_keeps_uris() -> None:
    assert to_location("http://example.test/a.xml") == "http://example.test/a.xml"


@parametrize(
    ("base", "reference", "expected"),
    [
        ("http://example.test/docs/book.xml", "ch1.xml", "http://example.test/docs/ch1.xml"),
        (
            "http://example.test/docs/book.xml",
            "parts/ch1.xml",
            "http://example.test/docs/parts/ch1.xml",
        ),
        (
            "http://example.test/docs/parts/ch1.xml",
            "../shared/x.xml",
            "http://example.test/docs/shared/x.xml",
        ),
        ("http://example.test/docs/book.xml", "/top.xml", "http://example.test/top.xml"),
        ("file:///srv/docs/book.xml", "ch1.xml", "file:///srv/docs/ch1.xml"),
        ("file:///srv/docs/book.xml", "http://other.test/x.xml", "http://other.test/x.xml"),
    ],
)
def test_resolve_location(base: str, reference: str, expected: str) -> None:
    assert resolve_location(base, reference) == expected


def test_location_to_path_round_trip(tmp_path: Path) -> None:
    path = tmp_path / "with space" / "doc.xml"
    assert location_to_path(path.resolve().as_uri()) == path.resolve()


def test_location_to_path_rejects_other_schemes() -> None:
    with pytest.raises(UnsupportedSchemeError):
        location_to_path("http://example.test/a.xml")


def test_fetch_local_file(tmp_path: Path) -> None:
    path = write_xml(tmp_path / "a.xml", "<a/>")
    with fetch_location(to_location(path)) as stream:
        assert stream.read() == b"<a/>"


def test_fetch_rejects_disallowed_scheme() -> None:
    with pytest.raises(UnsupportedSchemeError):
        fetch_location("http://example.test/a.xml", allowed_schemes=("file",))


def test_fetch_rejects_unsupported_scheme() -> None:
    with pytest.raises(UnsupportedSchemeError):
        fetch_location("ftp://example.test/a.xml", allowed_schemes=("ftp",))


def test_opener_wraps_fetch_errors(tmp_path: Path) -> None:
    opener = SourceOpener(make_config())
    with pytest.raises(IncludeOpenError) as excinfo:
        opener.open(to_location(tmp_path / "missing.xml"))
    assert isinstance(excinfo.value.__cause__, FileNotFoundError)
    assert excinfo.value.element is None


def test_opener_honors_allowed_schemes(tmp_path: Path) -> None:
    path = write_xml(tmp_path / "a.xml", "<a/>")
    opener = SourceOpener(make_config(allowed_schemes=["http"]))
    with pytest.raises(IncludeOpenError) as excinfo:
        opener.open(to_location(path))
    assert isinstance(excinfo.value.__cause__, UnsupportedSchemeError)


def test_opener_returns_primed_reader(tmp_path: Path) -> None:
    path = write_xml(tmp_path / "a.xml", "<a/>")
    location = to_location(path)
    with SourceOpener().open(location) as reader:
        assert reader.system_id == location
        first = reader.peek()
        assert first is not None
        assert first.is_start_document
