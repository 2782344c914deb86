# xistream:header:start
#
#   project      : XIStream
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Pytest configuration and shared helpers for the XIStream test suite.

Notes:
    Tests build reader settings with `make_config` (a `MutableReaderConfig`
    edited then frozen). Do **not** mutate a frozen `ReaderConfig`; call
    `ReaderConfig.thaw()` and `freeze()` again instead.

    Documents are either real files written under ``tmp_path`` (see `write_xml`)
    or in-memory documents served by a `MemoryFetcher` under
    ``http://example.test/`` locations, which resolve like any hierarchical URI.
"""

from __future__ import annotations

import io
import textwrap
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from xistream.config import MutableReaderConfig, logging
from xistream.stax.events import (
    Characters,
    Comment,
    EndElement,
    ProcessingInstruction,
    StartElement,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping
    from pathlib import Path

    from xistream.config import ReaderConfig
    from xistream.stax.base import EventReaderBase
    from xistream.stax.events import XMLEvent

F = TypeVar("F", bound=Callable[..., object])

DecoratorType = Callable[[F], F]

XI_NS: str = "http://www.w3.org/2001/XInclude"
BASE_URI: str = "http://example.test/docs/"


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.integration`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_integration: DecoratorType[Any] = as_typed_mark(pytest.mark.integration)
mark_cli: DecoratorType[Any] = as_typed_mark(pytest.mark.cli)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`."""
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`."""
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


def fixture(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.fixture`."""
    return as_typed_mark(pytest.fixture(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_xistream_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to remove ``XISTREAM_LOG_LEVEL``.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Log at TRACE level during test runs so failures come with the lookahead trail."""
    logging.setup_logging(level=logging.TRACE_LEVEL)


# --- configuration helpers ---


def make_config(**overrides: Any) -> ReaderConfig:
    """Return a frozen `ReaderConfig` built from the packaged defaults and overrides."""
    m: MutableReaderConfig = MutableReaderConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()


# --- document helpers ---


def write_xml(path: Path, content: str) -> Path:
    """Write dedented XML text to ``path`` (creating parents) and return the path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(textwrap.dedent(content).lstrip("\n"), encoding="utf-8")
    return path


def include(href: str, *, parse: str | None = None, prefix: str = "xi") -> str:
    """Return an include element (declaring its own namespace) as XML text."""
    parse_attr: str = f' parse="{parse}"' if parse is not None else ""
    return f'<{prefix}:include xmlns:{prefix}="{XI_NS}" href="{href}"{parse_attr}/>'


class TrackingStream(io.BytesIO):
    """In-memory byte stream that reports its closing to its `MemoryFetcher`."""

    def __init__(self, data: bytes, location: str, fetcher: MemoryFetcher) -> None:
        super().__init__(data)
        self.location = location
        self._fetcher = fetcher

    def close(self) -> None:
        if not self.closed:
            self._fetcher.closed.append(self.location)
        super().close()


class MemoryFetcher:
    """Fetcher serving documents from a mapping of absolute location to text.

    Attributes:
        documents (dict[str, bytes]): The documents, keyed by location.
        opened (list[str]): Locations in the order they were opened.
        closed (list[str]): Locations in the order their streams were closed.
    """

    def __init__(self, documents: Mapping[str, str | bytes]) -> None:
        self.documents: dict[str, bytes] = {
            loc: doc.encode("utf-8") if isinstance(doc, str) else doc
            for loc, doc in documents.items()
        }
        self.opened: list[str] = []
        self.closed: list[str] = []

    def __call__(self, location: str) -> TrackingStream:
        if location not in self.documents:
            raise FileNotFoundError(location)
        self.opened.append(location)
        return TrackingStream(self.documents[location], location, self)

    @property
    def open_count(self) -> int:
        """Number of streams opened and not closed yet."""
        return len(self.opened) - len(self.closed)


def at(name: str) -> str:
    """Return the `BASE_URI` location of the in-memory document ``name``."""
    return BASE_URI + name


# --- event helpers ---


def collect(reader: EventReaderBase) -> list[XMLEvent]:
    """Drain ``reader`` and return its events."""
    return list(reader)


def signature(
    events: Iterable[XMLEvent], *, skip_whitespace: bool = True
) -> list[tuple[str, str]]:
    """Reduce events to comparable ``(type, payload)`` pairs.

    Element payloads are Clark names, text payloads the character data. Locations
    are dropped. Whitespace-only text is dropped unless ``skip_whitespace`` is False.
    """
    out: list[tuple[str, str]] = []
    for event in events:
        kind: str = event.event_type.name
        if isinstance(event, StartElement):
            attrs: str = " ".join(f"{a.name}={a.value}" for a in event.attributes)
            out.append((kind, f"{event.name} {attrs}".rstrip()))
        elif isinstance(event, EndElement):
            out.append((kind, str(event.name)))
        elif isinstance(event, Characters):
            if skip_whitespace and event.is_whitespace:
                continue
            out.append((kind, event.data))
        elif isinstance(event, Comment):
            out.append((kind, event.text))
        elif isinstance(event, ProcessingInstruction):
            out.append((kind, f"{event.target} {event.data}".rstrip()))
        else:
            out.append((kind, ""))
    return out
