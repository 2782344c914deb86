# xistream:header:start
#
#   project      : XIStream
#   file         : resources.py
#   file_relpath : src/xistream/resources.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Location handling: normalization, reference resolution and fetching.

Locations are absolute URI strings. Filesystem paths are turned into ``file:``
URIs up front so that every document, including the root, has a base against
which relative ``href`` values can be resolved with RFC 3986 rules.

Key behaviors:
    - `to_location(raw)`: absolute URI for a path or URI string.
    - `resolve_location(base, reference)`: resolve ``reference`` against ``base``.
    - `fetch_location(location)`: open a ``file:``/``http:``/``https:`` URI as a
      binary stream.
    - `SourceOpener`: fetch + `open_event_reader`, translating every failure into
      `IncludeOpenError`.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO, Protocol, cast
from urllib.error import URLError
from urllib.parse import urljoin, urlsplit
from urllib.request import url2pathname, urlopen

from xistream.config.logging import get_logger
from xistream.config.model import default_config
from xistream.errors import IncludeOpenError, XMLStreamError
from xistream.stax.parser import open_event_reader

if TYPE_CHECKING:
    from collections.abc import Iterable

    from xistream.config.logging import XIStreamLogger
    from xistream.config.model import ReaderConfig
    from xistream.stax.events import StartElement
    from xistream.stax.parser import ExpatEventReader

logger: XIStreamLogger = get_logger(__name__)


class UnsupportedSchemeError(OSError):
    """The location uses a URI scheme that is not allowed or not supported."""


class Fetcher(Protocol):
    """Callable that opens an absolute location as a binary stream."""

    def __call__(self, location: str) -> BinaryIO:
        """Open ``location``; raise `OSError` (or a subclass) on failure."""
        ...


def has_scheme(raw: str) -> bool:
    """Return True if ``raw`` starts with a URI scheme (as opposed to being a path)."""
    # A one-letter "scheme" is a Windows drive letter.
    scheme: str = urlsplit(raw).scheme
    return len(scheme) > 1


def to_location(raw: str | os.PathLike[str]) -> str:
    """Return an absolute URI for a filesystem path or a URI string.

    Args:
        raw (str | os.PathLike[str]): A path (relative paths are anchored at the
            CWD) or an absolute URI.

    Returns:
        str: The absolute location.
    """
    if isinstance(raw, str) and has_scheme(raw):
        return raw
    return Path(raw).resolve().as_uri()


def resolve_location(base: str, reference: str) -> str:
    """Resolve ``reference`` against ``base`` (RFC 3986).

    Args:
        base (str): Absolute location of the referring document.
        reference (str): The reference as written, e.g. an ``href`` value.

    Returns:
        str: The absolute location of the referenced resource.
    """
    return urljoin(base, reference)


def location_to_path(location: str) -> Path:
    """Return the local filesystem path for a ``file:`` location."""
    parts = urlsplit(location)
    if parts.scheme != "file":
        raise UnsupportedSchemeError(f"Not a file location: {location}")
    if parts.netloc and parts.netloc != "localhost":
        return Path(url2pathname(f"//{parts.netloc}{parts.path}"))
    return Path(url2pathname(parts.path))


def fetch_location(
    location: str,
    *,
    timeout: float | None = None,
    allowed_schemes: Iterable[str] = ("file", "http", "https"),
) -> BinaryIO:
    """Open ``location`` as a binary stream.

    Args:
        location (str): Absolute location.
        timeout (float | None): Network timeout in seconds (None blocks indefinitely).
        allowed_schemes (Iterable[str]): Schemes that may be opened.

    Returns:
        BinaryIO: The open stream; the caller owns it.

    Raises:
        UnsupportedSchemeError: If the scheme is not allowed or not supported.
        OSError: If the resource cannot be opened (``URLError`` is an ``OSError``).
    """
    scheme: str = urlsplit(location).scheme.lower()
    if scheme not in set(allowed_schemes):
        raise UnsupportedSchemeError(f"URI scheme {scheme!r} is not allowed: {location}")
    if scheme == "file":
        return location_to_path(location).open("rb")
    if scheme in ("http", "https"):
        if timeout is None:
            return cast("BinaryIO", urlopen(location))
        return cast("BinaryIO", urlopen(location, timeout=timeout))
    raise UnsupportedSchemeError(f"URI scheme {scheme!r} is not supported: {location}")


class SourceOpener:
    """Open a location as a primed single-document event reader.

    Args:
        config (ReaderConfig | None): Reader settings (built-in defaults if None).
        fetcher (Fetcher | None): Custom fetcher; defaults to `fetch_location`
            with the timeout and schemes from ``config``.
    """

    def __init__(self, config: ReaderConfig | None = None, fetcher: Fetcher | None = None) -> None:
        self.config: ReaderConfig = config or default_config()
        self._fetcher: Fetcher | None = fetcher

    def fetch(self, location: str) -> BinaryIO:
        """Open the byte stream for ``location`` with the configured fetcher."""
        if self._fetcher is not None:
            return self._fetcher(location)
        return fetch_location(
            location,
            timeout=self.config.fetch_timeout,
            allowed_schemes=self.config.allowed_schemes,
        )

    def open(self, location: str, *, element: StartElement | None = None) -> ExpatEventReader:
        """Fetch ``location`` and open an event reader over it.

        Args:
            location (str): Absolute location to open.
            element (StartElement | None): The include element that requested the
                location, attached to the error for diagnostics.

        Returns:
            ExpatEventReader: A primed reader that owns the fetched stream.

        Raises:
            IncludeOpenError: If the resource cannot be fetched or does not start
                as well-formed XML.
        """
        try:
            stream: BinaryIO = self.fetch(location)
        except (OSError, URLError, ValueError) as exc:
            logger.debug("Cannot fetch %s: %s", location, exc)
            raise IncludeOpenError(f"Cannot open {location}: {exc}", element=element) from exc
        try:
            return open_event_reader(stream, self.config, system_id=location)
        except XMLStreamError as exc:
            logger.debug("Cannot parse %s: %s", location, exc)
            raise IncludeOpenError(f"Cannot parse {location}: {exc}", element=element) from exc
