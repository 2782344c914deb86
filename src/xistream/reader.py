# xistream:header:start
#
#   project      : XIStream
#   file         : reader.py
#   file_relpath : src/xistream/reader.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Event reader that resolves ``xi:include`` elements while reading.

`IncludeAwareEventReader` yields the events of one merged document: every
``xi:include`` element is replaced by the events of the document it references,
without that document's own start/end-of-document markers. Consumers iterate it
exactly like a plain single-document reader.

All state transitions happen in `IncludeAwareEventReader.peek`. The other read
operations call it first, so by the time an event is consumed the context
stack points at the document that really holds it.

Typical usage:

    with IncludeAwareEventReader("book.xml") as reader:
        for event in reader:
            ...

Processing instructions and whitespace-only text are passed through as-is;
filtering them is up to the consumer.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from xistream.config.logging import get_logger
from xistream.config.model import default_config
from xistream.core.directive import IncludeDirective
from xistream.core.lookahead import (
    DiscardBoundary,
    EnterInclude,
    ExitContext,
    LookaheadOutcome,
    Passthrough,
    classify,
    skip_element,
)
from xistream.core.stack import ContextStack
from xistream.errors import EventStreamExhaustedError, IncludeDepthError, XMLStreamError
from xistream.resources import SourceOpener, resolve_location
from xistream.stax.base import EventReaderBase

if TYPE_CHECKING:
    from xistream.config.logging import XIStreamLogger
    from xistream.config.model import ReaderConfig
    from xistream.core.stack import ParsingContext
    from xistream.resources import Fetcher
    from xistream.stax.events import StartElement, XMLEvent
    from xistream.stax.parser import ExpatEventReader

logger: XIStreamLogger = get_logger(__name__)


class IncludeAwareEventReader(EventReaderBase):
    """Pull reader over a document with its ``xi:include`` elements resolved.

    Args:
        location (str | os.PathLike[str]): Path or URI of the root document.
        config (ReaderConfig | None): Reader settings (built-in defaults if None).
        fetcher (Fetcher | None): Custom resource fetcher; by default ``file:``,
            ``http:`` and ``https:`` locations are opened directly.

    Raises:
        IncludeOpenError: If the root document cannot be opened.
    """

    def __init__(
        self,
        location: str | os.PathLike[str],
        config: ReaderConfig | None = None,
        *,
        fetcher: Fetcher | None = None,
    ) -> None:
        self._config: ReaderConfig = config or default_config()
        self._stack = ContextStack(SourceOpener(self._config, fetcher))
        self._last_event = None
        self._include_count: int = 0
        self._max_depth: int = 1
        self._stack.push(os.fspath(location))

    # --- stack access ---

    def _current_reader(self) -> ExpatEventReader:
        return self._stack.current().reader

    def _ensure_open(self) -> None:
        if self._stack.is_empty:
            raise XMLStreamError("Reader is closed")

    # --- transitions ---

    def _enter_include(self, element: StartElement) -> None:
        """Skip the include element in the current context, validate it, and push its target."""
        skip_element(self._current_reader())
        directive: IncludeDirective = IncludeDirective.from_element(element)

        limit: int | None = self._config.max_include_depth
        if limit is not None and self._stack.depth > limit:
            raise IncludeDepthError(
                f"Including {directive.href!r} would exceed the maximum include depth ({limit})",
                element=element,
            )

        base: str = self._stack.current().location
        target: str = resolve_location(base, directive.href)
        logger.debug("Including %s (href=%r, base=%s)", target, directive.href, base)
        self._stack.push(target, element=element)
        self._include_count += 1
        self._max_depth = max(self._max_depth, self._stack.depth)

    # --- reader contract ---

    def peek(self) -> XMLEvent | None:
        """Return the next merged event without consuming it, or None at end of stream.

        Include elements found on the way are resolved, exhausted nested
        documents are closed, and their document markers are dropped, so the
        returned event is always one the caller should see.

        Raises:
            MissingReferenceError: If an include element has no ``href``.
            UnsupportedInclusionModeError: If an include uses ``parse`` other than ``xml``.
            IncludeOpenError: If an included document cannot be opened.
            XMLStreamError: If any document is malformed, or the reader is closed.
        """
        self._ensure_open()
        while True:
            reader: ExpatEventReader = self._current_reader()
            outcome: LookaheadOutcome = classify(reader.peek(), self._stack.depth)
            logger.trace("Lookahead at depth %d: %s", self._stack.depth, outcome)
            if isinstance(outcome, Passthrough):
                return outcome.event
            if isinstance(outcome, EnterInclude):
                self._enter_include(outcome.element)
            elif isinstance(outcome, ExitContext):
                self._stack.pop()
            elif isinstance(outcome, DiscardBoundary):
                reader.next_event()

    def next_event(self) -> XMLEvent:
        """Consume and return the next merged event.

        Raises:
            EventStreamExhaustedError: If the root document has been read to the end.
        """
        if self.peek() is None:
            raise EventStreamExhaustedError("No more events in XML stream")
        # peek() left the stack on a pass-through event of the current context.
        event: XMLEvent = self._current_reader().next_event()
        self._last_event = event
        return event

    def get_property(self, name: str) -> object:
        """Return a property of the root document's reader, whatever the nesting depth.

        Raises:
            UnsupportedPropertyError: If ``name`` is not a supported property.
        """
        self._ensure_open()
        return self._stack.root().reader.get_property(name)

    def close(self) -> None:
        """Close every open document, innermost first. Closing twice is a no-op."""
        if self._stack.is_empty:
            return
        logger.debug("Closing reader (%d open context(s))", self._stack.depth)
        self._stack.close_all()

    # --- introspection ---

    @property
    def depth(self) -> int:
        """Number of open documents (1 = root only, 0 once closed)."""
        return self._stack.depth

    @property
    def is_closed(self) -> bool:
        """True once `close` was called."""
        return self._stack.is_empty

    @property
    def current_location(self) -> str:
        """Location of the document the next event comes from (as of the last lookahead)."""
        self._ensure_open()
        current: ParsingContext = self._stack.current()
        return current.location

    @property
    def include_count(self) -> int:
        """Number of include elements resolved so far."""
        return self._include_count

    @property
    def max_depth(self) -> int:
        """Deepest stack depth reached so far."""
        return self._max_depth
