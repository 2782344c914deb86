# xistream:header:start
#
#   project      : XIStream
#   file         : base.py
#   file_relpath : src/xistream/stax/base.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Common behavior for pull-based event readers.

`EventReaderBase` implements the parts of the reader contract that can be
expressed purely in terms of `peek()` and `next_event()`: end-of-stream
detection, ``next_tag()``, ``get_element_text()``, the iterator protocol and
context-manager support. Concrete readers only provide lookahead, consumption,
properties and closing.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, TypeVar

from xistream.errors import XMLStreamError
from xistream.stax.events import Characters, XMLEvent, is_ignorable_before_tag

if TYPE_CHECKING:
    from types import TracebackType

_R = TypeVar("_R", bound="EventReaderBase")


class EventReaderBase(ABC):
    """Abstract pull reader over a stream of `XMLEvent` objects.

    Subclasses must record every event they hand out from `next_event()` in
    ``self._last_event`` so that `get_element_text()` can check its precondition.
    """

    _last_event: XMLEvent | None = None

    @abstractmethod
    def peek(self) -> XMLEvent | None:
        """Return the next event without consuming it, or None at end of stream."""

    @abstractmethod
    def next_event(self) -> XMLEvent:
        """Consume and return the next event."""

    @abstractmethod
    def get_property(self, name: str) -> object:
        """Return the value of a reader property."""

    @abstractmethod
    def close(self) -> None:
        """Release all resources held by the reader."""

    def has_next(self) -> bool:
        """Return True if at least one more event is available."""
        return self.peek() is not None

    def next_tag(self) -> XMLEvent:
        """Skip ignorable events and return the next start tag, end tag or end of document.

        Whitespace-only text, comments, processing instructions, the DTD and the
        start-of-document marker are skipped.

        Returns:
            XMLEvent: A `StartElement`, `EndElement` or `EndDocument` event.

        Raises:
            XMLStreamError: If non-whitespace text or another non-skippable event
                is found first.
        """
        while True:
            event: XMLEvent = self.next_event()
            if is_ignorable_before_tag(event):
                continue
            if event.is_start_element or event.is_end_element or event.is_end_document:
                return event
            raise XMLStreamError(
                f"Expected a start or end tag, found {event.event_type.name}",
                location=event.location,
            )

    def get_element_text(self) -> str:
        """Read the text content of a text-only element.

        Must be called right after a `StartElement` was returned. Consumes events
        up to and including the matching end tag; comments and processing
        instructions inside the element are skipped.

        Returns:
            str: The concatenated character data of the element.

        Raises:
            XMLStreamError: If the current event is not a start tag, or the element
                contains a child element.
        """
        if self._last_event is None or not self._last_event.is_start_element:
            raise XMLStreamError("get_element_text() requires the current event to be a start tag")
        parts: list[str] = []
        while True:
            event: XMLEvent = self.next_event()
            if isinstance(event, Characters):
                parts.append(event.data)
            elif event.is_end_element:
                return "".join(parts)
            elif event.is_comment or event.is_processing_instruction:
                continue
            elif event.is_start_element:
                raise XMLStreamError(
                    "Element text must not contain child elements", location=event.location
                )
            else:
                raise XMLStreamError(
                    f"Unexpected {event.event_type.name} while reading element text",
                    location=event.location,
                )

    def __iter__(self: _R) -> _R:
        return self

    def __next__(self) -> XMLEvent:
        if not self.has_next():
            raise StopIteration
        return self.next_event()

    def __enter__(self: _R) -> _R:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
