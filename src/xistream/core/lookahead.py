# xistream:header:start
#
#   project      : XIStream
#   file         : lookahead.py
#   file_relpath : src/xistream/core/lookahead.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Transition table of the filtering lookahead.

`classify` decides, for the next raw event of the current context and the
current stack depth, what the merged reader must do. The rules are evaluated in
this order (the first match wins):

    1. Start tag of an ``xi:include`` element → `EnterInclude`.
    2. Root document (depth 1) → `Passthrough` (nothing is filtered at the top
       level, including the end of stream, reported as ``Passthrough(None)``).
    3. Nested context exhausted → `ExitContext`.
    4. Start/end-of-document marker of a nested context → `DiscardBoundary`.
    5. Anything else → `Passthrough`.

`classify` is pure; the reader performs the side effects. Keeping the table
free of I/O makes every transition testable on its own.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Union

from xistream.config.logging import get_logger
from xistream.core.directive import is_include_event
from xistream.stax.events import StartElement, XMLEvent

if TYPE_CHECKING:
    from xistream.config.logging import XIStreamLogger
    from xistream.stax.base import EventReaderBase

logger: XIStreamLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Passthrough:
    """Hand the event to the caller unchanged (None means end of stream)."""

    event: XMLEvent | None


@dataclass(frozen=True, slots=True)
class EnterInclude:
    """Skip the include element and open the document it references."""

    element: StartElement


@dataclass(frozen=True, slots=True)
class ExitContext:
    """Close the exhausted nested context and resume in its parent."""


@dataclass(frozen=True, slots=True)
class DiscardBoundary:
    """Consume and drop a nested start/end-of-document marker."""

    event: XMLEvent


LookaheadOutcome = Union[Passthrough, EnterInclude, ExitContext, DiscardBoundary]


def classify(event: XMLEvent | None, depth: int) -> LookaheadOutcome:
    """Map the next raw event and the stack depth to a lookahead outcome.

    Args:
        event (XMLEvent | None): Next event of the current context, or None if
            the context is exhausted.
        depth (int): Current stack depth (1 = root document).

    Returns:
        LookaheadOutcome: What the reader must do next.
    """
    if isinstance(event, StartElement) and is_include_event(event):
        return EnterInclude(element=event)
    if depth <= 1:
        return Passthrough(event=event)
    if event is None:
        return ExitContext()
    if event.is_start_document or event.is_end_document:
        return DiscardBoundary(event=event)
    return Passthrough(event=event)


def skip_element(reader: EventReaderBase) -> StartElement:
    """Consume a whole element: its start tag, all content, and the matching end tag.

    Child elements (an ``xi:fallback`` included) are discarded unread.

    Args:
        reader (EventReaderBase): Reader positioned on the element's start tag.

    Returns:
        StartElement: The consumed start tag.
    """
    start: XMLEvent = reader.next_event()
    assert isinstance(start, StartElement), f"skip_element() called on {start.event_type.name}"
    depth: int = 1
    while depth:
        event: XMLEvent = reader.next_event()
        if event.is_start_element:
            depth += 1
        elif event.is_end_element:
            depth -= 1
    logger.trace("Skipped element %s", start.name)
    return start
