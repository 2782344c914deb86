# xistream:header:start
#
#   project      : XIStream
#   file         : stack.py
#   file_relpath : src/xistream/core/stack.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Stack of parsing contexts, one per open document.

The bottom entry is the root document; every include that is being read adds
one entry on top. Each context exclusively owns its event reader (and, through
it, the byte stream), so popping a context is the one place its resources are
released.

"Current" is always derived from the top of the stack; callers must not hold
on to a context across a push or pop.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from xistream.config.logging import get_logger
from xistream.errors import ContextStackError
from xistream.resources import to_location

if TYPE_CHECKING:
    from xistream.config.logging import XIStreamLogger
    from xistream.resources import SourceOpener
    from xistream.stax.events import StartElement
    from xistream.stax.parser import ExpatEventReader

logger: XIStreamLogger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class ParsingContext:
    """An open document: its absolute location and the reader over it.

    Attributes:
        location (str): Absolute location; base for resolving includes found in
            this document.
        reader (ExpatEventReader): Event reader owned by this context.
    """

    location: str
    reader: ExpatEventReader


class ContextStack:
    """Ordered collection of `ParsingContext` objects with the root at the bottom.

    Args:
        opener (SourceOpener): Opens locations as event readers.
    """

    def __init__(self, opener: SourceOpener) -> None:
        self._opener: SourceOpener = opener
        self._contexts: list[ParsingContext] = []

    def push(self, location: str, *, element: StartElement | None = None) -> ParsingContext:
        """Open ``location`` and make it the current context.

        Args:
            location (str): Location to open (normalized to an absolute URI).
            element (StartElement | None): The include element requesting the
                push, for error reporting.

        Returns:
            ParsingContext: The new current context.

        Raises:
            IncludeOpenError: If the location cannot be opened. The stack is
                left unchanged.
        """
        absolute: str = to_location(location)
        reader: ExpatEventReader = self._opener.open(absolute, element=element)
        context = ParsingContext(location=absolute, reader=reader)
        self._contexts.append(context)
        logger.debug("Pushed context %s (depth %d)", absolute, len(self._contexts))
        return context

    def pop(self) -> None:
        """Close and remove the current context.

        Raises:
            ContextStackError: If only the root context (or nothing) is left.
        """
        if len(self._contexts) <= 1:
            raise ContextStackError("Should not happen: pop() would remove the root context")
        context: ParsingContext = self._contexts.pop()
        context.reader.close()
        logger.debug("Popped context %s (depth %d)", context.location, len(self._contexts))

    def current(self) -> ParsingContext:
        """Return the topmost context.

        Raises:
            ContextStackError: If the stack is empty.
        """
        if not self._contexts:
            raise ContextStackError("Should not happen: no current context")
        return self._contexts[-1]

    def root(self) -> ParsingContext:
        """Return the bottom (root document) context.

        Raises:
            ContextStackError: If the stack is empty.
        """
        if not self._contexts:
            raise ContextStackError("Should not happen: no root context")
        return self._contexts[0]

    @property
    def depth(self) -> int:
        """Number of open contexts; 1 means the root document is being read."""
        return len(self._contexts)

    @property
    def is_empty(self) -> bool:
        """True once all contexts were closed."""
        return not self._contexts

    def close_all(self) -> None:
        """Close every context, innermost first, leaving the stack empty.

        Every context is removed even if closing one of them fails; the first
        failure is re-raised afterwards.
        """
        first_error: BaseException | None = None
        while self._contexts:
            context: ParsingContext = self._contexts.pop()
            try:
                context.reader.close()
            except Exception as exc:
                logger.error("Error closing %s: %s", context.location, exc)
                first_error = first_error or exc
        if first_error is not None:
            raise first_error

    def __len__(self) -> int:
        return len(self._contexts)
