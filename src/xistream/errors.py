# xistream:header:start
#
#   project      : XIStream
#   file         : errors.py
#   file_relpath : src/xistream/errors.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Exceptions raised by XIStream readers.

Hierarchy:
    - `XIStreamError`: base for every user-facing error.
        - `XMLStreamError`: malformed input or invalid use of a reader.
            - `EventStreamExhaustedError`: an event was requested past the end of the stream.
            - `UnsupportedPropertyError`: unknown reader property name.
            - `IncludeError`: an ``xi:include`` element could not be processed.
                - `IncludeOpenError` (and `IncludeDepthError`)
                - `MissingReferenceError`
                - `UnsupportedInclusionModeError`
    - `ContextStackError`: internal-consistency failure of the context stack.

`ContextStackError` deliberately derives from `RuntimeError` and not from
`XIStreamError`: it signals a defect in the reader, never bad input, so callers
catching `XIStreamError` must not swallow it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from xistream.stax.events import Location, StartElement


class XIStreamError(Exception):
    """Base class for all XIStream errors."""


class XMLStreamError(XIStreamError):
    """Error raised for malformed XML or invalid reader usage.

    Args:
        message (str): Human-readable description.
        location (Location | None): Where in the source the problem was detected, if known.

    Attributes:
        location (Location | None): Where in the source the problem was detected, if known.
    """

    location: Location | None

    def __init__(self, message: str, *, location: Location | None = None) -> None:
        self.location = location
        if location is not None:
            message = f"{message} ({location})"
        super().__init__(message)


class EventStreamExhaustedError(XMLStreamError):
    """Raised when an event is requested after the end of the stream."""


class UnsupportedPropertyError(XMLStreamError):
    """Raised when a reader property name is not recognized."""


class IncludeError(XMLStreamError):
    """Base class for failures while processing an ``xi:include`` element.

    Args:
        message (str): Human-readable description.
        element (StartElement | None): The offending include element, if any.

    Attributes:
        element (StartElement | None): The offending include element, if any.
    """

    element: StartElement | None

    def __init__(self, message: str, *, element: StartElement | None = None) -> None:
        self.element = element
        super().__init__(message, location=element.location if element is not None else None)


class IncludeOpenError(IncludeError):
    """The referenced resource cannot be fetched or does not start as parseable XML."""


class IncludeDepthError(IncludeOpenError):
    """Opening the include would exceed the configured maximum nesting depth."""


class MissingReferenceError(IncludeError):
    """An include element has no ``href`` attribute."""


class UnsupportedInclusionModeError(IncludeError):
    """An include element has a ``parse`` attribute other than ``xml``."""


class ContextStackError(RuntimeError):
    """Internal-consistency failure: stack underflow or access to an empty stack."""
