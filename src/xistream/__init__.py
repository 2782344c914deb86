# xistream:header:start
#
#   project      : XIStream
#   file         : __init__.py
#   file_relpath : src/xistream/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""XIStream package.

XIStream is a pull-style XML event reader that resolves ``xi:include``
elements on the fly, so consumers see one merged event stream. It exposes a
small typed API and an ``xistream`` command line tool.
"""

from __future__ import annotations

from xistream.errors import (
    ContextStackError,
    EventStreamExhaustedError,
    IncludeDepthError,
    IncludeError,
    IncludeOpenError,
    MissingReferenceError,
    UnsupportedInclusionModeError,
    UnsupportedPropertyError,
    XIStreamError,
    XMLStreamError,
)
from xistream.reader import IncludeAwareEventReader

__all__ = [
    "ContextStackError",
    "EventStreamExhaustedError",
    "IncludeAwareEventReader",
    "IncludeDepthError",
    "IncludeError",
    "IncludeOpenError",
    "MissingReferenceError",
    "UnsupportedInclusionModeError",
    "UnsupportedPropertyError",
    "XIStreamError",
    "XMLStreamError",
]
