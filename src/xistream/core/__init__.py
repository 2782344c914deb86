# xistream:header:start
#
#   project      : XIStream
#   file         : __init__.py
#   file_relpath : src/xistream/core/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Building blocks of the include-resolving reader.

- `stack`: the stack of open documents.
- `directive`: recognition and validation of ``xi:include`` elements.
- `lookahead`: the transition table driving the merged reader.
"""

from __future__ import annotations
