# xistream:header:start
#
#   project      : XIStream
#   file         : __init__.py
#   file_relpath : src/xistream/cli/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Command line interface for XIStream (Click based)."""

from __future__ import annotations
