# xistream:header:start
#
#   project      : XIStream
#   file         : __init__.py
#   file_relpath : src/xistream/cli/commands/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Subcommands of the ``xistream`` command line tool."""

from __future__ import annotations
