# xistream:header:start
#
#   project      : XIStream
#   file         : __main__.py
#   file_relpath : src/xistream/__main__.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Module entry point for running XIStream via ``python -m xistream``.

Equivalent to running the ``xistream`` console script; it delegates to
:func:`xistream.cli.main.cli`.

Examples:
    Print the merged event stream of a document::

        python -m xistream events book.xml
"""

from __future__ import annotations

from xistream.cli.main import cli

if __name__ == "__main__":
    cli()
