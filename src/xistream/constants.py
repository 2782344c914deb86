# xistream:header:start
#
#   project      : XIStream
#   file         : constants.py
#   file_relpath : src/xistream/constants.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""XIStream Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version

XISTREAM_VERSION: str = get_version("xistream")

CLI_PROG_NAME: str = "xistream"
