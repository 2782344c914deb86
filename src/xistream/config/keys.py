# xistream:header:start
#
#   project      : XIStream
#   file         : keys.py
#   file_relpath : src/xistream/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Canonical TOML section and key names for XIStream configuration.

These constants describe the external configuration schema as it appears in
``xistream.toml`` and in ``[tool.xistream]`` inside ``pyproject.toml``.
Renaming or removing a key is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by XIStream configuration."""

    # Discovery
    KEY_ROOT: Final[str] = "root"

    # pyproject.toml nesting: [tool.xistream]
    SECTION_TOOL: Final[str] = "tool"
    SECTION_XISTREAM: Final[str] = "xistream"

    # [reader]
    SECTION_READER: Final[str] = "reader"

    KEY_CHUNK_SIZE: Final[str] = "chunk_size"
    KEY_MAX_INCLUDE_DEPTH: Final[str] = "max_include_depth"
    KEY_FETCH_TIMEOUT: Final[str] = "fetch_timeout"
    KEY_ALLOWED_SCHEMES: Final[str] = "allowed_schemes"


# File names recognized during upward discovery (merged in this order per directory).
PYPROJECT_TOML_NAME: Final[str] = "pyproject.toml"
XISTREAM_TOML_NAME: Final[str] = "xistream.toml"
