# xistream:header:start
#
#   project      : XIStream
#   file         : __init__.py
#   file_relpath : src/xistream/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Configuration for XIStream readers.

Use `MutableReaderConfig` to build (from defaults, TOML files and CLI
overrides) and `ReaderConfig` as the immutable runtime snapshot.
"""

from __future__ import annotations

from xistream.config.model import MutableReaderConfig, ReaderConfig, default_config

__all__ = [
    "MutableReaderConfig",
    "ReaderConfig",
    "default_config",
]
