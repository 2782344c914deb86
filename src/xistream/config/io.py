# xistream:header:start
#
#   project      : XIStream
#   file         : io.py
#   file_relpath : src/xistream/config/io.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""TOML loading and value getters for XIStream configuration.

Parsing is done with `tomlkit` and returned as plain `dict` structures. The
getters never raise: a missing key yields ``None`` and a value of the wrong
shape is logged as a warning and ignored, so a typo in a config file degrades
to the default instead of aborting a read.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeGuard, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from xistream.config.logging import get_logger

if TYPE_CHECKING:
    from pathlib import Path

    from xistream.config.logging import XIStreamLogger

TomlTable = dict[str, Any]

logger: XIStreamLogger = get_logger(__name__)


def is_toml_table(obj: object) -> TypeGuard[TomlTable]:
    """Type guard for a TOML table-like mapping."""
    return isinstance(obj, dict)


def load_toml_dict(path: Path) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (``xistream.toml`` or ``pyproject.toml``).

    Returns:
        TomlTable: The parsed TOML content; an empty dict on failure.

    Notes:
        - Errors are logged and an empty dict is returned on failure.
        - Encoding is assumed to be UTF-8.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
        data_any: Any = doc.unwrap()
        return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}
    except OSError as e:
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except TomlkitParseError as e:
        logger.error("Error decoding TOML from %s: %s", path, e)
        return {}


def get_table_value(table: TomlTable, key: str) -> TomlTable:
    """Return the sub-table stored under ``key``, or an empty table."""
    value: Any = table.get(key)
    if is_toml_table(value):
        return value
    if value is not None:
        logger.warning("Expected a table for key '%s', got %r; ignoring", key, value)
    return {}


def get_int_value_or_none(table: TomlTable, key: str, *, minimum: int | None = None) -> int | None:
    """Extract an optional integer value from a TOML table.

    Booleans are rejected even though ``bool`` is a subclass of ``int``.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.
        minimum (int | None): Smallest accepted value, if any.

    Returns:
        int | None: The value, or None when absent or invalid.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        logger.warning("Expected an integer for key '%s', got %r; ignoring", key, value)
        return None
    if minimum is not None and value < minimum:
        logger.warning("Value for key '%s' must be >= %d, got %d; ignoring", key, minimum, value)
        return None
    return value


def get_float_value_or_none(table: TomlTable, key: str) -> float | None:
    """Extract an optional, strictly positive number from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        float | None: The value as a float, or None when absent or invalid.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
        logger.warning("Expected a positive number for key '%s', got %r; ignoring", key, value)
        return None
    return float(value)


def get_string_list_or_none(table: TomlTable, key: str) -> list[str] | None:
    """Extract an optional list of strings from a TOML table.

    Args:
        table (TomlTable): Table to query.
        key (str): Key to extract.

    Returns:
        list[str] | None: The list, or None when absent or not a list of strings.
    """
    value: Any = table.get(key)
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        logger.warning("Expected a list of strings for key '%s', got %r; ignoring", key, value)
        return None
    return [cast("str", v) for v in value]
