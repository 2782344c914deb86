# xistream:header:start
#
#   project      : XIStream
#   file         : config_resolver.py
#   file_relpath : src/xistream/cli/config_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Build the effective `ReaderConfig` for a CLI invocation.

Layering (later wins): packaged defaults, discovered ``pyproject.toml`` /
``xistream.toml`` files, explicit ``--config`` files, CLI options.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from xistream.config.logging import get_logger
from xistream.config.model import MutableReaderConfig
from xistream.resources import has_scheme

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from xistream.config.logging import XIStreamLogger
    from xistream.config.model import ReaderConfig

logger: XIStreamLogger = get_logger(__name__)


def discovery_anchor(source: str | None) -> Path:
    """Return the directory config discovery starts from.

    Local documents anchor discovery at their directory; URIs and missing
    sources anchor it at the current working directory.
    """
    if source is None or has_scheme(source):
        return Path.cwd()
    return Path(source).parent


def resolve_config(
    *,
    source: str | None,
    config_paths: Iterable[str] = (),
    no_config: bool = False,
    overrides: Mapping[str, Any] | None = None,
) -> ReaderConfig:
    """Resolve the reader configuration for one CLI invocation.

    Args:
        source (str | None): The first document argument, used as discovery anchor.
        config_paths (Iterable[str]): Files passed with ``--config``.
        no_config (bool): Skip discovery of local config files.
        overrides (Mapping[str, Any] | None): CLI reader options (None values are ignored).

    Returns:
        ReaderConfig: The frozen configuration.
    """
    draft: MutableReaderConfig = MutableReaderConfig.load_merged(
        anchor=discovery_anchor(source),
        extra_config_files=[Path(p) for p in config_paths],
        no_config=no_config,
    )
    draft.apply_cli_args(dict(overrides or {}))
    config: ReaderConfig = draft.freeze()
    logger.debug("Effective reader config: %s", config)
    return config
