# xistream:header:start
#
#   project      : XIStream
#   file         : model.py
#   file_relpath : src/xistream/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 The XIStream authors
#
# xistream:header:end

"""Reader configuration model and merge policy.

This module defines:
    - `ReaderConfig`: an immutable runtime snapshot handed to readers.
    - `MutableReaderConfig`: a mutable builder used during discovery/merge; it
      can be frozen into `ReaderConfig` and thawed back for edits.

Merge order (lowest → highest precedence), see `MutableReaderConfig.load_merged`:
    1) Built-in defaults (the bundled ``xistream-default.toml``)
    2) Project configs discovered upward, root-most first; within a directory
       ``pyproject.toml`` (``[tool.xistream]``) then ``xistream.toml``
    3) Extra config files passed explicitly (``--config``), in order
    4) CLI overrides (`MutableReaderConfig.apply_cli_args`)

Unset builder fields are ``None`` and mean "inherit"; `MutableReaderConfig.freeze`
fills whatever is still unset from the module-level fallbacks.
"""

from __future__ import annotations

import functools
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from importlib.resources import files
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

import tomlkit

from xistream.config.io import (
    get_float_value_or_none,
    get_int_value_or_none,
    get_string_list_or_none,
    get_table_value,
    load_toml_dict,
)
from xistream.config.keys import PYPROJECT_TOML_NAME, XISTREAM_TOML_NAME, Toml
from xistream.config.logging import get_logger

if TYPE_CHECKING:
    from xistream.config.io import TomlTable
    from xistream.config.logging import XIStreamLogger

ArgsLike = Mapping[str, Any]

logger: XIStreamLogger = get_logger(__name__)

DEFAULT_TOML_CONFIG_PACKAGE: Final[str] = "xistream.config"
DEFAULT_TOML_CONFIG_NAME: Final[str] = "xistream-default.toml"

FALLBACK_CHUNK_SIZE: Final[int] = 64 * 1024
FALLBACK_ALLOWED_SCHEMES: Final[tuple[str, ...]] = ("file", "http", "https")


@dataclass(frozen=True, slots=True)
class ReaderConfig:
    """Immutable runtime configuration for XIStream readers.

    Attributes:
        chunk_size (int): Number of bytes read from a source per parser feed.
        max_include_depth (int | None): Maximum number of nested inclusions below
            the root document; None means unlimited.
        fetch_timeout (float | None): Timeout in seconds for network fetches;
            None blocks indefinitely.
        allowed_schemes (tuple[str, ...]): URI schemes that may be fetched.
        config_files (tuple[Path | str, ...]): Provenance of the merged settings.
    """

    chunk_size: int
    max_include_depth: int | None
    fetch_timeout: float | None
    allowed_schemes: tuple[str, ...]
    config_files: tuple[Path | str, ...] = ()

    def thaw(self) -> MutableReaderConfig:
        """Return a mutable copy of this frozen config."""
        return MutableReaderConfig(
            chunk_size=self.chunk_size,
            max_include_depth=self.max_include_depth,
            fetch_timeout=self.fetch_timeout,
            allowed_schemes=list(self.allowed_schemes),
            config_files=list(self.config_files),
        )

    def to_toml_dict(self) -> TomlTable:
        """Export the effective settings as a TOML-serializable dict (``None`` values omitted)."""
        reader: TomlTable = {
            Toml.KEY_CHUNK_SIZE: self.chunk_size,
            Toml.KEY_ALLOWED_SCHEMES: list(self.allowed_schemes),
        }
        if self.max_include_depth is not None:
            reader[Toml.KEY_MAX_INCLUDE_DEPTH] = self.max_include_depth
        if self.fetch_timeout is not None:
            reader[Toml.KEY_FETCH_TIMEOUT] = self.fetch_timeout
        return {Toml.SECTION_READER: reader}

    def to_toml(self) -> str:
        """Render the effective settings as TOML text."""
        return tomlkit.dumps(self.to_toml_dict())


@dataclass
class MutableReaderConfig:
    """Mutable builder for `ReaderConfig`.

    All settings are tri-state: ``None`` means "not set here, inherit".
    """

    chunk_size: int | None = None
    max_include_depth: int | None = None
    fetch_timeout: float | None = None
    allowed_schemes: list[str] | None = None
    config_files: list[Path | str] = field(default_factory=lambda: [])

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> ReaderConfig:
        """Freeze this builder into an immutable `ReaderConfig`.

        Schemes are lower-cased and de-duplicated (first occurrence wins).
        """
        schemes: list[str] = []
        for scheme in self.allowed_schemes or FALLBACK_ALLOWED_SCHEMES:
            s = scheme.strip().lower()
            if s and s not in schemes:
                schemes.append(s)
        return ReaderConfig(
            chunk_size=self.chunk_size or FALLBACK_CHUNK_SIZE,
            max_include_depth=self.max_include_depth,
            fetch_timeout=self.fetch_timeout,
            allowed_schemes=tuple(schemes),
            config_files=tuple(self.config_files),
        )

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableReaderConfig:
        """Load the defaults bundled with the package (``xistream-default.toml``)."""
        resource = files(DEFAULT_TOML_CONFIG_PACKAGE).joinpath(DEFAULT_TOML_CONFIG_NAME)
        try:
            text: str = resource.read_text(encoding="utf-8")
        except OSError as exc:
            logger.warning("Cannot read packaged default config %s: %s", resource, exc)
            return cls()
        data: Any = tomlkit.parse(text).unwrap()
        draft: MutableReaderConfig = cls.from_toml_dict(data)
        draft.config_files = [f"<defaults:{DEFAULT_TOML_CONFIG_NAME}>"]
        return draft

    @classmethod
    def from_toml_dict(cls, data: TomlTable) -> MutableReaderConfig:
        """Build a draft from a parsed ``xistream.toml`` document (top level).

        Args:
            data (TomlTable): The parsed document; settings live in its ``[reader]`` table.

        Returns:
            MutableReaderConfig: The draft; invalid values are logged and left unset.
        """
        reader: TomlTable = get_table_value(data, Toml.SECTION_READER)
        return cls(
            chunk_size=get_int_value_or_none(reader, Toml.KEY_CHUNK_SIZE, minimum=1),
            max_include_depth=get_int_value_or_none(
                reader, Toml.KEY_MAX_INCLUDE_DEPTH, minimum=0
            ),
            fetch_timeout=get_float_value_or_none(reader, Toml.KEY_FETCH_TIMEOUT),
            allowed_schemes=get_string_list_or_none(reader, Toml.KEY_ALLOWED_SCHEMES),
        )

    @classmethod
    def from_toml_file(cls, path: Path) -> MutableReaderConfig | None:
        """Load configuration from a single TOML file.

        For ``pyproject.toml`` the ``[tool.xistream]`` table is used.

        Args:
            path (Path): Path to the TOML file.

        Returns:
            MutableReaderConfig | None: The draft, or None if a ``pyproject.toml``
                has no ``[tool.xistream]`` table.
        """
        logger.debug("Loading reader config from %s", path)
        data: TomlTable = load_toml_dict(path)
        if path.name == PYPROJECT_TOML_NAME:
            data = get_table_value(get_table_value(data, Toml.SECTION_TOOL), Toml.SECTION_XISTREAM)
            if not data:
                logger.debug("No [tool.xistream] section in %s", path)
                return None
        draft: MutableReaderConfig = cls.from_toml_dict(data)
        draft.config_files = [path]
        return draft

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files found walking upward from ``start``.

        Files are returned root-most first and nearest last; within a directory
        ``pyproject.toml`` comes before ``xistream.toml``. A config that sets
        ``root = true`` stops the walk after its directory.

        Args:
            start (Path): Directory (or file, whose parent is used) to start from.

        Returns:
            list[Path]: Discovered config files in merge order.
        """
        per_dir: list[list[Path]] = []
        cur: Path = start.resolve()
        if cur.is_file():
            cur = cur.parent

        while True:
            root_stop_here = False
            dir_entries: list[Path] = []
            for name in (PYPROJECT_TOML_NAME, XISTREAM_TOML_NAME):
                p: Path = cur / name
                if not p.is_file():
                    continue
                data: TomlTable = load_toml_dict(p)
                if name == PYPROJECT_TOML_NAME:
                    data = get_table_value(
                        get_table_value(data, Toml.SECTION_TOOL), Toml.SECTION_XISTREAM
                    )
                    if not data:
                        continue
                dir_entries.append(p)
                logger.debug("Discovered config file: %s", p)
                if bool(data.get(Toml.KEY_ROOT, False)):
                    root_stop_here = True

            if dir_entries:
                per_dir.append(dir_entries)

            parent: Path = cur.parent
            if parent == cur or root_stop_here:
                break
            cur = parent

        ordered: list[Path] = []
        for dir_list in reversed(per_dir):
            ordered.extend(dir_list)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        anchor: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableReaderConfig:
        """Discover and merge configuration layers into a draft.

        Args:
            anchor (Path | None): Starting point for upward discovery (CWD if None).
            extra_config_files (Iterable[Path] | None): Explicit files merged after discovery.
            no_config (bool): If True, skip discovery (extra files are still merged).

        Returns:
            MutableReaderConfig: The merged draft, ready for CLI overrides and `freeze`.
        """
        draft: MutableReaderConfig = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(anchor or Path.cwd()):
                mc: MutableReaderConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            mc = cls.from_toml_file(Path(extra))
            if mc is not None:
                draft = draft.merge_with(mc)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableReaderConfig) -> MutableReaderConfig:
        """Return a new draft where values set in ``other`` override this draft."""
        return MutableReaderConfig(
            chunk_size=other.chunk_size if other.chunk_size is not None else self.chunk_size,
            max_include_depth=other.max_include_depth
            if other.max_include_depth is not None
            else self.max_include_depth,
            fetch_timeout=other.fetch_timeout
            if other.fetch_timeout is not None
            else self.fetch_timeout,
            allowed_schemes=other.allowed_schemes
            if other.allowed_schemes is not None
            else self.allowed_schemes,
            config_files=self.config_files + other.config_files,
        )

    def apply_cli_args(self, args: ArgsLike) -> MutableReaderConfig:
        """Apply CLI overrides in place; keys that are absent or None are ignored.

        Args:
            args (ArgsLike): Mapping with any of ``chunk_size``, ``max_include_depth``,
                ``fetch_timeout`` and ``allowed_schemes``.

        Returns:
            MutableReaderConfig: ``self``, for chaining.
        """
        if args.get("chunk_size") is not None:
            self.chunk_size = int(args["chunk_size"])
        if args.get("max_include_depth") is not None:
            self.max_include_depth = int(args["max_include_depth"])
        if args.get("fetch_timeout") is not None:
            self.fetch_timeout = float(args["fetch_timeout"])
        if args.get("allowed_schemes"):
            self.allowed_schemes = list(args["allowed_schemes"])
        return self


@functools.cache
def default_config() -> ReaderConfig:
    """Return the frozen built-in defaults (cached)."""
    return MutableReaderConfig.from_defaults().freeze()
