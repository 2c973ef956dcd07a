# topmark:header:start
#
#   project      : Tiledoc
#   file         : model.py
#   file_relpath : src/tiledoc/config/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration model for Tiledoc.

`MutableConfig` is the builder used while loading and merging layers
(defaults, discovered project files, explicit files). `MutableConfig.freeze`
produces the immutable `Config` snapshot consumed by the dispatcher;
`Config.thaw` goes the other way.

Invalid values in a config file never abort loading: a warning is recorded in
the config's diagnostics and the previous layer's value is kept.
"""

from __future__ import annotations

import codecs
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from tiledoc.config.io import (
    get_bool_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_list_value_or_none_checked,
    get_string_value_or_none_checked,
    get_table_value,
    load_defaults_dict,
    load_toml_dict,
    to_toml,
)
from tiledoc.config.keys import Toml
from tiledoc.config.logging import get_logger
from tiledoc.constants import (
    DEFAULT_ENCODING,
    DEFAULT_JSON_EXTENSIONS,
    DEFAULT_JSON_SIGNATURE,
    DEFAULT_SNIFF_LENGTH,
    DEFAULT_XML_EXTENSIONS,
    DEFAULT_XML_SIGNATURE,
    PYPROJECT_CONFIG_NAME,
    TOOL_CONFIG_NAME,
)
from tiledoc.diagnostic.model import DiagnosticLog, FrozenDiagnosticLog
from tiledoc.errors import ConfigError
from tiledoc.formats.base import FormatRule, SourceFormat

if TYPE_CHECKING:
    from collections.abc import Iterable

    from tiledoc.config.io import TomlTable
    from tiledoc.config.logging import TiledocLogger

logger: TiledocLogger = get_logger(__name__)


# ------------------ Immutable runtime config ------------------


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable runtime configuration for Tiledoc.

    Attributes:
        xml_extensions (tuple[str, ...]): Extensions classified as XML.
        json_extensions (tuple[str, ...]): Extensions classified as JSON.
        xml_signature (str): Leading text identifying XML content.
        json_signature (str): Leading text identifying JSON content.
        sniff_length (int): Number of leading bytes read when sniffing.
        encoding (str): Encoding used to decode sniffed bytes and JSON text.
        report_parse_failures (bool): Whether malformed JSON is reported.
        config_files (tuple[str, ...]): Config files merged into this snapshot.
        diagnostics (FrozenDiagnosticLog): Warnings collected while loading.
    """

    xml_extensions: tuple[str, ...] = DEFAULT_XML_EXTENSIONS
    json_extensions: tuple[str, ...] = DEFAULT_JSON_EXTENSIONS
    xml_signature: str = DEFAULT_XML_SIGNATURE
    json_signature: str = DEFAULT_JSON_SIGNATURE
    sniff_length: int = DEFAULT_SNIFF_LENGTH
    encoding: str = DEFAULT_ENCODING
    report_parse_failures: bool = True
    config_files: tuple[str, ...] = ()
    diagnostics: FrozenDiagnosticLog = field(default_factory=FrozenDiagnosticLog)

    def __post_init__(self) -> None:
        """Reject values the dispatcher cannot work with.

        `MutableConfig.freeze` sanitizes first, so this only fires for
        snapshots built directly.

        Raises:
            ConfigError: If ``sniff_length`` is not positive or ``encoding``
                is unknown.
        """
        if self.sniff_length <= 0:
            raise ConfigError(f"sniff_length must be positive, got {self.sniff_length}")
        try:
            codecs.lookup(self.encoding)
        except LookupError as e:
            raise ConfigError(f"Unknown encoding: {self.encoding!r}") from e

    def rules(self) -> tuple[FormatRule, ...]:
        """Return the format rules described by this config, XML first."""
        return (
            FormatRule(
                format=SourceFormat.XML,
                extensions=frozenset(self.xml_extensions),
                signature=self.xml_signature,
                description="XML source",
            ),
            FormatRule(
                format=SourceFormat.JSON,
                extensions=frozenset(self.json_extensions),
                signature=self.json_signature,
                description="JSON source",
            ),
        )

    def to_toml_dict(self) -> TomlTable:
        """Return this config as a TOML-compatible dict (same layout as the defaults)."""
        return {
            Toml.SECTION_FORMATS: {
                Toml.KEY_XML_EXTENSIONS: list(self.xml_extensions),
                Toml.KEY_JSON_EXTENSIONS: list(self.json_extensions),
                Toml.KEY_XML_SIGNATURE: self.xml_signature,
                Toml.KEY_JSON_SIGNATURE: self.json_signature,
                Toml.KEY_SNIFF_LENGTH: self.sniff_length,
            },
            Toml.SECTION_READING: {
                Toml.KEY_ENCODING: self.encoding,
            },
            Toml.SECTION_DIAGNOSTICS: {
                Toml.KEY_REPORT_PARSE_FAILURES: self.report_parse_failures,
            },
        }

    def to_toml(self) -> str:
        """Render this config as a TOML document."""
        return to_toml(self.to_toml_dict())

    def thaw(self) -> MutableConfig:
        """Return a mutable copy of this frozen config.

        Returns:
            MutableConfig: A mutable builder initialized from this snapshot.
        """
        return MutableConfig(
            xml_extensions=list(self.xml_extensions),
            json_extensions=list(self.json_extensions),
            xml_signature=self.xml_signature,
            json_signature=self.json_signature,
            sniff_length=self.sniff_length,
            encoding=self.encoding,
            report_parse_failures=self.report_parse_failures,
            config_files=list(self.config_files),
            diagnostics=DiagnosticLog.from_iterable(self.diagnostics),
        )


# -------------------------- Mutable builder --------------------------


@dataclass
class MutableConfig:
    """Mutable configuration used during discovery and merging.

    ``None`` (or an empty list) means "not set by this layer"; unset values
    fall through to lower layers in `merge_with` and to the built-in defaults
    in `freeze`.
    """

    xml_extensions: list[str] = field(default_factory=lambda: [])
    json_extensions: list[str] = field(default_factory=lambda: [])
    xml_signature: str | None = None
    json_signature: str | None = None
    sniff_length: int | None = None
    encoding: str | None = None
    report_parse_failures: bool | None = None
    # Root flag: stop upward discovery after the directory declaring it.
    root: bool | None = None
    config_files: list[str] = field(default_factory=lambda: [])

    # Collected diagnostics while loading / merging config.
    diagnostics: DiagnosticLog = field(default_factory=DiagnosticLog)

    # ---------------------------- Build/freeze ----------------------------
    def freeze(self) -> Config:
        """Freeze this mutable builder into an immutable Config."""
        self.sanitize()
        return Config(
            xml_extensions=tuple(self.xml_extensions or DEFAULT_XML_EXTENSIONS),
            json_extensions=tuple(self.json_extensions or DEFAULT_JSON_EXTENSIONS),
            xml_signature=(
                self.xml_signature if self.xml_signature is not None else DEFAULT_XML_SIGNATURE
            ),
            json_signature=(
                self.json_signature if self.json_signature is not None else DEFAULT_JSON_SIGNATURE
            ),
            sniff_length=self.sniff_length or DEFAULT_SNIFF_LENGTH,
            encoding=self.encoding or DEFAULT_ENCODING,
            report_parse_failures=(
                self.report_parse_failures if self.report_parse_failures is not None else True
            ),
            config_files=tuple(self.config_files),
            diagnostics=self.diagnostics.freeze(),
        )

    def sanitize(self) -> None:
        """Normalize values in place and record warnings for inconsistent ones.

        - Extensions lose a leading dot (``".tmx"`` -> ``"tmx"``).
        - An extension claimed by both formats stays XML (XML rules come first).
        - A non-positive sniff length, or an unknown encoding, is dropped.
        - A signature longer than the sniff length can never match; this is
          reported but kept.
        """
        self.xml_extensions = self._normalize_extensions(
            self.xml_extensions, Toml.KEY_XML_EXTENSIONS
        )
        self.json_extensions = self._normalize_extensions(
            self.json_extensions, Toml.KEY_JSON_EXTENSIONS
        )

        overlap: list[str] = sorted(set(self.xml_extensions) & set(self.json_extensions))
        if overlap:
            self._warn(
                "Extensions listed for both XML and JSON are classified as XML: "
                + ", ".join(overlap)
            )

        if self.sniff_length is not None and self.sniff_length <= 0:
            self._warn(
                f"[{Toml.SECTION_FORMATS}].{Toml.KEY_SNIFF_LENGTH} must be positive, "
                f"got {self.sniff_length}"
            )
            self.sniff_length = None

        if self.encoding is not None:
            try:
                codecs.lookup(self.encoding)
            except LookupError:
                self._warn(
                    f"Unknown encoding in [{Toml.SECTION_READING}].{Toml.KEY_ENCODING}: "
                    f"{self.encoding!r}"
                )
                self.encoding = None

        length: int = self.sniff_length or DEFAULT_SNIFF_LENGTH
        for key, sig in (
            (Toml.KEY_XML_SIGNATURE, self.xml_signature),
            (Toml.KEY_JSON_SIGNATURE, self.json_signature),
        ):
            if sig is not None and len(sig.encode("utf-8")) > length:
                self._warn(
                    f"[{Toml.SECTION_FORMATS}].{key} ({sig!r}) is longer than "
                    f"{Toml.KEY_SNIFF_LENGTH} ({length}) and will never match"
                )

    def _warn(self, message: str) -> None:
        logger.warning("%s", message)
        self.diagnostics.add_warning(message)

    def _normalize_extensions(self, values: list[str], key: str) -> list[str]:
        out: list[str] = []
        for ext in values:
            norm: str = ext[1:] if ext.startswith(".") else ext
            if norm != ext:
                logger.debug("Stripping leading dot from %r in %s", ext, key)
            if not norm:
                self._warn(f"Ignoring empty extension in [{Toml.SECTION_FORMATS}].{key}")
                continue
            if norm not in out:
                out.append(norm)
        return out

    # --------------------------- Loaders/parsers --------------------------
    @classmethod
    def from_defaults(cls) -> MutableConfig:
        """Return a builder populated with the runtime defaults."""
        return cls.from_toml_dict(load_defaults_dict())

    @classmethod
    def from_toml_dict(cls, data: TomlTable, config_file: Path | None = None) -> MutableConfig:
        """Create a draft config from a parsed TOML dict.

        Args:
            data (TomlTable): The parsed TOML data (the ``[tool.tiledoc]`` table
                for ``pyproject.toml``).
            config_file (Path | None): Optional path to the source TOML file.

        Returns:
            MutableConfig: The resulting MutableConfig instance.
        """
        draft: MutableConfig = cls()
        if config_file is not None:
            draft.config_files = [str(config_file)]

        diags: DiagnosticLog = draft.diagnostics

        formats_tbl: TomlTable = get_table_value(data, Toml.SECTION_FORMATS)
        logger.trace("TOML [formats]: %s", formats_tbl)
        where: str = f"[{Toml.SECTION_FORMATS}]"

        draft.xml_extensions = (
            get_string_list_value_or_none_checked(
                formats_tbl, Toml.KEY_XML_EXTENSIONS, where=where, diagnostics=diags, logger=logger
            )
            or []
        )
        draft.json_extensions = (
            get_string_list_value_or_none_checked(
                formats_tbl, Toml.KEY_JSON_EXTENSIONS, where=where, diagnostics=diags, logger=logger
            )
            or []
        )
        draft.xml_signature = get_string_value_or_none_checked(
            formats_tbl, Toml.KEY_XML_SIGNATURE, where=where, diagnostics=diags, logger=logger
        )
        draft.json_signature = get_string_value_or_none_checked(
            formats_tbl, Toml.KEY_JSON_SIGNATURE, where=where, diagnostics=diags, logger=logger
        )
        draft.sniff_length = get_int_value_or_none_checked(
            formats_tbl, Toml.KEY_SNIFF_LENGTH, where=where, diagnostics=diags, logger=logger
        )

        reading_tbl: TomlTable = get_table_value(data, Toml.SECTION_READING)
        logger.trace("TOML [reading]: %s", reading_tbl)
        draft.encoding = get_string_value_or_none_checked(
            reading_tbl,
            Toml.KEY_ENCODING,
            where=f"[{Toml.SECTION_READING}]",
            diagnostics=diags,
            logger=logger,
        )

        diagnostics_tbl: TomlTable = get_table_value(data, Toml.SECTION_DIAGNOSTICS)
        logger.trace("TOML [diagnostics]: %s", diagnostics_tbl)
        draft.report_parse_failures = get_bool_value_or_none_checked(
            diagnostics_tbl,
            Toml.KEY_REPORT_PARSE_FAILURES,
            where=f"[{Toml.SECTION_DIAGNOSTICS}]",
            diagnostics=diags,
            logger=logger,
        )

        draft.root = get_bool_value_or_none_checked(
            data, Toml.KEY_ROOT, where="<root>", diagnostics=diags, logger=logger
        )

        return draft

    @classmethod
    def from_toml_file(cls, path: Path, *, strict: bool = False) -> MutableConfig | None:
        """Load configuration from a single TOML file.

        Supports both ``tiledoc.toml`` and ``pyproject.toml`` files, extracting
        the ``[tool.tiledoc]`` section from the latter.

        Args:
            path (Path): Path to the TOML file.
            strict (bool): Raise `ConfigError` instead of returning None on failure.

        Returns:
            MutableConfig | None: The draft, or None if the file is unusable
                (unreadable, malformed, or a pyproject.toml without ``[tool.tiledoc]``).

        Raises:
            ConfigError: When ``strict`` is set and the file is unusable.
        """
        logger.debug("Creating MutableConfig from TOML config: %s", path)

        toml_data: TomlTable = load_toml_dict(path, strict=strict)

        if path.name == PYPROJECT_CONFIG_NAME:
            tool_section: TomlTable = get_table_value(
                get_table_value(toml_data, Toml.SECTION_TOOL), Toml.SECTION_TILEDOC
            )
            if not tool_section:
                if strict:
                    raise ConfigError(f"[tool.tiledoc] section missing or malformed in {path}")
                logger.debug("[tool.tiledoc] section missing in %s", path)
                return None
            toml_data = tool_section
        elif not toml_data and not strict and not path.is_file():
            return None

        return cls.from_toml_dict(toml_data, config_file=path)

    @classmethod
    def discover_local_config_files(cls, start: Path) -> list[Path]:
        """Return config files discovered by walking upward from ``start``.

        Files are returned **root-most first** so a nearest-last-wins merge
        gives precedence to the closest directory. Within one directory,
        ``pyproject.toml`` comes before ``tiledoc.toml``. A config declaring
        ``root = true`` stops the walk after its directory.

        Args:
            start (Path): Directory (or file, whose parent is used) to start from.

        Returns:
            list[Path]: Discovered config files, root-most first.
        """
        anchor: Path = start.resolve()
        if anchor.is_file():
            anchor = anchor.parent

        per_dir: list[list[Path]] = []
        for directory in (anchor, *anchor.parents):
            found: list[Path] = []
            stop = False
            for name in (PYPROJECT_CONFIG_NAME, TOOL_CONFIG_NAME):
                candidate: Path = directory / name
                if not candidate.is_file():
                    continue
                draft: MutableConfig | None = cls.from_toml_file(candidate)
                if draft is None:
                    continue
                found.append(candidate)
                stop = stop or bool(draft.root)
            if found:
                per_dir.append(found)
            if stop:
                break

        ordered: list[Path] = [p for found in reversed(per_dir) for p in found]
        logger.debug("Discovered config files: %s", ordered)
        return ordered

    @classmethod
    def load_merged(
        cls,
        *,
        start: Path | None = None,
        extra_config_files: Iterable[Path] | None = None,
        no_config: bool = False,
    ) -> MutableConfig:
        """Discover and merge configuration layers into a draft `MutableConfig`.

        Merge order (lowest -> highest precedence):
            1) Built-in defaults
            2) Project configs discovered upward, root -> ``start``
            3) Extra config files, in the order given (these must exist)

        Args:
            start (Path | None): Discovery anchor; defaults to the current directory.
            extra_config_files (Iterable[Path] | None): Explicit files merged last.
            no_config (bool): Skip discovery.

        Returns:
            MutableConfig: A mutable configuration draft ready to be frozen.

        Raises:
            ConfigError: If an extra config file is missing or malformed.
        """
        draft: MutableConfig = cls.from_defaults()

        if not no_config:
            for cfg_path in cls.discover_local_config_files(start or Path.cwd()):
                mc: MutableConfig | None = cls.from_toml_file(cfg_path)
                if mc is not None:
                    draft = draft.merge_with(mc)

        for extra in extra_config_files or ():
            explicit: MutableConfig | None = cls.from_toml_file(Path(extra), strict=True)
            if explicit is not None:
                draft = draft.merge_with(explicit)

        return draft

    # ------------------------------- Merging -------------------------------
    def merge_with(self, other: MutableConfig) -> MutableConfig:
        """Return a new draft where values set in ``other`` override this draft.

        Args:
            other (MutableConfig): The config whose values override those of this draft.

        Returns:
            MutableConfig: A new mutable configuration representing the merged result.
        """
        return MutableConfig(
            xml_extensions=list(other.xml_extensions or self.xml_extensions),
            json_extensions=list(other.json_extensions or self.json_extensions),
            xml_signature=(
                other.xml_signature if other.xml_signature is not None else self.xml_signature
            ),
            json_signature=(
                other.json_signature if other.json_signature is not None else self.json_signature
            ),
            sniff_length=(
                other.sniff_length if other.sniff_length is not None else self.sniff_length
            ),
            encoding=other.encoding if other.encoding is not None else self.encoding,
            report_parse_failures=(
                other.report_parse_failures
                if other.report_parse_failures is not None
                else self.report_parse_failures
            ),
            root=other.root if other.root is not None else self.root,
            config_files=self.config_files + other.config_files,
            diagnostics=DiagnosticLog.from_iterable([*self.diagnostics, *other.diagnostics]),
        )


def load_config(
    path: Path | str | None = None,
    *,
    start: Path | None = None,
    no_config: bool = False,
) -> Config:
    """Return a frozen config from defaults, discovered files and an optional explicit file.

    Args:
        path (Path | str | None): Explicit ``tiledoc.toml`` or ``pyproject.toml``
            merged last.
        start (Path | None): Discovery anchor; defaults to the current directory.
        no_config (bool): Skip discovery (the explicit file is still honored).

    Returns:
        Config: The frozen configuration.

    Raises:
        ConfigError: If ``path`` is given but missing or malformed.
    """
    extra: list[Path] = [Path(path)] if path is not None else []
    return MutableConfig.load_merged(
        start=start, extra_config_files=extra, no_config=no_config
    ).freeze()
