# topmark:header:start
#
#   project      : Tiledoc
#   file         : loaders.py
#   file_relpath : src/tiledoc/config/io/loaders.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load TOML configuration sources.

This module provides the runtime defaults and I/O helpers for reading
on-disk TOML files (`tiledoc.toml` / `pyproject.toml`).

Parsing is done with `tomlkit` and returned as plain `dict` structures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

import tomlkit
from tomlkit.exceptions import TOMLKitError

from tiledoc.config.keys import Toml
from tiledoc.config.logging import get_logger
from tiledoc.constants import (
    DEFAULT_ENCODING,
    DEFAULT_JSON_EXTENSIONS,
    DEFAULT_JSON_SIGNATURE,
    DEFAULT_SNIFF_LENGTH,
    DEFAULT_XML_EXTENSIONS,
    DEFAULT_XML_SIGNATURE,
)
from tiledoc.errors import ConfigError

if TYPE_CHECKING:
    from pathlib import Path

    from tiledoc.config.logging import TiledocLogger

    from .types import TomlTable

logger: TiledocLogger = get_logger(__name__)


def load_defaults_dict() -> TomlTable:
    """Return Tiledoc's **runtime defaults** as a Python dict.

    This function performs **no I/O**. The bundled ``tiledoc-default.toml`` is
    an annotated template for humans; runtime defaults are defined in code so
    Tiledoc operates even if the packaged template is missing.

    Returns:
        A new TOML-table-compatible dict containing the runtime defaults.
    """
    return {
        Toml.SECTION_FORMATS: {
            Toml.KEY_XML_EXTENSIONS: list(DEFAULT_XML_EXTENSIONS),
            Toml.KEY_JSON_EXTENSIONS: list(DEFAULT_JSON_EXTENSIONS),
            Toml.KEY_XML_SIGNATURE: DEFAULT_XML_SIGNATURE,
            Toml.KEY_JSON_SIGNATURE: DEFAULT_JSON_SIGNATURE,
            Toml.KEY_SNIFF_LENGTH: DEFAULT_SNIFF_LENGTH,
        },
        Toml.SECTION_READING: {
            Toml.KEY_ENCODING: DEFAULT_ENCODING,
        },
        Toml.SECTION_DIAGNOSTICS: {
            Toml.KEY_REPORT_PARSE_FAILURES: True,
        },
    }


def parse_toml_text(text: str, *, source: str = "<string>") -> TomlTable:
    """Parse TOML text into a plain dict.

    Args:
        text (str): TOML document text.
        source (str): Name of the source used in error messages.

    Returns:
        TomlTable: The parsed document.

    Raises:
        ConfigError: If the text is not valid TOML.
    """
    try:
        doc: tomlkit.TOMLDocument = tomlkit.parse(text)
    except TOMLKitError as e:
        raise ConfigError(f"Error decoding TOML from {source}: {e}") from e
    data_any: Any = doc.unwrap()
    return cast("TomlTable", data_any) if isinstance(data_any, dict) else {}


def load_toml_dict(path: Path, *, strict: bool = False) -> TomlTable:
    """Load and parse a TOML file from the filesystem.

    Args:
        path (Path): Path to a TOML document (e.g., ``tiledoc.toml`` or ``pyproject.toml``).
        strict (bool): Raise instead of logging when the file cannot be read or parsed.

    Returns:
        TomlTable: The parsed TOML content; an empty dict on failure when not strict.

    Raises:
        ConfigError: When ``strict`` is set and the file is unreadable or malformed.
    """
    try:
        text: str = path.read_text(encoding="utf-8")
        return parse_toml_text(text, source=str(path))
    except (OSError, UnicodeDecodeError) as e:
        if strict:
            raise ConfigError(f"Error loading TOML from {path}: {e}") from e
        logger.error("Error loading TOML from %s: %s", path, e)
        return {}
    except ConfigError as e:
        if strict:
            raise
        logger.error("%s", e)
        return {}
