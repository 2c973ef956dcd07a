# topmark:header:start
#
#   project      : Tiledoc
#   file         : constants.py
#   file_relpath : src/tiledoc/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tiledoc Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

TILEDOC_VERSION: str = get_version("tiledoc")

TOOL_CONFIG_NAME: str = "tiledoc.toml"
PYPROJECT_CONFIG_NAME: str = "pyproject.toml"

# Tiled map, tileset, template and project extensions (no leading dot, case-sensitive).
DEFAULT_XML_EXTENSIONS: Final[tuple[str, ...]] = ("tmx", "tsx", "xml", "tx")
DEFAULT_JSON_EXTENSIONS: Final[tuple[str, ...]] = ("tmj", "tsj", "json", "tj", "tiled-project")

# Leading text used when the extension is not recognized.
DEFAULT_XML_SIGNATURE: Final[str] = "<?xml "
DEFAULT_JSON_SIGNATURE: Final[str] = '{ "'

# Number of leading bytes read for sniffing.
DEFAULT_SNIFF_LENGTH: Final[int] = 12

DEFAULT_ENCODING: Final[str] = "utf-8"

# Skipped at the start of JSON text.
BYTE_ORDER_MARK: Final[str] = "\ufeff"
