# topmark:header:start
#
#   project      : Tiledoc
#   file         : keys.py
#   file_relpath : src/tiledoc/config/keys.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Canonical TOML section and key names for Tiledoc configuration.

This module defines the authoritative string constants used when reading,
writing, and validating Tiledoc configuration from TOML sources
(``tiledoc.toml`` and ``[tool.tiledoc]`` in ``pyproject.toml``).

Design notes:
    - Keys defined here represent *external configuration API*.
    - Renaming or removing keys is a breaking change.
"""

from __future__ import annotations

from typing import Final


class Toml:
    """TOML section names and keys used by Tiledoc configuration.

    The ordering of constants mirrors `tiledoc-default.toml` to make it easy to
    audit schema changes and keep defaults/docs/parsing aligned.
    """

    # pyproject.toml nesting
    SECTION_TOOL: Final[str] = "tool"
    SECTION_TILEDOC: Final[str] = "tiledoc"

    # Root / discovery
    KEY_ROOT: Final[str] = "root"

    # [formats]
    SECTION_FORMATS: Final[str] = "formats"

    KEY_XML_EXTENSIONS: Final[str] = "xml_extensions"
    KEY_JSON_EXTENSIONS: Final[str] = "json_extensions"
    KEY_XML_SIGNATURE: Final[str] = "xml_signature"
    KEY_JSON_SIGNATURE: Final[str] = "json_signature"
    KEY_SNIFF_LENGTH: Final[str] = "sniff_length"

    # [reading]
    SECTION_READING: Final[str] = "reading"

    KEY_ENCODING: Final[str] = "encoding"

    # [diagnostics]
    SECTION_DIAGNOSTICS: Final[str] = "diagnostics"

    KEY_REPORT_PARSE_FAILURES: Final[str] = "report_parse_failures"
