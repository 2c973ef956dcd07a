# topmark:header:start
#
#   project      : Tiledoc
#   file         : builtins.py
#   file_relpath : src/tiledoc/formats/builtins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in format rules for Tiled sources.

Tiled writes maps (``tmx``/``tmj``), tilesets (``tsx``/``tsj``), object
templates (``tx``/``tj``) and projects (``tiled-project``). Older files may use
plain ``xml`` or ``json``.
"""

from __future__ import annotations

from typing import Final

from tiledoc.constants import (
    DEFAULT_JSON_EXTENSIONS,
    DEFAULT_JSON_SIGNATURE,
    DEFAULT_XML_EXTENSIONS,
    DEFAULT_XML_SIGNATURE,
)
from tiledoc.formats.base import FormatRule, SourceFormat

XML_RULE: Final[FormatRule] = FormatRule(
    format=SourceFormat.XML,
    extensions=frozenset(DEFAULT_XML_EXTENSIONS),
    signature=DEFAULT_XML_SIGNATURE,
    description="Tiled XML map, tileset or template",
)

JSON_RULE: Final[FormatRule] = FormatRule(
    format=SourceFormat.JSON,
    extensions=frozenset(DEFAULT_JSON_EXTENSIONS),
    signature=DEFAULT_JSON_SIGNATURE,
    description="Tiled JSON map, tileset, template or project",
)

# Order matters: XML is consulted first, for extensions and for signatures.
BUILTIN_RULES: Final[tuple[FormatRule, ...]] = (XML_RULE, JSON_RULE)
