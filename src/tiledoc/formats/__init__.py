# topmark:header:start
#
#   project      : Tiledoc
#   file         : __init__.py
#   file_relpath : src/tiledoc/formats/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Format rules and classification for Tiled sources.

Submodules:
    base: `SourceFormat` and `FormatRule`.
    builtins: the XML and JSON rules for Tiled file extensions.
    classify: extension matching and byte sniffing.
"""

from __future__ import annotations

from tiledoc.formats.base import FormatRule, SourceFormat
from tiledoc.formats.builtins import BUILTIN_RULES, JSON_RULE, XML_RULE
from tiledoc.formats.classify import classify, file_extension, match_extension, sniff_format

__all__ = [
    "BUILTIN_RULES",
    "JSON_RULE",
    "XML_RULE",
    "FormatRule",
    "SourceFormat",
    "classify",
    "file_extension",
    "match_extension",
    "sniff_format",
]
