# topmark:header:start
#
#   project      : Tiledoc
#   file         : base.py
#   file_relpath : src/tiledoc/formats/base.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Source format definitions.

Defines `SourceFormat`, the classification result, and `FormatRule`, which
describes how a format is recognized: by exact filename extension first, and
by a leading text signature when the extension is not recognized.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SourceFormat(Enum):
    """Classification of a source file.

    Attributes:
        XML: Handled by the XML tree builder.
        JSON: Decoded as JSON text.
        UNKNOWN: Neither the extension nor the leading bytes identify a format.
    """

    XML = "xml"
    JSON = "json"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class FormatRule:
    """Recognition rule for one source format.

    Attributes:
        format (SourceFormat): Format produced when the rule matches.
        extensions (frozenset[str]): Filename extensions without the leading dot
            (e.g. ``"tmx"``, ``"tiled-project"``). Matching is exact and
            case-sensitive: ``MAP.TMX`` is not an XML extension.
        signature (str): Text prefix the decoded leading bytes must start with
            when sniffing. An empty signature never matches.
        description (str): Human-readable description.
    """

    format: SourceFormat
    extensions: frozenset[str]
    signature: str
    description: str = ""

    def matches_extension(self, extension: str) -> bool:
        """Return True if ``extension`` is one of this rule's extensions."""
        return extension in self.extensions

    def matches_signature(self, head: str) -> bool:
        """Return True if the decoded leading text starts with this rule's signature."""
        return bool(self.signature) and head.startswith(self.signature)
