# topmark:header:start
#
#   project      : Tiledoc
#   file         : __init__.py
#   file_relpath : src/tiledoc/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tiledoc package.

Tiledoc turns a Tiled map-editor source reference (a map, tileset, template
or project file on disk or inside an archive) into a generic key/value
document. The format is decided by extension, falling back to the leading
bytes; XML is handed to a caller-supplied tree builder and JSON is decoded
directly.
"""

from __future__ import annotations

from tiledoc.config.model import Config, MutableConfig, load_config
from tiledoc.constants import TILEDOC_VERSION
from tiledoc.diagnostic import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticLog,
    FailureKind,
    FanoutReporter,
    LoggingReporter,
    Reporter,
)
from tiledoc.dispatcher import DispatchResult, FormatDispatcher, get_document
from tiledoc.document import Document, DocumentValue, ValueKind, is_document
from tiledoc.errors import ConfigError, DocumentParseError, TiledocError
from tiledoc.formats import FormatRule, SourceFormat, classify
from tiledoc.parsers import JsonDecoder, StdlibJsonDecoder, XmlTreeBuilder
from tiledoc.sources import ArchiveReader, ArchiveSource, FilesystemSource, SourceAccessor

__version__: str = TILEDOC_VERSION

__all__ = [
    "ArchiveReader",
    "ArchiveSource",
    "Config",
    "ConfigError",
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticLog",
    "DispatchResult",
    "Document",
    "DocumentParseError",
    "DocumentValue",
    "FailureKind",
    "FanoutReporter",
    "FilesystemSource",
    "FormatDispatcher",
    "FormatRule",
    "JsonDecoder",
    "LoggingReporter",
    "MutableConfig",
    "Reporter",
    "SourceAccessor",
    "SourceFormat",
    "StdlibJsonDecoder",
    "TiledocError",
    "ValueKind",
    "XmlTreeBuilder",
    "__version__",
    "classify",
    "get_document",
    "is_document",
    "load_config",
]
