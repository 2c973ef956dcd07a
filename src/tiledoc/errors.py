# topmark:header:start
#
#   project      : Tiledoc
#   file         : errors.py
#   file_relpath : src/tiledoc/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for Tiledoc.

Usage:
    The dispatcher never lets these escape for the recoverable failure kinds
    (missing file, unknown format, malformed JSON). They are raised by the
    lower layers (decoders, config loading) and translated into reported
    diagnostics at the dispatcher boundary.
"""

from __future__ import annotations


class TiledocError(Exception):
    """Base class for all Tiledoc errors."""


class DocumentParseError(TiledocError):
    """Error raised when a source text cannot be decoded into a document.

    Attributes:
        line (int | None): 1-based line of the offending token, when known.
        column (int | None): 1-based column of the offending token, when known.
    """

    def __init__(self, message: str, *, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.line: int | None = line
        self.column: int | None = column

    @property
    def detail(self) -> str:
        """Return the message with its position appended when known."""
        msg = str(self)
        if self.line is None:
            return msg
        if self.column is None:
            return f"{msg} at line {self.line}"
        return f"{msg} at line {self.line}, column {self.column}"


class ConfigError(TiledocError):
    """Error for configuration errors (missing/unreadable/malformed config file)."""
