# topmark:header:start
#
#   project      : Tiledoc
#   file         : types.py
#   file_relpath : src/tiledoc/diagnostic/types.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Shared typing helpers for Tiledoc diagnostics.

The dispatcher depends on the structural `Reporter` protocol only, so callers
can inject a logger-backed reporter, an in-memory `DiagnosticLog`, or their
own sink without subclassing anything.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from tiledoc.diagnostic.model import FailureKind


@runtime_checkable
class Reporter(Protocol):
    """Sink for recoverable dispatcher failures."""

    def report(self, kind: FailureKind, path: str, message: str) -> None:
        """Record one failure.

        Args:
            kind (FailureKind): The failure kind.
            path (str): The requested source path.
            message (str): Human-readable message (always contains ``path``).
        """
        ...
