# topmark:header:start
#
#   project      : Tiledoc
#   file         : __init__.py
#   file_relpath : src/tiledoc/diagnostic/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Diagnostics for Tiledoc.

Re-exports the diagnostic model, the `Reporter` protocol and the bundled
reporter implementations.
"""

from __future__ import annotations

from tiledoc.diagnostic.model import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticLog,
    DiagnosticStats,
    FailureKind,
    FrozenDiagnosticLog,
    compute_diagnostic_stats,
    failure_message,
)
from tiledoc.diagnostic.reporters import FanoutReporter, LoggingReporter
from tiledoc.diagnostic.types import Reporter

__all__ = [
    "Diagnostic",
    "DiagnosticLevel",
    "DiagnosticLog",
    "DiagnosticStats",
    "FailureKind",
    "FanoutReporter",
    "FrozenDiagnosticLog",
    "LoggingReporter",
    "Reporter",
    "compute_diagnostic_stats",
    "failure_message",
]
