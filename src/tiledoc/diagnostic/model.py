# topmark:header:start
#
#   project      : Tiledoc
#   file         : model.py
#   file_relpath : src/tiledoc/diagnostic/model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Core diagnostic types and helpers for Tiledoc.

This module defines the diagnostic primitives used to report why a source
reference could not be turned into a document.

Sections:
    * FailureKind: the recoverable failure taxonomy of the dispatcher.
    * DiagnosticLevel: severity levels.
    * Diagnostic: immutable structured diagnostic payload.
    * DiagnosticStats: aggregated per-level counts.
    * DiagnosticLog: mutable collection that doubles as an in-memory reporter.
    * FrozenDiagnosticLog: immutable snapshot container for frozen configs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from tiledoc.config.logging import get_logger

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from tiledoc.config.logging import TiledocLogger


logger: TiledocLogger = get_logger(__name__)

CONTINUE_SUFFIX: str = "-> Continuing but result may be unusable"


class FailureKind(Enum):
    """Recoverable failures of a single resolution attempt.

    Attributes:
        NOT_FOUND: The source reference does not exist (or cannot be read).
        UNKNOWN_FORMAT: Neither the extension nor the leading bytes identify a format.
        PARSE_FAILURE: The source was classified as JSON but is not valid JSON.
    """

    NOT_FOUND = "not_found"
    UNKNOWN_FORMAT = "unknown_format"
    PARSE_FAILURE = "parse_failure"


class DiagnosticLevel(Enum):
    """Severity levels for diagnostics.

    Levels are ordered by importance: ERROR > WARNING > INFO.
    """

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class Diagnostic:
    """Structured diagnostic with a severity level and message.

    ``kind`` and ``path`` are set for dispatcher failures and left ``None`` for
    config warnings.
    """

    level: DiagnosticLevel
    message: str
    kind: FailureKind | None = None
    path: str | None = None


@dataclass(frozen=True)
class DiagnosticStats:
    """Aggregated counts for diagnostics by severity level."""

    n_info: int
    n_warning: int
    n_error: int

    @property
    def total(self) -> int:
        """Return the total count of diagnostics."""
        return self.n_info + self.n_warning + self.n_error


def failure_message(kind: FailureKind, path: str, detail: str | None = None) -> str:
    """Return the human-readable message for a dispatcher failure.

    Args:
        kind (FailureKind): The failure being reported.
        path (str): The requested source path.
        detail (str | None): Optional extra information (e.g. a JSON error position).

    Returns:
        str: The message text; it always contains ``path``.
    """
    if kind is FailureKind.NOT_FOUND:
        return f"File '{path}' not found. {CONTINUE_SUFFIX}"
    if kind is FailureKind.UNKNOWN_FORMAT:
        return f"File '{path}' has an unknown type. {CONTINUE_SUFFIX}"
    reason: str = f" ({detail})" if detail else ""
    return f"File '{path}' is not valid JSON{reason}. {CONTINUE_SUFFIX}"


@dataclass
class DiagnosticLog:
    """Mutable collection of diagnostics.

    Besides the level helpers used by the config layer, the log implements the
    `Reporter` protocol so it can be injected into a dispatcher to capture
    failures in memory instead of (or in addition to) logging them.
    """

    items: list[Diagnostic] = field(default_factory=lambda: [])

    @classmethod
    def from_iterable(cls, diagnostics: Iterable[Diagnostic]) -> DiagnosticLog:
        """Create a DiagnosticLog from an iterable of diagnostics.

        Args:
            diagnostics: Existing diagnostics (e.g., from a frozen snapshot).

        Returns:
            A new DiagnosticLog containing the provided diagnostics.
        """
        return cls(items=list(diagnostics))

    def freeze(self) -> FrozenDiagnosticLog:
        """Return an immutable snapshot of this log's diagnostics."""
        return FrozenDiagnosticLog(items=tuple(self.items))

    def _add(self, diagnostic: Diagnostic) -> None:
        self.items.append(diagnostic)
        logger.trace("Adding [%s]: %r", diagnostic.level.value, diagnostic.message)

    def add_info(self, message: str) -> None:
        """Add an ``info`` diagnostic to the diagnostic log.

        Args:
            message: The diagnostic message.
        """
        self._add(Diagnostic(DiagnosticLevel.INFO, message))

    def add_warning(self, message: str) -> None:
        """Add a ``warning`` diagnostic to the diagnostic log.

        Args:
            message: The diagnostic message.
        """
        self._add(Diagnostic(DiagnosticLevel.WARNING, message))

    def add_error(self, message: str) -> None:
        """Add an ``error`` diagnostic to the diagnostic log.

        Args:
            message: The diagnostic message.
        """
        self._add(Diagnostic(DiagnosticLevel.ERROR, message))

    def report(self, kind: FailureKind, path: str, message: str) -> None:
        """Record a dispatcher failure as an ``error`` diagnostic.

        Args:
            kind: The failure kind.
            path: The requested source path.
            message: The human-readable message.
        """
        self._add(Diagnostic(DiagnosticLevel.ERROR, message, kind=kind, path=path))

    def kinds(self) -> list[FailureKind]:
        """Return the failure kinds recorded so far, in insertion order."""
        return [d.kind for d in self.items if d.kind is not None]

    def stats(self) -> DiagnosticStats:
        """Return per-level counts for diagnostics in this log."""
        return compute_diagnostic_stats(self.items)

    def has_warning(self) -> bool:
        """Return True if the DiagnosticLog contains warning diagnostics."""
        return any(d.level == DiagnosticLevel.WARNING for d in self.items)

    def has_error(self) -> bool:
        """Return True if the DiagnosticLog contains error diagnostics."""
        return any(d.level == DiagnosticLevel.ERROR for d in self.items)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by severity.

        Returns:
            Mapping with keys ``"info"``, ``"warning"``, and ``"error"``
            reflecting the number of diagnostics at each level.
        """
        return diagnostics_counts_to_dict(self.items)

    def clear(self) -> None:
        """Drop all collected diagnostics."""
        self.items.clear()

    def __iter__(self) -> Iterator[Diagnostic]:
        """Iterate over all diagnostics stored in this log, in insertion order."""
        return iter(self.items)

    def __len__(self) -> int:
        """Return the number of diagnostics stored in this log."""
        return len(self.items)


@dataclass(frozen=True, slots=True)
class FrozenDiagnosticLog:
    """Immutable diagnostic container.

    `FrozenDiagnosticLog` is the immutable counterpart to `DiagnosticLog`. It is
    stored on frozen snapshots (e.g., `Config`) where mutation is not permitted.
    """

    items: tuple[Diagnostic, ...] = ()

    def __iter__(self) -> Iterator[Diagnostic]:
        """Iterate over contained diagnostics in insertion order."""
        return iter(self.items)

    def __len__(self) -> int:
        """Return the number of contained diagnostics."""
        return len(self.items)

    def stats(self) -> DiagnosticStats:
        """Return aggregated per-level counts for the contained diagnostics."""
        return compute_diagnostic_stats(self.items)

    def to_dict(self) -> dict[str, int]:
        """Return a JSON-friendly mapping of counts by severity."""
        return diagnostics_counts_to_dict(self.items)


def compute_diagnostic_stats(diagnostics: Iterable[Diagnostic]) -> DiagnosticStats:
    """Return per-level counts for a sequence of diagnostics.

    Args:
        diagnostics: the diagnostic log.

    Returns:
        Per-level counts for diagnostics in this log.
    """
    items: list[Diagnostic] = list(diagnostics)
    n_info: int = sum(1 for d in items if d.level == DiagnosticLevel.INFO)
    n_warn: int = sum(1 for d in items if d.level == DiagnosticLevel.WARNING)
    n_err: int = sum(1 for d in items if d.level == DiagnosticLevel.ERROR)
    return DiagnosticStats(n_info=n_info, n_warning=n_warn, n_error=n_err)


def diagnostics_counts_to_dict(diagnostics: Iterable[Diagnostic]) -> dict[str, int]:
    """Return a JSON-friendly mapping of counts by severity for any iterable."""
    stats: DiagnosticStats = compute_diagnostic_stats(diagnostics)
    return {
        "info": stats.n_info,
        "warning": stats.n_warning,
        "error": stats.n_error,
    }
