# topmark:header:start
#
#   project      : Tiledoc
#   file         : reporters.py
#   file_relpath : src/tiledoc/diagnostic/reporters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Reporter implementations.

`LoggingReporter` is the default sink of the dispatcher: it writes each
failure to a Tiledoc logger at ERROR level. `FanoutReporter` forwards to
several reporters, e.g. to log and collect at the same time.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from tiledoc.config.logging import get_logger

if TYPE_CHECKING:
    from tiledoc.config.logging import TiledocLogger
    from tiledoc.diagnostic.model import FailureKind
    from tiledoc.diagnostic.types import Reporter


class LoggingReporter:
    """Reporter that writes failures to a logger."""

    def __init__(self, logger: TiledocLogger | None = None) -> None:
        self.logger: TiledocLogger = logger or get_logger("tiledoc")

    def report(self, kind: FailureKind, path: str, message: str) -> None:
        """Log ``message`` at ERROR level.

        Args:
            kind (FailureKind): The failure kind (passed to handlers as ``extra``).
            path (str): The requested source path.
            message (str): The message to log.
        """
        self.logger.error(
            "ERROR: %s",
            message,
            extra={"tiledoc_failure": kind.value, "tiledoc_path": path},
        )


class FanoutReporter:
    """Reporter that forwards every failure to each wrapped reporter, in order."""

    def __init__(self, *reporters: Reporter) -> None:
        self.reporters: tuple[Reporter, ...] = reporters

    def report(self, kind: FailureKind, path: str, message: str) -> None:
        """Forward the failure to all wrapped reporters.

        Args:
            kind (FailureKind): The failure kind.
            path (str): The requested source path.
            message (str): Human-readable message.
        """
        for reporter in self.reporters:
            reporter.report(kind, path, message)
