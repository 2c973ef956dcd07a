# topmark:header:start
#
#   project      : Tiledoc
#   file         : test_diagnostics.py
#   file_relpath : tests/diagnostic/test_diagnostics.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for the diagnostic model and reporters."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tests.conftest import parametrize
from tiledoc.config.logging import get_logger
from tiledoc.diagnostic import (
    Diagnostic,
    DiagnosticLevel,
    DiagnosticLog,
    FailureKind,
    FanoutReporter,
    LoggingReporter,
    Reporter,
    failure_message,
)

if TYPE_CHECKING:
    import pytest


@parametrize(
    "kind, detail, expected",
    [
        (
            FailureKind.NOT_FOUND,
            None,
            "File 'maps/a.tmx' not found. -> Continuing but result may be unusable",
        ),
        (
            FailureKind.UNKNOWN_FORMAT,
            None,
            "File 'maps/a.tmx' has an unknown type. -> Continuing but result may be unusable",
        ),
        (
            FailureKind.PARSE_FAILURE,
            "Expecting value at line 1, column 8",
            "File 'maps/a.tmx' is not valid JSON (Expecting value at line 1, column 8)."
            " -> Continuing but result may be unusable",
        ),
        (
            FailureKind.PARSE_FAILURE,
            None,
            "File 'maps/a.tmx' is not valid JSON. -> Continuing but result may be unusable",
        ),
    ],
)
def test_failure_message(kind: FailureKind, detail: str | None, expected: str) -> None:
    assert failure_message(kind, "maps/a.tmx", detail) == expected


def test_diagnostic_log_is_a_reporter() -> None:
    log = DiagnosticLog()
    assert isinstance(log, Reporter)
    assert isinstance(LoggingReporter(), Reporter)
    assert isinstance(FanoutReporter(), Reporter)


def test_diagnostic_log_report_and_stats() -> None:
    log = DiagnosticLog()
    log.add_warning("odd config")
    log.report(FailureKind.NOT_FOUND, "a.tmx", "File 'a.tmx' not found.")
    log.report(FailureKind.PARSE_FAILURE, "b.tmj", "File 'b.tmj' is not valid JSON.")
    log.add_info("fyi")

    assert len(log) == 4
    assert log.kinds() == [FailureKind.NOT_FOUND, FailureKind.PARSE_FAILURE]
    assert log.has_error()
    assert log.has_warning()
    assert log.to_dict() == {"info": 1, "warning": 1, "error": 2}
    assert log.stats().total == 4
    assert log.items[1] == Diagnostic(
        DiagnosticLevel.ERROR, "File 'a.tmx' not found.", kind=FailureKind.NOT_FOUND, path="a.tmx"
    )


def test_diagnostic_log_freeze_and_clear() -> None:
    log = DiagnosticLog()
    log.add_error("boom")

    frozen = log.freeze()
    log.clear()

    assert len(log) == 0
    assert not log.has_error()
    assert len(frozen) == 1
    assert frozen.to_dict() == {"info": 0, "warning": 0, "error": 1}
    assert DiagnosticLog.from_iterable(frozen).items == list(frozen.items)


def test_logging_reporter_uses_given_logger(caplog: pytest.LogCaptureFixture) -> None:
    reporter = LoggingReporter(get_logger("tiledoc.tests.reporter"))

    with caplog.at_level(logging.ERROR, logger="tiledoc.tests.reporter"):
        reporter.report(FailureKind.UNKNOWN_FORMAT, "x.bin", "File 'x.bin' has an unknown type.")

    (record,) = [r for r in caplog.records if r.name == "tiledoc.tests.reporter"]
    assert record.levelno == logging.ERROR
    assert record.getMessage() == "ERROR: File 'x.bin' has an unknown type."


def test_fanout_reporter_preserves_order() -> None:
    seen: list[str] = []

    class _Recorder:
        def __init__(self, name: str) -> None:
            self.name: str = name

        def report(self, kind: FailureKind, path: str, message: str) -> None:
            seen.append(f"{self.name}:{kind.value}:{path}")

    fanout = FanoutReporter(_Recorder("a"), _Recorder("b"))
    fanout.report(FailureKind.NOT_FOUND, "p.tmx", "msg")

    assert seen == ["a:not_found:p.tmx", "b:not_found:p.tmx"]
