# topmark:header:start
#
#   project      : Tiledoc
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the Tiledoc test suite.

Provides typed wrappers around pytest decorators, TRACE-level logging for
test runs, and small collaborators shared by the dispatcher and source tests:

- `SentinelXmlBuilder`: an `XmlTreeBuilder` returning a fixed object so tests
  can check pass-through identity.
- `ZipArchive`: an `ArchiveReader` over a real zip file.
- `MemoryArchive`: an `ArchiveReader` over a dict, for property tests.

Notes:
    Build configs with `MutableConfig` and `freeze()` them; do not mutate a
    frozen `Config` (use `Config.thaw()`).
"""

from __future__ import annotations

import sys
import zipfile
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, TypeVar, cast

import pytest

from tiledoc.config import logging
from tiledoc.config.model import MutableConfig
from tiledoc.diagnostic.model import DiagnosticLog
from tiledoc.dispatcher import FormatDispatcher
from tiledoc.sources import FilesystemSource

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from tiledoc.config.model import Config
    from tiledoc.document import Document
    from tiledoc.sources import SourceAccessor

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.parametrize(...)`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_tiledoc_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the runtime log level is not forced via env during tests.

    Args:
        monkeypatch (pytest.MonkeyPatch): Used to drop ``TILEDOC_LOG_LEVEL``.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@pytest.fixture
def low_int_digit_limit() -> Iterator[int]:
    """Lower the interpreter's int-to-str digit limit for one test.

    Yields:
        int: The digit limit in effect; literals longer than this fail to convert.
    """
    if not hasattr(sys, "set_int_max_str_digits"):
        pytest.skip("interpreter has no integer string conversion limit")
    previous: int = sys.get_int_max_str_digits()
    sys.set_int_max_str_digits(640)
    try:
        yield 640
    finally:
        sys.set_int_max_str_digits(previous)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Set logging to TRACE so failing tests show the full resolution trail.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


class SentinelXmlBuilder:
    """`XmlTreeBuilder` that records its calls and returns a fixed result."""

    def __init__(self, result: Document | None = None) -> None:
        self.result: Document | None = result if result is not None else {"sentinel": True}
        self.calls: list[tuple[str, SourceAccessor]] = []

    def create(self, path: str, source: SourceAccessor) -> Document | None:
        self.calls.append((path, source))
        return self.result


class ZipArchive:
    """`ArchiveReader` backed by a zip file on disk."""

    def __init__(self, path: Path) -> None:
        self.path: Path = path

    def file_exists(self, path: str) -> bool:
        with zipfile.ZipFile(self.path) as zf:
            return path in zf.namelist()

    def get_file(self, path: str) -> bytes:
        with zipfile.ZipFile(self.path) as zf:
            return zf.read(path)


class MemoryArchive:
    """In-memory `ArchiveReader`."""

    def __init__(self, entries: dict[str, bytes]) -> None:
        self.entries: dict[str, bytes] = entries

    def file_exists(self, path: str) -> bool:
        return path in self.entries

    def get_file(self, path: str) -> bytes:
        return self.entries[path]


def make_zip(path: Path, entries: dict[str, bytes]) -> ZipArchive:
    """Write ``entries`` into a new zip at ``path`` and return a reader over it.

    Args:
        path (Path): Zip file to create.
        entries (dict[str, bytes]): Entry name to content.

    Returns:
        ZipArchive: Reader over the new archive.
    """
    with zipfile.ZipFile(path, "w") as zf:
        for name, data in entries.items():
            zf.writestr(name, data)
    return ZipArchive(path)


def make_config(**overrides: Any) -> Config:
    """Return a frozen `Config` built from defaults and overrides.

    Args:
        **overrides (Any): Attribute overrides applied to the mutable builder.

    Returns:
        Config: An immutable configuration snapshot.
    """
    m: MutableConfig = MutableConfig.from_defaults()
    for k, v in overrides.items():
        setattr(m, k, v)
    return m.freeze()


def make_dispatcher(
    root: Path,
    *,
    builder: SentinelXmlBuilder | None = None,
    config: Config | None = None,
) -> tuple[FormatDispatcher, DiagnosticLog]:
    """Return a filesystem dispatcher rooted at ``root`` and its diagnostic log.

    Args:
        root (Path): Filesystem root for relative references.
        builder (SentinelXmlBuilder | None): XML builder; a fresh sentinel by default.
        config (Config | None): Configuration override.

    Returns:
        tuple[FormatDispatcher, DiagnosticLog]: The dispatcher and its reporter.
    """
    log = DiagnosticLog()
    dispatcher = FormatDispatcher(
        FilesystemSource(root),
        builder or SentinelXmlBuilder(),
        reporter=log,
        config=config,
    )
    return dispatcher, log
