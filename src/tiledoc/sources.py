# topmark:header:start
#
#   project      : Tiledoc
#   file         : sources.py
#   file_relpath : src/tiledoc/sources.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Source accessors: where the bytes of a source reference come from.

A `SourceAccessor` is chosen by the caller when building a dispatcher:

* `FilesystemSource` reads plain files, optionally relative to a root
  directory. A reference that does not exist as given is retried once with
  its own base directory prepended (``maps/a.tmx`` -> ``maps/maps/a.tmx``),
  a convention kept for maps exported by older importers.
* `ArchiveSource` reads entries of an archive through any object that
  implements the `ArchiveReader` protocol. Archive references are never
  rewritten.

File handles are opened and closed within each call; nothing escapes.
"""

from __future__ import annotations

import os
import posixpath
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from tiledoc.config.logging import get_logger
from tiledoc.constants import DEFAULT_ENCODING

if TYPE_CHECKING:
    from tiledoc.config.logging import TiledocLogger

logger: TiledocLogger = get_logger(__name__)


@runtime_checkable
class ArchiveReader(Protocol):
    """Read access to files bundled inside a container (e.g. a zip file)."""

    def file_exists(self, path: str) -> bool:
        """Return True if the archive contains an entry named ``path``."""
        ...

    def get_file(self, path: str) -> bytes:
        """Return the full content of the entry named ``path``."""
        ...


def join_base_dir(path: str) -> str:
    """Return ``path`` prefixed with its own base directory.

    The join is a plain concatenation with a single ``/`` separator, so
    absolute paths stay rooted where they were (``/m/a.tmx`` -> ``/m/m/a.tmx``).
    A path without a directory part is returned unchanged.

    Args:
        path (str): Source reference as given by the caller.

    Returns:
        str: The alternate reference.
    """
    base: str = posixpath.dirname(path)
    if not base:
        return path
    if base.endswith("/") or path.startswith("/"):
        return base + path
    return f"{base}/{path}"


class SourceAccessor(ABC):
    """Capability to locate and read source references.

    Subclasses implement `candidates`, `exists` and `read_bytes`; the other
    readers derive from `read_bytes` unless a cheaper path exists.
    """

    @abstractmethod
    def candidates(self, path: str) -> list[str]:
        """Return the locations to try for ``path``, in order."""

    @abstractmethod
    def exists(self, path: str) -> bool:
        """Return True if ``path`` names a readable file."""

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """Return the full content of ``path``.

        Raises:
            OSError: If the file cannot be read.
        """

    def read_head(self, path: str, size: int) -> bytes:
        """Return at most ``size`` leading bytes of ``path``.

        Raises:
            OSError: If the file cannot be read.
        """
        return self.read_bytes(path)[:size]

    def read_text(self, path: str, encoding: str = DEFAULT_ENCODING) -> str:
        """Return the content of ``path`` decoded as text.

        Invalid byte sequences are replaced with U+FFFD rather than raising.

        Raises:
            OSError: If the file cannot be read.
        """
        return self.read_bytes(path).decode(encoding, errors="replace")


class FilesystemSource(SourceAccessor):
    """Plain filesystem access.

    Args:
        root (str | os.PathLike[str] | None): Directory relative references are
            resolved against. Defaults to the current working directory.
    """

    def __init__(self, root: str | os.PathLike[str] | None = None) -> None:
        self.root: Path | None = Path(root) if root is not None else None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(root={self.root!r})"

    def resolve(self, path: str) -> Path:
        """Return the filesystem path for a source reference."""
        p = Path(path)
        if self.root is not None and not p.is_absolute():
            return self.root / p
        return p

    def candidates(self, path: str) -> list[str]:
        """Return ``path`` followed by its base-dir-joined alternate (when different)."""
        alternate: str = join_base_dir(path)
        return [path] if alternate == path else [path, alternate]

    def exists(self, path: str) -> bool:
        """Return True if ``path`` names a regular file."""
        return self.resolve(path).is_file()

    def read_bytes(self, path: str) -> bytes:
        """Return the full content of ``path``."""
        return self.resolve(path).read_bytes()

    def read_head(self, path: str, size: int) -> bytes:
        """Return at most ``size`` leading bytes of ``path`` without reading the rest."""
        with self.resolve(path).open("rb") as fh:
            return fh.read(size)


class ArchiveSource(SourceAccessor):
    """Access to entries of an archive.

    Args:
        archive (ArchiveReader): The archive collaborator. When the dispatcher
            is used from several threads, the archive must tolerate concurrent
            reads; no locking is added here.
    """

    def __init__(self, archive: ArchiveReader) -> None:
        self.archive: ArchiveReader = archive

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(archive={self.archive!r})"

    def candidates(self, path: str) -> list[str]:
        """Return ``path`` only: archive references are never rewritten."""
        return [path]

    def exists(self, path: str) -> bool:
        """Return True if the archive has an entry named ``path``."""
        return bool(self.archive.file_exists(path))

    def read_bytes(self, path: str) -> bytes:
        """Return the content of the archive entry ``path``."""
        return bytes(self.archive.get_file(path))


def locate(source: SourceAccessor, path: str) -> str | None:
    """Return the first candidate location of ``path`` that exists.

    Args:
        source (SourceAccessor): Accessor to query.
        path (str): Source reference as given by the caller.

    Returns:
        str | None: The located reference, or None when no candidate exists.
    """
    for candidate in source.candidates(path):
        if source.exists(candidate):
            logger.trace("located %r as %r via %r", path, candidate, source)
            return candidate
        logger.debug("candidate %r for %r does not exist", candidate, path)
    return None
