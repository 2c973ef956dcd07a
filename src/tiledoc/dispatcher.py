# topmark:header:start
#
#   project      : Tiledoc
#   file         : dispatcher.py
#   file_relpath : src/tiledoc/dispatcher.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve a Tiled source reference into a document.

Resolution runs the same fixed sequence for every reference:

1. **Locate**: ask the `SourceAccessor` for candidate locations and keep the
   first that exists. None exists: NOT_FOUND.
2. **Classify**: the extension of the *requested* reference decides; when it
   is not recognized the leading bytes of the *located* reference are sniffed.
3. **Parse**: XML goes to the injected `XmlTreeBuilder` and its result is
   returned as is. JSON is read in full, a leading byte order mark is dropped
   and the text is decoded; a decode failure or a top-level value that is not
   an object is a PARSE_FAILURE. Anything else is UNKNOWN_FORMAT.

No recoverable failure raises. Each is sent to the `Reporter` and ``None`` is
returned. `FormatDispatcher.resolve_detailed` additionally exposes which step
failed, so callers do not have to parse messages.

Example:
    ```python
    dispatcher = FormatDispatcher(FilesystemSource("maps"), builder)
    doc = dispatcher.resolve("level1.tmj")
    ```
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tiledoc.config.logging import get_logger
from tiledoc.config.model import Config
from tiledoc.constants import BYTE_ORDER_MARK
from tiledoc.diagnostic.model import FailureKind, failure_message
from tiledoc.diagnostic.reporters import LoggingReporter
from tiledoc.document import is_document
from tiledoc.errors import DocumentParseError
from tiledoc.formats.base import SourceFormat
from tiledoc.formats.classify import classify
from tiledoc.parsers import StdlibJsonDecoder
from tiledoc.sources import ArchiveSource, FilesystemSource, locate

if TYPE_CHECKING:
    import os

    from tiledoc.config.logging import TiledocLogger
    from tiledoc.diagnostic.types import Reporter
    from tiledoc.document import Document, DocumentValue
    from tiledoc.parsers import JsonDecoder, XmlTreeBuilder
    from tiledoc.sources import ArchiveReader, SourceAccessor

logger: TiledocLogger = get_logger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one resolution attempt.

    Attributes:
        requested (str): The reference as passed by the caller.
        located (str | None): Where the source was found, or None.
        format (SourceFormat | None): The classification, or None when the
            source was not located (or vanished before it could be sniffed).
        document (Document | None): The resulting document.
        failure (FailureKind | None): Why no document was produced, when the
            dispatcher knows. An XML builder returning None leaves it unset.
    """

    requested: str
    located: str | None = None
    format: SourceFormat | None = None
    document: Document | None = None
    failure: FailureKind | None = None

    @property
    def ok(self) -> bool:
        """True if a document was produced."""
        return self.document is not None


class FormatDispatcher:
    """Classify and parse Tiled sources read through one `SourceAccessor`.

    The dispatcher holds no per-call state; it may be reused for any number
    of references.

    Args:
        source (SourceAccessor): Where references are read from.
        xml_builder (XmlTreeBuilder): Receives every XML source.
        json_decoder (JsonDecoder | None): JSON decoder; defaults to
            `StdlibJsonDecoder`.
        reporter (Reporter | None): Failure sink; defaults to a `LoggingReporter`.
        config (Config | None): Format rules and reading options; defaults to
            the built-in `Config()`.
    """

    def __init__(
        self,
        source: SourceAccessor,
        xml_builder: XmlTreeBuilder,
        *,
        json_decoder: JsonDecoder | None = None,
        reporter: Reporter | None = None,
        config: Config | None = None,
    ) -> None:
        self.source: SourceAccessor = source
        self.xml_builder: XmlTreeBuilder = xml_builder
        self.json_decoder: JsonDecoder = (
            json_decoder if json_decoder is not None else StdlibJsonDecoder()
        )
        self.reporter: Reporter = reporter if reporter is not None else LoggingReporter()
        self.config: Config = config if config is not None else Config()

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(source={self.source!r}, "
            f"xml_builder={self.xml_builder!r}, json_decoder={self.json_decoder!r})"
        )

    def resolve(self, source_path: str) -> Document | None:
        """Return the document for ``source_path``, or None on failure."""
        return self.resolve_detailed(source_path).document

    def resolve_detailed(self, source_path: str) -> DispatchResult:
        """Resolve ``source_path`` and describe the outcome.

        Args:
            source_path (str): Reference to resolve (relative to the accessor).

        Returns:
            DispatchResult: The document (or None) and the step that failed.
        """
        logger.debug("resolving %r through %r", source_path, self.source)

        located: str | None = locate(self.source, source_path)
        if located is None:
            return self._fail(FailureKind.NOT_FOUND, source_path)

        cfg: Config = self.config
        try:
            fmt: SourceFormat = classify(
                source_path,
                self.source,
                located,
                cfg.rules(),
                sniff_length=cfg.sniff_length,
                encoding=cfg.encoding,
            )
        except OSError as exc:
            logger.debug("cannot sniff %r: %s", located, exc)
            return self._fail(FailureKind.NOT_FOUND, source_path, located=located)

        if fmt is SourceFormat.XML:
            logger.trace("passing %r to %r", located, self.xml_builder)
            document: Document | None = self.xml_builder.create(located, self.source)
            return DispatchResult(
                requested=source_path, located=located, format=fmt, document=document
            )

        if fmt is SourceFormat.JSON:
            return self._resolve_json(source_path, located)

        return self._fail(FailureKind.UNKNOWN_FORMAT, source_path, located=located, fmt=fmt)

    def _resolve_json(self, source_path: str, located: str) -> DispatchResult:
        fmt: SourceFormat = SourceFormat.JSON
        try:
            text: str = self.source.read_text(located, self.config.encoding)
        except OSError as exc:
            logger.debug("cannot read %r: %s", located, exc)
            return self._fail(FailureKind.NOT_FOUND, source_path, located=located, fmt=fmt)

        if text.startswith(BYTE_ORDER_MARK):
            logger.trace("stripping byte order mark from %r", located)
            text = text[len(BYTE_ORDER_MARK) :]

        try:
            value: DocumentValue = self.json_decoder.decode(text)
        except DocumentParseError as exc:
            return self._fail(
                FailureKind.PARSE_FAILURE,
                source_path,
                located=located,
                fmt=fmt,
                detail=exc.detail,
            )

        if not is_document(value):
            return self._fail(
                FailureKind.PARSE_FAILURE,
                source_path,
                located=located,
                fmt=fmt,
                detail="top-level value is not an object",
            )

        logger.trace("decoded %r: %d top-level keys", located, len(value))
        return DispatchResult(requested=source_path, located=located, format=fmt, document=value)

    def _fail(
        self,
        kind: FailureKind,
        source_path: str,
        *,
        located: str | None = None,
        fmt: SourceFormat | None = None,
        detail: str | None = None,
    ) -> DispatchResult:
        if kind is not FailureKind.PARSE_FAILURE or self.config.report_parse_failures:
            self.reporter.report(kind, source_path, failure_message(kind, source_path, detail))
        else:
            logger.debug("parse failure for %r not reported: %s", source_path, detail)
        return DispatchResult(requested=source_path, located=located, format=fmt, failure=kind)


def get_document(
    source_path: str,
    xml_builder: XmlTreeBuilder,
    *,
    archive: ArchiveReader | None = None,
    root: str | os.PathLike[str] | None = None,
    json_decoder: JsonDecoder | None = None,
    reporter: Reporter | None = None,
    config: Config | None = None,
) -> Document | None:
    """Resolve one reference without building a dispatcher explicitly.

    Args:
        source_path (str): Reference to resolve.
        xml_builder (XmlTreeBuilder): Receives XML sources.
        archive (ArchiveReader | None): Read from this archive instead of the filesystem.
        root (str | os.PathLike[str] | None): Filesystem root for relative
            references; ignored when ``archive`` is given.
        json_decoder (JsonDecoder | None): JSON decoder override.
        reporter (Reporter | None): Failure sink override.
        config (Config | None): Configuration override.

    Returns:
        Document | None: The document, or None on failure.
    """
    source: SourceAccessor
    if archive is not None:
        source = ArchiveSource(archive)
    else:
        source = FilesystemSource(root)
    dispatcher = FormatDispatcher(
        source, xml_builder, json_decoder=json_decoder, reporter=reporter, config=config
    )
    return dispatcher.resolve(source_path)
