# topmark:header:start
#
#   project      : Tiledoc
#   file         : parsers.py
#   file_relpath : src/tiledoc/parsers.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Parser collaborators used by the dispatcher.

The XML side is fully delegated: an `XmlTreeBuilder` receives the located path
and the source accessor and owns every XML concern, including its own error
handling. The JSON side goes through a `JsonDecoder`; `StdlibJsonDecoder` is
the default and accepts the standard JSON grammar.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from tiledoc.config.logging import get_logger
from tiledoc.errors import DocumentParseError

if TYPE_CHECKING:
    from tiledoc.config.logging import TiledocLogger
    from tiledoc.document import Document, DocumentValue
    from tiledoc.sources import SourceAccessor

logger: TiledocLogger = get_logger(__name__)


@runtime_checkable
class XmlTreeBuilder(Protocol):
    """Builds a document from an XML source."""

    def create(self, path: str, source: SourceAccessor) -> Document | None:
        """Return the document for ``path``.

        Args:
            path (str): Located reference (already known to exist).
            source (SourceAccessor): Accessor the builder reads through.

        Returns:
            Document | None: The document, or None when the builder gives up.
        """
        ...


@runtime_checkable
class JsonDecoder(Protocol):
    """Decodes JSON text into a document value."""

    def decode(self, text: str) -> DocumentValue:
        """Return the value encoded by ``text``.

        Raises:
            DocumentParseError: If ``text`` is not valid JSON.
        """
        ...


def _reject_constant(name: str) -> float:
    raise ValueError(f"invalid literal {name}")


class StdlibJsonDecoder:
    """`JsonDecoder` backed by the standard library `json` module.

    Only the standard grammar is accepted: the `NaN` and `Infinity` extensions
    that `json` allows by default are rejected.
    """

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    def decode(self, text: str) -> DocumentValue:
        """Decode ``text``.

        Args:
            text (str): JSON text.

        Returns:
            DocumentValue: The decoded value (objects become ``dict``, arrays ``list``).

        Raises:
            DocumentParseError: If ``text`` is malformed; carries line and column
                when the position is known.
        """
        try:
            value: DocumentValue = json.loads(text, parse_constant=_reject_constant)
        except json.JSONDecodeError as exc:
            logger.trace("json decode failed: %s", exc)
            raise DocumentParseError(exc.msg, line=exc.lineno, column=exc.colno) from exc
        except ValueError as exc:
            # Out-of-range integers and rejected constants.
            logger.trace("json value rejected: %s", exc)
            raise DocumentParseError(str(exc)) from exc
        except RecursionError as exc:
            raise DocumentParseError("nesting too deep") from exc
        return value
