# topmark:header:start
#
#   project      : Tiledoc
#   file         : classify.py
#   file_relpath : src/tiledoc/formats/classify.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Format classification: extension match first, byte sniffing second.

Content is only probed when no rule claims the extension, so a ``.tmx`` file
is XML whatever it contains, and sniffing never reads more than
``sniff_length`` bytes.
"""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING

from tiledoc.config.logging import get_logger
from tiledoc.constants import DEFAULT_ENCODING, DEFAULT_SNIFF_LENGTH
from tiledoc.formats.base import SourceFormat
from tiledoc.formats.builtins import BUILTIN_RULES

if TYPE_CHECKING:
    from collections.abc import Sequence

    from tiledoc.config.logging import TiledocLogger
    from tiledoc.formats.base import FormatRule
    from tiledoc.sources import SourceAccessor

logger: TiledocLogger = get_logger(__name__)


def file_extension(path: str) -> str:
    """Return the text after the last dot of the basename of ``path``.

    Unlike `pathlib.PurePath.suffix`, a leading dot counts (``.tmx`` has
    extension ``tmx``) and the dot is not included. A basename without a dot
    has no extension.

    Args:
        path (str): Source reference.

    Returns:
        str: The extension, possibly empty.
    """
    name: str = posixpath.basename(path)
    _, dot, ext = name.rpartition(".")
    return ext if dot else ""


def match_extension(path: str, rules: Sequence[FormatRule] = BUILTIN_RULES) -> SourceFormat:
    """Classify ``path`` by its extension alone.

    Args:
        path (str): Source reference.
        rules (Sequence[FormatRule]): Rules consulted in order.

    Returns:
        SourceFormat: The format of the first rule claiming the extension, or UNKNOWN.
    """
    ext: str = file_extension(path)
    for rule in rules:
        if rule.matches_extension(ext):
            return rule.format
    return SourceFormat.UNKNOWN


def sniff_format(
    head: bytes,
    rules: Sequence[FormatRule] = BUILTIN_RULES,
    *,
    sniff_length: int = DEFAULT_SNIFF_LENGTH,
    encoding: str = DEFAULT_ENCODING,
) -> SourceFormat:
    """Classify leading bytes by signature.

    Only the first ``sniff_length`` bytes are considered. They are decoded
    with replacement characters, so a multi-byte sequence cut at the boundary
    does not raise.

    Args:
        head (bytes): Leading bytes of the file (longer input is truncated).
        rules (Sequence[FormatRule]): Rules consulted in order.
        sniff_length (int): Number of bytes considered.
        encoding (str): Text encoding of the source.

    Returns:
        SourceFormat: The format of the first rule whose signature prefixes the text,
            or UNKNOWN.
    """
    text: str = head[:sniff_length].decode(encoding, errors="replace")
    for rule in rules:
        if rule.matches_signature(text):
            return rule.format
    return SourceFormat.UNKNOWN


def classify(
    path: str,
    source: SourceAccessor,
    located: str | None = None,
    rules: Sequence[FormatRule] = BUILTIN_RULES,
    *,
    sniff_length: int = DEFAULT_SNIFF_LENGTH,
    encoding: str = DEFAULT_ENCODING,
) -> SourceFormat:
    """Classify a source reference.

    Args:
        path (str): Requested reference; its extension is checked first.
        source (SourceAccessor): Accessor used to read the leading bytes.
        located (str | None): Location of the file as found by the accessor.
            Defaults to ``path``.
        rules (Sequence[FormatRule]): Rules consulted in order.
        sniff_length (int): Number of bytes read when sniffing.
        encoding (str): Text encoding of the source.

    Returns:
        SourceFormat: The classification.

    Raises:
        OSError: If sniffing was needed and the file could not be read.
    """
    fmt: SourceFormat = match_extension(path, rules)
    if fmt is not SourceFormat.UNKNOWN:
        logger.debug("classified %r as %s by extension", path, fmt.value)
        return fmt

    head: bytes = source.read_head(located or path, sniff_length)
    fmt = sniff_format(head, rules, sniff_length=sniff_length, encoding=encoding)
    logger.debug("classified %r as %s by content (%r)", path, fmt.value, head)
    return fmt
