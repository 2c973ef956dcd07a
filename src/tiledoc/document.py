# topmark:header:start
#
#   project      : Tiledoc
#   file         : document.py
#   file_relpath : src/tiledoc/document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generic document tree returned by the dispatcher.

A *document* is the parsed representation of a Tiled map, tileset, template
or project file: a mapping from string keys to values drawn from a small
closed set of variants. The variants are plain Python values; `ValueKind`
names the tag of each one so callers can branch on it explicitly.

Variants:
    * STRING: ``str``
    * NUMBER: ``int`` or ``float`` (``bool`` excluded)
    * BOOL: ``bool``
    * MAPPING: ``dict[str, DocumentValue]``
    * SEQUENCE: ``list[DocumentValue]``
    * NULL: ``None``
"""

from __future__ import annotations

from enum import Enum
from typing import Any, TypeAlias, TypeGuard, Union, cast

DocumentValue: TypeAlias = Union[
    str,
    int,
    float,
    bool,
    None,
    "dict[str, DocumentValue]",
    "list[DocumentValue]",
]

Document: TypeAlias = "dict[str, DocumentValue]"


class ValueKind(Enum):
    """Tag of a `DocumentValue` variant."""

    STRING = "string"
    NUMBER = "number"
    BOOL = "bool"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    NULL = "null"

    @classmethod
    def of(cls, value: object) -> ValueKind:
        """Return the variant tag of ``value``.

        Args:
            value (object): Value to classify.

        Returns:
            ValueKind: The tag of the variant ``value`` belongs to.

        Raises:
            TypeError: If ``value`` is not one of the document variants.
        """
        # bool is a subclass of int; test it first.
        if isinstance(value, bool):
            return cls.BOOL
        if value is None:
            return cls.NULL
        if isinstance(value, str):
            return cls.STRING
        if isinstance(value, (int, float)):
            return cls.NUMBER
        if isinstance(value, dict):
            return cls.MAPPING
        if isinstance(value, list):
            return cls.SEQUENCE
        raise TypeError(f"Not a document value: {type(value).__name__}")


def is_document_value(value: object) -> TypeGuard[DocumentValue]:
    """Return True if ``value`` and everything nested in it is a document variant."""
    # Iterative walk; nested Tiled layers can be deep.
    stack: list[object] = [value]
    while stack:
        item: object = stack.pop()
        try:
            kind: ValueKind = ValueKind.of(item)
        except TypeError:
            return False
        if kind is ValueKind.MAPPING:
            mapping = cast("dict[Any, Any]", item)
            if not all(isinstance(k, str) for k in mapping):
                return False
            stack.extend(mapping.values())
        elif kind is ValueKind.SEQUENCE:
            stack.extend(cast("list[Any]", item))
    return True


def is_document(value: object) -> TypeGuard[Document]:
    """Return True if ``value`` is a well-formed top-level document (a mapping)."""
    return isinstance(value, dict) and is_document_value(value)
