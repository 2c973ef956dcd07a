# topmark:header:start
#
#   project      : Tiledoc
#   file         : test_document.py
#   file_relpath : tests/test_document.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for document value tagging and validation."""

from __future__ import annotations

import json

import pytest
from hypothesis import given, settings

from tests.conftest import parametrize
from tests.strategies_tiledoc import s_document, s_document_value
from tiledoc.document import DocumentValue, ValueKind, is_document, is_document_value


@parametrize(
    "value, kind",
    [
        ("x", ValueKind.STRING),
        (1, ValueKind.NUMBER),
        (1.5, ValueKind.NUMBER),
        (True, ValueKind.BOOL),
        (False, ValueKind.BOOL),
        (None, ValueKind.NULL),
        ({}, ValueKind.MAPPING),
        ([], ValueKind.SEQUENCE),
    ],
)
def test_value_kind_of(value: object, kind: ValueKind) -> None:
    assert ValueKind.of(value) is kind


@parametrize("value", [(1, 2), {1, 2}, b"bytes", object()])
def test_value_kind_rejects_foreign_types(value: object) -> None:
    with pytest.raises(TypeError):
        ValueKind.of(value)


def test_is_document() -> None:
    assert is_document({"a": 1, "b": [1, 2, {"c": None}]})
    assert is_document({})
    assert not is_document([{"a": 1}])
    assert not is_document({"a": (1, 2)})
    assert not is_document({1: "non-string key"})
    assert not is_document({"deep": [{"x": {2: 3}}]})


def test_is_document_value_handles_deep_nesting() -> None:
    value: DocumentValue = 0
    for _ in range(5000):
        value = [value]
    assert is_document_value(value)


@settings(max_examples=50)
@given(value=s_document_value())
def test_decoded_json_is_a_document_value(value: DocumentValue) -> None:
    assert is_document_value(json.loads(json.dumps(value)))


@settings(max_examples=50)
@given(doc=s_document())
def test_generated_documents_are_documents(doc: dict[str, DocumentValue]) -> None:
    assert is_document(doc)
    assert ValueKind.of(doc) is ValueKind.MAPPING
