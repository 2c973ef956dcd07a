# topmark:header:start
#
#   project      : Tiledoc
#   file         : test_public_api.py
#   file_relpath : tests/test_public_api.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Smoke tests for the names exported by the top-level package."""

from __future__ import annotations

from typing import TYPE_CHECKING

import tiledoc
from tests.conftest import SentinelXmlBuilder

if TYPE_CHECKING:
    from pathlib import Path


def test_all_names_resolve() -> None:
    for name in tiledoc.__all__:
        assert hasattr(tiledoc, name), name


def test_version_is_a_string() -> None:
    assert isinstance(tiledoc.__version__, str)
    assert tiledoc.__version__


def test_end_to_end_with_loaded_config(tmp_path: Path) -> None:
    (tmp_path / "tiledoc.toml").write_text(
        'root = true\n[formats]\njson_extensions = ["world"]\n', encoding="utf-8"
    )
    (tmp_path / "overworld.world").write_text('{ "maps": [] }', encoding="utf-8")
    log = tiledoc.DiagnosticLog()

    cfg: tiledoc.Config = tiledoc.load_config(start=tmp_path)
    doc: tiledoc.Document | None = tiledoc.get_document(
        "overworld.world", SentinelXmlBuilder(), root=tmp_path, reporter=log, config=cfg
    )

    assert doc == {"maps": []}
    assert len(log) == 0
