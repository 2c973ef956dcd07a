# topmark:header:start
#
#   project      : Tiledoc
#   file         : test_config.py
#   file_relpath : tests/config/test_config.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for configuration loading, merging, sanitizing and freezing.

Config files are written under ``tmp_path``. Each discovery test marks its
top-most config with ``root = true`` so files outside the sandbox are never
picked up.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest

from tests.conftest import make_config, parametrize
from tiledoc.config.model import Config, MutableConfig, load_config
from tiledoc.constants import (
    DEFAULT_JSON_EXTENSIONS,
    DEFAULT_SNIFF_LENGTH,
    DEFAULT_XML_EXTENSIONS,
)
from tiledoc.errors import ConfigError
from tiledoc.formats import SourceFormat


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_defaults_match_builtin_rules() -> None:
    cfg: Config = MutableConfig.from_defaults().freeze()

    assert cfg == Config()
    assert cfg.xml_extensions == DEFAULT_XML_EXTENSIONS
    assert cfg.json_extensions == DEFAULT_JSON_EXTENSIONS
    assert cfg.sniff_length == DEFAULT_SNIFF_LENGTH
    assert cfg.report_parse_failures is True
    assert len(cfg.diagnostics) == 0


def test_rules_follow_config() -> None:
    xml_rule, json_rule = make_config(xml_extensions=["tmx"], json_signature="[").rules()

    assert xml_rule.format is SourceFormat.XML
    assert xml_rule.extensions == frozenset({"tmx"})
    assert json_rule.format is SourceFormat.JSON
    assert json_rule.signature == "["


def test_from_toml_file(tmp_path: Path) -> None:
    path: Path = _write(
        tmp_path / "tiledoc.toml",
        '[formats]\njson_extensions = ["world"]\nsniff_length = 32\n\n'
        "[diagnostics]\nreport_parse_failures = false\n",
    )

    draft: MutableConfig | None = MutableConfig.from_toml_file(path)

    assert draft is not None
    assert draft.json_extensions == ["world"]
    assert draft.sniff_length == 32
    assert draft.report_parse_failures is False
    assert draft.xml_signature is None
    assert draft.config_files == [str(path)]


def test_pyproject_tool_table(tmp_path: Path) -> None:
    path: Path = _write(
        tmp_path / "pyproject.toml",
        '[project]\nname = "game"\n\n[tool.tiledoc.reading]\nencoding = "latin-1"\n',
    )

    draft: MutableConfig | None = MutableConfig.from_toml_file(path)

    assert draft is not None
    assert draft.encoding == "latin-1"


def test_pyproject_without_tool_table_is_ignored(tmp_path: Path) -> None:
    path: Path = _write(tmp_path / "pyproject.toml", '[project]\nname = "game"\n')

    assert MutableConfig.from_toml_file(path) is None
    with pytest.raises(ConfigError):
        MutableConfig.from_toml_file(path, strict=True)


def test_merge_later_layer_wins() -> None:
    base: MutableConfig = MutableConfig.from_defaults()
    override = MutableConfig(json_extensions=["world"], sniff_length=20)

    merged: MutableConfig = base.merge_with(override)

    assert merged.json_extensions == ["world"]
    assert merged.xml_extensions == list(DEFAULT_XML_EXTENSIONS)
    assert merged.sniff_length == 20
    assert merged.encoding == "utf-8"


def test_thaw_round_trip() -> None:
    cfg: Config = make_config(json_extensions=["world"], report_parse_failures=False)
    assert cfg.thaw().freeze() == cfg


def test_invalid_values_become_warnings(tmp_path: Path) -> None:
    path: Path = _write(
        tmp_path / "tiledoc.toml",
        "[formats]\n"
        'xml_extensions = ["tmx", 3, ".tsx", ""]\n'
        'sniff_length = "twelve"\n'
        "json_signature = 5\n\n"
        "[reading]\n"
        'encoding = "no-such-codec"\n',
    )

    cfg: Config = load_config(path, no_config=True)

    assert cfg.xml_extensions == ("tmx", "tsx")
    assert cfg.sniff_length == DEFAULT_SNIFF_LENGTH
    assert cfg.json_signature == '{ "'
    assert cfg.encoding == "utf-8"
    messages: list[str] = [d.message for d in cfg.diagnostics]
    assert any("non-string entry" in m for m in messages)
    assert any("empty extension" in m for m in messages)
    assert any("sniff_length" in m for m in messages)
    assert any("json_signature" in m for m in messages)
    assert any("no-such-codec" in m for m in messages)
    assert cfg.diagnostics.stats().n_warning == len(messages)


def test_sanitize_warns_on_overlap_and_non_positive_length() -> None:
    draft = MutableConfig(xml_extensions=["tmx", "json"], json_extensions=["json"], sniff_length=0)

    cfg: Config = draft.freeze()

    assert cfg.sniff_length == DEFAULT_SNIFF_LENGTH
    assert cfg.rules()[0].matches_extension("json")
    messages: list[str] = [d.message for d in cfg.diagnostics]
    assert any("both XML and JSON" in m for m in messages)
    assert any("must be positive" in m for m in messages)


def test_signature_longer_than_sniff_length_is_reported() -> None:
    cfg: Config = make_config(xml_signature="<?xml version=", sniff_length=6)
    assert any("will never match" in d.message for d in cfg.diagnostics)


def test_explicit_missing_or_malformed_config_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError):
        load_config(tmp_path / "missing.toml", no_config=True)

    bad: Path = _write(tmp_path / "bad.toml", "[formats\nsniff_length = 1\n")
    with pytest.raises(ConfigError):
        load_config(bad, no_config=True)


def test_discovered_malformed_config_contributes_nothing(tmp_path: Path) -> None:
    _write(tmp_path / "tiledoc.toml", "root = true\n")
    _write(tmp_path / "proj" / "tiledoc.toml", "[formats\n")

    cfg: Config = load_config(start=tmp_path / "proj")

    assert cfg == Config(config_files=cfg.config_files)


def test_discovered_non_utf8_config_contributes_nothing(tmp_path: Path) -> None:
    _write(tmp_path / "tiledoc.toml", "root = true\n")
    (tmp_path / "proj").mkdir()
    (tmp_path / "proj" / "tiledoc.toml").write_bytes(b"\xff\xfe[formats]\nsniff_length = 3\n")

    cfg: Config = load_config(start=tmp_path / "proj")

    assert cfg.sniff_length == DEFAULT_SNIFF_LENGTH


def test_explicit_non_utf8_config_raises(tmp_path: Path) -> None:
    bad: Path = tmp_path / "bad.toml"
    bad.write_bytes(b"\xff\xfe")

    with pytest.raises(ConfigError):
        load_config(bad, no_config=True)


@parametrize(
    "kwargs, match",
    [
        ({"sniff_length": 0}, "sniff_length"),
        ({"sniff_length": -1}, "sniff_length"),
        ({"encoding": "bogus"}, "Unknown encoding"),
    ],
)
def test_direct_config_rejects_unusable_values(kwargs: dict[str, Any], match: str) -> None:
    with pytest.raises(ConfigError, match=match):
        Config(**kwargs)


def test_freeze_never_builds_an_unusable_config() -> None:
    cfg: Config = MutableConfig(sniff_length=-1, encoding="bogus").freeze()

    assert cfg.sniff_length == DEFAULT_SNIFF_LENGTH
    assert cfg.encoding == "utf-8"
    assert len(cfg.diagnostics) == 2


def test_discovery_order_and_precedence(tmp_path: Path) -> None:
    outer: Path = _write(
        tmp_path / "tiledoc.toml",
        'root = true\n[formats]\nsniff_length = 16\njson_extensions = ["outer"]\n',
    )
    pyproject: Path = _write(
        tmp_path / "proj" / "pyproject.toml",
        '[tool.tiledoc.formats]\njson_extensions = ["py"]\n',
    )
    inner: Path = _write(
        tmp_path / "proj" / "tiledoc.toml",
        '[formats]\njson_extensions = ["inner"]\n',
    )

    found: list[Path] = MutableConfig.discover_local_config_files(tmp_path / "proj")
    cfg: Config = load_config(start=tmp_path / "proj")

    assert found == [outer.resolve(), pyproject.resolve(), inner.resolve()]
    assert cfg.json_extensions == ("inner",)
    assert cfg.sniff_length == 16


def test_root_stops_discovery(tmp_path: Path) -> None:
    _write(tmp_path / "tiledoc.toml", "root = true\n[formats]\nsniff_length = 99\n")
    inner: Path = _write(tmp_path / "proj" / "tiledoc.toml", "root = true\n")
    _write(tmp_path / "proj" / "x.tmx", "<map/>")

    found: list[Path] = MutableConfig.discover_local_config_files(tmp_path / "proj" / "x.tmx")

    assert found == [inner.resolve()]


def test_no_config_skips_discovery(tmp_path: Path) -> None:
    _write(tmp_path / "tiledoc.toml", "root = true\n[formats]\nsniff_length = 99\n")

    assert load_config(start=tmp_path, no_config=True).sniff_length == DEFAULT_SNIFF_LENGTH
    assert load_config(start=tmp_path).sniff_length == 99


def test_explicit_file_overrides_discovered(tmp_path: Path) -> None:
    _write(tmp_path / "tiledoc.toml", "root = true\n[formats]\nsniff_length = 99\n")
    extra: Path = _write(tmp_path / "other" / "extra.toml", "[formats]\nsniff_length = 7\n")

    cfg: Config = load_config(extra, start=tmp_path)

    assert cfg.sniff_length == 7
    assert cfg.config_files[-1] == str(extra)


def test_to_toml_round_trip(tmp_path: Path) -> None:
    cfg: Config = make_config(json_extensions=["world"], encoding="latin-1")
    path: Path = _write(tmp_path / "tiledoc.toml", cfg.to_toml())

    reloaded: Config = load_config(path, no_config=True)

    assert reloaded.json_extensions == ("world",)
    assert reloaded.encoding == "latin-1"
