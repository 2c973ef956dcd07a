# topmark:header:start
#
#   project      : Tiledoc
#   file         : getters.py
#   file_relpath : src/tiledoc/config/io/getters.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Checked value getters for TOML config tables.

Checked getters validate the expected shape and record **warnings** in a
`DiagnosticLog` (and also log a warning). A value of the wrong type is
treated as absent so the caller keeps its default.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from .guards import is_any_list

if TYPE_CHECKING:
    from tiledoc.config.logging import TiledocLogger
    from tiledoc.diagnostic.model import DiagnosticLog

    from .types import TomlTable


def _warn(
    loc: str,
    expected: str,
    value: object,
    *,
    diagnostics: DiagnosticLog,
    logger: TiledocLogger,
) -> None:
    logger.warning("Expected %s in %s, got %s: %r", expected, loc, type(value).__name__, value)
    diagnostics.add_warning(f"Expected {expected} in {loc}, got {type(value).__name__}: {value!r}")


def get_string_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: TiledocLogger,
) -> str | None:
    """Return an optional string value, warning when present but not `str`."""
    value: Any | None = table.get(key)
    if value is None or isinstance(value, str):
        return value
    _warn(f"{where}.{key}", "string", value, diagnostics=diagnostics, logger=logger)
    return None


def get_bool_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: TiledocLogger,
) -> bool | None:
    """Return an optional boolean value, warning when present but not `bool`."""
    value: Any | None = table.get(key)
    if value is None or isinstance(value, bool):
        return value
    _warn(f"{where}.{key}", "bool", value, diagnostics=diagnostics, logger=logger)
    return None


def get_int_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: TiledocLogger,
) -> int | None:
    """Return an optional int value, warning when present but not `int`.

    Notes:
        - Missing key / None -> None
        - `bool` is rejected (since `bool` is a subclass of `int`).
    """
    value: Any | None = table.get(key)
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    _warn(f"{where}.{key}", "int", value, diagnostics=diagnostics, logger=logger)
    return None


def get_string_list_value_or_none_checked(
    table: TomlTable,
    key: str,
    *,
    where: str,
    diagnostics: DiagnosticLog,
    logger: TiledocLogger,
) -> list[str] | None:
    """Extract a list of strings from a TOML table.

    Behavior:
        - If the key is missing, returns None.
        - If the value is not a list, warns and returns None.
        - Non-string items are dropped; each one emits a warning and a diagnostic.

    Args:
        table (TomlTable): TOML table to query.
        key (str): Key to extract.
        where (str): TOML location prefix (e.g. "[formats]").
        diagnostics (DiagnosticLog): DiagnosticLog to record warnings.
        logger (TiledocLogger): Logger for emitting warnings.

    Returns:
        list[str] | None: Filtered list containing only string entries, or None.
    """
    value: Any | None = table.get(key)
    if value is None:
        return None

    loc: Final[str] = f"{where}.{key}"

    if not is_any_list(value):
        _warn(loc, "list", value, diagnostics=diagnostics, logger=logger)
        return None

    out: list[str] = []
    for v in value:
        if isinstance(v, str):
            out.append(v)
        else:
            logger.warning("Ignoring non-string entry in %s: %r", loc, v)
            diagnostics.add_warning(f"Ignoring non-string entry in {loc}: {v!r}")
    return out
