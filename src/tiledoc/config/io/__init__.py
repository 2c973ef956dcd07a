# topmark:header:start
#
#   project      : Tiledoc
#   file         : __init__.py
#   file_relpath : src/tiledoc/config/io/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""TOML I/O helpers for Tiledoc configuration.

This package centralizes **pure** helpers for reading, validating, and writing TOML
used by Tiledoc's configuration layer. Keeping these utilities separate helps avoid
import cycles and keeps the model classes small and focused.

TOML parsing/formatting:
    Tiledoc uses `tomlkit` for parsing and rendering.

Typical flow:
    1. Load defaults from code (``load_defaults_dict``).
    2. Load project TOML files (``load_toml_dict``).
    3. Read values with checked getters.
    4. Serialize back to TOML when needed (``to_toml``).
"""

from __future__ import annotations

from .getters import (
    get_bool_value_or_none_checked,
    get_int_value_or_none_checked,
    get_string_list_value_or_none_checked,
    get_string_value_or_none_checked,
)
from .guards import get_table_value, is_any_list, is_toml_table
from .loaders import (
    load_defaults_dict,
    load_toml_dict,
    parse_toml_text,
)
from .render import to_toml
from .types import TomlTable

__all__ = [
    "TomlTable",
    "get_bool_value_or_none_checked",
    "get_int_value_or_none_checked",
    "get_string_list_value_or_none_checked",
    "get_string_value_or_none_checked",
    "get_table_value",
    "is_any_list",
    "is_toml_table",
    "load_defaults_dict",
    "load_toml_dict",
    "parse_toml_text",
    "to_toml",
]
