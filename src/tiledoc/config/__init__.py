# topmark:header:start
#
#   project      : Tiledoc
#   file         : __init__.py
#   file_relpath : src/tiledoc/config/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration handling for Tiledoc.

Submodules:
    logging: TRACE-capable loggers and colored output.
    keys: TOML section and key names.
    io: TOML loading, checked getters and rendering (``tomlkit``).
    model: `MutableConfig` / `Config` and `load_config`.

This package module stays import-free: `tiledoc.config.logging` is imported
by nearly every other module, and pulling `model` in here would create an
import cycle with the diagnostics package.
"""
