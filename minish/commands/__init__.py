#!/usr/bin/env python3
# minish/commands/__init__.py
from __future__ import annotations

"""
Package for builtin registration and command resolution.

Provides:
- Resolution outcomes (`Builtin`, `External`, `NotFound`, `ResolvedCommand`).
- Builtin registry and decorator (`BUILTINS`, `builtin`).
- The resolver and search-path helpers.

Importing the package also imports `builtins`, which fills `BUILTINS`.
"""


# Re-export from submodules
from .command_types import (
    Builtin,
    BuiltinCallback,
    BuiltinCommand,
    External,
    NotFound,
    ResolvedCommand,
    ShellContext,
)
from .commands import (
    BUILTINS,
    BuiltinRegistry,
    CommandResolver,
    builtin,
    find_executable,
    parse_exit_code,
    search_path_from_env,
)
from . import builtins as _builtins  # noqa: F401  (registers exit/echo/type/pwd/cd)

__all__ = [
    "Builtin",
    "BuiltinCallback",
    "BuiltinCommand",
    "External",
    "NotFound",
    "ResolvedCommand",
    "ShellContext",
    "BUILTINS",
    "BuiltinRegistry",
    "CommandResolver",
    "builtin",
    "find_executable",
    "parse_exit_code",
    "search_path_from_env",
]
