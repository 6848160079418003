#!/usr/bin/env python3
# minish/commands/commands.py
from __future__ import annotations

"""
Builtin registry and command resolution.

This module provides:
- BuiltinRegistry: in-memory table of builtins.
- builtin: decorator to register functions as builtins.
- CommandResolver: classifies a command name as builtin, external or not found.
- search_path_from_env / find_executable: search-path helpers.
"""

import logging
import os
from typing import Callable, Dict, Iterable, Mapping, Optional, Sequence

from minish.commands.command_types import (
    Builtin,
    BuiltinCallback,
    BuiltinCommand,
    External,
    NotFound,
    ResolvedCommand,
)
from minish.errors import InvalidExitCode

log = logging.getLogger(__name__)


class BuiltinRegistry:
    """Holds all builtin definitions and provides lookup utilities."""

    def __init__(self) -> None:
        self._builtins_by_name: Dict[str, BuiltinCommand] = {}

    def register(self, command_obj: BuiltinCommand) -> None:
        """Register a builtin, refusing duplicate names."""
        if command_obj.name in self._builtins_by_name:
            raise ValueError(
                f"Builtin '{command_obj.name}' already registered.")
        self._builtins_by_name[command_obj.name] = command_obj

    def get(self, name: str) -> Optional[BuiltinCommand]:
        """Return the builtin by exact name, or None."""
        return self._builtins_by_name.get(name)

    def names(self) -> frozenset[str]:
        """Return the builtin name set; it does not change after startup."""
        return frozenset(self._builtins_by_name)


# Registry populated once at import time by minish.commands.builtins.
BUILTINS = BuiltinRegistry()


def builtin(
    *,
    name: str | None = None,
    registry: BuiltinRegistry | None = None,
) -> Callable[[BuiltinCallback], BuiltinCallback]:
    """
    Decorator to register a function as a shell builtin.

    The function name is used when `name` is omitted (trailing underscores
    stripped, so `exit_` registers as `exit`).
    """

    def wrapper(func: BuiltinCallback) -> BuiltinCallback:
        builtin_name = name or func.__name__.rstrip("_")  # type: ignore[attr-defined]
        (registry or BUILTINS).register(BuiltinCommand(name=builtin_name, callback=func))
        return func

    return wrapper


# ---------------------------------------------------------------------------
# Search path
# ---------------------------------------------------------------------------


def search_path_from_env(environ: Mapping[str, str] | None = None) -> list[str]:
    """
    Split the PATH variable into directories, dropping empty entries.

    Read fresh on every call so that PATH changes mid-session are honoured.
    """
    env = os.environ if environ is None else environ
    raw = env.get("PATH", "")
    return [part for part in raw.split(os.pathsep) if part]


def find_executable(name: str, search_path: Iterable[str]) -> Optional[str]:
    """
    Return the full path of the first search-path entry named exactly `name`.

    Directories are visited in listed order and entries in the order the
    platform returns them. Unreadable directories are skipped.
    """
    if not name:
        return None
    for directory in search_path:
        try:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if entry.name == name:
                        return os.path.join(directory, entry.name)
        except OSError as exc:
            log.debug("skipping unreadable search path entry %r: %s", directory, exc)
    return None


def parse_exit_code(args: Sequence[str]) -> int:
    """Validate the `exit` operand as an unsigned byte (0-255)."""
    if len(args) != 1:
        raise InvalidExitCode(list(args))
    raw = args[0]
    if not (raw.isascii() and raw.isdigit()) or int(raw) > 255:
        raise InvalidExitCode(list(args))
    return int(raw)


# ---------------------------------------------------------------------------
# Resolution
# ---------------------------------------------------------------------------


class CommandResolver:
    """
    Classify command names against a fixed builtin set and a search path.

    `classify` is the shared step used by `type`; `resolve` adds the
    argument payload needed for execution.
    """

    def __init__(self, builtin_names: Iterable[str]) -> None:
        self._builtin_names = frozenset(builtin_names)

    @property
    def builtin_names(self) -> frozenset[str]:
        return self._builtin_names

    def is_builtin(self, name: str) -> bool:
        return name in self._builtin_names

    def classify(self, name: str, search_path: Iterable[str]) -> ResolvedCommand:
        """Return what `name` refers to, without any argument payload."""
        if name in self._builtin_names:
            return Builtin(name)
        path = find_executable(name, search_path)
        if path is None:
            return NotFound(name)
        return External(name=name, path=path)

    def resolve(self, name: str, args: Sequence[str], search_path: Iterable[str]) -> ResolvedCommand:
        """
        Resolve `name` for execution.

        Builtins always win over like-named executables. `exit` has its
        operand validated here and raises InvalidExitCode when it is bad.
        """
        kind = self.classify(name, search_path)
        if isinstance(kind, Builtin):
            exit_code = parse_exit_code(args) if name == "exit" else None
            return Builtin(name, tuple(args), exit_code)
        if isinstance(kind, External):
            return External(name=kind.name, path=kind.path, args=tuple(args))
        return kind
