#!/usr/bin/env python3
# minish/commands/command_types.py
from __future__ import annotations

"""
Command data structures and protocols.

This module defines:
- Builtin / External / NotFound: the closed set of resolution outcomes.
- ResolvedCommand: the union of those outcomes, consumed by the dispatcher.
- BuiltinCallback: the callable protocol for builtin implementations.
- BuiltinCommand: a registered builtin name bound to its callable.
- ShellContext: what a builtin may consult while running.
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, Union

if TYPE_CHECKING:
    from minish.commands.commands import CommandResolver


@dataclass(frozen=True, slots=True)
class Builtin:
    """
    A command implemented by the shell itself.

    Attributes:
        name: Builtin name as typed.
        args: Arguments after the name.
        exit_code: Validated status for `exit`; None for every other builtin.
    """
    name: str
    args: tuple[str, ...] = ()
    exit_code: int | None = None


@dataclass(frozen=True, slots=True)
class External:
    """An executable located on the search path."""
    name: str
    path: str
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> list[str]:
        return [self.name, *self.args]


@dataclass(frozen=True, slots=True)
class NotFound:
    """A name that matched neither a builtin nor any search-path entry."""
    text: str


ResolvedCommand = Union[Builtin, External, NotFound]


@dataclass(slots=True)
class ShellContext:
    """
    State a builtin may read while running.

    `search_path` is the value read for the current line, so `type` reports
    what execution would actually find.
    """
    resolver: "CommandResolver"
    search_path: list[str] = field(default_factory=list)


class BuiltinCallback(Protocol):
    """Protocol for any builtin implementation."""

    def __call__(self, command: Builtin, context: ShellContext) -> str | None:  # pragma: no cover - signature only
        ...


@dataclass(slots=True)
class BuiltinCommand:
    """A registered builtin: its unique name and the function implementing it."""

    name: str
    callback: BuiltinCallback

    def invoke(self, command: Builtin, context: ShellContext) -> str | None:
        """Execute the underlying callback for an already resolved command."""
        return self.callback(command, context)
