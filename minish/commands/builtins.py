#!/usr/bin/env python3
# minish/commands/builtins.py
from __future__ import annotations

"""
Builtins implemented by the shell itself.

Each builtin receives the resolved `Builtin` and a `ShellContext` and returns
the text to print (or None). `exit` ends the session by raising SystemExit.
"""

import os
from pathlib import Path

from minish.commands.command_types import Builtin, External, ShellContext
from minish.commands.commands import builtin


@builtin()
def exit_(command: Builtin, context: ShellContext) -> str | None:
    # The resolver has already validated the operand.
    raise SystemExit(command.exit_code)


@builtin()
def echo(command: Builtin, context: ShellContext) -> str | None:
    return " ".join(command.args)


@builtin()
def type_(command: Builtin, context: ShellContext) -> str | None:
    if not command.args:
        return "type: missing operand"
    lines = []
    for target in command.args:
        kind = context.resolver.classify(target, context.search_path)
        if isinstance(kind, Builtin):
            lines.append(f"{target} is a shell builtin")
        elif isinstance(kind, External):
            lines.append(f"{target} is {kind.path}")
        else:
            lines.append(f"{target}: not found")
    return "\n".join(lines)


@builtin()
def pwd(command: Builtin, context: ShellContext) -> str | None:
    return os.getcwd()


@builtin()
def cd(command: Builtin, context: ShellContext) -> str | None:
    if len(command.args) > 1:
        return "cd: too many arguments"
    target = command.args[0] if command.args else "~"
    destination = Path(target).expanduser()
    try:
        os.chdir(destination)
    except (FileNotFoundError, NotADirectoryError):
        return f"cd: {target}: No such file or directory"
    except PermissionError:
        return f"cd: {target}: Permission denied"
    return None
