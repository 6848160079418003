#!/usr/bin/env python3
# minish/interface/handler.py
from __future__ import annotations

"""
Command dispatch.

One line in, one command run: the line is tokenized, the name resolved
against a freshly read search path, and the outcome handled exhaustively:

  Builtin   - run the registered callback, print what it returns
  External  - spawn the executable with inherited stdio and wait for it
  NotFound  - report "<name>: command not found"
"""

import logging
import subprocess
import sys
from typing import Sequence, TextIO

from minish.commands import (
    BUILTINS,
    Builtin,
    CommandResolver,
    External,
    NotFound,
    ResolvedCommand,
    ShellContext,
    search_path_from_env,
)
from minish.errors import ExternalSpawnFailure, UnknownCommand
from minish.interface.parser import tokenize
from minish.ui import print_line

log = logging.getLogger(__name__)

# 128 + SIGINT, as POSIX shells report an interrupted child.
INTERRUPTED_STATUS = 130


def _run_builtin(command: Builtin, context: ShellContext, out: TextIO) -> int:
    command_obj = BUILTINS.get(command.name)
    if command_obj is None:
        # Resolver knows a name the registry does not; treat like any unknown name.
        raise UnknownCommand(command.name)
    text = command_obj.invoke(command, context)
    if text is not None:
        print_line(text, file=out)
    return 0


def _run_external(command: External, out: TextIO) -> int:
    """Spawn an executable and wait; the child shares our terminal."""
    out.flush()
    try:
        completed = subprocess.run(command.argv, executable=command.path)
    except OSError as exc:
        log.debug("failed to spawn %s (%s): %s", command.name, command.path, exc)
        raise ExternalSpawnFailure(command.name, exc) from exc
    except KeyboardInterrupt:
        # Interrupting the child must not take the shell down with it.
        print_line(file=out)
        log.debug("%s interrupted", command.name)
        return INTERRUPTED_STATUS
    log.debug("%s exited with status %d", command.name, completed.returncode)
    return completed.returncode


def dispatch(command: ResolvedCommand, context: ShellContext, *, out: TextIO | None = None) -> int:
    """Perform the side effect for a resolved command and return its status."""
    stream = out if out is not None else sys.stdout
    if isinstance(command, Builtin):
        return _run_builtin(command, context, stream)
    if isinstance(command, External):
        return _run_external(command, stream)
    if isinstance(command, NotFound):
        raise UnknownCommand(command.text)
    raise TypeError(f"Unhandled command kind: {type(command).__name__}")


def handle_line(
    input_line: str,
    resolver: CommandResolver,
    *,
    search_path: Sequence[str] | None = None,
    out: TextIO | None = None,
) -> int | None:
    """
    Parse and execute one input line.

    Returns:
        - None if the line held no command.
        - The command's exit status otherwise.

    Raises ShellError subclasses for user-visible failures and SystemExit
    for a valid `exit`.
    """
    name, args = tokenize(input_line.rstrip("\r\n"))
    if not name:
        return None

    path = list(search_path) if search_path is not None else search_path_from_env()
    resolved = resolver.resolve(name, args, path)
    log.debug("resolved %r -> %r", name, resolved)
    return dispatch(resolved, ShellContext(resolver=resolver, search_path=path), out=out)
