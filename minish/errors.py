#!/usr/bin/env python3
# minish/errors.py
from __future__ import annotations

"""
Error taxonomy for the shell.

Every error raised here is recoverable: the REPL prints ``str(exc)`` as a
single-line diagnostic and shows a fresh prompt. Malformed quoting and
unreadable search-path directories are recovered where they happen and have
no exception type.
"""


class ShellError(Exception):
    """Base class for user-visible shell errors."""


class UnknownCommand(ShellError):
    """A command name matched neither a builtin nor an executable."""

    def __init__(self, text: str) -> None:
        super().__init__(f"{text}: command not found")
        self.text = text


class ExternalSpawnFailure(UnknownCommand):
    """An executable was located but the OS refused to start it."""

    def __init__(self, name: str, cause: OSError | None = None) -> None:
        super().__init__(name)
        self.cause = cause


class InvalidExitCode(ShellError):
    """`exit` was given a missing, non-numeric or out-of-range status."""

    def __init__(self, arguments: list[str]) -> None:
        if not arguments:
            message = "exit: missing exit code"
        elif len(arguments) > 1:
            message = "exit: too many arguments"
        else:
            message = f"exit: {arguments[0]}: numeric argument required"
        super().__init__(message)
        self.arguments = list(arguments)


class TerminalIOFailure(ShellError):
    """Reading keys from the terminal failed; the input cycle is abandoned."""
