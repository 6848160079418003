#!/usr/bin/env python3
# minish/__main__.py
from __future__ import annotations
"""
Read-eval-print loop.

Usage:
    minish
    python -m minish
"""

import sys

from minish.boot import BootState, boot_sequence
from minish.errors import ShellError, TerminalIOFailure
from minish.interface import BaseCLI, handle_line, make_cli
from minish.ui import print_line

# Consecutive terminal read failures tolerated before the session ends.
MAX_TERMINAL_FAILURES = 5


def repl(state: BootState, cli: BaseCLI) -> int:
    """
    Loop until end of input; `exit` leaves through SystemExit.

    Returns 0 at end of input and 1 when the terminal keeps failing.
    """
    failures = 0
    while True:
        try:
            line = cli.get_line()
        except EOFError:
            return 0
        except TerminalIOFailure as exc:
            failures += 1
            if failures >= MAX_TERMINAL_FAILURES:
                state.logger.error("%s; giving up after %d consecutive failures", exc, failures)
                return 1
            state.logger.warning("%s; starting a fresh prompt", exc)
            continue
        failures = 0

        try:
            handle_line(line, state.resolver)
        except ShellError as exc:
            print_line(str(exc))


def main() -> int:
    state = boot_sequence()
    with make_cli(state.trie, state.config) as cli:
        return repl(state, cli)


if __name__ == "__main__":
    sys.exit(main())
