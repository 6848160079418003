#!/usr/bin/env python3
# minish/interface/cli.py
from __future__ import annotations

"""
Interactive input frontends.

Selection order:
    1) raw terminal line editor (stdin is a TTY and completion is enabled)
    2) whole-line reads from stdin (pipes, files, completion disabled)

The raw editor is a key-event state machine (LineEditor) fed with
prompt_toolkit KeyPress objects; prompt_toolkit also owns entering and
leaving raw mode and decoding escape sequences into keys.
"""

import collections
import logging
import select
import sys
from typing import TYPE_CHECKING, Deque, Iterable, Iterator, Optional, TextIO

from prompt_toolkit.input import Input, create_input
from prompt_toolkit.key_binding.key_processor import KeyPress
from prompt_toolkit.keys import Keys

from minish.errors import TerminalIOFailure
from minish.interface.completion import CommandTrie, longest_common_prefix
from minish.ui import BELL, CRLF, redraw_sequence, write_raw

if TYPE_CHECKING:
    from minish.config import ShellConfig

log = logging.getLogger(__name__)

DEFAULT_PROMPT = "$ "

_SUBMIT_KEYS = frozenset({Keys.ControlM, Keys.ControlJ})
_BACKSPACE_KEYS = frozenset({Keys.ControlH})
# How long a lone ESC may wait for the rest of an escape sequence.
_ESCAPE_FLUSH_TIMEOUT = 0.05


class LineEditor:
    """
    Character-at-a-time line editor with trie-backed Tab completion.

    The editor only ever holds one line: `begin()` starts a prompt cycle and
    `feed()` processes exactly one key (including any redraw) before
    returning. The displayed line always equals prompt + buffer.
    """

    def __init__(
        self,
        trie: CommandTrie,
        *,
        prompt: str = DEFAULT_PROMPT,
        output: TextIO | None = None,
        bell: bool = True,
    ) -> None:
        self._trie = trie
        self.prompt = prompt
        self._output = output if output is not None else sys.stdout
        self._bell = bell
        self._buffer: list[str] = []
        self._tab_count = 0

    @property
    def buffer(self) -> str:
        return "".join(self._buffer)

    @property
    def tab_count(self) -> int:
        return self._tab_count

    # ---------------- Output ----------------

    def _write(self, text: str) -> None:
        write_raw(text, file=self._output)

    def _ring(self) -> None:
        if self._bell:
            self._write(BELL)

    def _redraw(self) -> None:
        self._write(redraw_sequence(self.prompt, self.buffer))

    def _replace_buffer(self, text: str) -> None:
        self._buffer = list(text)
        self._redraw()

    # ---------------- State machine ----------------

    def begin(self) -> None:
        """Start a new prompt cycle with an empty buffer."""
        self._buffer = []
        self._tab_count = 0
        self._write(self.prompt)

    def feed(self, key_press: KeyPress) -> Optional[str]:
        """
        Process one key event.

        Returns the submitted line on Enter / Ctrl-J, otherwise None.
        Ctrl-C raises SystemExit(0); callers holding raw mode restore the
        terminal on the way out.
        """
        key = key_press.key

        if key == Keys.ControlC:
            raise SystemExit(0)

        if key in _SUBMIT_KEYS:
            self._write(CRLF)
            line = self.buffer
            self._buffer = []
            self._tab_count = 0
            return line

        if key == Keys.ControlI:
            self._tab_count += 1
            self._complete()
            return None

        self._tab_count = 0

        if key in _BACKSPACE_KEYS:
            if self._buffer:
                self._buffer.pop()
                self._redraw()
            return None

        if not isinstance(key, Keys) and len(key) == 1 and key.isprintable():
            self._buffer.append(key)
            self._write(key)
        return None

    def _complete(self) -> None:
        prefix = self.buffer
        matches = sorted(self._trie.complete(prefix))

        if not matches:
            self._ring()
            return

        if len(matches) == 1:
            self._replace_buffer(f"{matches[0]} ")
            self._ring()
            return

        if self._tab_count == 1:
            common = longest_common_prefix(matches)
            if len(common) > len(prefix):
                self._replace_buffer(common)
                # Progress was made; the next Tab tries to disambiguate again.
                self._tab_count = 0
            self._ring()
            return

        self._write(f"{CRLF}{'  '.join(matches)}{CRLF}{self.prompt}{prefix}")
        self._tab_count = 0

    def run(self, key_presses: Iterable[KeyPress]) -> str:
        """
        Drive one full prompt cycle from a stream of key presses.

        Raises EOFError if the stream ends before a line is submitted.
        """
        self.begin()
        for key_press in key_presses:
            line = self.feed(key_press)
            if line is not None:
                return line
        raise EOFError("key stream ended before a line was submitted")


class BaseCLI:
    """
    Base interface for CLI frontends.

    Subclasses should implement:
        - setup()
        - get_line()
        - teardown()

    This base also provides context manager support to guarantee teardown.
    """

    def setup(self) -> None:  # pragma: no cover - interface
        ...

    def get_line(self) -> str:  # pragma: no cover - interface
        raise NotImplementedError

    def teardown(self) -> None:  # pragma: no cover - interface
        ...

    # Context manager helpers
    def __enter__(self) -> "BaseCLI":
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        try:
            self.teardown()
        except OSError as teardown_exc:
            log.warning("frontend teardown failed: %s", teardown_exc)


# ===== Non-interactive: whole lines =====
class PipeCLI(BaseCLI):
    """Reads whole lines; no line editing and no completion."""

    def __init__(
        self,
        *,
        prompt: str = DEFAULT_PROMPT,
        stdin: TextIO | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self.prompt = prompt
        self._stdin = stdin if stdin is not None else sys.stdin
        self._stdout = stdout if stdout is not None else sys.stdout

    def get_line(self) -> str:
        write_raw(self.prompt, file=self._stdout)
        line = self._stdin.readline()
        if line == "":
            raise EOFError
        return line.rstrip("\r\n")


# ===== Interactive: raw terminal =====
class RawTerminalCLI(BaseCLI):
    """
    Raw-mode line editor.

    Raw mode is held only while a line is being composed and is released on
    every exit path, so dispatched commands see a normal terminal.
    """

    def __init__(
        self,
        trie: CommandTrie,
        *,
        prompt: str = DEFAULT_PROMPT,
        bell: bool = True,
        terminal_input: Input | None = None,
        stdout: TextIO | None = None,
    ) -> None:
        self._input = terminal_input if terminal_input is not None else create_input()
        self._editor = LineEditor(trie, prompt=prompt, output=stdout, bell=bell)
        # Keys decoded in the same read as an earlier Enter (type-ahead).
        self._pending: Deque[KeyPress] = collections.deque()

    def _read_batch(self) -> list[KeyPress]:
        fd = self._input.fileno()
        while True:
            select.select([fd], [], [])
            key_presses = self._input.read_keys()
            if key_presses:
                return key_presses
            if self._input.closed:
                # Hangup or end of file: the descriptor stays readable forever.
                raise EOFError("terminal input closed")
            # Possibly half an escape sequence; give the rest a moment to arrive.
            if not select.select([fd], [], [], _ESCAPE_FLUSH_TIMEOUT)[0]:
                key_presses = self._input.flush_keys()
                if key_presses:
                    return key_presses

    def _keys(self) -> Iterator[KeyPress]:
        while True:
            if not self._pending:
                try:
                    self._pending.extend(self._read_batch())
                except OSError as exc:
                    raise TerminalIOFailure(f"terminal read failed: {exc}") from exc
            yield self._pending.popleft()

    def get_line(self) -> str:
        """Compose one line in raw mode. Raises EOFError once the terminal is closed."""
        with self._input.raw_mode():
            return self._editor.run(self._keys())

    def teardown(self) -> None:
        self._input.close()


def make_cli(
    trie: CommandTrie,
    config: "ShellConfig | None" = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> BaseCLI:
    """
    Select the frontend for this session.
    """
    stream = stdin if stdin is not None else sys.stdin
    prompt = config.prompt if config is not None else DEFAULT_PROMPT
    interactive = stream.isatty() and (config is None or config.enable_completion)
    if interactive:
        bell = config.bell if config is not None else True
        log.debug("using raw terminal line editor")
        return RawTerminalCLI(
            trie,
            prompt=prompt,
            bell=bell,
            terminal_input=create_input(stream),
            stdout=stdout,
        )
    log.debug("stdin is not an interactive terminal; reading whole lines")
    return PipeCLI(prompt=prompt, stdin=stream, stdout=stdout)
