#!/usr/bin/env python3
# minish/interface/parser.py
from __future__ import annotations

"""
Quote- and escape-aware tokenizer.

Responsibilities:
- Split a raw input line into words honoring single quotes, double quotes
  and backslash escapes.
- Separate the command name from its arguments.

Malformed quoting is never fatal: an unterminated quote at end of line keeps
whatever was accumulated and flushes it as the last word.
"""

import logging

log = logging.getLogger(__name__)

# Characters a backslash may escape inside double quotes.
_DQUOTE_ESCAPABLE = frozenset('\\$"')

_UNQUOTED = "unquoted"
_SINGLE = "single"
_DOUBLE = "double"


def split_words(line: str) -> list[str]:
    """
    Return the full token stream for `line` (command name first).

    An empty or all-blank line yields an empty list. A word is only ever
    empty when it was written as an explicit pair of quotes.
    """
    words: list[str] = []
    current: list[str] = []
    # True once the current word has started, even if it is still empty ('' or "").
    in_word = False
    quote = _UNQUOTED
    pending_backslash = False

    for char in line:
        if pending_backslash:
            pending_backslash = False
            if quote == _DOUBLE:
                if char not in _DQUOTE_ESCAPABLE:
                    current.append("\\")
                current.append(char)
            else:
                current.append(char)
            in_word = True
            continue

        if char == "\\" and quote != _SINGLE:
            pending_backslash = True
        elif char == "\\":
            # Literal inside single quotes; only the closing quote is special.
            current.append(char)
        elif char == '"' and quote != _SINGLE:
            quote = _UNQUOTED if quote == _DOUBLE else _DOUBLE
            in_word = True
        elif char == "'" and quote != _DOUBLE:
            quote = _UNQUOTED if quote == _SINGLE else _SINGLE
            in_word = True
        elif char == " " and quote == _UNQUOTED:
            if in_word:
                words.append("".join(current))
                current = []
                in_word = False
        else:
            current.append(char)
            in_word = True

    if pending_backslash and quote == _DOUBLE:
        # A trailing backslash inside quotes has nothing to escape; keep it.
        current.append("\\")
    if quote != _UNQUOTED:
        log.debug("unterminated %s quote in %r; flushing partial word", quote, line)

    if in_word:
        words.append("".join(current))
    return words


def tokenize(line: str) -> tuple[str, list[str]]:
    """
    Split a raw command line into (name, args).

    Empty input returns ("", []); callers treat that as "no command".
    """
    words = split_words(line)
    if not words:
        return "", []
    name, *args = words
    return name, args
