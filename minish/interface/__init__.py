#!/usr/bin/env python3
# minish/interface/__init__.py
from __future__ import annotations

"""
Package for interactive input and command dispatch.

Provides:
- Quote-aware tokenizer.
- Command-name trie and common-prefix helper for completion.
- Raw-terminal line editor and line-based frontends.
- Command dispatcher.
"""


# Tokenizer and completion FIRST (cli and handler depend on them)
from .parser import split_words, tokenize
from .completion import CommandTrie, build_command_trie, longest_common_prefix

# Command dispatcher
from .handler import dispatch, handle_line

# CLI frontends
from .cli import (
    DEFAULT_PROMPT,
    BaseCLI,
    LineEditor,
    PipeCLI,
    RawTerminalCLI,
    make_cli,
)

__all__ = [
    # parser
    "split_words",
    "tokenize",
    # completion
    "CommandTrie",
    "build_command_trie",
    "longest_common_prefix",
    # handler
    "dispatch",
    "handle_line",
    # cli
    "DEFAULT_PROMPT",
    "BaseCLI",
    "LineEditor",
    "PipeCLI",
    "RawTerminalCLI",
    "make_cli",
]
