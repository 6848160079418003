#!/usr/bin/env python3
# minish/__init__.py
from __future__ import annotations
"""
minish: a small interactive shell.

Reads a line, tokenizes it with shell quoting rules, resolves the command
name against the builtins and the search path, and runs it. Interactive
sessions get a raw-terminal line editor with trie-backed Tab completion.
"""

__version__ = "0.3.0"

__all__ = ["__version__"]
