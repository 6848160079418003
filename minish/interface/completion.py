#!/usr/bin/env python3
# minish/interface/completion.py
from __future__ import annotations

"""
Command name completion.

This module offers:
- CommandTrie: a character-keyed prefix tree over known command names.
- longest_common_prefix: the shared leading text of a set of candidates.
- build_command_trie: one-shot population from builtins and the search path.

The trie is built once at startup and only read afterwards; the filesystem
is not re-scanned per keystroke.
"""

import logging
import os
from typing import Iterable, Iterator

log = logging.getLogger(__name__)


class _TrieNode:
    __slots__ = ("children", "terminal")

    def __init__(self) -> None:
        self.children: dict[str, _TrieNode] = {}
        self.terminal = False


class CommandTrie:
    """Prefix tree supporting insertion and "all completions of a prefix"."""

    def __init__(self, words: Iterable[str] = ()) -> None:
        self._root = _TrieNode()
        self._size = 0
        self.update(words)

    # ---------------- Mutation ----------------

    def insert(self, word: str) -> None:
        """Insert `word`; inserting an existing word is a no-op."""
        node = self._root
        for char in word:
            child = node.children.get(char)
            if child is None:
                child = node.children[char] = _TrieNode()
            node = child
        if not node.terminal:
            node.terminal = True
            self._size += 1

    def update(self, words: Iterable[str]) -> None:
        for word in words:
            self.insert(word)

    # ---------------- Lookup ----------------

    def _walk(self, prefix: str) -> _TrieNode | None:
        node = self._root
        for char in prefix:
            node = node.children.get(char)
            if node is None:
                return None
        return node

    def complete(self, prefix: str) -> set[str]:
        """
        Return every inserted word that starts with `prefix`.

        `prefix` itself is included when it was inserted as a word. The set
        is unordered; sort it where display order matters.
        """
        node = self._walk(prefix)
        if node is None:
            return set()
        return set(_collect(node, prefix))

    def __contains__(self, word: object) -> bool:
        if not isinstance(word, str):
            return False
        node = self._walk(word)
        return node is not None and node.terminal

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[str]:
        return _collect(self._root, "")


def _collect(node: _TrieNode, prefix: str) -> Iterator[str]:
    """Depth-first traversal yielding every complete word under `node`."""
    stack = [(node, prefix)]
    while stack:
        current, text = stack.pop()
        if current.terminal:
            yield text
        for char, child in current.children.items():
            stack.append((child, text + char))


def longest_common_prefix(words: Iterable[str]) -> str:
    """
    Return the longest prefix shared by all `words`.

    Characters are collected while every word agrees at each index, so the
    last shared character is included. An empty input yields "".
    """
    candidates = list(words)
    if not candidates:
        return ""
    shortest = min(candidates, key=len)
    for index, char in enumerate(shortest):
        if any(word[index] != char for word in candidates):
            return shortest[:index]
    return shortest


def _directory_entries(directory: str) -> list[str]:
    """List entry names of one search-path directory; unreadable ones yield nothing."""
    try:
        with os.scandir(directory) as entries:
            return [entry.name for entry in entries]
    except OSError as exc:
        log.debug("skipping unreadable search path entry %r: %s", directory, exc)
        return []


def build_command_trie(builtin_names: Iterable[str], search_path: Iterable[str]) -> CommandTrie:
    """
    Populate a trie from the builtin names and every entry of every
    search-path directory.
    """
    trie = CommandTrie(builtin_names)
    for directory in search_path:
        trie.update(_directory_entries(directory))
    log.debug("completion trie holds %d command names", len(trie))
    return trie
