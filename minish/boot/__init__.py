#!/usr/bin/env python3
# minish/boot/__init__.py
from __future__ import annotations
"""
Boot sequence package.

Exports:
- boot_sequence: ordered startup pipeline with [  OK  ] / [FAILED] log lines.
- BootState: Dataclass containing config, logger, resolver and completion trie.
"""


from .boot import BootState, boot_sequence

__all__ = ["boot_sequence", "BootState"]
