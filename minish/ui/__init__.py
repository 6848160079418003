#!/usr/bin/env python3
# minish/ui/__init__.py
from __future__ import annotations
# Re-export convenient top-level API
from .ansi import (
    ANSI,
    BELL,
    CLEAR_LINE,
    CRLF,
    strip_ansi,
    enable_windows_vt,
    redraw_sequence,
)
from .console import PRINT_MUTEX, print_line, write_raw
from .logging import (
    init_logger,
    ColorizingStreamHandler,
    PlainFormatter,
)

__all__ = [
    "ANSI",
    "BELL",
    "CLEAR_LINE",
    "CRLF",
    "strip_ansi",
    "enable_windows_vt",
    "redraw_sequence",
    "PRINT_MUTEX",
    "print_line",
    "write_raw",
    "init_logger",
    "ColorizingStreamHandler",
    "PlainFormatter",
]
