#!/usr/bin/env python3
# minish/ui/console.py
from __future__ import annotations

import sys
import threading
from typing import TextIO

# Single shared print mutex for all UI output (editor echo, dispatcher, logging).
PRINT_MUTEX = threading.Lock()


def print_line(text: str = "", *, file: TextIO | None = None, flush: bool = True) -> None:
    """Write one line of output under the shared print mutex."""
    stream = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        stream.write(f"{text}\n")
        if flush:
            stream.flush()


def write_raw(text: str, *, file: TextIO | None = None) -> None:
    """Write control sequences or partial lines without a newline, flushing immediately."""
    stream = file if file is not None else sys.stdout
    with PRINT_MUTEX:
        stream.write(text)
        stream.flush()
