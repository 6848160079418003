#!/usr/bin/env python3
# minish/boot/boot.py
from __future__ import annotations
"""
Boot sequence for minish.

Steps run in order; each one is logged as [  OK  ] or [FAILED]. The search
path is read once here to build the completion trie. Execution re-reads it
per line, so PATH changes mid-session reach execution but not completion.
"""

import logging
import platform
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from minish.commands import BUILTINS, CommandResolver, search_path_from_env
from minish.config import ShellConfig, load_config_or_default
from minish.interface.completion import CommandTrie, build_command_trie
from minish.ui import init_logger

log = logging.getLogger("minish.boot")


@dataclass(slots=True)
class BootState:
    config: ShellConfig
    logger: logging.Logger
    resolver: CommandResolver
    trie: CommandTrie


def _step(label: str, fn: Callable[[], Any]) -> Any:
    """Run a boot step with status logging."""
    try:
        out = fn()
    except Exception as exc:
        log.error("[FAILED] %s (%s: %s)", label, type(exc).__name__, exc)
        raise
    log.debug("[  OK  ] %s", label)
    return out


def boot_sequence(environ: Mapping[str, str] | None = None) -> BootState:
    # Console logging first so configuration problems are visible.
    logger = init_logger("minish")

    config = _step(
        "Load configuration", lambda: load_config_or_default(environ=environ))

    def _apply_logging() -> logging.Logger:
        try:
            configured = init_logger(
                "minish", level=config.log_level, logfile=config.log_file_path)
        except OSError as exc:
            log.warning("cannot open log file %s: %s", config.log_file_path, exc)
            configured = init_logger("minish", level=config.log_level)
        for handler in configured.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(config.log_level)
        return configured

    logger = _step("Initialize logger", _apply_logging)
    _step(
        f"Detect environment: {platform.system()} {platform.release()} / Python {platform.python_version()}",
        lambda: None,
    )

    resolver = _step(
        "Register builtins", lambda: CommandResolver(BUILTINS.names()))
    search_path = _step(
        "Read search path", lambda: search_path_from_env(environ))
    trie = _step(
        "Build completion trie",
        lambda: build_command_trie(resolver.builtin_names, search_path),
    )
    _step("Boot complete", lambda: None)

    return BootState(config=config, logger=logger, resolver=resolver, trie=trie)
