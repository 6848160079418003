#!/usr/bin/env python3
# minish/config.py
from __future__ import annotations

"""
Configuration loader (stdlib-only).

Precedence (low → high):
  1) Built-in defaults
  2) Files in the config directory: config.ini, config.json, config.toml
  3) Environment variables prefixed with MINISH_ (MINISH_PROMPT -> PROMPT)

Validation:
  - PROMPT: str (may be empty)
  - LOG_LEVEL: one of {'DEBUG','INFO','WARNING','ERROR','CRITICAL'}
  - LOG_FILE_PATH: None or normalized path
  - ENABLE_COMPLETION / BELL: bool
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping
import configparser
import json
import logging
import os
import re
import tomllib  # stdlib in 3.11+

log = logging.getLogger(__name__)

ENV_PREFIX = "MINISH_"

# ---------- defaults ----------


def _default_config_dir(environ: Mapping[str, str]) -> Path:
    base = environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / "minish"


DEFAULTS: dict[str, Any] = {
    "PROMPT": "$ ",
    "LOG_LEVEL": "WARNING",
    "LOG_FILE_PATH": None,
    "ENABLE_COMPLETION": True,
    "BELL": True,
}

# ---------- data model ----------


@dataclass(frozen=True)
class ShellConfig:
    prompt: str = DEFAULTS["PROMPT"]
    log_level: str = DEFAULTS["LOG_LEVEL"]
    log_file_path: Path | None = None
    enable_completion: bool = True
    bell: bool = True

    # Unrecognized keys preserved for debugging/forward-compat
    extra: dict[str, Any] = field(default_factory=dict)


# ---------- file loaders (stdlib) ----------

def _load_ini_file(path: Path) -> dict[str, str]:
    cfg = configparser.ConfigParser()
    try:
        cfg.read(path, encoding="utf-8")
    except configparser.Error as exc:
        log.warning("ignoring unreadable config file %s: %s", path, exc)
        return {}
    flat: dict[str, str] = {}
    for sec in cfg.sections():
        for k, v in cfg.items(sec):
            flat[k.upper()] = v
    return flat


def _load_json_file(path: Path) -> dict[str, Any]:
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except json.JSONDecodeError as exc:
        log.warning("ignoring malformed config file %s: %s", path, exc)
        return {}


def _load_toml_file(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except FileNotFoundError:
        return {}
    except tomllib.TOMLDecodeError as exc:
        log.warning("ignoring malformed config file %s: %s", path, exc)
        return {}


def _flatten_mapping(obj: Any, prefix: str = "") -> dict[str, Any]:
    """
    Flatten nested dicts to UPPER_SNAKE keys.
    Example: {'log': {'level': 'debug'}} -> {'LOG_LEVEL': 'debug'}
    """
    flat: dict[str, Any] = {}
    if isinstance(obj, Mapping):
        for k, v in obj.items():
            key = f"{prefix}_{k}" if prefix else str(k)
            if isinstance(v, Mapping):
                flat.update(_flatten_mapping(v, key))
            else:
                flat[str(key).upper()] = v
    return flat


def _find_config_files(config_dir: Path) -> list[Path]:
    return [
        config_dir / "config.ini",
        config_dir / "config.json",
        config_dir / "config.toml",
    ]


# ---------- normalization & coercion ----------

_BOOL_TRUE = {"1", "true", "yes", "y", "on"}
_BOOL_FALSE = {"0", "false", "no", "n", "off"}


def _as_bool(val: Any) -> bool:
    if isinstance(val, bool):
        return val
    s = str(val).strip().lower()
    if s in _BOOL_TRUE:
        return True
    if s in _BOOL_FALSE:
        return False
    raise ValueError(f"Expected boolean, got: {val!r}")


def _as_opt_str(val: Any) -> str | None:
    return None if val is None or str(val).strip().lower() in {"", "none"} else str(val)


def _as_log_level(val: Any) -> str:
    lv = _as_opt_str(val)
    if lv is None:
        return DEFAULTS["LOG_LEVEL"]
    up = lv.upper()
    allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
    if up not in allowed:
        raise ValueError(
            f"LOG_LEVEL must be one of {sorted(allowed)}, got {lv!r}")
    return up


def _as_opt_path(val: Any) -> Path | None:
    v = _as_opt_str(val)
    if v is None:
        return None
    # expand both ~ and env vars
    return Path(os.path.expandvars(os.path.expanduser(v))).resolve()


# ---------- merge & load ----------

def _normalize_keys(d: Mapping[str, Any]) -> dict[str, Any]:
    return {str(k).upper(): v for k, v in d.items()}


def _env_overrides(environ: Mapping[str, str]) -> dict[str, str]:
    """Take MINISH_-prefixed variables only; the prefix is stripped."""
    out: dict[str, str] = {}
    for k, v in environ.items():
        if k.startswith(ENV_PREFIX) and re.fullmatch(r"[A-Z0-9_]+", k):
            out[k[len(ENV_PREFIX):]] = v
    return out


def _merge_sources(config_dir: Path, environ: Mapping[str, str]) -> dict[str, Any]:
    merged: dict[str, Any] = dict(DEFAULTS)

    for file in _find_config_files(config_dir):
        if not file.is_file():
            continue
        if file.suffix == ".ini":
            merged.update(_normalize_keys(_load_ini_file(file)))
        elif file.suffix == ".json":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_json_file(file))))
        elif file.suffix == ".toml":
            merged.update(_normalize_keys(
                _flatten_mapping(_load_toml_file(file))))

    # Environment variables override all
    merged.update(_env_overrides(environ))
    return merged


# ---------- validation ----------

def _validate_and_build(config: dict[str, Any]) -> ShellConfig:
    prompt_raw = config.get("PROMPT", DEFAULTS["PROMPT"])
    prompt = "" if prompt_raw is None else str(prompt_raw)

    log_level = _as_log_level(config.get("LOG_LEVEL", DEFAULTS["LOG_LEVEL"]))
    log_file_path = _as_opt_path(config.get("LOG_FILE_PATH", DEFAULTS["LOG_FILE_PATH"]))
    enable_completion = _as_bool(config.get(
        "ENABLE_COMPLETION", DEFAULTS["ENABLE_COMPLETION"]))
    bell = _as_bool(config.get("BELL", DEFAULTS["BELL"]))

    recognized = set(DEFAULTS.keys())
    extra = {k: v for k, v in config.items() if k not in recognized}

    return ShellConfig(
        prompt=prompt,
        log_level=log_level,
        log_file_path=log_file_path,
        enable_completion=enable_completion,
        bell=bell,
        extra=extra,
    )


# ---------- public API ----------

def load_config(
    *,
    config_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ShellConfig:
    """
    Load, merge, normalize, and validate configuration.
    No filesystem side-effects. Raises ValueError on invalid values.
    """
    env = os.environ if environ is None else environ
    raw = _merge_sources(
        config_dir if config_dir is not None else _default_config_dir(env),
        env,
    )
    return _validate_and_build(raw)


def load_config_or_default(
    *,
    config_dir: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> ShellConfig:
    """Like load_config, but a bad value falls back to defaults with a warning."""
    try:
        return load_config(config_dir=config_dir, environ=environ)
    except ValueError as exc:
        log.warning("Invalid configuration, using defaults: %s", exc)
        return ShellConfig()
