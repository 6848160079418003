from __future__ import annotations

import os
import stat
from pathlib import Path

import pytest


def make_executable(directory: Path, name: str) -> Path:
    target = directory / name
    target.write_text("#!/bin/sh\nexit 0\n", encoding="utf-8")
    target.chmod(target.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return target


@pytest.fixture
def path_dirs(tmp_path: Path) -> tuple[Path, Path]:
    """Two search-path directories: `bin` (cat, echo) and `usr_bin` (ls, cat, car)."""
    bin_dir = tmp_path / "bin"
    usr_bin = tmp_path / "usr_bin"
    bin_dir.mkdir()
    usr_bin.mkdir()
    make_executable(bin_dir, "cat")
    make_executable(bin_dir, "echo")
    make_executable(usr_bin, "ls")
    make_executable(usr_bin, "cat")
    make_executable(usr_bin, "car")
    return bin_dir, usr_bin


@pytest.fixture
def search_path(path_dirs: tuple[Path, Path]) -> list[str]:
    return [str(directory) for directory in path_dirs]


@pytest.fixture
def restore_cwd():
    cwd = os.getcwd()
    yield
    os.chdir(cwd)
