from __future__ import annotations

import os
from pathlib import Path

import pytest

from minish.commands import (
    BUILTINS,
    Builtin,
    BuiltinRegistry,
    CommandResolver,
    External,
    NotFound,
    find_executable,
    builtin,
    parse_exit_code,
    search_path_from_env,
)
from minish.errors import InvalidExitCode


@pytest.fixture
def resolver() -> CommandResolver:
    return CommandResolver(BUILTINS.names())


def test_builtin_set_is_registered() -> None:
    assert {"exit", "echo", "type", "pwd", "cd"} <= BUILTINS.names()


def test_exit_with_valid_code(resolver: CommandResolver) -> None:
    assert resolver.resolve("exit", ["200"], []) == Builtin("exit", ("200",), 200)


@pytest.mark.parametrize("args", [["xx"], ["256"], ["-1"], [], ["1", "2"], ["²"]])
def test_exit_with_invalid_code_is_reported(resolver: CommandResolver, args: list[str]) -> None:
    with pytest.raises(InvalidExitCode):
        resolver.resolve("exit", args, [])


def test_invalid_exit_messages() -> None:
    assert str(InvalidExitCode(["xx"])) == "exit: xx: numeric argument required"
    assert str(InvalidExitCode([])) == "exit: missing exit code"
    assert parse_exit_code(["0"]) == 0
    assert parse_exit_code(["255"]) == 255


def test_builtins_win_over_executables(resolver: CommandResolver, search_path: list[str]) -> None:
    # `echo` exists in the first directory too.
    assert resolver.resolve("echo", ["hi"], search_path) == Builtin("echo", ("hi",))


def test_first_directory_in_order_wins(resolver: CommandResolver, path_dirs: tuple[Path, Path]) -> None:
    bin_dir, usr_bin = path_dirs
    resolved = resolver.resolve("cat", ["-n", "file"], [str(bin_dir), str(usr_bin)])
    assert resolved == External("cat", os.path.join(str(bin_dir), "cat"), ("-n", "file"))


def test_executable_only_in_later_directory(resolver: CommandResolver, path_dirs: tuple[Path, Path]) -> None:
    bin_dir, usr_bin = path_dirs
    resolved = resolver.resolve("ls", [], [str(bin_dir), str(usr_bin)])
    assert isinstance(resolved, External)
    assert resolved.path == os.path.join(str(usr_bin), "ls")
    assert resolved.args == ()


def test_unreadable_directory_is_skipped(resolver: CommandResolver, path_dirs: tuple[Path, Path], tmp_path: Path) -> None:
    _, usr_bin = path_dirs
    not_a_dir = tmp_path / "plain-file"
    not_a_dir.write_text("", encoding="utf-8")
    search = [str(tmp_path / "missing"), str(not_a_dir), str(usr_bin)]
    assert isinstance(resolver.resolve("ls", [], search), External)


@pytest.mark.parametrize("search", [[], ["/definitely/not/here"]])
def test_unknown_name_is_not_found(resolver: CommandResolver, search: list[str]) -> None:
    assert resolver.resolve("nosuchcmd", ["a"], search) == NotFound("nosuchcmd")


def test_classify_carries_no_arguments(resolver: CommandResolver, search_path: list[str]) -> None:
    kind = resolver.classify("ls", search_path)
    assert isinstance(kind, External)
    assert kind.args == ()
    assert resolver.classify("type", search_path) == Builtin("type")


def test_arguments_are_passed_unmodified(resolver: CommandResolver, search_path: list[str]) -> None:
    args = ["", "a b", "--flag=1"]
    resolved = resolver.resolve("ls", args, search_path)
    assert isinstance(resolved, External)
    assert resolved.argv == ["ls", "", "a b", "--flag=1"]


def test_find_executable_requires_exact_name(search_path: list[str]) -> None:
    assert find_executable("ca", search_path) is None
    assert find_executable("", search_path) is None


def test_search_path_from_env_drops_empty_entries() -> None:
    env = {"PATH": os.pathsep.join(["/bin", "", "/usr/bin", ""])}
    assert search_path_from_env(env) == ["/bin", "/usr/bin"]
    assert search_path_from_env({}) == []


def test_search_path_is_read_fresh(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PATH", "/first")
    assert search_path_from_env() == ["/first"]
    monkeypatch.setenv("PATH", "/second")
    assert search_path_from_env() == ["/second"]


def test_builtin_decorator_registers_into_given_registry() -> None:
    registry = BuiltinRegistry()

    @builtin(registry=registry)
    def true_(command, context):
        return None

    @builtin(name="say", registry=registry)
    def _say(command, context):
        return " ".join(command.args)

    assert registry.names() == {"true", "say"}
    assert registry.get("say").invoke(Builtin("say", ("hi", "there")), None) == "hi there"
    with pytest.raises(ValueError):
        builtin(name="say", registry=registry)(_say)
    assert "say" not in BUILTINS.names()
