from __future__ import annotations

import io
from pathlib import Path

import pytest

from minish.__main__ import MAX_TERMINAL_FAILURES, repl
from minish.boot import boot_sequence
from minish.config import ShellConfig
from minish.errors import TerminalIOFailure
from minish.interface.cli import BaseCLI, PipeCLI, RawTerminalCLI, make_cli
from minish.interface.completion import CommandTrie


class TtyStringIO(io.StringIO):
    def isatty(self) -> bool:
        return True


def test_pipe_cli_prompts_and_strips_newlines() -> None:
    stdout = io.StringIO()
    cli = PipeCLI(stdin=io.StringIO("echo a\r\nexit 0\n"), stdout=stdout)
    assert cli.get_line() == "echo a"
    assert cli.get_line() == "exit 0"
    with pytest.raises(EOFError):
        cli.get_line()
    assert stdout.getvalue() == "$ $ $ "


def test_make_cli_uses_pipe_mode_when_not_a_tty() -> None:
    cli = make_cli(CommandTrie(), ShellConfig(prompt="% "), stdin=io.StringIO(""))
    assert isinstance(cli, PipeCLI)
    assert cli.prompt == "% "


def test_make_cli_respects_disabled_completion() -> None:
    config = ShellConfig(enable_completion=False)
    assert isinstance(make_cli(CommandTrie(), config, stdin=TtyStringIO("")), PipeCLI)


def test_make_cli_uses_raw_editor_on_a_tty(monkeypatch: pytest.MonkeyPatch) -> None:
    created: list[object] = []

    def fake_create_input(stdin=None):
        created.append(stdin)
        return object()

    monkeypatch.setattr("minish.interface.cli.create_input", fake_create_input)
    stdin = TtyStringIO("")
    cli = make_cli(CommandTrie(["echo"]), ShellConfig(bell=False), stdin=stdin)
    assert isinstance(cli, RawTerminalCLI)
    assert created == [stdin]


def test_boot_builds_trie_from_search_path(path_dirs: tuple[Path, Path], tmp_path: Path) -> None:
    env = {"PATH": ":".join(str(d) for d in path_dirs), "XDG_CONFIG_HOME": str(tmp_path / "cfg")}
    state = boot_sequence(env)
    assert state.trie.complete("ca") == {"cat", "car"}
    assert state.trie.complete("e") == {"echo", "exit"}
    assert state.resolver.is_builtin("type")
    assert state.config == ShellConfig()


def test_repl_reports_errors_and_continues(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    env = {"PATH": str(tmp_path / "empty"), "XDG_CONFIG_HOME": str(tmp_path / "cfg")}
    monkeypatch.setenv("PATH", env["PATH"])
    state = boot_sequence(env)
    lines = "nosuchcmd a\nexit nope\necho still here\n"
    cli = PipeCLI(stdin=io.StringIO(lines))

    assert repl(state, cli) == 0

    out = capsys.readouterr().out
    assert out == (
        "$ nosuchcmd: command not found\n"
        "$ exit: nope: numeric argument required\n"
        "$ still here\n"
        "$ "
    )


def test_repl_exit_ends_session(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    state = boot_sequence({"PATH": "", "XDG_CONFIG_HOME": str(tmp_path)})
    cli = PipeCLI(stdin=io.StringIO("exit 7\necho unreachable\n"))
    with pytest.raises(SystemExit) as info:
        repl(state, cli)
    assert info.value.code == 7
    assert "unreachable" not in capsys.readouterr().out


class ScriptedCLI(BaseCLI):
    """Prompts like PipeCLI but replays a fixed script of lines and read failures."""

    def __init__(self, script: list[str | Exception]) -> None:
        self._script = list(script)
        self.reads = 0

    def get_line(self) -> str:
        self.reads += 1
        print("$ ", end="")
        if not self._script:
            raise EOFError
        step = self._script.pop(0)
        if isinstance(step, Exception):
            raise step
        return step


def test_repl_reprompts_after_terminal_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    state = boot_sequence({"PATH": "", "XDG_CONFIG_HOME": str(tmp_path)})
    cli = ScriptedCLI([TerminalIOFailure("terminal read failed: EIO"), "echo still here"])

    assert repl(state, cli) == 0

    assert capsys.readouterr().out == "$ $ still here\n$ "
    assert cli.reads == 3


def test_repl_gives_up_on_a_terminal_that_keeps_failing(tmp_path: Path) -> None:
    state = boot_sequence({"PATH": "", "XDG_CONFIG_HOME": str(tmp_path)})
    failures = [TerminalIOFailure("terminal read failed") for _ in range(MAX_TERMINAL_FAILURES + 3)]
    cli = ScriptedCLI(failures)

    assert repl(state, cli) == 1
    assert cli.reads == MAX_TERMINAL_FAILURES


def test_repl_failure_count_resets_after_a_good_line(tmp_path: Path) -> None:
    state = boot_sequence({"PATH": "", "XDG_CONFIG_HOME": str(tmp_path)})
    burst = [TerminalIOFailure("terminal read failed") for _ in range(MAX_TERMINAL_FAILURES - 1)]
    cli = ScriptedCLI([*burst, "echo ok", *burst])

    assert repl(state, cli) == 0
