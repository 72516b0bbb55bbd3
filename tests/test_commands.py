import subprocess

import pytest

from wallcycle_app import commands
from wallcycle_app.errors import CommandFailed


def test_returns_completed_process(fake_run):
    fake_run.set("echo", stdout="hi\n")
    assert commands.run(["echo", "hi"]).stdout == "hi\n"


def test_nonzero_exit_carries_stderr(fake_run):
    fake_run.set("swww", returncode=2, stderr="daemon not running\n")
    with pytest.raises(CommandFailed, match="daemon not running") as info:
        commands.run(["swww", "img", "a.png"])
    assert info.value.returncode == 2
    assert info.value.command == ["swww", "img", "a.png"]


def test_missing_program(fake_run):
    fake_run.missing.add("wal")
    with pytest.raises(CommandFailed, match="command not found"):
        commands.run(["wal", "-q"])


def test_program_not_executable(fake_run):
    fake_run.errors["swww"] = PermissionError(13, "Permission denied")
    with pytest.raises(CommandFailed, match="Permission denied") as info:
        commands.run(["swww", "img", "a.png"])
    assert isinstance(info.value.__cause__, PermissionError)


def test_timeout(monkeypatch):
    def slow(args, **kwargs):
        raise subprocess.TimeoutExpired(args, kwargs["timeout"])

    monkeypatch.setattr(subprocess, "run", slow)
    with pytest.raises(CommandFailed, match="timed out after 2.0s"):
        commands.run(["hyprctl", "cursorpos"], timeout=2.0)
