import subprocess
import sys

from skill_deps.installers.base import CommandResult, CommandRunner


def test_run_reports_exit_status(monkeypatch) -> None:
    def _fake_run(args, **kwargs):
        assert kwargs["timeout"] == 5
        assert kwargs["check"] is False
        return subprocess.CompletedProcess(args, 3, stdout="", stderr="boom")

    monkeypatch.setattr("skill_deps.installers.base.subprocess.run", _fake_run)

    result = CommandRunner().run(["tool", "arg"], timeout=5)

    assert result.argv == ("tool", "arg")
    assert result.ok is False
    assert result.returncode == 3
    assert result.detail == "boom"


def test_run_converts_timeout(monkeypatch) -> None:
    def _fake_run(args, **kwargs):
        raise subprocess.TimeoutExpired(args, kwargs["timeout"])

    monkeypatch.setattr("skill_deps.installers.base.subprocess.run", _fake_run)

    result = CommandRunner().run(["git", "clone"], timeout=30)

    assert result.ok is False
    assert result.returncode is None
    assert result.detail == "git timed out after 30s"


def test_run_converts_missing_executable(monkeypatch) -> None:
    def _fake_run(args, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", args[0])

    monkeypatch.setattr("skill_deps.installers.base.subprocess.run", _fake_run)

    result = CommandRunner().run(["clawhub", "install", "x"], timeout=60)

    assert result.ok is False
    assert "No such file or directory" in result.detail


def test_detail_falls_back_to_status() -> None:
    assert CommandResult(argv=("git",), returncode=128).detail == "git exited with status 128"
    assert CommandResult(argv=("git",), returncode=None).detail == "git did not complete"
    assert CommandResult(argv=("git",), returncode=1, stdout="out\n").detail == "out"


def test_run_replaces_undecodable_output(monkeypatch) -> None:
    def _fake_run(args, **kwargs):
        assert kwargs["errors"] == "replace"
        return subprocess.CompletedProcess(args, 1, stdout="", stderr="� bad")

    monkeypatch.setattr("skill_deps.installers.base.subprocess.run", _fake_run)

    result = CommandRunner().run(["clawhub", "install", "x"], timeout=60)

    assert result.ok is False
    assert result.detail == "� bad"


def test_run_survives_non_utf8_stderr() -> None:
    script = "import sys; sys.stderr.buffer.write(b'\\xff\\xfe bad'); sys.exit(1)"

    result = CommandRunner().run([sys.executable, "-c", script], timeout=30)

    assert result.returncode == 1
    assert result.detail.endswith("bad")
