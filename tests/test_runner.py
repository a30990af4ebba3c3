"""Tests for the transcoder process runner."""

from __future__ import annotations

import subprocess

import pytest

from conversion.errors import ExternalToolError
from orchestrator import runner as runner_module
from orchestrator.runner import ProcessRunner


def test_successful_command(monkeypatch: pytest.MonkeyPatch) -> None:
    calls = []

    def fake_run(cmd, capture_output, timeout):
        calls.append((cmd, capture_output, timeout))
        return subprocess.CompletedProcess(cmd, 0, b"", b"")

    monkeypatch.setattr(runner_module.subprocess, "run", fake_run)

    result = ProcessRunner().run(["ffmpeg", "-i", "a.mp3", "a.flac"])
    assert result.returncode == 0
    assert calls == [(["ffmpeg", "-i", "a.mp3", "a.flac"], True, None)]


def test_failure_carries_stderr(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        runner_module.subprocess,
        "run",
        lambda cmd, **kwargs: subprocess.CompletedProcess(cmd, 1, b"", b"a.mp3: No such file\n"),
    )

    with pytest.raises(ExternalToolError) as excinfo:
        ProcessRunner().run(["ffmpeg", "-i", "a.mp3", "a.flac"])

    error = excinfo.value
    assert error.returncode == 1
    assert error.stderr == "a.mp3: No such file\n"
    assert str(error) == (
        "Command execution failed.\n\n--- Error Message ---\na.mp3: No such file\n"
    )


def test_missing_executable(monkeypatch: pytest.MonkeyPatch) -> None:
    def missing(cmd, **kwargs):
        raise FileNotFoundError(2, "No such file or directory", cmd[0])

    monkeypatch.setattr(runner_module.subprocess, "run", missing)

    with pytest.raises(ExternalToolError, match="Failed to execute process"):
        ProcessRunner().run(["ffmpeg-missing"])


def test_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    def slow(cmd, **kwargs):
        raise subprocess.TimeoutExpired(cmd, kwargs["timeout"], stderr=b"partial")

    monkeypatch.setattr(runner_module.subprocess, "run", slow)

    with pytest.raises(ExternalToolError) as excinfo:
        ProcessRunner(timeout=1).run(["ffmpeg"])
    assert excinfo.value.stderr == "partial"
