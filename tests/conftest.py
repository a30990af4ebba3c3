"""Shared pytest fixtures."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from conversion.overwrite import OverwriteResponse


class ScriptedPrompt:
    """Overwrite prompt that replays a fixed list of responses."""

    def __init__(self, *responses: OverwriteResponse) -> None:
        self.responses = list(responses)
        self.calls = 0

    def __call__(self) -> OverwriteResponse:
        self.calls += 1
        if not self.responses:
            raise AssertionError("prompt called more often than scripted")
        return self.responses.pop(0)


class RecordingRunner:
    """Process runner that records commands instead of executing them."""

    def __init__(self, error: Exception | None = None) -> None:
        self.commands: list[list[str]] = []
        self.error = error

    def run(self, cmd: list[str]) -> None:
        self.commands.append(cmd)
        if self.error is not None:
            raise self.error


@pytest.fixture
def scripted_prompt() -> Callable[..., ScriptedPrompt]:
    return ScriptedPrompt


@pytest.fixture
def recording_runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[[dict[str, Any]], Path]:
    """Write a manifest dict as JSON and return its path."""

    def _write(data: dict[str, Any], name: str = "convert_data.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(data), encoding="utf-8")
        return path

    return _write
