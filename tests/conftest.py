"""Shared pytest fixtures for the actiongen test suite.

Provides reusable fixtures for:
- A valid configuration document and a writer for config files
- An assembled `Configuration`
- A fake `git` executable (patched `subprocess.run`) with call recording
"""

from __future__ import annotations

import copy
import subprocess
from pathlib import Path
from typing import Any, Callable

import pytest
import yaml

from actiongen.config import Configuration, OutputParameter, Parameter, RustMetadata


VALID_CONFIG: dict[str, Any] = {
    "action_name": "Hello World",
    "description": "Greets someone",
    "author": "octocat",
    "inputs": [
        {"name": "who-to-greet", "description": "Who to greet", "required": True, "default": "World"},
        {"name": "greeting", "description": "Greeting word", "required": False},
    ],
    "outputs": [
        {"name": "time", "description": "The time we greeted you", "value": "${{ steps.run.outputs.time }}"},
    ],
    "rust": {"name": "hello-world-action", "edition": "2021", "version": "1.80"},
}

SSH_ORIGIN = "git@github.com:octocat/hello-world.git"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def config_data() -> dict[str, Any]:
    """A fresh, mutable copy of a valid configuration document."""
    return copy.deepcopy(VALID_CONFIG)


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[..., Path]:
    def _write(data: Any, name: str = "config.yaml") -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def configuration() -> Configuration:
    """An assembled configuration, ready to render."""
    return Configuration(
        action_name="Hello World",
        description="Greets someone",
        author="octocat",
        inputs=(
            Parameter(name="who-to-greet", description="Who to greet", required=True, default="World"),
            Parameter(name="greeting", description="Greeting word", required=False),
        ),
        outputs=(OutputParameter(name="time", description="The time", value="${{ steps.run.outputs.time }}"),),
        rust=RustMetadata(name="hello-world-action", edition="2021", version="1.80"),
        repository_name="hello-world",
        repository_owner="octocat",
    )


# ---------------------------------------------------------------------------
# Fake git
# ---------------------------------------------------------------------------


class FakeGit:
    """Stands in for `subprocess.run`, answering by git arguments."""

    def __init__(self, responses: dict[tuple[str, ...], tuple[int, str]]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, ...]] = []
        self.kwargs: list[dict[str, Any]] = []

    def __call__(self, cmd: list[str], **kwargs: Any) -> subprocess.CompletedProcess:
        args = tuple(cmd[1:])
        self.calls.append(args)
        self.kwargs.append(kwargs)
        if args not in self.responses:
            raise AssertionError(f"Unexpected git call: {args}")
        code, out = self.responses[args]
        return subprocess.CompletedProcess(cmd, code, stdout=out, stderr="fatal: boom" if code else "")


@pytest.fixture
def fake_git(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Callable[..., FakeGit]:
    """Factory: install a FakeGit with default responses, overridable per call."""

    def _install(**overrides: tuple[int, str]) -> FakeGit:
        responses: dict[tuple[str, ...], tuple[int, str]] = {
            ("rev-parse", "--show-toplevel"): (0, f"{tmp_path}\n"),
            ("remote",): (0, "origin\n"),
            ("remote", "get-url", "origin"): (0, f"{SSH_ORIGIN}\n"),
        }
        keys = {
            "root": ("rev-parse", "--show-toplevel"),
            "remotes": ("remote",),
            "url": ("remote", "get-url", "origin"),
        }
        for key, value in overrides.items():
            responses[keys[key]] = value
        fake = FakeGit(responses)
        monkeypatch.setattr("actiongen.git_client.subprocess.run", fake)
        return fake

    return _install
