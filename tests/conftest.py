from __future__ import annotations

import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def workspace(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Runs the test from inside `tmp_path`, which the CLI requires of its inputs."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def write_document(workspace: Path) -> Callable[[str, str], Path]:
    """Writes a dedented document into the workspace and returns its path."""

    def _write(filename: str, content: str) -> Path:
        path = workspace / filename
        path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
        return path

    return _write
