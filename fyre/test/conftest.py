from __future__ import annotations

from pathlib import Path

import pytest

from fyre.cli.context import CLIContext
from fyre.output.console import MockConsole
from fyre.test._fakes import PUBSPEC, RecordingOpener, RecordingRunner


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A minimal Flutter project, used as the working directory."""
    (tmp_path / "pubspec.yaml").write_text(PUBSPEC, encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def outside_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A working directory that is not a Flutter project."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def opener() -> RecordingOpener:
    return RecordingOpener()


@pytest.fixture
def console() -> MockConsole:
    return MockConsole()


@pytest.fixture
def ctx(console: MockConsole, runner: RecordingRunner, opener: RecordingOpener) -> CLIContext:
    return CLIContext(console=console, runner=runner, opener=opener)
