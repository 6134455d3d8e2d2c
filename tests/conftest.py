from __future__ import annotations

import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable

import pytest
from typer.testing import CliRunner

from volt.adapters import process_runner
from volt.core.domain.providers import DbProvider
from volt.core.project import ProjectContext, require_project
from volt.core.services.project_creator import create_project

FIXED_NOW = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _clean_volt_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in list(os.environ):
        if key.startswith("VOLT_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def make_project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Callable[..., ProjectContext]:
    """Render a project into tmp_path and chdir into it."""

    def _make(name: str = "blog", *, api: bool = False, database: DbProvider = DbProvider.SQLITE) -> ProjectContext:
        create_project(name, parent=tmp_path, database=database, api=api, database_password="secret")
        root = tmp_path / name
        monkeypatch.chdir(root)
        return require_project(root)

    return _make


@pytest.fixture()
def project(make_project: Callable[..., ProjectContext]) -> ProjectContext:
    return make_project()


@pytest.fixture()
def api_project(make_project: Callable[..., ProjectContext]) -> ProjectContext:
    return make_project("shop_api", api=True)


class RecordingRunner:
    """Stands in for the process runner: records calls, returns canned exit codes."""

    def __init__(self) -> None:
        self.calls: list[tuple[list[str], Path | None]] = []
        self.interactive: list[tuple[list[str], Path | None]] = []
        self.exit_code: Callable[[list[str]], int] = lambda args: 0
        self.available: set[str] = set()
        self.output = ""

    def run(self, args, *, cwd=None, on_output=None) -> int:
        self.calls.append((list(args), cwd))
        return self.exit_code(list(args))

    def run_captured(self, args, *, cwd=None) -> tuple[int, str]:
        self.calls.append((list(args), cwd))
        return self.exit_code(list(args)), self.output

    def run_interactive(self, args, *, cwd=None) -> int:
        self.interactive.append((list(args), cwd))
        return 0

    def is_command_available(self, command: str) -> bool:
        return command in self.available

    @property
    def commands(self) -> list[list[str]]:
        return [args for args, _ in self.calls]


@pytest.fixture()
def fake_runner(monkeypatch: pytest.MonkeyPatch) -> RecordingRunner:
    fake = RecordingRunner()
    monkeypatch.setattr(process_runner, "run", fake.run)
    monkeypatch.setattr(process_runner, "run_captured", fake.run_captured)
    monkeypatch.setattr(process_runner, "run_interactive", fake.run_interactive)
    monkeypatch.setattr(process_runner, "is_command_available", fake.is_command_available)
    return fake
