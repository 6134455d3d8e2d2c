from __future__ import annotations

import tomllib

from volt.adapters.provider_switcher import read_env_value, switch_provider
from volt.core.config import VoltSettings
from volt.core.domain.providers import DbProvider
from volt.core.project import require_project


def _dependencies(root) -> list[str]:
    with (root / "pyproject.toml").open("rb") as f:
        return tomllib.load(f)["project"]["dependencies"]


def test_switch_to_postgres_updates_pyproject_and_env(project) -> None:
    actions = switch_provider(project, DbProvider.POSTGRES, settings=VoltSettings(postgres_password="pw"))

    assert [a.path for a in actions] == ["pyproject.toml", ".env"]
    assert require_project(project.root).database is DbProvider.POSTGRES
    assert "psycopg[binary]>=3.1" in _dependencies(project.root)
    assert read_env_value(project.layout.env_file, "DATABASE_URL") == (
        "postgresql+psycopg://postgres:pw@localhost:5432/blog_development"
    )


def test_switching_replaces_the_previous_driver(project) -> None:
    switch_provider(project, DbProvider.POSTGRES)
    switch_provider(project, DbProvider.SQLSERVER)

    deps = _dependencies(project.root)
    assert "pyodbc>=5.0" in deps
    assert not any(d.startswith("psycopg") for d in deps)
    assert "fastapi>=0.110" in deps


def test_switch_back_to_sqlite_drops_drivers(project) -> None:
    switch_provider(project, DbProvider.POSTGRES)
    switch_provider(project, DbProvider.SQLITE)

    deps = _dependencies(project.root)
    assert not any(d.startswith(("psycopg", "pyodbc")) for d in deps)
    assert read_env_value(project.layout.env_file, "DATABASE_URL") == "sqlite:///./blog.db"


def test_other_env_values_are_kept(project) -> None:
    switch_provider(project, DbProvider.POSTGRES)

    assert read_env_value(project.layout.env_file, "DEBUG") == "true"
