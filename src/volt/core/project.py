"""Locates the current Volt project and resolves paths inside it.

A Volt project is a directory whose `pyproject.toml` has a `[tool.volt]`
table. Every path a generator writes to (or a destroyer deletes) goes through
`ProjectLayout` so both sides agree.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import ValidationError

from volt.core.domain.models import VoltProjectConfig
from volt.core.domain.providers import DbProvider
from volt.core.errors import ProjectNotFoundError, VoltError
from volt.core.naming import to_pascal_case

PYPROJECT = "pyproject.toml"


@dataclass(frozen=True)
class ProjectLayout:
    """Single-package layout: `<root>/<package>/{models,controllers,...}`."""

    root: Path
    package: str

    @property
    def package_dir(self) -> Path:
        return self.root / self.package

    def model_path(self, *parts: str) -> Path:
        return self.package_dir.joinpath("models", *parts)

    def controller_path(self, *parts: str) -> Path:
        return self.package_dir.joinpath("controllers", *parts)

    def view_path(self, *parts: str) -> Path:
        return self.package_dir.joinpath("templates", *parts)

    def job_path(self, *parts: str) -> Path:
        return self.package_dir.joinpath("jobs", *parts)

    def mailer_path(self, *parts: str) -> Path:
        return self.package_dir.joinpath("mailers", *parts)

    def channel_path(self, *parts: str) -> Path:
        return self.package_dir.joinpath("channels", *parts)

    def migration_path(self, *parts: str) -> Path:
        return self.root.joinpath("migrations", "versions", *parts)

    def test_path(self, *parts: str) -> Path:
        return self.root.joinpath("tests", *parts)

    @property
    def models_registry(self) -> Path:
        return self.model_path("__init__.py")

    @property
    def routes_file(self) -> Path:
        return self.package_dir / "routes.py"

    @property
    def env_file(self) -> Path:
        return self.root / ".env"

    @property
    def pyproject(self) -> Path:
        return self.root / PYPROJECT

    def relative(self, path: Path) -> str:
        """Display path relative to the project root, always '/' separated."""

        try:
            return path.relative_to(self.root).as_posix()
        except ValueError:
            return path.as_posix()


@dataclass(frozen=True)
class ProjectContext:
    root: Path
    config: VoltProjectConfig

    @property
    def package(self) -> str:
        return self.config.package

    @property
    def app_name(self) -> str:
        return self.config.app_name or to_pascal_case(self.config.package)

    @property
    def database(self) -> DbProvider:
        return self.config.database

    @property
    def api(self) -> bool:
        return self.config.api

    @property
    def layout(self) -> ProjectLayout:
        return ProjectLayout(root=self.root, package=self.config.package)


def read_project_config(pyproject: Path) -> VoltProjectConfig | None:
    """Return the `[tool.volt]` table, or None when the file is not a Volt project."""

    try:
        with pyproject.open("rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError):
        return None

    table = data.get("tool", {}).get("volt")
    if not isinstance(table, dict):
        return None

    try:
        return VoltProjectConfig.model_validate(table)
    except ValidationError as exc:
        raise VoltError(f"Invalid [tool.volt] table in {pyproject}: {exc.errors()[0]['msg']}") from exc


def find_project(start: Path | None = None) -> ProjectContext | None:
    """Walk up from `start` (default: cwd) to the first Volt project."""

    directory = (start or Path.cwd()).resolve()
    for candidate in (directory, *directory.parents):
        pyproject = candidate / PYPROJECT
        if not pyproject.is_file():
            continue
        config = read_project_config(pyproject)
        if config is not None:
            return ProjectContext(root=candidate, config=config)
    return None


def require_project(start: Path | None = None) -> ProjectContext:
    context = find_project(start)
    if context is None:
        raise ProjectNotFoundError()
    return context
