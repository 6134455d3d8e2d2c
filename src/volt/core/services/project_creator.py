"""`volt new`: renders a fresh FastAPI + SQLModel + Alembic project."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path

from volt.adapters import template_engine
from volt.core.domain.providers import DbProvider
from volt.core.errors import InvalidNameError, VoltError
from volt.core.naming import to_pascal_case, to_snake_case
from volt.core.services.results import GenerationResult

_PROJECT_NAME = re.compile(r"^[A-Za-z][A-Za-z0-9_-]*$")


@dataclass(frozen=True)
class ProjectFile:
    template: str
    output: str
    app_only: bool = False


# `{pkg}` is replaced by the package name.
PROJECT_FILES: tuple[ProjectFile, ...] = (
    ProjectFile("project/pyproject.toml.jinja", "pyproject.toml"),
    ProjectFile("project/env.jinja", ".env"),
    ProjectFile("project/gitignore.jinja", ".gitignore"),
    ProjectFile("project/alembic.ini.jinja", "alembic.ini"),
    ProjectFile("project/README.md.jinja", "README.md"),
    ProjectFile("project/migrations/env.py.jinja", "migrations/env.py"),
    ProjectFile("project/migrations/script.py.mako.jinja", "migrations/script.py.mako"),
    ProjectFile("project/migrations/versions/gitkeep.jinja", "migrations/versions/.gitkeep"),
    ProjectFile("project/package/__init__.py.jinja", "{pkg}/__init__.py"),
    ProjectFile("project/package/main.py.jinja", "{pkg}/main.py"),
    ProjectFile("project/package/config.py.jinja", "{pkg}/config.py"),
    ProjectFile("project/package/database.py.jinja", "{pkg}/database.py"),
    ProjectFile("project/package/middleware.py.jinja", "{pkg}/middleware.py"),
    ProjectFile("project/package/routes.py.jinja", "{pkg}/routes.py"),
    ProjectFile("project/package/seeds.py.jinja", "{pkg}/seeds.py"),
    ProjectFile("project/package/models/__init__.py.jinja", "{pkg}/models/__init__.py"),
    ProjectFile("project/package/controllers/__init__.py.jinja", "{pkg}/controllers/__init__.py"),
    ProjectFile("project/package/controllers/home_controller.py.jinja", "{pkg}/controllers/home_controller.py"),
    ProjectFile("project/package/views.py.jinja", "{pkg}/views.py", app_only=True),
    ProjectFile("project/package/templates/layout.html.jinja", "{pkg}/templates/layout.html", app_only=True),
    ProjectFile("project/package/templates/home/index.html.jinja", "{pkg}/templates/home/index.html", app_only=True),
    ProjectFile("project/package/static/app.css.jinja", "{pkg}/static/app.css", app_only=True),
    ProjectFile("project/tests/__init__.py.jinja", "tests/__init__.py"),
    ProjectFile("project/tests/conftest.py.jinja", "tests/conftest.py"),
    ProjectFile("project/tests/test_home.py.jinja", "tests/test_home.py"),
)


def validate_project_name(name: str) -> None:
    if not _PROJECT_NAME.match(name):
        raise InvalidNameError(
            f"Invalid project name '{name}'. Use letters, digits, '_' or '-', starting with a letter."
        )


def package_name(project_name: str) -> str:
    return to_snake_case(project_name)


def create_project(
    name: str,
    *,
    parent: Path,
    database: DbProvider,
    api: bool = False,
    database_password: str | None = None,
) -> GenerationResult:
    """Render the project into `parent/name`. The target directory must not exist."""

    validate_project_name(name)
    target = parent / name
    if target.exists():
        raise VoltError(f"Directory '{name}' already exists.")

    package = package_name(name)
    data = {
        "project_name": name,
        "package": package,
        "app_name": to_pascal_case(package),
        "api": api,
        "database": database.value,
        "database_label": database.label(),
        "database_url": database.database_url(package, password=database_password),
        "driver_dependency": database.driver_dependency,
    }

    result = GenerationResult()
    for item in PROJECT_FILES:
        if item.app_only and api:
            continue
        relative = item.output.replace("{pkg}", package)
        result.add(
            template_engine.render_to_file(
                item.template, data, target / relative, display_path=f"{name}/{relative}"
            )
        )
    return result
