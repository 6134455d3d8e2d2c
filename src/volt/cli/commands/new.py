"""`volt new <name>`: create a project."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer

from volt.adapters import process_runner
from volt.adapters.provider_switcher import provider_password
from volt.cli import ui_components as ui
from volt.cli.commands import volt_errors
from volt.core.config import VoltSettings
from volt.core.domain.providers import DbProvider
from volt.core.errors import InvalidProviderError
from volt.core.services.project_creator import create_project


def _parse_provider(value: str | None, settings: VoltSettings) -> DbProvider:
    if value is None:
        return settings.default_database
    provider = DbProvider.parse(value)
    if provider is None:
        raise InvalidProviderError(value, DbProvider.names())
    return provider


def new(
    name: str = typer.Argument(..., help="Project directory (and package) name."),
    database: Optional[str] = typer.Option(
        None,
        "--database",
        "-d",
        help="Database provider: sqlite, postgres or sqlserver.",
    ),
    api: bool = typer.Option(False, "--api", help="API-only project (no views or static files)."),
    skip_install: bool = typer.Option(False, "--skip-install", help="Do not run pip install."),
) -> None:
    """Create a new Volt project."""

    settings = VoltSettings()
    with volt_errors():
        provider = _parse_provider(database, settings)
        ui.print_banner()
        ui.info(f"Creating {'API' if api else 'application'} project '{name}' ({provider.label()})")
        ui.blank_line()
        result = create_project(
            name,
            parent=Path.cwd(),
            database=provider,
            api=api,
            database_password=provider_password(provider, settings),
        )
    ui.print_result(result)
    ui.blank_line()

    project_dir = Path.cwd() / name
    if skip_install:
        ui.info("Skipping dependency installation (--skip-install).")
    else:
        ui.info("Installing dependencies (pip install -e .)...")
        code = process_runner.run(
            [settings.python_executable, "-m", "pip", "install", "-e", ".[test]"],
            cwd=project_dir,
        )
        if code != 0:
            ui.warning("Dependency installation failed. Run 'pip install -e .' inside the project.")

    ui.blank_line()
    ui.success(f"Project '{name}' created.")
    ui.blank_line()
    ui.plain("Next steps:")
    ui.plain(f"  cd {name}")
    if provider.uses_docker:
        ui.plain("  volt db docker up")
    ui.plain("  volt db migrate")
    ui.plain("  volt server")


def register(app: typer.Typer) -> None:
    app.command(name="new")(new)
