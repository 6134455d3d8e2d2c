"""`volt db`: migrations, seeds, consoles and development containers.

Migrations run through Alembic and seeds through `python -m <package>.seeds`,
both in the project root so the project's own settings apply.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import urlsplit

import typer

from volt.adapters import docker, process_runner
from volt.adapters.provider_switcher import database_url_for, read_env_value, switch_provider
from volt.cli import ui_components as ui
from volt.cli.commands import current_project, volt_errors
from volt.core.config import VoltSettings
from volt.core.domain.providers import DbProvider
from volt.core.errors import InvalidProviderError
from volt.core.project import ProjectContext

app = typer.Typer(no_args_is_help=True, help="Database tasks: migrate, rollback, seed, reset, docker.")
docker_app = typer.Typer(no_args_is_help=True, help="Development database containers (postgres, sqlserver).")
app.add_typer(docker_app, name="docker")


def _alembic(context: ProjectContext, settings: VoltSettings, *args: str) -> int:
    code = process_runner.run([settings.python_executable, "-m", "alembic", *args], cwd=context.root)
    if code == process_runner.COMMAND_NOT_FOUND:
        ui.error("Alembic is not available. Install the project with 'pip install -e .'.")
    return code


def _seed(context: ProjectContext, settings: VoltSettings) -> int:
    return process_runner.run([settings.python_executable, "-m", f"{context.package}.seeds"], cwd=context.root)


def _fail(message: str) -> None:
    ui.error(message)
    raise typer.Exit(code=1)


@app.command()
def migrate() -> None:
    """Apply pending migrations (alembic upgrade head)."""

    context = current_project()
    ui.info("Running migrations...")
    if _alembic(context, VoltSettings(), "upgrade", "head") != 0:
        _fail("Migration failed.")
    ui.success("Migrations applied.")


@app.command()
def rollback(steps: int = typer.Option(1, "--steps", "-n", min=1, help="Number of migrations to revert.")) -> None:
    """Revert the last migration(s)."""

    context = current_project()
    ui.info(f"Rolling back {steps} migration(s)...")
    if _alembic(context, VoltSettings(), "downgrade", f"-{steps}") != 0:
        _fail("Rollback failed.")
    ui.success("Rollback complete.")


@app.command()
def seed() -> None:
    """Run <package>/seeds.py."""

    context = current_project()
    ui.info("Seeding database...")
    if _seed(context, VoltSettings()) != 0:
        _fail("Seeding failed.")
    ui.success("Database seeded.")


@app.command()
def reset() -> None:
    """Revert every migration, migrate again and seed."""

    context = current_project()
    settings = VoltSettings()

    ui.warning("Resetting database: all data will be lost.")
    if _alembic(context, settings, "downgrade", "base") != 0:
        _fail("Downgrade to base failed.")
    if _alembic(context, settings, "upgrade", "head") != 0:
        _fail("Migration failed.")
    if _seed(context, settings) != 0:
        ui.warning("Seeding failed. The schema was recreated anyway.")
    ui.success("Database reset complete.")


@app.command()
def status() -> None:
    """Show the migration history and the current revision."""

    context = current_project()
    if _alembic(context, VoltSettings(), "history", "--indicate-current") != 0:
        _fail("Could not read migration status.")


def console_args(context: ProjectContext, settings: VoltSettings) -> list[str]:
    """Command line of the native client for the project's database."""

    provider = context.database
    url = read_env_value(context.layout.env_file, "DATABASE_URL") or database_url_for(context, provider, settings)

    if provider is DbProvider.SQLITE:
        path = url.split("///", 1)[-1] if "///" in url else f"{context.package}.db"
        return ["sqlite3", path]

    if provider is DbProvider.POSTGRES:
        scheme, rest = url.split("://", 1)
        return ["psql", f"{scheme.split('+', 1)[0]}://{rest}"]

    parts = urlsplit(url)
    return [
        "sqlcmd",
        "-S", f"{parts.hostname or 'localhost'},{parts.port or 1433}",
        "-U", parts.username or "sa",
        "-P", settings.sqlserver_password,
        "-d", parts.path.lstrip("/") or provider.database_name(context.package),
        "-C",
    ]


@app.command(name="console")
def db_console() -> None:
    """Open the database's native console (sqlite3, psql or sqlcmd)."""

    context = current_project()
    provider = context.database
    if not process_runner.is_command_available(provider.console_tool):
        ui.error(f"'{provider.console_tool}' is not installed or not on PATH.")
        ui.info(provider.console_install_help)
        raise typer.Exit(code=1)

    ui.info(f"Connecting to {provider.label()}...")
    code = process_runner.run_interactive(console_args(context, VoltSettings()), cwd=context.root)
    if code not in (0, 130):
        raise typer.Exit(code=code)


@app.command()
def provider() -> None:
    """Show the current database provider."""

    context = current_project()
    ui.info(f"Current database provider: {context.database.value} ({context.database.label()})")


def _parse_provider(value: str) -> DbProvider:
    parsed = DbProvider.parse(value)
    if parsed is None:
        raise InvalidProviderError(value, DbProvider.names())
    return parsed


@app.command()
def use(name: str = typer.Argument(..., help="sqlite, postgres or sqlserver.")) -> None:
    """Switch the project to another database provider."""

    context = current_project()
    with volt_errors():
        target = _parse_provider(name)
        if target is context.database:
            ui.info(f"Project already uses {target.label()}.")
            return
        actions = switch_provider(context, target)

    ui.print_file_actions(actions)
    ui.blank_line()
    ui.success(f"Provider switched from {context.database.value} to {target.value}.")
    ui.plain("Reinstall the project (pip install -e .) to pick up the new driver.")
    if target.uses_docker:
        ui.plain("Start a database with: volt db docker up")
    ui.warning("Delete existing migrations if needed and run: volt db migrate")


def _require_docker() -> None:
    if not process_runner.is_command_available("docker"):
        ui.error("Docker is not installed or not on PATH.")
        ui.info("Install Docker Desktop: https://www.docker.com/products/docker-desktop")
        raise typer.Exit(code=1)


def _docker_target(requested: Optional[str], current: DbProvider) -> DbProvider:
    if requested is None:
        if current is DbProvider.SQLITE:
            ui.error("Current provider is sqlite. Specify a provider: volt db docker up postgres")
            ui.info("Valid providers: postgres, sqlserver")
            raise typer.Exit(code=1)
        return current

    target = DbProvider.parse(requested)
    if target is DbProvider.SQLITE:
        _fail("SQLite doesn't need Docker: it runs as a local file.")
    if target is None:
        _fail(f"Invalid provider '{requested}'. Valid options: postgres, sqlserver")
    return target


@docker_app.command()
def up(name: Optional[str] = typer.Argument(None, help="postgres or sqlserver (default: current provider).")) -> None:
    """Start a database container, switching the project provider if needed."""

    context = current_project()
    settings = VoltSettings()
    _require_docker()

    current = context.database
    target = _docker_target(name, current)

    with volt_errors():
        if target is not current:
            ui.info(f"Switching provider from {current.value} to {target.value}...")
            ui.print_file_actions(switch_provider(context, target, settings=settings))
            ui.success(f"Provider switched from {current.value} to {target.value}.")
            ui.blank_line()
        spec = docker.build_container_spec(context.package, target, settings)

    url = database_url_for(context, target, settings)
    if docker.find_running_container(spec.name):
        ui.success(f"Container already running: {spec.name}")
        ui.plain(f"  DATABASE_URL={url}")
        return

    ui.info(f"Starting {target.value} container: {spec.name}...")
    if process_runner.run(spec.run_args) != 0:
        _fail("Failed to start Docker container.")

    ui.info("Waiting for database to be ready...")
    if not docker.wait_for_ready(spec.name, target, settings):
        ui.warning("Container started but readiness check timed out. It may still be initializing.")

    ui.blank_line()
    ui.success(f"{target.label()} container started: {spec.name}")
    ui.plain(f"  DATABASE_URL={url}")
    if target is not current:
        ui.blank_line()
        ui.warning("Delete existing migrations if needed and run: volt db migrate")


@docker_app.command()
def down() -> None:
    """Stop and remove the project's database container."""

    context = current_project()
    _require_docker()

    name = docker.find_project_container(context.package)
    if name is None:
        ui.info("No running Volt database container found for this project.")
        return

    ui.info(f"Stopping container: {name}...")
    if process_runner.run(["docker", "stop", name]) != 0:
        _fail(f"Failed to stop container: {name}")
    if process_runner.run(["docker", "rm", name]) != 0:
        _fail(f"Failed to remove container: {name}")
    ui.success(f"Container stopped and removed: {name}")


@docker_app.command(name="status")
def docker_status() -> None:
    """List the project's database containers."""

    context = current_project()
    _require_docker()

    ui.info(f"Docker containers for {context.app_name}:")
    ui.blank_line()
    process_runner.run(
        [
            "docker", "ps", "-a",
            "--filter", docker.container_filter(context.package),
            "--format", "table {{.Names}}\t{{.Status}}\t{{.Ports}}",
        ]
    )


@docker_app.command()
def logs() -> None:
    """Follow the logs of the project's database container."""

    context = current_project()
    _require_docker()

    name = docker.find_project_container(context.package)
    if name is None:
        ui.info("No running Volt database container found for this project.")
        return

    ui.info(f"Tailing logs for: {name}")
    ui.blank_line()
    process_runner.run_interactive(["docker", "logs", "--tail", "50", "-f", name])
