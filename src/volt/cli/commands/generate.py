"""`volt generate` (alias `g`): models, controllers, scaffolds and friends."""

from __future__ import annotations

from typing import List

import typer

from volt.adapters import process_runner
from volt.cli import ui_components as ui
from volt.cli.commands import current_project, volt_errors
from volt.core.config import VoltSettings
from volt.core.services import generators
from volt.core.services.ai_context import generate_ai_context
from volt.core.services.results import GenerationResult

app = typer.Typer(no_args_is_help=True, help="Generate models, controllers, scaffolds and more.")

_FIELDS_HELP = "Fields as name:type (string, text, int, bool, decimal, float, datetime, date, references)."


def _report(result: GenerationResult, done: str) -> None:
    ui.print_result(result)
    ui.blank_line()
    ui.success(done)


@app.command()
def model(
    name: str = typer.Argument(..., help="Model name, e.g. Post."),
    fields: List[str] = typer.Argument(None, help=_FIELDS_HELP),
) -> None:
    """Generate a SQLModel model and its migration."""

    context = current_project()
    with volt_errors():
        result = generators.generate_model(context, name, fields or [])
    _report(result, "Model generated. Run 'volt db migrate' to create the table.")


@app.command()
def controller(
    name: str = typer.Argument(..., help="Controller name, e.g. Pages."),
    fields: List[str] = typer.Argument(None, help=_FIELDS_HELP),
) -> None:
    """Generate a controller with an index action."""

    context = current_project()
    with volt_errors():
        result = generators.generate_controller(context, name, fields or [])
    _report(result, "Controller generated.")


@app.command()
def scaffold(
    name: str = typer.Argument(..., help="Model name, e.g. Post."),
    fields: List[str] = typer.Argument(None, help=_FIELDS_HELP),
) -> None:
    """Generate model, migration, CRUD controller, views and tests."""

    context = current_project()
    with volt_errors():
        result = generators.generate_scaffold(context, name, fields or [])
    _report(result, "Scaffold generated. Run 'volt db migrate' to create the table.")


@app.command()
def migration(name: str = typer.Argument(..., help="Migration message, e.g. add_slug_to_posts.")) -> None:
    """Autogenerate an Alembic migration from model changes."""

    context = current_project()
    settings = VoltSettings()
    ui.info(f"Generating migration '{name}'...")
    code = process_runner.run(
        [settings.python_executable, "-m", "alembic", "revision", "--autogenerate", "-m", name],
        cwd=context.root,
    )
    if code != 0:
        ui.error("Alembic failed. Check that the project dependencies are installed and the models import cleanly.")
        raise typer.Exit(code=1)
    ui.success("Migration generated.")


@app.command()
def job(name: str = typer.Argument(..., help="Job name, e.g. SendReport.")) -> None:
    """Generate a background job."""

    context = current_project()
    with volt_errors():
        result = generators.generate_job(context, name)
    _report(result, "Job generated.")


@app.command()
def mailer(name: str = typer.Argument(..., help="Mailer name, e.g. User.")) -> None:
    """Generate a mailer."""

    context = current_project()
    with volt_errors():
        result = generators.generate_mailer(context, name)
    _report(result, "Mailer generated.")


@app.command()
def channel(name: str = typer.Argument(..., help="Channel name, e.g. Chat.")) -> None:
    """Generate a websocket channel."""

    context = current_project()
    with volt_errors():
        result = generators.generate_channel(context, name)
    _report(result, "Channel generated.")


@app.command(name="ai-context")
def ai_context() -> None:
    """Write CLAUDE.md, .cursorrules and Copilot instructions for this project."""

    context = current_project()
    with volt_errors():
        result = generate_ai_context(context)
    _report(result, "AI context files updated.")
