"""`volt destroy` (alias `d`): remove what `volt generate` created."""

from __future__ import annotations

from typing import Callable

import typer

from volt.cli import ui_components as ui
from volt.cli.commands import current_project, volt_errors
from volt.core.domain.models import FileActionKind
from volt.core.project import ProjectContext
from volt.core.services import destroyer
from volt.core.services.results import GenerationResult

app = typer.Typer(no_args_is_help=True, help="Remove generated models, controllers, scaffolds and more.")


def _destroy(what: str, name: str, service: Callable[[ProjectContext, str], GenerationResult]) -> None:
    context = current_project()
    with volt_errors():
        result = service(context, name)

    ui.print_result(result)
    ui.blank_line()
    if ui.count(result, FileActionKind.REMOVED) == 0:
        ui.warning(f"Nothing to remove for {what} '{name}'.")
    else:
        ui.success(f"{what.capitalize()} '{name}' destroyed.")


@app.command()
def model(name: str = typer.Argument(..., help="Model name.")) -> None:
    """Remove a model, its registration and its create migration."""

    _destroy("model", name, destroyer.destroy_model)


@app.command()
def controller(name: str = typer.Argument(..., help="Controller name.")) -> None:
    """Remove a controller, its views and its route registration."""

    _destroy("controller", name, destroyer.destroy_controller)


@app.command()
def scaffold(name: str = typer.Argument(..., help="Model name.")) -> None:
    """Remove everything a scaffold generated."""

    _destroy("scaffold", name, destroyer.destroy_scaffold)


@app.command()
def job(name: str = typer.Argument(..., help="Job name.")) -> None:
    """Remove a job."""

    _destroy("job", name, destroyer.destroy_job)


@app.command()
def mailer(name: str = typer.Argument(..., help="Mailer name.")) -> None:
    """Remove a mailer."""

    _destroy("mailer", name, destroyer.destroy_mailer)


@app.command()
def channel(name: str = typer.Argument(..., help="Channel name.")) -> None:
    """Remove a channel and its route registration."""

    _destroy("channel", name, destroyer.destroy_channel)
