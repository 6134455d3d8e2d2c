"""`volt routes`: list the routes declared by controllers and channels."""

from __future__ import annotations

import typer

from volt.cli import ui_components as ui
from volt.cli.commands import current_project, volt_errors
from volt.core.services.routes import discover_routes


def routes() -> None:
    """Show all routes (method, path, controller#action)."""

    context = current_project()
    with volt_errors():
        entries = discover_routes(context)

    if not entries:
        ui.warning("No routes found. Create a controller with: volt generate controller <name>")
        return

    ui.console.print(ui.build_routes_table(entries))


def register(app: typer.Typer) -> None:
    app.command(name="routes")(routes)
