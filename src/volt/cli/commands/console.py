"""`volt console` (alias `c`): interactive shell with the project loaded."""

from __future__ import annotations

import typer

from volt.adapters import process_runner
from volt.cli import ui_components as ui
from volt.cli.commands import current_project
from volt.core.config import VoltSettings


def startup_code(package: str) -> str:
    return "\n".join(
        [
            "from sqlmodel import Session, select",
            f"from {package}.database import engine",
            f"from {package}.models import *",
            "session = Session(engine)",
            "print('Loaded: engine, session, Session, select and all models.')",
        ]
    )


def console() -> None:
    """Start an interactive console (IPython when installed)."""

    context = current_project()
    settings = VoltSettings()

    ui.print_banner()
    ui.info(f"Loading {context.app_name} console...")
    ui.plain("  Type exit() or press Ctrl+D to quit.")
    ui.blank_line()

    code = startup_code(context.package)
    if process_runner.is_command_available("ipython"):
        args = ["ipython", "-i", "-c", code]
    else:
        args = [settings.python_executable, "-i", "-c", code]

    exit_code = process_runner.run_interactive(args, cwd=context.root)
    if exit_code not in (0, 130):
        raise typer.Exit(code=exit_code)


def register(app: typer.Typer) -> None:
    app.command(name="console")(console)
    app.command(name="c", hidden=True)(console)
