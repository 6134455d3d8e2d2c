"""Root `volt` command.

Attaches the seven subcommands (plus hidden one-letter aliases) and runs the
application with process arguments, returning an exit code instead of
exiting so callers and tests can inspect it.
"""

from __future__ import annotations

import sys

import typer

from volt import __version__
from volt.cli import ui_components as ui
from volt.cli.commands import console, db, destroy, generate, new, routes, server

COMMAND_NAMES = ("new", "generate", "server", "console", "routes", "db", "destroy")


def _version_callback(value: bool) -> None:
    if value:
        ui.plain(f"volt {__version__}")
        raise typer.Exit()


def build_app() -> typer.Typer:
    app = typer.Typer(
        name="volt",
        help="Volt - Rails-like framework for Python",
        add_completion=False,
        invoke_without_command=True,
    )

    @app.callback(invoke_without_command=True)
    def root(
        ctx: typer.Context,
        version: bool = typer.Option(
            False,
            "--version",
            help="Show the Volt version and exit.",
            callback=_version_callback,
            is_eager=True,
        ),
    ) -> None:
        """Volt - Rails-like framework for Python."""

        if ctx.invoked_subcommand is None:
            ui.print_banner()
            ui.plain("Run 'volt --help' to see the available commands.")

    new.register(app)
    app.add_typer(generate.app, name="generate")
    app.add_typer(generate.app, name="g", hidden=True)
    server.register(app)
    console.register(app)
    routes.register(app)
    app.add_typer(db.app, name="db")
    app.add_typer(destroy.app, name="destroy")
    app.add_typer(destroy.app, name="d", hidden=True)
    return app


def _exit_code(code: object) -> int:
    if code is None:
        return 0
    return code if isinstance(code, int) else 1


def main(argv: list[str] | None = None) -> int:
    """Run `volt` against `argv` (default: process arguments) and return the exit code."""

    command = typer.main.get_command(build_app())
    args = list(sys.argv[1:] if argv is None else argv)
    try:
        command.main(args=args, prog_name="volt", standalone_mode=True)
    except SystemExit as exc:
        return _exit_code(exc.code)
    return 0


def run() -> None:
    sys.exit(main())
