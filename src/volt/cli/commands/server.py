"""`volt server` (alias `s`): run the development server with uvicorn."""

from __future__ import annotations

import webbrowser
from typing import Optional

import typer

from volt.adapters import process_runner
from volt.cli import ui_components as ui
from volt.cli.commands import current_project
from volt.core.config import VoltSettings


def build_server_args(
    settings: VoltSettings,
    package: str,
    *,
    host: str,
    port: int,
    https: bool,
    verbose: bool,
) -> list[str]:
    args = [
        settings.python_executable, "-m", "uvicorn", f"{package}.main:app",
        "--reload", "--host", host, "--port", str(port),
    ]
    if https:
        args += ["--ssl-keyfile", str(settings.ssl_keyfile), "--ssl-certfile", str(settings.ssl_certfile)]
    if verbose:
        args += ["--log-level", "debug"]
    return args


def server(
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port to listen on (default 8000)."),
    host: Optional[str] = typer.Option(None, "--host", help="Interface to bind (default 127.0.0.1)."),
    open_browser: bool = typer.Option(False, "--open", "-o", help="Open the browser once started."),
    https: bool = typer.Option(False, "--https", help="Serve over HTTPS with VOLT_SSL_KEYFILE/VOLT_SSL_CERTFILE."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug log level."),
) -> None:
    """Start the development server."""

    context = current_project()
    settings = VoltSettings()
    host = host or settings.server_host
    port = port or settings.server_port

    if https and (settings.ssl_keyfile is None or settings.ssl_certfile is None):
        ui.error("HTTPS needs VOLT_SSL_KEYFILE and VOLT_SSL_CERTFILE (environment or user .env).")
        raise typer.Exit(code=1)

    scheme = "https" if https else "http"
    url = f"{scheme}://{host}:{port}"

    ui.print_banner()
    ui.info(f"Starting {context.app_name} at {url}")
    ui.plain(f"  Project: {context.root}")
    ui.plain("  Press Ctrl+C to stop.")
    ui.blank_line()

    if open_browser:
        try:
            webbrowser.open(url)
        except webbrowser.Error as exc:
            ui.warning(f"Could not open the browser: {exc}")

    args = build_server_args(settings, context.package, host=host, port=port, https=https, verbose=verbose)
    code = process_runner.run(args, cwd=context.root)
    if code == process_runner.COMMAND_NOT_FOUND:
        ui.error("uvicorn is not available. Install the project with 'pip install -e .'.")
        raise typer.Exit(code=1)
    if code not in (0, 130):
        ui.error(f"Server exited with code {code}.")
        raise typer.Exit(code=code)


def register(app: typer.Typer) -> None:
    app.command(name="server")(server)
    app.command(name="s", hidden=True)(server)
