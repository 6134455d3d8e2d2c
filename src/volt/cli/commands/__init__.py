"""Subcommands of the `volt` CLI.

Leaf commands expose `register(app)`; command groups expose a `typer.Typer`
named `app`.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

import typer

from volt.cli import ui_components as ui
from volt.core.errors import VoltError
from volt.core.project import ProjectContext, require_project


@contextmanager
def volt_errors() -> Iterator[None]:
    """Print a `VoltError` and exit 1 instead of showing a traceback."""

    try:
        yield
    except VoltError as exc:
        ui.error(str(exc))
        raise typer.Exit(code=1) from exc


def current_project() -> ProjectContext:
    with volt_errors():
        return require_project()
