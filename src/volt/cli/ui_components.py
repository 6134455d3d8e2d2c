"""UI components for the CLI (Rich).

Why separate components:
- Keeps command logic apart from presentation details.
- Every command prints file actions, warnings and errors the same way.
"""

from __future__ import annotations

from typing import Iterable

from rich.align import Align
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.theme import Theme

from volt import __version__
from volt.core.domain.models import FileAction, FileActionKind, RouteEntry
from volt.core.services.results import GenerationResult

VOLT_THEME = Theme(
    {
        "info": "bold #7dcfff",
        "success": "bold #9ece6a",
        "warning": "bold #e0af68",
        "error": "bold #f7768e",
        "highlight": "bold #bb9af7",
        "muted": "dim #565f89",
        "path": "#73daca",
        "action.create": "bold #9ece6a",
        "action.modify": "bold #7aa2f7",
        "action.remove": "bold #f7768e",
        "action.skip": "bold #e0af68",
    }
)

console = Console(theme=VOLT_THEME, highlight=False)


def print_banner() -> None:
    title = Text("VOLT", style="bold #e0af68")
    subtitle = Text(f"Rails-like framework for Python  v{__version__}", style="muted")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="#e0af68", padding=(1, 4)))


def info(message: str) -> None:
    console.print(f"[info]>[/info] {escape(message)}")


def success(message: str) -> None:
    console.print(f"[success]✓[/success] {escape(message)}")


def warning(message: str) -> None:
    console.print(f"[warning]![/warning] {escape(message)}")


def error(message: str) -> None:
    console.print(f"[error]✗[/error] {escape(message)}")


def plain(message: str) -> None:
    console.print(escape(message))


def blank_line() -> None:
    console.print()


def print_file_action(action: FileAction) -> None:
    """`      create  app/models/post.py` (Rails generator style)."""

    label = action.kind.value.rjust(8)
    note = f" [muted]({escape(action.note)})[/muted]" if action.note else ""
    console.print(f"[action.{action.kind.value}]{label}[/action.{action.kind.value}]  [path]{escape(action.path)}[/path]{note}")


def print_file_actions(actions: Iterable[FileAction]) -> None:
    for action in actions:
        print_file_action(action)


def print_result(result: GenerationResult) -> None:
    print_file_actions(result.actions)
    for message in result.warnings:
        warning(message)


def count(result: GenerationResult, kind: FileActionKind) -> int:
    return sum(1 for a in result.actions if a.kind is kind)


def build_routes_table(routes: Iterable[RouteEntry]) -> Table:
    table = Table(title="Routes", header_style="highlight")
    table.add_column("Method", style="info", no_wrap=True)
    table.add_column("Path", style="path")
    table.add_column("Controller#Action", style="white")
    for route in routes:
        table.add_row(route.method, escape(route.path), escape(route.action))
    return table
