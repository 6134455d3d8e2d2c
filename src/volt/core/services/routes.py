"""Static route discovery for `volt routes` and the AI context files.

Controllers are read as text, not imported: listing routes must work even
when the project's dependencies are not installed or a module is broken.
"""

from __future__ import annotations

import re
from pathlib import Path

from volt.core.domain.models import RouteEntry
from volt.core.naming import to_pascal_case
from volt.core.project import ProjectContext

_PREFIX = re.compile(r"""APIRouter\([^)]*?prefix\s*=\s*["']([^"']*)["']""", re.DOTALL)
_DECORATOR = re.compile(
    r"""^@router\.(get|post|put|patch|delete|websocket)\(\s*["']([^"']*)["']""",
    re.MULTILINE,
)
_DEF = re.compile(r"^(?:async\s+)?def\s+(\w+)", re.MULTILINE)

_SUFFIXES = ("Controller", "Channel")


def _controller_label(path: Path) -> str:
    name = to_pascal_case(path.stem)
    for suffix in _SUFFIXES:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[: -len(suffix)]
    return name


def _join(prefix: str, path: str) -> str:
    full = f"{prefix.rstrip('/')}/{path.lstrip('/')}" if path else prefix
    if not full.startswith("/"):
        full = "/" + full
    return full.rstrip("/") or "/"


def scan_file(path: Path) -> list[RouteEntry]:
    """Routes declared in one router module, in source order."""

    text = path.read_text(encoding="utf-8")
    prefix_match = _PREFIX.search(text)
    prefix = prefix_match.group(1) if prefix_match else ""
    label = _controller_label(path)

    entries: list[RouteEntry] = []
    for match in _DECORATOR.finditer(text):
        verb, route = match.group(1), match.group(2)
        func = _DEF.search(text, match.end())
        action = func.group(1) if func else "?"
        entries.append(
            RouteEntry(
                method="WS" if verb == "websocket" else verb.upper(),
                path=_join(prefix, route),
                action=f"{label}#{action}",
            )
        )
    return entries


def discover_routes(context: ProjectContext) -> list[RouteEntry]:
    layout = context.layout
    routes: list[RouteEntry] = []
    for directory in (layout.controller_path(), layout.channel_path()):
        if not directory.is_dir():
            continue
        for path in sorted(directory.glob("*.py")):
            if path.name == "__init__.py":
                continue
            routes.extend(scan_file(path))
    return routes
