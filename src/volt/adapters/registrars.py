"""Edits the registration files of a generated project.

- `<package>/models/__init__.py`: one import per model, so Alembic sees the
  table through `SQLModel.metadata`.
- `<package>/routes.py`: one import plus one `app.include_router(...)` per
  controller or channel.

Edits are line based and idempotent: registering twice changes nothing,
unregistering something absent changes nothing.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable

from volt.core.domain.models import FileAction, FileActionKind
from volt.core.project import ProjectLayout

Warn = Callable[[str], None]


def _read_lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


def _write_lines(path: Path, lines: list[str]) -> None:
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def _last_index(lines: list[str], predicate: Callable[[str], bool]) -> int:
    last = -1
    for i, line in enumerate(lines):
        if predicate(line):
            last = i
    return last


def _model_import(module: str, model_name: str) -> str:
    return f"from .{module} import {model_name}  # noqa: F401"


def _register_model(layout: ProjectLayout, module: str, model_name: str, warn: Warn) -> FileAction | None:
    registry = layout.models_registry
    display = layout.relative(registry)
    if not registry.is_file():
        warn(f"{display} not found. Skipping model registration.")
        return None

    lines = _read_lines(registry)
    pattern = re.compile(rf"^from \.{re.escape(module)} import {re.escape(model_name)}\b")
    if any(pattern.match(line) for line in lines):
        return None

    anchor = _last_index(lines, lambda line: line.startswith("from .") or line.startswith("from sqlmodel import"))
    new_line = _model_import(module, model_name)
    if anchor >= 0:
        lines.insert(anchor + 1, new_line)
    else:
        lines.append(new_line)

    _write_lines(registry, lines)
    return FileAction(kind=FileActionKind.MODIFIED, path=display)


def unregister_model(layout: ProjectLayout, *, module: str) -> FileAction | None:
    registry = layout.models_registry
    if not registry.is_file():
        return None

    lines = _read_lines(registry)
    pattern = re.compile(rf"^from \.{re.escape(module)} import ")
    kept = [line for line in lines if not pattern.match(line)]
    if len(kept) == len(lines):
        return None

    _write_lines(registry, kept)
    return FileAction(kind=FileActionKind.MODIFIED, path=layout.relative(registry))


def _register_router(layout: ProjectLayout, kind: str, module: str, warn: Warn) -> FileAction | None:
    routes_file = layout.routes_file
    display = layout.relative(routes_file)
    if not routes_file.is_file():
        warn(f"{display} not found. Register the router manually.")
        return None

    lines = _read_lines(routes_file)
    import_line = f"from {layout.package}.{kind} import {module}"
    include_line = f"    app.include_router({module}.router)"

    changed = False
    if import_line not in lines:
        anchor = _last_index(lines, lambda line: line.startswith(f"from {layout.package}."))
        if anchor < 0:
            anchor = _last_index(lines, lambda line: line.startswith(("from ", "import ")))
        lines.insert(anchor + 1, import_line)
        changed = True

    if include_line not in lines:
        anchor = _last_index(lines, lambda line: line.strip().startswith("app.include_router("))
        if anchor < 0:
            anchor = _last_index(lines, lambda line: line.startswith("def register_routes"))
        if anchor < 0:
            warn(f"Could not find register_routes() in {display}. Add {module}.router manually.")
            if changed:
                _write_lines(routes_file, lines)
                return FileAction(kind=FileActionKind.MODIFIED, path=display)
            return None
        lines.insert(anchor + 1, include_line)
        changed = True

    if not changed:
        return None

    _write_lines(routes_file, lines)
    return FileAction(kind=FileActionKind.MODIFIED, path=display)


def unregister_router(layout: ProjectLayout, *, kind: str, module: str) -> FileAction | None:
    routes_file = layout.routes_file
    if not routes_file.is_file():
        return None

    lines = _read_lines(routes_file)
    drop = {
        f"from {layout.package}.{kind} import {module}",
        f"    app.include_router({module}.router)",
    }
    kept = [line for line in lines if line not in drop]
    if len(kept) == len(lines):
        return None

    _write_lines(routes_file, kept)
    return FileAction(kind=FileActionKind.MODIFIED, path=layout.relative(routes_file))


def register_model(layout: ProjectLayout, *, module: str, model_name: str, warn: Warn) -> FileAction | None:
    """Import `model_name` in the models registry. I/O failures become warnings."""

    try:
        return _register_model(layout, module, model_name, warn)
    except OSError as exc:
        warn(f"Could not update {layout.relative(layout.models_registry)}: {exc}")
        return None


def register_router(layout: ProjectLayout, *, kind: str, module: str, warn: Warn) -> FileAction | None:
    """Mount `<package>.<kind>.<module>.router` in routes.py. I/O failures become warnings.

    `kind` is the subpackage: `controllers` or `channels`.
    """

    try:
        return _register_router(layout, kind, module, warn)
    except OSError as exc:
        warn(f"Could not update {layout.relative(layout.routes_file)}: {exc}")
        return None
