"""Reverse of the generators: `volt destroy`.

Paths are derived with the same naming rules as `generators`, so whatever
`volt generate X Foo` wrote, `volt destroy X Foo` removes.
"""

from __future__ import annotations

import shutil
from pathlib import Path

from volt.adapters import registrars
from volt.core.domain.models import FileAction, FileActionKind
from volt.core.naming import (
    ensure_channel_suffix,
    ensure_controller_suffix,
    ensure_mailer_suffix,
    module_name,
    resource_controller_name,
    to_route_path,
    to_snake_case,
    to_table_name,
)
from volt.core.project import ProjectContext, ProjectLayout
from volt.core.services import migrations
from volt.core.services.generators import validate_class_name
from volt.core.services.results import GenerationResult


def _remove(layout: ProjectLayout, path: Path, result: GenerationResult) -> None:
    display = layout.relative(path)
    if path.is_dir():
        shutil.rmtree(path)
        result.add(FileAction(kind=FileActionKind.REMOVED, path=display))
    elif path.exists():
        path.unlink()
        result.add(FileAction(kind=FileActionKind.REMOVED, path=display))
    else:
        result.add(FileAction(kind=FileActionKind.SKIPPED, path=display, note="not found"))


def _remove_migrations(layout: ProjectLayout, table_name: str, result: GenerationResult) -> None:
    for path in migrations.find_create_migrations(layout.migration_path(), table_name):
        _remove(layout, path, result)


def _destroy_model_files(context: ProjectContext, model_name: str, result: GenerationResult) -> None:
    layout = context.layout
    module = module_name(model_name)
    _remove(layout, layout.model_path(f"{module}.py"), result)
    result.add(registrars.unregister_model(layout, module=module))
    _remove_migrations(layout, to_table_name(model_name), result)


def destroy_model(context: ProjectContext, name: str) -> GenerationResult:
    result = GenerationResult()
    _destroy_model_files(context, validate_class_name(name, what="model"), result)
    return result


def destroy_controller(context: ProjectContext, name: str) -> GenerationResult:
    result = GenerationResult()
    controller_name = ensure_controller_suffix(validate_class_name(name, what="controller"))
    module = module_name(controller_name)
    route_path = to_snake_case(controller_name[: -len("Controller")] or controller_name)

    layout = context.layout
    _remove(layout, layout.controller_path(f"{module}.py"), result)
    if not context.api:
        _remove(layout, layout.view_path(route_path), result)
    result.add(registrars.unregister_router(layout, kind="controllers", module=module))
    return result


def destroy_scaffold(context: ProjectContext, name: str) -> GenerationResult:
    result = GenerationResult()
    model_name = validate_class_name(name, what="model")
    controller_module = module_name(resource_controller_name(model_name))

    layout = context.layout
    _destroy_model_files(context, model_name, result)
    _remove(layout, layout.controller_path(f"{controller_module}.py"), result)
    result.add(registrars.unregister_router(layout, kind="controllers", module=controller_module))
    if not context.api:
        _remove(layout, layout.view_path(to_route_path(model_name)), result)

    for test in (
        layout.test_path("models", f"test_{module_name(model_name)}.py"),
        layout.test_path("controllers", f"test_{controller_module}.py"),
    ):
        if test.exists():
            _remove(layout, test, result)
    return result


def destroy_job(context: ProjectContext, name: str) -> GenerationResult:
    result = GenerationResult()
    job_name = validate_class_name(name, what="job")
    layout = context.layout
    _remove(layout, layout.job_path(f"{module_name(job_name)}.py"), result)
    return result


def destroy_mailer(context: ProjectContext, name: str) -> GenerationResult:
    result = GenerationResult()
    mailer_name = ensure_mailer_suffix(validate_class_name(name, what="mailer"))
    layout = context.layout
    _remove(layout, layout.mailer_path(f"{module_name(mailer_name)}.py"), result)
    return result


def destroy_channel(context: ProjectContext, name: str) -> GenerationResult:
    result = GenerationResult()
    channel_name = ensure_channel_suffix(validate_class_name(name, what="channel"))
    module = module_name(channel_name)
    layout = context.layout
    _remove(layout, layout.channel_path(f"{module}.py"), result)
    result.add(registrars.unregister_router(layout, kind="channels", module=module))
    return result
