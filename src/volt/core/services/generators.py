"""File generators behind `volt generate`.

Why here:
- Every generator computes names once (via `volt.core.naming`) and hands the
  same template data to the model, migration, controller, views and tests.
- Generators never print. They return a `GenerationResult` and the CLI
  decides how to show it.
"""

from __future__ import annotations

import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Sequence

from volt.adapters import registrars, template_engine
from volt.core.domain.models import FieldDefinition, FileAction, FileActionKind
from volt.core.errors import InvalidNameError
from volt.core.field_parser import parse_fields, uses_type
from volt.core.naming import (
    ensure_channel_suffix,
    ensure_controller_suffix,
    ensure_mailer_suffix,
    module_name,
    pluralize,
    resource_controller_name,
    to_pascal_case,
    to_route_path,
    to_snake_case,
    to_table_name,
)
from volt.core.project import ProjectContext, ProjectLayout
from volt.core.services import migrations
from volt.core.services.results import GenerationResult

_CLASS_NAME = re.compile(r"^[A-Z][A-Za-z0-9]*$")


def validate_class_name(name: str, *, what: str) -> str:
    """PascalCase `name` and make sure it can be a Python class name."""

    pascal = to_pascal_case(name)
    if not _CLASS_NAME.match(pascal):
        raise InvalidNameError(
            f"Invalid {what} name '{name}'. Use letters and digits, starting with a letter (e.g. BlogPost)."
        )
    return pascal


def _declaration(field: FieldDefinition) -> str:
    """Right-hand side of the SQLModel attribute."""

    if field.is_reference:
        return f'Field(foreign_key="{field.referenced_table}.id", index=True)'
    if field.raw_type == "datetime":
        return f"Field(default_factory={field.default_factory}, sa_type=DateTime(timezone=True))"
    if field.default_factory:
        return f"Field(default_factory={field.default_factory})"
    if field.raw_type in ("string", "str"):
        return f"Field(default={field.default}, max_length=255)"
    if field.raw_type == "decimal":
        return f"Field(default={field.default}, max_digits=18, decimal_places=2)"
    return str(field.default)


def _field_data(field: FieldDefinition) -> dict[str, Any]:
    data = field.model_dump()
    data["declaration"] = _declaration(field)
    data["label"] = field.name.replace("_", " ").capitalize()
    return data


def _base_data(context: ProjectContext) -> dict[str, Any]:
    return {"app_name": context.app_name, "package": context.package, "api": context.api}


def _model_data(context: ProjectContext, model_name: str, fields: Sequence[FieldDefinition]) -> dict[str, Any]:
    route_path = to_route_path(model_name)
    return {
        **_base_data(context),
        "model_name": model_name,
        "model_name_plural": pluralize(model_name),
        "model_module": module_name(model_name),
        "var": to_snake_case(model_name),
        "table_name": to_table_name(model_name),
        "route_path": route_path,
        "fields": [_field_data(f) for f in fields],
        "references": [_field_data(f) for f in fields if f.is_reference],
        "datetime_fields": [f.name for f in fields if f.raw_type == "datetime"],
        "needs_decimal": uses_type(fields, "Decimal"),
        "needs_date": uses_type(fields, "date"),
        "needs_datetime": uses_type(fields, "datetime"),
    }


def _write_model(context: ProjectContext, data: dict[str, Any], result: GenerationResult) -> None:
    layout = context.layout
    path = layout.model_path(f"{data['model_module']}.py")
    result.add(template_engine.render_to_file("generators/model.py.jinja", data, path, display_path=layout.relative(path)))
    result.add(
        registrars.register_model(
            layout, module=data["model_module"], model_name=data["model_name"], warn=result.warn
        )
    )


def _write_migration(
    context: ProjectContext,
    data: dict[str, Any],
    result: GenerationResult,
    *,
    now: datetime | None,
) -> None:
    layout = context.layout
    versions_dir = layout.migration_path()
    existing = migrations.find_create_migrations(versions_dir, data["table_name"])
    if existing:
        result.add(
            FileAction(
                kind=FileActionKind.SKIPPED,
                path=layout.relative(existing[0]),
                note="exists",
            )
        )
        return

    moment = now or datetime.now(timezone.utc)
    revision = migrations.next_revision_id(versions_dir, now=moment)
    down_revision = migrations.current_head(versions_dir)
    path = layout.migration_path(migrations.create_migration_filename(revision, data["table_name"]))
    migration_data = {
        **data,
        "revision": revision,
        "down_revision": down_revision,
        "create_date": moment.strftime("%Y-%m-%d %H:%M:%S"),
    }
    result.add(
        template_engine.render_to_file(
            "generators/migration.py.jinja", migration_data, path, display_path=layout.relative(path)
        )
    )


def generate_model(
    context: ProjectContext,
    name: str,
    field_args: Sequence[str] = (),
    *,
    now: datetime | None = None,
) -> GenerationResult:
    """Model class, registry import and create-table migration."""

    result = GenerationResult()
    model_name = validate_class_name(name, what="model")
    fields = parse_fields(field_args, warn=result.warn)
    data = _model_data(context, model_name, fields)

    _write_model(context, data, result)
    _write_migration(context, data, result, now=now)
    return result


def generate_controller(context: ProjectContext, name: str, field_args: Sequence[str] = ()) -> GenerationResult:
    """Plain controller with an `index` action, mounted at the snake-cased name."""

    result = GenerationResult()
    controller_name = ensure_controller_suffix(validate_class_name(name, what="controller"))
    base_name = controller_name[: -len("Controller")] or controller_name
    route_path = to_snake_case(base_name)
    module = module_name(controller_name)
    fields = parse_fields(field_args, warn=result.warn)

    layout = context.layout
    data = {
        **_base_data(context),
        "controller_name": controller_name,
        "title": base_name,
        "route_path": route_path,
        "fields": [_field_data(f) for f in fields],
    }

    path = layout.controller_path(f"{module}.py")
    result.add(
        template_engine.render_to_file("generators/controller.py.jinja", data, path, display_path=layout.relative(path))
    )
    if not context.api:
        view = layout.view_path(route_path, "index.html")
        result.add(
            template_engine.render_to_file(
                "generators/views/controller_index.html.jinja", data, view, display_path=layout.relative(view)
            )
        )
    result.add(registrars.register_router(layout, kind="controllers", module=module, warn=result.warn))
    return result


_SCAFFOLD_VIEWS = ("index", "show", "new", "edit", "_form")


def generate_scaffold(
    context: ProjectContext,
    name: str,
    field_args: Sequence[str] = (),
    *,
    now: datetime | None = None,
) -> GenerationResult:
    """Model, migration, CRUD controller, views (app mode) and tests."""

    if ":" in name:
        raise InvalidNameError(
            f"Invalid scaffold name '{name}'. Did you forget the model name? "
            "Usage: volt generate scaffold <Name> [fields...]"
        )

    result = GenerationResult()
    model_name = validate_class_name(name, what="model")
    fields = parse_fields(field_args, warn=result.warn)
    data = _model_data(context, model_name, fields)
    controller_name = resource_controller_name(model_name)
    controller_module = module_name(controller_name)
    data["controller_name"] = controller_name
    data["controller_module"] = controller_module

    layout = context.layout
    _write_model(context, data, result)

    controller_template = (
        "generators/resource_controller_api.py.jinja" if context.api else "generators/resource_controller.py.jinja"
    )
    path = layout.controller_path(f"{controller_module}.py")
    result.add(template_engine.render_to_file(controller_template, data, path, display_path=layout.relative(path)))
    result.add(registrars.register_router(layout, kind="controllers", module=controller_module, warn=result.warn))

    if not context.api:
        for view in _SCAFFOLD_VIEWS:
            view_path = layout.view_path(data["route_path"], f"{view}.html")
            result.add(
                template_engine.render_to_file(
                    f"generators/views/{view}.html.jinja", data, view_path, display_path=layout.relative(view_path)
                )
            )

    _write_migration(context, data, result, now=now)
    _write_tests(context, data, result)
    return result


def _write_tests(context: ProjectContext, data: dict[str, Any], result: GenerationResult) -> None:
    layout = context.layout
    if not layout.test_path().is_dir():
        result.warn("tests/ directory not found. Skipping test generation.")
        return

    model_test = layout.test_path("models", f"test_{data['model_module']}.py")
    controller_test = layout.test_path("controllers", f"test_{data['controller_module']}.py")
    for package_dir in (model_test.parent, controller_test.parent):
        _ensure_package(package_dir, result, layout)

    result.add(
        template_engine.render_to_file(
            "generators/test_model.py.jinja", data, model_test, display_path=layout.relative(model_test)
        )
    )
    result.add(
        template_engine.render_to_file(
            "generators/test_controller.py.jinja", data, controller_test, display_path=layout.relative(controller_test)
        )
    )


def generate_job(context: ProjectContext, name: str) -> GenerationResult:
    result = GenerationResult()
    job_name = validate_class_name(name, what="job")
    layout = context.layout
    path = layout.job_path(f"{module_name(job_name)}.py")
    data = {**_base_data(context), "job_name": job_name}
    _ensure_package(layout.job_path(), result, layout)
    result.add(template_engine.render_to_file("generators/job.py.jinja", data, path, display_path=layout.relative(path)))
    return result


def generate_mailer(context: ProjectContext, name: str) -> GenerationResult:
    result = GenerationResult()
    mailer_name = ensure_mailer_suffix(validate_class_name(name, what="mailer"))
    layout = context.layout
    path = layout.mailer_path(f"{module_name(mailer_name)}.py")
    data = {**_base_data(context), "mailer_name": mailer_name}
    _ensure_package(layout.mailer_path(), result, layout)
    result.add(
        template_engine.render_to_file("generators/mailer.py.jinja", data, path, display_path=layout.relative(path))
    )
    return result


def channel_route(channel_name: str) -> str:
    """`ChatChannel` -> `chat` (the websocket path segment)."""

    base = channel_name[: -len("Channel")] if channel_name.endswith("Channel") else channel_name
    return (base or channel_name).lower()


def generate_channel(context: ProjectContext, name: str) -> GenerationResult:
    result = GenerationResult()
    channel_name = ensure_channel_suffix(validate_class_name(name, what="channel"))
    module = module_name(channel_name)
    layout = context.layout
    path = layout.channel_path(f"{module}.py")
    data = {**_base_data(context), "channel_name": channel_name, "channel_route": channel_route(channel_name)}
    _ensure_package(layout.channel_path(), result, layout)
    result.add(
        template_engine.render_to_file("generators/channel.py.jinja", data, path, display_path=layout.relative(path))
    )
    result.add(registrars.register_router(layout, kind="channels", module=module, warn=result.warn))
    return result


def _ensure_package(directory: Path, result: GenerationResult, layout: ProjectLayout) -> None:
    """Create `directory/__init__.py` the first time something is generated into it."""

    init = directory / "__init__.py"
    if init.exists():
        return
    directory.mkdir(parents=True, exist_ok=True)
    init.write_text("", encoding="utf-8")
    result.add(FileAction(kind=FileActionKind.CREATED, path=layout.relative(init)))
