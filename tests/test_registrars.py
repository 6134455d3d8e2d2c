from __future__ import annotations

from volt.adapters import registrars
from volt.core.domain.models import FileActionKind


def _read(path) -> str:
    return path.read_text(encoding="utf-8")


def test_register_model_is_idempotent(project) -> None:
    warnings: list[str] = []
    layout = project.layout

    first = registrars.register_model(layout, module="post", model_name="Post", warn=warnings.append)
    second = registrars.register_model(layout, module="post", model_name="Post", warn=warnings.append)

    assert first is not None and first.kind is FileActionKind.MODIFIED
    assert second is None
    assert _read(layout.models_registry).count("from .post import Post") == 1
    assert warnings == []


def test_model_imports_follow_the_sqlmodel_import(project) -> None:
    layout = project.layout
    registrars.register_model(layout, module="post", model_name="Post", warn=print)
    registrars.register_model(layout, module="comment", model_name="Comment", warn=print)

    lines = _read(layout.models_registry).splitlines()
    start = next(i for i, line in enumerate(lines) if line.startswith("from sqlmodel import"))
    assert lines[start + 1] == "from .post import Post  # noqa: F401"
    assert lines[start + 2] == "from .comment import Comment  # noqa: F401"


def test_unregister_model(project) -> None:
    layout = project.layout
    registrars.register_model(layout, module="post", model_name="Post", warn=print)

    assert registrars.unregister_model(layout, module="post") is not None
    assert registrars.unregister_model(layout, module="post") is None
    assert "from .post" not in _read(layout.models_registry)


def test_register_router_is_idempotent(project) -> None:
    layout = project.layout

    registrars.register_router(layout, kind="controllers", module="posts_controller", warn=print)
    again = registrars.register_router(layout, kind="controllers", module="posts_controller", warn=print)

    routes = _read(layout.routes_file)
    assert again is None
    assert routes.count("from blog.controllers import posts_controller") == 1
    assert routes.count("app.include_router(posts_controller.router)") == 1
    include_lines = [line for line in routes.splitlines() if "include_router" in line]
    assert include_lines == [
        "    app.include_router(home_controller.router)",
        "    app.include_router(posts_controller.router)",
    ]


def test_register_router_without_routes_file_warns(project) -> None:
    project.layout.routes_file.unlink()
    warnings: list[str] = []

    action = registrars.register_router(project.layout, kind="channels", module="chat_channel", warn=warnings.append)

    assert action is None
    assert warnings == ["blog/routes.py not found. Register the router manually."]
