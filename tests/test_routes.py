from __future__ import annotations

from volt.cli.main import build_app
from volt.core.domain.models import RouteEntry
from volt.core.services import generators
from volt.core.services.routes import discover_routes, scan_file
from tests.conftest import FIXED_NOW


def test_scan_file_resolves_prefix_and_actions(tmp_path) -> None:
    source = tmp_path / "admin_controller.py"
    source.write_text(
        'router = APIRouter(\n    prefix="/admin",\n    tags=["admin"],\n)\n\n\n'
        '@router.get("")\ndef index():\n    ...\n\n\n'
        '@router.delete("/{item_id}", status_code=204)\nasync def destroy(item_id: int):\n    ...\n',
        encoding="utf-8",
    )

    assert scan_file(source) == [
        RouteEntry(method="GET", path="/admin", action="Admin#index"),
        RouteEntry(method="DELETE", path="/admin/{item_id}", action="Admin#destroy"),
    ]


def test_discover_routes_in_new_project(project) -> None:
    assert discover_routes(project) == [RouteEntry(method="GET", path="/", action="Home#index")]


def test_discover_scaffold_and_channel_routes(project) -> None:
    generators.generate_scaffold(project, "Post", ["title"], now=FIXED_NOW)
    generators.generate_channel(project, "Chat")

    routes = {(r.method, r.path, r.action) for r in discover_routes(project)}

    assert ("GET", "/posts", "Posts#index") in routes
    assert ("GET", "/posts/new", "Posts#new") in routes
    assert ("POST", "/posts/{post_id}", "Posts#update") in routes
    assert ("POST", "/posts/{post_id}/delete", "Posts#destroy") in routes
    assert ("WS", "/channels/chat", "Chat#subscribe") in routes


def test_routes_command_prints_table(project, runner) -> None:
    result = runner.invoke(build_app(), ["routes"])

    assert result.exit_code == 0, result.output
    assert "Home#index" in result.output


def test_routes_command_warns_when_empty(project, runner) -> None:
    project.layout.controller_path("home_controller.py").unlink()

    result = runner.invoke(build_app(), ["routes"])

    assert result.exit_code == 0
    assert "No routes found" in result.output
