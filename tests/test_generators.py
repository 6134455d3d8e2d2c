from __future__ import annotations

import pytest

from volt.core.domain.models import FileActionKind
from volt.core.errors import InvalidNameError
from volt.core.services import generators
from tests.conftest import FIXED_NOW


def _read(path) -> str:
    return path.read_text(encoding="utf-8")


def _compile_tree(root) -> None:
    for path in root.rglob("*.py"):
        compile(_read(path), str(path), "exec")


def test_model_writes_class_registration_and_migration(project) -> None:
    result = generators.generate_model(
        project, "Post", ["title:string", "body:text", "author:references"], now=FIXED_NOW
    )

    layout = project.layout
    model = _read(layout.model_path("post.py"))
    assert "class PostParams(SQLModel):" in model
    assert "class Post(PostParams, table=True):" in model
    assert '__tablename__ = "posts"' in model
    assert 'title: str | None = Field(default="", max_length=255)' in model
    assert 'author_id: int = Field(foreign_key="authors.id", index=True)' in model

    assert "from .post import Post  # noqa: F401" in _read(layout.models_registry)

    migration = layout.migration_path("20240101120000_create_posts.py")
    text = _read(migration)
    assert 'revision: str = "20240101120000"' in text
    assert "down_revision: str | None = None" in text
    assert 'sa.ForeignKey("authors.id")' in text
    assert 'op.drop_table("posts")' in text

    assert result.created == ["blog/models/post.py", "migrations/versions/20240101120000_create_posts.py"]
    _compile_tree(project.root)


def test_second_model_chains_onto_the_first(project) -> None:
    generators.generate_model(project, "Post", ["title"], now=FIXED_NOW)
    generators.generate_model(project, "Comment", ["body:text", "post:references"], now=FIXED_NOW)

    migration = project.layout.migration_path("20240101120001_create_comments.py")
    assert 'down_revision: str | None = "20240101120000"' in _read(migration)


def test_model_imports_only_needed_types(project) -> None:
    generators.generate_model(project, "Invoice", ["total:decimal", "due_on:date", "paid:bool"], now=FIXED_NOW)

    model = _read(project.layout.model_path("invoice.py"))
    assert "from datetime import date, datetime, timezone" in model
    assert "from decimal import Decimal" in model
    assert "paid: bool = False" in model
    _compile_tree(project.root)


def test_generating_twice_skips_existing_files(project) -> None:
    generators.generate_model(project, "Post", ["title"], now=FIXED_NOW)

    result = generators.generate_model(project, "Post", ["title"], now=FIXED_NOW)

    assert {a.kind for a in result.actions} == {FileActionKind.SKIPPED}
    assert _read(project.layout.models_registry).count("from .post import Post") == 1


def test_unknown_field_type_is_reported(project) -> None:
    result = generators.generate_model(project, "Post", ["color:rgb"], now=FIXED_NOW)

    assert any("Unknown field type 'rgb'" in w for w in result.warnings)


def test_invalid_model_name_is_rejected(project) -> None:
    with pytest.raises(InvalidNameError):
        generators.generate_model(project, "9lives")


def test_controller_writes_router_view_and_registration(project) -> None:
    generators.generate_controller(project, "Pages")

    layout = project.layout
    controller = _read(layout.controller_path("pages_controller.py"))
    assert 'APIRouter(prefix="/pages", tags=["pages"])' in controller
    assert layout.view_path("pages", "index.html").is_file()

    routes = _read(layout.routes_file)
    assert "from blog.controllers import pages_controller" in routes
    assert "    app.include_router(pages_controller.router)" in routes
    _compile_tree(project.root)


def test_controller_in_api_project_has_no_view(api_project) -> None:
    generators.generate_controller(api_project, "Status", ["code:int"])

    layout = api_project.layout
    assert not layout.view_path("status").exists()
    assert '"fields": ["code"]' in _read(layout.controller_path("status_controller.py"))
    _compile_tree(api_project.root)


def test_scaffold_generates_full_resource(project) -> None:
    result = generators.generate_scaffold(
        project, "Post", ["title:string", "body:text", "published:bool", "price:decimal"], now=FIXED_NOW
    )

    layout = project.layout
    for view in ("index", "show", "new", "edit", "_form"):
        assert layout.view_path("posts", f"{view}.html").is_file()
    assert layout.controller_path("posts_controller.py").is_file()
    assert layout.test_path("models", "test_post.py").is_file()
    assert layout.test_path("controllers", "test_posts_controller.py").is_file()
    assert "app.include_router(posts_controller.router)" in _read(layout.routes_file)
    assert not result.warnings
    _compile_tree(project.root)


def test_api_scaffold_uses_json_controller_without_views(api_project) -> None:
    generators.generate_scaffold(api_project, "Product", ["name", "price:decimal"], now=FIXED_NOW)

    layout = api_project.layout
    controller = _read(layout.controller_path("products_controller.py"))
    assert "@router.put(" in controller
    assert "status_code=status.HTTP_201_CREATED" in controller
    assert "response_model=list[Product]" in controller
    assert not layout.view_path("products").exists()
    _compile_tree(api_project.root)


def test_scaffold_rejects_field_as_name(project) -> None:
    with pytest.raises(InvalidNameError, match="Did you forget the model name"):
        generators.generate_scaffold(project, "title:string")


def test_scaffold_without_tests_directory_warns(project) -> None:
    import shutil

    shutil.rmtree(project.layout.test_path())

    result = generators.generate_scaffold(project, "Post", ["title"], now=FIXED_NOW)

    assert "tests/ directory not found. Skipping test generation." in result.warnings


def test_job_mailer_and_channel(project) -> None:
    generators.generate_job(project, "SendReport")
    generators.generate_mailer(project, "User")
    generators.generate_channel(project, "Chat")

    layout = project.layout
    assert "class SendReport:" in _read(layout.job_path("send_report.py"))
    assert "class UserMailer:" in _read(layout.mailer_path("user_mailer.py"))
    channel = _read(layout.channel_path("chat_channel.py"))
    assert '@router.websocket("/chat")' in channel
    assert layout.channel_path("__init__.py").is_file()
    assert "from blog.channels import chat_channel" in _read(layout.routes_file)
    _compile_tree(project.root)


def test_channel_route() -> None:
    assert generators.channel_route("ChatChannel") == "chat"
    assert generators.channel_route("Channel") == "channel"
