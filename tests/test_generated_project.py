from __future__ import annotations

import subprocess
import sys

import pytest

from volt.core.domain.models import FileActionKind
from volt.core.services import generators
from tests.conftest import FIXED_NOW

EVERY_FIELD_TYPE = [
    "title:string",
    "body:text",
    "views:int",
    "published:bool",
    "price:decimal",
    "ratio:float",
    "published_at:datetime",
    "due_on:date",
]


def _read(path) -> str:
    return path.read_text(encoding="utf-8")


def test_datetime_fields_are_timezone_aware(project) -> None:
    generators.generate_scaffold(project, "Post", EVERY_FIELD_TYPE, now=FIXED_NOW)

    layout = project.layout
    model = _read(layout.model_path("post.py"))
    assert '@field_validator("published_at", mode="after")' in model
    assert "published_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True))" in model
    assert "from sqlalchemy import DateTime" in model

    model_test = _read(layout.test_path("models", "test_post.py"))
    assert "from datetime import date, datetime, timezone" in model_test
    assert '"published_at": datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc),' in model_test

    migration = _read(layout.migration_path("20240101120000_create_posts.py"))
    assert 'sa.Column("published_at", sa.DateTime(timezone=True), nullable=False)' in migration


def test_models_without_datetime_fields_skip_the_validator(project) -> None:
    generators.generate_model(project, "Tag", ["name:string"], now=FIXED_NOW)

    model = _read(project.layout.model_path("tag.py"))
    assert "field_validator" not in model
    assert "from sqlalchemy import DateTime" not in model


def test_datetime_form_input_uses_html_format(project) -> None:
    generators.generate_scaffold(project, "Post", ["published_at:datetime", "due_on:date"], now=FIXED_NOW)

    form = _read(project.layout.view_path("posts", "_form.html"))
    assert '<input type="datetime-local" name="published_at"' in form
    assert "post.published_at.strftime('%Y-%m-%dT%H:%M')" in form
    assert '<input type="date" name="due_on"' in form


def test_scaffold_reports_created_test_packages(project) -> None:
    result = generators.generate_scaffold(project, "Post", ["title:string"], now=FIXED_NOW)

    created = result.paths(FileActionKind.CREATED)
    assert "tests/models/__init__.py" in created
    assert "tests/controllers/__init__.py" in created


@pytest.mark.parametrize("api", [False, True])
def test_generated_scaffold_passes_its_own_tests(make_project, api) -> None:
    for module in ("fastapi", "sqlmodel", "httpx", "multipart", "pydantic_settings", "jinja2", "uvicorn"):
        pytest.importorskip(module)

    context = make_project("shop_api" if api else "blog", api=api)
    generators.generate_scaffold(context, "Post", EVERY_FIELD_TYPE, now=FIXED_NOW)

    completed = subprocess.run(
        [sys.executable, "-m", "pytest", "-q", "-p", "no:cacheprovider"],
        cwd=context.root,
        capture_output=True,
        text=True,
        timeout=300,
    )

    assert completed.returncode == 0, completed.stdout + completed.stderr
