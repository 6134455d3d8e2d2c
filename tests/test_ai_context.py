from __future__ import annotations

from volt.core.domain.models import FileActionKind
from volt.core.services import generators
from volt.core.services.ai_context import AI_CONTEXT_FILES, discover_models, generate_ai_context
from tests.conftest import FIXED_NOW


def test_discover_models_reads_fields(project) -> None:
    generators.generate_model(project, "Post", ["title", "views:int"], now=FIXED_NOW)

    (model,) = discover_models(project)

    assert model.name == "Post"
    assert model.table == "posts"
    assert model.fields == ["title: str | None", "views: int"]


def test_ai_context_files_share_project_description(project) -> None:
    generators.generate_scaffold(project, "Post", ["title"], now=FIXED_NOW)

    result = generate_ai_context(project)

    assert [a.path for a in result.actions] == list(AI_CONTEXT_FILES)
    for relative in AI_CONTEXT_FILES:
        text = (project.root / relative).read_text(encoding="utf-8")
        assert "`Post` (table `posts`)" in text
        assert "`GET /posts` -> Posts#index" in text


def test_ai_context_is_rewritten(project) -> None:
    generate_ai_context(project)

    result = generate_ai_context(project)

    assert {a.kind for a in result.actions} == {FileActionKind.MODIFIED}
