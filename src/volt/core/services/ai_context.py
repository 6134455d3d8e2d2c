"""AI assistant context files (`volt generate ai-context`).

Three files share one body, so Claude, Cursor and Copilot read the same
project description. They are owned by Volt and rewritten on every run.
"""

from __future__ import annotations

import re
from pathlib import Path

from volt.adapters import template_engine
from volt.core.domain.models import ModelInfo
from volt.core.naming import to_table_name
from volt.core.project import ProjectContext
from volt.core.services.results import GenerationResult
from volt.core.services.routes import discover_routes

AI_CONTEXT_FILES = {
    "CLAUDE.md": "generators/ai_context/claude.md.jinja",
    ".cursorrules": "generators/ai_context/cursorrules.jinja",
    ".github/copilot-instructions.md": "generators/ai_context/copilot_instructions.md.jinja",
}

_TABLE_CLASS = re.compile(r"^class\s+(\w+)\([^)]*table\s*=\s*True[^)]*\):", re.MULTILINE)
_TABLENAME = re.compile(r"""__tablename__\s*=\s*["']([^"']+)["']""")
_ATTRIBUTE = re.compile(r"^    (\w+)\s*:\s*([^=\n]+?)\s*(?:=|$)", re.MULTILINE)
_IMPLICIT = frozenset({"id", "created_at", "updated_at"})


def _read_model(path: Path) -> ModelInfo | None:
    text = path.read_text(encoding="utf-8")
    table_class = _TABLE_CLASS.search(text)
    if table_class is None:
        return None

    name = table_class.group(1)
    tablename = _TABLENAME.search(text)
    fields = [
        f"{attr}: {annotation.strip()}"
        for attr, annotation in _ATTRIBUTE.findall(text)
        if attr not in _IMPLICIT and not attr.startswith("_")
    ]
    return ModelInfo(
        name=name,
        table=tablename.group(1) if tablename else to_table_name(name),
        fields=list(dict.fromkeys(fields)),
    )


def discover_models(context: ProjectContext) -> list[ModelInfo]:
    models_dir = context.layout.model_path()
    if not models_dir.is_dir():
        return []

    models: list[ModelInfo] = []
    for path in sorted(models_dir.glob("*.py")):
        if path.name == "__init__.py":
            continue
        info = _read_model(path)
        if info is not None:
            models.append(info)
    return models


def generate_ai_context(context: ProjectContext) -> GenerationResult:
    result = GenerationResult()
    layout = context.layout
    data = {
        "app_name": context.app_name,
        "package": context.package,
        "api": context.api,
        "database": context.database.label(),
        "models": [m.model_dump() for m in discover_models(context)],
        "routes": [r.model_dump() for r in discover_routes(context)],
    }

    for relative, template in AI_CONTEXT_FILES.items():
        path = layout.root / relative
        result.add(template_engine.write_rendered(template, data, path, display_path=relative))
    return result
