"""Jinja2 rendering of Volt templates.

Why in adapters:
- Templates are files shipped with the package; the core only decides which
  template goes where and with which data.

Delimiters are `[[ ]]`, `[% %]` and `[# #]` so that generated Jinja views
can keep the usual `{{ }}` / `{% %}` syntax untouched.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateNotFound

from volt.core.domain.models import FileAction, FileActionKind
from volt.core.errors import TemplateNotFoundError

TEMPLATES_DIR = Path(__file__).resolve().parents[1] / "templates"

_env: Environment | None = None


def _get_env() -> Environment:
    global _env
    if _env is None:
        _env = Environment(
            loader=FileSystemLoader(str(TEMPLATES_DIR)),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
            variable_start_string="[[",
            variable_end_string="]]",
            block_start_string="[%",
            block_end_string="%]",
            comment_start_string="[#",
            comment_end_string="#]",
        )
    return _env


def render(template_name: str, data: dict[str, Any]) -> str:
    """Render `template_name` (relative to the templates dir) with `data`."""

    try:
        template = _get_env().get_template(template_name)
    except TemplateNotFound as exc:
        raise TemplateNotFoundError(template_name) from exc
    return template.render(**data)


def render_to_file(
    template_name: str,
    data: dict[str, Any],
    output_path: Path,
    *,
    display_path: str,
) -> FileAction:
    """Render into `output_path`, creating parent directories.

    Existing files are never overwritten: the action comes back as SKIPPED.
    """

    if output_path.exists():
        return FileAction(kind=FileActionKind.SKIPPED, path=display_path, note="exists")

    content = render(template_name, data)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    return FileAction(kind=FileActionKind.CREATED, path=display_path)


def write_rendered(template_name: str, data: dict[str, Any], output_path: Path, *, display_path: str) -> FileAction:
    """Render and overwrite (used for files Volt fully owns, e.g. AI context files)."""

    content = render(template_name, data)
    existed = output_path.exists()
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    kind = FileActionKind.MODIFIED if existed else FileActionKind.CREATED
    return FileAction(kind=kind, path=display_path)
