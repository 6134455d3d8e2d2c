"""Switches a project's database provider.

Three files change together:
- `pyproject.toml`: `[tool.volt] database` and the driver dependency.
- `.env`: `DATABASE_URL`.
"""

from __future__ import annotations

import re
from pathlib import Path

from volt.core.config import VoltSettings
from volt.core.domain.models import FileAction, FileActionKind
from volt.core.domain.providers import DbProvider
from volt.core.errors import VoltError
from volt.core.project import ProjectContext

_DEPENDENCIES_BLOCK = re.compile(r"(?ms)^dependencies\s*=\s*\[(?P<body>.*?)^\]")
_DRIVER_PACKAGES = tuple(
    p.driver_dependency.split("[")[0].split(">")[0] for p in DbProvider if p.driver_dependency
)


def provider_password(provider: DbProvider, settings: VoltSettings) -> str | None:
    if provider is DbProvider.POSTGRES:
        return settings.postgres_password
    if provider is DbProvider.SQLSERVER:
        return settings.sqlserver_password
    return None


def database_url_for(context: ProjectContext, provider: DbProvider, settings: VoltSettings) -> str:
    return provider.database_url(context.package, password=provider_password(provider, settings))


def _set_tool_volt_database(content: str, provider: DbProvider) -> str:
    lines = content.splitlines()
    in_section = False
    for i, line in enumerate(lines):
        stripped = line.strip()
        if stripped.startswith("["):
            in_section = stripped == "[tool.volt]"
            continue
        if in_section and re.match(r"^database\s*=", stripped):
            lines[i] = f'database = "{provider.value}"'
            return "\n".join(lines) + "\n"
    raise VoltError("Could not find `database` in the [tool.volt] table of pyproject.toml.")


def _set_driver_dependency(content: str, provider: DbProvider) -> str:
    match = _DEPENDENCIES_BLOCK.search(content)
    if match is None:
        raise VoltError("Could not find the [project] dependencies list in pyproject.toml.")

    body_lines = [
        line
        for line in match.group("body").splitlines()
        if line.strip() and not any(line.strip().strip('",').startswith(pkg) for pkg in _DRIVER_PACKAGES)
    ]
    if provider.driver_dependency:
        body_lines.append(f'    "{provider.driver_dependency}",')

    new_block = "dependencies = [\n" + "\n".join(body_lines) + "\n]"
    return content[: match.start()] + new_block + content[match.end() :]


def read_env_value(path: Path, key: str) -> str | None:
    """Value of `key` in a dotenv file (quotes stripped), or None."""

    if not path.is_file():
        return None
    for line in path.read_text(encoding="utf-8").splitlines():
        name, sep, value = line.partition("=")
        if sep and name.strip() == key:
            return value.strip().strip("'\"")
    return None


def _set_env_value(path: Path, key: str, value: str) -> None:
    lines = path.read_text(encoding="utf-8").splitlines() if path.exists() else []
    replaced = False
    for i, line in enumerate(lines):
        if line.split("=", 1)[0].strip() == key:
            lines[i] = f"{key}={value}"
            replaced = True
    if not replaced:
        lines.append(f"{key}={value}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")


def switch_provider(
    context: ProjectContext,
    provider: DbProvider,
    *,
    settings: VoltSettings | None = None,
) -> list[FileAction]:
    """Point the project at `provider`. Raises `VoltError` when pyproject cannot be edited."""

    settings = settings or VoltSettings()
    layout = context.layout

    try:
        content = layout.pyproject.read_text(encoding="utf-8")
        content = _set_tool_volt_database(content, provider)
        content = _set_driver_dependency(content, provider)
        layout.pyproject.write_text(content, encoding="utf-8")
        _set_env_value(layout.env_file, "DATABASE_URL", database_url_for(context, provider, settings))
    except OSError as exc:
        raise VoltError(f"Failed to update project files: {exc}") from exc

    return [
        FileAction(kind=FileActionKind.MODIFIED, path=layout.relative(layout.pyproject)),
        FileAction(kind=FileActionKind.MODIFIED, path=layout.relative(layout.env_file)),
    ]
