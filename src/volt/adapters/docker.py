"""Development database containers (PostgreSQL / SQL Server) via the docker CLI."""

from __future__ import annotations

import re
import time
from dataclasses import dataclass

from volt.adapters import process_runner
from volt.core.config import VoltSettings
from volt.core.domain.providers import DbProvider
from volt.core.errors import VoltError

POSTGRES_IMAGE = "postgres:17"
SQLSERVER_IMAGE = "mcr.microsoft.com/mssql/server:2022-latest"
POSTGRES_USER = "postgres"

_VALID_CONTAINER_NAME = re.compile(r"^[a-z0-9][a-z0-9_.-]*$")


@dataclass(frozen=True)
class ContainerSpec:
    name: str
    provider: DbProvider
    run_args: list[str]


def container_prefix(package: str) -> str:
    return package.lower()


def container_filter(package: str) -> str:
    """`docker --filter` value matching only this project's containers."""

    return f"name=^{container_prefix(package)}_"


def container_name(package: str, provider: DbProvider) -> str:
    name = f"{container_prefix(package)}_{provider.value}_dev"
    if not _VALID_CONTAINER_NAME.match(name):
        raise VoltError(
            f"Cannot create a valid Docker container name from package '{package}'. "
            "The name must start with a letter or digit and contain only alphanumerics, '_', '.' or '-'."
        )
    return name


def build_container_spec(package: str, provider: DbProvider, settings: VoltSettings) -> ContainerSpec:
    name = container_name(package, provider)
    database = provider.database_name(package)

    if provider is DbProvider.POSTGRES:
        args = [
            "docker", "run", "-d", "--name", name,
            "-p", "5432:5432",
            "-e", f"POSTGRES_USER={POSTGRES_USER}",
            "-e", f"POSTGRES_PASSWORD={settings.postgres_password}",
            "-e", f"POSTGRES_DB={database}",
            POSTGRES_IMAGE,
        ]
    elif provider is DbProvider.SQLSERVER:
        args = [
            "docker", "run", "-d", "--name", name,
            "-p", "1433:1433",
            "-e", "ACCEPT_EULA=Y",
            "-e", f"MSSQL_SA_PASSWORD={settings.sqlserver_password}",
            SQLSERVER_IMAGE,
        ]
    else:
        raise VoltError("SQLite doesn't need Docker: it runs as a local file.")

    return ContainerSpec(name=name, provider=provider, run_args=args)


def find_running_container(name: str) -> str | None:
    code, output = process_runner.run_captured(["docker", "ps", "-q", "--filter", f"name=^{name}$"])
    return name if code == 0 and output.strip() else None


def find_project_container(package: str) -> str | None:
    code, output = process_runner.run_captured(
        ["docker", "ps", "--filter", container_filter(package), "--format", "{{.Names}}"]
    )
    if code != 0:
        return None
    prefix = f"{container_prefix(package)}_"
    names = [line.strip() for line in output.splitlines() if line.strip().startswith(prefix)]
    return names[0] if names else None


def _probe_ready(name: str, provider: DbProvider, settings: VoltSettings) -> bool:
    if provider is DbProvider.POSTGRES:
        code, _ = process_runner.run_captured(["docker", "exec", name, "pg_isready", "-U", POSTGRES_USER])
        return code == 0

    # The sqlcmd location changed between image releases.
    for tool, extra in (("/opt/mssql-tools/bin/sqlcmd", []), ("/opt/mssql-tools18/bin/sqlcmd", ["-C"])):
        code, _ = process_runner.run_captured(
            ["docker", "exec", name, tool, "-S", "localhost", "-U", "sa",
             "-P", settings.sqlserver_password, *extra, "-Q", "SELECT 1"]
        )
        if code == 0:
            return True
    return False


def wait_for_ready(name: str, provider: DbProvider, settings: VoltSettings) -> bool:
    for _ in range(settings.docker_ready_attempts):
        time.sleep(settings.docker_ready_delay_seconds)
        if _probe_ready(name, provider, settings):
            return True
    return False
