"""Volt CLI configuration.

Why here:
- Centralises environment variables (pydantic-settings) so commands and
  adapters read the same values.
- Lets users keep passwords and certificate paths in a per-user `.env`
  instead of each project.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from volt.core.domain.providers import DbProvider


def get_user_config_dir() -> Path:
    """Per-user configuration directory (cross-platform, no extra dependencies)."""

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "volt"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "volt"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "volt"
    return Path.home() / ".config" / "volt"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


class VoltSettings(BaseSettings):
    """Settings shared by every `volt` command.

    Precedence: process environment, then `./.env`, then the user config `.env`.
    """

    model_config = SettingsConfigDict(
        env_prefix="VOLT_",
        extra="ignore",
        case_sensitive=False,
        env_file=(str(get_user_env_file()), ".env"),
        env_file_encoding="utf-8",
    )

    default_database: DbProvider = Field(
        default=DbProvider.SQLITE,
        description="Provider used by `volt new` when --database is not given.",
    )

    server_host: str = Field(
        default="127.0.0.1",
        min_length=1,
        description="Host the development server binds to.",
    )
    server_port: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Default development server port.",
    )
    ssl_keyfile: Path | None = Field(
        default=None,
        description="Private key used by `volt server --https`.",
    )
    ssl_certfile: Path | None = Field(
        default=None,
        description="Certificate used by `volt server --https`.",
    )

    postgres_password: str = Field(
        default="volt_dev",
        min_length=1,
        description="Password for the development PostgreSQL container.",
    )
    sqlserver_password: str = Field(
        default="Volt_Dev123!",
        min_length=8,
        description="SA password for the development SQL Server container.",
    )

    docker_ready_attempts: int = Field(
        default=30,
        ge=1,
        le=600,
        description="Readiness probes before giving up on a database container.",
    )
    docker_ready_delay_seconds: float = Field(
        default=1.0,
        ge=0,
        description="Delay between readiness probes (seconds).",
    )

    python_executable: str = Field(
        default_factory=lambda: sys.executable,
        min_length=1,
        description="Interpreter used for pip, uvicorn, seeds and the console.",
    )
