"""Domain models (Pydantic v2).

These describe *what* Volt works with (fields, routes, project settings,
file changes), not *how* they are read or written.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from volt.core.domain.providers import DbProvider


class FieldDefinition(BaseModel):
    """A parsed `name:type` argument, ready to feed templates.

    One definition drives the model attribute, the migration column, the form
    input and the generated test value.
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1, description="snake_case attribute/column name.")
    raw_type: str = Field(..., min_length=1, description="Type as typed on the command line.")
    python_type: str = Field(..., description="Annotation used in the SQLModel class.")
    column_type: str = Field(..., description="SQLAlchemy type expression used in migrations.")
    default: str | None = Field(
        default=None,
        description="Python expression for the model default (None means required).",
    )
    default_factory: str | None = Field(
        default=None,
        description="Callable used as `default_factory` (dates).",
    )
    test_value: str = Field(..., description="Python literal used by generated tests.")
    form_value: str = Field(..., description="String posted by generated controller tests.")
    input_type: str = Field(default="text", description="HTML input type for forms.")
    nullable: bool = Field(default=False, description="Migration column nullability.")
    is_reference: bool = Field(default=False)
    referenced_model: str | None = Field(default=None, description="PascalCase model name.")
    referenced_table: str | None = Field(default=None)


class FileActionKind(str, Enum):
    CREATED = "create"
    MODIFIED = "modify"
    REMOVED = "remove"
    SKIPPED = "skip"


class FileAction(BaseModel):
    """A change (or a non-change) to a file, shown to the user as one line."""

    kind: FileActionKind
    path: str = Field(..., description="Path relative to the project root, '/' separated.")
    note: str | None = Field(default=None, description="Extra context, e.g. 'not found'.")


class RouteEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    method: str = Field(..., min_length=1)
    path: str = Field(..., min_length=1)
    action: str = Field(..., description="Controller#action label.")


class ModelInfo(BaseModel):
    """A model discovered in an existing project (AI context files)."""

    name: str
    table: str
    fields: list[str] = Field(default_factory=list)


class VoltProjectConfig(BaseModel):
    """The `[tool.volt]` table of a generated project's pyproject.toml."""

    model_config = ConfigDict(extra="ignore")

    package: str = Field(..., min_length=1, description="Importable package name.")
    app_name: str | None = Field(default=None, description="Display name (PascalCase).")
    database: DbProvider = Field(default=DbProvider.SQLITE)
    api: bool = Field(default=False, description="API-only project (no views).")
