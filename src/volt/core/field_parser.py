"""Parses `name:type` field arguments for the generators."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from volt.core.domain.models import FieldDefinition
from volt.core.naming import to_pascal_case, to_snake_case, to_table_name


@dataclass(frozen=True)
class _FieldType:
    python_type: str
    column_type: str
    default: str | None
    test_value: str
    form_value: str
    input_type: str
    default_factory: str | None = None


_STRING = _FieldType("str", "sa.String(length=255)", '""', '"Test"', "Test", "text")
_TEXT = _FieldType("str", "sa.Text()", '""', '"Test"', "Test", "textarea")
_INT = _FieldType("int", "sa.Integer()", "0", "1", "1", "number")
_BOOL = _FieldType("bool", "sa.Boolean()", "False", "True", "on", "checkbox")
_DECIMAL = _FieldType(
    "Decimal", "sa.Numeric(precision=18, scale=2)", 'Decimal("0")', 'Decimal("1.00")', "1.00", "number"
)
_FLOAT = _FieldType("float", "sa.Float()", "0.0", "1.0", "1.0", "number")
_DATETIME = _FieldType(
    "datetime",
    "sa.DateTime(timezone=True)",
    None,
    "datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)",
    "2024-01-01T12:00",
    "datetime-local",
    default_factory="utcnow",
)
_DATE = _FieldType(
    "date", "sa.Date()", None, "date(2024, 1, 1)", "2024-01-01", "date", default_factory="date.today"
)

TYPE_MAPPINGS: dict[str, _FieldType] = {
    "string": _STRING,
    "str": _STRING,
    "text": _TEXT,
    "int": _INT,
    "integer": _INT,
    "bool": _BOOL,
    "boolean": _BOOL,
    "decimal": _DECIMAL,
    "float": _FLOAT,
    "datetime": _DATETIME,
    "date": _DATE,
    "references": _INT,
}


def parse_fields(
    field_args: Sequence[str],
    *,
    warn: Callable[[str], None] | None = None,
) -> list[FieldDefinition]:
    """Parse CLI arguments such as `title:string`, `age:int`, `author:references`.

    Missing types default to `string`. Unknown types are reported through
    `warn` and also fall back to `string`.
    """

    fields: list[FieldDefinition] = []
    for arg in field_args:
        raw_name, _, raw_type = arg.partition(":")
        name = to_snake_case(raw_name.strip())
        raw_type = (raw_type.strip() or "string").lower()

        spec = TYPE_MAPPINGS.get(raw_type)
        if spec is None:
            if warn:
                warn(f"Unknown field type '{raw_type}' for '{name}', defaulting to string.")
            spec = _STRING
            raw_type = "string"

        is_reference = raw_type == "references"
        referenced_model = to_pascal_case(name) if is_reference else None

        fields.append(
            FieldDefinition(
                name=f"{name}_id" if is_reference else name,
                raw_type=raw_type,
                python_type=spec.python_type,
                column_type=spec.column_type,
                default=None if is_reference else spec.default,
                default_factory=spec.default_factory,
                test_value=spec.test_value,
                form_value=spec.form_value,
                input_type=spec.input_type,
                nullable=spec is _STRING or spec is _TEXT,
                is_reference=is_reference,
                referenced_model=referenced_model,
                referenced_table=to_table_name(referenced_model) if referenced_model else None,
            )
        )
    return fields


def uses_type(fields: Sequence[FieldDefinition], python_type: str) -> bool:
    """Whether any field needs an import for `python_type` (Decimal, datetime, date)."""

    return any(f.python_type == python_type for f in fields)
