"""Alembic revision bookkeeping for generated migrations.

Generated revisions use a UTC timestamp as revision id and chain onto the
current head, so `alembic upgrade head` applies them in creation order.
"""

from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone
from pathlib import Path

_REVISION = re.compile(r"""^revision\s*(?::[^=]+)?=\s*["']([^"']+)["']""", re.MULTILINE)
_DOWN_REVISION = re.compile(r"""^down_revision\s*(?::[^=]+)?=\s*(.+)$""", re.MULTILINE)
_QUOTED = re.compile(r"""["']([^"']+)["']""")

TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def _scan(versions_dir: Path) -> tuple[set[str], set[str]]:
    revisions: set[str] = set()
    referenced: set[str] = set()
    if not versions_dir.is_dir():
        return revisions, referenced

    for path in versions_dir.glob("*.py"):
        text = path.read_text(encoding="utf-8")
        match = _REVISION.search(text)
        if match is None:
            continue
        revisions.add(match.group(1))
        down = _DOWN_REVISION.search(text)
        if down is not None:
            referenced.update(_QUOTED.findall(down.group(1)))
    return revisions, referenced


def current_head(versions_dir: Path) -> str | None:
    """Latest revision nothing else points at, or None for an empty history.

    With several heads (merged branches not yet resolved) the newest id wins.
    """

    revisions, referenced = _scan(versions_dir)
    heads = sorted(revisions - referenced)
    return heads[-1] if heads else None


def next_revision_id(versions_dir: Path, *, now: datetime | None = None) -> str:
    """Timestamp id, bumped by one second until it is unused in `versions_dir`."""

    moment = now or datetime.now(timezone.utc)
    revisions, _ = _scan(versions_dir)
    existing_prefixes = {p.name.split("_", 1)[0] for p in versions_dir.glob("*.py")} if versions_dir.is_dir() else set()

    candidate = moment.strftime(TIMESTAMP_FORMAT)
    while candidate in revisions or candidate in existing_prefixes:
        moment += timedelta(seconds=1)
        candidate = moment.strftime(TIMESTAMP_FORMAT)
    return candidate


def create_migration_filename(revision: str, table_name: str) -> str:
    return f"{revision}_create_{table_name}.py"


def find_create_migrations(versions_dir: Path, table_name: str) -> list[Path]:
    if not versions_dir.is_dir():
        return []
    return sorted(versions_dir.glob(f"*_create_{table_name}.py"))
