# db_schema/registry.py
"""Schema registry + applier.

Applies every module's DDL in one executescript, in module order.
"""

from __future__ import annotations

import sqlite3
from types import ModuleType
from typing import Iterable


def apply_all(
    cur: sqlite3.Cursor,
    *,
    modules: Iterable[ModuleType],
    now: str,
    schema_version: str,
) -> None:
    """Apply schema modules (DDL only, idempotent)."""
    ddl_parts = [m.ddl(now=now, schema_version=schema_version) for m in modules]
    cur.executescript("\n\n".join(ddl_parts))
