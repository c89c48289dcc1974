# db_schema/core.py
"""SQLite SSOT schema: league calendar.

This module introduces:
  - league_calendar (single row: current season + week)
  - meta (schema version)

Notes
-----
* Weeks are 1-based and bounded by training.config.SEASON_LENGTH_WEEKS.
* Other modules may assume league_calendar exists, so this module comes first.
"""

from __future__ import annotations


def ddl(*, now: str, schema_version: str) -> str:
    """Return DDL SQL for core tables (as a single executescript string)."""

    return f"""
                CREATE TABLE IF NOT EXISTS meta (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                );

                INSERT OR IGNORE INTO meta(key, value) VALUES ('schema_version', '{schema_version}');
                INSERT OR IGNORE INTO meta(key, value) VALUES ('created_at', '{now}');

                CREATE TABLE IF NOT EXISTS league_calendar (
                    id INTEGER PRIMARY KEY CHECK (id = 1),
                    season INTEGER NOT NULL,
                    week INTEGER NOT NULL,
                    updated_at TEXT NOT NULL
                );
"""
