# db_schema/matches.py
"""SQLite SSOT schema: matches, per-role minutes and planned lineups.

This module introduces:
  - matches: one row per match of the user team, tagged with its training week
  - match_player_minutes: per (match, player, role) minutes of finished matches
  - match_orders: planned lineups for upcoming matches (lineup_json)

Notes
-----
* match_orders rows are planning artifacts: they are dropped whenever the
  training preview is invalidated for a new week.
* kickoff is stored as an ISO timestamp string; window order is (kickoff, match_id).
"""

from __future__ import annotations


def ddl(*, now: str, schema_version: str) -> str:  # noqa: ARG001
    """Return DDL SQL for match tables (as a single executescript string)."""

    return f"""
                CREATE TABLE IF NOT EXISTS matches (
                    match_id INTEGER PRIMARY KEY,
                    match_type INTEGER NOT NULL,
                    season INTEGER NOT NULL,
                    week INTEGER NOT NULL,
                    kickoff TEXT,
                    status TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );

                CREATE INDEX IF NOT EXISTS idx_matches_season_week
                    ON matches(season, week);

                CREATE TABLE IF NOT EXISTS match_player_minutes (
                    match_id INTEGER NOT NULL,
                    player_id INTEGER NOT NULL,
                    role_id INTEGER NOT NULL,
                    minutes INTEGER NOT NULL,
                    PRIMARY KEY (match_id, player_id, role_id),
                    FOREIGN KEY(match_id) REFERENCES matches(match_id) ON DELETE CASCADE
                );

                CREATE TABLE IF NOT EXISTS match_orders (
                    match_id INTEGER NOT NULL,
                    match_type INTEGER NOT NULL,
                    lineup_json TEXT NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (match_id, match_type)
                );
"""
