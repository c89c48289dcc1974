# db_schema/training.py
"""SQLite SSOT schema: weekly training.

This module introduces:
  - training_weeks: the training regimen applied at the end of a (season, week)
  - future_trainings: planned regimen for upcoming weeks

Notes
-----
* A training week is "completed" once the calendar reached its (season, week).
* training_type is the integer regimen id (see training.config TRAINING_*).
"""

from __future__ import annotations


def ddl(*, now: str, schema_version: str) -> str:  # noqa: ARG001
    """Return DDL SQL for training tables (as a single executescript string)."""

    return f"""

                CREATE TABLE IF NOT EXISTS training_weeks (
                    season INTEGER NOT NULL,
                    week INTEGER NOT NULL,
                    training_type INTEGER NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (season, week)
                );

                CREATE TABLE IF NOT EXISTS future_trainings (
                    season INTEGER NOT NULL,
                    week INTEGER NOT NULL,
                    training_type INTEGER NOT NULL,
                    created_at TEXT NOT NULL,
                    updated_at TEXT NOT NULL,
                    PRIMARY KEY (season, week)
                );
"""
