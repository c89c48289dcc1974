# league_repo.py
# Developer note:
# - SQLite DB is the single source of truth (SSOT) for persisted league data (tables managed in db_schema/).
# - Derived data (training previews) is never persisted; it lives in memory (see training.service).
# - player_id, match_id and role ids are integers.
"""
LeagueRepository: persisted-data SSOT (SQLite)

Usage (CLI):
  python league_repo.py init --db <db_path>
  python league_repo.py set_calendar --db <db_path> --season 12 --week 3
  python league_repo.py show_calendar --db <db_path>

Python:
  from league_repo import LeagueRepo
  with LeagueRepo("<db_path>") as repo:
      repo.init_db()
      season, week = repo.get_calendar()
"""

from __future__ import annotations

import argparse
import contextlib
import datetime as _dt
import logging
import sqlite3
from pathlib import Path
from typing import Optional, Tuple

import game_time

SCHEMA_VERSION = "training-preview-1"

logger = logging.getLogger(__name__)


def utc_now_iso() -> str:
    return _dt.datetime.now(_dt.timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


class LeagueRepo:
    def __init__(self, db_path: str | Path):
        self.db_path = str(db_path)
        self._conn = sqlite3.connect(self.db_path)
        self._conn.row_factory = sqlite3.Row
        self._conn.execute("PRAGMA foreign_keys = ON;")
        # Nested transaction support (SAVEPOINT) for callers that compose repo methods.
        # (SQLite raises if BEGIN is issued while a transaction is already active.)
        self._savepoint_seq = 0

    def close(self) -> None:
        try:
            self._conn.close()
        except Exception:
            logger.debug("LEAGUE_REPO_CLOSE_FAILED db=%s", self.db_path, exc_info=True)

    @contextlib.contextmanager
    def transaction(self):
        """
        Atomic transaction helper.

        Supports nesting via SAVEPOINT:
        - outermost: BEGIN ... COMMIT/ROLLBACK
        - nested: SAVEPOINT ... RELEASE (or ROLLBACK TO + RELEASE on error)
        """
        cur = self._conn.cursor()
        nested = bool(getattr(self._conn, "in_transaction", False))
        sp_name = None
        try:
            if nested:
                self._savepoint_seq += 1
                sp_name = f"sp_{self._savepoint_seq}"
                cur.execute(f"SAVEPOINT {sp_name};")
            else:
                self._conn.execute("BEGIN;")

            yield cur

            if nested and sp_name:
                cur.execute(f"RELEASE SAVEPOINT {sp_name};")
            else:
                self._conn.commit()
        except Exception:
            if nested and sp_name:
                # Roll back to the savepoint only; the outer transaction decides for itself.
                try:
                    cur.execute(f"ROLLBACK TO SAVEPOINT {sp_name};")
                finally:
                    cur.execute(f"RELEASE SAVEPOINT {sp_name};")
            else:
                self._conn.rollback()
            raise
        finally:
            cur.close()

    # ------------------------
    # Schema
    # ------------------------

    def init_db(self) -> None:
        """Apply SQLite schema (DDL) via db_schema."""
        from db_schema import apply_schema

        with self.transaction() as cur:
            apply_schema(
                cur,
                now=utc_now_iso(),
                schema_version=SCHEMA_VERSION,
            )

    # ------------------------
    # Calendar
    # ------------------------

    def get_calendar(self) -> Optional[Tuple[int, int]]:
        """Return (season, week), or None when the calendar was never set."""
        row = self._conn.execute("SELECT season, week FROM league_calendar WHERE id=1;").fetchone()
        if not row:
            return None
        return (int(row["season"]), int(row["week"]))

    def set_calendar(self, season: int, week: int) -> Tuple[int, int]:
        s, w = game_time.require_season_week(season, week)
        with self.transaction() as cur:
            cur.execute(
                """
                INSERT INTO league_calendar(id, season, week, updated_at)
                VALUES (1, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    season=excluded.season,
                    week=excluded.week,
                    updated_at=excluded.updated_at;
                """,
                (s, w, utc_now_iso()),
            )
        return (s, w)

    def __enter__(self) -> "LeagueRepo":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


# ----------------------------
# CLI
# ----------------------------

def _cmd_init(args) -> None:
    with LeagueRepo(args.db) as repo:
        repo.init_db()
    print(f"OK: initialized {args.db}")


def _cmd_set_calendar(args) -> None:
    with LeagueRepo(args.db) as repo:
        repo.init_db()
        season, week = repo.set_calendar(args.season, args.week)
    print(f"OK: calendar set to {game_time.week_key(season, week)}")


def _cmd_show_calendar(args) -> None:
    with LeagueRepo(args.db) as repo:
        repo.init_db()
        cal = repo.get_calendar()
    if cal is None:
        print("calendar not set")
        return
    print(game_time.week_key(*cal))


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="League SQLite repository tools")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("init", help="create tables")
    p.add_argument("--db", required=True)
    p.set_defaults(func=_cmd_init)

    p = sub.add_parser("set_calendar", help="set current season/week")
    p.add_argument("--db", required=True)
    p.add_argument("--season", type=int, required=True)
    p.add_argument("--week", type=int, required=True)
    p.set_defaults(func=_cmd_set_calendar)

    p = sub.add_parser("show_calendar", help="print current season/week")
    p.add_argument("--db", required=True)
    p.set_defaults(func=_cmd_show_calendar)

    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
