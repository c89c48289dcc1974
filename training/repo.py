from __future__ import annotations

"""DB access layer for the weekly training preview.

This module is intentionally *pure DB I/O*:
- no imports from training.service (avoid circular dependencies)
- no business logic besides defensive JSON encoding/decoding
"""

import json
import sqlite3
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple


def _json_dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"), sort_keys=True, default=str)


def _json_loads(value: Any, default: Any) -> Any:
    if value is None:
        return default
    if isinstance(value, (dict, list)):
        return value
    try:
        return json.loads(value)
    except Exception:
        return default


# -----------------------------------------------------------------------------
# Training weeks
# -----------------------------------------------------------------------------


def upsert_training_week(
    cur: sqlite3.Cursor,
    *,
    season: int,
    week: int,
    training_type: int,
    now: str,
) -> None:
    cur.execute(
        """
        INSERT INTO training_weeks(season, week, training_type, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(season, week) DO UPDATE SET
            training_type=excluded.training_type,
            updated_at=excluded.updated_at;
        """,
        (int(season), int(week), int(training_type), str(now), str(now)),
    )


def get_last_training_week(
    cur: sqlite3.Cursor,
    *,
    season: int,
    week: int,
) -> Optional[Dict[str, int]]:
    """Latest training week at or before (season, week)."""
    row = cur.execute(
        """
        SELECT season, week, training_type
        FROM training_weeks
        WHERE season < ? OR (season = ? AND week <= ?)
        ORDER BY season DESC, week DESC
        LIMIT 1;
        """,
        (int(season), int(season), int(week)),
    ).fetchone()
    if not row:
        return None
    return {"season": int(row[0]), "week": int(row[1]), "training_type": int(row[2])}


def upsert_future_training(
    cur: sqlite3.Cursor,
    *,
    season: int,
    week: int,
    training_type: int,
    now: str,
) -> None:
    cur.execute(
        """
        INSERT INTO future_trainings(season, week, training_type, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(season, week) DO UPDATE SET
            training_type=excluded.training_type,
            updated_at=excluded.updated_at;
        """,
        (int(season), int(week), int(training_type), str(now), str(now)),
    )


def get_future_training(cur: sqlite3.Cursor, *, season: int, week: int) -> Optional[int]:
    row = cur.execute(
        "SELECT training_type FROM future_trainings WHERE season=? AND week=?;",
        (int(season), int(week)),
    ).fetchone()
    if not row:
        return None
    return int(row[0])


# -----------------------------------------------------------------------------
# Matches
# -----------------------------------------------------------------------------


def upsert_match(
    cur: sqlite3.Cursor,
    *,
    match_id: int,
    match_type: int,
    season: int,
    week: int,
    status: str,
    kickoff: Optional[str],
    now: str,
) -> None:
    cur.execute(
        """
        INSERT INTO matches(match_id, match_type, season, week, kickoff, status, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
        ON CONFLICT(match_id) DO UPDATE SET
            match_type=excluded.match_type,
            season=excluded.season,
            week=excluded.week,
            kickoff=excluded.kickoff,
            status=excluded.status,
            updated_at=excluded.updated_at;
        """,
        (
            int(match_id),
            int(match_type),
            int(season),
            int(week),
            str(kickoff) if kickoff else None,
            str(status).upper(),
            str(now),
            str(now),
        ),
    )


def list_matches_for_week(cur: sqlite3.Cursor, *, season: int, week: int) -> List[Dict[str, Any]]:
    """Matches of a training week in chronological order (kickoff, then match_id)."""
    rows = cur.execute(
        """
        SELECT match_id, match_type, kickoff, status
        FROM matches
        WHERE season=? AND week=?
        ORDER BY kickoff IS NULL, kickoff ASC, match_id ASC;
        """,
        (int(season), int(week)),
    ).fetchall()
    return [
        {
            "match_id": int(r[0]),
            "match_type": int(r[1]),
            "kickoff": r[2],
            "status": str(r[3] or "").upper(),
        }
        for r in rows
    ]


# -----------------------------------------------------------------------------
# Per-role minutes
# -----------------------------------------------------------------------------


def replace_match_player_minutes(
    cur: sqlite3.Cursor,
    *,
    match_id: int,
    rows: Iterable[Tuple[int, int, int]],
) -> int:
    """Replace all (player_id, role_id, minutes) rows of one match. Returns rows written."""
    cur.execute("DELETE FROM match_player_minutes WHERE match_id=?;", (int(match_id),))
    payload = [(int(match_id), int(pid), int(role_id), int(minutes)) for pid, role_id, minutes in rows]
    if payload:
        cur.executemany(
            """
            INSERT INTO match_player_minutes(match_id, player_id, role_id, minutes)
            VALUES (?, ?, ?, ?)
            ON CONFLICT(match_id, player_id, role_id) DO UPDATE SET
                minutes=match_player_minutes.minutes + excluded.minutes;
            """,
            payload,
        )
    return len(payload)


def list_match_player_minutes(cur: sqlite3.Cursor, *, match_id: int) -> List[Tuple[int, int, int]]:
    rows = cur.execute(
        """
        SELECT player_id, role_id, minutes
        FROM match_player_minutes
        WHERE match_id=?
        ORDER BY player_id ASC, role_id ASC;
        """,
        (int(match_id),),
    ).fetchall()
    return [(int(r[0]), int(r[1]), int(r[2] or 0)) for r in rows]


# -----------------------------------------------------------------------------
# Planned lineups (match orders)
# -----------------------------------------------------------------------------


def upsert_match_order(
    cur: sqlite3.Cursor,
    *,
    match_id: int,
    match_type: int,
    positions: Mapping[int, int],
    now: str,
) -> None:
    lineup = {"positions": [{"player_id": int(p), "role_id": int(r)} for p, r in sorted(positions.items())]}
    cur.execute(
        """
        INSERT INTO match_orders(match_id, match_type, lineup_json, created_at, updated_at)
        VALUES (?, ?, ?, ?, ?)
        ON CONFLICT(match_id, match_type) DO UPDATE SET
            lineup_json=excluded.lineup_json,
            updated_at=excluded.updated_at;
        """,
        (int(match_id), int(match_type), _json_dumps(lineup), str(now), str(now)),
    )


def get_match_order(cur: sqlite3.Cursor, *, match_id: int, match_type: int) -> Optional[Dict[int, int]]:
    """Return positions[player_id] = role_id, or None when no lineup was saved."""
    row = cur.execute(
        "SELECT lineup_json FROM match_orders WHERE match_id=? AND match_type=?;",
        (int(match_id), int(match_type)),
    ).fetchone()
    if not row:
        return None
    lineup = _json_loads(row[0], default={})
    if not isinstance(lineup, Mapping):
        return {}
    out: Dict[int, int] = {}
    for item in lineup.get("positions") or []:
        if not isinstance(item, Mapping):
            continue
        try:
            out[int(item["player_id"])] = int(item["role_id"])
        except Exception:
            continue
    return out


def delete_all_match_orders(cur: sqlite3.Cursor) -> int:
    cur.execute("DELETE FROM match_orders;")
    return int(cur.rowcount or 0)
