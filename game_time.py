from __future__ import annotations

from typing import Any, Tuple

# Weeks per season. The week after the last one is week 1 of the next season.
SEASON_LENGTH_WEEKS: int = 16


def require_season_week(season: Any, week: Any, *, season_length: int = SEASON_LENGTH_WEEKS) -> Tuple[int, int]:
    """
    Ensure (season, week) is a valid in-game calendar position and return it as ints.
    Fail-loud. Never falls back to the OS clock.
    """
    try:
        s = int(season)
        w = int(week)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"Invalid season/week: {season!r}/{week!r}") from exc
    if s <= 0:
        raise ValueError(f"Invalid season: {season!r}")
    if not 1 <= w <= int(season_length):
        raise ValueError(f"Invalid week: {week!r} (1..{int(season_length)})")
    return s, w


def next_season_week(season: Any, week: Any, *, season_length: int = SEASON_LENGTH_WEEKS) -> Tuple[int, int]:
    """
    Calendar position of the following week.
    The last week of a season rolls over to week 1 of the next season.
    """
    s, w = require_season_week(season, week, season_length=season_length)
    if w == int(season_length):
        return s + 1, 1
    return s, w + 1


def week_key(season: Any, week: Any) -> str:
    # e.g. "S12W03"
    s, w = int(season), int(week)
    return f"S{s:02d}W{w:02d}"
