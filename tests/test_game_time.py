from __future__ import annotations

import pytest

import game_time


def test_next_week_within_season():
    assert game_time.next_season_week(7, 1) == (7, 2)
    assert game_time.next_season_week(7, 15) == (7, 16)


def test_next_week_rolls_over_at_season_end():
    assert game_time.next_season_week(7, 16) == (8, 1)


def test_custom_season_length():
    assert game_time.next_season_week(1, 10, season_length=10) == (2, 1)


@pytest.mark.parametrize("season,week", [(0, 1), (3, 0), (3, 17), ("x", 2), (None, 1)])
def test_invalid_calendar_positions(season, week):
    with pytest.raises(ValueError):
        game_time.require_season_week(season, week)


def test_week_key():
    assert game_time.week_key(12, 3) == "S12W03"
