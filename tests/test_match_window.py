from __future__ import annotations

from factories import FakeTrainingDataSource, finished, lineup, stats, upcoming
from training import config as t_cfg
from training.types import EMPTY_WINDOW, MatchRef, TrainingWindow
from training.window import MatchWindowResolver


def test_missing_training_week_resolves_to_empty_window():
    src = FakeTrainingDataSource(window=None)
    window = MatchWindowResolver(src).resolve()
    assert window is EMPTY_WINDOW
    assert window.is_empty
    assert window.classification.primary_positions is None


def test_matches_are_partitioned_by_status_in_source_order():
    matches = (
        finished(3),
        upcoming(4),
        MatchRef(match_id=5, match_type=1, status="CANCELLED"),
        finished(1),
        upcoming(6),
    )
    src = FakeTrainingDataSource(
        window=TrainingWindow(training_type_id=t_cfg.TRAINING_DEFENDING, season=2, week=9, matches=matches),
        stats={3: stats(3, [(1, 101, 90)]), 1: stats(1, [(1, 102, 90)])},
        lineups={4: lineup(4, {1: 101})},
    )

    window = MatchWindowResolver(src).resolve()

    assert [ms.match_id for ms in window.match_statistics] == [3, 1]
    # Match 6 has no recorded lineup.
    assert [lu.match_id for lu in window.lineup_assignments] == [4]
    assert window.classification.training_type_id == t_cfg.TRAINING_DEFENDING
    assert src.calls["stats"] == 2
    assert src.calls["lineup"] == 2
    assert src.calls["classify"] == 1


def test_lower_case_status_is_accepted():
    src = FakeTrainingDataSource(
        window=TrainingWindow(
            training_type_id=t_cfg.TRAINING_SCORING,
            season=1,
            week=1,
            matches=(MatchRef(match_id=1, match_type=1, status="finished"),),
        ),
    )
    window = MatchWindowResolver(src).resolve()
    assert len(window.match_statistics) == 1
