"""Test factories: call-counting data source fake and small builders."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Iterable, Mapping, Optional, Tuple

from training.mapping import classify_training_type
from training.types import (
    LineupAssignment,
    MatchRef,
    MatchStatistics,
    TrainingTypeClassification,
    TrainingWindow,
)


class FakeTrainingDataSource:
    """TrainingDataSource fake that counts every collaborator call."""

    def __init__(
        self,
        *,
        season_week: Tuple[int, int] = (10, 5),
        future_trainings: Optional[Mapping[Tuple[int, int], int]] = None,
        window: Optional[TrainingWindow] = None,
        classification: Optional[TrainingTypeClassification] = None,
        stats: Optional[Mapping[int, MatchStatistics]] = None,
        lineups: Optional[Mapping[int, LineupAssignment]] = None,
        discard_error: Optional[Exception] = None,
    ):
        self.season_week = season_week
        self.future_trainings: Dict[Tuple[int, int], int] = dict(future_trainings or {})
        self.window = window
        self.classification = classification
        self.stats: Dict[int, MatchStatistics] = dict(stats or {})
        self.lineups: Dict[int, LineupAssignment] = dict(lineups or {})
        self.discard_error = discard_error
        self.calls: Counter = Counter()
        self.next_week_requests: list = []

    def resolve_current_season_and_week(self):
        self.calls["season_week"] += 1
        return self.season_week

    def resolve_next_training_week_id(self, season, week):
        self.calls["next_week"] += 1
        self.next_week_requests.append((season, week))
        return self.future_trainings.get((season, week))

    def resolve_last_completed_training_window(self):
        self.calls["window"] += 1
        return self.window

    def classify_training_type(self, training_type_id):
        self.calls["classify"] += 1
        if self.classification is not None:
            return self.classification
        return classify_training_type(training_type_id)

    def load_finished_match_statistics(self, match):
        self.calls["stats"] += 1
        return self.stats.get(match.match_id) or MatchStatistics(match_id=match.match_id)

    def load_upcoming_lineup_assignment(self, match):
        self.calls["lineup"] += 1
        return self.lineups.get(match.match_id)

    def discard_planned_lineup_artifacts(self):
        self.calls["discard"] += 1
        if self.discard_error is not None:
            raise self.discard_error


def finished(match_id: int, kickoff: Optional[str] = None) -> MatchRef:
    return MatchRef(match_id=match_id, match_type=1, status="FINISHED", kickoff=kickoff)


def upcoming(match_id: int, kickoff: Optional[str] = None) -> MatchRef:
    return MatchRef(match_id=match_id, match_type=1, status="UPCOMING", kickoff=kickoff)


def stats(match_id: int, rows: Iterable[Tuple[int, int, int]]) -> MatchStatistics:
    return MatchStatistics.from_rows(match_id, rows)


def lineup(match_id: int, positions: Mapping[int, int]) -> LineupAssignment:
    return LineupAssignment(match_id=match_id, match_type=1, positions=dict(positions))
