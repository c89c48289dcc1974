from __future__ import annotations

"""Collaborator interface consumed by the training preview cache.

Storage, the league calendar and training-type rules live outside this
package. The cache only talks to them through ``TrainingDataSource``; tests use
in-memory fakes, the application uses training.sqlite_source.
"""

from typing import Optional, Protocol, Tuple

from .types import LineupAssignment, MatchRef, MatchStatistics, TrainingTypeClassification, TrainingWindow


class TrainingDataSource(Protocol):
    def resolve_current_season_and_week(self) -> Tuple[int, int]:
        ...

    def resolve_next_training_week_id(self, season: int, week: int) -> Optional[int]:
        """Training id planned for (season, week), or None when unknown."""
        ...

    def resolve_last_completed_training_window(self) -> Optional[TrainingWindow]:
        ...

    def classify_training_type(self, training_type_id: int) -> TrainingTypeClassification:
        ...

    def load_finished_match_statistics(self, match: MatchRef) -> MatchStatistics:
        ...

    def load_upcoming_lineup_assignment(self, match: MatchRef) -> Optional[LineupAssignment]:
        ...

    def discard_planned_lineup_artifacts(self) -> None:
        ...
