from __future__ import annotations

import logging
from typing import List

from .ports import TrainingDataSource
from .types import (
    EMPTY_WINDOW,
    MATCH_FINISHED,
    MATCH_UPCOMING,
    LineupAssignment,
    MatchStatistics,
    ResolvedMatchWindow,
)

logger = logging.getLogger(__name__)


class MatchWindowResolver:
    """Resolve the match window of the last completed training week.

    Finished matches contribute statistics, upcoming matches contribute their
    planned lineup (when one was recorded). Match order is the order returned
    by the data source. Other statuses are skipped.
    """

    def __init__(self, source: TrainingDataSource):
        self._source = source

    def resolve(self) -> ResolvedMatchWindow:
        last = self._source.resolve_last_completed_training_window()
        if last is None:
            logger.debug("TRAINING_WINDOW_EMPTY no completed training week")
            return EMPTY_WINDOW

        classification = self._source.classify_training_type(int(last.training_type_id))

        stats: List[MatchStatistics] = []
        lineups: List[LineupAssignment] = []
        for match in last.matches:
            status = str(match.status or "").upper()
            if status == MATCH_FINISHED:
                stats.append(self._source.load_finished_match_statistics(match))
            elif status == MATCH_UPCOMING:
                lineup = self._source.load_upcoming_lineup_assignment(match)
                if lineup is not None:
                    lineups.append(lineup)

        logger.debug(
            "TRAINING_WINDOW_RESOLVED season=%s week=%s type=%s finished=%d planned=%d",
            last.season,
            last.week,
            last.training_type_id,
            len(stats),
            len(lineups),
        )
        return ResolvedMatchWindow(
            classification=classification,
            match_statistics=tuple(stats),
            lineup_assignments=tuple(lineups),
        )
