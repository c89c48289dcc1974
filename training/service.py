from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import game_time

from . import config as t_cfg
from .ports import TrainingDataSource
from .preview_engine import compute_training_preview
from .types import ResolvedMatchWindow, TrainingPreviewRecord
from .window import MatchWindowResolver


logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class NextTrainingWeek:
    season: int
    week: int
    training_id: Optional[int]


@dataclass(slots=True)
class _EpochState:
    """Everything derived during one cache epoch. Replaced wholesale on refresh."""

    epoch: int
    window: Optional[ResolvedMatchWindow] = None
    next_week: Optional[NextTrainingWeek] = None
    records: Dict[int, TrainingPreviewRecord] = field(default_factory=dict)


class TrainingPreviewCache:
    """Weekly training preview per roster member, computed at most once per epoch.

    The owning application constructs one instance, keeps it on its context
    object and calls ``refresh()`` whenever match or lineup data may have changed
    (e.g. a new week was downloaded, a lineup was saved).

    Concurrency
    -----------
    Lazy state is initialised under a re-entrant lock (double-checked), so the
    match window is resolved at most once per epoch. A computation that started
    before a refresh never stores its result into the newer epoch.
    """

    def __init__(
        self,
        source: TrainingDataSource,
        *,
        season_length_weeks: int = t_cfg.SEASON_LENGTH_WEEKS,
    ):
        self._source = source
        self._resolver = MatchWindowResolver(source)
        self._season_length = int(season_length_weeks)
        self._lock = threading.RLock()
        self._state = _EpochState(epoch=0)

    @property
    def epoch(self) -> int:
        return self._state.epoch

    def cached_player_ids(self) -> List[int]:
        with self._lock:
            return list(self._state.records.keys())

    # ------------------------------------------------------------------
    # Previews
    # ------------------------------------------------------------------

    def get_preview(self, player_id: int) -> TrainingPreviewRecord:
        """Return the training preview of one roster member."""
        pid = int(player_id)
        state = self._state
        cached = state.records.get(pid)
        if cached is not None:
            return cached

        with self._lock:
            state = self._state
            cached = state.records.get(pid)
            if cached is not None:
                return cached
            window = self._window_for(state)
            record = compute_training_preview(pid, window)
            if state is self._state:
                state.records[pid] = record
            return record

    def get_previews(self, player_ids: Iterable[int]) -> Dict[int, TrainingPreviewRecord]:
        """Bulk variant of get_preview (order-preserving, de-duplicated)."""
        out: Dict[int, TrainingPreviewRecord] = {}
        for raw in player_ids:
            pid = int(raw)
            if pid in out:
                continue
            out[pid] = self.get_preview(pid)
        return out

    def get_match_window(self) -> ResolvedMatchWindow:
        state = self._state
        if state.window is not None:
            return state.window
        with self._lock:
            return self._window_for(self._state)

    def _window_for(self, state: _EpochState) -> ResolvedMatchWindow:
        # Caller holds the lock.
        if state.window is None:
            state.window = self._resolver.resolve()
            logger.debug(
                "TRAINING_PREVIEW_WINDOW epoch=%s type=%s finished=%d planned=%d",
                state.epoch,
                state.window.classification.training_type_id,
                len(state.window.match_statistics),
                len(state.window.lineup_assignments),
            )
        return state.window

    # ------------------------------------------------------------------
    # Next training week
    # ------------------------------------------------------------------

    def get_next_training_week(self) -> Optional[int]:
        """Training id planned for the week after the current one (None = unknown)."""
        return self.get_next_training_week_info().training_id

    def get_next_training_week_info(self) -> NextTrainingWeek:
        state = self._state
        if state.next_week is not None:
            return state.next_week
        with self._lock:
            state = self._state
            if state.next_week is None:
                season, week = self._source.resolve_current_season_and_week()
                n_season, n_week = game_time.next_season_week(season, week, season_length=self._season_length)
                training_id = self._source.resolve_next_training_week_id(n_season, n_week)
                state.next_week = NextTrainingWeek(
                    season=n_season,
                    week=n_week,
                    training_id=None if training_id is None else int(training_id),
                )
                logger.debug(
                    "TRAINING_PREVIEW_NEXT_WEEK epoch=%s week=%s training_id=%s",
                    state.epoch,
                    game_time.week_key(n_season, n_week),
                    training_id,
                )
            return state.next_week

    # ------------------------------------------------------------------
    # Invalidation
    # ------------------------------------------------------------------

    def refresh(self, *, discard_planned_lineups: bool = True) -> int:
        """Drop all derived state and start a new epoch. Returns the new epoch.

        Planned lineup artifacts are discarded through the data source on a
        best-effort basis: failures are logged, never raised. The discard runs
        before the new epoch is published, so no reader resolves it from
        lineups that are about to be deleted.
        """
        with self._lock:
            old = self._state
            new_epoch = old.epoch + 1
            if discard_planned_lineups:
                try:
                    self._source.discard_planned_lineup_artifacts()
                except Exception:
                    logger.warning("TRAINING_PREVIEW_DISCARD_LINEUPS_FAILED epoch=%s", new_epoch, exc_info=True)
            self._state = _EpochState(epoch=new_epoch)

        logger.info(
            "TRAINING_PREVIEW_REFRESH epoch=%s dropped_records=%d",
            new_epoch,
            len(old.records),
        )
        return new_epoch

    def snapshot(self) -> Tuple[int, Dict[int, TrainingPreviewRecord]]:
        """(epoch, records) copy for debugging / UI."""
        with self._lock:
            return self._state.epoch, dict(self._state.records)
