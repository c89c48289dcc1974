from __future__ import annotations

import logging
import threading

import pytest

from factories import FakeTrainingDataSource, finished, lineup, stats, upcoming
from training import config as t_cfg
from training.service import TrainingPreviewCache
from training.types import EMPTY_PREVIEW, TrainingWindow

PID = 11
INNER_MID = t_cfg.ROLE_LEFT_INNER_MIDFIELD
KEEPER = t_cfg.ROLE_KEEPER


def _source(**kwargs) -> FakeTrainingDataSource:
    window = TrainingWindow(
        training_type_id=t_cfg.TRAINING_PLAYMAKING,
        season=10,
        week=5,
        matches=(finished(1), upcoming(2)),
    )
    kwargs.setdefault("window", window)
    kwargs.setdefault("stats", {1: stats(1, [(PID, INNER_MID, 45)])})
    kwargs.setdefault("lineups", {2: lineup(2, {PID: INNER_MID, 12: KEEPER})})
    return FakeTrainingDataSource(**kwargs)


def test_no_completed_training_week_gives_empty_previews():
    src = FakeTrainingDataSource(window=None)
    cache = TrainingPreviewCache(src)
    assert cache.get_preview(1) == EMPTY_PREVIEW
    assert cache.get_preview(2) == EMPTY_PREVIEW
    assert src.calls["window"] == 1
    assert src.calls["classify"] == 0


def test_preview_is_memoized_within_epoch():
    src = _source()
    cache = TrainingPreviewCache(src)

    first = cache.get_preview(PID)
    second = cache.get_preview(PID)

    assert first is second
    assert first.full_training_minutes == 45
    assert first.full_future_training is True
    assert src.calls["window"] == 1
    assert src.calls["stats"] == 1
    assert src.calls["lineup"] == 1


def test_window_is_resolved_once_for_many_players():
    src = _source()
    cache = TrainingPreviewCache(src)
    previews = cache.get_previews([PID, 12, PID, 13])

    assert list(previews.keys()) == [PID, 12, 13]
    assert previews[12].estimated_stamina_risk is True
    assert previews[13] == EMPTY_PREVIEW
    assert src.calls["window"] == 1
    assert sorted(cache.cached_player_ids()) == [11, 12, 13]


def test_refresh_recomputes_from_collaborators():
    src = _source()
    cache = TrainingPreviewCache(src)
    before = cache.get_preview(PID)
    assert cache.epoch == 0

    src.stats[1] = stats(1, [(PID, INNER_MID, 80)])
    assert cache.refresh() == 1

    after = cache.get_preview(PID)
    assert after is not before
    assert after.full_training_minutes == 80
    assert src.calls["window"] == 2
    assert src.calls["stats"] == 2
    assert src.calls["discard"] == 1
    assert cache.cached_player_ids() == [PID]


def test_refresh_without_discard_keeps_planned_lineups():
    src = _source()
    cache = TrainingPreviewCache(src)
    cache.refresh(discard_planned_lineups=False)
    assert src.calls["discard"] == 0


def test_refresh_swallows_discard_failures(caplog):
    src = _source(discard_error=RuntimeError("db locked"))
    cache = TrainingPreviewCache(src)
    cache.get_preview(PID)

    with caplog.at_level(logging.WARNING, logger="training.service"):
        epoch = cache.refresh()

    assert epoch == 1
    assert cache.cached_player_ids() == []
    assert "TRAINING_PREVIEW_DISCARD_LINEUPS_FAILED" in caplog.text


def test_collaborator_failures_propagate_from_get_preview():
    class Broken(FakeTrainingDataSource):
        def resolve_last_completed_training_window(self):
            raise OSError("storage unavailable")

    cache = TrainingPreviewCache(Broken())
    with pytest.raises(OSError):
        cache.get_preview(PID)
    assert cache.cached_player_ids() == []


def test_next_training_week_increments_within_season():
    src = FakeTrainingDataSource(season_week=(10, 5), future_trainings={(10, 6): t_cfg.TRAINING_SCORING})
    cache = TrainingPreviewCache(src)
    assert cache.get_next_training_week() == t_cfg.TRAINING_SCORING
    assert src.next_week_requests == [(10, 6)]


def test_next_training_week_rolls_over_after_last_week():
    src = FakeTrainingDataSource(season_week=(10, 16), future_trainings={(11, 1): t_cfg.TRAINING_WINGER})
    cache = TrainingPreviewCache(src)
    assert cache.get_next_training_week() == t_cfg.TRAINING_WINGER
    info = cache.get_next_training_week_info()
    assert (info.season, info.week) == (11, 1)
    assert src.next_week_requests == [(11, 1)]


def test_next_training_week_respects_configured_season_length():
    src = FakeTrainingDataSource(season_week=(3, 14))
    cache = TrainingPreviewCache(src, season_length_weeks=14)
    cache.get_next_training_week()
    assert src.next_week_requests == [(4, 1)]


def test_next_training_week_unknown_is_none_and_memoized():
    src = FakeTrainingDataSource(season_week=(10, 5))
    cache = TrainingPreviewCache(src)
    assert cache.get_next_training_week() is None
    assert cache.get_next_training_week() is None
    assert src.calls["season_week"] == 1
    assert src.calls["next_week"] == 1

    cache.refresh()
    cache.get_next_training_week()
    assert src.calls["next_week"] == 2


def test_concurrent_readers_resolve_window_once():
    src = _source()
    cache = TrainingPreviewCache(src)
    barrier = threading.Barrier(8)

    def worker(pid):
        barrier.wait()
        cache.get_preview(pid)

    threads = [threading.Thread(target=worker, args=(pid,)) for pid in range(100, 108)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert src.calls["window"] == 1
    assert len(cache.cached_player_ids()) == 8


def test_snapshot_reports_epoch_and_records():
    cache = TrainingPreviewCache(_source())
    cache.get_preview(PID)
    epoch, records = cache.snapshot()
    assert epoch == 0
    assert list(records) == [PID]


def test_match_window_is_shared_with_previews():
    src = _source()
    cache = TrainingPreviewCache(src)
    window = cache.get_match_window()
    cache.get_preview(PID)

    assert cache.get_match_window() is window
    assert [ms.match_id for ms in window.match_statistics] == [1]
    assert src.calls["window"] == 1


def test_refresh_discards_lineups_before_readers_see_new_epoch():
    holder = {}

    class ReadsDuringDiscard(FakeTrainingDataSource):
        def discard_planned_lineup_artifacts(self):
            super().discard_planned_lineup_artifacts()
            holder["during"] = holder["cache"].get_preview(PID)
            self.lineups.clear()

    src = ReadsDuringDiscard(
        window=_source().window,
        stats={1: stats(1, [(PID, INNER_MID, 45)])},
        lineups={2: lineup(2, {PID: INNER_MID})},
    )
    cache = TrainingPreviewCache(src)
    holder["cache"] = cache
    assert cache.get_preview(PID).full_future_training is True

    cache.refresh()

    rec = cache.get_preview(PID)
    assert src.lineups == {}
    assert rec.full_future_training is False
    assert rec.full_training_minutes == 45


def test_reader_thread_waits_for_lineup_discard():
    results = {}

    class SlowDiscard(FakeTrainingDataSource):
        def discard_planned_lineup_artifacts(self):
            super().discard_planned_lineup_artifacts()
            reader = threading.Thread(target=lambda: results.setdefault("rec", cache.get_preview(PID)))
            reader.start()
            reader.join(timeout=0.2)
            results["blocked"] = reader.is_alive()
            results["reader"] = reader
            self.lineups.clear()

    src = SlowDiscard(
        window=_source().window,
        lineups={2: lineup(2, {PID: INNER_MID})},
    )
    cache = TrainingPreviewCache(src)

    cache.refresh()
    results["reader"].join()

    assert results["blocked"] is True
    assert results["rec"].full_future_training is False
    assert cache.epoch == 1
