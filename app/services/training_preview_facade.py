from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from training import RefreshBus, RefreshEvent, SqliteTrainingDataSource, TrainingPreviewCache

logger = logging.getLogger(__name__)


@dataclass
class TrainingPreviewContext:
    """Application-owned training preview objects (one per server process)."""

    db_path: str
    source: SqliteTrainingDataSource
    cache: TrainingPreviewCache
    refresh_bus: RefreshBus


def build_training_preview_context(db_path: str | Path) -> TrainingPreviewContext:
    source = SqliteTrainingDataSource(db_path)
    source.init_db()
    cache = TrainingPreviewCache(source)
    bus = RefreshBus()

    def _on_refresh(event: RefreshEvent) -> None:
        cache.refresh(discard_planned_lineups=event.discard_planned_lineups)

    bus.subscribe(_on_refresh)
    return TrainingPreviewContext(db_path=str(db_path), source=source, cache=cache, refresh_bus=bus)


def try_notify_refresh(ctx: TrainingPreviewContext, *, reason: str, discard_planned_lineups: bool = False) -> None:
    """Best-effort refresh notification. Never fails the API call.

    Policy: DB SSOT write APIs should succeed even if derived cache refresh fails.
    """
    try:
        ctx.refresh_bus.notify(reason, discard_planned_lineups=discard_planned_lineups)
    except Exception:
        logger.warning("Training preview refresh failed (%s)", reason, exc_info=True)
