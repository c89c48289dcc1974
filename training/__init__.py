"""Weekly training preview subsystem.

This package implements:
  - A per-player training preview (full / partial training minutes, future
    training flags, stamina signals) for the current training week
  - An epoch-scoped cache over those previews (TrainingPreviewCache)
  - A SQLite-backed data source over the league DB

SSOT notes
---------
* Matches, per-role minutes and planned lineups live in SQLite tables created
  by db_schema.matches / db_schema.training.
* Previews are derived data and are never persisted.
"""

from .refresh import RefreshBus, RefreshEvent
from .service import NextTrainingWeek, TrainingPreviewCache
from .sqlite_source import SqliteTrainingDataSource
from .types import EMPTY_PREVIEW, TrainingPreviewRecord

__all__ = [
    "EMPTY_PREVIEW",
    "NextTrainingWeek",
    "RefreshBus",
    "RefreshEvent",
    "SqliteTrainingDataSource",
    "TrainingPreviewCache",
    "TrainingPreviewRecord",
]
