from __future__ import annotations

"""Per-player training preview aggregation.

Pure function over an already-resolved match window (no DB I/O, no caching).

Past matches
------------
For each finished match, in window order:
  full    += minutes in primary roles      (clamped to 90 after each add)
  partial += minutes in secondary roles    (clamped to 90 after each add)
  stamina += minutes on the pitch          (only while full == partial == 0)

The stamina check reads the running totals, so a match processed before the
first training minutes appear still counts toward stamina even if a later
match adds training minutes.

Upcoming matches
----------------
For each planned lineup that contains the player:
  primary role                             -> full_future
  secondary role (and not full_future yet) -> partial_future
  no signal at all and a starting role     -> estimated_stamina_risk
"""

from typing import FrozenSet, Optional

from . import config as t_cfg
from .types import ResolvedMatchWindow, TrainingPreviewRecord, is_starting_role


def _add_clamped(total: int, add: int) -> int:
    total += int(add)
    if total > t_cfg.MAX_TRAINING_MINUTES:
        return int(t_cfg.MAX_TRAINING_MINUTES)
    return total


def _in_positions(role_id: int, positions: Optional[FrozenSet[int]]) -> bool:
    if positions is None:
        return False
    return int(role_id) in positions


def compute_training_preview(player_id: int, window: ResolvedMatchWindow) -> TrainingPreviewRecord:
    pid = int(player_id)
    primary = window.classification.primary_positions
    secondary = window.classification.secondary_positions

    full_train = 0
    partial_train = 0
    stamina = 0
    full_future = False
    partial_future = False
    stamina_risk = False

    for ms in window.match_statistics:
        if primary is not None:
            full_train = _add_clamped(full_train, ms.train_minutes_in_positions(pid, primary))
        if secondary is not None:
            partial_train = _add_clamped(partial_train, ms.train_minutes_in_positions(pid, secondary))
        # No stamina icon once the player receives training.
        if full_train == 0 and partial_train == 0:
            stamina = _add_clamped(stamina, ms.stamina_minutes(pid))

    for lineup in window.lineup_assignments:
        role_id = lineup.position_of(pid)
        if role_id is None:
            continue

        if _in_positions(role_id, primary):
            full_future = True
        if not full_future and _in_positions(role_id, secondary):
            partial_future = True

        if (
            full_train == 0
            and partial_train == 0
            and not full_future
            and not partial_future
            and is_starting_role(role_id)
        ):
            stamina_risk = True

    return TrainingPreviewRecord(
        full_training_minutes=full_train,
        partial_training_minutes=partial_train,
        full_future_training=full_future,
        partial_future_training=partial_future,
        stamina_minutes=stamina,
        estimated_stamina_risk=stamina_risk,
    )
