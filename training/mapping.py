from __future__ import annotations

"""Mappings from training regimens to the match roles they train.

The table itself lives in training.config (TRAINING_TYPE_POSITIONS) so it can be
tuned without touching this module. Unknown regimen ids classify as "no
training of either kind".
"""

from typing import Dict, FrozenSet, Optional

from . import config as t_cfg
from .types import TrainingTypeClassification


TRAINING_TYPE_NAMES: Dict[int, str] = {
    t_cfg.TRAINING_SET_PIECES: "SET_PIECES",
    t_cfg.TRAINING_DEFENDING: "DEFENDING",
    t_cfg.TRAINING_SCORING: "SCORING",
    t_cfg.TRAINING_WINGER: "WINGER",
    t_cfg.TRAINING_SHOOTING: "SHOOTING",
    t_cfg.TRAINING_SHORT_PASSES: "SHORT_PASSES",
    t_cfg.TRAINING_PLAYMAKING: "PLAYMAKING",
    t_cfg.TRAINING_GOALKEEPING: "GOALKEEPING",
    t_cfg.TRAINING_THROUGH_PASSES: "THROUGH_PASSES",
    t_cfg.TRAINING_DEFENSIVE_POSITIONS: "DEFENSIVE_POSITIONS",
    t_cfg.TRAINING_WING_ATTACKS: "WING_ATTACKS",
}


def _frozen(v: Optional[FrozenSet[int]]) -> Optional[FrozenSet[int]]:
    if v is None:
        return None
    return frozenset(int(x) for x in v)


def classify_training_type(training_type_id: Optional[int]) -> TrainingTypeClassification:
    """Return the primary/secondary role sets for a training regimen id."""
    try:
        tid = int(training_type_id) if training_type_id is not None else None
    except Exception:
        tid = None
    if tid is None:
        return TrainingTypeClassification(training_type_id=None)

    primary, secondary = t_cfg.TRAINING_TYPE_POSITIONS.get(tid, (None, None))
    return TrainingTypeClassification(
        training_type_id=tid,
        primary_positions=_frozen(primary),
        secondary_positions=_frozen(secondary),
    )


def training_type_name(training_type_id: Optional[int]) -> Optional[str]:
    if training_type_id is None:
        return None
    return TRAINING_TYPE_NAMES.get(int(training_type_id))
