from __future__ import annotations

"""Tuning parameters for the weekly training preview.

This module centralizes the numbers a league setup may want to change without
touching the preview engine or the cache.

Notes
-----
- Match roles are integer ids (ROLE_* below); bench slots start at SUBST_GK1.
- The training-type table maps a training regimen id to the roles that receive
  full ("primary") and partial ("secondary") skill training. ``None`` means the
  regimen has no training of that kind.
"""

from typing import Dict, FrozenSet, Optional, Tuple

import game_time

# ---------------------------------------------------------------------------
# Calendar
# ---------------------------------------------------------------------------

# Weeks per season (owned by the calendar helpers).
SEASON_LENGTH_WEEKS: int = game_time.SEASON_LENGTH_WEEKS

# ---------------------------------------------------------------------------
# Minutes
# ---------------------------------------------------------------------------

# Upper bound for every accumulated minute total (one full match).
MAX_TRAINING_MINUTES: int = 90

# ---------------------------------------------------------------------------
# Match roles
# ---------------------------------------------------------------------------

ROLE_KEEPER: int = 100
ROLE_RIGHT_BACK: int = 101
ROLE_RIGHT_CENTRAL_DEFENDER: int = 102
ROLE_MIDDLE_CENTRAL_DEFENDER: int = 103
ROLE_LEFT_CENTRAL_DEFENDER: int = 104
ROLE_LEFT_BACK: int = 105
ROLE_RIGHT_WINGER: int = 106
ROLE_RIGHT_INNER_MIDFIELD: int = 107
ROLE_CENTRAL_INNER_MIDFIELD: int = 108
ROLE_LEFT_INNER_MIDFIELD: int = 109
ROLE_LEFT_WINGER: int = 110
ROLE_RIGHT_FORWARD: int = 111
ROLE_CENTRAL_FORWARD: int = 112
ROLE_LEFT_FORWARD: int = 113

# First bench slot (substitute goalkeeper). Every role at or above this id is a
# reserve slot; every role below it is a starting position.
SUBST_GK1: int = 200
LAST_BENCH_ROLE: int = 213

# ---------------------------------------------------------------------------
# Training regimens
# ---------------------------------------------------------------------------

TRAINING_SET_PIECES: int = 2
TRAINING_DEFENDING: int = 3
TRAINING_SCORING: int = 4
TRAINING_WINGER: int = 5
TRAINING_SHOOTING: int = 6
TRAINING_SHORT_PASSES: int = 7
TRAINING_PLAYMAKING: int = 8
TRAINING_GOALKEEPING: int = 9
TRAINING_THROUGH_PASSES: int = 10
TRAINING_DEFENSIVE_POSITIONS: int = 11
TRAINING_WING_ATTACKS: int = 12

_BACKS: FrozenSet[int] = frozenset({ROLE_RIGHT_BACK, ROLE_LEFT_BACK})
_CENTRAL_DEFENDERS: FrozenSet[int] = frozenset(
    {ROLE_RIGHT_CENTRAL_DEFENDER, ROLE_MIDDLE_CENTRAL_DEFENDER, ROLE_LEFT_CENTRAL_DEFENDER}
)
_WINGERS: FrozenSet[int] = frozenset({ROLE_RIGHT_WINGER, ROLE_LEFT_WINGER})
_INNER_MIDFIELDERS: FrozenSet[int] = frozenset(
    {ROLE_RIGHT_INNER_MIDFIELD, ROLE_CENTRAL_INNER_MIDFIELD, ROLE_LEFT_INNER_MIDFIELD}
)
_FORWARDS: FrozenSet[int] = frozenset({ROLE_RIGHT_FORWARD, ROLE_CENTRAL_FORWARD, ROLE_LEFT_FORWARD})

_DEFENDERS = _BACKS | _CENTRAL_DEFENDERS
_MIDFIELDERS = _WINGERS | _INNER_MIDFIELDERS
_ALL_ON_PITCH = frozenset({ROLE_KEEPER}) | _DEFENDERS | _MIDFIELDERS | _FORWARDS

# training_type_id -> (primary roles, secondary roles)
TRAINING_TYPE_POSITIONS: Dict[int, Tuple[Optional[FrozenSet[int]], Optional[FrozenSet[int]]]] = {
    TRAINING_SET_PIECES: (_ALL_ON_PITCH, None),
    TRAINING_DEFENDING: (_DEFENDERS, None),
    TRAINING_SCORING: (_FORWARDS, None),
    TRAINING_WINGER: (_WINGERS, _BACKS),
    TRAINING_SHOOTING: (_ALL_ON_PITCH, None),
    TRAINING_SHORT_PASSES: (_MIDFIELDERS | _FORWARDS, None),
    TRAINING_PLAYMAKING: (_INNER_MIDFIELDERS, _WINGERS),
    TRAINING_GOALKEEPING: (frozenset({ROLE_KEEPER}), None),
    TRAINING_THROUGH_PASSES: (_DEFENDERS | _MIDFIELDERS, None),
    TRAINING_DEFENSIVE_POSITIONS: (_DEFENDERS | _MIDFIELDERS, None),
    TRAINING_WING_ATTACKS: (_WINGERS | _FORWARDS, None),
}
