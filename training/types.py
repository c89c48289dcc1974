from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, FrozenSet, Iterable, Mapping, Optional, Tuple

from . import config as t_cfg

MATCH_FINISHED: str = "FINISHED"
MATCH_UPCOMING: str = "UPCOMING"


def _clamp_minutes(v: Any) -> int:
    try:
        m = int(v)
    except Exception:
        return 0
    if m < 0:
        return 0
    if m > t_cfg.MAX_TRAINING_MINUTES:
        return int(t_cfg.MAX_TRAINING_MINUTES)
    return m


def is_starting_role(role_id: int) -> bool:
    """True for on-pitch roles, False for bench/reserve slots."""
    return int(role_id) < t_cfg.SUBST_GK1


@dataclass(frozen=True, slots=True)
class TrainingPreviewRecord:
    """Training preview of one roster member for one cache epoch."""

    full_training_minutes: int = 0
    partial_training_minutes: int = 0
    full_future_training: bool = False
    partial_future_training: bool = False
    stamina_minutes: int = 0
    estimated_stamina_risk: bool = False

    def __post_init__(self) -> None:
        for name in ("full_training_minutes", "partial_training_minutes", "stamina_minutes"):
            v = getattr(self, name)
            if not 0 <= int(v) <= t_cfg.MAX_TRAINING_MINUTES:
                raise ValueError(f"{name} out of range: {v!r}")

    @property
    def has_training_signal(self) -> bool:
        return bool(
            self.full_training_minutes
            or self.partial_training_minutes
            or self.full_future_training
            or self.partial_future_training
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "full_training_minutes": int(self.full_training_minutes),
            "partial_training_minutes": int(self.partial_training_minutes),
            "full_future_training": bool(self.full_future_training),
            "partial_future_training": bool(self.partial_future_training),
            "stamina_minutes": int(self.stamina_minutes),
            "estimated_stamina_risk": bool(self.estimated_stamina_risk),
        }


EMPTY_PREVIEW = TrainingPreviewRecord()


@dataclass(frozen=True, slots=True)
class MatchRef:
    match_id: int
    match_type: int
    status: str
    kickoff: Optional[str] = None


@dataclass(frozen=True, slots=True)
class TrainingWindow:
    """The most recently completed training week and the matches that count for it."""

    training_type_id: int
    season: int
    week: int
    matches: Tuple[MatchRef, ...] = ()


@dataclass(frozen=True, slots=True)
class TrainingTypeClassification:
    """Roles eligible for full / partial skill training under one regimen.

    A ``None`` set means the regimen has no training of that kind this week.
    """

    training_type_id: Optional[int]
    primary_positions: Optional[FrozenSet[int]] = None
    secondary_positions: Optional[FrozenSet[int]] = None


NO_TRAINING = TrainingTypeClassification(training_type_id=None)


@dataclass(frozen=True, slots=True)
class MatchStatistics:
    """Per-role minutes of one finished match.

    minutes_by_player[player_id][role_id] = minutes played in that role.
    """

    match_id: int
    minutes_by_player: Mapping[int, Mapping[int, int]] = field(default_factory=dict)

    @classmethod
    def from_rows(cls, match_id: int, rows: Iterable[Tuple[Any, Any, Any]]) -> "MatchStatistics":
        """Build from (player_id, role_id, minutes) rows; duplicate roles add up."""
        acc: Dict[int, Dict[int, int]] = {}
        for pid, role_id, minutes in rows:
            try:
                p = int(pid)
                r = int(role_id)
                m = int(minutes or 0)
            except Exception:
                continue
            if m <= 0:
                continue
            bucket = acc.setdefault(p, {})
            bucket[r] = bucket.get(r, 0) + m
        frozen = {p: MappingProxyType(dict(roles)) for p, roles in acc.items()}
        return cls(match_id=int(match_id), minutes_by_player=MappingProxyType(frozen))

    def train_minutes_in_positions(self, player_id: int, positions: Iterable[int]) -> int:
        roles = self.minutes_by_player.get(int(player_id)) or {}
        wanted = set(positions)
        return _clamp_minutes(sum(m for r, m in roles.items() if r in wanted))

    def stamina_minutes(self, player_id: int) -> int:
        roles = self.minutes_by_player.get(int(player_id)) or {}
        return _clamp_minutes(sum(m for r, m in roles.items() if is_starting_role(r)))


@dataclass(frozen=True, slots=True)
class LineupAssignment:
    """Planned lineup for one upcoming match: positions[player_id] = role_id."""

    match_id: int
    match_type: int
    positions: Mapping[int, int] = field(default_factory=dict)

    def position_of(self, player_id: int) -> Optional[int]:
        role = self.positions.get(int(player_id))
        return None if role is None else int(role)


@dataclass(frozen=True, slots=True)
class ResolvedMatchWindow:
    """Match window snapshot for one cache epoch."""

    classification: TrainingTypeClassification = NO_TRAINING
    match_statistics: Tuple[MatchStatistics, ...] = ()
    lineup_assignments: Tuple[LineupAssignment, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.match_statistics and not self.lineup_assignments


EMPTY_WINDOW = ResolvedMatchWindow()
