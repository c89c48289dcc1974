from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, Field


class TrainingPreviewPlayersRequest(BaseModel):
    player_ids: List[int] = Field(default_factory=list)


class TrainingPreviewRefreshRequest(BaseModel):
    reason: Optional[str] = None
    discard_planned_lineups: bool = True


class MatchOrderRequest(BaseModel):
    match_id: int
    match_type: int
    positions: Dict[int, int]  # player_id -> role_id


class CalendarSetRequest(BaseModel):
    season: int
    week: int
