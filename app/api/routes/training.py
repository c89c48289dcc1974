from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

import game_time
from app.schemas.training import (
    CalendarSetRequest,
    MatchOrderRequest,
    TrainingPreviewPlayersRequest,
    TrainingPreviewRefreshRequest,
)
from app.services.training_preview_facade import TrainingPreviewContext, try_notify_refresh
from training.mapping import training_type_name

router = APIRouter()
logger = logging.getLogger(__name__)


def _ctx(request: Request) -> TrainingPreviewContext:
    ctx = getattr(request.app.state, "training_preview", None)
    if ctx is None:
        raise HTTPException(status_code=500, detail="Training preview context is not initialized.")
    return ctx


# -------------------------------------------------------------------------
# Training preview API
# -------------------------------------------------------------------------


@router.get("/api/training/preview/player/{player_id}")
async def api_get_training_preview(player_id: int, request: Request):
    """Training preview of one roster member for the current training week."""
    ctx = _ctx(request)
    record = ctx.cache.get_preview(player_id)
    return {"player_id": int(player_id), "epoch": ctx.cache.epoch, "preview": record.to_dict()}


@router.post("/api/training/preview/players")
async def api_get_training_previews(req: TrainingPreviewPlayersRequest, request: Request):
    """Training previews of several roster members (order preserved)."""
    ctx = _ctx(request)
    records = ctx.cache.get_previews(req.player_ids)
    return {
        "epoch": ctx.cache.epoch,
        "previews": [{"player_id": pid, "preview": rec.to_dict()} for pid, rec in records.items()],
    }


@router.get("/api/training/preview/next-week")
async def api_get_next_training_week(request: Request):
    """Training planned for the week after the current one."""
    ctx = _ctx(request)
    try:
        info = ctx.cache.get_next_training_week_info()
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))
    return {
        "season": info.season,
        "week": info.week,
        "training_id": info.training_id,
        "training_name": training_type_name(info.training_id),
    }


@router.post("/api/training/preview/refresh")
async def api_refresh_training_preview(req: TrainingPreviewRefreshRequest, request: Request):
    """Invalidate all training previews (e.g. after a data download)."""
    ctx = _ctx(request)
    epoch = ctx.cache.refresh(discard_planned_lineups=bool(req.discard_planned_lineups))
    logger.info("TRAINING_PREVIEW_REFRESH_API reason=%s epoch=%s", req.reason or "manual", epoch)
    return {"ok": True, "epoch": epoch}


# -------------------------------------------------------------------------
# Writers that invalidate previews
# -------------------------------------------------------------------------


@router.post("/api/training/match-order/set")
async def api_set_match_order(req: MatchOrderRequest, request: Request):
    """Save a planned lineup for an upcoming match."""
    ctx = _ctx(request)
    ctx.source.save_match_order(match_id=req.match_id, match_type=req.match_type, positions=req.positions)
    # Keep the lineup that was just saved.
    try_notify_refresh(ctx, reason="match_order_saved", discard_planned_lineups=False)
    return {"ok": True, "match_id": int(req.match_id), "epoch": ctx.cache.epoch}


@router.post("/api/league/calendar/set")
async def api_set_calendar(req: CalendarSetRequest, request: Request):
    """Move the league calendar (new week downloaded)."""
    ctx = _ctx(request)
    try:
        season, week = ctx.source.set_calendar(req.season, req.week)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    try_notify_refresh(ctx, reason="calendar_changed", discard_planned_lineups=True)
    return {"ok": True, "week_key": game_time.week_key(season, week), "epoch": ctx.cache.epoch}
