from __future__ import annotations

import logging
import os

from fastapi import FastAPI

from app.api.router import api_router
from app.services.training_preview_facade import build_training_preview_context

logger = logging.getLogger(__name__)


def create_app(db_path: str | None = None) -> FastAPI:
    """Build the API app. db_path defaults to $LEAGUE_DB_PATH (required)."""
    path = db_path or os.environ.get("LEAGUE_DB_PATH")
    if not path:
        raise RuntimeError("LEAGUE_DB_PATH is required (no default db_path).")

    app = FastAPI(title="Training preview server")
    # One cache per process, owned by the app (no module-level singleton).
    app.state.training_preview = build_training_preview_context(path)
    logger.info("TRAINING_PREVIEW_CONTEXT_READY db=%s", path)

    app.include_router(api_router)
    return app
