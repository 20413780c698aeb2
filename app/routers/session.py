"""Session API router.

Endpoints:
- GET  /session         -- labels, points and selection in one snapshot
- GET  /session/canvas  -- configured canvas size, label limit and palette
- POST /session/reset   -- clear labels, points and selection together
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response

from app.config import Settings
from app.dependencies import get_app_settings, get_store
from app.models.session import CanvasConfigResponse, CanvasSnapshot
from app.repositories.canvas_store import CanvasStore

router = APIRouter(prefix="/session", tags=["session"])


@router.get("", response_model=CanvasSnapshot)
def get_session(store: CanvasStore = Depends(get_store)) -> CanvasSnapshot:
    """Return the current session state."""
    return store.snapshot()


@router.get("/canvas", response_model=CanvasConfigResponse)
def get_canvas_config(
    store: CanvasStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> CanvasConfigResponse:
    """Return the canvas size new points default to and the label limit."""
    return CanvasConfigResponse(
        width=settings.canvas_width,
        height=settings.canvas_height,
        max_labels=store.max_labels,
        palette=store.palette,
    )


@router.post("/reset", status_code=204)
def reset_session(store: CanvasStore = Depends(get_store)) -> Response:
    """Clear the session."""
    store.reset()
    return Response(status_code=204)
