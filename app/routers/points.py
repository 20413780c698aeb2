"""Points API router.

Endpoints:
- GET  /points  -- list placed points
- POST /points  -- place a point; its ground truth comes from the click region
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.config import Settings
from app.dependencies import get_app_settings, get_store
from app.models.point import Point, PointCreate, PointListResponse
from app.repositories.canvas_store import CanvasStore
from app.routers._errors import to_http_exception
from app.services.errors import CanvasError

router = APIRouter(prefix="/points", tags=["points"])


@router.get("", response_model=PointListResponse)
def list_points(store: CanvasStore = Depends(get_store)) -> PointListResponse:
    """Return all points in placement order."""
    points = list(store.snapshot().points)
    return PointListResponse(points=points, count=len(points))


@router.post("", response_model=Point, status_code=201)
def create_point(
    body: PointCreate,
    store: CanvasStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> Point:
    """Place a point at (x, y).

    Requires at least one label and either a selected label or an explicit
    ``predicted_label``.  Clicks outside the canvas attach to the nearest
    region.
    """
    canvas_width = body.canvas_width or settings.canvas_width
    try:
        return store.place_point(
            body.x,
            body.y,
            canvas_width,
            predicted_label=body.predicted_label,
        )
    except CanvasError as exc:
        raise to_http_exception(exc) from exc
