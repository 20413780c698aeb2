"""Labels API router.

Endpoints:
- GET  /labels                -- ordered label list and current selection
- POST /labels                -- append a label (next palette color)
- POST /labels/{name}/select  -- select the label used for new points (name may contain "/")
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.dependencies import get_store
from app.models.label import Label, LabelCreate, LabelListResponse
from app.repositories.canvas_store import CanvasStore
from app.routers._errors import to_http_exception
from app.services.errors import CanvasError

router = APIRouter(prefix="/labels", tags=["labels"])


@router.get("", response_model=LabelListResponse)
def list_labels(store: CanvasStore = Depends(get_store)) -> LabelListResponse:
    """Return labels in region order (left to right)."""
    snapshot = store.snapshot()
    return LabelListResponse(
        labels=list(snapshot.labels),
        selected_label=snapshot.selected_label,
    )


@router.post("", response_model=Label, status_code=201)
def create_label(
    body: LabelCreate,
    store: CanvasStore = Depends(get_store),
) -> Label:
    """Append a new label; fails once the configured maximum is reached."""
    try:
        return store.add_label(body.name)
    except CanvasError as exc:
        raise to_http_exception(exc) from exc


@router.post("/{name:path}/select", response_model=Label)
def select_label(
    name: str,
    store: CanvasStore = Depends(get_store),
) -> Label:
    """Select the label that new points are predicted as."""
    try:
        return store.select_label(name)
    except CanvasError as exc:
        raise to_http_exception(exc) from exc
