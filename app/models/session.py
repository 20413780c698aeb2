"""Pydantic models for the canvas session state."""

from pydantic import BaseModel

from app.models.label import Label
from app.models.point import Point


class CanvasSnapshot(BaseModel):
    """Immutable view of the session handed to the evaluation engine."""

    model_config = {"frozen": True}

    labels: tuple[Label, ...] = ()
    points: tuple[Point, ...] = ()
    selected_label: str | None = None


class CanvasConfigResponse(BaseModel):
    """Canvas dimensions and label limits for the rendering layer."""

    width: float
    height: float
    max_labels: int
    palette: list[str]
