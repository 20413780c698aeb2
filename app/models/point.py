"""Pydantic models for points placed on the canvas."""

from typing import Annotated

from pydantic import BaseModel, Field


class Point(BaseModel):
    """A placed point.

    ``predicted_label`` is the label the user had selected when clicking.
    ``ground_truth_label`` is stamped from the canvas region at placement
    time and is not recomputed if the label list changes afterwards.
    """

    model_config = {"frozen": True}

    x: float
    y: float
    predicted_label: str
    ground_truth_label: str | None = None


class PointCreate(BaseModel):
    """Request body for POST /points.

    ``canvas_width`` defaults to the configured width and
    ``predicted_label`` to the currently selected label.
    """

    x: float = Field(allow_inf_nan=False)
    y: float = Field(allow_inf_nan=False)
    canvas_width: Annotated[float, Field(gt=0, allow_inf_nan=False)] | None = None
    predicted_label: str | None = None


class PointListResponse(BaseModel):
    """All points placed in the current session."""

    points: list[Point]
    count: int
