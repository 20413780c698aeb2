"""Pydantic models for canvas labels."""

from pydantic import BaseModel, Field


class Label(BaseModel):
    """A class label; its position in the label list fixes its canvas region."""

    model_config = {"frozen": True}

    name: str = Field(min_length=1)
    color: str


class LabelCreate(BaseModel):
    """Request body for POST /labels."""

    model_config = {"str_strip_whitespace": True}

    name: str = Field(min_length=1)


class LabelListResponse(BaseModel):
    """Ordered label list plus the currently selected label."""

    labels: list[Label]
    selected_label: str | None = None
