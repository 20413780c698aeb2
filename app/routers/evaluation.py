"""Evaluation API router.

Endpoints:
- GET /evaluation                   -- confusion matrix and metrics together
- GET /evaluation/confusion-matrix  -- rows = ground truth, columns = predicted
- GET /evaluation/metrics           -- per-class counts/metrics and their average

Everything is recomputed from the current session on each request.
Values are rounded to ``display_precision`` digits for presentation.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from app.config import Settings
from app.dependencies import get_app_settings, get_store
from app.models.evaluation import (
    ConfusionMatrixResponse,
    EvaluationResponse,
    MetricsResponse,
)
from app.repositories.canvas_store import CanvasStore
from app.services.classification_evaluation import (
    confusion_matrix_response,
    metrics_response,
)

router = APIRouter(prefix="/evaluation", tags=["evaluation"])


@router.get("", response_model=EvaluationResponse)
def get_evaluation(
    store: CanvasStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> EvaluationResponse:
    """Return the confusion matrix and metrics for the current session."""
    result = store.evaluate()
    return EvaluationResponse(
        confusion_matrix=confusion_matrix_response(result.matrix),
        metrics=metrics_response(
            result.counts, result.report, settings.display_precision
        ),
        point_count=len(result.snapshot.points),
        excluded_point_count=result.excluded_point_count,
    )


@router.get("/confusion-matrix", response_model=ConfusionMatrixResponse)
def get_confusion_matrix(
    store: CanvasStore = Depends(get_store),
) -> ConfusionMatrixResponse:
    """Return the confusion matrix in label order."""
    return confusion_matrix_response(store.evaluate().matrix)


@router.get("/metrics", response_model=MetricsResponse)
def get_metrics(
    store: CanvasStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> MetricsResponse:
    """Return per-class TP/FP/FN/TN, precision, recall, accuracy and F1."""
    result = store.evaluate()
    return metrics_response(result.counts, result.report, settings.display_precision)
