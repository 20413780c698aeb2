"""Evaluation engine records and response models for the evaluation endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

METRIC_NAMES: tuple[str, ...] = ("precision", "recall", "accuracy", "f1")


class ConfusionMatrix(BaseModel):
    """Square count table keyed by (ground-truth label, predicted label).

    Rows are ground truth, columns are predicted.  ``labels`` fixes the
    row and column order; every cell exists, even when zero.
    """

    labels: list[str]
    counts: dict[str, dict[str, int]]

    def cell(self, actual: str, predicted: str) -> int:
        return self.counts.get(actual, {}).get(predicted, 0)

    def row_sum(self, actual: str) -> int:
        """Number of points whose ground truth is *actual*."""
        return sum(self.counts.get(actual, {}).values())

    def column_sum(self, predicted: str) -> int:
        """Number of points predicted as *predicted*."""
        return sum(row.get(predicted, 0) for row in self.counts.values())

    @property
    def total(self) -> int:
        return sum(sum(row.values()) for row in self.counts.values())

    def as_grid(self) -> list[list[int]]:
        """Return the matrix as a list of rows in label order."""
        return [
            [self.cell(actual, predicted) for predicted in self.labels]
            for actual in self.labels
        ]


class PerClassCounts(BaseModel):
    """One-vs-rest outcome counts for a single label."""

    tp: int = Field(default=0, ge=0)
    fp: int = Field(default=0, ge=0)
    fn: int = Field(default=0, ge=0)
    tn: int = Field(default=0, ge=0)

    @property
    def total(self) -> int:
        return self.tp + self.fp + self.fn + self.tn


class PerClassMetrics(BaseModel):
    """Precision, recall, accuracy and F1 for one label (or their average)."""

    precision: float = 0.0
    recall: float = 0.0
    accuracy: float = 0.0
    f1: float = 0.0

    def rounded(self, digits: int = 2) -> PerClassMetrics:
        return PerClassMetrics(
            precision=round(self.precision, digits),
            recall=round(self.recall, digits),
            accuracy=round(self.accuracy, digits),
            f1=round(self.f1, digits),
        )


class MetricsReport(BaseModel):
    """Per-label metrics in label order plus their unweighted average."""

    per_label: dict[str, PerClassMetrics]
    average: PerClassMetrics

    def rounded(self, digits: int = 2) -> MetricsReport:
        """Return a copy with every value rounded for presentation."""
        return MetricsReport(
            per_label={
                name: metrics.rounded(digits)
                for name, metrics in self.per_label.items()
            },
            average=self.average.rounded(digits),
        )


# ------------------------------------------------------------------ #
# API responses
# ------------------------------------------------------------------ #


class ConfusionMatrixResponse(BaseModel):
    """Response for GET /evaluation/confusion-matrix."""

    labels: list[str]
    matrix: list[list[int]]
    counts: dict[str, dict[str, int]]
    total: int


class ClassMetricsRow(BaseModel):
    """One row of the metrics table."""

    label: str
    tp: int
    fp: int
    fn: int
    tn: int
    precision: float
    recall: float
    accuracy: float
    f1: float


class MetricsResponse(BaseModel):
    """Response for GET /evaluation/metrics."""

    per_class_metrics: list[ClassMetricsRow]
    average: PerClassMetrics


class EvaluationResponse(BaseModel):
    """Full evaluation payload returned by GET /evaluation."""

    confusion_matrix: ConfusionMatrixResponse
    metrics: MetricsResponse
    point_count: int
    excluded_point_count: int
