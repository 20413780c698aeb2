"""Classification evaluation service.

Builds the confusion matrix from placed points, derives one-vs-rest
TP/FP/FN/TN counts per label from that matrix, and computes precision,
recall, accuracy and F1 per label plus their unweighted average.

Every function here is pure: it reads label and point snapshots and
returns new records.  Nothing is cached; callers rebuild on each read.

Zero-denominator policy: any ratio whose denominator is zero is 0.0.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence

from app.models.evaluation import (
    METRIC_NAMES,
    ClassMetricsRow,
    ConfusionMatrix,
    ConfusionMatrixResponse,
    MetricsReport,
    MetricsResponse,
    PerClassCounts,
    PerClassMetrics,
)
from app.models.label import Label
from app.models.point import Point

logger = logging.getLogger(__name__)


def safe_divide(numerator: float, denominator: float) -> float:
    """Return ``numerator / denominator``, or 0.0 when the denominator is 0."""
    return numerator / denominator if denominator > 0 else 0.0


def _ordered_names(labels: Iterable[Label | str]) -> list[str]:
    """Label names in list order, keeping only the first of any duplicate."""
    names: list[str] = []
    for label in labels:
        name = label if isinstance(label, str) else label.name
        if name not in names:
            names.append(name)
    return names


def build_confusion_matrix(
    labels: Sequence[Label | str], points: Iterable[Point]
) -> ConfusionMatrix:
    """Count points per (ground-truth, predicted) label pair.

    The matrix is zero-initialized over every pair of labels.  Points whose
    ground truth is missing, or whose ground truth or prediction is not in
    *labels*, are skipped and do not add rows or columns.
    """
    names = _ordered_names(labels)
    counts: dict[str, dict[str, int]] = {
        actual: {predicted: 0 for predicted in names} for actual in names
    }

    skipped = 0
    for point in points:
        row = counts.get(point.ground_truth_label)
        if row is None or point.predicted_label not in row:
            skipped += 1
            continue
        row[point.predicted_label] += 1

    if skipped:
        logger.debug("Skipped %d point(s) with labels outside the label list", skipped)

    return ConfusionMatrix(labels=names, counts=counts)


def derive_counts(
    labels: Sequence[Label | str], matrix: ConfusionMatrix
) -> dict[str, PerClassCounts]:
    """Derive one-vs-rest TP/FP/FN/TN for each label from *matrix*.

    For label ``c``: TP is the diagonal cell, FP the rest of column ``c``,
    FN the rest of row ``c`` and TN everything else.  The four always sum
    to ``matrix.total``.
    """
    total = matrix.total
    result: dict[str, PerClassCounts] = {}

    for name in _ordered_names(labels):
        if name not in matrix.counts:
            result[name] = PerClassCounts(tn=total)
            continue
        tp = matrix.cell(name, name)
        fp = matrix.column_sum(name) - tp
        fn = matrix.row_sum(name) - tp
        tn = total - tp - fp - fn
        result[name] = PerClassCounts(tp=tp, fp=fp, fn=fn, tn=tn)

    return result


def metrics_from_counts(counts: PerClassCounts) -> PerClassMetrics:
    """Compute precision, recall, accuracy and F1 for one label."""
    precision = safe_divide(counts.tp, counts.tp + counts.fp)
    recall = safe_divide(counts.tp, counts.tp + counts.fn)
    accuracy = safe_divide(counts.tp + counts.tn, counts.total)
    f1 = safe_divide(2 * precision * recall, precision + recall)
    return PerClassMetrics(
        precision=precision, recall=recall, accuracy=accuracy, f1=f1
    )


def average_metrics(per_label: Iterable[PerClassMetrics]) -> PerClassMetrics:
    """Unweighted mean of each metric; all zeros when there are no labels."""
    per_label = list(per_label)
    averages = {
        metric: safe_divide(
            sum(getattr(m, metric) for m in per_label), len(per_label)
        )
        for metric in METRIC_NAMES
    }
    return PerClassMetrics(**averages)


def compute_metrics(counts: Mapping[str, PerClassCounts]) -> MetricsReport:
    """Compute per-label metrics (in *counts* order) and their average."""
    per_label = {name: metrics_from_counts(c) for name, c in counts.items()}
    return MetricsReport(
        per_label=per_label,
        average=average_metrics(per_label.values()),
    )


# ------------------------------------------------------------------ #
# Response builders
# ------------------------------------------------------------------ #


def confusion_matrix_response(matrix: ConfusionMatrix) -> ConfusionMatrixResponse:
    """Shape a matrix for the API (grid rows = ground truth)."""
    return ConfusionMatrixResponse(
        labels=matrix.labels,
        matrix=matrix.as_grid(),
        counts=matrix.counts,
        total=matrix.total,
    )


def metrics_response(
    counts: Mapping[str, PerClassCounts],
    report: MetricsReport,
    digits: int = 2,
) -> MetricsResponse:
    """Build the metrics table, rounding values for presentation only."""
    rounded = report.rounded(digits)
    rows = [
        ClassMetricsRow(
            label=name,
            tp=counts[name].tp,
            fp=counts[name].fp,
            fn=counts[name].fn,
            tn=counts[name].tn,
            **metrics.model_dump(),
        )
        for name, metrics in rounded.per_label.items()
    ]
    return MetricsResponse(per_class_metrics=rows, average=rounded.average)
