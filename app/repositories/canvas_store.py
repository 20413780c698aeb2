"""In-memory session state: the label list, the point list and the selection."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from app.models.evaluation import ConfusionMatrix, MetricsReport, PerClassCounts
from app.models.label import Label
from app.models.point import Point
from app.models.session import CanvasSnapshot
from app.plugins.hooks import HOOK_LABEL_ADDED, HOOK_POINT_PLACED, HOOK_RESET
from app.plugins.registry import PluginRegistry
from app.services import placement
from app.services.classification_evaluation import (
    build_confusion_matrix,
    compute_metrics,
    derive_counts,
)
from app.services.errors import (
    InvalidLabelError,
    InvalidStateError,
    LabelConflictError,
    LabelLimitError,
    LabelNotFoundError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EvaluationResult:
    """Everything derived from one snapshot."""

    snapshot: CanvasSnapshot
    matrix: ConfusionMatrix
    counts: dict[str, PerClassCounts]
    report: MetricsReport

    @property
    def excluded_point_count(self) -> int:
        return len(self.snapshot.points) - self.matrix.total


class CanvasStore:
    """Owns the append-only label and point lists for one canvas session.

    Every mutation runs under a lock and replaces the stored tuples as a
    whole, so readers only ever see complete states.  Derived structures
    are never stored; :meth:`evaluate` rebuilds them from a snapshot.
    """

    def __init__(
        self,
        max_labels: int,
        palette: list[str],
        plugin_registry: PluginRegistry | None = None,
    ) -> None:
        if not palette:
            raise ValueError("palette must contain at least one color")
        self.max_labels = max_labels
        self.palette = list(palette)
        self._plugins = plugin_registry or PluginRegistry()
        self._lock = threading.Lock()
        self._labels: tuple[Label, ...] = ()
        self._points: tuple[Point, ...] = ()
        self._selected: str | None = None

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def snapshot(self) -> CanvasSnapshot:
        with self._lock:
            return self._snapshot()

    def evaluate(self) -> EvaluationResult:
        """Build the confusion matrix, counts and metrics for the current state."""
        snapshot = self.snapshot()
        matrix = build_confusion_matrix(snapshot.labels, snapshot.points)
        counts = derive_counts(snapshot.labels, matrix)
        return EvaluationResult(
            snapshot=snapshot,
            matrix=matrix,
            counts=counts,
            report=compute_metrics(counts),
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def add_label(self, name: str) -> Label:
        """Append a label, giving it the next palette color."""
        name = name.strip()
        if not name:
            raise InvalidLabelError("Label name must not be empty")

        with self._lock:
            if any(label.name == name for label in self._labels):
                raise LabelConflictError(f"Label '{name}' already exists")
            if len(self._labels) >= self.max_labels:
                raise LabelLimitError(
                    f"Maximum number of labels reached ({self.max_labels})"
                )
            color = self.palette[len(self._labels) % len(self.palette)]
            label = Label(name=name, color=color)
            self._labels = (*self._labels, label)
            snapshot = self._snapshot()

        logger.info("Added label %s (%d/%d)", name, len(snapshot.labels), self.max_labels)
        self._plugins.notify(HOOK_LABEL_ADDED, snapshot, label=label)
        return label

    def select_label(self, name: str) -> Label:
        """Make *name* the predicted label for subsequent points."""
        with self._lock:
            label = self._find(name)
            self._selected = label.name
        return label

    def place_point(
        self,
        x: float,
        y: float,
        canvas_width: float,
        predicted_label: str | None = None,
    ) -> Point:
        """Stamp a click with its region's label and append it as a point.

        *predicted_label* defaults to the selected label.
        """
        with self._lock:
            if not self._labels:
                raise InvalidStateError("Add a label before placing points")
            predicted = predicted_label if predicted_label is not None else self._selected
            if predicted is None:
                raise InvalidStateError("Select a label before placing a point")
            self._find(predicted)
            point = placement.place_point(self._labels, canvas_width, x, y, predicted)
            self._points = (*self._points, point)
            snapshot = self._snapshot()

        logger.debug(
            "Placed point at (%.1f, %.1f): predicted=%s actual=%s",
            x, y, point.predicted_label, point.ground_truth_label,
        )
        self._plugins.notify(HOOK_POINT_PLACED, snapshot, point=point)
        return point

    def reset(self) -> None:
        """Clear labels, points and the selection together."""
        with self._lock:
            self._labels = ()
            self._points = ()
            self._selected = None
            snapshot = self._snapshot()

        logger.info("Canvas session reset")
        self._plugins.notify(HOOK_RESET, snapshot)

    # ------------------------------------------------------------------
    # Helpers (caller holds the lock)
    # ------------------------------------------------------------------

    def _snapshot(self) -> CanvasSnapshot:
        return CanvasSnapshot(
            labels=self._labels,
            points=self._points,
            selected_label=self._selected,
        )

    def _find(self, name: str) -> Label:
        for label in self._labels:
            if label.name == name:
                return label
        raise LabelNotFoundError(f"Label '{name}' not found")
