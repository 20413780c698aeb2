"""Example plugin demonstrating the canvas hook API.

Logs each session event together with the running accuracy average so
the hooks can be seen firing end to end.
"""

from __future__ import annotations

import logging

from app.models.label import Label
from app.models.point import Point
from app.plugins.base_plugin import BasePlugin, PluginContext
from app.services.classification_evaluation import (
    build_confusion_matrix,
    compute_metrics,
    derive_counts,
)

logger = logging.getLogger(__name__)


class ExamplePlugin(BasePlugin):
    """A demonstration plugin that logs session events."""

    def __init__(self) -> None:
        self.events: list[str] = []

    @property
    def name(self) -> str:
        return "example"

    @property
    def description(self) -> str:
        return "Logs label, point and reset events with the average accuracy"

    # ------------------------------------------------------------------
    # Session hooks
    # ------------------------------------------------------------------

    def on_label_added(self, *, context: PluginContext, label: Label) -> None:
        self.events.append(f"label:{label.name}")
        logger.info(
            "Example plugin: label %s added (%d total)",
            label.name,
            len(context.snapshot.labels),
        )

    def on_point_placed(self, *, context: PluginContext, point: Point) -> None:
        self.events.append(f"point:{point.predicted_label}/{point.ground_truth_label}")
        snapshot = context.snapshot
        matrix = build_confusion_matrix(snapshot.labels, snapshot.points)
        report = compute_metrics(derive_counts(snapshot.labels, matrix))
        logger.info(
            "Example plugin: %d point(s), average accuracy %.2f",
            len(snapshot.points),
            report.average.accuracy,
        )

    def on_reset(self, *, context: PluginContext) -> None:
        self.events.append("reset")
        logger.info("Example plugin: session reset")

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def on_activate(self) -> None:
        logger.info("Example plugin activated")

    def on_deactivate(self) -> None:
        logger.info("Example plugin deactivated")
