"""BasePlugin abstract class and PluginContext dataclass.

Defines the plugin contract for the canvas service. All plugins subclass
BasePlugin and override hooks they care about. Hooks use keyword-only
arguments to prevent breakage when new parameters are added in future
versions.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from app.models.label import Label
from app.models.point import Point
from app.models.session import CanvasSnapshot


@dataclass
class PluginContext:
    """Extensible context object passed to all session hooks.

    ``snapshot`` is the session state right after the mutation.
    """

    snapshot: CanvasSnapshot
    metadata: dict[str, Any] | None = field(default=None)


class BasePlugin(ABC):
    """Abstract base class for all canvas plugins.

    Subclass this and override the hooks you need. All hooks use keyword-only
    arguments (the ``*`` separator) so new parameters can be added without
    breaking existing plugins.

    Class Variables:
        api_version: Protocol version for future compatibility checks.
    """

    api_version: int = 1

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique plugin name. Must be implemented by subclasses."""
        ...

    @property
    def description(self) -> str:
        """Optional human-readable description."""
        return ""

    # ------------------------------------------------------------------
    # Session hooks (keyword-only arguments)
    # ------------------------------------------------------------------

    def on_label_added(self, *, context: PluginContext, label: Label) -> None:
        """Called after a label is appended to the label list."""

    def on_point_placed(self, *, context: PluginContext, point: Point) -> None:
        """Called after a point is placed and stamped with its ground truth."""

    def on_reset(self, *, context: PluginContext) -> None:
        """Called after labels and points have been cleared."""

    # ------------------------------------------------------------------
    # Lifecycle hooks
    # ------------------------------------------------------------------

    def on_activate(self) -> None:
        """Called when the plugin is registered/activated."""

    def on_deactivate(self) -> None:
        """Called when the plugin is being shut down."""
