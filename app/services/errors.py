"""Exceptions raised by the canvas services.

All subclass :class:`ValueError` so callers outside the HTTP layer can
treat them as bad input.  Routers translate them to ``HTTPException``.
"""

from __future__ import annotations


class CanvasError(ValueError):
    """Base class for canvas and evaluation errors."""


class InvalidStateError(CanvasError):
    """The operation needs state that is not there yet (e.g. no labels)."""


class InvalidLabelError(CanvasError):
    """A label name is empty after stripping whitespace."""


class LabelConflictError(CanvasError):
    """A label with the same name already exists."""


class LabelLimitError(CanvasError):
    """The configured maximum number of labels has been reached."""


class LabelNotFoundError(CanvasError):
    """A referenced label is not in the label list."""
