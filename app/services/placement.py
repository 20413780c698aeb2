"""Map a click position to its ground-truth label and record points.

The canvas is split into one equal-width vertical strip per label, in
label order from left to right.  Strips are half-open ``[start, end)``,
so a click exactly on a boundary belongs to the strip on its right.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from fractions import Fraction

from app.models.label import Label
from app.models.point import Point
from app.services.errors import InvalidStateError


def section_index(label_count: int, canvas_width: float, click_x: float) -> int:
    """Return the index of the strip containing *click_x*.

    Coordinates outside ``[0, canvas_width)`` are clamped to the first or
    last strip rather than rejected.  The position is computed exactly as
    ``click_x * label_count / canvas_width`` so tiny widths cannot underflow.
    """
    if label_count <= 0:
        raise InvalidStateError("No labels defined; there are no regions to assign")
    if not math.isfinite(canvas_width) or canvas_width <= 0:
        raise InvalidStateError(f"Canvas width must be positive and finite, got {canvas_width}")
    if not math.isfinite(click_x):
        raise InvalidStateError(f"Click position must be finite, got {click_x}")

    index = math.floor(Fraction(click_x) * label_count / Fraction(canvas_width))
    return min(max(index, 0), label_count - 1)


def assign_region(
    labels: Sequence[Label], canvas_width: float, click_x: float
) -> str:
    """Return the name of the label whose region contains *click_x*."""
    index = section_index(len(labels), canvas_width, click_x)
    return labels[index].name


def record_point(
    x: float,
    y: float,
    predicted_label: str,
    ground_truth_label: str | None,
) -> Point:
    """Create an immutable point record."""
    return Point(
        x=x,
        y=y,
        predicted_label=predicted_label,
        ground_truth_label=ground_truth_label,
    )


def place_point(
    labels: Sequence[Label],
    canvas_width: float,
    x: float,
    y: float,
    predicted_label: str,
) -> Point:
    """Stamp a click with its region's label and record it as a point."""
    ground_truth = assign_region(labels, canvas_width, x)
    return record_point(x, y, predicted_label, ground_truth)
