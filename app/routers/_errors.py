"""Translate canvas service errors into HTTP responses.

- ``LabelNotFoundError`` -- 404
- ``InvalidLabelError`` -- 422
- ``InvalidStateError``, ``LabelConflictError``, ``LabelLimitError`` -- 409
"""

from __future__ import annotations

from fastapi import HTTPException

from app.services.errors import CanvasError, InvalidLabelError, LabelNotFoundError


def to_http_exception(exc: CanvasError) -> HTTPException:
    """Return the ``HTTPException`` matching *exc*."""
    if isinstance(exc, LabelNotFoundError):
        status_code = 404
    elif isinstance(exc, InvalidLabelError):
        status_code = 422
    else:
        status_code = 409
    return HTTPException(status_code=status_code, detail=str(exc))
