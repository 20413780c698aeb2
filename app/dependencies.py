"""FastAPI dependency injection for the canvas session and settings."""

from fastapi import Request

from app.config import Settings, get_settings
from app.repositories.canvas_store import CanvasStore


def get_store(request: Request) -> CanvasStore:
    """Return the application-wide CanvasStore stored on app.state."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    """Return the settings stored on app.state, falling back to the cached ones."""
    return getattr(request.app.state, "settings", None) or get_settings()
