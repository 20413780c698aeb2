"""Shared pytest fixtures for Classification Canvas tests."""

from collections.abc import Iterable

import httpx
import pytest
from fastapi import FastAPI

from app.config import DEFAULT_PALETTE, Settings
from app.models.label import Label
from app.models.point import Point
from app.plugins.registry import PluginRegistry
from app.repositories.canvas_store import CanvasStore
from app.routers import evaluation, labels, points, session


def make_labels(*names: str) -> list[Label]:
    """Build labels with palette colors in order."""
    return [
        Label(name=name, color=DEFAULT_PALETTE[i % len(DEFAULT_PALETTE)])
        for i, name in enumerate(names)
    ]


def make_points(pairs: Iterable[tuple[str, str | None]]) -> list[Point]:
    """Build points from (predicted, ground truth) pairs."""
    return [
        Point(x=0.0, y=0.0, predicted_label=predicted, ground_truth_label=actual)
        for predicted, actual in pairs
    ]


@pytest.fixture()
def settings() -> Settings:
    """Settings with a 300px wide canvas so region boundaries are round numbers."""
    return Settings(canvas_width=300.0, max_labels=6, palette=DEFAULT_PALETTE)


@pytest.fixture()
def plugin_registry() -> PluginRegistry:
    return PluginRegistry()


@pytest.fixture()
def store(settings: Settings, plugin_registry: PluginRegistry) -> CanvasStore:
    """An empty canvas session."""
    return CanvasStore(
        max_labels=settings.max_labels,
        palette=settings.palette,
        plugin_registry=plugin_registry,
    )


@pytest.fixture()
async def app_client(
    store: CanvasStore, settings: Settings, plugin_registry: PluginRegistry
) -> httpx.AsyncClient:
    """Create a FastAPI test app around the test store and yield an async HTTP client."""
    test_app = FastAPI()

    test_app.state.settings = settings
    test_app.state.store = store
    test_app.state.plugin_registry = plugin_registry

    test_app.include_router(labels.router)
    test_app.include_router(points.router)
    test_app.include_router(evaluation.router)
    test_app.include_router(session.router)

    @test_app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "ok"}

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=test_app),
        base_url="http://testserver",
    ) as client:
        yield client
