"""Classification Canvas FastAPI application entry point."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import get_settings
from app.plugins.registry import PluginRegistry
from app.repositories.canvas_store import CanvasStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application startup and shutdown.

    On startup:
    - Create the PluginRegistry and discover plugins from the plugin directory.
    - Create the CanvasStore for the session, wired to the registry.
    - Store both on app.state for dependency injection.

    On shutdown:
    - Shut down plugin registry.
    """
    settings = get_settings()
    app.state.settings = settings

    # Plugin registry
    plugin_registry = PluginRegistry()
    discovered = plugin_registry.discover_plugins(Path(settings.plugin_dir))
    if discovered:
        logger.info("Loaded plugins: %s", ", ".join(discovered))
    app.state.plugin_registry = plugin_registry

    # Session state
    app.state.store = CanvasStore(
        max_labels=settings.max_labels,
        palette=settings.palette,
        plugin_registry=plugin_registry,
    )
    logger.info(
        "Canvas ready: width=%s, max_labels=%d",
        settings.canvas_width,
        settings.max_labels,
    )

    yield

    # Shutdown
    plugin_registry.shutdown()


settings = get_settings()
logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Classification Canvas",
    description="Place labeled points on a partitioned canvas and score them",
    version="0.1.0",
    lifespan=lifespan,
)

# In Docker behind a reverse proxy (same origin): no CORS needed.
# In local dev: allow the frontend dev server origin.
if not settings.behind_proxy:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

# Router includes
from app.routers import evaluation, labels, points, session  # noqa: E402

app.include_router(labels.router)
app.include_router(points.router)
app.include_router(evaluation.router)
app.include_router(session.router)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Simple health check endpoint."""
    return {"status": "ok"}


def run() -> None:
    """Serve the application with uvicorn using the configured host and port."""
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
