"""Classification Canvas configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

# Label colors handed out in order as labels are added.
DEFAULT_PALETTE: list[str] = [
    "#f56565",
    "#48bb78",
    "#4299e1",
    "#ed64a6",
    "#ecc94b",
    "#9f7aea",
]


class Settings(BaseSettings):
    """Classification Canvas settings.

    All fields can be overridden via environment variables with
    the CANVAS_ prefix (e.g., CANVAS_MAX_LABELS).
    """

    canvas_width: float = 800.0
    canvas_height: float = 384.0
    max_labels: int = 6
    palette: list[str] = DEFAULT_PALETTE
    display_precision: int = 2
    plugin_dir: Path = Path("plugins")
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:3000"]
    behind_proxy: bool = False  # Set CANVAS_BEHIND_PROXY=true in Docker

    model_config = {
        "env_prefix": "CANVAS_",
        "env_file": ".env",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings (singleton)."""
    return Settings()
