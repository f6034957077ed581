"""
config.py — Environment configuration for the layout engine.

Layout settings come from LAYOUT_* environment variables, optionally
seeded from a .env file in the project root.
"""

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Dict, Optional

from scenelayout.dsl.schema import LayoutConfig

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Environment variable -> LayoutConfig field
LAYOUT_ENV_VARS: Dict[str, str] = {
    "LAYOUT_CANVAS_WIDTH": "canvas_width",
    "LAYOUT_CANVAS_HEIGHT": "canvas_height",
    "LAYOUT_NODE_WIDTH": "node_width",
    "LAYOUT_NODE_HEIGHT": "node_height",
    "LAYOUT_CHAR_WIDTH": "char_width",
    "LAYOUT_PADDING": "padding",
    "LAYOUT_NODE_SEPARATION": "node_separation",
    "LAYOUT_EDGE_SEPARATION": "edge_separation",
    "LAYOUT_RANK_SEPARATION": "rank_separation",
    "LAYOUT_MARGIN_X": "margin_x",
    "LAYOUT_MARGIN_Y": "margin_y",
}


# Load .env file if it exists
def _load_dotenv(env_path: Optional[Path] = None):
    env_path = env_path or Path(__file__).parent.parent / ".env"
    if env_path.exists():
        with open(env_path) as f:
            for line in f:
                line = line.strip()
                if line and not line.startswith("#") and "=" in line:
                    key, value = line.split("=", 1)
                    key = key.strip()
                    value = value.strip()
                    if key and value and key not in os.environ:
                        os.environ[key] = value

_load_dotenv()


class Settings:
    """Layout settings loaded from environment variables."""

    def __init__(self):
        # Validation mode
        self.strict_validation: bool = (
            os.environ.get("LAYOUT_STRICT_VALIDATION", "true").lower() == "true"
        )

        # Logging
        self.log_level: str = os.environ.get("LOG_LEVEL", "INFO").upper()

        # Only variables actually present; the rest keep their model defaults
        self.layout_overrides: Dict[str, float] = {
            field: float(os.environ[name])
            for name, field in LAYOUT_ENV_VARS.items()
            if os.environ.get(name)
        }

    def layout_config(self) -> LayoutConfig:
        """Build a validated LayoutConfig from the environment."""
        return LayoutConfig(**self.layout_overrides)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging for scripts and workers."""
    logging.basicConfig(
        level=getattr(logging, (level or get_settings().log_level).upper(), logging.INFO),
        format=LOG_FORMAT,
    )
