from __future__ import annotations

import logging
import os
from typing import Any, Dict, List, Optional

from pydantic import Field, ValidationError

from .errors import ConfigurationError
from .models import BaseConfig

logger = logging.getLogger(__name__)

ENV_PREFIX = "GRAPH_GAMES_"

# Ordered coloring palette; a color is its index here.
PALETTE: List[str] = [
    "#ef4444",
    "#3b82f6",
    "#22c55e",
    "#f59e0b",
    "#8b5cf6",
    "#06b6d4",
    "#f97316",
    "#84cc16",
]
PALETTE_NAMES: List[str] = ["red", "blue", "green", "yellow", "purple", "cyan", "orange", "lime"]


class EngineSettings(BaseConfig):
    """Tunable defaults for the engine, generators and CLI"""
    palette_size: int = Field(default=8, ge=1, le=len(PALETTE))
    history_max_runs: int = Field(default=20, ge=1)

    maze_width: int = Field(default=25, ge=4)
    maze_height: int = Field(default=15, ge=3)
    wall_density: float = Field(default=0.3, ge=0.0, le=1.0)

    path_width: int = Field(default=20, ge=6)
    path_height: int = Field(default=12, ge=1)
    heavy_ratio: float = Field(default=0.3, ge=0.0, le=1.0)

    step_delay: float = Field(default=0.05, ge=0.0)
    log_level: str = "INFO"
    log_file: Optional[str] = None


def load_settings(env: Optional[Dict[str, str]] = None, **overrides: Any) -> EngineSettings:
    """Build settings from ``GRAPH_GAMES_*`` variables, then ``overrides``.

    ``env`` defaults to ``os.environ``. Empty values are ignored.
    """
    env = os.environ if env is None else env
    values: Dict[str, Any] = {}
    for name in EngineSettings.model_fields:
        raw = env.get(ENV_PREFIX + name.upper())
        if raw is not None and raw.strip():
            values[name] = raw.strip()
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        settings = EngineSettings(**values)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid settings: {e}") from e
    logger.debug(f"Loaded settings: {settings.model_dump()}")
    return settings
