"""Configuration for the sketchboard canvas.

Geometry tolerances are module constants. Everything a user may want to tweak
(default style, history cap, zoom range, log level) lives on ``CanvasConfig``
and can be overridden from a JSON file.
"""
from __future__ import annotations

import json
import logging
import math
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr, ValidationError, model_validator

from sketchboard.elements import Style
from sketchboard.errors import ConfigError

logger = logging.getLogger(__name__)

# Hit-testing
HANDLE_TOLERANCE = 5.0  # per-axis distance to count as "on" a corner/endpoint
LINE_TOLERANCE = 1.0  # colinearity offset for straight lines
PENCIL_TOLERANCE = 5.0  # colinearity offset for freehand segments

# Arrow heads
ARROW_HEAD_LENGTH = 20.0
ARROW_HEAD_ANGLE = math.pi / 6

# Pencil outline width is the stroke width times this
PENCIL_OUTLINE_SCALE = 4.0

# Rough glyph advance as a fraction of the font size, for text hit boxes
TEXT_WIDTH_FACTOR = 0.6

CONFIG_ENV_VAR = "SKETCHBOARD_CONFIG"
LOG_LEVEL_ENV_VAR = "SKETCHBOARD_LOG_LEVEL"


@dataclass
class CanvasConfig:
    default_style: Style = field(default_factory=Style)
    history_limit: Optional[int] = None  # None keeps every snapshot
    zoom_min: int = 50
    zoom_max: int = 200
    zoom_step: int = 10
    log_level: str = "INFO"

    def asdict(self) -> Dict[str, Any]:
        return {
            "default_style": self.default_style.asdict(),
            "history_limit": self.history_limit,
            "zoom_min": self.zoom_min,
            "zoom_max": self.zoom_max,
            "zoom_step": self.zoom_step,
            "log_level": self.log_level,
        }


class _StyleSettings(BaseModel):
    model_config = ConfigDict(extra="forbid")

    stroke_color: StrictStr = "#000000"
    background_color: StrictStr = "#ffffff"
    stroke_width: float = Field(2.0, gt=0.0)
    font_size: float = Field(20.0, gt=0.0)
    font_family: StrictStr = "Arial"


class _Settings(BaseModel):
    """Validated shape of a configuration file."""

    model_config = ConfigDict(extra="ignore")

    default_style: _StyleSettings = Field(default_factory=_StyleSettings)
    history_limit: Optional[Annotated[StrictInt, Field(ge=1)]] = None  # null keeps every snapshot
    zoom_min: StrictInt = Field(50, gt=0)
    zoom_max: StrictInt = Field(200, gt=0)
    zoom_step: StrictInt = Field(10, gt=0)
    log_level: StrictStr = "INFO"

    @model_validator(mode="after")
    def _check_zoom_range(self) -> "_Settings":
        if self.zoom_min > self.zoom_max:
            raise ValueError("zoom_min must not exceed zoom_max")
        return self


def _config_from_mapping(data: Dict[str, Any]) -> CanvasConfig:
    known = {f.name for f in fields(CanvasConfig)}
    for key in data:
        if key not in known:
            logger.warning("Ignoring unknown config key %r", key)
    try:
        settings = _Settings.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    return CanvasConfig(
        default_style=Style.from_dict(settings.default_style.model_dump()),
        history_limit=settings.history_limit,
        zoom_min=settings.zoom_min,
        zoom_max=settings.zoom_max,
        zoom_step=settings.zoom_step,
        log_level=settings.log_level,
    )


def load_config(path: str | Path | None = None) -> CanvasConfig:
    """Load a ``CanvasConfig`` from ``path`` or the ``SKETCHBOARD_CONFIG`` file.

    A missing file yields the defaults. The log level can always be overridden
    with ``SKETCHBOARD_LOG_LEVEL``.
    """
    if path is None:
        env_path = os.getenv(CONFIG_ENV_VAR)
        path = Path(env_path) if env_path else None
    config = CanvasConfig()
    if path is not None:
        config_path = Path(path)
        if config_path.exists():
            try:
                with config_path.open("r", encoding="utf-8") as handle:
                    data = json.load(handle)
            except json.JSONDecodeError as exc:
                raise ConfigError(f"Could not parse {config_path}: {exc}") from exc
            if not isinstance(data, dict):
                raise ConfigError(f"{config_path} must contain a JSON object")
            config = _config_from_mapping(data)
        else:
            logger.debug("Config file %s not found, using defaults", config_path)
    env_level = os.getenv(LOG_LEVEL_ENV_VAR)
    if env_level:
        config.log_level = env_level
    return config


__all__ = [
    "HANDLE_TOLERANCE",
    "LINE_TOLERANCE",
    "PENCIL_TOLERANCE",
    "ARROW_HEAD_LENGTH",
    "ARROW_HEAD_ANGLE",
    "PENCIL_OUTLINE_SCALE",
    "TEXT_WIDTH_FACTOR",
    "CanvasConfig",
    "load_config",
]
