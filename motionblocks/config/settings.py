"""Engine settings.

Settings are layered in this order, lowest first:
1. The defaults declared on :class:`EngineSettings`.
2. ``MOTIONBLOCKS_*`` environment variables, such as ``MOTIONBLOCKS_FPS=60``.
3. Explicit overrides passed to :func:`load_settings`.

Invalid values raise ``pydantic.ValidationError`` when settings are loaded.
They never raise during frame evaluation.
"""

import os
from typing import Any, Dict, Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from motionblocks.config.defaults import COUNTER_FLIP_WINDOW
from motionblocks.utils.logging import log

ENV_PREFIX = "MOTIONBLOCKS_"

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class EngineSettings(BaseModel):
    """Global engine configuration."""
    model_config = ConfigDict(extra="ignore", validate_assignment=True)

    fps: int = Field(default=30, gt=0, le=240, description="Timeline frames per second")
    width: int = Field(default=1920, gt=0, description="Canvas width in pixels")
    height: int = Field(default=1080, gt=0, description="Canvas height in pixels")
    playback_rate: float = Field(
        default=30.0, gt=0,
        description="Steps per second of the fixed-rate playback loop"
    )
    log_level: LogLevel = Field(default="INFO", description="Console log verbosity")
    flip_window: float = Field(
        default=COUNTER_FLIP_WINDOW, gt=0, le=1,
        description="Default fraction of a digit's cycle spent flipping in counter templates"
    )
    show_progress: bool = Field(default=True, description="Show a progress bar for offline frame sweeps")

    @property
    def aspect(self) -> float:
        """Canvas aspect ratio (width / height)."""
        return self.width / self.height

    @property
    def frame_dt(self) -> float:
        """Seconds per timeline frame."""
        return 1.0 / self.fps


def _env_overrides(environ: Mapping[str, str]) -> Dict[str, Any]:
    overrides = {}
    for name in EngineSettings.model_fields:
        key = f"{ENV_PREFIX}{name.upper()}"
        if key in environ:
            value: Any = environ[key]
            if name == "log_level":
                value = value.upper()
            overrides[name] = value
    return overrides


def load_settings(
    overrides: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> EngineSettings:
    """Build :class:`EngineSettings` from defaults, environment and overrides.

    Args:
        overrides: Explicit values that win over everything else
        environ: Environment mapping (defaults to ``os.environ``)

    Returns:
        Validated settings; the shared logger level is updated to match

    Raises:
        pydantic.ValidationError: If any layer supplies an invalid value

    Examples:
        >>> load_settings({"fps": 60}, environ={}).frame_dt
        0.016666666666666666
    """
    data = _env_overrides(os.environ if environ is None else environ)
    data.update(dict(overrides or {}))
    settings = EngineSettings(**data)
    log.set_level(settings.log_level)
    log.debug(f"Engine settings: {settings.model_dump()}")
    return settings
