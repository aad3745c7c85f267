"""Configuration module for MotionBlocks.

Provides per-template default props, tuned timing constants and the
environment-aware engine settings.
"""

from .defaults import (
    TEMPLATE_DEFAULTS,
    get_template_defaults,
    get_fallback_kinetic_script,
)
from .settings import (
    EngineSettings,
    load_settings,
)

__all__ = [
    # Defaults
    "TEMPLATE_DEFAULTS",
    "get_template_defaults",
    "get_fallback_kinetic_script",
    # Settings
    "EngineSettings",
    "load_settings",
]
