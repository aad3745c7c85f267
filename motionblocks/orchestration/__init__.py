"""Orchestration module for MotionBlocks - per-frame evaluation and playback."""

from .engine import AssetResolver, Engine, FrameResult, resolver_from_assets
from .playback import PlaybackDriver

__all__ = [
    "AssetResolver",
    "Engine",
    "FrameResult",
    "resolver_from_assets",
    "PlaybackDriver",
]
