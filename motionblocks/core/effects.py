"""Kinetic text effects shared by the text styles and the camera kicks."""

from enum import Enum
from typing import Optional


class KineticEffect(Enum):
    """Entry effect of one kinetic text line."""

    POP_BOUNCE = "pop_bounce"
    ZOOM_BACK = "zoom_back"
    ZOOM_PUNCH = "zoom_punch"
    SLAM_ZOOM = "slam_zoom"
    SLIDE_LEFT = "slide_left"
    SLIDE_RIGHT = "slide_right"
    WHIP_LEFT = "whip_left"
    WHIP_RIGHT = "whip_right"
    TYPEWRITER = "typewriter"
    SPIN_POP = "spin_pop"
    GLITCH_SHAKE = "glitch_shake"
    POP_THEN_TYPE = "pop_then_type"
    SLIDE_THEN_TYPE = "slide_then_type"

    @staticmethod
    def default() -> "KineticEffect":
        return KineticEffect.POP_BOUNCE

    @staticmethod
    def from_string(name: Optional[str]) -> "KineticEffect":
        """Effect for a prop value; unknown or missing names fall back to pop_bounce."""
        for effect in KineticEffect:
            if effect.value == name:
                return effect
        return KineticEffect.default()

    @property
    def has_continuation(self) -> bool:
        """True for effects that type a second run of words after the first."""
        return self in (KineticEffect.POP_THEN_TYPE, KineticEffect.SLIDE_THEN_TYPE)
