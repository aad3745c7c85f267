"""Procedural camera: motion composition, safe framing and damping."""

from .framing import BackgroundPlane, CameraTarget, solve_safe_framing
from .rig import (
    CameraPose,
    CameraRig,
    CameraRigParams,
    CameraState,
    FixedCue,
    FocusCue,
    KineticCue,
    advance,
    compose_target,
)

__all__ = [
    "BackgroundPlane",
    "CameraTarget",
    "solve_safe_framing",
    "CameraPose",
    "CameraRig",
    "CameraRigParams",
    "CameraState",
    "FixedCue",
    "FocusCue",
    "KineticCue",
    "advance",
    "compose_target",
]
