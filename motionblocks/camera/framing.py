"""Safe-framing solver.

Keeps the edges of a finite background plane out of frame. Given a desired
camera target, it first pulls the lateral position back so the view center
stays inside the plane. It then narrows the field of view until the visible
rectangle at the plane's depth fits inside the plane, scaled by a safety
margin. The field of view is only ever reduced, never widened, and never
below ``min_fov``.
"""

import math
from typing import NamedTuple, Tuple

import numpy as np

from motionblocks.camera.constants import FRAMING

Vec3 = Tuple[float, float, float]


class CameraTarget(NamedTuple):
    """Desired camera pose before damping."""
    position: Vec3
    look: Vec3
    fov: float


class BackgroundPlane(NamedTuple):
    """Axis-aligned background plane facing the camera."""
    half_width: float
    half_height: float
    z: float = FRAMING.plane_z

    @classmethod
    def from_scale(cls, scale: float, plane_aspect: float = 1.0, z: float = FRAMING.plane_z) -> "BackgroundPlane":
        """Plane of a background rendered ``scale`` wide.

        Image and solid-color backgrounds are square (aspect 1); video
        backgrounds are ``scale / aspect`` tall.

        Examples:
            >>> round(BackgroundPlane.from_scale(6000, 16 / 9).half_height, 3)
            1687.5
        """
        half_w = max(1.0, scale * 0.5)
        half_h = max(1.0, scale / max(FRAMING.min_plane_aspect, plane_aspect) * 0.5)
        return cls(half_w, half_h, z)


def visible_half_extents(position: Vec3, fov: float, aspect: float, plane_z: float = FRAMING.plane_z) -> Tuple[float, float]:
    """Half width and half height of the view rectangle at ``plane_z``."""
    d = max(1.0, position[2] - plane_z)
    half_h = math.tan(math.radians(fov) / 2) * d
    return half_h * aspect, half_h


def _center_at_plane(position: np.ndarray, look: np.ndarray, z: float, plane_z: float) -> np.ndarray:
    # Center ray from the camera through the look point, intersected at the plane depth
    s = (z - plane_z) / z if z != 0 else 1.0
    return position + s * (look - position)


def solve_safe_framing(
    target: CameraTarget,
    plane: BackgroundPlane,
    aspect: float,
    margin: float = FRAMING.safe_margin,
    min_fov: float = FRAMING.min_fov,
) -> CameraTarget:
    """Clamp a camera target so the plane edges never enter the frame.

    Args:
        target: Desired pose (fov in degrees, vertical)
        plane: Background plane extents
        aspect: Viewport width / height
        margin: Fraction of the free room the view may use
        min_fov: Narrowest allowed field of view in degrees

    Returns:
        Target with lateral position pulled in and fov narrowed as needed

    Examples:
        >>> plane = BackgroundPlane.from_scale(6000)
        >>> framed = solve_safe_framing(CameraTarget((0, 0, 1000), (0, 0, 0), 36), plane, 16 / 9)
        >>> framed.fov
        36
    """
    x, y, z = target.position
    d = max(1.0, z - plane.z)
    half_plane = np.array([plane.half_width, plane.half_height], dtype=float)

    view_half = np.array(visible_half_extents(target.position, target.fov, aspect, plane.z))

    lateral = np.array([x, y], dtype=float)
    look = np.array(target.look[:2], dtype=float)

    center = _center_at_plane(lateral, look, z, plane.z)
    center_max = np.maximum(0.0, half_plane - view_half) * margin
    out_of_bounds = (center_max > 0) & (np.abs(center) > center_max)
    shift = np.clip(center, -center_max, center_max) - center
    lateral = lateral + np.where(out_of_bounds, shift, 0.0)

    center = _center_at_plane(lateral, look, z, plane.z)
    avail = np.maximum(0.001, (half_plane - np.abs(center)) * margin)
    fov_max_h = 2 * math.atan(avail[1] / d)
    fov_max_w = 2 * math.atan(avail[0] / (d * aspect))
    fov_max = math.degrees(min(fov_max_h, fov_max_w))
    fov = max(min_fov, min(target.fov, fov_max))

    return CameraTarget((float(lateral[0]), float(lateral[1]), z), target.look, fov)
