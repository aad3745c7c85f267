"""Procedural camera rig.

The rig turns a camera *cue* emitted by a template into a damped camera pose.
It works in three layers:

1. Motion composition (:func:`compose_target`) is a pure function of the
   frame, the cue and a damped phase. It stacks drift, orbit, dolly, truck,
   band-limited handheld, per-effect entry kicks and a push-in-only
   breathing zoom.
2. Safe framing (:func:`~motionblocks.camera.framing.solve_safe_framing`)
   keeps the background plane edges out of view.
3. Damping (:func:`advance`) exponentially smooths the explicitly carried
   :class:`CameraState` toward the target.

The damped state is the only state carried between frames. It lives in a
:class:`CameraRig`, which the engine owns per track and resets on seek and
restart.

Cue types:
    KineticCue: kinetic text segment (full motion stack)
    FocusCue: damped move toward a position/look-at pair (mind map)
    FixedCue: static pose (saved camera props, charts)
"""

import math
from typing import Any, Callable, Mapping, NamedTuple, Optional, Tuple, Union

import numpy as np

from motionblocks.api.models import CameraSnapshot
from motionblocks.camera.constants import BREATH, DAMPING, KICK, MOTION
from motionblocks.camera.framing import BackgroundPlane, CameraTarget, solve_safe_framing
from motionblocks.core.effects import KineticEffect
from motionblocks.core.props import PropReader
from motionblocks.utils.logging import log
from motionblocks.utils.math.core import clamp, exp_damp, exp_damp_array, rand01
from motionblocks.utils.math.easing import ease_out_expo

Vec3 = Tuple[float, float, float]

DEFAULT_ASPECT = 16 / 9
DEFAULT_FOV = 50.0


class CameraRigParams(NamedTuple):
    """Amplitudes and rates of the kinetic camera (track props ``camera*``)."""
    drift: float = 14
    punch: float = 260
    whip: float = 320
    pan: float = 220
    smooth: float = 0.2
    orbit: float = 320
    orbit_speed: float = 0.008
    dolly: float = 360
    dolly_speed: float = 0.006
    z_base: float = 1000
    fov_base: float = 36
    background_scale: float = 6000
    background_plane_aspect: float = 1.0
    aspect: float = DEFAULT_ASPECT
    base: Optional[Vec3] = None

    @property
    def base_position(self) -> Vec3:
        return self.base if self.base is not None else (0.0, 0.0, self.z_base)

    @classmethod
    def from_props(cls, props: Mapping[str, Any], background_plane_aspect: float = 1.0) -> "CameraRigParams":
        """Read rig parameters from kinetic text props (malformed values fall back)."""
        defaults = cls()
        reader = PropReader(props)
        return cls(
            drift=reader.number("cameraDrift", defaults.drift),
            punch=reader.number("cameraPunch", defaults.punch),
            whip=reader.number("cameraWhip", defaults.whip),
            pan=reader.number("cameraPan", defaults.pan),
            smooth=reader.number("cameraSmooth", defaults.smooth, minimum=0),
            orbit=reader.number("cameraOrbit", defaults.orbit),
            orbit_speed=reader.number("cameraOrbitSpeed", defaults.orbit_speed),
            dolly=reader.number("cameraDolly", defaults.dolly),
            dolly_speed=reader.number("cameraDollySpeed", defaults.dolly_speed),
            z_base=reader.number("cameraZBase", defaults.z_base),
            fov_base=reader.number("cameraFovBase", defaults.fov_base, minimum=1, maximum=170),
            background_scale=reader.number("backgroundScale", defaults.background_scale, minimum=1),
            background_plane_aspect=background_plane_aspect,
        )


class KineticCue(NamedTuple):
    """Camera request of a kinetic text frame."""
    segment_index: int
    local_frame: float
    enter_t: float
    effect: KineticEffect
    params: CameraRigParams = CameraRigParams()


class FocusCue(NamedTuple):
    """Damped move toward ``position`` while looking at ``look_at``.

    ``lambda_rate`` is the damping rate per second for both position and
    look point. ``fov`` of None keeps the current field of view.
    """
    position: Vec3
    look_at: Vec3
    lambda_rate: float
    fov: Optional[float] = None


class FixedCue(NamedTuple):
    """Static camera pose applied without damping."""
    position: Vec3
    look_at: Vec3 = (0.0, 0.0, 0.0)
    fov: float = DEFAULT_FOV


CameraCue = Union[KineticCue, FocusCue, FixedCue]


class CameraState(NamedTuple):
    """Damped camera state carried between frames."""
    position: Vec3
    look: Vec3
    fov: float


class CameraPose(NamedTuple):
    """Camera pose handed to the rendering surface."""
    position: Vec3
    target: Vec3
    fov: float


def _vec(values) -> Vec3:
    return (float(values[0]), float(values[1]), float(values[2]))


def damping_rates(smooth: float) -> Tuple[float, float]:
    """Position and fov damping rates for a ``smooth`` setting.

    Examples:
        >>> [round(rate, 3) for rate in damping_rates(0.2)]
        [1.6, 1.4]
    """
    s = max(DAMPING.smooth_min, smooth)
    return DAMPING.lambda_pos_base * s, DAMPING.lambda_fov_base * s


def advance_phase(phase: float, segment_index: int, dt: float) -> float:
    """Ease the per-segment framing phase toward ``segment_index * 1.35``."""
    return exp_damp(phase, segment_index * MOTION.phase_step, MOTION.phase_lambda, dt)


def advance(
    state: CameraState,
    target: CameraTarget,
    dt: float,
    lambda_pos: float,
    lambda_fov: float,
    lambda_look: Optional[float] = None,
) -> CameraState:
    """Exponentially damp a camera state toward a target.

    Pure: the same inputs always give the same state. A non-positive ``dt``
    leaves position and fov unchanged.

    Args:
        state: Current damped state
        target: Desired pose
        dt: Elapsed seconds
        lambda_pos: Damping rate for position
        lambda_fov: Damping rate for fov
        lambda_look: Damping rate for the look point (None snaps it)

    Returns:
        New CameraState
    """
    position = exp_damp_array(np.array(state.position), np.array(target.position), lambda_pos, dt)
    if lambda_look is None:
        look = target.look
    else:
        look = _vec(exp_damp_array(np.array(state.look), np.array(target.look), lambda_look, dt))
    fov = exp_damp(state.fov, target.fov, lambda_fov, dt)
    return CameraState(_vec(position), _vec(look), fov)


def _kicks(params: CameraRigParams, frame: float, cue: KineticCue) -> Tuple[float, float, float, float]:
    kick_t = ease_out_expo(cue.enter_t)
    remaining = 1 - kick_t
    effect = cue.effect

    kick_x = 0.0
    kick_y = 0.0
    kick_z = params.punch * KICK.base_z_scale * remaining
    kick_fov = KICK.base_fov * remaining

    if effect in (KineticEffect.ZOOM_PUNCH, KineticEffect.SLAM_ZOOM):
        kick_z += params.punch * KICK.zoom_punch_z_scale * remaining
        kick_fov += KICK.zoom_punch_fov * remaining
    elif effect == KineticEffect.WHIP_LEFT:
        kick_x += params.whip * remaining
    elif effect == KineticEffect.WHIP_RIGHT:
        kick_x -= params.whip * remaining
    elif effect == KineticEffect.SLIDE_LEFT:
        kick_x += params.whip * KICK.slide_kick_scale * remaining
    elif effect == KineticEffect.SLIDE_RIGHT:
        kick_x -= params.whip * KICK.slide_kick_scale * remaining
    elif effect == KineticEffect.SPIN_POP:
        kick_y += params.whip * KICK.spin_pop_y_scale * math.sin(cue.local_frame * KICK.spin_pop_freq) * remaining
    elif effect == KineticEffect.GLITCH_SHAKE:
        shake = remaining * KICK.glitch_shake_scale
        kick_x += (rand01(frame * KICK.glitch_x_seed) - 0.5) * shake
        kick_y += (rand01(frame * KICK.glitch_y_seed + KICK.glitch_y_offset) - 0.5) * shake

    settle = math.sin(cue.local_frame * KICK.settle_freq) * remaining
    kick_x += settle * params.whip * KICK.settle_x_scale
    kick_y += settle * params.whip * KICK.settle_y_scale

    whip_clamp = max(KICK.whip_clamp_min, params.whip)
    kick_x = clamp(-whip_clamp, kick_x, whip_clamp)
    return kick_x, kick_y, kick_z, kick_fov


def compose_target(params: CameraRigParams, frame: float, cue: KineticCue, phase: float) -> CameraTarget:
    """Compose the undamped kinetic camera target for a frame.

    Pure function of its arguments; ``phase`` is the damped segment phase.
    """
    t = frame
    base_x, base_y, base_z = params.base_position

    drift_x = math.sin(t * MOTION.drift_x_freq) * params.drift
    drift_y = math.cos(t * MOTION.drift_y_freq) * params.drift * MOTION.drift_y_scale

    orbit_t = t * params.orbit_speed
    orbit_x = math.sin(orbit_t + phase) * params.orbit
    orbit_y = math.sin(
        orbit_t * MOTION.orbit_y_freq_scale + phase * MOTION.orbit_y_phase_scale + MOTION.orbit_y_phase_offset
    ) * params.orbit * MOTION.orbit_y_scale

    dolly_z = math.sin(t * params.dolly_speed + phase * MOTION.dolly_phase_scale) * params.dolly * MOTION.dolly_pos_scale

    truck_x = math.sin(t * MOTION.truck_x_freq + phase) * params.pan * MOTION.truck_pos_scale
    truck_y = math.sin(
        t * MOTION.truck_y_freq + phase * MOTION.truck_y_phase_scale + MOTION.truck_y_phase_offset
    ) * params.pan * MOTION.truck_y_scale * MOTION.truck_pos_scale

    handheld_x = (math.sin(t * MOTION.handheld_x1 + MOTION.handheld_x_phase1)
                  + math.sin(t * MOTION.handheld_x2 + MOTION.handheld_x_phase2)) * 0.5
    handheld_y = (math.sin(t * MOTION.handheld_y1 + MOTION.handheld_y_phase1)
                  + math.sin(t * MOTION.handheld_y2 + MOTION.handheld_y_phase2)) * 0.5
    handheld_x *= params.pan * MOTION.handheld_pan_scale_x
    handheld_y *= params.pan * MOTION.handheld_pan_scale_y

    z_base_offset = -params.punch * MOTION.z_base_offset_scale
    kick_x, kick_y, kick_z, kick_fov = _kicks(params, frame, cue)

    target_x = base_x + drift_x + orbit_x * MOTION.orbit_pos_scale + truck_x + handheld_x + kick_x
    target_y = base_y + drift_y + orbit_y * MOTION.orbit_pos_scale + truck_y + handheld_y + kick_y
    target_z = (base_z or params.z_base) + dolly_z + z_base_offset + kick_z

    breath = (
        BREATH.w1 * math.sin(t * BREATH.f1 + phase * BREATH.phase_scale1 + BREATH.phase_offset1)
        + BREATH.w2 * math.sin(t * BREATH.f2 + phase * BREATH.phase_scale2 + BREATH.phase_offset2)
    )
    # Push-in only: breathing may narrow the fov, never widen it
    breath_fov = -max(0.0, breath) * (BREATH.amp_base + params.punch * BREATH.amp_punch_scale)

    look_x = orbit_x * MOTION.orbit_look_scale + truck_x * MOTION.truck_look_scale
    look_y = orbit_y * MOTION.orbit_look_scale + truck_y * MOTION.truck_look_scale

    return CameraTarget(
        (target_x, target_y, target_z),
        (look_x, look_y, 0.0),
        params.fov_base + kick_fov + breath_fov,
    )


class CameraRig:
    """Stateful camera that follows cues with damping.

    Attributes:
        state: Current damped state (None until the first step)
        phase: Damped kinetic framing phase

    Examples:
        >>> rig = CameraRig()
        >>> pose = rig.step(FixedCue((0, 0, 800)), frame=0, dt=1 / 30)
        >>> pose.position
        (0.0, 0.0, 800.0)
    """

    def __init__(self, aspect: Optional[float] = None,
                 on_save: Optional[Callable[[CameraSnapshot], None]] = None):
        self.aspect = aspect
        self.on_save = on_save
        self.state: Optional[CameraState] = None
        self.phase = 0.0

    def reset(self):
        """Forget the damped state after a seek or a track change."""
        self.state = None
        self.phase = 0.0

    def step(self, cue: CameraCue, frame: float, dt: float) -> CameraPose:
        """Advance the rig one frame toward ``cue`` and return the pose."""
        if isinstance(cue, KineticCue):
            self._step_kinetic(cue, frame, dt)
        elif isinstance(cue, FocusCue):
            target = CameraTarget(_vec(cue.position), _vec(cue.look_at),
                                  cue.fov if cue.fov is not None else self._current_fov())
            if self.state is None:
                self.state = CameraState(target.position, target.look, target.fov)
            else:
                self.state = advance(self.state, target, dt, cue.lambda_rate, cue.lambda_rate, cue.lambda_rate)
        else:
            self.state = CameraState(_vec(cue.position), _vec(cue.look_at), float(cue.fov))
        return self.pose()

    def _current_fov(self) -> float:
        return self.state.fov if self.state is not None else DEFAULT_FOV

    def _step_kinetic(self, cue: KineticCue, frame: float, dt: float):
        params = cue.params
        if self.aspect is not None:
            params = params._replace(aspect=self.aspect)
        if self.state is None:
            self.state = CameraState(_vec(params.base_position), (0.0, 0.0, 0.0), float(params.fov_base))
        self.phase = advance_phase(self.phase, cue.segment_index, dt)
        target = compose_target(params, frame, cue, self.phase)
        plane = BackgroundPlane.from_scale(params.background_scale, params.background_plane_aspect)
        target = solve_safe_framing(target, plane, params.aspect)
        lambda_pos, lambda_fov = damping_rates(params.smooth)
        self.state = advance(self.state, target, dt, lambda_pos, lambda_fov)

    def pose(self) -> Optional[CameraPose]:
        if self.state is None:
            return None
        return CameraPose(self.state.position, self.state.look, self.state.fov)

    def snapshot(self) -> Optional[CameraSnapshot]:
        """Current damped pose as a serializable snapshot (None before the first step)."""
        if self.state is None:
            return None
        return CameraSnapshot(position=self.state.position, target=self.state.look, fov=self.state.fov)

    def save(self) -> Optional[CameraSnapshot]:
        """Snapshot the current pose and hand it to ``on_save``."""
        snapshot = self.snapshot()
        if snapshot is None:
            log.warning("Camera save requested before the rig produced a pose")
            return None
        if self.on_save is not None:
            self.on_save(snapshot)
        log.info(f"Saved camera at {tuple(round(v, 2) for v in snapshot.position)}", log.GREEN)
        return snapshot
