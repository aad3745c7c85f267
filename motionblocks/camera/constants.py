"""Tuned constants for the procedural camera and kinetic text effects.

Values were tuned by eye against 1920x1080 output at 30 fps. They are grouped
into immutable records so the rig and the effect table read them by name.
"""

from typing import NamedTuple


class MotionConstants(NamedTuple):
    """Continuous move stack: drift, orbit, dolly, truck and handheld."""
    drift_x_freq: float = 0.012
    drift_y_freq: float = 0.011
    drift_y_scale: float = 0.55

    phase_step: float = 1.35
    phase_lambda: float = 2.4

    orbit_y_freq_scale: float = 0.82
    orbit_y_phase_scale: float = 0.6
    orbit_y_phase_offset: float = 1.1
    orbit_y_scale: float = 0.32
    orbit_pos_scale: float = 0.18
    orbit_look_scale: float = 0.015

    truck_pos_scale: float = 1.35
    dolly_pos_scale: float = 1.45
    dolly_phase_scale: float = 0.35

    truck_x_freq: float = 0.0039
    truck_y_freq: float = 0.0032
    truck_y_phase_scale: float = 0.7
    truck_y_phase_offset: float = 0.8
    truck_y_scale: float = 0.42
    truck_look_scale: float = 0.02

    handheld_x1: float = 0.13
    handheld_x2: float = 0.071
    handheld_y1: float = 0.11
    handheld_y2: float = 0.067
    handheld_x_phase1: float = 11.0
    handheld_x_phase2: float = 3.3
    handheld_y_phase1: float = 7.7
    handheld_y_phase2: float = 9.1
    handheld_pan_scale_x: float = 0.08
    handheld_pan_scale_y: float = 0.06

    z_base_offset_scale: float = 0.11


class KickConstants(NamedTuple):
    """Per-segment entry kicks keyed on the active effect."""
    base_z_scale: float = 0.22
    base_fov: float = 2.1
    zoom_punch_z_scale: float = 0.75
    zoom_punch_fov: float = 9.5
    spin_pop_y_scale: float = 0.06
    spin_pop_freq: float = 0.35
    slide_kick_scale: float = 0.18
    settle_freq: float = 0.42
    settle_x_scale: float = 0.03
    settle_y_scale: float = 0.015
    whip_clamp_min: float = 60
    glitch_shake_scale: float = 10
    glitch_x_seed: float = 4.2
    glitch_y_seed: float = 5.1
    glitch_y_offset: float = 3.3


class BreathConstants(NamedTuple):
    """Two-sine breathing zoom, applied as push-in only."""
    w1: float = 0.55
    w2: float = 0.45
    f1: float = 0.006
    f2: float = 0.0036
    phase_scale1: float = 0.7
    phase_scale2: float = 0.35
    phase_offset1: float = 0.4
    phase_offset2: float = 2.2
    amp_base: float = 10
    amp_punch_scale: float = 0.004


class FramingConstants(NamedTuple):
    """Safe framing against the background plane."""
    plane_z: float = -120
    safe_margin: float = 0.82
    min_fov: float = 12
    min_plane_aspect: float = 0.2


class DampingConstants(NamedTuple):
    lambda_pos_base: float = 8
    lambda_fov_base: float = 7
    smooth_min: float = 0.02


MOTION = MotionConstants()
KICK = KickConstants()
BREATH = BreathConstants()
FRAMING = FramingConstants()
DAMPING = DampingConstants()


class PopBounce(NamedTuple):
    overshoot: float = 1.7
    pos_y: float = -24


class ZoomBack(NamedTuple):
    scale0: float = 0.55
    scale1: float = 0.45
    pos_y: float = 10


class ZoomPunch(NamedTuple):
    scale0: float = 2.25
    scale1: float = 1.25
    rot_z: float = -0.08


class SlamZoom(NamedTuple):
    slam_frames: float = 10
    s0_base: float = 0.35
    s0_scale: float = 0.95
    s1_base: float = 1.25
    s1_scale: float = 0.25
    s1_overshoot: float = 1.25
    pos_y: float = 90
    rot_z: float = 0.14


class Slide(NamedTuple):
    scale0: float = 0.9
    scale1: float = 0.1
    pos_x: float = 140


class Whip(NamedTuple):
    pos_x: float = 420
    scale0: float = 1.15
    scale1: float = 0.15
    rot_z: float = 0.18


class SpinPop(NamedTuple):
    overshoot: float = 1.85
    min_scale: float = 0.15
    rot_z: float = -0.9
    pos_y: float = -26


class GlitchShake(NamedTuple):
    shake_scale: float = 18
    pos_y_scale: float = 0.6
    rot_z_scale: float = 0.25
    scale0: float = 1.05
    scale1: float = 0.05
    rand_f0: float = 1.7
    rand_f1: float = 2.3
    rand_p1: float = 11.1
    rand_f2: float = 3.1
    rand_p2: float = 7.7


class PopThenType(NamedTuple):
    overshoot: float = 1.65
    pos_y: float = -18


class SlideThenType(NamedTuple):
    scale0: float = 0.9
    scale1: float = 0.1
    pos_x: float = 120


POP_BOUNCE = PopBounce()
ZOOM_BACK = ZoomBack()
ZOOM_PUNCH = ZoomPunch()
SLAM_ZOOM = SlamZoom()
SLIDE = Slide()
WHIP = Whip()
SPIN_POP = SpinPop()
GLITCH_SHAKE = GlitchShake()
POP_THEN_TYPE = PopThenType()
SLIDE_THEN_TYPE = SlideThenType()
