"""Per-effect transforms of a kinetic text line.

Each effect maps ``(enter_t, local_frame, safe_per, frame)`` to a scale, an
offset, a z-rotation and an opacity multiplier. Every effect except the
typewriter fades in with ``ease_in_out_cubic(enter_t)``; all of them fade out
with the segment's ``alive`` factor.
"""

from typing import Callable, Dict, NamedTuple, Tuple

from motionblocks.camera.constants import (
    GLITCH_SHAKE,
    POP_BOUNCE,
    POP_THEN_TYPE,
    SLAM_ZOOM,
    SLIDE,
    SLIDE_THEN_TYPE,
    SPIN_POP,
    WHIP,
    ZOOM_BACK,
    ZOOM_PUNCH,
)
from motionblocks.core.effects import KineticEffect
from motionblocks.utils.math.core import clamp01, rand01, safe_div
from motionblocks.utils.math.easing import ease_in_out_cubic, ease_out_back, ease_out_expo
from motionblocks.utils.text_utils import split_words_half

CONTINUATION_SEPARATOR = "|"


class KineticStyle(NamedTuple):
    """Transform of the text group for one frame."""
    scale: float = 1.0
    pos_x: float = 0.0
    pos_y: float = 0.0
    rot_z: float = 0.0
    opacity: float = 1.0


class EffectFrame(NamedTuple):
    enter_t: float
    local_frame: float
    safe_per: int
    frame: float


def _pop_bounce(f: EffectFrame) -> KineticStyle:
    return KineticStyle(scale=ease_out_back(f.enter_t, POP_BOUNCE.overshoot), pos_y=(1 - f.enter_t) * POP_BOUNCE.pos_y)


def _zoom_back(f: EffectFrame) -> KineticStyle:
    return KineticStyle(scale=ZOOM_BACK.scale0 + ZOOM_BACK.scale1 * ease_in_out_cubic(f.enter_t),
                        pos_y=(1 - f.enter_t) * ZOOM_BACK.pos_y)


def _zoom_punch(f: EffectFrame) -> KineticStyle:
    t0 = ease_out_expo(f.enter_t)
    return KineticStyle(scale=ZOOM_PUNCH.scale0 - ZOOM_PUNCH.scale1 * t0, rot_z=(1 - t0) * ZOOM_PUNCH.rot_z)


def _slam_zoom(f: EffectFrame) -> KineticStyle:
    # Overshoots past full size within slam_frames, then settles back to 1
    slam = clamp01(f.local_frame / SLAM_ZOOM.slam_frames)
    settle = clamp01(safe_div(f.local_frame - SLAM_ZOOM.slam_frames, f.safe_per - SLAM_ZOOM.slam_frames))
    hit = ease_out_expo(slam)
    if slam < 1:
        scale = SLAM_ZOOM.s0_base + SLAM_ZOOM.s0_scale * hit
    else:
        scale = SLAM_ZOOM.s1_base - SLAM_ZOOM.s1_scale * ease_out_back(settle, SLAM_ZOOM.s1_overshoot)
    return KineticStyle(scale=scale, pos_y=(1 - hit) * SLAM_ZOOM.pos_y, rot_z=(1 - hit) * SLAM_ZOOM.rot_z)


def _slide(sign: float) -> Callable[[EffectFrame], KineticStyle]:
    def style(f: EffectFrame) -> KineticStyle:
        return KineticStyle(scale=SLIDE.scale0 + SLIDE.scale1 * ease_in_out_cubic(f.enter_t),
                            pos_x=(1 - f.enter_t) * SLIDE.pos_x * sign)
    return style


def _whip(sign: float) -> Callable[[EffectFrame], KineticStyle]:
    def style(f: EffectFrame) -> KineticStyle:
        t0 = ease_out_expo(f.enter_t)
        return KineticStyle(scale=WHIP.scale0 - WHIP.scale1 * t0, pos_x=(1 - t0) * WHIP.pos_x * sign,
                            rot_z=(1 - t0) * WHIP.rot_z * sign)
    return style


def _typewriter(f: EffectFrame) -> KineticStyle:
    return KineticStyle()


def _spin_pop(f: EffectFrame) -> KineticStyle:
    spin = 1 - ease_out_expo(f.enter_t)
    return KineticStyle(scale=max(SPIN_POP.min_scale, ease_out_back(f.enter_t, SPIN_POP.overshoot)),
                        rot_z=spin * SPIN_POP.rot_z, pos_y=spin * SPIN_POP.pos_y)


def _glitch_shake(f: EffectFrame) -> KineticStyle:
    t0 = ease_out_expo(f.enter_t)
    shake = (1 - t0) * GLITCH_SHAKE.shake_scale
    r0 = rand01(f.frame * GLITCH_SHAKE.rand_f0)
    r1 = rand01(f.frame * GLITCH_SHAKE.rand_f1 + GLITCH_SHAKE.rand_p1)
    r2 = rand01(f.frame * GLITCH_SHAKE.rand_f2 + GLITCH_SHAKE.rand_p2)
    return KineticStyle(
        scale=GLITCH_SHAKE.scale0 - GLITCH_SHAKE.scale1 * t0,
        pos_x=(r0 - 0.5) * shake,
        pos_y=(r1 - 0.5) * shake * GLITCH_SHAKE.pos_y_scale,
        rot_z=(r2 - 0.5) * (1 - t0) * GLITCH_SHAKE.rot_z_scale,
    )


def _pop_then_type(f: EffectFrame) -> KineticStyle:
    return KineticStyle(scale=ease_out_back(f.enter_t, POP_THEN_TYPE.overshoot),
                        pos_y=(1 - f.enter_t) * POP_THEN_TYPE.pos_y)


def _slide_then_type(f: EffectFrame) -> KineticStyle:
    return KineticStyle(scale=SLIDE_THEN_TYPE.scale0 + SLIDE_THEN_TYPE.scale1 * ease_in_out_cubic(f.enter_t),
                        pos_x=(1 - f.enter_t) * SLIDE_THEN_TYPE.pos_x)


_STYLE_FUNCTIONS: Dict[KineticEffect, Callable[[EffectFrame], KineticStyle]] = {
    KineticEffect.POP_BOUNCE: _pop_bounce,
    KineticEffect.ZOOM_BACK: _zoom_back,
    KineticEffect.ZOOM_PUNCH: _zoom_punch,
    KineticEffect.SLAM_ZOOM: _slam_zoom,
    KineticEffect.SLIDE_LEFT: _slide(1.0),
    KineticEffect.SLIDE_RIGHT: _slide(-1.0),
    KineticEffect.WHIP_LEFT: _whip(1.0),
    KineticEffect.WHIP_RIGHT: _whip(-1.0),
    KineticEffect.TYPEWRITER: _typewriter,
    KineticEffect.SPIN_POP: _spin_pop,
    KineticEffect.GLITCH_SHAKE: _glitch_shake,
    KineticEffect.POP_THEN_TYPE: _pop_then_type,
    KineticEffect.SLIDE_THEN_TYPE: _slide_then_type,
}


def compute_kinetic_style(effect: KineticEffect, enter_t: float, local_frame: float, safe_per: int,
                          alive: float, frame: float) -> KineticStyle:
    """Transform of a kinetic line for one frame.

    Args:
        effect: Entry effect of the active line
        enter_t: Linear enter progress in ``[0, 1]``
        local_frame: Frame within the line's segment
        safe_per: Segment length in frames
        alive: Exit fade factor (1 until the exit window starts)
        frame: Track-local frame, used to seed glitch jitter

    Returns:
        KineticStyle with the opacity already multiplied by ``alive``

    Examples:
        >>> compute_kinetic_style(KineticEffect.ZOOM_BACK, 0.0, 0, 45, 1.0, 0).scale
        0.55
        >>> compute_kinetic_style(KineticEffect.TYPEWRITER, 0.0, 0, 45, 0.5, 0).opacity
        0.5
    """
    style = _STYLE_FUNCTIONS[effect](EffectFrame(enter_t, local_frame, safe_per, frame))
    if effect == KineticEffect.TYPEWRITER:
        return style._replace(opacity=alive)
    return style._replace(opacity=ease_in_out_cubic(enter_t) * alive)


def parse_two_part_segment(text: str, effect: KineticEffect) -> Tuple[str, str]:
    """Split a script line into the lead run and its typed continuation.

    An explicit ``|`` always splits. Otherwise continuation effects split the
    words in half and every other effect keeps the whole line as the lead.

    Examples:
        >>> parse_two_part_segment("text animation | just works", KineticEffect.POP_BOUNCE)
        ('text animation', 'just works')
        >>> parse_two_part_segment("we will break down", KineticEffect.SLIDE_THEN_TYPE)
        ('we will', 'break down')
        >>> parse_two_part_segment("we will break down", KineticEffect.SLIDE_LEFT)
        ('we will break down', '')
    """
    raw = text or ""
    head, sep, tail = raw.partition(CONTINUATION_SEPARATOR)
    if sep:
        return head.strip(), tail.strip()
    if effect.has_continuation:
        return split_words_half(raw)
    return raw.strip(), ""
