"""Kinetic typography: one script line at a time, each with its own entry effect.

Every non-empty script line is a segment of ``perSegmentFrames`` frames,
shortened when the lines would not otherwise fit in the track.
``segmentEffects`` picks the effect per line (pop_bounce when missing or
unknown). Continuation effects type a second run of words in the accent
color after the lead run has landed. The template also emits a kinetic
camera cue, which the engine turns into the procedural camera move.
"""

import math
from typing import List, NamedTuple

from motionblocks.camera.rig import CameraRigParams, KineticCue
from motionblocks.config.defaults import (
    KINETIC_CONTINUATION_OVERSHOOT,
    KINETIC_CONTINUATION_SLIDE_FRAMES,
    KINETIC_MIN_SEGMENT_FRAMES,
    get_fallback_kinetic_script,
    get_template_defaults,
)
from motionblocks.core.effects import KineticEffect
from motionblocks.core.scene import group, text_node
from motionblocks.core.segments import fit_segment_frames, kinetic_segment
from motionblocks.core.templates import (
    AnimationTemplate,
    EvaluationContext,
    RenderProps,
    SlotDefinition,
    SlotType,
    TemplateKind,
)
from motionblocks.templates.common import background_layer, camera_node, font_url, prop_reader
from motionblocks.templates.kinetic_effects import compute_kinetic_style, parse_two_part_segment
from motionblocks.utils.math.core import clamp01, safe_div
from motionblocks.utils.math.easing import ease_out_back
from motionblocks.utils.text_utils import preserve_edge_spaces, split_lines, typed_prefix

# Typewriter starts two frames in and finishes six frames before the segment ends
TYPE_LEAD_FRAMES = 2
TYPE_TAIL_FRAMES = 6


class ScriptLine(NamedTuple):
    text: str
    effect: KineticEffect


def parse_script(script, effects) -> List[ScriptLine]:
    """Script lines paired with their effects; an empty script uses the fallback lines.

    Examples:
        >>> [line.effect.value for line in parse_script("Hello\\nWorld", ["zoom_back"])]
        ['zoom_back', 'pop_bounce']
        >>> len(parse_script("", []))
        4
    """
    effects = effects if isinstance(effects, (list, tuple)) else []
    lines = [
        ScriptLine(text, KineticEffect.from_string(effects[i] if i < len(effects) else None))
        for i, text in enumerate(split_lines(script))
    ]
    if lines:
        return lines
    return [ScriptLine(text, KineticEffect.from_string(effect)) for text, effect in get_fallback_kinetic_script()]


def render_kinetic_text(render_props: RenderProps, context: EvaluationContext):
    reader = prop_reader(render_props.props, TemplateKind.KINETIC_TEXT)
    lines = parse_script(render_props.slot("script"), reader.sequence("segmentEffects"))
    frame = render_props.frame

    segment = kinetic_segment(
        frame,
        len(lines),
        fit_segment_frames(reader.number("perSegmentFrames", minimum=KINETIC_MIN_SEGMENT_FRAMES), len(lines),
                           render_props.duration),
        reader.number("enterFrames", minimum=0),
        reader.number("exitFrames", minimum=0),
    )
    line = lines[segment.index]
    effect = line.effect
    local = segment.local_frame
    style = compute_kinetic_style(effect, segment.enter_t, local, segment.safe_per, segment.alive, frame)

    font_size = reader.number("fontSize", minimum=1)
    font = font_url(reader)
    lead, continuation = parse_two_part_segment(line.text, effect)

    if effect == KineticEffect.TYPEWRITER:
        base = line.text.strip()
        type_t = clamp01(safe_div(local - TYPE_LEAD_FRAMES, segment.safe_per - TYPE_TAIL_FRAMES))
        lead_display = preserve_edge_spaces(typed_prefix(base, type_t))
    else:
        lead_display = preserve_edge_spaces(lead)
    lead_w = context.measure_text(render_props.key("lead", segment.index), lead_display, font_size, font)

    runs = group(render_props.key("runs"), position=(-lead_w / 2, 0.0, 0.0))
    lead_node = text_node(render_props.key("lead-text"), lead_display, font_size, reader.color("fontColor"),
                          opacity=style.opacity)
    lead_node.attrs.update({"anchor": ("left", "middle"), "font": font})
    runs.add(lead_node)

    if effect.has_continuation and continuation:
        start = max(0, math.floor(reader.number("continuationDelayFrames", minimum=0)))
        type_t = clamp01(safe_div(local - start, reader.number("continuationTypeFrames")))
        slide_t = ease_out_back(clamp01((local - start) / KINETIC_CONTINUATION_SLIDE_FRAMES),
                                KINETIC_CONTINUATION_OVERSHOOT)
        shown = typed_prefix(continuation, type_t)
        tail = text_node(render_props.key("continuation-text"),
                         preserve_edge_spaces(" " + shown if lead else shown),
                         font_size, reader.color("accentColor"), opacity=style.opacity,
                         position=(lead_w + (1 - slide_t) * reader.number("slidePx", minimum=0), 0.0, 0.0))
        tail.attrs.update({"anchor": ("left", "middle"), "font": font})
        runs.add(tail)

    root = group(render_props.key())
    background = background_layer(render_props.key("background"), reader, render_props.slot("background"), context)
    root.add(background.node)
    root.add(group(render_props.key("line"), [runs], position=(style.pos_x, style.pos_y, 0.0),
                   rotation=(0.0, 0.0, style.rot_z), scale=(style.scale, style.scale, 1.0)))

    if reader.boolean("cameraMotionEnabled"):
        params = CameraRigParams.from_props(render_props.props, background.plane_aspect)
        cue = KineticCue(segment.index, local, segment.enter_t, effect, params)
        root.add(camera_node(render_props.key("camera"), cue))
    return root


def suggest_kinetic_duration(assets, props):
    """``lines * perSegmentFrames`` when auto duration is on."""
    reader = prop_reader(props, TemplateKind.KINETIC_TEXT)
    if not reader.boolean("autoDuration"):
        return None
    lines = parse_script(assets.get("script"), reader.sequence("segmentEffects"))
    safe_per = max(KINETIC_MIN_SEGMENT_FRAMES, math.floor(reader.number("perSegmentFrames")))
    return len(lines) * safe_per


KINETIC_TEXT = AnimationTemplate(
    kind=TemplateKind.KINETIC_TEXT,
    name=TemplateKind.KINETIC_TEXT.config.display_name,
    render=render_kinetic_text,
    slots=(
        SlotDefinition("background", "Background (Image/Video)", SlotType.FILE),
        SlotDefinition("script", "Script (one segment per line)", SlotType.TEXT, required=True, placeholder=""),
    ),
    default_props=get_template_defaults(TemplateKind.KINETIC_TEXT.value),
    suggest_duration=suggest_kinetic_duration,
)
