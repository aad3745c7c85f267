"""Timeline reveal: up to five milestones revealed along a horizontal line.

The line draws from left to right across the track's segment frames while the
view pans to follow the focus point between neighbouring items. Each item
gets its own reveal window starting at the sequencer's item start; cards
alternate above and below the line. Glow and disc textures are shared
handles taken from the resource pool under ``node-glow`` and ``node-disc``.
"""

import math
from typing import List, NamedTuple, Optional

from motionblocks.api.models import Asset
from motionblocks.config.defaults import get_template_defaults
from motionblocks.core.scene import NodeKind, SceneNode, group, text_node
from motionblocks.core.segments import derive_timing, item_progress, segment_starts
from motionblocks.core.templates import (
    AnimationTemplate,
    EvaluationContext,
    RenderProps,
    SlotDefinition,
    SlotType,
    TemplateKind,
)
from motionblocks.templates.common import font_url, has_image, is_asset, prop_reader
from motionblocks.utils.math.core import clamp01, lerp, rand01, safe_div
from motionblocks.utils.math.easing import ease_in_out_cubic, ease_in_out_sine, ease_out_cubic

MAX_ITEMS = 5
GLOW_TEXTURE = "node-glow"
DISC_TEXTURE = "node-disc"

# Few items get wider spacing so the line still fills the frame
FEW_ITEMS = 3
FEW_ITEMS_MIN_SPACING = 260
MAX_SPACING = 360

BACKGROUND_Z = -50
BACKGROUND_SIZE = 6000
LINE_Z = -80
HEAD_Z = -70
HEAD_HALO_Z = -72
SPARKLE_Z = -20
SPARKLE_COUNT = 18
SPARKLE_EXTENT = (120, 90)
SPARKLE_SIZE = 2.4
SPARKLE_SPEED = 0.55
BURST_FRAMES = 16
CARD_LIFT = 14


class TimelineItem(NamedTuple):
    label: str
    image: Optional[Asset]


def collect_items(assets, cap: int = MAX_ITEMS) -> List[TimelineItem]:
    """Items with a non-blank label or an image; empty slots are skipped.

    Examples:
        >>> [i.label for i in collect_items({"label1": "Start", "label2": " ", "label3": "End"})]
        ['Start', 'End']
    """
    items = []
    for i in range(1, cap + 1):
        label = assets.get(f"label{i}")
        label = label if isinstance(label, str) else ""
        image = assets.get(f"image{i}")
        image = image if is_asset(image) else None
        if label.strip() or image is not None:
            items.append(TimelineItem(label, image))
    return items


def effective_spacing(spacing: float, count: int) -> float:
    if count <= FEW_ITEMS:
        return min(MAX_SPACING, max(spacing, FEW_ITEMS_MIN_SPACING))
    return spacing


def _sparkles(render_props: RenderProps, x: float, color: str, opacity: float, glow) -> SceneNode:
    frame = render_props.frame
    cloud = group(render_props.key("sparkles"), position=(x, 0.0, SPARKLE_Z))
    for i in range(SPARKLE_COUNT):
        twinkle = 0.5 + 0.5 * math.sin(frame * SPARKLE_SPEED * 0.2 + rand01(i * 5.3) * math.tau)
        cloud.add(SceneNode(
            NodeKind.SPRITE,
            key=render_props.key("sparkle", i),
            position=((rand01(i * 7.1) - 0.5) * SPARKLE_EXTENT[0], (rand01(i * 3.3 + 1.7) - 0.5) * SPARKLE_EXTENT[1], 0.0),
            size=(SPARKLE_SIZE, SPARKLE_SIZE),
            color=color,
            opacity=opacity * twinkle,
            handle=glow,
            attrs={"additive": True},
        ))
    return cloud


def render_timeline_reveal(render_props: RenderProps, context: EvaluationContext):
    reader = prop_reader(render_props.props, TemplateKind.TIMELINE_REVEAL)
    items = collect_items(render_props.assets, reader.integer("itemCount", MAX_ITEMS, minimum=1, maximum=MAX_ITEMS))
    if not items:
        return None

    frame = render_props.frame
    n = len(items)
    accent = reader.color("accentColor")
    glow_alpha = clamp01(reader.number("glowStrength"))
    node_radius = reader.number("nodeRadius", minimum=1)
    image_size = reader.number("imageSize", minimum=1)
    label_size = reader.number("labelSize", minimum=1)
    card_offset = reader.number("cardOffset")
    line_width = reader.number("lineWidth", minimum=1)
    item_zoom = reader.number("itemZoom", minimum=0)
    text_color = reader.color("textColor")
    font = font_url(reader)
    glow = context.resource(GLOW_TEXTURE)
    disc = context.resource(DISC_TEXTURE)

    spacing = effective_spacing(reader.number("spacing", minimum=1), n)
    line_length = (n - 1) * spacing
    left_x = -line_length / 2

    per_item = reader.number("perItemFrames", 0, minimum=0)
    timing = derive_timing(render_props.duration, n, reader.number("introFrames", minimum=0),
                           per_item_frames=per_item or None)
    starts = segment_starts(timing)
    window = timing.reveal_window

    intro_ease = ease_out_cubic(clamp01(safe_div(frame, timing.intro_frames)))
    line_progress = clamp01(safe_div(frame - timing.intro_frames, timing.available_frames))
    focus_float = line_progress * (n - 1)
    focus_idx = max(0, min(n - 1, math.floor(focus_float)))
    focus_local = focus_float - focus_idx
    focus_x = lerp(left_x + focus_idx * spacing, left_x + min(n - 1, focus_idx + 1) * spacing,
                   ease_in_out_cubic(focus_local))
    pan_x = -focus_x * reader.number("panStrength")

    # Zoom peaks halfway between two items instead of breathing constantly
    zoom_pulse = ease_in_out_sine(1 - abs(focus_local - 0.5) * 2)
    zoom = 1 + reader.number("zoomStrength") * (0.35 + 0.65 * zoom_pulse)

    drawn = line_length * line_progress
    head_x = left_x + drawn

    root = group(render_props.key(), position=(pan_x * intro_ease, 0.0, 0.0), scale=(zoom, zoom, 1.0))
    if reader.boolean("backgroundEnabled"):
        root.add(SceneNode(NodeKind.PLANE, key=render_props.key("background"), position=(0.0, 0.0, BACKGROUND_Z),
                           size=(BACKGROUND_SIZE, BACKGROUND_SIZE), color=reader.color("backgroundColor"),
                           opacity=clamp01(reader.number("backgroundOpacity")), attrs={"depth_write": False}))

    root.add(group(render_props.key("line-group"), [
        SceneNode(NodeKind.PLANE, key=render_props.key("line"), position=(left_x + drawn / 2, 0.0, LINE_Z),
                  size=(max(1.0, drawn), line_width), color=reader.color("lineColor"), opacity=0.55,
                  attrs={"depth_write": False}),
        SceneNode(NodeKind.CIRCLE, key=render_props.key("head"), position=(head_x, 0.0, HEAD_Z),
                  size=(max(6.0, line_width * 1.45),), color=accent,
                  opacity=(0.45 + 0.25 * zoom_pulse) * glow_alpha, attrs={"additive": True}),
        SceneNode(NodeKind.CIRCLE, key=render_props.key("head-halo"), position=(head_x, 0.0, HEAD_HALO_Z),
                  size=(max(10.0, line_width * 2.6),), color=accent, opacity=0.12 * glow_alpha,
                  attrs={"additive": True}),
    ]))
    root.add(_sparkles(render_props, focus_x, accent, 0.6 * glow_alpha, glow))

    for idx, item in enumerate(items):
        item_ease = ease_out_cubic(item_progress(frame, starts[idx], window))
        burst = ease_out_cubic(item_progress(frame, starts[idx], min(BURST_FRAMES, window)))
        spotlight = ease_in_out_sine(clamp01(1 - abs(focus_float - idx)))

        focus_zoom = lerp(1.0, 1.0 + item_zoom * 1.8, spotlight)
        node_scale = lerp(0.85, 1.0, item_ease)
        side = 1 if idx % 2 == 0 else -1
        card_y = side * card_offset
        glow_scale = node_radius * 3.2 * lerp(0.7, 1.0, item_ease) * lerp(1.0, 1.25, spotlight)
        halo = glow_scale * 1.95 * lerp(1.0, 1.12, spotlight)
        burst_size = node_radius * (2.0 + 2.8 * burst)

        node = group(render_props.key("item", idx), position=(left_x + idx * spacing, 0.0, lerp(0, -18, spotlight)))
        node.add(SceneNode(NodeKind.SPRITE, key=render_props.key("item-glow", idx), size=(halo, halo), color=accent,
                           opacity=min(0.7, (0.28 + 0.62 * spotlight) * glow_alpha) * item_ease, handle=glow,
                           attrs={"additive": True}))

        focus = group(render_props.key("item-focus", idx), position=(0.0, 0.0, lerp(0, -10, spotlight)),
                      scale=(focus_zoom, focus_zoom, 1.0))
        focus.add(
            SceneNode(NodeKind.RING, key=render_props.key("burst", idx), size=(0.72, 1.0),
                      scale=(burst_size, burst_size, 1.0), color=accent,
                      opacity=(1 - burst) * 0.35 * glow_alpha * item_ease, attrs={"additive": True}),
            SceneNode(NodeKind.SPRITE, key=render_props.key("disc", idx),
                      size=(node_radius * 2.9 * node_scale,) * 2, color=accent, opacity=0.98, handle=disc),
            SceneNode(NodeKind.SPRITE, key=render_props.key("disc-glow", idx),
                      size=(node_radius * 5.4 * node_scale,) * 2, color=accent,
                      opacity=(0.12 + 0.28 * spotlight) * glow_alpha * item_ease, handle=glow,
                      attrs={"additive": True}),
        )

        show_image = has_image(item.image)
        if show_image or item.label:
            card = group(render_props.key("card", idx),
                         position=(0.0, lerp(card_y + side * CARD_LIFT, card_y, item_ease), 0.0))
            if show_image:
                card.add(SceneNode(NodeKind.IMAGE, key=render_props.key("image", idx), asset=item.image,
                                   handle=context.resource(item.image.src), size=(image_size, image_size),
                                   position=(0.0, 26.0 if item.label else 0.0, 2.0)))
            if item.label:
                label = text_node(render_props.key("label", idx), item.label, label_size, text_color,
                                  opacity=item_ease, position=(0.0, -(image_size * 0.72) if show_image else 0.0, 3.0))
                label.attrs.update({"anchor": ("center", "middle"), "font": font})
                card.add(label)
            focus.add(card)
        node.add(focus)
        root.add(node)
    return root


def _slots():
    slots = []
    for i in range(1, MAX_ITEMS + 1):
        slots.append(SlotDefinition(f"label{i}", f"Item {i} Label", SlotType.TEXT))
        slots.append(SlotDefinition(f"image{i}", f"Item {i} Image", SlotType.FILE))
    return tuple(slots)


TIMELINE_REVEAL = AnimationTemplate(
    kind=TemplateKind.TIMELINE_REVEAL,
    name=TemplateKind.TIMELINE_REVEAL.config.display_name,
    render=render_timeline_reveal,
    slots=_slots(),
    default_props=get_template_defaults(TemplateKind.TIMELINE_REVEAL.value),
)
