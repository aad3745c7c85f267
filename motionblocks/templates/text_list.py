"""Bullet list template.

Items fade and slide in from the left one after another. With a title, the
title animates first and the first item starts halfway through its intro.
On tracks too short for ``perItemFrames`` the entries are squeezed closer
together so the last item still lands before the track ends.
"""

import math

from motionblocks.config.defaults import get_template_defaults
from motionblocks.core.scene import NodeKind, SceneNode, group, text_node, uniform
from motionblocks.core.segments import compress_starts
from motionblocks.core.templates import (
    AnimationTemplate,
    EvaluationContext,
    RenderProps,
    SlotDefinition,
    SlotType,
    TemplateKind,
)
from motionblocks.templates.common import font_url, prop_reader
from motionblocks.utils.math.core import clamp01
from motionblocks.utils.math.easing import ease_out_back, ease_out_expo
from motionblocks.utils.text_utils import split_lines

BULLET_TYPES = ("none", "bullet", "number", "arrow")
LIST_STYLES = ("classic", "neon", "3d")
FALLBACK_ITEMS = ("Item 1", "Item 2", "Item 3")

BULLET_OFFSET = 30
TEXT_INDENT = 20
ITEM_SLIDE_PX = 50
ITEM_OVERSHOOT = 0.8
TITLE_SCALE = 1.5
TITLE_MAX_WIDTH = 800
ITEM_MAX_WIDTH = 700
EXTRUDE_DEPTH = 8


def _style_attrs(style: str) -> dict:
    if style == "neon":
        return {"emissive": True, "outline_blur": 6}
    if style == "3d":
        return {"extrude": EXTRUDE_DEPTH}
    return {}


def _bullet(key: str, bullet_type: str, index: int, font_size: float, color: str,
            alpha: float, scale: float, font):
    if bullet_type == "none":
        return None
    bullet = group(key, position=(-BULLET_OFFSET, 0.0, 0.0), scale=uniform(scale))
    if bullet_type == "bullet":
        bullet.add(SceneNode(NodeKind.CIRCLE, key=f"{key}:dot", size=(font_size * 0.15,), color=color, opacity=alpha))
    elif bullet_type == "arrow":
        bullet.add(SceneNode(NodeKind.CIRCLE, key=f"{key}:arrow", size=(font_size * 0.15,), color=color,
                             opacity=alpha, rotation=(0.0, 0.0, -math.pi / 2), attrs={"segments": 3}))
    else:
        label = text_node(f"{key}:number", f"{index + 1}.", font_size, color, opacity=alpha)
        label.attrs.update({"anchor": ("center", "middle"), "font": font})
        bullet.add(label)
    return bullet


def item_starts(count: int, intro: float, per: float, duration: float, has_title: bool):
    """Entry frame of every item, compressed so the last one still enters in time.

    Items normally start ``per`` frames apart, the first one half an intro
    after the title. The last start is capped at ``duration`` minus one entry
    window (an intro, or ``duration / count`` on short tracks).

    Examples:
        >>> item_starts(3, 30, 60, 300, False)
        [0.0, 60.0, 120.0]
        >>> item_starts(4, 30, 60, 120, False)
        [0.0, 30.0, 60.0, 90.0]
    """
    window = min(intro, max(1, duration // max(1, count)))
    first = intro * 0.5 if has_title else 0.0
    return compress_starts(first, per, count, duration - window)


def render_list(render_props: RenderProps, context: EvaluationContext):
    reader = prop_reader(render_props.props, TemplateKind.LIST)
    title = render_props.slot("title")
    title = title.strip() if isinstance(title, str) and title.strip() else None
    items = split_lines(render_props.slot("data")) or list(FALLBACK_ITEMS)

    frame = render_props.frame
    intro = reader.number("introFrames", minimum=1)
    per = reader.number("perItemFrames", minimum=0)
    font_size = reader.number("fontSize", minimum=1)
    gap = reader.number("gap")
    text_color = reader.color("textColor")
    bullet_color = reader.color("bulletColor")
    bullet_type = reader.choice("bulletType", BULLET_TYPES)
    style_attrs = _style_attrs(reader.choice("listStyle", LIST_STYLES))
    font = font_url(reader)

    title_room = gap * TITLE_SCALE if title else 0.0
    start_y = ((len(items) - 1) * gap + title_room) / 2
    root = group(render_props.key())

    if title:
        title_t = ease_out_expo(clamp01(frame / intro))
        heading = text_node(render_props.key("title"), title, font_size * TITLE_SCALE, text_color,
                            opacity=title_t, position=(0.0, start_y + (1 - title_t) * ITEM_SLIDE_PX, 0.0))
        heading.attrs.update({"anchor": ("center", "middle"), "font": font, "max_width": TITLE_MAX_WIDTH,
                              **style_attrs})
        root.add(heading)

    body = group(render_props.key("items"), position=(0.0, start_y - title_room, 0.0))
    starts = item_starts(len(items), intro, per, render_props.duration, bool(title))
    for i, item in enumerate(items):
        progress = clamp01((frame - starts[i]) / intro)
        if progress <= 0:
            continue
        alpha = ease_out_expo(progress)
        scale = ease_out_back(progress, ITEM_OVERSHOOT)
        row = group(render_props.key("item", i), position=((1 - alpha) * -ITEM_SLIDE_PX, -i * gap, 0.0))
        row.add(_bullet(render_props.key("bullet", i), bullet_type, i, font_size, bullet_color, alpha, scale, font))
        label = text_node(render_props.key("label", i), item, font_size, text_color, opacity=alpha,
                          position=(0.0 if bullet_type == "none" else TEXT_INDENT, 0.0, 0.0))
        label.attrs.update({"anchor": ("left", "middle"), "font": font, "max_width": ITEM_MAX_WIDTH,
                            **style_attrs})
        row.add(label)
        body.add(row)
    root.add(body)
    return root


def suggest_list_duration(assets, props) -> int:
    """Frames until the last item has finished its entry, plus one intro of hold."""
    items = split_lines(assets.get("data")) or list(FALLBACK_ITEMS)
    reader = prop_reader(props, TemplateKind.LIST)
    intro = reader.number("introFrames", minimum=1)
    per = reader.number("perItemFrames", minimum=0)
    lead = intro * 0.5 if assets.get("title") else 0
    return int(math.ceil(lead + (len(items) - 1) * per + intro * 2))


LIST = AnimationTemplate(
    kind=TemplateKind.LIST,
    name=TemplateKind.LIST.config.display_name,
    render=render_list,
    slots=(
        SlotDefinition("title", "List Title (Optional)", SlotType.TEXT),
        SlotDefinition("data", "List Items (One per line)", SlotType.DATA_TABLE, required=True,
                       placeholder="\n".join(FALLBACK_ITEMS)),
    ),
    default_props=get_template_defaults(TemplateKind.LIST.value),
    suggest_duration=suggest_list_duration,
)
