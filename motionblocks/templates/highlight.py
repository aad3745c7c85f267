"""Text highlight: a marker box sweeping left to right behind one phrase.

The sentence is split case-insensitively into prefix, highlighted phrase and
suffix, laid out as three left-anchored text runs centered as a whole. Run
widths come from the measurement arena, so a seek reuses the widths measured
on any earlier frame. The box is anchored at the left edge of the phrase's
glyphs (leading spaces excluded) and grows to the right.
"""

from motionblocks.config.defaults import get_template_defaults
from motionblocks.core.scene import NodeKind, SceneNode, group, text_node
from motionblocks.core.templates import (
    AnimationTemplate,
    EvaluationContext,
    RenderProps,
    SlotDefinition,
    SlotType,
    TemplateKind,
)
from motionblocks.templates.common import background_layer, fixed_camera, font_url, prop_reader
from motionblocks.utils.math.core import clamp01, safe_div
from motionblocks.utils.math.easing import ease_out_cubic
from motionblocks.utils.text_utils import preserve_edge_spaces, split_highlight

FALLBACK_TEXT = "Highlight Me"

REVEAL_RATE = 1.1
BOX_MIN_HEIGHT = 32
BOX_HEIGHT_RATIO = 0.92
BOX_DEPTH = 6
BOX_OPACITY = 0.85


def highlight_reveal(frame: float, duration: float) -> float:
    """Box growth at ``frame``; reaches 1 slightly before the last frame.

    Examples:
        >>> highlight_reveal(0, 60)
        0.0
        >>> highlight_reveal(59, 60)
        1.0
    """
    t = clamp01(safe_div(frame, duration - 1))
    return ease_out_cubic(clamp01(t * REVEAL_RATE))


def render_highlight(render_props: RenderProps, context: EvaluationContext):
    reader = prop_reader(render_props.props, TemplateKind.HIGHLIGHT)
    full_text = render_props.slot("text")
    full_text = full_text if isinstance(full_text, str) and full_text else FALLBACK_TEXT
    needle = render_props.slot("highlight")
    parts = split_highlight(full_text, needle if isinstance(needle, str) else "")

    font_size = reader.number("fontSize", minimum=1)
    padding = reader.number("highlightPadding", minimum=0)
    font_color = reader.color("fontColor")
    font = font_url(reader)

    def measure(part: str, text: str) -> float:
        return context.measure_text(render_props.key(part), preserve_edge_spaces(text), font_size, font)

    highlighted = parts.highlighted
    core = highlighted.strip()
    left_pad = highlighted[:len(highlighted) - len(highlighted.lstrip())]
    prefix_w = measure("prefix", parts.prefix)
    highlight_w = measure("highlight", highlighted)
    suffix_w = measure("suffix", parts.suffix)
    left_x = -(prefix_w + highlight_w + suffix_w) / 2

    root = group(render_props.key())
    root.add(background_layer(render_props.key("background"), reader, render_props.slot("background"), context).node)

    if highlighted:
        reveal = highlight_reveal(render_props.frame, render_props.duration)
        box_w = (measure("highlight-core", core) + padding * 2) * reveal
        box_left = left_x + prefix_w + measure("highlight-pad", left_pad) - padding + reader.number("highlightXOffset")
        root.add(SceneNode(
            NodeKind.BOX,
            key=render_props.key("box"),
            position=(box_left + box_w / 2, reader.number("highlightYOffset"), -BOX_DEPTH),
            size=(max(0.001, box_w), max(BOX_MIN_HEIGHT, font_size * BOX_HEIGHT_RATIO), BOX_DEPTH),
            color=reader.color("highlightColor"),
            opacity=BOX_OPACITY,
        ))

    line = group(render_props.key("line"), position=(left_x, 0.0, 0.0))
    runs = (
        ("prefix-text", parts.prefix, font_color, 0.0),
        ("highlight-text", highlighted, reader.color("highlightFontColor"), prefix_w),
        ("suffix-text", parts.suffix, font_color, prefix_w + highlight_w),
    )
    for part, text, color, x in runs:
        if not text:
            continue
        run = text_node(render_props.key(part), preserve_edge_spaces(text), font_size, color, position=(x, 0.0, 0.0))
        run.attrs.update({"anchor": ("left", "middle"), "font": font})
        line.add(run)
    root.add(line)
    return root.add(fixed_camera(render_props.key("camera"), reader))


HIGHLIGHT = AnimationTemplate(
    kind=TemplateKind.HIGHLIGHT,
    name=TemplateKind.HIGHLIGHT.config.display_name,
    render=render_highlight,
    slots=(
        SlotDefinition("background", "Background (Image/Video)", SlotType.FILE),
        SlotDefinition("text", "Full Text", SlotType.TEXT, required=True, placeholder=FALLBACK_TEXT),
        SlotDefinition("highlight", "Text to Highlight", SlotType.TEXT, required=True, placeholder=""),
    ),
    default_props=get_template_defaults(TemplateKind.HIGHLIGHT.value),
)
