"""Entry templates: one-shot transitions that bring an asset on screen."""

from motionblocks.config.defaults import get_template_defaults
from motionblocks.core.scene import group, uniform
from motionblocks.core.templates import (
    AnimationTemplate,
    EvaluationContext,
    RenderProps,
    SlotDefinition,
    SlotType,
    TemplateKind,
)
from motionblocks.templates.common import asset_node, is_asset, prop_reader, single_asset_template
from motionblocks.utils.math.core import clamp01
from motionblocks.utils.math.easing import EasingKind, get_easing

SLIDE_DIRECTIONS = ("left", "right", "top", "bottom")
SLIDE_LAYOUTS = ("row", "column")
MASK_DIRECTIONS = ("horizontal", "vertical")
EASING_NAMES = tuple(kind.value for kind in EasingKind)


def render_fade_in(render_props: RenderProps, context: EvaluationContext):
    asset = render_props.slot("asset")
    if not is_asset(asset):
        return None
    reader = prop_reader(render_props.props, TemplateKind.FADE_IN)
    duration = reader.number("duration", minimum=1)
    opacity = min(1.0, max(0.0, render_props.frame / duration))
    return group(render_props.key(), [asset_node(render_props.key("asset"), asset, reader, context, opacity=opacity)])


def _easing(reader):
    return get_easing(reader.choice("easing", EASING_NAMES))


def _slide_start(direction: str, distance: float):
    if direction == "right":
        return distance, 0.0
    if direction == "top":
        return 0.0, distance
    if direction == "bottom":
        return 0.0, -distance
    return -distance, 0.0


def render_slide_in(render_props: RenderProps, context: EvaluationContext):
    """Slide up to three assets in from one edge.

    Items are laid out centered in a row or a column, ``imageSize + gap``
    apart. Item ``i`` starts ``staggerFrames * i`` frames late and eases in
    with the ``easing`` curve (cubic ease-out by default) from ``distance``
    units away.
    """
    items = [a for a in (render_props.slot("asset"), render_props.slot("asset2"), render_props.slot("asset3"))
             if is_asset(a)]
    if not items:
        return None

    reader = prop_reader(render_props.props, TemplateKind.SLIDE_IN)
    direction = reader.choice("direction", SLIDE_DIRECTIONS)
    layout = reader.choice("layout", SLIDE_LAYOUTS)
    duration = reader.number("duration", minimum=1)
    gap = reader.number("gap")
    image_size = reader.number("imageSize", minimum=1)
    stagger = reader.number("staggerFrames", minimum=0)
    start_x, start_y = _slide_start(direction, reader.number("distance", minimum=0))
    ease = _easing(reader)

    stride = image_size + gap
    first_offset = -(len(items) - 1) * stride / 2
    root = group(render_props.key())
    for i, asset in enumerate(items):
        progress = clamp01((render_props.frame - stagger * i) / duration)
        remaining = 1 - ease(progress)
        offset = first_offset + i * stride
        x = (offset if layout == "row" else 0.0) + start_x * remaining
        y = (-offset if layout == "column" else 0.0) + start_y * remaining
        item = group(render_props.key("item", i), position=(x, y, 0.0))
        item.add(asset_node(render_props.key("asset", i), asset, reader, context))
        root.add(item)
    return root


def render_scale_pop(render_props: RenderProps, context: EvaluationContext):
    asset = render_props.slot("asset")
    if not is_asset(asset):
        return None
    reader = prop_reader(render_props.props, TemplateKind.SCALE_POP)
    pop_frames = reader.number("popFrames", minimum=1)
    scale = min(1.0, max(0.0, render_props.frame / pop_frames)) * reader.number("peakScale", minimum=0)
    pop = group(render_props.key(), scale=uniform(scale))
    return pop.add(asset_node(render_props.key("asset"), asset, reader, context))


def render_mask_reveal(render_props: RenderProps, context: EvaluationContext):
    """Wipe the asset in behind a clip rectangle.

    The surface clips the group to the leading ``clip`` fraction of its
    bounds along ``clip_axis``.
    """
    asset = render_props.slot("asset")
    if not is_asset(asset):
        return None
    reader = prop_reader(render_props.props, TemplateKind.MASK_REVEAL)
    axis = "x" if reader.choice("direction", MASK_DIRECTIONS) == "horizontal" else "y"
    reveal = _easing(reader)(render_props.frame / reader.number("duration", minimum=1))
    mask = group(render_props.key(), attrs={"clip_axis": axis, "clip": reveal})
    return mask.add(asset_node(render_props.key("asset"), asset, reader, context))


FADE_IN = single_asset_template(TemplateKind.FADE_IN, render_fade_in)
SCALE_POP = single_asset_template(TemplateKind.SCALE_POP, render_scale_pop)
MASK_REVEAL = single_asset_template(TemplateKind.MASK_REVEAL, render_mask_reveal)
SLIDE_IN = AnimationTemplate(
    kind=TemplateKind.SLIDE_IN,
    name=TemplateKind.SLIDE_IN.config.display_name,
    render=render_slide_in,
    slots=(
        SlotDefinition("asset", "Asset 1", SlotType.FILE, required=True),
        SlotDefinition("asset2", "Asset 2 (Optional)", SlotType.FILE),
        SlotDefinition("asset3", "Asset 3 (Optional)", SlotType.FILE),
    ),
    default_props=get_template_defaults(TemplateKind.SLIDE_IN.value),
)

ENTRY_TEMPLATES = (FADE_IN, SLIDE_IN, SCALE_POP, MASK_REVEAL)
