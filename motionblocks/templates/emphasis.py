"""Emphasis templates: looping motion that draws attention to an asset.

All four are periodic in the local frame and never settle, so they suit
tracks of any duration. Shake jitter is seeded from the frame number, so a
seek lands on the same offset a straight playthrough would.
"""

import math

from motionblocks.core.scene import NodeKind, SceneNode, group, uniform
from motionblocks.core.templates import EvaluationContext, RenderProps, TemplateKind
from motionblocks.templates.common import asset_node, is_asset, prop_reader, single_asset_template
from motionblocks.utils.math.core import frame_seed, rand01

GLOW_PULSE_SPEED = 0.14
GLOW_SPREAD = 1.6
# Peak-to-peak shake travel per unit of intensity
SHAKE_TRAVEL = 4.0


def render_pulse(render_props: RenderProps, context: EvaluationContext):
    asset = render_props.slot("asset")
    if not is_asset(asset):
        return None
    reader = prop_reader(render_props.props, TemplateKind.PULSE)
    amplitude = reader.number("intensity", minimum=1) - 1
    scale = 1 + math.sin(render_props.frame * reader.number("speed")) * amplitude
    pulse = group(render_props.key(), scale=uniform(scale))
    return pulse.add(asset_node(render_props.key("asset"), asset, reader, context))


def render_glow(render_props: RenderProps, context: EvaluationContext):
    """Soft halo sprite behind the asset, breathing in opacity."""
    asset = render_props.slot("asset")
    if not is_asset(asset):
        return None
    reader = prop_reader(render_props.props, TemplateKind.GLOW)
    radius = reader.number("radius", minimum=0)
    pulse = 0.5 + 0.5 * math.sin(render_props.frame * GLOW_PULSE_SPEED)

    if asset.is_media and asset.src:
        extent = reader.number("imageSize", minimum=1)
    else:
        extent = context.measure_text(render_props.key("asset"), asset.content or "Text",
                                      reader.number("fontSize", minimum=1))
    halo_size = extent * GLOW_SPREAD + radius * 2
    halo = SceneNode(
        NodeKind.SPRITE,
        key=render_props.key("halo"),
        position=(0.0, 0.0, -1.0),
        size=(halo_size, halo_size),
        color=reader.color("color"),
        opacity=pulse,
        handle=context.resource("node-glow"),
        attrs={"additive": True, "blur": radius},
    )
    return group(render_props.key(), [halo, asset_node(render_props.key("asset"), asset, reader, context)])


def render_bounce(render_props: RenderProps, context: EvaluationContext):
    asset = render_props.slot("asset")
    if not is_asset(asset):
        return None
    reader = prop_reader(render_props.props, TemplateKind.BOUNCE)
    y = abs(math.sin(render_props.frame * reader.number("speed"))) * reader.number("height", minimum=0)
    bounce = group(render_props.key(), position=(0.0, y, 0.0))
    return bounce.add(asset_node(render_props.key("asset"), asset, reader, context))


def render_shake(render_props: RenderProps, context: EvaluationContext):
    asset = render_props.slot("asset")
    if not is_asset(asset):
        return None
    reader = prop_reader(render_props.props, TemplateKind.SHAKE)
    travel = reader.number("intensity", minimum=0) * SHAKE_TRAVEL
    x = (rand01(frame_seed(render_props.frame, 1.0, 0.5)) - 0.5) * travel
    shake = group(render_props.key(), position=(x, 0.0, 0.0))
    return shake.add(asset_node(render_props.key("asset"), asset, reader, context))


PULSE = single_asset_template(TemplateKind.PULSE, render_pulse)
GLOW = single_asset_template(TemplateKind.GLOW, render_glow)
BOUNCE = single_asset_template(TemplateKind.BOUNCE, render_bounce)
SHAKE = single_asset_template(TemplateKind.SHAKE, render_shake)

EMPHASIS_TEMPLATES = (PULSE, GLOW, BOUNCE, SHAKE)
