"""Scene-building helpers shared by several templates."""

from typing import Any, Mapping, NamedTuple, Optional

from motionblocks.api.models import Asset, AssetType
from motionblocks.config.defaults import (
    BACKGROUND_MAX_ASPECT,
    BACKGROUND_MIN_ASPECT,
    BACKGROUND_PLANE_Z,
    get_template_defaults,
)
from motionblocks.camera.rig import CameraCue, FixedCue
from motionblocks.core.props import PropReader
from motionblocks.core.scene import NodeKind, SceneNode, media_node, text_node
from motionblocks.core.templates import AnimationTemplate, EvaluationContext, SlotDefinition, SlotType, TemplateKind
from motionblocks.utils.math.core import clamp01

FALLBACK_TEXT = "Text"
DEFAULT_CAMERA_POSITION = (0.0, 0.0, 1000.0)


class Background(NamedTuple):
    """Background plane node and the aspect the camera should frame against."""
    node: Optional[SceneNode]
    plane_aspect: float
    scale: float


def is_asset(value: Any) -> bool:
    return isinstance(value, Asset)


def has_image(asset: Any) -> bool:
    """True for image/svg assets that carry a locator."""
    return is_asset(asset) and asset.type in (AssetType.IMAGE, AssetType.SVG) and bool(asset.src)


def has_video(asset: Any) -> bool:
    return is_asset(asset) and asset.type == AssetType.VIDEO and bool(asset.src)


def font_url(reader: PropReader) -> Optional[str]:
    """Project-wide font injected by the engine as ``globalFontUrl``."""
    return reader.string("globalFontUrl", "") or None


def asset_node(key: str, asset: Asset, reader: PropReader, context: EvaluationContext,
               opacity: float = 1.0, **kwargs) -> SceneNode:
    """Render a single asset: media as a square plane, anything else as text.

    Reads ``imageSize``, ``fontSize`` and ``textColor`` from the template props.
    """
    if asset.is_media and asset.src:
        return media_node(key, asset, reader.number("imageSize", 400, minimum=1),
                          handle=context.resource(asset.src), opacity=opacity, **kwargs)
    node = text_node(key, asset.content or FALLBACK_TEXT, reader.number("fontSize", 60, minimum=1),
                     reader.color("textColor", "#0f172a"), opacity=opacity, **kwargs)
    node.attrs.update({"anchor": ("center", "middle"), "font": font_url(reader)})
    return node


def background_layer(key: str, reader: PropReader, asset: Any, context: EvaluationContext,
                     z: float = BACKGROUND_PLANE_Z) -> Background:
    """Optional full-bleed background behind a text template.

    Image/svg backgrounds and solid colors are square planes
    ``backgroundScale`` wide; videos are ``backgroundScale / aspect`` tall.
    Text assets produce no background.
    """
    scale = reader.number("backgroundScale", 6000, minimum=1)
    if not reader.boolean("backgroundEnabled", False):
        return Background(None, 1.0, scale)

    opacity = clamp01(reader.number("backgroundOpacity", 1.0))
    position = (0.0, 0.0, float(z))
    attrs = {"depth_write": False, "render_order": -10}

    if has_image(asset):
        node = SceneNode(NodeKind.IMAGE, key=key, position=position, asset=asset,
                         handle=context.resource(asset.src), size=(scale, scale), opacity=opacity, attrs=attrs)
        return Background(node, 1.0, scale)
    if has_video(asset):
        aspect = reader.number("backgroundVideoAspect", 16 / 9,
                               minimum=BACKGROUND_MIN_ASPECT, maximum=BACKGROUND_MAX_ASPECT)
        node = media_node(key, asset, scale, scale / aspect, position=position,
                          handle=context.resource(asset.src), opacity=opacity, attrs=attrs)
        return Background(node, aspect, scale)
    if is_asset(asset):
        return Background(None, 1.0, scale)
    node = SceneNode(NodeKind.PLANE, key=key, position=position, size=(scale, scale),
                     color=reader.color("backgroundColor", "#ffffff"), opacity=opacity, attrs=attrs)
    return Background(node, 1.0, scale)


MAIN_ASSET_SLOT = SlotDefinition("asset", "Main Asset", SlotType.FILE, required=True)


def single_asset_template(kind: TemplateKind, render) -> AnimationTemplate:
    """Template with one required file slot and the kind's default props."""
    return AnimationTemplate(
        kind=kind,
        name=kind.config.display_name,
        render=render,
        slots=(MAIN_ASSET_SLOT,),
        default_props=get_template_defaults(kind.value),
    )


def prop_reader(props: Mapping[str, Any], kind: TemplateKind) -> PropReader:
    """Reader over merged props that falls back to the kind's declared defaults."""
    return PropReader(props, get_template_defaults(kind.value))


def camera_node(key: str, cue: CameraCue) -> SceneNode:
    """Scene node carrying a camera request for the engine's rig."""
    return SceneNode(NodeKind.CAMERA, key=key, attrs={"cue": cue})


def fixed_camera(key: str, reader: PropReader) -> Optional[SceneNode]:
    """Static camera from saved ``cameraPosition``/``cameraTarget`` props.

    Without either prop the template leaves the camera alone. A saved target
    without a position keeps the default position.
    """
    position = reader.vector3("cameraPosition")
    target = reader.vector3("cameraTarget")
    if position is None and target is None:
        return None
    return camera_node(key, FixedCue(position or DEFAULT_CAMERA_POSITION, target or (0.0, 0.0, 0.0)))
