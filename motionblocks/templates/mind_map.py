"""Mind map: a central topic with branches growing out to each node in turn.

Node rows are ``label`` or ``label, x, y, z``. Rows with all three
coordinates keep their explicit position; the rest are laid out on an
ellipse around the root. All positions are then scaled down together so the
farthest node sits on the layout radius.

After ``introHoldFrames`` every node gets a block of ``perNodeFrames +
focusZoomFrames`` frames: its branch grows, it pops in, and the camera cue
moves to it with a short zoom-in beat once the branch has landed.
"""

import math
from typing import List, NamedTuple

from motionblocks.camera.rig import FocusCue
from motionblocks.config.defaults import get_template_defaults
from motionblocks.core.scene import NodeKind, SceneNode, Vec3, group, text_node
from motionblocks.core.templates import (
    AnimationTemplate,
    EvaluationContext,
    RenderProps,
    SlotDefinition,
    SlotType,
    TemplateKind,
)
from motionblocks.templates.common import camera_node, font_url, has_image, prop_reader
from motionblocks.utils.math.core import clamp01
from motionblocks.utils.math.easing import ease_in_out_cubic, ease_out_back
from motionblocks.utils.text_utils import parse_number, split_lines

ROOT_FALLBACK = "Central Topic"
LABEL_COLOR = "#ffffff"

BASE_RADIUS = 420
MIN_SPREAD, MAX_SPREAD = 0.6, 4.0
MAX_DEPTH = 2000
ELLIPSE_Y = 0.65
MIN_PER_NODE_FRAMES = 8
BRANCH_RADIUS = 2.2
NODE_POP_OVERSHOOT = 1.7
PULSE_RATE = 0.14
LN_10 = math.log(10)

# Camera offset from the focused node, as fractions of the layout radius
CAMERA_SIDE = 0.22
CAMERA_HEIGHT = 0.18
CAMERA_DISTANCE = 1.65


class MindMapNode(NamedTuple):
    id: str
    text: str
    position: Vec3


class MindMapLayout(NamedTuple):
    radius: float
    root_radius: float
    node_radius: float
    nodes: List[MindMapNode]


class FocusSchedule(NamedTuple):
    intro: int
    block: int
    lead: float


def _length(v) -> float:
    return math.sqrt(sum(c * c for c in v))


def parse_nodes(text) -> List[tuple]:
    """``(label, explicit_position_or_None)`` per non-empty row.

    Two-column ``label, value`` rows are not coordinates and fall back to the
    radial layout.

    Examples:
        >>> parse_nodes("Idea\\nPlan, 10, 20, 30\\nBudget, 5")
        [('Idea', None), ('Plan', (10.0, 20.0, 30.0)), ('Budget', None)]
    """
    rows = []
    for i, line in enumerate(split_lines(text)):
        parts = [p.strip() for p in line.split(",")]
        coords = [parse_number(p) for p in parts[1:4]]
        explicit = tuple(coords) if len(coords) == 3 and None not in coords else None
        rows.append((parts[0] or f"Node {i}", explicit))
    return rows


def layout_nodes(text, spread: float, depth: float) -> MindMapLayout:
    """Positions of every node, fitted inside the layout radius.

    Examples:
        >>> layout = layout_nodes("A\\nB", 1.0, 0)
        >>> [round(c) for c in layout.nodes[1].position]
        [-420, 0, 0]
    """
    spread = max(MIN_SPREAD, min(MAX_SPREAD, spread))
    depth = max(0.0, min(MAX_DEPTH, depth))
    radius = BASE_RADIUS * spread
    rows = parse_nodes(text)
    count = max(1, len(rows))

    raw = []
    for i, (_, explicit) in enumerate(rows):
        if explicit is not None:
            raw.append(explicit)
            continue
        angle = i / count * math.tau
        # Alternate nodes between three depth layers
        raw.append((math.cos(angle) * radius, math.sin(angle) * radius * ELLIPSE_Y, ((i % 3) - 1) * depth * 0.25))

    longest = max([_length(v) for v in raw] + [0.0])
    scale = min(1.0, radius / longest) if longest > 0 else 1.0
    nodes = [
        MindMapNode(f"node-{i}", label, tuple(c * scale + 0.0 for c in raw[i]))
        for i, (label, _) in enumerate(rows)
    ]
    return MindMapLayout(radius, max(56.0, radius * 0.16), max(34.0, radius * 0.095), nodes)


def focus_schedule(reader) -> FocusSchedule:
    per = max(MIN_PER_NODE_FRAMES, math.floor(reader.number("perNodeFrames")))
    zoom = max(0, math.floor(reader.number("focusZoomFrames")))
    return FocusSchedule(max(0, math.floor(reader.number("introHoldFrames"))), per + zoom,
                         reader.number("cameraLeadFrames", minimum=0))


def node_start(schedule: FocusSchedule, index: int) -> int:
    return schedule.intro + index * schedule.block


def focused_node(frame: float, schedule: FocusSchedule, count: int) -> int:
    """Index of the highlighted node, -1 during the intro hold.

    Examples:
        >>> focused_node(10, FocusSchedule(24, 52, 0), 3)
        -1
        >>> focused_node(100, FocusSchedule(24, 52, 0), 3)
        1
    """
    t = frame - schedule.intro
    if t < 0 or count <= 0:
        return -1
    return max(0, min(count - 1, int(math.floor((t + schedule.lead) / max(1, schedule.block)))))


def focus_lambda(edge_grow_frames: float, smooth: float, fps: float = 60) -> float:
    """Damping rate that covers ~90% of a move within the branch growth time.

    Examples:
        >>> round(focus_lambda(18, 1.0), 3)
        7.675
    """
    settle = max(1, math.floor(edge_grow_frames))
    tau_frames = settle / (LN_10 * max(0.1, smooth))
    return fps / max(1e-3, tau_frames)


def focus_cue(frame: float, layout: MindMapLayout, schedule: FocusSchedule, reader) -> FocusCue:
    """Camera request: the root during the intro, then one node per block."""
    t = frame - schedule.intro
    total = 1 + len(layout.nodes)
    if t < 0:
        idx, idx_local = 0, 0.0
    else:
        idx = max(0, min(total - 1, 1 + int(math.floor((t + schedule.lead) / max(1, schedule.block)))))
        idx_local = (t + schedule.lead) - (idx - 1) * max(1, schedule.block)
    target = (0.0, 0.0, 0.0) if idx == 0 else layout.nodes[idx - 1].position

    side = 1 if idx % 2 == 0 else -1
    offset = (side * layout.radius * CAMERA_SIDE, layout.radius * CAMERA_HEIGHT, layout.radius * CAMERA_DISTANCE)
    zoom_frames = max(0, math.floor(reader.number("focusZoomFrames")))
    zoom_start = max(0, math.floor(reader.number("edgeGrowFrames")))
    z_ease = ease_in_out_cubic(clamp01((idx_local - zoom_start) / max(1, zoom_frames))) if zoom_frames > 0 else 0.0
    strength = clamp01(reader.number("focusZoomStrength"))
    zoom = 1 - strength * z_ease
    zoom_z = 1 - min(0.92, strength * 1.4) * z_ease

    position = (target[0] + offset[0] * zoom, target[1] + offset[1] * zoom, target[2] + offset[2] * zoom_z)
    return FocusCue(position, target, focus_lambda(reader.number("edgeGrowFrames"), reader.number("cameraSmooth")))


def _branch(render_props: RenderProps, index: int, node: MindMapNode, grow: float, alpha: float, color: str):
    length = max(0.001, _length(node.position))
    direction = tuple(c / length for c in node.position) if _length(node.position) > 0 else (0.0, 1.0, 0.0)
    grown = length * grow
    return SceneNode(
        NodeKind.CYLINDER,
        key=render_props.key("branch", index),
        position=tuple(c * grown / 2 for c in direction),
        size=(BRANCH_RADIUS, BRANCH_RADIUS, max(0.001, grown)),
        color=color,
        opacity=0.55 * alpha,
        attrs={"align_to": direction, "depth_write": False, "render_order": -1},
    )


def render_mind_map(render_props: RenderProps, context: EvaluationContext):
    reader = prop_reader(render_props.props, TemplateKind.MIND_MAP)
    layout = layout_nodes(render_props.slot("nodes"), reader.number("spread"), reader.number("depth"))
    schedule = focus_schedule(reader)
    frame = render_props.frame
    font = font_url(reader)
    highlight = reader.color("highlightColor")
    node_color = reader.color("nodeColor")
    line_color = reader.color("lineColor")
    root_color = reader.color("rootColor")
    enter_frames = max(1, reader.number("nodeEnterFrames"))
    grow_frames = max(1, reader.number("edgeGrowFrames"))
    pulse = 0.5 + 0.5 * math.sin(frame * PULSE_RATE)
    focus = focused_node(frame, schedule, len(layout.nodes))

    root_r = layout.root_radius
    topic = render_props.slot("rootText")
    topic = topic if isinstance(topic, str) and topic else ROOT_FALLBACK
    root_label = text_node(render_props.key("root-label"), topic, max(44, root_r * 0.78), LABEL_COLOR,
                           position=(0.0, root_r * 1.6, 0.0))
    root_label.attrs.update({"anchor": ("center", "middle"), "font": font, "max_width": max(240, root_r * 4.2)})
    root = group(render_props.key("root"), [
        SceneNode(NodeKind.SPHERE, key=render_props.key("root-sphere"), size=(root_r,), color=root_color,
                  attrs={"emissive": root_color, "emissive_intensity": 0.2}),
        root_label,
    ])
    image = render_props.slot("rootImage")
    if has_image(image):
        root.add(SceneNode(NodeKind.IMAGE, key=render_props.key("root-image"), asset=image,
                           handle=context.resource(image.src), size=(root_r * 1.4, root_r * 1.4),
                           position=(0.0, 0.0, root_r + 1)))

    scene = group(render_props.key(), [root])
    node_r = layout.node_radius
    for i, node in enumerate(layout.nodes):
        local = frame - node_start(schedule, i)
        enter_t = clamp01(local / enter_frames)
        alpha = ease_in_out_cubic(enter_t) if local > 0 else 0.0
        pop = ease_out_back(enter_t, NODE_POP_OVERSHOOT) if local > 0 else 0.0
        grow = clamp01(local / grow_frames)
        if grow > 0:
            scene.add(_branch(render_props, i, node, grow, alpha, line_color))

        focused = i == focus
        holder = group(render_props.key("node", i), position=node.position)
        if focused:
            holder.add(SceneNode(NodeKind.SPHERE, key=render_props.key("node-halo", i), size=(node_r,),
                                 scale=(1.18, 1.18, 1.18), color=highlight, opacity=0.18 + 0.18 * pulse,
                                 attrs={"depth_write": False, "render_order": 5}))
        label = text_node(render_props.key("node-label", i), node.text, max(26, node_r * 0.7), LABEL_COLOR,
                          opacity=alpha, position=(0.0, node_r * 1.55, 0.0))
        label.attrs.update({"anchor": ("center", "middle"), "font": font, "max_width": max(200, node_r * 5)})
        holder.add(group(render_props.key("node-body", i), [
            SceneNode(NodeKind.SPHERE, key=render_props.key("node-sphere", i), size=(node_r,), color=node_color,
                      opacity=alpha, attrs={"emissive": highlight if focused else "#000000",
                                            "emissive_intensity": 0.22 + 0.12 * pulse if focused else 0.0}),
            label,
        ], scale=(pop, pop, pop)))
        scene.add(holder)

    if reader.boolean("cameraEnabled"):
        scene.add(camera_node(render_props.key("camera"), focus_cue(frame, layout, schedule, reader)))
    return scene


def suggest_mind_map_duration(assets, props) -> int:
    """Intro hold, one block per node, then time for the last branch to land."""
    reader = prop_reader(props, TemplateKind.MIND_MAP)
    schedule = focus_schedule(reader)
    count = len(split_lines(assets.get("nodes")))
    tail = max(reader.number("edgeGrowFrames"), reader.number("nodeEnterFrames")) + reader.number("focusHoldFrames")
    return int(schedule.intro + count * schedule.block + max(0, tail))


MIND_MAP = AnimationTemplate(
    kind=TemplateKind.MIND_MAP,
    name=TemplateKind.MIND_MAP.config.display_name,
    render=render_mind_map,
    slots=(
        SlotDefinition("rootImage", "Central Image", SlotType.FILE),
        SlotDefinition("rootText", "Central Topic", SlotType.TEXT, required=True, placeholder=ROOT_FALLBACK),
        SlotDefinition("nodes", "Nodes Data", SlotType.DATA_TABLE),
    ),
    default_props=get_template_defaults(TemplateKind.MIND_MAP.value),
    suggest_duration=suggest_mind_map_duration,
)
