"""3D graph: bar, line or pie chart built up item by item.

Data rows are ``label, value`` lines. Each item starts ``perItemFrames``
after the previous one, once ``introFrames`` have passed. The whole chart
sways slowly around the y axis, and a fixed camera looks at it from an
elevated angle unless a saved camera pose is present in the props.
"""

import math
from typing import List

from motionblocks.camera.rig import FixedCue
from motionblocks.config.defaults import DEFAULT_GRAPH_BUFFER_FRAMES, get_template_defaults
from motionblocks.core.scene import NodeKind, SceneNode, group, text_node
from motionblocks.core.templates import (
    AnimationTemplate,
    EvaluationContext,
    RenderProps,
    SlotDefinition,
    SlotType,
    TemplateKind,
)
from motionblocks.templates.common import camera_node, font_url, prop_reader
from motionblocks.utils.color_utils import parse_palette
from motionblocks.utils.math.core import clamp01
from motionblocks.utils.math.easing import ease_in_out_cubic, ease_out_back, ease_out_quad
from motionblocks.utils.text_utils import LabeledValue, parse_labeled_values

GRAPH_TYPES = ("bar", "line", "pie")
DEFAULT_PALETTE = ["#3b82f6"]

CHART_HEIGHT = 400
LINE_POINT_SPACING = 150
AXIS_PADDING = 80
AXIS_WIDTH = 2
AXIS_TICK_LENGTH = 10
X_AXIS_Y = -20
BAR_BASE_Y = -200

LABEL_SIZE = 18
VALUE_SIZE = 24
TICK_LABEL_SIZE = 16
TITLE_SIZE = 50
POINT_POP_FRAMES = 20

PIE_MIN_DURATION = 30
PIE_TILT = math.pi / 4
PIE_LABEL_GAP = 60
PIE_SEPARATION = 5
PIE_FOCUS_EXPLODE = 20
PIE_FOCUS_FRAMES = 60

# Gentle y-axis drift of the whole chart, in radians per frame at 30 fps
SWAY_RATE = 0.1 / 30
SWAY_AMPLITUDE = 0.1

CAMERA_POSES = {
    "bar": (0.0, 400.0, 800.0),
    "line": (0.0, 400.0, 800.0),
    "pie": (0.0, 500.0, 600.0),
}


def max_value(data: List[LabeledValue]) -> float:
    """Largest value, never below 1 so empty or negative data still scales."""
    return max([d.value for d in data] + [1.0])


def _format_tick(value: float) -> str:
    rounded = round(value * 10) / 10
    return str(int(rounded)) if rounded == int(rounded) else str(rounded)


def _line(key: str, points, color: str, width: float, **kwargs) -> SceneNode:
    return SceneNode(NodeKind.LINE, key=key, color=color, size=(width,),
                     attrs={"points": [tuple(p) for p in points]}, **kwargs)


def _label(key: str, text: str, size: float, color: str, font, anchor, **kwargs) -> SceneNode:
    node = text_node(key, text, size, color, **kwargs)
    node.attrs.update({"anchor": anchor, "font": font})
    return node


def axes(render_props: RenderProps, start_x: float, total_width: float, peak: float,
         tick_count: int, color: str, font) -> SceneNode:
    """Y axis with value ticks and an X axis under the chart, both static."""
    axis_x = start_x - AXIS_PADDING
    node = group(render_props.key("axes"))
    node.add(_line(render_props.key("y-axis"), [(axis_x, 0.0, 0.0), (axis_x, CHART_HEIGHT, 0.0)], color, AXIS_WIDTH))
    for i in range(tick_count):
        y = CHART_HEIGHT * i / (tick_count - 1)
        node.add(
            _line(render_props.key("tick", i), [(axis_x, y, 0.0), (axis_x - AXIS_TICK_LENGTH, y, 0.0)], color, AXIS_WIDTH),
            _label(render_props.key("tick-label", i), _format_tick(peak * i / (tick_count - 1)), TICK_LABEL_SIZE,
                   color, font, ("right", "middle"), position=(axis_x - 20, y, 0.0)),
        )
    node.add(_line(render_props.key("x-axis"),
                   [(axis_x, X_AXIS_Y, 0.0), (start_x + total_width + AXIS_PADDING, X_AXIS_Y, 0.0)],
                   color, AXIS_WIDTH))
    return node


def bar_chart(render_props: RenderProps, data, reader, colors, font):
    frame = render_props.frame
    intro = reader.number("introFrames", minimum=0)
    per = reader.number("perItemFrames", minimum=1)
    bar_width = reader.number("barWidth", minimum=1)
    gap = reader.number("barGap", minimum=0)
    text_color = reader.color("textColor")
    peak = max_value(data)
    total_width = len(data) * (bar_width + gap) - gap
    start_x = -total_width / 2

    chart = group(render_props.key("bars"))
    for i, item in enumerate(data):
        local = frame - (intro + i * per)
        grow = ease_out_quad(clamp01(local / per))
        height = item.value / peak * CHART_HEIGHT
        color = colors[i % len(colors)]
        bar = group(render_props.key("bar", i), position=(start_x + i * (bar_width + gap), 0.0, 0.0))
        bar.add(
            group(render_props.key("bar-grow", i), [
                SceneNode(NodeKind.BOX, key=render_props.key("bar-box", i), position=(0.0, height / 2, 0.0),
                          size=(bar_width, height, bar_width), color=color,
                          attrs={"emissive": color, "emissive_intensity": 0.2 + 0.3 * grow}),
            ], scale=(1.0, grow, 1.0)),
            _label(render_props.key("bar-label", i), item.label, LABEL_SIZE, text_color, font, ("center", "top"),
                   position=(0.0, -40.0, 0.0), opacity=clamp01((local - per * 0.3) / (per * 0.5))),
            _label(render_props.key("bar-value", i), str(round(item.value * grow)), VALUE_SIZE, text_color, font,
                   ("center", "bottom"), position=(0.0, height * grow + 30, 0.0),
                   opacity=clamp01((local - per * 0.5) / (per * 0.3))),
        )
        chart.add(bar)
    return chart, start_x, total_width


def line_chart(render_props: RenderProps, data, reader, colors, font):
    if len(data) < 2:
        return None, 0.0, 0.0
    frame = render_props.frame
    intro = reader.number("introFrames", minimum=0)
    per = reader.number("perItemFrames", minimum=1)
    thickness = reader.number("lineThickness", minimum=1)
    text_color = reader.color("textColor")
    color = colors[0]
    peak = max_value(data)
    total_width = (len(data) - 1) * LINE_POINT_SPACING
    start_x = -total_width / 2
    points = [(start_x + i * LINE_POINT_SPACING, d.value / peak * CHART_HEIGHT, 0.0) for i, d in enumerate(data)]

    chart = group(render_props.key("line"))
    for i, (start, end) in enumerate(zip(points, points[1:])):
        t = ease_in_out_cubic(clamp01((frame - (intro + i * per)) / per))
        if t <= 0:
            continue
        tip = tuple(a + (b - a) * t for a, b in zip(start, end))
        segment = group(render_props.key("segment", i))
        segment.add(
            _line(render_props.key("segment-line", i), [start, tip], color, thickness),
            SceneNode(NodeKind.SPHERE, key=render_props.key("joint", i), position=start,
                      size=(thickness * 1.5,), color=color),
        )
        if t >= 1:
            segment.add(SceneNode(NodeKind.SPHERE, key=render_props.key("joint-end", i), position=end,
                                  size=(thickness * 1.5,), color=color))
        chart.add(segment)

    for i, item in enumerate(data):
        local = frame - (intro + i * per)
        if local < 0:
            continue
        pop = ease_out_back(clamp01(local / POINT_POP_FRAMES), 1.0)
        chart.add(group(render_props.key("point", i), [
            SceneNode(NodeKind.SPHERE, key=render_props.key("point-dot", i), size=(12.0,), color=color,
                      attrs={"emissive": color, "emissive_intensity": 2.0}),
            _label(render_props.key("point-label", i), item.label, LABEL_SIZE, text_color, font, ("center", "top"),
                   position=(0.0, -40.0, 0.0)),
            _label(render_props.key("point-value", i), _format_tick(item.value), VALUE_SIZE, text_color, font,
                   ("center", "bottom"), position=(0.0, 40.0, 0.0)),
        ], position=points[i], scale=(pop, pop, pop)))
    return chart, start_x, total_width


def pie_focus_index(frame: float, intro: float, count: int):
    """Slice pulled out of the pie at ``frame``, cycling once the pie has settled.

    Examples:
        >>> pie_focus_index(50, 15, 3) is None
        True
        >>> pie_focus_index(140, 15, 3)
        1
    """
    if count <= 0 or frame <= intro + PIE_FOCUS_FRAMES:
        return None
    return int(math.floor((frame - intro - PIE_FOCUS_FRAMES) / PIE_FOCUS_FRAMES)) % count


def pie_chart(render_props: RenderProps, data, reader, colors, font):
    total = sum(d.value for d in data)
    if total <= 0:
        return None
    frame = render_props.frame
    intro = reader.number("introFrames", minimum=0)
    per = reader.number("perItemFrames", minimum=1)
    radius = reader.number("pieRadius", minimum=1)
    depth = reader.number("pieHeight", minimum=1)
    text_color = reader.color("textColor")

    t = clamp01((frame - intro) / max(per * len(data), PIE_MIN_DURATION))
    expand = ease_out_back(t, 1.0)
    spin = (1 - ease_in_out_cubic(t)) * math.tau
    focus = pie_focus_index(frame, intro, len(data))
    # Undo the foreshortening of the tilted pie on the y offset
    tilt_fix = 1 / math.cos(PIE_TILT)

    chart = group(render_props.key("pie"), rotation=(PIE_TILT, spin, 0.0), scale=(expand, expand, expand))
    angle = 0.0
    for i, item in enumerate(data):
        sweep = item.value / total * math.tau
        mid = angle + sweep / 2
        explode = PIE_FOCUS_EXPLODE if i == focus else PIE_SEPARATION
        color = colors[i % len(colors)]
        label_r = radius + PIE_LABEL_GAP
        percent = round(item.value / total * 100)
        chart.add(group(render_props.key("slice", i), [
            SceneNode(NodeKind.CYLINDER, key=render_props.key("slice-body", i), size=(radius, radius, depth),
                      color=color, attrs={"theta_start": angle, "theta_length": sweep,
                                          "emissive": color, "emissive_intensity": 0.1}),
            _label(render_props.key("slice-label", i), f"{item.label} ({percent}%)", VALUE_SIZE, text_color, font,
                   ("left" if math.cos(mid) > 0 else "right", "middle"),
                   position=(math.cos(mid) * label_r, math.sin(mid) * label_r, depth / 2),
                   rotation=(-PIE_TILT, 0.0, 0.0)),
        ], position=(math.cos(mid) * explode, math.sin(mid) * explode * tilt_fix, 0.0)))
        angle += sweep
    return chart


def graph_camera(render_props: RenderProps, reader, graph_type: str) -> SceneNode:
    position = reader.vector3("cameraPosition") or CAMERA_POSES[graph_type]
    target = reader.vector3("cameraTarget") or (0.0, 0.0, 0.0)
    return camera_node(render_props.key("camera"), FixedCue(position, target))


def render_graph(render_props: RenderProps, context: EvaluationContext):
    reader = prop_reader(render_props.props, TemplateKind.GRAPH)
    data = parse_labeled_values(render_props.slot("data"))
    title = render_props.slot("title")
    title = title if isinstance(title, str) else ""
    if not data and not title:
        return None

    graph_type = reader.choice("type", GRAPH_TYPES)
    colors = parse_palette(reader.raw("colors"), DEFAULT_PALETTE)
    font = font_url(reader)
    text_color = reader.color("textColor")
    is_pie = graph_type == "pie"

    sway = math.sin(render_props.frame * SWAY_RATE) * SWAY_AMPLITUDE
    root = group(render_props.key(), rotation=(0.0, sway, 0.0))
    if title:
        root.add(_label(render_props.key("title"), title, TITLE_SIZE, text_color, font, ("center", "middle"),
                        position=(0.0, 400.0 if is_pie else 350.0, -200.0 if is_pie else -100.0)))

    base = group(render_props.key("chart"), position=(0.0, 0.0 if is_pie else BAR_BASE_Y, 0.0))
    if data:
        if is_pie:
            base.add(pie_chart(render_props, data, reader, colors, font))
        else:
            build = bar_chart if graph_type == "bar" else line_chart
            chart, start_x, total_width = build(render_props, data, reader, colors, font)
            if chart is not None and reader.boolean("showAxes"):
                base.add(axes(render_props, start_x, total_width, max_value(data),
                              reader.integer("yAxisTickCount", minimum=2, maximum=10),
                              reader.color("axisColor", text_color), font))
            base.add(chart)
    root.add(base)
    return root.add(graph_camera(render_props, reader, graph_type))


def suggest_graph_duration(assets, props) -> int:
    """``intro + rows * perItemFrames + buffer``."""
    reader = prop_reader(props, TemplateKind.GRAPH)
    rows = len(parse_labeled_values(assets.get("data")))
    return int(reader.number("introFrames", minimum=0) + rows * reader.number("perItemFrames", minimum=1)
               + reader.number("bufferFrames", DEFAULT_GRAPH_BUFFER_FRAMES, minimum=0))


GRAPH = AnimationTemplate(
    kind=TemplateKind.GRAPH,
    name=TemplateKind.GRAPH.config.display_name,
    render=render_graph,
    slots=(
        SlotDefinition("title", "Graph Title", SlotType.TEXT),
        SlotDefinition("data", "Labels & Values", SlotType.DATA_TABLE, required=True),
    ),
    default_props=get_template_defaults(TemplateKind.GRAPH.value),
    suggest_duration=suggest_graph_duration,
)
