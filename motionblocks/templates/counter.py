"""Counter: a number running from ``startValue`` to ``endValue``.

The ``plain`` style shows the floored running value as one text run. The
``flip`` style lays the digits out one place at a time. Each place flips to
its next digit during the last ``flipWindow`` of its decimal cycle, so the
ones place flips once per unit while the tens place only moves every ten.
"""

import math

from motionblocks.config.defaults import get_template_defaults
from motionblocks.core.scene import group, text_node
from motionblocks.core.segments import digit_flips
from motionblocks.core.templates import (
    AnimationTemplate,
    EvaluationContext,
    RenderProps,
    SlotDefinition,
    SlotType,
    TemplateKind,
)
from motionblocks.templates.common import font_url, prop_reader
from motionblocks.utils.math.core import safe_div

COUNTER_STYLES = ("plain", "flip")
LABEL_SIZE = 30
LABEL_OFFSET_Y = -80
DIGIT_ADVANCE_RATIO = 0.62
HOLD_FRAMES = 30


def counter_value(frame: float, start: float, end: float, duration: float) -> float:
    """Running (unfloored) counter value at ``frame``.

    Examples:
        >>> counter_value(30, 0, 100, 60)
        50.0
        >>> counter_value(500, 0, 100, 60)
        100.0
    """
    progress = min(1.0, max(0.0, safe_div(frame, duration)))
    return start + (end - start) * progress


def _digit_count(start: float, end: float) -> int:
    return max(1, len(str(int(math.floor(max(abs(start), abs(end)))))))


def _flip_digits(render_props: RenderProps, value: float, digit_count: int, flip_window: float,
                 font_size: float, color: str, font):
    advance = font_size * DIGIT_ADVANCE_RATIO
    flips = digit_flips(value, digit_count, flip_window)
    first_x = -(len(flips) - 1) * advance / 2
    digits = group(render_props.key("digits"))
    for i, flip in enumerate(flips):
        cell = group(render_props.key("digit", flip.place), position=(first_x + i * advance, 0.0, 0.0))
        # Outgoing digit tips away over the top; the incoming one swings up from below
        outgoing = text_node(render_props.key("digit", flip.place, "out"), str(flip.digit), font_size, color,
                             opacity=1 - flip.flip, rotation=(-flip.flip * math.pi / 2, 0.0, 0.0))
        outgoing.attrs.update({"anchor": ("center", "middle"), "font": font})
        cell.add(outgoing)
        if flip.flip > 0:
            incoming = text_node(render_props.key("digit", flip.place, "in"), str(flip.next_digit), font_size,
                                 color, opacity=flip.flip, rotation=((1 - flip.flip) * math.pi / 2, 0.0, 0.0))
            incoming.attrs.update({"anchor": ("center", "middle"), "font": font})
            cell.add(incoming)
        digits.add(cell)
    half_width = len(flips) * advance / 2
    return digits, half_width


def render_counter(render_props: RenderProps, context: EvaluationContext):
    reader = prop_reader(render_props.props, TemplateKind.COUNTER)
    start = reader.number("startValue")
    end = reader.number("endValue")
    value = counter_value(render_props.frame, start, end, reader.number("duration", minimum=1))
    prefix = reader.string("prefix")
    suffix = reader.string("suffix")
    font_size = reader.number("fontSize", minimum=1)
    color = reader.color("textColor")
    font = font_url(reader)

    root = group(render_props.key())
    if reader.choice("style", COUNTER_STYLES) == "flip":
        flip_window = reader.number("flipWindow", minimum=0.01, maximum=1)
        digits, half_width = _flip_digits(render_props, value, _digit_count(start, end), flip_window,
                                          font_size, color, font)
        root.add(digits)
        sign = "-" if value < 0 else ""
        if prefix or sign:
            head = text_node(render_props.key("prefix"), prefix + sign, font_size, color,
                             position=(-half_width, 0.0, 0.0))
            head.attrs.update({"anchor": ("right", "middle"), "font": font})
            root.add(head)
        if suffix:
            tail = text_node(render_props.key("suffix"), suffix, font_size, color, position=(half_width, 0.0, 0.0))
            tail.attrs.update({"anchor": ("left", "middle"), "font": font})
            root.add(tail)
    else:
        number = text_node(render_props.key("value"), f"{prefix}{math.floor(value)}{suffix}", font_size, color)
        number.attrs.update({"anchor": ("center", "middle"), "font": font})
        root.add(number)

    label = render_props.slot("label")
    if isinstance(label, str) and label:
        caption = text_node(render_props.key("label"), label, LABEL_SIZE, reader.color("labelColor"),
                            position=(0.0, LABEL_OFFSET_Y, 0.0))
        caption.attrs.update({"anchor": ("center", "middle"), "font": font})
        root.add(caption)
    return root


def suggest_counter_duration(assets, props) -> int:
    """Count duration plus a short hold on the final value."""
    return int(prop_reader(props, TemplateKind.COUNTER).number("duration", minimum=1)) + HOLD_FRAMES


COUNTER = AnimationTemplate(
    kind=TemplateKind.COUNTER,
    name=TemplateKind.COUNTER.config.display_name,
    render=render_counter,
    slots=(SlotDefinition("label", "Label Text", SlotType.TEXT),),
    default_props=get_template_defaults(TemplateKind.COUNTER.value),
    suggest_duration=suggest_counter_duration,
)
