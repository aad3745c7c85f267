"""Chapter cards shown one at a time.

Each ``title, subtitle`` line of the data slot gets ``framesPerChapter``
frames, or an equal share of the track when that would run past its end.
The big chapter number pops in on the left, the title slides in from the
right and the subtitle fades in after it. All three leave together during
the last ``outroFrames`` of the card.
"""

from motionblocks.config.defaults import get_template_defaults
from motionblocks.core.scene import group, text_node, uniform
from motionblocks.core.segments import chapter_segment, fit_segment_frames
from motionblocks.core.templates import (
    AnimationTemplate,
    EvaluationContext,
    RenderProps,
    SlotDefinition,
    SlotType,
    TemplateKind,
)
from motionblocks.templates.common import background_layer, font_url, prop_reader
from motionblocks.utils.math.core import clamp01
from motionblocks.utils.math.easing import ease_out_back, ease_out_expo
from motionblocks.utils.text_utils import split_first, split_lines

FALLBACK_CHAPTER = ("Chapter Title", "Subtitle")

NUMBER_SIZE = 250
TITLE_SIZE = 60
SUBTITLE_SIZE = 30
TEXT_MAX_WIDTH = 600
NUMBER_X = -200
TEXT_BLOCK_X = -150
TITLE_REST_X = 50
TITLE_SLIDE_PX = 100
TITLE_REST_Y = 20
TITLE_RISE_PX = 50
SUBTITLE_Y = -10


def parse_chapters(text):
    """``title, subtitle`` rows split on the first comma (falls back to one card).

    Examples:
        >>> parse_chapters("Intro, Where it began\\nOutro")
        [('Intro', 'Where it began'), ('Outro', '')]
    """
    return [split_first(line) for line in split_lines(text)] or [FALLBACK_CHAPTER]


def render_chapters(render_props: RenderProps, context: EvaluationContext):
    reader = prop_reader(render_props.props, TemplateKind.CHAPTERS)
    chapters = parse_chapters(render_props.slot("data"))
    frames_per_chapter = fit_segment_frames(reader.number("framesPerChapter", minimum=1), len(chapters),
                                            render_props.duration)
    segment = chapter_segment(render_props.frame, len(chapters), frames_per_chapter)
    if segment is None:
        return None

    intro = reader.number("introFrames", minimum=1)
    outro = min(reader.number("outroFrames", minimum=1), max(1, frames_per_chapter / 2))
    show_number = reader.boolean("showNumber")
    accent = reader.color("accentColor")
    text_color = reader.color("textColor")
    font = font_url(reader)
    title, subtitle = chapters[segment.index]
    local = segment.local_frame

    exit_start = int(frames_per_chapter) - outro
    leaving = local >= exit_start
    exit_t = ease_out_expo(clamp01((local - exit_start) / outro)) if leaving else 0.0

    number_scale = ease_out_back(clamp01(local / (intro * 0.8)), 1.0) * (1 - exit_t)

    title_p = clamp01((local - intro * 0.2) / (intro * 0.8))
    title_x = TITLE_REST_X + (1 - ease_out_expo(title_p)) * TITLE_SLIDE_PX
    title_y = TITLE_REST_Y + exit_t * TITLE_RISE_PX
    title_alpha = title_p * (1 - exit_t)

    sub_alpha = ease_out_expo(clamp01((local - intro * 0.4) / (intro * 0.8))) * (1 - exit_t)

    root = group(render_props.key())
    root.add(background_layer(render_props.key("background"), reader, render_props.slot("background"), context).node)

    if show_number:
        number_text = str(reader.integer("startNumber") + segment.index)
        number = text_node(render_props.key("number"), number_text, NUMBER_SIZE, accent)
        number.attrs.update({"anchor": ("right", "middle"), "font": font,
                             "outline_width": NUMBER_SIZE * 0.05, "outline_color": "#000000"})
        root.add(group(render_props.key("number-group"), [number],
                       position=(NUMBER_X, 0.0, 0.0), scale=uniform(number_scale)))

    block = group(render_props.key("text"), position=(TEXT_BLOCK_X if show_number else 0.0, 0.0, 0.0))
    heading = text_node(render_props.key("title"), title, TITLE_SIZE, text_color,
                        opacity=title_alpha, position=(title_x, title_y, 0.0))
    heading.attrs.update({"anchor": ("left", "bottom"), "font": font, "max_width": TEXT_MAX_WIDTH})
    block.add(heading)
    if subtitle:
        sub = text_node(render_props.key("subtitle"), subtitle, SUBTITLE_SIZE, text_color,
                        opacity=sub_alpha, position=(TITLE_REST_X, SUBTITLE_Y, 0.0))
        sub.attrs.update({"anchor": ("left", "top"), "font": font, "max_width": TEXT_MAX_WIDTH})
        block.add(sub)
    return root.add(block)


def suggest_chapters_duration(assets, props) -> int:
    reader = prop_reader(props, TemplateKind.CHAPTERS)
    return len(parse_chapters(assets.get("data"))) * int(reader.number("framesPerChapter", minimum=1))


CHAPTERS = AnimationTemplate(
    kind=TemplateKind.CHAPTERS,
    name=TemplateKind.CHAPTERS.config.display_name,
    render=render_chapters,
    slots=(
        SlotDefinition("data", "Chapters (Title, Subtitle)", SlotType.DATA_TABLE, required=True,
                       placeholder=", ".join(FALLBACK_CHAPTER)),
        SlotDefinition("background", "Background (Optional)", SlotType.FILE),
    ),
    default_props=get_template_defaults(TemplateKind.CHAPTERS.value),
    suggest_duration=suggest_chapters_duration,
)
