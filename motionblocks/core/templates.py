"""Template evaluation contract.

A template is a pure function from ``(RenderProps, EvaluationContext)`` to a
:class:`~motionblocks.core.scene.SceneNode` tree, or None when it has nothing
to draw. Evaluating the same inputs twice yields equal trees, so any frame can
be rebuilt directly after a seek without replaying earlier frames.

:class:`AnimationTemplate` wraps a render function with its slot schema and
default props. Its :meth:`~AnimationTemplate.evaluate` is the only entry
point the engine calls. It applies placeholders for missing required slots
and merges default props. It also converts render failures into None, so an
exception never reaches the render loop.
"""

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, NamedTuple, Optional, Tuple

from motionblocks.core.resources import MeasurementArena, ResourcePool
from motionblocks.core.scene import SceneNode
from motionblocks.utils.logging import log

# Average glyph advance as a fraction of the font size
TEXT_ADVANCE_RATIO = 0.55

TextMeasurer = Callable[[str, float, Optional[str]], float]


class TemplateConfig(NamedTuple):
    """Static description of a template kind."""
    display_name: str
    category: str
    description: str


class TemplateKind(Enum):
    """Closed set of built-in templates.

    Values are the template ids stored on tracks. Every member must have
    exactly one registered :class:`AnimationTemplate` (checked at import of
    :mod:`motionblocks.templates`).
    """

    FADE_IN = "fade-in"
    SLIDE_IN = "slide-in"
    SCALE_POP = "scale-pop"
    MASK_REVEAL = "mask-reveal"
    PULSE = "pulse"
    GLOW = "glow"
    BOUNCE = "bounce"
    SHAKE = "shake"
    LIST = "list"
    CHAPTERS = "chapters"
    HIGHLIGHT = "highlight"
    KINETIC_TEXT = "kinetic-text"
    COUNTER = "counter"
    TIMELINE_REVEAL = "timeline-reveal"
    GRAPH = "graph"
    MIND_MAP = "mind-map"

    @property
    def config(self) -> TemplateConfig:
        """Get the static configuration for this template kind."""
        return _KIND_CONFIGS[self]

    @property
    def category(self) -> str:
        return self.config.category

    @staticmethod
    def from_string(template_id: str) -> Optional["TemplateKind"]:
        """
        Convert a track's template id to a TemplateKind.

        Args:
            template_id: Template id such as ``"kinetic-text"``

        Returns:
            Matching kind, or None for an unknown id
        """
        for kind in TemplateKind:
            if kind.value == template_id:
                return kind
        return None


_KIND_CONFIGS = {
    TemplateKind.FADE_IN: TemplateConfig("Fade In", "entry", "Fade an asset in over the duration"),
    TemplateKind.SLIDE_IN: TemplateConfig("Slide In", "entry", "Slide up to three assets in from an edge"),
    TemplateKind.SCALE_POP: TemplateConfig("Scale Pop", "entry", "Pop an asset in with a quick scale-up"),
    TemplateKind.MASK_REVEAL: TemplateConfig("Mask Reveal", "entry", "Wipe an asset in behind a clip mask"),
    TemplateKind.PULSE: TemplateConfig("Pulse", "emphasis", "Rhythmic scale pulse"),
    TemplateKind.GLOW: TemplateConfig("Glow", "emphasis", "Pulsing halo behind an asset"),
    TemplateKind.BOUNCE: TemplateConfig("Bounce", "emphasis", "Continuous vertical bounce"),
    TemplateKind.SHAKE: TemplateConfig("Shake", "emphasis", "Frame-seeded positional jitter"),
    TemplateKind.LIST: TemplateConfig("Bullet List", "text", "Staggered list of items with an optional title"),
    TemplateKind.CHAPTERS: TemplateConfig("Chapters", "text", "Numbered chapter cards shown one at a time"),
    TemplateKind.HIGHLIGHT: TemplateConfig("Text Highlight", "text", "Marker box sweeping behind a phrase"),
    TemplateKind.KINETIC_TEXT: TemplateConfig("Kinetic Text", "text", "Line-by-line kinetic typography with camera"),
    TemplateKind.COUNTER: TemplateConfig("Counter", "data", "Number counting from a start to an end value"),
    TemplateKind.TIMELINE_REVEAL: TemplateConfig("Timeline Reveal", "data", "Milestones revealed along a line"),
    TemplateKind.GRAPH: TemplateConfig("3D Graph", "visual", "Bar, line or pie chart built up over time"),
    TemplateKind.MIND_MAP: TemplateConfig("3D Mind Map", "visual", "Radial mind map with a focus camera"),
}


class SlotType(str, Enum):
    """Kinds of user-editable inputs a template declares."""
    FILE = "file"
    TEXT = "text"
    NUMBER = "number"
    DATA_TABLE = "data-table"
    COLOR = "color"


@dataclass(frozen=True)
class SlotDefinition:
    """One named input of a template.

    File slots hold asset ids that the engine resolves before evaluation.
    """
    id: str
    name: str
    type: SlotType = SlotType.TEXT
    required: bool = False
    placeholder: Any = None


def estimate_text_width(text: str, font_size: float, font_url: Optional[str] = None) -> float:
    """Deterministic advance-width estimate used when no measurer is injected.

    Examples:
        >>> estimate_text_width("Hello", 60)
        165.0
    """
    return len(text) * font_size * TEXT_ADVANCE_RATIO


@dataclass
class EvaluationContext:
    """Host-owned state injected into every template evaluation.

    Attributes:
        measurements: Memo arena for text widths and other derived values
        resources: Optional pool of texture/video handles; templates only
            ``get`` or ``peek`` from it and never take ownership
        text_measurer: ``(text, font_size, font_url) -> width`` in world units
        fps: Timeline frame rate
    """
    measurements: MeasurementArena = field(default_factory=MeasurementArena)
    resources: Optional[ResourcePool] = None
    text_measurer: TextMeasurer = estimate_text_width
    fps: int = 30

    def measure_text(self, element_id: str, text: str, font_size: float,
                     font_url: Optional[str] = None) -> float:
        """Width of ``text``, memoized per element and content fingerprint."""
        if not text:
            return 0.0
        return self.measurements.get_or_compute(
            element_id,
            ("text", text, font_size, font_url),
            lambda: float(self.text_measurer(text, font_size, font_url)),
        )

    def resource(self, key: str) -> Any:
        """Shared handle for ``key`` from the injected pool, or None without one."""
        if self.resources is None:
            return None
        return self.resources.get(key)


@dataclass(frozen=True)
class RenderProps:
    """Inputs of one template evaluation.

    Attributes:
        frame: Frame local to the track, 0-based
        duration: Track duration in frames
        assets: Slot id to resolved value (Asset, text, number) or None
        props: Template props merged over the template defaults
        element_id: Stable prefix for memo arena keys (the track id)
    """
    frame: int
    duration: int
    assets: Mapping[str, Any] = field(default_factory=dict)
    props: Mapping[str, Any] = field(default_factory=dict)
    element_id: str = ""

    def slot(self, slot_id: str, default: Any = None) -> Any:
        value = self.assets.get(slot_id)
        return default if value is None else value

    def key(self, *parts: Any) -> str:
        """Element id for a sub-element, e.g. ``key("title")`` -> ``"t1:title"``."""
        return ":".join([self.element_id or "element"] + [str(p) for p in parts])


def is_empty_slot_value(value: Any) -> bool:
    """None and blank strings count as missing slot values."""
    return value is None or (isinstance(value, str) and not value.strip())


RenderFunction = Callable[[RenderProps, EvaluationContext], Optional[SceneNode]]
DurationHint = Callable[[Mapping[str, Any], Mapping[str, Any]], Optional[int]]


@dataclass(frozen=True)
class AnimationTemplate:
    """A registered template: metadata, slot schema, defaults and render function.

    Attributes:
        kind: Closed-enum identity of the template
        name: Display name
        render: Pure render function
        slots: Ordered slot definitions
        default_props: Defaults merged under track props
        suggest_duration: Optional ``(assets, props) -> frames`` auto-duration hook
    """
    kind: TemplateKind
    name: str
    render: RenderFunction
    slots: Tuple[SlotDefinition, ...] = ()
    default_props: Mapping[str, Any] = field(default_factory=dict)
    suggest_duration: Optional[DurationHint] = None

    @property
    def id(self) -> str:
        return self.kind.value

    def merge_props(self, props: Optional[Mapping[str, Any]]) -> dict:
        merged = copy.deepcopy(dict(self.default_props))
        merged.update(props or {})
        return merged

    def apply_placeholders(self, assets: Mapping[str, Any]) -> Optional[dict]:
        """Fill missing required slots from their placeholders.

        Returns:
            Completed slot mapping, or None when a required slot is missing
            and declares no placeholder
        """
        resolved = dict(assets)
        for slot in self.slots:
            if not is_empty_slot_value(resolved.get(slot.id)):
                continue
            if slot.required:
                if slot.placeholder is None:
                    return None
                resolved[slot.id] = slot.placeholder
            else:
                resolved[slot.id] = None
        return resolved

    def suggested_duration(self, assets: Mapping[str, Any], props: Optional[Mapping[str, Any]] = None) -> Optional[int]:
        """Auto-duration for the given inputs, or None when the template has no hint."""
        if self.suggest_duration is None:
            return None
        return self.suggest_duration(assets, self.merge_props(props))

    def evaluate(self, render_props: RenderProps, context: EvaluationContext) -> Optional[SceneNode]:
        """Evaluate the template for one frame.

        Never raises: a failure inside ``render`` is logged and yields None.
        """
        assets = self.apply_placeholders(render_props.assets)
        if assets is None:
            return None
        merged = RenderProps(
            frame=render_props.frame,
            duration=render_props.duration,
            assets=assets,
            props=self.merge_props(render_props.props),
            element_id=render_props.element_id,
        )
        try:
            return self.render(merged, context)
        except Exception as e:
            log.error(f"Template '{self.id}' failed at frame {render_props.frame} "
                      f"({render_props.element_id or 'no element'}): {e}")
            return None
