"""Unit tests for the kinetic text template and its per-effect styles."""

import pytest

from motionblocks.camera.rig import KineticCue
from motionblocks.core.effects import KineticEffect
from motionblocks.core.templates import EvaluationContext, RenderProps
from motionblocks.templates.kinetic_effects import compute_kinetic_style, parse_two_part_segment
from motionblocks.templates.kinetic_text import KINETIC_TEXT, parse_script


def evaluate(frame, script="Hello\nWorld", props=None, duration=300):
    render_props = RenderProps(frame=frame, duration=duration, assets={"script": script}, props=props or {},
                               element_id="t")
    return KINETIC_TEXT.evaluate(render_props, EvaluationContext())


class TestParseScript:
    """Test parse_script and parse_two_part_segment."""

    def test_effects_by_index(self):
        """Effects pair with lines by index; missing ones are pop_bounce."""
        lines = parse_script("Hello\n\nWorld", ["zoom_back"])
        assert [line.text for line in lines] == ["Hello", "World"]
        assert [line.effect for line in lines] == [KineticEffect.ZOOM_BACK, KineticEffect.POP_BOUNCE]

    def test_unknown_effect(self):
        """Unknown effect names fall back to pop_bounce."""
        assert parse_script("Hi", ["wobble"])[0].effect is KineticEffect.POP_BOUNCE

    def test_fallback_script(self):
        """An empty script shows the built-in demo lines."""
        lines = parse_script("", None)
        assert len(lines) == 4
        assert lines[0].effect is KineticEffect.POP_THEN_TYPE
        assert lines[3].effect is KineticEffect.TYPEWRITER

    def test_explicit_separator(self):
        """A pipe always splits lead from continuation."""
        assert parse_two_part_segment("text animation | just works", KineticEffect.POP_BOUNCE) == \
            ("text animation", "just works")

    def test_half_split_for_continuation_effects(self):
        """Continuation effects split the words in half."""
        assert parse_two_part_segment("we will break down", KineticEffect.SLIDE_THEN_TYPE) == ("we will", "break down")
        assert parse_two_part_segment("we will break down", KineticEffect.SLIDE_LEFT) == ("we will break down", "")


class TestKineticStyle:
    """Test compute_kinetic_style."""

    def test_zoom_back_starts_small(self):
        """Zoom back starts at 0.55 scale."""
        assert compute_kinetic_style(KineticEffect.ZOOM_BACK, 0.0, 0, 45, 1.0, 0).scale == pytest.approx(0.55)

    def test_typewriter_ignores_enter(self):
        """Typewriter opacity only follows the exit fade."""
        style = compute_kinetic_style(KineticEffect.TYPEWRITER, 0.0, 0, 45, 0.5, 0)
        assert style.opacity == 0.5
        assert style.scale == 1.0

    @pytest.mark.parametrize("effect", list(KineticEffect))
    def test_settled(self, effect):
        """Every effect is fully visible once entered and alive."""
        style = compute_kinetic_style(effect, 1.0, 30, 45, 1.0, 30)
        assert style.opacity == pytest.approx(1.0)

    @pytest.mark.parametrize("effect", list(KineticEffect))
    def test_exit_fades_out(self, effect):
        """A dead segment is invisible."""
        assert compute_kinetic_style(effect, 1.0, 44, 45, 0.0, 44).opacity == 0.0

    def test_whip_directions(self):
        """Whip left and right start on opposite sides."""
        left = compute_kinetic_style(KineticEffect.WHIP_LEFT, 0.0, 0, 45, 1.0, 0)
        right = compute_kinetic_style(KineticEffect.WHIP_RIGHT, 0.0, 0, 45, 1.0, 0)
        assert left.pos_x == -right.pos_x
        assert left.pos_x != 0


class TestKineticText:
    """Test the kinetic text template."""

    def test_active_line(self):
        """Each line holds perSegmentFrames frames."""
        assert evaluate(10).find("t:lead-text").text == "Hello"
        assert evaluate(50).find("t:lead-text").text == "World"

    def test_last_line_holds(self):
        """Frames past the script stay on the last line."""
        assert evaluate(500).find("t:lead-text").text == "World"

    def test_lines_shortened_to_fit_track(self):
        """Without auto duration, lines share a short track instead of running past it."""
        props = {"autoDuration": False, "perSegmentFrames": 45}
        script = "One\nTwo\nThree"
        assert evaluate(80, script, props, duration=90).find("t:lead-text").text == "Three"
        assert evaluate(80, script, props, duration=300).find("t:lead-text").text == "Two"

    def test_typewriter_reveals_characters(self):
        """Typewriter lines type out over the segment."""
        props = {"segmentEffects": ["typewriter"]}
        assert evaluate(2, "Hello", props).find("t:lead-text").text == ""
        assert evaluate(41, "Hello", props).find("t:lead-text").text == "Hello"

    def test_continuation_types_after_delay(self):
        """The continuation run types in the accent color after the delay."""
        props = {"segmentEffects": ["pop_then_type"], "accentColor": "#ff0000"}
        early = evaluate(5, "text animation | just works", props).find("t:continuation-text")
        late = evaluate(30, "text animation | just works", props).find("t:continuation-text")
        assert early.text.strip() == ""
        assert late.text.endswith("just works")
        assert late.color == "#ff0000"

    def test_no_continuation_for_plain_effects(self):
        """Only continuation effects draw a second run."""
        assert evaluate(30, "text animation | just works").find("t:continuation-text") is None

    def test_camera_cue(self):
        """The template emits a kinetic cue for the active line."""
        cue = evaluate(50).find("t:camera").attrs["cue"]
        assert isinstance(cue, KineticCue)
        assert cue.segment_index == 1
        assert cue.local_frame == 5
        assert cue.enter_t == pytest.approx(5 / 14)
        assert cue.effect is KineticEffect.POP_BOUNCE

    def test_camera_disabled(self):
        """cameraMotionEnabled false emits no cue."""
        assert evaluate(50, props={"cameraMotionEnabled": False}).find("t:camera") is None

    def test_suggested_duration(self):
        """Lines times perSegmentFrames, or nothing without autoDuration."""
        assert KINETIC_TEXT.suggested_duration({"script": "a\nb\nc"}) == 135
        assert KINETIC_TEXT.suggested_duration({"script": ""}) == 180
        assert KINETIC_TEXT.suggested_duration({"script": "a"}, {"autoDuration": False}) is None
        assert KINETIC_TEXT.suggested_duration({"script": "a"}, {"perSegmentFrames": 4}) == 12
