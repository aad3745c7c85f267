"""Unit tests for the timeline reveal and graph templates."""

import pytest

from motionblocks.api.models import Asset
from motionblocks.camera.rig import FixedCue
from motionblocks.core.scene import NodeKind
from motionblocks.core.templates import EvaluationContext, RenderProps
from motionblocks.templates.graph import GRAPH, max_value, pie_focus_index
from motionblocks.templates.timeline_reveal import TIMELINE_REVEAL, collect_items, effective_spacing
from motionblocks.utils.text_utils import LabeledValue

THREE_ITEMS = {"label1": "Start", "label2": "Middle", "label3": "End"}


def evaluate(template, frame, assets, props=None, duration=300):
    render_props = RenderProps(frame=frame, duration=duration, assets=assets, props=props or {}, element_id="t")
    return template.evaluate(render_props, EvaluationContext())


class TestTimelineItems:
    """Test collect_items and effective_spacing."""

    def test_blank_labels_skipped(self):
        """Blank labels without an image are skipped."""
        items = collect_items({"label1": "Start", "label2": " ", "label3": "End"})
        assert [item.label for item in items] == ["Start", "End"]

    def test_image_only_item(self):
        """An image alone is enough to make an item."""
        image = Asset(id="i", type="image", src="i.png")
        items = collect_items({"image2": image})
        assert len(items) == 1
        assert items[0].image is image

    def test_cap(self):
        """Items past the cap are ignored."""
        assets = {f"label{i}": str(i) for i in range(1, 6)}
        assert len(collect_items(assets, 2)) == 2

    def test_spacing(self):
        """Few items are spread wider, within limits."""
        assert effective_spacing(180, 3) == 260
        assert effective_spacing(400, 2) == 360
        assert effective_spacing(180, 5) == 180


class TestTimelineReveal:
    """Test the timeline reveal template."""

    def test_no_items(self):
        """Nothing to reveal renders nothing."""
        assert evaluate(TIMELINE_REVEAL, 10, {}) is None

    def test_item_positions(self):
        """Items sit evenly along the centered line."""
        scene = evaluate(TIMELINE_REVEAL, 0, THREE_ITEMS)
        xs = [scene.find(f"t:item:{i}").position[0] for i in range(3)]
        assert xs == pytest.approx([-260.0, 0.0, 260.0])

    def test_cards_alternate(self):
        """Cards alternate above and below the line."""
        scene = evaluate(TIMELINE_REVEAL, 300, THREE_ITEMS)
        assert scene.find("t:card:0").position[1] == pytest.approx(120.0)
        assert scene.find("t:card:1").position[1] == pytest.approx(-120.0)

    def test_line_draws(self):
        """The line grows from nothing to full length."""
        start = evaluate(TIMELINE_REVEAL, 0, THREE_ITEMS).find("t:line")
        end = evaluate(TIMELINE_REVEAL, 300, THREE_ITEMS).find("t:line")
        assert start.size[0] == 1.0
        assert end.size[0] == pytest.approx(520.0)

    def test_labels_reveal(self):
        """Labels fade in through their reveal windows."""
        assert evaluate(TIMELINE_REVEAL, 0, THREE_ITEMS).find("t:label:2").opacity == 0.0
        assert evaluate(TIMELINE_REVEAL, 300, THREE_ITEMS).find("t:label:2").opacity == pytest.approx(1.0)

    def test_item_count_prop(self):
        """itemCount limits the items drawn."""
        scene = evaluate(TIMELINE_REVEAL, 0, THREE_ITEMS, {"itemCount": 2})
        assert scene.find("t:item:2") is None
        assert scene.find("t:item:1") is not None

    def test_image_card(self):
        """Image items get an image plane above the label."""
        image = Asset(id="i", type="image", src="i.png")
        scene = evaluate(TIMELINE_REVEAL, 300, {"label1": "Start", "image1": image})
        node = scene.find("t:image:0")
        assert node.kind == NodeKind.IMAGE
        assert node.position[1] == 26.0

    def test_background(self):
        """The optional background is a solid plane."""
        scene = evaluate(TIMELINE_REVEAL, 0, THREE_ITEMS, {"backgroundEnabled": True})
        assert scene.find("t:background").kind == NodeKind.PLANE


def graph(frame, data="A, 10\nB, 20", props=None, title=None):
    assets = {"data": data}
    if title:
        assets["title"] = title
    return evaluate(GRAPH, frame, assets, props)


class TestGraphHelpers:
    """Test max_value and pie_focus_index."""

    def test_max_value(self):
        """The peak is never below 1."""
        assert max_value([LabeledValue("a", 5.0), LabeledValue("b", 12.0)]) == 12.0
        assert max_value([LabeledValue("a", -3.0)]) == 1.0
        assert max_value([]) == 1.0

    def test_pie_focus(self):
        """No focus until the pie settles, then one slice per cycle."""
        assert pie_focus_index(50, 15, 3) is None
        assert pie_focus_index(100, 15, 3) == 0
        assert pie_focus_index(140, 15, 3) == 1
        assert pie_focus_index(260, 15, 3) == 0
        assert pie_focus_index(500, 15, 0) is None


class TestGraph:
    """Test the graph template."""

    def test_missing_data(self):
        """The data slot is required."""
        assert evaluate(GRAPH, 0, {}) is None

    def test_bars_scale_to_peak(self):
        """The tallest bar is CHART_HEIGHT high."""
        scene = graph(200)
        assert scene.find("t:bar-box:1").size[1] == pytest.approx(400.0)
        assert scene.find("t:bar-box:0").size[1] == pytest.approx(200.0)

    def test_bar_layout(self):
        """Bars are barWidth + barGap apart, centered."""
        scene = graph(200)
        assert scene.find("t:bar:0").position[0] == pytest.approx(-80.0)
        assert scene.find("t:bar:1").position[0] == pytest.approx(20.0)

    def test_bars_grow(self):
        """Bars start flat and grow after the intro."""
        assert graph(0).find("t:bar-grow:0").scale[1] == pytest.approx(0.0)
        assert graph(200).find("t:bar-grow:0").scale[1] == pytest.approx(1.0)

    def test_palette_cycles(self):
        """Bars take palette colors in order."""
        scene = graph(200, props={"colors": "#ff0000,#00ff00"})
        assert scene.find("t:bar-box:0").color == "#ff0000"
        assert scene.find("t:bar-box:1").color == "#00ff00"

    def test_axes(self):
        """Axes carry yAxisTickCount ticks up to the peak value."""
        scene = graph(0)
        assert scene.find("t:tick-label:4").text == "20"
        assert scene.find("t:tick-label:2").text == "10"
        assert graph(0, props={"showAxes": False}).find("t:axes") is None

    def test_line_needs_two_points(self):
        """A single point draws no line and no axes."""
        scene = graph(200, "A, 10", {"type": "line"})
        assert scene.find("t:line") is None
        assert scene.find("t:axes") is None

    def test_line_segments(self):
        """Finished segments get an end joint."""
        scene = graph(500, "A, 10\nB, 20\nC, 5", {"type": "line"})
        assert scene.find("t:segment:1") is not None
        assert scene.find("t:joint-end:1").position == (150.0, pytest.approx(100.0), 0.0)

    def test_pie_labels(self):
        """Slice labels carry the rounded percentage."""
        scene = graph(100, "A, 1\nB, 3", {"type": "pie"})
        assert scene.find("t:slice-label:0").text == "A (25%)"
        assert scene.find("t:slice-label:1").text == "B (75%)"

    def test_pie_without_total(self):
        """A pie of zeros draws nothing but keeps the camera."""
        scene = graph(100, "A, 0", {"type": "pie"})
        assert scene.find("t:pie") is None
        assert scene.find("t:camera") is not None

    def test_camera(self):
        """Each chart type has its own elevated pose; saved props override it."""
        assert graph(0).find("t:camera").attrs["cue"] == FixedCue((0.0, 400.0, 800.0), (0.0, 0.0, 0.0))
        pie = graph(0, props={"type": "pie"}).find("t:camera").attrs["cue"]
        assert pie.position == (0.0, 500.0, 600.0)
        saved = graph(0, props={"cameraPosition": [1, 1, 1]}).find("t:camera").attrs["cue"]
        assert saved.position == (1.0, 1.0, 1.0)

    def test_title(self):
        """The title floats above the chart."""
        assert graph(0, title="Revenue").find("t:title").text == "Revenue"

    def test_suggested_duration(self):
        """intro + rows * perItemFrames + buffer."""
        assert GRAPH.suggested_duration({"data": "A, 1\nB, 2"}) == 15 + 2 * 20 + 60
