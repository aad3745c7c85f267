"""Unit tests for the per-frame engine."""

import pytest

from motionblocks.api.models import Asset, CameraSnapshot, Timeline, Track
from motionblocks.config.settings import EngineSettings
from motionblocks.core.scene import NodeKind, empty_scene
from motionblocks.orchestration import Engine, resolver_from_assets

LOGO = Asset(id="logo", type="image", src="/assets/logo.png")


def counter_track(**kwargs):
    fields = {"id": "c1", "template": "counter", "startFrame": 0, "duration": 60,
              "position": {"x": 100, "y": -50}}
    fields.update(kwargs)
    return Track(**fields)


def kinetic_track(start=60):
    return Track(id="k1", template="kinetic-text", startFrame=start, duration=90,
                 templateProps={"script": "Hello\nWorld"})


@pytest.fixture
def engine():
    timeline = Timeline(tracks=[counter_track(), kinetic_track()])
    return Engine(timeline, settings=EngineSettings(show_progress=False))


class TestEvaluateFrame:
    """Test Engine.evaluate_frame."""

    def test_active_track(self, engine):
        """The active track's scene sits under a root at the track offset."""
        result = engine.evaluate_frame(30)
        assert result.track_id == "c1"
        assert result.local_frame == 30
        assert result.scene.key == "root"
        assert result.scene.position == (100.0, -50.0, 0.0)
        assert result.scene.find("c1:value").text == "50"
        assert result.camera_pose is None

    def test_local_frame_of_second_track(self, engine):
        """Local frames count from the track start."""
        result = engine.evaluate_frame(70)
        assert result.track_id == "k1"
        assert result.local_frame == 10
        assert result.scene.find("k1:lead-text").text == "Hello"

    @pytest.mark.parametrize("frame", [-1, 150, 10_000])
    def test_outside_tracks(self, engine, frame):
        """Frames outside every track give an empty scene."""
        result = engine.evaluate_frame(frame)
        assert result.scene == empty_scene()
        assert result.track_id is None
        assert result.camera_pose is None

    def test_unknown_template(self):
        """Unknown templates render nothing without raising."""
        engine = Engine(Timeline(tracks=[Track(id="x", template="sparkles", duration=10)]))
        result = engine.evaluate_frame(3)
        assert result.track_id == "x"
        assert result.scene.children == []

    def test_deterministic(self, engine):
        """Evaluating the same frame twice gives equal scenes."""
        first = engine.evaluate_frame(20).scene
        assert engine.evaluate_frame(20).scene == first

    def test_total_frames(self, engine):
        """The timeline length is the sum of track durations."""
        assert engine.total_frames == 150


class TestAssetResolution:
    """Test file slot resolution."""

    def test_asset_id_fallback(self):
        """The first file slot falls back to the track's asset id."""
        track = Track(id="f1", template="fade-in", duration=30, assetId="logo")
        engine = Engine(Timeline(tracks=[track]), resolver=resolver_from_assets([LOGO]))
        node = engine.evaluate_frame(10).scene.find("f1:asset")
        assert node.kind == NodeKind.IMAGE
        assert node.asset == LOGO

    def test_unresolved_asset(self):
        """An unknown asset id leaves the required slot empty."""
        track = Track(id="f1", template="fade-in", duration=30, assetId="missing")
        engine = Engine(Timeline(tracks=[track]), resolver=resolver_from_assets([LOGO]))
        assert engine.evaluate_frame(10).scene.children == []

    def test_inline_asset(self):
        """Inline asset dicts are validated into assets."""
        track = Track(id="f1", template="fade-in", duration=30,
                      templateProps={"asset": {"id": "a", "type": "text", "content": "Hi"}})
        engine = Engine(Timeline(tracks=[track]))
        assert engine.evaluate_frame(10).scene.find("f1:asset").text == "Hi"

    def test_font_url_injected(self):
        """The project font reaches templates as globalFontUrl."""
        engine = Engine(Timeline(tracks=[counter_track()]), font_url="/fonts/inter.woff")
        node = engine.evaluate_frame(0).scene.find("c1:value")
        assert node.attrs["font"] == "/fonts/inter.woff"

    def test_flip_window_setting(self):
        """Counters without their own flipWindow use the engine setting."""
        props = {"style": "flip", "endValue": 100, "duration": 1000}
        track = counter_track(duration=200, templateProps=props)
        narrow = Engine(Timeline(tracks=[track]))
        wide = Engine(Timeline(tracks=[track]), settings=EngineSettings(flip_window=1.0))
        assert narrow.evaluate_frame(125).scene.find("c1:digit:0:in") is None
        assert wide.evaluate_frame(125).scene.find("c1:digit:0:in") is not None


class TestCamera:
    """Test camera rigs driven by the engine."""

    def test_kinetic_pose(self, engine):
        """Kinetic tracks produce a camera pose."""
        pose = engine.evaluate_frame(60).camera_pose
        assert pose is not None
        assert pose.position[2] > 0

    def test_seek_matches_fresh_engine(self, engine):
        """A seek resets the rig, so it lands where a fresh engine would."""
        for frame in range(60, 80):
            engine.evaluate_frame(frame)
        seeked = engine.evaluate_frame(100).camera_pose

        fresh = Engine(Timeline(tracks=[counter_track(), kinetic_track()]))
        assert fresh.evaluate_frame(100).camera_pose == seeked

    def test_consecutive_frames_damped(self, engine):
        """Playing in order carries damped state between frames."""
        played = None
        for frame in range(60, 101):
            played = engine.evaluate_frame(frame).camera_pose
        fresh = Engine(Timeline(tracks=[counter_track(), kinetic_track()]))
        assert fresh.evaluate_frame(100).camera_pose != played

    def test_save_camera(self):
        """Saving returns pinning props and notifies the host."""
        saved = []
        engine = Engine(Timeline(tracks=[kinetic_track(0)]),
                        on_camera_save=lambda track_id, snapshot: saved.append((track_id, snapshot)))
        assert engine.save_camera("k1") is None
        engine.evaluate_frame(0)
        props = engine.save_camera("k1")
        assert set(props) == {"cameraPosition", "cameraTarget"}
        assert len(props["cameraPosition"]) == 3
        assert saved[0][0] == "k1"
        assert isinstance(saved[0][1], CameraSnapshot)


MULTI_ITEM_TRACKS = {
    "list": {"data": "One\nTwo\nThree\nFour\nFive", "perItemFrames": 20},
    "chapters": {"data": "Intro, Start\nMiddle, Core\nOutro, End", "framesPerChapter": 40},
    "kinetic-text": {"script": "First line\nSecond line\nThird line", "perSegmentFrames": 30},
}


class TestSeekSafety:
    """A frame looks the same whether it is reached by a seek or by playing."""

    @pytest.mark.parametrize("template", sorted(MULTI_ITEM_TRACKS))
    def test_seek_matches_playthrough(self, template):
        """Frame 57 evaluated directly equals frame 57 after playing frames 0..56."""
        track = Track(id="m", template=template, duration=120, templateProps=MULTI_ITEM_TRACKS[template])
        engine = Engine(Timeline(tracks=[track]), settings=EngineSettings(show_progress=False))
        seeked = engine.evaluate_frame(57).scene
        for frame in range(57):
            engine.evaluate_frame(frame)
        played = engine.evaluate_frame(57).scene
        assert seeked == played
        assert seeked.find_kind(NodeKind.TEXT)


class TestRenderRange:
    """Test offline sweeps and track edits."""

    def test_render_range(self, engine):
        """Frames are evaluated in order."""
        results = engine.render_range(0, 5, show_progress=False)
        assert [r.local_frame for r in results] == [0, 1, 2, 3, 4]

    def test_empty_range(self, engine):
        """An empty range renders nothing."""
        assert engine.render_range(5, 5) == []

    def test_whole_timeline(self, engine):
        """Without an end the whole timeline is rendered."""
        results = engine.render_range()
        assert len(results) == 150
        assert results[-1].track_id == "k1"

    def test_set_tracks(self, engine):
        """Edited track lists replace the timeline."""
        engine.set_tracks([counter_track(duration=10)])
        assert engine.total_frames == 10
        assert engine.evaluate_frame(20).track_id is None

    def test_suggest_duration(self, engine):
        """Suggestions come from each track's template."""
        assert engine.suggest_duration(kinetic_track()) == 90
        assert engine.suggest_duration(counter_track()) == 90
        assert engine.suggest_duration(Track(id="x", template="nope", duration=5)) is None
