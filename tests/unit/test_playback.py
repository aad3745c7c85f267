"""Unit tests for playback state transitions and the playback driver."""

import pytest

from motionblocks.api.models import Timeline, Track
from motionblocks.core.playback import PlaybackState
from motionblocks.orchestration.engine import Engine
from motionblocks.orchestration.playback import PlaybackDriver


class TestPlaybackState:
    """Test PlaybackState transitions."""

    def test_defaults(self):
        """A new state is paused at frame 0."""
        state = PlaybackState(total_frames=10)
        assert not state.is_playing
        assert state.current_frame == 0

    def test_play_and_increment(self):
        """Incrementing while playing advances one frame."""
        state = PlaybackState(total_frames=10).play().increment()
        assert state.current_frame == 1
        assert state.is_playing

    def test_increment_while_paused(self):
        """Increment is a no-op while paused."""
        state = PlaybackState(total_frames=10)
        assert state.increment() == state

    def test_stops_on_last_frame(self):
        """Reaching the last frame pauses playback."""
        state = PlaybackState(is_playing=True, current_frame=8, total_frames=10).increment()
        assert state.current_frame == 9
        assert not state.is_playing
        assert state.at_end

    def test_increment_at_end_stays(self):
        """Incrementing on the last frame never moves past it."""
        state = PlaybackState(is_playing=True, current_frame=9, total_frames=10).increment()
        assert state.current_frame == 9
        assert not state.is_playing

    def test_play_at_end_restarts(self):
        """Playing from the last frame restarts at 0."""
        state = PlaybackState(current_frame=9, total_frames=10).play()
        assert state.current_frame == 0
        assert state.is_playing

    def test_play_empty_timeline(self):
        """An empty timeline never plays."""
        state = PlaybackState(total_frames=0).play()
        assert not state.is_playing

    def test_toggle(self):
        """Toggle flips between playing and paused."""
        state = PlaybackState(total_frames=10)
        assert state.toggle().is_playing
        assert not state.toggle().toggle().is_playing

    @pytest.mark.parametrize("frame,expected", [(5, 5), (-3, 0), (500, 89)])
    def test_seek_clamps_and_pauses(self, frame, expected):
        """Seek clamps to [0, total - 1] and pauses."""
        state = PlaybackState(total_frames=90).play().seek(frame)
        assert state.current_frame == expected
        assert not state.is_playing

    def test_reset_to_start(self):
        """Reset returns to frame 0, paused."""
        state = PlaybackState(is_playing=True, current_frame=40, total_frames=90).reset_to_start()
        assert state == PlaybackState(total_frames=90)

    def test_with_total_reclamps(self):
        """Shrinking the timeline pulls the playhead back in."""
        state = PlaybackState(current_frame=80, total_frames=90).with_total(50)
        assert state.current_frame == 49
        assert PlaybackState(is_playing=True, total_frames=90).with_total(0).is_playing is False

    def test_immutable(self):
        """Transitions return new states."""
        state = PlaybackState(total_frames=10)
        state.play()
        assert not state.is_playing


def _engine(duration=5):
    return Engine(Timeline(tracks=[Track(id="t", template="counter", duration=duration)]))


class TestPlaybackDriver:
    """Test PlaybackDriver loop."""

    def test_run_emits_every_frame(self):
        """A run shows every frame including the last, then pauses."""
        seen = []
        driver = PlaybackDriver(_engine(), on_frame=lambda r: seen.append(r.local_frame), sleep=lambda s: None)
        driver.run()
        assert seen == [0, 1, 2, 3, 4]
        assert not driver.state.is_playing
        assert driver.state.current_frame == 4

    def test_run_sleeps_at_fixed_rate(self):
        """The loop sleeps toward fixed ticks on a frozen clock."""
        sleeps = []
        driver = PlaybackDriver(_engine(3), rate=10, sleep=sleeps.append, clock=lambda: 0.0)
        driver.run()
        assert sleeps == pytest.approx([0.1, 0.2])

    def test_callback_can_pause(self):
        """Pausing from the frame callback stops the loop."""
        seen = []
        driver = PlaybackDriver(_engine(10), sleep=lambda s: None)

        def on_frame(result):
            seen.append(result.local_frame)
            if result.local_frame == 2:
                driver.pause()

        driver.on_frame = on_frame
        driver.run()
        assert seen == [0, 1, 2]

    def test_run_again_restarts(self):
        """Running from the end restarts at frame 0."""
        seen = []
        driver = PlaybackDriver(_engine(3), on_frame=lambda r: seen.append(r.local_frame), sleep=lambda s: None)
        driver.run()
        driver.run()
        assert seen == [0, 1, 2, 0, 1, 2]

    def test_seek_returns_frame(self):
        """Seek shows the clamped frame and pauses."""
        driver = PlaybackDriver(_engine(), sleep=lambda s: None)
        result = driver.seek(99)
        assert result.local_frame == 4
        assert not driver.state.is_playing

    def test_empty_timeline(self):
        """Running an empty timeline emits nothing."""
        seen = []
        driver = PlaybackDriver(Engine(Timeline()), on_frame=seen.append, sleep=lambda s: None)
        driver.run()
        assert seen == []

    def test_sync_total(self):
        """sync_total picks up a changed track list."""
        engine = _engine(10)
        driver = PlaybackDriver(engine, sleep=lambda s: None)
        driver.seek(8)
        engine.set_tracks([Track(id="t", template="counter", duration=4)])
        driver.sync_total()
        assert driver.state.total_frames == 4
        assert driver.state.current_frame == 3
