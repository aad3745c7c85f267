"""Unit tests for the track scheduler."""

import pandas as pd
import pytest
from pydantic import ValidationError

from motionblocks.api.models import Track
from motionblocks.core.scheduler import (
    SCHEDULE_COLUMNS,
    frame_track_series,
    insert_track,
    locate,
    relayout,
    remove_track,
    reorder,
    schedule_table,
    total_duration,
    update_track,
)
from motionblocks.errors import TrackNotFoundError


@pytest.fixture
def tracks():
    return relayout([
        Track(id="a", template="counter", duration=30),
        Track(id="b", template="list", duration=60),
        Track(id="c", template="graph", duration=90),
    ])


def _layout(tracks):
    return [(t.id, t.start_frame) for t in tracks]


class TestLocate:
    """Test locate function."""

    def test_first_frame(self, tracks):
        """Frame 0 is the first frame of the first track."""
        location = locate(0, tracks)
        assert location.track.id == "a"
        assert location.local_frame == 0

    def test_boundary_is_half_open(self, tracks):
        """A track's end frame belongs to the next track."""
        assert locate(29, tracks).track.id == "a"
        assert locate(30, tracks).track.id == "b"
        assert locate(30, tracks).local_frame == 0

    def test_past_end(self, tracks):
        """Frames past the last track give None."""
        assert locate(180, tracks) is None

    def test_negative_and_empty(self, tracks):
        """Negative frames and empty lists give None."""
        assert locate(-1, tracks) is None
        assert locate(0, []) is None

    def test_gap(self):
        """Frames between tracks give None."""
        gapped = [Track(id="a", template="counter", duration=10),
                  Track(id="b", template="counter", startFrame=20, duration=10)]
        assert locate(15, gapped) is None

    def test_overlap_first_wins(self):
        """With overlapping tracks the first listed wins."""
        overlapping = [Track(id="a", template="counter", duration=50),
                       Track(id="b", template="counter", startFrame=10, duration=50)]
        assert locate(20, overlapping).track.id == "a"

    def test_scenario_midpoint(self):
        """Frame 45 of a 90-frame track starting at 0 is local frame 45."""
        assert locate(45, [Track(id="a", template="counter", duration=90)]).local_frame == 45

    @pytest.mark.parametrize("track_id", ["a", "b", "c"])
    def test_local_frame_advances_with_global(self, tracks, track_id):
        """Within one track the local frame moves exactly as far as the global frame."""
        track = next(t for t in tracks if t.id == track_id)
        frames = range(track.start_frame, track.start_frame + track.duration)
        for f1 in frames:
            first = locate(f1, tracks)
            for f2 in frames[f1 - track.start_frame:]:
                second = locate(f2, tracks)
                assert second.track.id == first.track.id == track_id
                assert second.local_frame == first.local_frame + (f2 - f1)


class TestLayout:
    """Test relayout and total_duration."""

    def test_contiguous(self, tracks):
        """Start frames follow the running sum of durations."""
        assert _layout(tracks) == [("a", 0), ("b", 30), ("c", 90)]

    def test_total(self, tracks):
        """Total duration is the sum of durations."""
        assert total_duration(tracks) == 180

    def test_relayout_copies(self, tracks):
        """Relayout never mutates its input."""
        shifted = [t.model_copy(update={"start_frame": 500}) for t in tracks]
        placed = relayout(shifted)
        assert shifted[0].start_frame == 500
        assert placed[0].start_frame == 0


class TestReorder:
    """Test reorder function."""

    def test_reverse(self, tracks):
        """Reversed order gets new contiguous starts."""
        assert _layout(reorder(tracks, ["c", "b", "a"])) == [("c", 0), ("b", 90), ("a", 150)]

    def test_preserves_fields(self, tracks):
        """Everything except start_frame is kept."""
        moved = reorder(tracks, ["b", "a", "c"])
        assert [(t.template, t.duration) for t in moved] == [("list", 60), ("counter", 30), ("graph", 90)]

    def test_omitted_ids_appended(self, tracks):
        """Ids left out keep their relative order after the listed ones."""
        assert [t.id for t in reorder(tracks, ["c"])] == ["c", "a", "b"]

    def test_accepts_tracks(self, tracks):
        """Track objects may be passed instead of ids."""
        assert [t.id for t in reorder(tracks, [tracks[2], tracks[0]])] == ["c", "a", "b"]

    def test_unknown_id(self, tracks):
        """Unknown ids raise TrackNotFoundError."""
        with pytest.raises(TrackNotFoundError, match="zzz"):
            reorder(tracks, ["zzz"])

    def test_input_untouched(self, tracks):
        """The original list keeps its layout for undo."""
        reorder(tracks, ["c", "b", "a"])
        assert _layout(tracks) == [("a", 0), ("b", 30), ("c", 90)]


class TestEdits:
    """Test insert_track, remove_track and update_track."""

    def test_insert_appends(self, tracks):
        """Inserting without an index appends."""
        added = insert_track(tracks, Track(id="d", template="pulse", duration=15))
        assert _layout(added)[-1] == ("d", 180)

    def test_insert_at_index(self, tracks):
        """Inserting at an index shifts later tracks."""
        added = insert_track(tracks, Track(id="d", template="pulse", duration=15), index=0)
        assert _layout(added) == [("d", 0), ("a", 15), ("b", 45), ("c", 105)]

    def test_remove_closes_gap(self, tracks):
        """Removing a track pulls later tracks forward."""
        assert _layout(remove_track(tracks, "b")) == [("a", 0), ("c", 30)]

    def test_remove_unknown(self, tracks):
        """Removing an unknown id raises."""
        with pytest.raises(TrackNotFoundError):
            remove_track(tracks, "zzz")

    def test_update_duration(self, tracks):
        """Changing a duration relays out later tracks."""
        updated = update_track(tracks, "a", duration=100)
        assert _layout(updated) == [("a", 0), ("b", 100), ("c", 160)]

    def test_update_ignores_start_frame(self, tracks):
        """Placement stays contiguous."""
        updated = update_track(tracks, "b", start_frame=999)
        assert updated[1].start_frame == 30

    def test_update_validates(self, tracks):
        """Non-positive durations are rejected."""
        with pytest.raises(ValidationError):
            update_track(tracks, "a", duration=0)

    def test_update_unknown(self, tracks):
        """Updating an unknown id raises."""
        with pytest.raises(TrackNotFoundError):
            update_track(tracks, "zzz", duration=10)


class TestScheduleViews:
    """Test schedule_table and frame_track_series."""

    def test_table_columns(self, tracks):
        """Table has one row per track with the schedule columns."""
        table = schedule_table(tracks)
        assert list(table.columns) == SCHEDULE_COLUMNS
        assert table["end_frame"].tolist() == [30, 90, 180]

    def test_empty_table(self):
        """No tracks, empty table with the same columns."""
        table = schedule_table([])
        assert isinstance(table, pd.DataFrame)
        assert len(table) == 0

    def test_series_matches_locate(self, tracks):
        """Every frame maps to the same track locate() finds."""
        series = frame_track_series(tracks)
        assert len(series) == 180
        for frame in (0, 29, 30, 89, 90, 179):
            assert series.iloc[frame] == locate(frame, tracks).track.id

    def test_series_gap_is_none(self):
        """Gaps hold None."""
        gapped = [Track(id="a", template="counter", duration=10),
                  Track(id="b", template="counter", startFrame=20, duration=10)]
        series = frame_track_series(gapped)
        assert series.iloc[15] is None
        assert series.iloc[25] == "b"

    def test_series_overlap_first_wins(self):
        """Overlaps resolve like locate()."""
        overlapping = [Track(id="a", template="counter", duration=50),
                       Track(id="b", template="counter", startFrame=10, duration=50)]
        series = frame_track_series(overlapping)
        assert series.iloc[20] == "a"
        assert series.iloc[55] == "b"

    def test_series_coverage(self, tracks):
        """Distinct ids in the series count the covered tracks."""
        assert frame_track_series(tracks, 60).nunique() == 2
