"""Track scheduler: placing tracks on the global timeline.

Tracks are laid out back to back as half-open intervals
``[start_frame, start_frame + duration)``. Every editing operation returns a
new, contiguous list (no gaps, no overlaps) built from copies, so callers can
keep the previous list for undo.

Editing functions raise :class:`~motionblocks.errors.TrackNotFoundError` for
ids that do not exist. They are caller-facing and never run inside the render
loop; :func:`locate` never raises.
"""

from typing import Iterable, List, NamedTuple, Optional, Sequence, Union

import pandas as pd

from motionblocks.api.models import Track
from motionblocks.errors import TrackNotFoundError
from motionblocks.utils.logging import log

SCHEDULE_COLUMNS = ["id", "template", "start_frame", "duration", "end_frame"]


class TrackLocation(NamedTuple):
    """The active track at a global frame and the frame local to it."""
    track: Track
    local_frame: int


def locate(frame: int, tracks: Sequence[Track]) -> Optional[TrackLocation]:
    """Find the track active at a global frame.

    A track is active when ``start_frame <= frame < start_frame + duration``.
    With overlapping tracks the first one in list order wins.

    Args:
        frame: Global frame number
        tracks: Tracks in playback order

    Returns:
        TrackLocation, or None for an empty list, a negative frame, a gap or
        a frame past the end

    Examples:
        >>> t = Track(id="a", template="counter", startFrame=0, duration=90)
        >>> locate(45, [t]).local_frame
        45
        >>> locate(90, [t]) is None
        True
    """
    if frame < 0:
        return None
    for track in tracks:
        if track.start_frame <= frame < track.start_frame + track.duration:
            return TrackLocation(track, frame - track.start_frame)
    return None


def total_duration(tracks: Iterable[Track]) -> int:
    """Sum of track durations (the derived timeline length)."""
    return sum(track.duration for track in tracks)


def relayout(tracks: Sequence[Track]) -> List[Track]:
    """Copy tracks with contiguous start frames in their current order."""
    cursor = 0
    placed = []
    for track in tracks:
        placed.append(track.model_copy(update={"start_frame": cursor}))
        cursor += track.duration
    return placed


def _index_of(tracks: Sequence[Track], track_id: str) -> int:
    for index, track in enumerate(tracks):
        if track.id == track_id:
            return index
    raise TrackNotFoundError(track_id)


def reorder(tracks: Sequence[Track], new_order: Sequence[Union[str, Track]]) -> List[Track]:
    """Reorder tracks and recompute contiguous start frames.

    Args:
        tracks: Current tracks
        new_order: Track ids (or tracks) in the desired order. Ids that are
            left out keep their original relative order after the listed ones.

    Returns:
        New list of track copies; every field except ``start_frame`` is kept

    Raises:
        TrackNotFoundError: If ``new_order`` names an unknown track

    Examples:
        >>> a = Track(id="a", template="counter", duration=30)
        >>> b = Track(id="b", template="counter", startFrame=30, duration=60)
        >>> [(t.id, t.start_frame) for t in reorder([a, b], ["b", "a"])]
        [('b', 0), ('a', 60)]
    """
    by_id = {track.id: track for track in tracks}
    ordered = []
    seen = set()
    for item in new_order:
        track_id = item.id if isinstance(item, Track) else item
        if track_id not in by_id:
            raise TrackNotFoundError(track_id)
        if track_id in seen:
            continue
        seen.add(track_id)
        ordered.append(by_id[track_id])
    ordered.extend(track for track in tracks if track.id not in seen)
    return relayout(ordered)


def insert_track(tracks: Sequence[Track], track: Track, index: Optional[int] = None) -> List[Track]:
    """Insert a track (appended when ``index`` is None) and relayout."""
    updated = list(tracks)
    if index is None:
        updated.append(track)
    else:
        updated.insert(max(0, min(len(updated), index)), track)
    log.debug(f"Inserted track '{track.id}' ({track.template}, {track.duration} frames)")
    return relayout(updated)


def remove_track(tracks: Sequence[Track], track_id: str) -> List[Track]:
    """Remove a track by id and close the gap it leaves.

    Raises:
        TrackNotFoundError: If no track has ``track_id``
    """
    index = _index_of(tracks, track_id)
    updated = list(tracks[:index]) + list(tracks[index + 1:])
    return relayout(updated)


def update_track(tracks: Sequence[Track], track_id: str, **updates) -> List[Track]:
    """Replace fields of one track and relayout (e.g. a new ``duration``).

    ``start_frame`` updates are ignored; placement is always contiguous.
    Updated values are re-validated, so a non-positive duration raises
    ``pydantic.ValidationError``.

    Raises:
        TrackNotFoundError: If no track has ``track_id``
    """
    index = _index_of(tracks, track_id)
    updates.pop("start_frame", None)
    current = tracks[index]
    data = current.model_dump()
    data.update(updates)
    updated = list(tracks)
    updated[index] = Track.model_validate(data)
    return relayout(updated)


def schedule_table(tracks: Sequence[Track]) -> pd.DataFrame:
    """Tabular view of the schedule, one row per track.

    Examples:
        >>> t = Track(id="a", template="counter", duration=90)
        >>> schedule_table([t])["end_frame"].tolist()
        [90]
    """
    rows = [
        (track.id, track.template, track.start_frame, track.duration, track.start_frame + track.duration)
        for track in tracks
    ]
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


def frame_track_series(tracks: Sequence[Track], total_frames: Optional[int] = None) -> pd.Series:
    """Map every global frame to the id of its active track (None in gaps).

    Args:
        tracks: Tracks in playback order
        total_frames: Number of frames to cover (defaults to the last end frame)

    Returns:
        Series indexed by global frame
    """
    table = schedule_table(tracks)
    if total_frames is None:
        total_frames = int(table["end_frame"].max()) if len(table) else 0
    series = pd.Series([None] * total_frames, index=pd.RangeIndex(total_frames, name="frame"),
                       dtype=object, name="track_id")
    # Reverse so the first listed track wins where tracks overlap
    for row in table.iloc[::-1].itertuples(index=False):
        start = max(0, row.start_frame)
        end = min(total_frames, row.end_frame)
        if start < end:
            series.iloc[start:end] = row.id
    return series
