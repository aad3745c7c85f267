"""Segment sequencer: splitting a track into sub-timelines.

Multi-item templates (timeline reveal, kinetic text, chapters, counters) carve
their track into an intro, a run of per-item segments and an outro. The
functions here derive those boundaries from the track duration and map a
local frame to the active segment. They are pure, so any frame can be
located without replaying earlier ones.

Auto timing:
    intro   = min(intro_frames, max(8, floor(d * 0.25)))
    outro   = outro_frames or min(24, max(8, floor(d * 0.12)))
    per     = per_item_frames or max(10, floor((d - intro - outro) / divisor))
    window  = max(10, min(per, 90)), capped at floor(d / n)
"""

import math
from typing import List, NamedTuple, Optional

from motionblocks.config.defaults import (
    COUNTER_FLIP_WINDOW,
    KINETIC_MIN_SEGMENT_FRAMES,
    SEQUENCER_INTRO_FRACTION,
    SEQUENCER_INTRO_FRAMES,
    SEQUENCER_MAX_OUTRO_FRAMES,
    SEQUENCER_MAX_REVEAL_WINDOW,
    SEQUENCER_MIN_INTRO_FRAMES,
    SEQUENCER_MIN_OUTRO_FRAMES,
    SEQUENCER_MIN_PER_ITEM_FRAMES,
    SEQUENCER_OUTRO_FRACTION,
)
from motionblocks.utils.math.core import clamp01, fract, safe_div
from motionblocks.utils.math.easing import ease_in_out_cubic


class Segment(NamedTuple):
    """Active sub-timeline at a frame."""
    index: int
    local_frame: float
    progress: float


class SegmentTiming(NamedTuple):
    """Derived intro/segment/outro boundaries of a track."""
    duration: int
    segment_count: int
    intro_frames: int
    outro_frames: int
    per_item_frames: int
    reveal_window: int
    available_frames: int


class DigitFlip(NamedTuple):
    """Flip state of one decimal place of a running counter."""
    place: int
    digit: int
    next_digit: int
    flip: float


class KineticSegment(NamedTuple):
    """Active line of a kinetic text script."""
    index: int
    local_frame: float
    safe_per: int
    enter_t: float
    exit_t: float
    alive: float


def derive_timing(
    duration: float,
    segment_count: int,
    intro_frames: float = SEQUENCER_INTRO_FRAMES,
    per_item_frames: Optional[float] = None,
    outro_frames: Optional[float] = None,
    min_per_item: int = SEQUENCER_MIN_PER_ITEM_FRAMES,
    divide_by_gaps: bool = True,
) -> SegmentTiming:
    """Derive segment boundaries for a track.

    Short tracks compress the intro so later items are not starved. When no
    explicit per-item length is given, the available frames are divided
    across all items.

    Args:
        duration: Track duration in frames
        segment_count: Number of items
        intro_frames: Requested intro length (capped for short tracks)
        per_item_frames: Explicit per-item length (auto when None)
        outro_frames: Explicit outro length (auto when None)
        min_per_item: Lower bound for derived per-item and reveal lengths
        divide_by_gaps: Divide by ``n - 1`` gaps (items sit on a line) instead of ``n``

    Returns:
        SegmentTiming for the track

    Examples:
        >>> derive_timing(400, 5, intro_frames=24, outro_frames=18).per_item_frames
        89
    """
    d = max(1, int(math.floor(duration)))
    n = max(1, int(segment_count))
    intro = int(min(intro_frames, max(SEQUENCER_MIN_INTRO_FRAMES, math.floor(d * SEQUENCER_INTRO_FRACTION))))
    intro = max(0, intro)
    if outro_frames is None:
        outro = min(SEQUENCER_MAX_OUTRO_FRAMES,
                    max(SEQUENCER_MIN_OUTRO_FRAMES, math.floor(d * SEQUENCER_OUTRO_FRACTION)))
    else:
        outro = max(0, int(outro_frames))
    divisor = max(1, n - 1) if divide_by_gaps else n
    available = max(1, d - intro - outro)
    if per_item_frames is not None and per_item_frames > 0:
        per = int(math.floor(per_item_frames))
    else:
        per = max(min_per_item, math.floor(available / divisor))
    reveal_window = max(min_per_item, min(per, SEQUENCER_MAX_REVEAL_WINDOW))
    reveal_window = min(reveal_window, max(1, d // n))
    return SegmentTiming(d, n, intro, outro, max(1, per), reveal_window, available)


def active_segment(local_frame: float, timing: SegmentTiming) -> Segment:
    """Map a local frame to the active segment.

    Frames inside the intro resolve to segment 0 with zero progress. Frames
    past the last segment stay on the last one with progress saturated at 1.

    Examples:
        >>> timing = derive_timing(400, 5, intro_frames=24, outro_frames=18)
        >>> active_segment(300, timing).index
        3
    """
    elapsed = local_frame - timing.intro_frames
    if elapsed < 0:
        return Segment(0, 0, 0.0)
    per = max(1, timing.per_item_frames)
    index = min(timing.segment_count - 1, int(math.floor(elapsed / per)))
    local = elapsed - index * per
    return Segment(index, local, clamp01(local / per))


def compress_starts(first: float, per: float, count: int, latest: float) -> List[float]:
    """Start frames ``first + i * per``, squeezed so none begins after ``latest``.

    When the naive last start overflows, the starts are spread evenly between
    ``min(first, latest - (count - 1))`` and ``latest`` instead of being
    clipped, so late items still appear before the track ends.

    Examples:
        >>> compress_starts(0, 60, 4, 90)
        [0.0, 30.0, 60.0, 90.0]
        >>> compress_starts(10, 20, 3, 200)
        [10, 30, 50]
    """
    n = max(1, int(count))
    naive = [first + i * per for i in range(n)]
    if naive[-1] <= latest:
        return naive
    first = max(0, min(first, latest - (n - 1)))
    if n == 1:
        return [first]
    step = (latest - first) / (n - 1)
    return [first + i * step for i in range(n)]


def segment_starts(timing: SegmentTiming) -> List[int]:
    """Start frame of every item's reveal.

    Naive starts are ``intro + i * per``. When the last one would begin
    later than ``duration - reveal_window`` the starts are compressed evenly
    into the remaining room instead of being clipped, so every item still
    gets a distinct start inside the track.

    Examples:
        >>> segment_starts(derive_timing(400, 5, intro_frames=24, outro_frames=18))
        [24, 98, 172, 246, 320]
        >>> segment_starts(derive_timing(60, 4, per_item_frames=40))
        [15, 25, 35, 45]
    """
    starts = compress_starts(timing.intro_frames, timing.per_item_frames, timing.segment_count,
                             timing.duration - timing.reveal_window)
    return [int(math.floor(start)) for start in starts]


def fit_segment_frames(per_segment_frames: float, segment_count: int, duration: float) -> float:
    """Per-segment length shrunk so ``segment_count`` back-to-back segments fit the track.

    Examples:
        >>> fit_segment_frames(60, 3, 300)
        60
        >>> fit_segment_frames(60, 3, 90)
        30
    """
    return min(per_segment_frames, max(1, int(duration) // max(1, int(segment_count))))


def item_progress(frame: float, start: float, window: float) -> float:
    """Linear progress of an item's reveal window.

    Examples:
        >>> item_progress(30, 20, 20)
        0.5
    """
    return clamp01(safe_div(frame - start, window))


def digit_flips(value: float, digit_count: int, flip_window: float = COUNTER_FLIP_WINDOW) -> List[DigitFlip]:
    """Per-place flip progress of a counter showing ``value``.

    Place ``p`` cycles every ``10**p`` units of the running value. It shows
    ``digit`` and spends the last ``flip_window`` of each cycle flipping to
    ``next_digit``. Places are returned most significant first.

    Examples:
        >>> [(f.place, f.digit, round(f.flip, 2)) for f in digit_flips(12.9, 2)]
        [(1, 1, 0), (0, 2, 0.6)]
    """
    v = abs(value)
    w = min(1.0, max(1e-6, flip_window))
    flips = []
    for place in reversed(range(max(1, digit_count))):
        cycle = v / (10 ** place)
        digit = int(math.floor(cycle)) % 10
        flip = clamp01((fract(cycle) - (1 - w)) / w)
        flips.append(DigitFlip(place, digit, (digit + 1) % 10, flip))
    return flips


def kinetic_segment(
    frame: float,
    segment_count: int,
    per_segment_frames: float,
    enter_frames: float,
    exit_frames: float,
) -> KineticSegment:
    """Locate the active kinetic text line and its enter/exit progress.

    Examples:
        >>> seg = kinetic_segment(50, 3, 45, 14, 10)
        >>> seg.index, seg.local_frame
        (1, 5)
    """
    safe_per = max(KINETIC_MIN_SEGMENT_FRAMES, int(math.floor(per_segment_frames)))
    n = max(1, segment_count)
    index = max(0, min(n - 1, int(math.floor(frame / safe_per))))
    local = frame - index * safe_per
    enter_t = clamp01(safe_div(local, enter_frames))
    exit_t = clamp01(safe_div(local - (safe_per - exit_frames), exit_frames))
    alive = 1 - ease_in_out_cubic(exit_t)
    return KineticSegment(index, local, safe_per, enter_t, exit_t, alive)


def chapter_segment(frame: float, count: int, frames_per_chapter: float) -> Optional[Segment]:
    """Active chapter card, or None outside ``[0, count * frames_per_chapter)``.

    Examples:
        >>> chapter_segment(130, 3, 60)
        Segment(index=2, local_frame=10, progress=0.16666666666666666)
        >>> chapter_segment(200, 3, 60) is None
        True
    """
    fpc = max(1, int(math.floor(frames_per_chapter)))
    if frame < 0:
        return None
    index = int(math.floor(frame / fpc))
    if index >= count:
        return None
    local = frame - index * fpc
    return Segment(index, local, clamp01(local / fpc))
